"""Internal implementation package for cgkernel.

Modules here may change between releases; import public names from the
top-level ``cgkernel`` package instead.
"""
