import datetime
import io
import logging
import pathlib

import numpy as np
import pytest

from cgkernel.core.mesh import TriangleVertexMesh


LOG_DIR = pathlib.Path(__file__).parent / "test-logs"


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    # Attach the TestReport (with .outcome) to the item so fixtures can see the
    # outcome in teardown.
    outcome = yield
    rep = outcome.get_result()
    setattr(item, "rep_" + rep.when, rep)


@pytest.fixture(autouse=True)
def capture_test_logs(request):
    """Capture 'cgkernel' logging for each test into an in-memory buffer and
    write it to a file only when the test fails.
    """
    kernel_log = logging.getLogger("cgkernel")
    prev_handlers = list(kernel_log.handlers)
    prev_level = kernel_log.level
    prev_propagate = kernel_log.propagate
    for h in prev_handlers:
        kernel_log.removeHandler(h)

    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    kernel_log.addHandler(handler)
    kernel_log.setLevel(logging.DEBUG)

    try:
        yield
    finally:
        kernel_log.removeHandler(handler)
        kernel_log.setLevel(prev_level)
        kernel_log.propagate = prev_propagate
        for h in prev_handlers:
            kernel_log.addHandler(h)

        rep = getattr(request.node, "rep_call", None)
        if rep is not None and getattr(rep, "outcome", None) == "failed":
            nodeid = request.node.nodeid.replace("::", "__").replace("/", "_")
            ts = datetime.datetime.now().strftime("%Y%m%dT%H%M%S")
            LOG_DIR.mkdir(exist_ok=True)
            fname = LOG_DIR / "{}__{}.log".format(nodeid, ts)
            with open(fname, "w", encoding="utf-8") as f:
                f.write("=== Test: {}\n".format(request.node.nodeid))
                f.write("=== Timestamp: {}\n\n".format(ts))
                f.write(buf.getvalue())


@pytest.fixture
def unit_cube():
    """Closed unit cube, 8 vertices, 12 CCW (outward) triangles.

    Diagonals alternate so the cube splits into a central tetrahedron
    (0, 2, 5, 7) plus four corner tetrahedra: corners 0, 2, 5, 7 touch six
    faces, corners 1, 3, 4, 6 touch three.
    """
    vertices = np.array([
        [0, 0, 0],  # 0
        [1, 0, 0],  # 1
        [1, 1, 0],  # 2
        [0, 1, 0],  # 3
        [0, 0, 1],  # 4
        [1, 0, 1],  # 5
        [1, 1, 1],  # 6
        [0, 1, 1],  # 7
    ], dtype=float)
    faces = [
        (0, 2, 1), (0, 3, 2),  # bottom z=0, diagonal 0-2
        (4, 5, 7), (5, 6, 7),  # top z=1, diagonal 5-7
        (0, 1, 5), (0, 5, 4),  # front y=0, diagonal 0-5
        (2, 3, 7), (2, 7, 6),  # back y=1, diagonal 2-7
        (0, 4, 7), (0, 7, 3),  # left x=0, diagonal 0-7
        (1, 2, 5), (2, 6, 5),  # right x=1, diagonal 2-5
    ]
    return TriangleVertexMesh.from_faces(vertices, faces)


@pytest.fixture
def unit_square_mesh():
    vertices = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)]
    return TriangleVertexMesh(vertices, [0, 1, 2, 0, 2, 3])
