import numpy as np
import pytest

from mandelbrot_composer import NOT_ESCAPED, Plane, ViewConfig


@pytest.fixture
def reference_config():
    """100x100 window over [-1.5, 0.5] x [-1, 1] with 100 iterations."""
    return ViewConfig(
        width=100,
        height=100,
        max_iterations=100,
        real_min=-1.5,
        real_max=0.5,
        imag_min=-1.0,
        imag_max=1.0,
    )


@pytest.fixture
def strip_plane():
    """A hand-made 4x1 plane: interior, early, middle and late escapes."""
    config = ViewConfig(width=4, height=1, max_iterations=100, real_min=-2.0, real_max=2.0, imag_min=-1.0, imag_max=1.0)
    iterations = np.array([[NOT_ESCAPED, 2, 50, 99]], dtype=np.int32)
    return Plane(iterations=iterations, config=config)
