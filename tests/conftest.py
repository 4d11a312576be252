import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from edge_pipeline.buffer.pixel_buffer import PixelBuffer


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_frame(rng) -> PixelBuffer:
    """24x16 RGBA frame with random colours and a non-trivial alpha channel."""
    samples = rng.integers(0, 256, size=(16, 24, 4), dtype=np.uint8)
    return PixelBuffer(24, 16, samples)
