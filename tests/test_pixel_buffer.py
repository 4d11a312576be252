import numpy as np
import pytest

from edge_pipeline.buffer.pixel_buffer import PixelBuffer, validate_buffer
from edge_pipeline.errors import MalformedBufferError


def test_from_flat_matches_canvas_layout():
    data = list(range(2 * 3 * 4))
    buf = PixelBuffer.from_flat(3, 2, data)
    assert buf.shape == (2, 3)
    assert len(buf) == 6
    # pixel (x=1, y=1) is the 5th pixel -> values 16..19
    assert buf.pixel(1, 1) == (16, 17, 18, 19)
    assert np.array_equal(buf.to_flat(), np.arange(24, dtype=np.uint8))


def test_from_flat_length_mismatch_raises():
    with pytest.raises(MalformedBufferError):
        PixelBuffer.from_flat(3, 2, [0] * 23)


@pytest.mark.parametrize("width,height", [(0, 4), (4, 0), (-1, 2)])
def test_non_positive_dimensions_raise(width, height):
    with pytest.raises(MalformedBufferError):
        PixelBuffer.blank(width, height)


def test_from_array_gray_and_rgb_get_opaque_alpha():
    gray = np.array([[0, 10], [20, 30]], dtype=np.uint8)
    buf = PixelBuffer.from_array(gray)
    assert buf.pixel(1, 1) == (30, 30, 30, 255)

    rgb = np.zeros((2, 2, 3), dtype=np.uint8)
    rgb[0, 1] = (1, 2, 3)
    buf = PixelBuffer.from_array(rgb)
    assert buf.pixel(1, 0) == (1, 2, 3, 255)


def test_from_array_rejects_out_of_range_and_bad_shape():
    with pytest.raises(MalformedBufferError):
        PixelBuffer.from_array(np.full((2, 2), 300))
    with pytest.raises(MalformedBufferError):
        PixelBuffer.from_array(np.zeros((2, 2, 2), dtype=np.uint8))


def test_constructor_rejects_wrong_pixel_count():
    with pytest.raises(MalformedBufferError):
        PixelBuffer(4, 4, np.zeros((3, 4, 4), dtype=np.uint8))


def test_constructor_rejects_transposed_samples():
    # same element count as a 2x3 frame, but laid out as 3 rows of 2
    with pytest.raises(MalformedBufferError):
        PixelBuffer(2, 3, np.zeros((2, 3, 4), dtype=np.uint8))
    with pytest.raises(MalformedBufferError):
        PixelBuffer(2, 3, np.zeros((3, 8), dtype=np.uint8))


def test_constructor_accepts_flat_samples():
    buf = PixelBuffer(2, 3, np.arange(24, dtype=np.uint8))
    assert buf.samples.shape == (3, 2, 4)
    assert buf.pixel(1, 0) == (4, 5, 6, 7)


def test_copy_is_independent(random_frame):
    dup = random_frame.copy()
    assert dup == random_frame
    dup.samples[0, 0, 0] ^= 0xFF
    assert dup != random_frame


def test_validate_buffer_catches_swapped_samples(random_frame):
    validate_buffer(random_frame)
    random_frame.samples = np.zeros((2, 2, 4), dtype=np.uint8)
    with pytest.raises(MalformedBufferError):
        validate_buffer(random_frame)


def test_validate_buffer_rejects_other_types():
    with pytest.raises(MalformedBufferError):
        validate_buffer(np.zeros((2, 2, 4), dtype=np.uint8))
