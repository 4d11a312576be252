import numpy as np
import pytest

from edge_pipeline.errors import InvalidConfigError
from edge_pipeline.scenes.scene_generator import generate_checker
from edge_pipeline.stages.classification import (
    EDGE_NONE,
    EDGE_STRONG,
    EDGE_WEAK,
    classify_edges,
    classify_magnitude,
)
from edge_pipeline.stages.gradient import gradient_magnitude


def test_levels_at_threshold_boundaries():
    m = np.array([[0.0, 50.0, 50.5], [150.0, 150.01, 1e6]])
    levels = classify_magnitude(m, 50, 150)
    assert levels.tolist() == [[EDGE_NONE, EDGE_NONE, EDGE_WEAK], [EDGE_WEAK, EDGE_STRONG, EDGE_STRONG]]


def test_edge_buffer_is_opaque_gray():
    m = np.array([[0.0, 100.0], [200.0, 0.0]])
    buf = classify_edges(m, 50, 150)
    assert (buf.width, buf.height) == (2, 2)
    assert np.all(buf.alpha == 255)
    assert buf.pixel(1, 0) == (128, 128, 128, 255)
    assert buf.pixel(0, 1) == (255, 255, 255, 255)


def test_mapping_is_monotonic(rng):
    m = np.sort(rng.uniform(0, 1500, size=500))[None, :]
    levels = classify_magnitude(m, 300, 700)
    assert np.all(np.diff(levels.astype(int)) >= 0)


def test_equal_thresholds_collapse_weak_band():
    m = np.array([[10.0, 20.0, 30.0]])
    assert classify_magnitude(m, 20, 20).tolist() == [[EDGE_NONE, EDGE_NONE, EDGE_STRONG]]


def test_zero_thresholds_mark_every_nonzero_interior_pixel_strong():
    mag = gradient_magnitude(generate_checker(24, square_px=4))
    levels = classify_magnitude(mag, 0, 0)
    assert np.all(levels[mag > 0] == EDGE_STRONG)
    assert np.all(levels[mag == 0] == EDGE_NONE)
    assert not levels[0, :].any() and not levels[-1, :].any()
    assert not levels[:, 0].any() and not levels[:, -1].any()


def test_weak_pixels_are_not_promoted_by_strong_neighbours():
    m = np.array([[0.0, 0.0, 0.0], [200.0, 100.0, 200.0], [0.0, 0.0, 0.0]])
    assert classify_magnitude(m, 50, 150)[1, 1] == EDGE_WEAK


def test_low_above_high_raises():
    with pytest.raises(InvalidConfigError):
        classify_magnitude(np.zeros((3, 3)), 10, 5)
