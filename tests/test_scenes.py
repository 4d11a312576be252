import numpy as np
import matplotlib.pyplot as plt
import pytest

from edge_pipeline.scenes.scene_generator import (
    generate_color_bars,
    generate_constant,
    generate_gradient,
    generate_scene,
    generate_step_edge,
    load_frame,
)


def test_step_edge_layout():
    frame = generate_step_edge(3, 3)
    assert frame.red.tolist() == [[0, 255, 255]] * 3
    assert np.all(frame.alpha == 255)


def test_gradient_channels_differ():
    frame = generate_gradient(64, 4)
    right = frame.pixel(63, 0)
    assert right[:3] == (255, 128, 64)
    assert frame.pixel(0, 3)[:3] == (0, 0, 0)


def test_color_bars_cover_width():
    frame = generate_color_bars(80, 5)
    assert (frame.width, frame.height) == (80, 5)
    assert frame.pixel(0, 0)[:3] == (255, 255, 255)
    assert frame.pixel(79, 4)[:3] == (0, 0, 0)


@pytest.mark.parametrize("kind", ["step_edge", "slanted_edge", "checker", "gradient", "color_bars", "constant", "edge"])
def test_dispatcher_builds_requested_width(kind):
    frame = generate_scene(kind, 48)
    assert frame.width == 48


def test_unknown_kind_falls_back_to_gradient():
    assert generate_scene("nope", 16) == generate_gradient(16, 16)


def test_constant_frame():
    frame = generate_constant(4, 3, rgb=(1, 2, 3), alpha=9)
    assert frame.pixel(3, 2) == (1, 2, 3, 9)


def test_load_frame_reads_png(tmp_path, rng):
    rgb = rng.integers(0, 256, size=(10, 12, 3), dtype=np.uint8)
    path = tmp_path / "frame.png"
    plt.imsave(path, rgb)
    frame = load_frame(path)
    assert (frame.width, frame.height) == (12, 10)
    assert np.array_equal(frame.rgb, rgb)
    assert np.all(frame.alpha == 255)
