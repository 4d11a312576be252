import math

import numpy as np
import pytest

from edge_pipeline.buffer.pixel_buffer import PixelBuffer
from edge_pipeline.errors import MalformedBufferError
from edge_pipeline.scenes.scene_generator import generate_constant
from edge_pipeline.stages.classification import classify_edges
from edge_pipeline.utils.metrics_module import (
    class_counts,
    compare_edge_maps,
    compute_psnr,
    edge_agreement,
    plot_magnitude_histogram,
)


def test_psnr_identical_is_infinite(random_frame):
    assert compute_psnr(random_frame, random_frame.copy()) == math.inf


def test_psnr_unit_error():
    a = generate_constant(8, 8, rgb=(10, 10, 10))
    b = generate_constant(8, 8, rgb=(11, 11, 11))
    assert compute_psnr(a, b) == pytest.approx(10 * math.log10(255.0**2))


def test_psnr_size_mismatch_raises():
    with pytest.raises(MalformedBufferError):
        compute_psnr(generate_constant(4, 4), generate_constant(5, 4))


def test_agreement_and_counts():
    ours = classify_edges(np.array([[0.0, 100.0], [200.0, 200.0]]), 50, 150)
    ref = np.array([[0, 128], [255, 0]], dtype=np.uint8)
    assert edge_agreement(ours, ref) == pytest.approx(0.75)
    assert class_counts(ours) == {"none": 1, "weak": 1, "strong": 2}

    summary = compare_edge_maps(ours, ref)
    assert summary["agreement"] == pytest.approx(0.75)
    assert summary["per_level"]["none"] == pytest.approx(0.5)
    assert summary["per_level"]["weak"] == pytest.approx(1.0)
    assert summary["per_level"]["strong"] == pytest.approx(1.0)
    assert summary["counts_ref"] == {"none": 2, "weak": 1, "strong": 1}


def test_per_level_is_nan_when_reference_lacks_level():
    ref = np.zeros((3, 3), dtype=np.uint8)
    summary = compare_edge_maps(ref.copy(), ref)
    assert summary["agreement"] == 1.0
    assert math.isnan(summary["per_level"]["strong"])


def test_agreement_accepts_rgba_arrays():
    buf = PixelBuffer.blank(4, 4)
    assert edge_agreement(buf, buf.samples) == 1.0


def test_histogram_figure(rng):
    fig = plot_magnitude_histogram(rng.uniform(0, 400, size=(20, 20)), 50, 150)
    ax = fig.axes[0]
    assert ax.get_xlabel() == "Magnitude"
    assert len(ax.get_lines()) == 2
