"""
edge_demo.py - frame → grayscale → edge map, with figures and timings

WHAT THIS FILE DOES
-------------------
1) Gets a frame: a synthetic scene, or an image file via --input
2) Runs EdgePipeline with the requested switches/parameters
3) Optionally compares the edge map with a reference (e.g. the native
   camera pipeline's output saved as .npy)
4) Saves a 3-panel figure (Input | Grayscale | Output), the magnitude
   histogram and the edge map to ./outputs/

USAGE (run from repo root after `pip install -e .`)
---------------------------------------------------
  edge-demo
  edge-demo --scene checker --size 256 --low 40 --high 120 --blur_radius 2
  edge-demo --input photo.png --weighting gaussian --blur_radius 3 --repeat 10
  edge-demo --scene slanted_edge --reference native_edges.npy

NOTES
-----
• Keep this file light; the pixel math lives in edge_pipeline.stages.
• Timings come from EdgePipeline.elapsed_ms (perf_counter, whole sequence).

© 2025 Ali Pouya - Edge Pipeline
"""

from __future__ import annotations
import argparse
import logging
from pathlib import Path
import numpy as np
import matplotlib.pyplot as plt

from edge_pipeline import EdgePipeline, EdgePipelineError, PixelBuffer, ProcessingConfig
from edge_pipeline.scenes.scene_generator import generate_scene, load_frame
from edge_pipeline.utils.metrics_module import (
    class_counts,
    compare_edge_maps,
    plot_magnitude_histogram,
)


def mean_time_ms(pipeline: EdgePipeline, frame: PixelBuffer, config: ProcessingConfig, repeat: int) -> float:
    """Average elapsed_ms over `repeat` runs of the same frame/config."""
    total = 0.0
    for _ in range(max(1, int(repeat))):
        pipeline.process(frame, config)
        total += pipeline.elapsed_ms
    return total / max(1, int(repeat))


def run_once(
    frame: PixelBuffer,
    config: ProcessingConfig,
    outdir: str | Path = "outputs",
    repeat: int = 1,
    reference: str | Path | None = None,
    show: bool = False,
) -> PixelBuffer:
    """
    Process one frame, save figures/arrays and print a short report.

    Parameters
    ----------
    frame : PixelBuffer
        Source frame (left untouched).
    config : ProcessingConfig
        Stage switches and parameters.
    outdir : str | Path
        Directory for pipeline_overview.png, magnitude_histogram.png, output.npy.
    repeat : int
        Number of runs to average the reported time over.
    reference : str | Path | None
        Optional .npy edge map (H, W) or (H, W, C) to compare against.
    show : bool
        Open the figures on screen after saving.
    """
    outpath = Path(outdir)
    outpath.mkdir(parents=True, exist_ok=True)

    pipeline = EdgePipeline()
    out, magnitude = pipeline.process(frame, config, return_magnitude=True)
    avg_ms = mean_time_ms(pipeline, frame, config, repeat) if repeat > 1 else pipeline.elapsed_ms

    gray = EdgePipeline().process(frame, config.with_overrides(grayscale_enabled=True,
                                                               edge_detection_enabled=False))

    # --- 3-up visualization: Input | Grayscale | Output ---
    fig, axs = plt.subplots(1, 3, figsize=(12, 4))
    axs[0].imshow(frame.samples);           axs[0].set_title(f"Input {frame.width}x{frame.height}"); axs[0].axis("off")
    axs[1].imshow(gray.samples);            axs[1].set_title("Grayscale");                            axs[1].axis("off")
    axs[2].imshow(out.samples);             axs[2].set_title(f"Output ({avg_ms:.1f} ms)");            axs[2].axis("off")
    fig.tight_layout()
    fig.savefig(outpath / "pipeline_overview.png", dpi=150)
    np.save(outpath / "output.npy", out.samples)

    if magnitude is not None:
        hist = plot_magnitude_histogram(magnitude, config.low_threshold, config.high_threshold)
        hist.savefig(outpath / "magnitude_histogram.png", dpi=150)
        counts = class_counts(out)
        print(f"Edge levels: none={counts['none']} weak={counts['weak']} strong={counts['strong']}")

    if reference is not None:
        if not config.edge_detection_enabled:
            print("[WARN] --reference given but edge detection is off; comparing the output frame anyway.")
        summary = compare_edge_maps(out, np.load(reference))
        per = ", ".join(f"{k}={v:.3f}" for k, v in summary["per_level"].items())
        print(f"Agreement vs reference: {summary['agreement']:.4f} ({per})")

    if show:
        plt.show()
    plt.close("all")

    print(f"[OK] Saved outputs to: {outpath.resolve()}")
    print(f"Processing time ≈ {int(round(avg_ms))} ms "
          f"(grayscale={config.runs_grayscale}, edges={config.edge_detection_enabled}, "
          f"radius={config.blur_radius} {config.blur_weighting})")
    return out


def parse_args(argv=None) -> argparse.Namespace:
    """CLI for the edge demo."""
    p = argparse.ArgumentParser(description="Edge pipeline demo (grayscale → blur → Sobel → double threshold)")
    p.add_argument("--scene", default="slanted_edge",
                   help="step_edge | slanted_edge | checker | gradient | color_bars | constant")
    p.add_argument("--size", type=int, default=256, help="scene canvas size (pixels)")
    p.add_argument("--input", default=None, help="image file to process instead of a synthetic scene")
    p.add_argument("--low", type=float, default=50.0, help="low magnitude threshold")
    p.add_argument("--high", type=float, default=150.0, help="high magnitude threshold")
    p.add_argument("--blur_radius", type=int, default=5, help="smoothing radius in pixels (0 = off)")
    p.add_argument("--weighting", default="uniform", choices=["uniform", "gaussian"], help="smoothing weights")
    p.add_argument("--no_grayscale", action="store_true", help="do not request grayscale output")
    p.add_argument("--no_edges", action="store_true", help="disable edge detection")
    p.add_argument("--repeat", type=int, default=1, help="runs to average the reported time over")
    p.add_argument("--reference", default=None, help=".npy edge map from another pipeline to compare with")
    p.add_argument("--outdir", default="outputs", help="directory to save outputs")
    p.add_argument("--show", action="store_true", help="show figures on screen")
    p.add_argument("--verbose", action="store_true", help="log per-stage timings")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    try:
        frame = load_frame(args.input) if args.input else generate_scene(kind=args.scene, size=args.size)
        config = ProcessingConfig(
            grayscale_enabled=not args.no_grayscale,
            edge_detection_enabled=not args.no_edges,
            low_threshold=args.low,
            high_threshold=args.high,
            blur_radius=args.blur_radius,
            blur_weighting=args.weighting,
        ).validate()
        run_once(frame, config, outdir=args.outdir, repeat=args.repeat,
                 reference=args.reference, show=args.show)
    except (EdgePipelineError, OSError) as exc:
        print(f"[ERROR] {exc}")
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
