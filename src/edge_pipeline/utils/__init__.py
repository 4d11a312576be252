"""
edge_pipeline.utils
-------------------
Comparison metrics (PSNR, edge-map agreement, level counts) and the
gradient-magnitude histogram.
"""
