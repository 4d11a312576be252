"""
edge_pipeline.scenes
--------------------
Frame sources for demos and tests: synthetic RGBA targets (step edge,
slanted edge, checkerboard, colour ramp, colour bars, flat) and an image-file
loader. The pipeline core never decodes files itself.
"""
