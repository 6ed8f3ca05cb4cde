"""
PixelMark Watermark Package
===========================
A terminal tool that blends a watermark image into a source image.

Modules:
    - core: Image loading, answer parsing and pixel compositing (no terminal I/O)
    - controller: Interactive question-and-answer session

Usage:
    from pixelmark.core import BlendConfig, Placement, composite
    from pixelmark import WatermarkController
"""

__version__ = "1.0.0"
__author__ = "PixelMark"
__app_name__ = "PixelMark"

# Core exports
from .core import (
    BlendConfig,
    Color,
    Placement,
    PlacementMethod,
    WatermarkError,
    composite,
)
# Controller exports
from .controller import EXIT_FAILURE, WatermarkController, main

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__app_name__",

    # Core
    "BlendConfig",
    "Color",
    "Placement",
    "PlacementMethod",
    "WatermarkError",
    "composite",

    # Controller
    "EXIT_FAILURE",
    "WatermarkController",
    "main",
]
