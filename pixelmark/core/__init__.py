"""
Core Module - Pure Compositing Logic
====================================
This module contains no terminal I/O.
Image loading, answer parsing and pixel blending are implemented here.
"""

from .compositor import BlendConfig, Color, Placement, PlacementMethod, composite
from .errors import WatermarkError
from .images import ImageInfo, check_fits, load_image, position_range, save_image

__all__ = [
    "BlendConfig",
    "Color",
    "Placement",
    "PlacementMethod",
    "composite",
    "WatermarkError",
    "ImageInfo",
    "check_fits",
    "load_image",
    "position_range",
    "save_image",
]
