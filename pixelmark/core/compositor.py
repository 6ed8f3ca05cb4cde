"""
Image Watermark Compositor
==========================
Blends a watermark image into a source image using numpy arrays.

Technical Notes:
- Output is always opaque RGB with the exact size of the source
- Single placement draws one watermark at a fixed top-left offset
- Grid placement tiles the watermark with modulo indexing (no seams)
- Blend math is integer, per channel, truncating:
      channel = (weight * mark + (100 - weight) * base) // 100
- A watermark pixel whose RGB equals the base pixel never blends
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Tuple

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


class Color(NamedTuple):
    """An 8-bit RGB triple."""
    red: int
    green: int
    blue: int


class PlacementMethod(Enum):
    SINGLE = "single"
    GRID = "grid"


@dataclass(frozen=True)
class Placement:
    """Where the watermark goes: once at (x, y), or tiled over everything."""
    method: PlacementMethod = PlacementMethod.GRID
    x: int = 0
    y: int = 0

    @classmethod
    def single(cls, x: int, y: int) -> "Placement":
        return cls(PlacementMethod.SINGLE, x, y)

    @classmethod
    def grid(cls) -> "Placement":
        return cls(PlacementMethod.GRID)

    @property
    def is_grid(self) -> bool:
        return self.method is PlacementMethod.GRID


@dataclass(frozen=True)
class BlendConfig:
    """
    Blend settings for one compositing run.

    Attributes:
        weight_percent: Share of the watermark color in a blended pixel (0-100).
        placement: Single offset or grid tiling.
        use_alpha: Skip watermark pixels whose alpha is 0.
        transparency_color: Skip watermark pixels of exactly this RGB.
    """
    weight_percent: int = 50
    placement: Placement = Placement()
    use_alpha: bool = False
    transparency_color: Optional[Color] = None

    def __post_init__(self):
        if not 0 <= self.weight_percent <= 100:
            raise ValueError("Weight must be between 0 and 100")
        if self.use_alpha and self.transparency_color is not None:
            raise ValueError("Alpha channel and transparency color are mutually exclusive")
        if self.placement.x < 0 or self.placement.y < 0:
            raise ValueError("Placement offset cannot be negative")


def _watermark_layer(
        mark: np.ndarray,
        size: Tuple[int, int],
        placement: Placement
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Lay the watermark pixels out over the whole source canvas.

    Args:
        mark: RGBA watermark array of shape (mh, mw, 4).
        size: (height, width) of the source.
        placement: Placement to apply.

    Returns:
        Tuple of (RGBA layer of the source size, boolean coverage mask).
    """
    height, width = size
    mark_h, mark_w = mark.shape[:2]

    if placement.is_grid:
        rows = np.arange(height) % mark_h
        cols = np.arange(width) % mark_w
        layer = mark[rows[:, None], cols[None, :]]
        covered = np.ones((height, width), dtype=bool)
        return layer, covered

    x, y = placement.x, placement.y
    layer = np.zeros((height, width, 4), dtype=mark.dtype)
    covered = np.zeros((height, width), dtype=bool)
    layer[y:y + mark_h, x:x + mark_w] = mark
    covered[y:y + mark_h, x:x + mark_w] = True
    return layer, covered


def composite(
        source: Image.Image,
        watermark: Image.Image,
        config: BlendConfig
) -> Image.Image:
    """
    Composite the watermark onto the source.

    The caller guarantees the watermark fits inside the source and, for
    single placement, that the offset keeps it fully inside.

    Args:
        source: Source image (any mode convertible to RGB).
        watermark: Watermark image (any mode convertible to RGBA).
        config: Blend settings.

    Returns:
        New RGB image with the source's dimensions.
    """
    base = np.asarray(source.convert("RGB"), dtype=np.int32)
    mark = np.asarray(watermark.convert("RGBA"), dtype=np.int32)

    logger.debug(
        "Compositing %dx%d watermark onto %dx%d source (%s, weight=%d%%)",
        watermark.width, watermark.height, source.width, source.height,
        config.placement.method.value, config.weight_percent
    )

    layer, visible = _watermark_layer(mark, base.shape[:2], config.placement)
    layer_rgb = layer[..., :3]

    # identical colors never blend
    visible &= np.any(layer_rgb != base, axis=-1)

    if config.use_alpha:
        visible &= layer[..., 3] != 0
    elif config.transparency_color is not None:
        key = np.array(config.transparency_color, dtype=np.int32)
        visible &= np.any(layer_rgb != key, axis=-1)

    weight = config.weight_percent
    blended = (weight * layer_rgb + (100 - weight) * base) // 100

    result = np.where(visible[..., None], blended, base).astype(np.uint8)
    logger.debug("Blended %d of %d pixels", int(visible.sum()), visible.size)

    return Image.fromarray(result)
