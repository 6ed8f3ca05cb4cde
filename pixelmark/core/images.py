"""
Image Loading and Saving
========================
Reads source/watermark images with Pillow, checks they are usable for
compositing, and writes the result in the format implied by its extension.

Technical Notes:
- Usable images have at least 3 color components and 24 or 32-bit pixels
  (RGB, RGBA, RGBX, CMYK, ...). Grayscale, palette and 16-bit-per-channel
  images are rejected.
- An RGB image with a transparency key (PNG tRNS) is loaded as RGBA
- JPEG output is written at quality 95; PNG output is lossless
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union, Tuple

from PIL import Image, ImageMode, UnidentifiedImageError

from .errors import (
    DimensionMismatchError,
    ImageNotFoundError,
    OutputWriteError,
    UnreadableImageError,
    UnsupportedColorDepthError,
)

logger = logging.getLogger(__name__)

SUPPORTED_BIT_DEPTHS = (24, 32)
OUTPUT_FORMATS = {"jpg": "JPEG", "png": "PNG"}
JPEG_QUALITY = 95


@dataclass(frozen=True)
class ImageInfo:
    """Facts about a loaded image that the workflow validates against."""
    path: Path
    width: int
    height: int
    components: int
    bit_depth: int
    has_alpha: bool

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height


def stored_bits_per_band(image: Image.Image) -> int:
    """
    Bits per band as stored in the file, read from the decoder rawmode.

    Pillow decodes 16-bit-per-channel RGB/RGBA into 8-bit modes, so the
    mode alone can't tell a 48-bit PNG from a 24-bit one. Must be called
    before ``image.load()``, which clears ``image.tile``.
    """
    for tile in image.tile:
        args = tile[3]
        rawmode = args[0] if isinstance(args, tuple) and args else args
        if isinstance(rawmode, str) and ";16" in rawmode:
            return 16
    return 8


def describe_image(
        image: Image.Image,
        path: Union[str, Path] = "",
        bits_per_band: int = 8
) -> ImageInfo:
    """
    Derive color components and bit depth from a Pillow image mode.

    Palette images report the components of their palette but only
    8 bits per pixel, the way an indexed color model does. An RGB image
    with a transparency key counts as RGBA.

    Args:
        image: Pillow image.
        path: Where it came from (informational).
        bits_per_band: Stored bits per band for 8-bit base modes.

    Returns:
        ImageInfo for the image.
    """
    descriptor = ImageMode.getmode(image.mode)
    bands = descriptor.bands
    if image.mode == "RGB" and "transparency" in image.info:
        bands = bands + ("A",)

    if image.mode in ("P", "PA"):
        palette_mode = image.palette.mode if image.palette is not None else "RGB"
        components = len(palette_mode)
    else:
        components = len(bands)

    if descriptor.basetype == "L":
        bit_depth = len(bands) * bits_per_band
    else:
        bit_depth = len(bands) * 32
    if image.mode.startswith("I;16"):
        bit_depth = 16

    return ImageInfo(
        path=Path(path),
        width=image.width,
        height=image.height,
        components=components,
        bit_depth=bit_depth,
        has_alpha="A" in bands
    )


def load_image(
        path: Union[str, Path],
        kind: str = "image"
) -> Tuple[Image.Image, ImageInfo]:
    """
    Open and validate an image for compositing.

    Args:
        path: Image file path.
        kind: Word used in error messages ("image" or "watermark").

    Returns:
        Tuple of (fully loaded PIL Image, ImageInfo).

    Raises:
        ImageNotFoundError: If the file doesn't exist.
        UnreadableImageError: If Pillow cannot decode it.
        UnsupportedColorDepthError: If it has fewer than 3 color components
            or is neither 24 nor 32-bit.
    """
    path = Path(path)
    if not path.is_file():
        raise ImageNotFoundError(f"The file {path} doesn't exist.")

    try:
        image = Image.open(path)
        bits_per_band = stored_bits_per_band(image)
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise UnreadableImageError(f"The file {path} isn't a readable image.") from e

    info = describe_image(image, path, bits_per_band)
    logger.debug(
        "Loaded %s %s: %dx%d mode=%s components=%d depth=%d",
        kind, path, info.width, info.height, image.mode, info.components, info.bit_depth
    )

    if info.components < 3:
        image.close()
        raise UnsupportedColorDepthError(f"The number of {kind} color components isn't 3.")

    if info.bit_depth not in SUPPORTED_BIT_DEPTHS:
        image.close()
        raise UnsupportedColorDepthError(f"The {kind} isn't 24 or 32-bit.")

    # Turn a transparency key into a real alpha channel
    if info.has_alpha and image.mode == "RGB":
        keyed = image.convert("RGBA")
        image.close()
        image = keyed

    return image, info


def check_fits(source: ImageInfo, watermark: ImageInfo) -> None:
    """Raise DimensionMismatchError unless the watermark fits in the source."""
    if source.width < watermark.width or source.height < watermark.height:
        raise DimensionMismatchError("The watermark's dimensions are larger.")


def position_range(source: ImageInfo, watermark: ImageInfo) -> Tuple[int, int]:
    """Largest legal (x, y) offset for a single watermark."""
    return source.width - watermark.width, source.height - watermark.height


def save_image(image: Image.Image, output_path: Union[str, Path]) -> Path:
    """
    Save the composited image, choosing the format from the extension.

    Args:
        image: RGB image to write.
        output_path: Destination ending in .jpg or .png.

    Returns:
        The written path.

    Raises:
        OutputWriteError: If the file could not be written. Any partially
            written file is removed.
    """
    output_path = Path(output_path)
    # Path.suffix is empty for names like ".png"
    extension = output_path.name.rsplit(".", 1)[-1]
    fmt = OUTPUT_FORMATS.get(extension)
    if fmt is None:
        raise OutputWriteError(f"Unsupported output extension: {output_path.name}")

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        if fmt == "JPEG":
            image.convert("RGB").save(output_path, format=fmt, quality=JPEG_QUALITY)
        else:
            image.save(output_path, format=fmt)
    except OSError as e:
        # Don't leave a truncated file behind
        if output_path.exists():
            try:
                output_path.unlink()
            except OSError:
                pass
        raise OutputWriteError(f"The file {output_path} couldn't be written: {e}") from e

    logger.info("Saved %s image to %s", fmt, output_path)
    return output_path
