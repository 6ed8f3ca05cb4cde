"""
Watermark Errors
================
Every failure the workflow can report to the user.

All of them are fatal: the controller prints ``str(error)`` and exits
without writing an output file.
"""


class WatermarkError(Exception):
    """Base class for user-facing watermark failures."""


class ImageNotFoundError(WatermarkError):
    """The image file doesn't exist."""


class UnreadableImageError(WatermarkError):
    """The file exists but Pillow cannot decode it."""


class UnsupportedColorDepthError(WatermarkError):
    """Too few color components, or a pixel depth other than 24/32 bits."""


class DimensionMismatchError(WatermarkError):
    """The watermark is larger than the source image."""


class InvalidColorInputError(WatermarkError):
    pass


class InvalidPercentageError(WatermarkError):
    pass


class InvalidPlacementMethodError(WatermarkError):
    pass


class InvalidPositionInputError(WatermarkError):
    pass


class InvalidOutputExtensionError(WatermarkError):
    pass


class OutputWriteError(WatermarkError):
    """Saving the composited image failed."""


class MissingInputError(WatermarkError):
    """Input ended before all answers were collected."""
