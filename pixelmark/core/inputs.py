"""
Answer Parsing
==============
Turns the raw lines typed at each prompt into validated values.

Every parser is pure: it takes the answer string and either returns the
value or raises the matching WatermarkError subclass with the message
shown to the user.
"""

import re
from pathlib import Path
from typing import Tuple

from .compositor import Color, PlacementMethod
from .errors import (
    InvalidColorInputError,
    InvalidOutputExtensionError,
    InvalidPercentageError,
    InvalidPlacementMethodError,
    InvalidPositionInputError,
)

# ASCII digits only; str.isdigit() and \d also accept other scripts
_COLOR_PATTERN = re.compile(r"[0-9]+ [0-9]+ [0-9]+")
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_POSITION_PATTERN = re.compile(r"-?[0-9]+ -?[0-9]+")
_OUTPUT_PATTERN = re.compile(r".*\.(jpg|png)")

YES = "yes"


def parse_yes_no(text: str) -> bool:
    """Only the exact answer "yes" counts as yes."""
    return text == YES


def parse_color(text: str) -> Color:
    """
    Parse "R G B" into a Color.

    Raises:
        InvalidColorInputError: On bad format or a channel outside 0-255.
    """
    if not _COLOR_PATTERN.fullmatch(text):
        raise InvalidColorInputError("The transparency color input is invalid.")

    red, green, blue = (int(part) for part in text.split(" "))
    if not all(0 <= c <= 255 for c in (red, green, blue)):
        raise InvalidColorInputError("The transparency color input is invalid.")

    return Color(red, green, blue)


def parse_percentage(text: str) -> int:
    """
    Parse the blend weight.

    Raises:
        InvalidPercentageError: If it isn't an integer or is outside 0-100.
    """
    if not _INTEGER_PATTERN.fullmatch(text):
        raise InvalidPercentageError("The transparency percentage isn't an integer number.")

    weight = int(text)
    if not 0 <= weight <= 100:
        raise InvalidPercentageError("The transparency percentage is out of range.")

    return weight


def parse_method(text: str) -> PlacementMethod:
    """Accept exactly "single" or "grid"."""
    for method in PlacementMethod:
        if text == method.value:
            return method
    raise InvalidPlacementMethodError("The position method input is invalid.")


def parse_position(text: str, max_x: int, max_y: int) -> Tuple[int, int]:
    """
    Parse "X Y" and check it lies in [0, max_x] x [0, max_y].

    Raises:
        InvalidPositionInputError: On bad format or an out-of-range offset.
    """
    if not _POSITION_PATTERN.fullmatch(text):
        raise InvalidPositionInputError("The position input is invalid.")

    x, y = (int(part) for part in text.split(" "))
    if not (0 <= x <= max_x and 0 <= y <= max_y):
        raise InvalidPositionInputError("The position input is out of range.")

    return x, y


def parse_output_name(text: str) -> Path:
    """
    Check the output filename ends in .jpg or .png.

    Raises:
        InvalidOutputExtensionError: For any other name.
    """
    if not _OUTPUT_PATTERN.fullmatch(text):
        raise InvalidOutputExtensionError('The output file extension isn\'t "jpg" or "png".')
    return Path(text)
