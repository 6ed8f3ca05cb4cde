"""
Test script for answer parsing.

Run with: python -m pytest tests/test_inputs.py -v
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from pixelmark.core.compositor import Color, PlacementMethod
from pixelmark.core.errors import (
    InvalidColorInputError,
    InvalidOutputExtensionError,
    InvalidPercentageError,
    InvalidPlacementMethodError,
    InvalidPositionInputError,
)
from pixelmark.core.inputs import (
    parse_color,
    parse_method,
    parse_output_name,
    parse_percentage,
    parse_position,
    parse_yes_no,
)


def test_yes_no():
    assert parse_yes_no("yes")
    for answer in ("no", "Yes", "y", "", " yes"):
        assert not parse_yes_no(answer)


def test_color():
    assert parse_color("0 128 255") == Color(0, 128, 255)
    assert parse_color("007 0 0") == Color(7, 0, 0)


@pytest.mark.parametrize("text", ["1 2", "1 2 3 4", "1  2 3", "-1 2 3", "a b c", "1,2,3", "256 0 0", "0 0 999", "١ ٢ ٣"])
def test_color_invalid(text):
    with pytest.raises(InvalidColorInputError) as exc_info:
        parse_color(text)
    assert str(exc_info.value) == "The transparency color input is invalid."


def test_percentage():
    assert parse_percentage("0") == 0
    assert parse_percentage("100") == 100
    assert parse_percentage("+42") == 42
    assert parse_percentage("050") == 50


@pytest.mark.parametrize("text", ["abc", "", "12.5", " 5", "1_0", "5%"])
def test_percentage_not_integer(text):
    with pytest.raises(InvalidPercentageError) as exc_info:
        parse_percentage(text)
    assert str(exc_info.value) == "The transparency percentage isn't an integer number."


@pytest.mark.parametrize("text", ["150", "-1", "101", "-100"])
def test_percentage_out_of_range(text):
    with pytest.raises(InvalidPercentageError) as exc_info:
        parse_percentage(text)
    assert str(exc_info.value) == "The transparency percentage is out of range."


def test_method():
    assert parse_method("single") is PlacementMethod.SINGLE
    assert parse_method("grid") is PlacementMethod.GRID

    for text in ("Single", "grids", "", "tile"):
        with pytest.raises(InvalidPlacementMethodError):
            parse_method(text)


def test_position():
    assert parse_position("0 0", 10, 5) == (0, 0)
    assert parse_position("10 5", 10, 5) == (10, 5)


@pytest.mark.parametrize("text", ["1", "1 2 3", "a 1", "1.0 2", "1  2"])
def test_position_invalid(text):
    with pytest.raises(InvalidPositionInputError) as exc_info:
        parse_position(text, 10, 10)
    assert str(exc_info.value) == "The position input is invalid."


@pytest.mark.parametrize("text", ["-1 0", "0 -1", "11 0", "0 6"])
def test_position_out_of_range(text):
    with pytest.raises(InvalidPositionInputError) as exc_info:
        parse_position(text, 10, 5)
    assert str(exc_info.value) == "The position input is out of range."


def test_output_name():
    assert parse_output_name("out.png") == Path("out.png")
    assert parse_output_name("dir/photo.final.jpg") == Path("dir/photo.final.jpg")
    assert parse_output_name(".png") == Path(".png")


@pytest.mark.parametrize("text", ["out.jpeg", "out.PNG", "out.gif", "out", "out.png.bak", "png"])
def test_output_name_invalid(text):
    with pytest.raises(InvalidOutputExtensionError) as exc_info:
        parse_output_name(text)
    assert str(exc_info.value) == 'The output file extension isn\'t "jpg" or "png".'
