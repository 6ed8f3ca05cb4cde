"""
Interactive Watermark Session
=============================
Drives the question-and-answer workflow in the terminal.

Workflow:
1. Ask for the source and watermark images and validate them
2. Ask how transparency is decided (alpha channel or a key color)
3. Ask for the blend weight, placement and output filename
4. Composite and save

Any invalid answer prints its message and ends the process with
EXIT_FAILURE before anything is written.
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from PIL import Image

from pixelmark import __app_name__, __version__
from pixelmark.core.compositor import BlendConfig, Color, Placement, PlacementMethod, composite
from pixelmark.core.errors import MissingInputError, WatermarkError
from pixelmark.core.images import check_fits, load_image, position_range, save_image
from pixelmark.core.inputs import (
    parse_color,
    parse_method,
    parse_output_name,
    parse_percentage,
    parse_position,
    parse_yes_no,
)

logger = logging.getLogger(__name__)

EXIT_FAILURE = 404


@dataclass
class SessionResult:
    """Outcome of a completed session."""
    output_path: Path
    config: BlendConfig


class WatermarkController:
    """
    Collects answers one prompt at a time and runs the compositor.

    Responsibilities:
    - Prompt for every parameter in order
    - Validate each answer before asking the next question
    - Build the BlendConfig and composite
    - Save the output only when every step succeeded
    """

    def __init__(
            self,
            read_line: Callable[[], str] = input,
            write_line: Callable[[str], None] = print
    ):
        """
        Initialize the controller.

        Args:
            read_line: Returns the next answer; raises EOFError when input ends.
            write_line: Shows a prompt or message to the user.
        """
        self._read_line = read_line
        self._write_line = write_line

        # Keep loaded images so they can be closed afterwards
        self._images: List[Image.Image] = []

    def ask(self, prompt: str) -> str:
        """Show a prompt and return the answer without its line ending."""
        self._write_line(prompt)
        try:
            answer = self._read_line()
        except EOFError:
            raise MissingInputError("No input was provided.") from None
        return answer.rstrip("\r\n")

    def _ask_transparency(self, watermark_has_alpha: bool) -> Tuple[bool, Optional[Color]]:
        """
        Ask how transparent watermark pixels are recognised.

        Returns:
            Tuple of (use_alpha, transparency_color).
        """
        if watermark_has_alpha:
            answer = self.ask("Do you want to use the watermark's Alpha channel?")
            return parse_yes_no(answer), None

        answer = self.ask("Do you want to set a transparency color?")
        if not parse_yes_no(answer):
            return False, None

        color: Color = parse_color(
            self.ask("Input a transparency color ([Red] [Green] [Blue]):")
        )
        return False, color

    def run(self) -> SessionResult:
        """
        Run the whole session.

        Returns:
            SessionResult describing what was written.

        Raises:
            WatermarkError: On the first invalid answer or unusable image.
        """
        try:
            return self._run()
        finally:
            self._close_images()

    def _run(self) -> SessionResult:
        source, source_info = load_image(self.ask("Input the image filename:"))
        self._images.append(source)

        watermark, watermark_info = load_image(
            self.ask("Input the watermark image filename:"), "watermark"
        )
        self._images.append(watermark)

        check_fits(source_info, watermark_info)

        use_alpha, transparency_color = self._ask_transparency(watermark_info.has_alpha)

        weight = parse_percentage(
            self.ask("Input the watermark transparency percentage (Integer 0-100):")
        )

        method = parse_method(self.ask("Choose the position method (single, grid):"))

        if method is PlacementMethod.SINGLE:
            max_x, max_y = position_range(source_info, watermark_info)
            x, y = parse_position(
                self.ask(f"Input the watermark position ([x 0-{max_x}] [y 0-{max_y}]):"),
                max_x, max_y
            )
            placement = Placement.single(x, y)
        else:
            placement = Placement.grid()

        output_path = parse_output_name(
            self.ask("Input the output image filename (jpg or png extension):")
        )

        config = BlendConfig(
            weight_percent=weight,
            placement=placement,
            use_alpha=use_alpha,
            transparency_color=transparency_color
        )
        logger.info("Blend settings: %s", config)

        result = composite(source, watermark, config)
        try:
            save_image(result, output_path)
        finally:
            result.close()

        self._write_line(f"The watermarked image {output_path} has been created.")
        return SessionResult(output_path=output_path, config=config)

    def _close_images(self):
        """Release the loaded source and watermark."""
        for image in self._images:
            image.close()
        self._images.clear()


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pixelmark",
        description="Overlay a watermark image onto a source image. "
                    "All settings are asked for interactively.",
    )
    parser.add_argument(
        "--log-level",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging verbosity (written to stderr)",
    )
    parser.add_argument(
        "--version", action="version", version=f"{__app_name__} {__version__}"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point."""
    args = parse_arguments(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    controller = WatermarkController()
    try:
        controller.run()
    except WatermarkError as e:
        print(e)
        sys.exit(EXIT_FAILURE)

    return 0
