"""
PixelMark - Main Entry Point
============================
Blends a watermark image into a source image from the terminal.

Usage:
    python main.py [--log-level DEBUG]

Architecture:
    - Model: pixelmark/core/ (loading, parsing, compositing)
    - Controller: pixelmark/controller.py (prompt sequence)

Features:
    - Single watermark at a chosen offset, or tiled across the whole image
    - Alpha channel or key-color transparency
    - JPEG or PNG output
"""

import sys

from pixelmark.controller import main


if __name__ == "__main__":
    sys.exit(main())
