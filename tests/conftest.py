"""
Pytest configuration and shared fixtures for BG Eraser tests.

This module provides shared rasters and helpers used across multiple
test modules.
"""

import struct
import zlib

import pytest
from PIL import Image

from BE_Libs.RasterLib.raster import Raster

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)
BLUE = (0, 0, 255, 255)
GRAY = (128, 128, 128, 255)


def make_raster(rows):
    """
    Build a raster from a list of rows of RGBA tuples.

    Args:
        rows: rows[y][x] is the color of pixel (x, y)

    Returns:
        Raster with matching width and height
    """
    height = len(rows)
    width = len(rows[0])
    data = bytearray()
    for row in rows:
        for color in row:
            data.extend(color)
    return Raster(width, height, data)


def alpha_grid(raster):
    """Alpha values as a list of rows, for readable assertions."""
    return [[raster.get_pixel(x, y)[3] for x in range(raster.width)]
            for y in range(raster.height)]


def build_ring_raster():
    """
    4x4 raster: white 12-pixel ring around a 2x2 black center.
    """
    W, B = WHITE, BLACK
    return make_raster([
        [W, W, W, W],
        [W, B, B, W],
        [W, B, B, W],
        [W, W, W, W],
    ])


def build_hole_raster():
    """
    7x7 raster: white outer frame touching all edges, a blue square
    inside it, and a single white "hole" pixel enclosed by the blue.
    """
    W, U = WHITE, BLUE
    return make_raster([
        [W, W, W, W, W, W, W],
        [W, U, U, U, U, U, W],
        [W, U, U, U, U, U, W],
        [W, U, U, W, U, U, W],
        [W, U, U, U, U, U, W],
        [W, U, U, U, U, U, W],
        [W, W, W, W, W, W, W],
    ])


def build_gray_image():
    """Opaque 20x20 gray PIL Image."""
    return Image.new("RGBA", (20, 20), GRAY)


def oversized_png(width=30000, height=30000):
    """
    Minimal PNG whose header declares a huge size.

    Only the IHDR is meaningful; Pillow rejects the size on open, before
    any pixel data is read.
    """
    def chunk(tag, data):
        crc = zlib.crc32(tag + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + tag + data + struct.pack(">I", crc)

    header = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", header)
        + chunk(b"IDAT", zlib.compress(b""))
        + chunk(b"IEND", b"")
    )


@pytest.fixture
def sample_rgb_colors():
    """
    Provide a list of sample RGB color tuples for testing.

    Returns:
        List of (R, G, B) tuples with common and near-duplicate colors
    """
    return [
        (255, 0, 0),      # Red
        (0, 255, 0),      # Green
        (0, 0, 255),      # Blue
        (255, 255, 255),  # White
        (250, 250, 250),  # Near white
        (0, 0, 0),        # Black
        (128, 128, 128),  # Gray
        (120, 130, 125),  # Near gray
    ]
