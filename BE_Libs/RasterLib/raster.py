"""
Raster data model for BG Eraser.

A Raster is a width x height buffer of RGBA bytes. Every other component
reads and writes pixels through it, either byte-wise or through a numpy
view that shares the same memory.

Classes:
    Raster: Owned RGBA8 pixel buffer with Pillow and numpy conversions

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
    RgbColor: A tuple of 3 integers representing RGB color values (0-255)
"""

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Any, Tuple, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from BE_Libs.constants import CHANNELS, DEFAULT_OUTPUT_FORMAT, TRANSPARENT

RgbaColor = Tuple[int, int, int, int]
RgbColor = Tuple[int, int, int]


@dataclass(eq=True)
class Raster:
    """RGBA8 pixel buffer.

    Attributes:
        width: Width in pixels (> 0)
        height: Height in pixels (> 0)
        pixels: Row-major bytes in R, G, B, A order,
                length must be width * height * 4
    """
    width: int
    height: int
    pixels: bytearray

    def __post_init__(self):
        """Validate dimensions and buffer length."""
        if not isinstance(self.width, int) or not isinstance(self.height, int):
            raise TypeError(
                f"width and height must be integers, got "
                f"{type(self.width).__name__} and {type(self.height).__name__}"
            )

        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Raster dimensions must be positive, got {self.width}x{self.height}"
            )

        if not isinstance(self.pixels, bytearray):
            self.pixels = bytearray(self.pixels)

        expected = self.width * self.height * CHANNELS
        if len(self.pixels) != expected:
            raise ValueError(
                f"Pixel buffer has {len(self.pixels)} bytes, expected {expected} "
                f"for a {self.width}x{self.height} RGBA raster"
            )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def blank(cls, width: int, height: int, color: RgbaColor = TRANSPARENT) -> "Raster":
        """Create a raster filled with a single color (transparent by default)."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Raster dimensions must be positive, got {width}x{height}")
        return cls(width, height, bytearray(bytes(color) * (width * height)))

    @classmethod
    def from_image(cls, image: Any) -> "Raster":
        """
        Build a raster from a PIL Image.

        Args:
            image: PIL Image in any mode (converted to RGBA)

        Returns:
            New Raster owning a copy of the pixel data

        Raises:
            TypeError: If image is not a PIL Image
            ValueError: If image has a zero dimension
        """
        if not hasattr(image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")

        width, height = image.size
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")

        rgba = image.convert("RGBA")
        return cls(width, height, bytearray(rgba.tobytes()))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Raster":
        """Build a raster from an (H, W, 4) uint8 array (data is copied)."""
        if array.ndim != 3 or array.shape[2] != CHANNELS:
            raise ValueError(f"Expected (H, W, 4) array, got shape {array.shape}")
        height, width = array.shape[:2]
        data = np.ascontiguousarray(array, dtype=np.uint8)
        return cls(int(width), int(height), bytearray(data.tobytes()))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Raster":
        """
        Decode an encoded image (PNG, JPEG, ...) into a raster.

        Raises:
            ValueError: If the bytes cannot be decoded as an image, or the
                        declared size exceeds Pillow's pixel limit
        """
        if not data:
            raise ValueError("Cannot decode empty image data")
        try:
            with Image.open(BytesIO(data)) as img:
                img.load()
                return cls.from_image(img)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise ValueError(f"Could not decode image data: {e}") from e

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Raster":
        """Load an image file from disk into a raster."""
        path = Path(path)
        if not path.is_file():
            raise ValueError(f"Image file not found: {path}")
        return cls.from_bytes(path.read_bytes())

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def array(self) -> np.ndarray:
        """
        Return a writable (H, W, 4) uint8 view over the pixel buffer.

        Writes through the view mutate this raster.
        """
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(
            self.height, self.width, CHANNELS
        )

    def get_pixel(self, x: int, y: int) -> RgbaColor:
        idx = (y * self.width + x) * CHANNELS
        r, g, b, a = self.pixels[idx:idx + CHANNELS]
        return (r, g, b, a)

    def set_pixel(self, x: int, y: int, color: RgbaColor) -> None:
        idx = (y * self.width + x) * CHANNELS
        self.pixels[idx:idx + CHANNELS] = bytes(color)

    def corners(self) -> Tuple[Tuple[int, int], ...]:
        """Corner coordinates: top-left, top-right, bottom-left, bottom-right."""
        return (
            (0, 0),
            (self.width - 1, 0),
            (0, self.height - 1),
            (self.width - 1, self.height - 1),
        )

    # ------------------------------------------------------------------
    # Mutation and copies
    # ------------------------------------------------------------------

    def copy(self) -> "Raster":
        """Independent copy; never shares the pixel buffer."""
        return Raster(self.width, self.height, bytearray(self.pixels))

    def clear(self) -> None:
        """Reset every pixel to fully transparent black."""
        self.pixels[:] = bytes(len(self.pixels))

    def is_transparent(self) -> bool:
        return not self.array()[:, :, 3].any()

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_image(self) -> Any:
        """Convert to a new RGBA PIL Image."""
        return Image.frombytes("RGBA", self.size, bytes(self.pixels))

    def to_png_bytes(self) -> bytes:
        """Encode as a lossless PNG byte stream."""
        buffer = BytesIO()
        self.to_image().save(buffer, format=DEFAULT_OUTPUT_FORMAT)
        return buffer.getvalue()
