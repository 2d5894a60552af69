from typing import NamedTuple

import numpy as np
from PIL import Image

from .errors import InvalidParameter

CHANNELS = 3
MAX_CHANNEL_VALUE = 255


class Pixel(NamedTuple):
    r: int
    g: int
    b: int

    def __str__(self):
        return f"({self.r},{self.g},{self.b})"


def round_channels(values, max_val):
    # Half-up rounding; inputs are non-negative sums
    rounded = np.floor(values + 0.5)
    return np.clip(rounded, 0, max_val).astype(np.uint8)


class PixelBuffer:
    """Immutable row-major RGB image backed by a read-only (N, 3) uint8 array."""

    def __init__(self, width, height, max_val, data):
        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 0:
                raise InvalidParameter(f"{name} must be a non-negative integer, got {value!r}")
        if isinstance(max_val, bool) or not isinstance(max_val, (int, np.integer)) \
                or not 1 <= max_val <= MAX_CHANNEL_VALUE:
            raise InvalidParameter(f"max_val must be in [1, {MAX_CHANNEL_VALUE}], got {max_val!r}")

        arr = np.asarray(data)
        size = int(width) * int(height)
        if arr.size != size * CHANNELS:
            raise InvalidParameter(
                f"pixel data holds {arr.size} channel values, expected {size * CHANNELS} "
                f"for a {width}x{height} image"
            )
        if arr.size and arr.dtype.kind not in "iu":
            raise InvalidParameter(f"pixel data must be integers, got dtype {arr.dtype}")
        if arr.size and (arr.min() < 0 or arr.max() > max_val):
            raise InvalidParameter(f"channel values must lie in [0, {max_val}]")

        pixels = np.array(arr, dtype=np.uint8).reshape(size, CHANNELS)
        pixels.flags.writeable = False

        self._width = int(width)
        self._height = int(height)
        self._max_val = int(max_val)
        self._pixels = pixels

    @classmethod
    def from_pixels(cls, width, height, pixels, max_val=MAX_CHANNEL_VALUE):
        """Build a buffer from a row-major sequence of (r, g, b) triples."""
        data = np.array([tuple(p) for p in pixels], dtype=np.int64).reshape(-1, CHANNELS)
        return cls(width, height, max_val, data)

    @classmethod
    def from_pil(cls, img):
        rgb = img.convert("RGB")
        return cls(rgb.width, rgb.height, MAX_CHANNEL_VALUE, np.asarray(rgb, dtype=np.uint8))

    def to_pil(self):
        grid = self.grid
        if self._max_val != MAX_CHANNEL_VALUE:
            grid = round_channels(grid * (MAX_CHANNEL_VALUE / self._max_val), MAX_CHANNEL_VALUE)
        return Image.fromarray(np.ascontiguousarray(grid))

    def derive(self, data):
        """A new buffer with this buffer's dimensions and channel max."""
        return PixelBuffer(self._width, self._height, self._max_val, data)

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def max_val(self):
        return self._max_val

    @property
    def size(self):
        return self._width * self._height

    @property
    def flat(self):
        return self._pixels

    @property
    def grid(self):
        return self._pixels.reshape(self._height, self._width, CHANNELS)

    def pixel(self, index):
        if not 0 <= index < self.size:
            raise IndexError(f"pixel index {index} out of range for {self.size} pixels")
        r, g, b = self._pixels[index]
        return Pixel(int(r), int(g), int(b))

    def pixels(self):
        return [Pixel(int(r), int(g), int(b)) for r, g, b in self._pixels]

    def __len__(self):
        return self.size

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._max_val == other._max_val
            and np.array_equal(self._pixels, other._pixels)
        )

    __hash__ = None

    def __repr__(self):
        return f"PixelBuffer(width={self._width}, height={self._height}, max_val={self._max_val})"
