import logging
from pathlib import Path

import numpy as np

from .errors import FormatError, InvalidParameter
from .pixels import CHANNELS, MAX_CHANNEL_VALUE, PixelBuffer

logger = logging.getLogger(__name__)

# Header lines: magic, "<width> <height>", "<maxval>"; then width*height*3 raw RGB bytes
MAGIC = b"P6"


def _parse_int(token, what):
    try:
        return int(token)
    except ValueError as exc:
        raise FormatError(f"non-numeric {what}: {token!r}") from exc


def decode(data):
    lines = bytes(data).split(b"\n", 3)
    if len(lines) < 4:
        raise FormatError(f"expected 3 header lines, found {len(lines) - 1}")
    magic, dims, max_line, payload = lines

    if magic.strip() != MAGIC:
        raise FormatError(f"bad magic {magic!r}, expected {MAGIC!r}")

    tokens = dims.split()
    if len(tokens) != 2:
        raise FormatError(f"dimension line must hold width and height, got {dims!r}")
    width = _parse_int(tokens[0], "width")
    height = _parse_int(tokens[1], "height")
    if width <= 0 or height <= 0:
        raise FormatError(f"dimensions must be positive, got {width}x{height}")

    max_val = _parse_int(max_line.strip(), "max channel value")
    if not 1 <= max_val <= MAX_CHANNEL_VALUE:
        raise FormatError(f"max channel value must be in [1, {MAX_CHANNEL_VALUE}], got {max_val}")

    expected = width * height * CHANNELS
    if len(payload) < expected:
        raise FormatError(f"truncated pixel data: {len(payload)} of {expected} bytes")
    if len(payload) > expected:
        logger.debug("ignoring %d trailing bytes", len(payload) - expected)

    pixels = np.frombuffer(payload, dtype=np.uint8, count=expected)
    logger.debug("decoded %dx%d image, max_val=%d", width, height, max_val)
    try:
        return PixelBuffer(width, height, max_val, pixels)
    except InvalidParameter as exc:
        raise FormatError(str(exc)) from exc


def encode(image):
    header = f"P6\n{image.width} {image.height}\n{image.max_val}\n".encode("ascii")
    return header + image.flat.tobytes()


def read_ppm(path):
    return decode(Path(path).read_bytes())


def write_ppm(image, path):
    Path(path).write_bytes(encode(image))
