import logging

import numpy as np

from .forkjoin import fork_join_rows
from .kernel import gaussian_filter
from .pixels import round_channels

logger = logging.getLogger(__name__)


def blur_chunk(img_array, kernel, radius, start_y, end_y):
    # Neighbours outside the image clamp to the edge: rows to [0, H-1], columns to [0, W-1]
    height, width, channels = img_array.shape
    result = np.zeros((end_y - start_y, width, channels), dtype=np.float64)
    rows = np.arange(start_y, end_y)
    cols = np.arange(width)

    for dy in range(-radius, radius + 1):
        band = img_array[np.clip(rows - dy, 0, height - 1)]
        for dx in range(-radius, radius + 1):
            weight = kernel[dy + radius, dx + radius]
            result += weight * band[:, np.clip(cols - dx, 0, width - 1)]

    return result


def gaussian_blur(image, radius, sigma, cutoff=None, workers=None, executor=None):
    kernel = gaussian_filter(radius, sigma)
    img_array = image.grid
    blur_pixels = np.empty_like(img_array)
    logger.debug("blur %dx%d radius=%d sigma=%s", image.width, image.height, radius, sigma)

    def compute_rows(start_y, end_y):
        chunk = blur_chunk(img_array, kernel, radius, start_y, end_y)
        blur_pixels[start_y:end_y] = round_channels(chunk, image.max_val)

    fork_join_rows(compute_rows, image.height, image.width, cutoff=cutoff, workers=workers, executor=executor)
    return image.derive(blur_pixels)
