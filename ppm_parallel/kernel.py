import math

import numpy as np

from .errors import InvalidParameter


def gaussian(x, center, sigma):
    if sigma == 0:
        raise InvalidParameter("sigma must be non-zero")
    return math.exp(-(((x - center) / sigma) ** 2) / 2.0)


def gaussian_filter(radius, sigma):
    if isinstance(radius, bool) or not isinstance(radius, (int, np.integer)) or radius < 0:
        raise InvalidParameter(f"radius must be a non-negative integer, got {radius!r}")
    if isinstance(sigma, bool) or not isinstance(sigma, (int, float, np.integer, np.floating)) \
            or not sigma > 0:
        raise InvalidParameter(f"sigma must be positive, got {sigma!r}")

    size = 2 * radius + 1
    kernel = np.zeros(size)
    for i in range(size):
        kernel[i] = gaussian(i, radius, sigma)

    kernel2d = np.outer(kernel, kernel)
    # Centre sample is exp(0) == 1, so the total is never zero
    return kernel2d / kernel2d.sum()
