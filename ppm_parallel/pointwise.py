import numpy as np

from .forkjoin import fork_join
from .pixels import round_channels

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def negate(image, cutoff=None, workers=None, executor=None):
    src = image.flat
    neg_pixels = np.empty_like(src)

    def compute(start, end):
        neg_pixels[start:end] = image.max_val - src[start:end]

    fork_join(compute, image.size, cutoff=cutoff, workers=workers, executor=executor)
    return image.derive(neg_pixels)


def greyscale(image, cutoff=None, workers=None, executor=None):
    src = image.flat
    grey_pixels = np.empty_like(src)
    wr, wg, wb = LUMA_WEIGHTS

    def compute(start, end):
        chunk = src[start:end]
        luma = wr * chunk[:, 0] + wg * chunk[:, 1] + wb * chunk[:, 2]
        grey_pixels[start:end] = round_channels(luma, image.max_val)[:, np.newaxis]

    fork_join(compute, image.size, cutoff=cutoff, workers=workers, executor=executor)
    return image.derive(grey_pixels)
