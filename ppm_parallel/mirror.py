import numpy as np

from .forkjoin import fork_join, fork_join_rows


def mirror_indices(width, start, end):
    i = np.arange(start, end)
    return i + width - 1 - 2 * (i % width)


def mirror(image, cutoff=None, workers=None, executor=None):
    """Flip the image left to right, partitioned by row bands."""
    src = image.flat
    width = image.width
    mirror_pixels = np.empty_like(src)

    def compute_rows(row_start, row_end):
        start, end = row_start * width, row_end * width
        mirror_pixels[start:end] = src[mirror_indices(width, start, end)]

    fork_join_rows(compute_rows, image.height, width, cutoff=cutoff, workers=workers, executor=executor)
    return image.derive(mirror_pixels)


def mirror_by_index(image, cutoff=None, workers=None, executor=None):
    # Flat per-index gather; splits need not fall on row boundaries
    src = image.flat
    indices = mirror_indices(image.width, 0, image.size)
    mirror_pixels = np.empty_like(src)

    def compute(start, end):
        mirror_pixels[start:end] = src[indices[start:end]]

    fork_join(compute, image.size, cutoff=cutoff, workers=workers, executor=executor)
    return image.derive(mirror_pixels)
