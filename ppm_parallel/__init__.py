"""
ppm_parallel
============
Fork/join image transforms over binary PPM images:
    ppm (decode) → pixels → negate / greyscale / mirror / blur → ppm (encode)
"""
from .blur import gaussian_blur
from .config import DEFAULT_CUTOFF, ForkJoinConfig
from .errors import FormatError, InvalidParameter, PixelMapError, TaskFailure
from .forkjoin import fork_join, fork_join_rows, per_index
from .kernel import gaussian, gaussian_filter
from .mirror import mirror, mirror_by_index, mirror_indices
from .pixels import Pixel, PixelBuffer
from .pointwise import greyscale, negate
from .ppm import decode, encode, read_ppm, write_ppm

__version__ = "0.1.0"
