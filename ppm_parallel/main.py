#!/usr/bin/env python3
import logging
import sys
import time
from pathlib import Path

from PIL import Image

from .blur import gaussian_blur
from .errors import PixelMapError
from .mirror import mirror, mirror_by_index
from .pixels import PixelBuffer
from .pointwise import greyscale, negate
from .ppm import read_ppm, write_ppm

FILTERS = ['negate', 'greyscale', 'mirror', 'mirror2', 'blur']
DEFAULT_RADIUS = 20
DEFAULT_SIGMA = 2.0


def load_image(path):
    if Path(path).suffix.lower() == '.ppm':
        return read_ppm(path)
    with Image.open(path) as img:
        return PixelBuffer.from_pil(img)


def save_image(image, path):
    if Path(path).suffix.lower() == '.ppm':
        write_ppm(image, path)
    else:
        image.to_pil().save(path)


def apply_filter(filter_type, image, radius=DEFAULT_RADIUS, sigma=DEFAULT_SIGMA):
    if filter_type == 'negate':
        return negate(image)
    if filter_type == 'greyscale':
        return greyscale(image)
    if filter_type == 'mirror':
        return mirror(image)
    if filter_type == 'mirror2':
        return mirror_by_index(image)
    if filter_type == 'blur':
        return gaussian_blur(image, radius, sigma)
    raise ValueError(f"Unknown filter type: {filter_type}")


def usage(prog):
    print(f"Usage: {prog} <filter_type> <input_image> <output_image> [radius sigma]")
    print(f"Filter types: {', '.join(FILTERS)}")


def main(argv=None):
    argv = sys.argv if argv is None else argv
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    if len(argv) not in (4, 6):
        usage(argv[0])
        return 1

    filter_type = argv[1].lower()
    input_path = argv[2]
    output_path = argv[3]

    if filter_type not in FILTERS:
        print(f"Unknown filter type: {filter_type}")
        print(f"Available filters: {', '.join(FILTERS)}")
        return 1

    radius, sigma = DEFAULT_RADIUS, DEFAULT_SIGMA
    if len(argv) == 6:
        try:
            radius = int(argv[4])
            sigma = float(argv[5])
        except ValueError:
            usage(argv[0])
            return 1

    try:
        # Load image
        start_time = time.time()
        image = load_image(input_path)
        load_time = time.time() - start_time
        print(f"Image loading took {load_time * 1000:.2f}ms")

        # Apply filter
        start_time = time.time()
        filtered = apply_filter(filter_type, image, radius, sigma)
        filter_time = time.time() - start_time
        print(f"{filter_type.capitalize()} processing took {filter_time * 1000:.2f}ms")

        # Save image
        start_time = time.time()
        save_image(filtered, output_path)
        save_time = time.time() - start_time
        print(f"Image saving took {save_time * 1000:.2f}ms")
    except (PixelMapError, OSError) as exc:
        print(f"Error: {exc}")
        return 1

    total_time = load_time + filter_time + save_time
    print(f"Total time: {total_time * 1000:.2f}ms")
    return 0


if __name__ == "__main__":
    sys.exit(main())
