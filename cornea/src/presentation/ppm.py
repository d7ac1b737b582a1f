import numpy as np
from numpy.typing import NDArray

from ..detector.renderer import to_image

import logging
logger = logging.getLogger(__name__)


def _check_buffer(buffer) -> NDArray[np.uint8]:
    buffer = np.asarray(buffer)
    if buffer.ndim != 3 or buffer.shape[2] != 3:
        raise ValueError(f"Expected a (height, width, 3) pixel buffer, got shape {buffer.shape}.")
    if buffer.dtype != np.uint8:
        raise TypeError(f"Pixel buffer must hold uint8 values, got {buffer.dtype}.")
    return buffer


def encode_ppm(buffer) -> bytes:
    '''
    Binary PPM: the header "P6 <width> <height> 255\\n" followed by raw RGB triples, row-major, top row first.
    '''
    buffer = _check_buffer(buffer)
    height, width, _ = buffer.shape
    header = b"P6 %d %d 255\n" % (width, height)
    return header + np.ascontiguousarray(buffer).tobytes()


def write_ppm(target, buffer):
    '''
    Write `buffer` as binary PPM to `target`, a path or a binary file object.
    '''
    data = encode_ppm(buffer)

    if hasattr(target, 'write'):
        target.write(data)
        return

    try:
        with open(target, 'wb') as out:
            out.write(data)
    except OSError:
        logger.error(f"could not write image to {target}")
        raise
    logger.debug(f"wrote {len(data)} bytes to {target}")


def save_image(path, buffer, format=None):
    '''
    Save `buffer` in any format Pillow supports, chosen from the file extension unless `format` is given.
    '''
    try:
        to_image(_check_buffer(buffer)).save(path, format=format)
    except OSError:
        logger.error(f"could not save image to {path}")
        raise
