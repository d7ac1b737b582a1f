import numpy as np
from numpy.typing import NDArray
from PIL import Image

from ..math.tools import clamp_luminance
from .detector import Detector

import logging
logger = logging.getLogger(__name__)


def luminance_buffer(scene, camera: Detector, width: int, height: int) -> NDArray[np.float64]:
    '''
    Unclamped luminance of every pixel, shape (height, width), rows top to bottom.

    Every primary ray is traced in one batch. The scene and camera must not be mutated while this runs.
    '''
    if width <= 0 or height <= 0:
        raise ValueError(f"Viewport must be at least 1x1, got {width}x{height}.")

    rays = camera.primary_rays(width, height)
    return np.asarray(scene.reflected_light(rays), dtype=np.float64).reshape(height, width)


def render(scene, camera: Detector, width: int, height: int) -> NDArray[np.uint8]:
    '''
    Grayscale frame of shape (height, width, 3): each pixel is its clamped luminance repeated on R, G and B.
    '''
    luminance = clamp_luminance(luminance_buffer(scene, camera, width, height))
    logger.debug(f"rendered {width}x{height} frame from {camera!r}")
    return np.repeat(luminance[:, :, np.newaxis], 3, axis=2)


def to_image(buffer: NDArray[np.uint8]) -> Image.Image:
    # uint8 (height, width, 3) arrays map to mode RGB
    return Image.fromarray(np.ascontiguousarray(buffer, dtype=np.uint8))
