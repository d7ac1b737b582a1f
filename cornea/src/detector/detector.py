from abc import ABC, abstractmethod
import numpy as np

from ..math.vector import Vector
from ..math.ray import Ray

DEFAULT_FOCAL_OFFSET = 1.0


class Detector(ABC):
    def __init__(self, position: Vector = Vector(0, 0, 0), focal_offset: float = DEFAULT_FOCAL_OFFSET):
        '''
        Parameters:
            position (Vector): Detector's absolute position in 3D space
            focal_offset (float): z-distance from `position` to the projection plane
        '''
        if focal_offset == 0:
            raise ValueError("Detector focal offset must be non-zero.")
        self.position = position
        self.focal_offset = focal_offset

    def move(self, delta: Vector):
        self.position = self.position + delta

    @staticmethod
    def pixel_offset(x, y, width, height):
        '''
        Pixel coordinate relative to the center of the viewport, with y pointing up.
        '''
        return (x - width / 2, height / 2 - y)

    @staticmethod
    def pixel_grid(width, height):
        '''
        x and y pixel indices of every pixel of a `width` by `height` viewport, row by row from the top.
        '''
        x = np.tile(np.arange(width), height)
        y = np.repeat(np.arange(height), width)
        return (x, y)

    def primary_rays(self, width, height) -> Ray:
        '''
        Batch of `width * height` primary rays in row-major pixel order.
        '''
        x, y = self.pixel_grid(width, height)
        return self.primary_ray(x, y, width, height)

    @abstractmethod
    def primary_ray(self, x, y, width, height) -> Ray:
        '''
        Ray cast into the scene through pixel (x, y) of a `width` by `height` viewport. x and y may be arrays.
        '''
        pass


class Camera(Detector):
    '''
    Pinhole camera. Every primary ray starts at the camera position and passes through the pixel's
    point on a plane `focal_offset` ahead along +z.
    '''

    def primary_ray(self, x, y, width, height) -> Ray:
        norm_x, norm_y = self.pixel_offset(x, y, width, height)
        aim = Vector(norm_x + self.position.x, norm_y + self.position.y, self.position.z + self.focal_offset)
        return Ray(self.position, aim)

    def __repr__(self):
        return f"Camera(position={self.position!r}, focal_offset={self.focal_offset!r})"


class OrthographicCamera(Detector):
    '''
    Parallel projection: primary rays start on the pixel's own point and all travel along +z.
    '''

    def primary_ray(self, x, y, width, height) -> Ray:
        norm_x, norm_y = self.pixel_offset(x, y, width, height)
        origin = Vector(norm_x + self.position.x, norm_y + self.position.y, self.position.z)
        return Ray(origin, origin + Vector(0, 0, self.focal_offset))

    def __repr__(self):
        return f"OrthographicCamera(position={self.position!r}, focal_offset={self.focal_offset!r})"
