from abc import ABC, abstractmethod
from typing import Optional
import numpy as np
from numpy.typing import NDArray

from ..math.vector import Vector
from ..math.ray import Ray

INFINITE = float('inf')


class Element(ABC):
    def __init__(self, identity: int):
        '''
        Parameters:
            identity (int): Id of the element within its Scene. Used to exclude self-intersection when casting shadow rays
        '''
        self._identity = identity

    @property
    def identity(self) -> int:
        return self._identity

    @property
    @abstractmethod
    def position(self) -> Vector:
        '''
        Reference position of the element, used to decide whether it lies behind a ray's origin.
        '''
        pass

    @abstractmethod
    def distance(self, ray: Ray) -> NDArray[np.float64]:
        '''
        Distance along the normalized direction of each ray to its nearest entry point, INFINITE where the ray misses.
        '''
        pass

    def intersect(self, ray: Ray) -> Optional[Vector]:
        '''
        Nearest entry point of a single `ray` on the element, or None if the ray misses.
        '''
        distance = self.distance(ray)
        if np.size(distance) != 1:
            raise ValueError(f"intersect takes a single ray, got a batch of shape {np.shape(distance)}.")
        distance = float(np.ravel(distance)[0])
        if distance == INFINITE:
            return None
        return ray.origin + ray.direction().norm() * distance

    @abstractmethod
    def compute_outward_normal(self, intersection_point: Vector) -> Vector:
        '''
        Compute unit normal vector, facing away from the element, at a point on its surface.
        '''
        pass


class Sphere(Element):
    def __init__(self, center: Vector, radius: float, identity: int):
        super().__init__(identity)
        if not radius > 0:
            raise ValueError(f"Sphere radius must be positive, got {radius}.")
        self.center = center
        self.radius = radius

    @property
    def position(self) -> Vector:
        return self.center

    def distance(self, ray: Ray) -> NDArray[np.float64]:
        direction = ray.direction()
        hyp = self.center - ray.origin
        hyp_sq = hyp.dot(hyp)
        top = direction.dot(hyp)

        # origin at the center gives cos_sq 0, so the near root sits one radius behind it
        with np.errstate(divide='ignore', invalid='ignore'):
            cos_sq = np.where(hyp_sq > 0, (top * top) / (direction.dot(direction) * hyp_sq), 0.0)
        adj_sq = cos_sq * hyp_sq
        opp_sq = hyp_sq - adj_sq

        rad_sq = self.radius * self.radius

        # adjacent leg is negative when the center is behind the origin
        adj = np.copysign(np.sqrt(adj_sq), top)
        h = adj - np.sqrt(np.maximum(rad_sq - opp_sq, 0.0))

        # near root behind the origin: the ray points away or starts inside the sphere
        pred = (opp_sq <= rad_sq) & (h >= 0)
        return np.where(pred, h, INFINITE)

    def compute_outward_normal(self, intersection_point: Vector) -> Vector:
        return (intersection_point - self.center).norm()

    def __repr__(self):
        return f"Sphere(center={self.center!r}, radius={self.radius!r}, identity={self.identity!r})"
