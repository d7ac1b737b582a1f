import numpy as np

from .vector import Vector, DegenerateVectorError


class Ray:
    def __init__(self, origin: Vector, aim: Vector):
        '''
        Parameters:
            origin (Vector): Point the ray starts from
            aim (Vector): Second point on the ray. The direction is `aim - origin`, it is never normalized

        Either point may hold arrays, making this a batch of rays.
        '''
        direction = aim - origin
        if np.any(direction.dot(direction) == 0):
            raise DegenerateVectorError(f"Ray origin and aim coincide: {origin!r}, {aim!r}.")
        self.origin = origin
        self.aim = aim

    def direction(self) -> Vector:
        return self.aim - self.origin

    def shape(self):
        return np.broadcast(*self.origin.components(), *self.aim.components()).shape

    def flatten(self):
        '''
        The same rays as a one-dimensional batch, each component broadcast to its own array.
        '''
        shape = self.shape()
        size = int(np.prod(shape))

        def spread(v):
            return Vector(*(np.broadcast_to(c, shape).reshape(size).astype(np.float64) for c in v.components()))

        return Ray(spread(self.origin), spread(self.aim))

    def extract(self, cond):
        return Ray(self.origin.extract(cond), self.aim.extract(cond))

    def __repr__(self):
        return f"Ray(origin={self.origin!r}, aim={self.aim!r})"
