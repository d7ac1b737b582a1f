import numpy as np
import numbers

from .tools import extract

APPROX_EPSILON = 1e-5


class DegenerateVectorError(ValueError):
    '''Raised when a zero-length Vector is used where a direction is required.'''
    pass


class Vector():
    '''
    Three components, each either a number or an ndarray. A Vector of arrays holds one vector per element,
    so a whole batch of rays goes through the same arithmetic as a single one.
    '''
    __slots__ = ('x', 'y', 'z')

    # lets ndarray * Vector fall through to Vector.__rmul__
    # see: https://numpy.org/doc/stable/user/basics.subclassing.html
    __array_ufunc__ = None

    def __init__(self, x, y, z):
        (self.x, self.y, self.z) = (x, y, z)

    def __mul__(self, other):
        if isinstance(other, (np.ndarray, numbers.Number)):
            return Vector(self.x * other, self.y * other, self.z * other)
        else:
            raise TypeError("Vector multiplication not compatible with type: %s" % type(other))

    def __rmul__(self, other):
        if isinstance(other, (np.ndarray, numbers.Number)):
            return self.__mul__(other)
        else:
            raise TypeError("Vector multiplication not compatible with type: %s" % type(other))

    def __truediv__(self, other):
        if isinstance(other, (np.ndarray, numbers.Number)):
            return Vector(self.x / other, self.y / other, self.z / other)
        else:
            raise TypeError("Vector division not compatible with type: %s" % type(other))

    def __add__(self, other):
        if isinstance(other, Vector):
            return Vector(self.x + other.x, self.y + other.y, self.z + other.z)
        else:
            raise TypeError("Vector addition not compatible with type: %s" % type(other))

    def __sub__(self, other):
        if isinstance(other, Vector):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        else:
            raise TypeError("Vector subtraction not compatible with type: %s" % type(other))

    def __neg__(self):
        return Vector(-self.x, -self.y, -self.z)

    def __eq__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return all(np.array_equal(a, b) for a, b in zip(self.components(), other.components()))

    def __hash__(self):
        return hash(self.components())

    def __repr__(self):
        return f"Vector({self.x!r}, {self.y!r}, {self.z!r})"

    def dot(self, other):
        return (self.x * other.x) + (self.y * other.y) + (self.z * other.z)

    def magnitude(self):
        return np.sqrt(self.dot(self))

    def norm(self):
        '''
        Unit vector in the direction of self.

        Raises DegenerateVectorError if self, or any vector in the batch, has zero length.
        '''
        mag = self.magnitude()
        if np.any(mag == 0):
            raise DegenerateVectorError("Cannot normalize a zero-length Vector.")
        return self * (1.0 / mag)

    def cos_between(self, other):
        '''
        Cosine of the angle between self and other. Neither vector needs to be normalized.
        '''
        mags = self.magnitude() * other.magnitude()
        if np.any(mags == 0):
            raise DegenerateVectorError("Angle with a zero-length Vector is undefined.")
        return self.dot(other) / mags

    def reflect(self, normal):
        '''
        Mirror self about the plane with unit normal `normal`: r = d - 2(d.n)n
        '''
        return self - normal * (2 * self.dot(normal))

    def approx(self, other, epsilon=APPROX_EPSILON):
        return ((np.abs(self.x - other.x) < epsilon)
                & (np.abs(self.y - other.y) < epsilon)
                & (np.abs(self.z - other.z) < epsilon))

    def components(self):
        return (self.x, self.y, self.z)

    def shape(self):
        return np.broadcast(self.x, self.y, self.z).shape

    def extract(self, cond):
        return Vector(
            extract(cond, self.x), extract(cond, self.y), extract(cond, self.z)
        )
