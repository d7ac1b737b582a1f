from ..math.vector import Vector
from ..element.element import Sphere
from ..source.source import Light
from ..animation.orbit import LightOrbit
from .scene import Scene

ORBIT_RADIUS = 25000.0
ORBIT_CYCLE_LENGTH = 60


def default_scene(**kwargs) -> Scene:
    '''
    Two spheres straight ahead of the origin, the nearer one raised slightly, lit from just above the viewer.
    Keyword arguments are passed to Scene.
    '''
    scene = Scene(**kwargs)

    scene += Sphere(Vector(0, 0, 10000), 125, identity=1)
    scene += Sphere(Vector(0, 100, 5000), 125, identity=2)
    scene += Light(4, Vector(0, 200, 0))

    return scene


def default_orbits():
    # light 3 is not part of the default scene, its orbit is inert until one is added under that id
    return [LightOrbit(light_id, ORBIT_RADIUS, ORBIT_CYCLE_LENGTH) for light_id in (3, 4)]
