from abc import ABC, abstractmethod

from ..math.vector import Vector

import logging
logger = logging.getLogger(__name__)


class Command(ABC):
    '''
    A mutation of scene or camera state, queued by input or animation and applied between frames.
    '''

    @abstractmethod
    def apply(self, scene, camera):
        pass


class MoveCamera(Command):
    def __init__(self, delta: Vector):
        self.delta = delta

    def apply(self, scene, camera):
        camera.move(self.delta)
        logger.debug(f"camera moved by {self.delta!r} to {camera.position!r}")

    def __repr__(self):
        return f"MoveCamera(delta={self.delta!r})"


class SetLightPosition(Command):
    def __init__(self, light_id: int, position: Vector):
        self.light_id = light_id
        self.position = position

    def apply(self, scene, camera):
        scene.add_light(self.light_id, self.position)
        logger.debug(f"light {self.light_id} set to {self.position!r}")

    def __repr__(self):
        return f"SetLightPosition(light_id={self.light_id!r}, position={self.position!r})"
