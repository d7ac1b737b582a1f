from collections import deque

from ..detector.renderer import render
from ..scene.commands import Command

import logging
logger = logging.getLogger(__name__)


class FrameLoop:
    '''
    Alternates a mutation phase and a render phase.

    Commands submitted at any time are held until the next `advance`, which applies the animation
    updates for the current frame and then every queued command before the pixel sweep starts.
    '''

    def __init__(self, scene, camera, width: int, height: int, orbits=()):
        self.scene = scene
        self.camera = camera
        self.width = width
        self.height = height
        self.orbits = list(orbits)
        self.frame = 0
        self.pending: deque[Command] = deque()

    def submit(self, command: Command):
        self.pending.append(command)

    def _animation_commands(self):
        for orbit in self.orbits:
            current = self.scene.get_light(orbit.light_id)
            # orbits only move lights that exist
            if current is not None:
                yield orbit.command(self.frame, current)

    def apply_pending(self):
        for command in self._animation_commands():
            command.apply(self.scene, self.camera)

        while self.pending:
            self.pending.popleft().apply(self.scene, self.camera)

    def advance(self):
        self.apply_pending()
        buffer = render(self.scene, self.camera, self.width, self.height)
        logger.debug(f"frame {self.frame} complete")
        self.frame += 1
        return buffer
