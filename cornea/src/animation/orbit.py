import numpy as np

from ..math.vector import Vector
from ..scene.commands import SetLightPosition


class LightOrbit:
    def __init__(self, light_id: int, radius: float, cycle_length: int, sweep: float = 0.1, phase: float = np.pi - 0.05):
        '''
        Moves a light around the y axis on a circle of `radius`, repeating every `cycle_length` frames.

        Parameters:
            light_id (int): Id of the light to move
            radius (float): Orbit radius in the xz plane
            cycle_length (int): Number of frames per cycle
            sweep (float): Angle covered by one cycle, in radians. Use 2*pi for a full circle
            phase (float): Angle at frame 0, in radians
        '''
        if cycle_length <= 0:
            raise ValueError(f"Orbit cycle length must be positive, got {cycle_length}.")
        self.light_id = light_id
        self.radius = radius
        self.cycle_length = cycle_length
        self.sweep = sweep
        self.phase = phase

    def angle(self, frame: int) -> float:
        return (frame % self.cycle_length) / self.cycle_length * self.sweep + self.phase

    def position(self, frame: int, current: Vector) -> Vector:
        '''
        Light position at `frame`. The height of `current` is kept.
        '''
        theta = self.angle(frame)
        return Vector(self.radius * np.sin(theta), current.y, self.radius * np.cos(theta))

    def command(self, frame: int, current: Vector) -> SetLightPosition:
        return SetLightPosition(self.light_id, self.position(frame, current))
