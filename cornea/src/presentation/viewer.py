from typing import Optional
import numpy as np
from matplotlib import pyplot as plt
from matplotlib.animation import FuncAnimation

from ..math.vector import Vector
from ..scene.commands import MoveCamera

import logging
logger = logging.getLogger(__name__)

DEFAULT_STEP = 10.0
DEFAULT_FPS = 60

KEY_DIRECTIONS = {
    'left': Vector(-1, 0, 0),
    'right': Vector(1, 0, 0),
    'up': Vector(0, 1, 0),
    'down': Vector(0, -1, 0),
}

QUIT_KEYS = ('q', 'escape')


def command_for_key(key, step=DEFAULT_STEP) -> Optional[MoveCamera]:
    direction = KEY_DIRECTIONS.get(key)
    if direction is None:
        return None
    return MoveCamera(direction * step)


class Viewer:
    '''
    Interactive window: shows one frame per animation tick, arrow keys move the camera, q or escape quits.
    '''

    def __init__(self, frame_loop, step=DEFAULT_STEP, fps=DEFAULT_FPS):
        self.frame_loop = frame_loop
        self.step = step
        self.interval = 1000 / fps
        self.animation = None

        self.figure, self.axes = plt.subplots()
        if self.figure.canvas.manager is not None:
            self.figure.canvas.manager.set_window_title('cornea')
        self.axes.set_axis_off()
        blank = np.zeros((frame_loop.height, frame_loop.width, 3), dtype=np.uint8)
        self.image = self.axes.imshow(blank)
        self.figure.canvas.mpl_connect('key_press_event', self.on_key_press)

    def on_key_press(self, event):
        if event.key in QUIT_KEYS:
            logger.debug("quit requested")
            plt.close(self.figure)
            return

        command = command_for_key(event.key, self.step)
        if command is not None:
            self.frame_loop.submit(command)

    def update(self, _frame):
        self.image.set_data(self.frame_loop.advance())
        return (self.image,)

    def show(self):
        self.animation = FuncAnimation(self.figure, self.update, interval=self.interval, blit=True, cache_frame_data=False)
        plt.show(block=True)
