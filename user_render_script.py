import argparse
import logging
import time

from cornea.src.math.vector import Vector
from cornea.src.scene.defaults import default_scene, default_orbits
from cornea.src.detector.detector import OrthographicCamera
from cornea.src.animation.frame_loop import FrameLoop
from cornea.src.presentation.ppm import write_ppm

WIDTH = 800
HEIGHT = 600

parser = argparse.ArgumentParser(description="Render the default sphere scene.")
parser.add_argument('--interactive', action='store_true', help="open a window instead of writing cornea.ppm")
args = parser.parse_args()

scene = default_scene(log_level=logging.INFO)
camera = OrthographicCamera(position=Vector(0, 0, 0))
frame_loop = FrameLoop(scene, camera, WIDTH, HEIGHT, orbits=default_orbits())

if args.interactive:
    from cornea.src.presentation.viewer import Viewer
    Viewer(frame_loop).show()
else:
    t = time.perf_counter()
    image = frame_loop.advance()
    print(f"runtime: {time.perf_counter() - t}")
    write_ppm("cornea.ppm", image)
