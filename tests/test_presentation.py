import io
import os
import tempfile
import unittest
from types import SimpleNamespace

import numpy as np
import matplotlib
matplotlib.use("Agg")
from matplotlib import pyplot as plt
from PIL import Image

from cornea.src.math.vector import Vector
from cornea.src.element.element import Sphere
from cornea.src.source.source import Light
from cornea.src.scene.scene import Scene
from cornea.src.scene.commands import MoveCamera
from cornea.src.detector.detector import OrthographicCamera
from cornea.src.detector.renderer import render
from cornea.src.animation.frame_loop import FrameLoop
from cornea.src.presentation.ppm import encode_ppm, write_ppm, save_image
from cornea.src.presentation.viewer import Viewer, command_for_key


def small_frame():
    buffer = np.zeros((2, 3, 3), dtype=np.uint8)
    buffer[0, 0] = (255, 255, 255)
    buffer[1, 2] = (7, 7, 7)
    return buffer


class TestPPM(unittest.TestCase):

    def test_header_and_layout(self):
        data = encode_ppm(small_frame())
        header = b"P6 3 2 255\n"
        self.assertTrue(data.startswith(header))
        pixels = data[len(header):]
        self.assertEqual(len(pixels), 3 * 2 * 3)
        # row-major, top row first
        self.assertEqual(pixels[:3], b"\xff\xff\xff")
        self.assertEqual(pixels[-3:], b"\x07\x07\x07")

    def test_write_to_file_object(self):
        out = io.BytesIO()
        write_ppm(out, small_frame())
        self.assertEqual(out.getvalue(), encode_ppm(small_frame()))

    def test_write_to_path_is_readable(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "frame.ppm")
            write_ppm(path, small_frame())
            with Image.open(path) as image:
                np.testing.assert_array_equal(np.asarray(image.convert("RGB")), small_frame())

    def test_write_failure_propagates(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(OSError):
                write_ppm(os.path.join(tmp, "missing", "frame.ppm"), small_frame())

    def test_rejects_bad_buffers(self):
        with self.assertRaises(ValueError):
            encode_ppm(np.zeros((2, 3), dtype=np.uint8))
        with self.assertRaises(TypeError):
            encode_ppm(np.zeros((2, 3, 3), dtype=np.float64))

    def test_save_png(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "frame.png")
            save_image(path, small_frame())
            with Image.open(path) as image:
                np.testing.assert_array_equal(np.asarray(image), small_frame())


class TestKeyMapping(unittest.TestCase):

    def test_arrows(self):
        self.assertEqual(command_for_key('left', 10).delta, Vector(-10, 0, 0))
        self.assertEqual(command_for_key('right', 10).delta, Vector(10, 0, 0))
        self.assertEqual(command_for_key('up', 2.5).delta, Vector(0, 2.5, 0))
        self.assertEqual(command_for_key('down', 2.5).delta, Vector(0, -2.5, 0))

    def test_other_keys(self):
        self.assertIsNone(command_for_key('x'))
        self.assertIsNone(command_for_key(None))


class TestViewer(unittest.TestCase):

    def setUp(self):
        scene = Scene()
        scene += Sphere(Vector(0, 0, 10000), 125, identity=1)
        scene += Light(4, Vector(0, 200, 0))
        self.camera = OrthographicCamera()
        self.loop = FrameLoop(scene, self.camera, 8, 6)
        self.viewer = Viewer(self.loop, step=3)

    def tearDown(self):
        plt.close('all')

    def test_key_press_queues_camera_move(self):
        self.viewer.on_key_press(SimpleNamespace(key='right'))
        self.viewer.on_key_press(SimpleNamespace(key='shift'))
        self.assertEqual(len(self.loop.pending), 1)
        self.assertIsInstance(self.loop.pending[0], MoveCamera)

        self.viewer.update(0)
        self.assertEqual(self.camera.position, Vector(3, 0, 0))

    def test_update_shows_frame(self):
        (artist,) = self.viewer.update(0)
        expected = render(self.loop.scene, OrthographicCamera(), 8, 6)
        np.testing.assert_array_equal(np.asarray(artist.get_array()), expected)

    def test_quit_closes_figure(self):
        number = self.viewer.figure.number
        self.viewer.on_key_press(SimpleNamespace(key='q'))
        self.assertFalse(plt.fignum_exists(number))


if __name__ == '__main__':
    unittest.main()
