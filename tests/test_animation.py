import unittest
import numpy as np

from cornea.src.math.vector import Vector
from cornea.src.element.element import Sphere
from cornea.src.source.source import Light
from cornea.src.scene.scene import Scene
from cornea.src.scene.commands import MoveCamera, SetLightPosition
from cornea.src.scene.defaults import default_scene, default_orbits, ORBIT_RADIUS
from cornea.src.detector.detector import Camera, OrthographicCamera
from cornea.src.detector.renderer import render
from cornea.src.animation.orbit import LightOrbit
from cornea.src.animation.frame_loop import FrameLoop


class TestLightOrbit(unittest.TestCase):

    def test_full_cycle_returns_to_start(self):
        for orbit in [LightOrbit(4, 25000, 60), LightOrbit(1, 10, 7, sweep=2 * np.pi, phase=0)]:
            start = orbit.position(0, Vector(0, 200, 0))
            end = orbit.position(orbit.cycle_length, Vector(0, 200, 0))
            np.testing.assert_allclose(end.components(), start.components(), atol=1e-9)

    def test_positions(self):
        orbit = LightOrbit(1, 10, 4, sweep=2 * np.pi, phase=0)
        np.testing.assert_almost_equal(orbit.position(0, Vector(0, 3, 0)).components(), (0, 3, 10))
        np.testing.assert_almost_equal(orbit.position(1, Vector(0, 3, 0)).components(), (10, 3, 0))
        np.testing.assert_almost_equal(orbit.position(2, Vector(0, 3, 0)).components(), (0, 3, -10))

    def test_default_sweep(self):
        orbit = LightOrbit(4, 25000, 60)
        self.assertAlmostEqual(orbit.angle(0), np.pi - 0.05)
        self.assertAlmostEqual(orbit.angle(30), np.pi)
        position = orbit.position(30, Vector(0, 200, 0))
        np.testing.assert_almost_equal(position.components(), (0, 200, -25000), decimal=6)

    def test_command(self):
        command = LightOrbit(4, 10, 4, sweep=2 * np.pi, phase=0).command(0, Vector(0, 0, 0))
        self.assertIsInstance(command, SetLightPosition)
        self.assertEqual(command.light_id, 4)

    def test_cycle_length_must_be_positive(self):
        with self.assertRaises(ValueError):
            LightOrbit(4, 10, 0)


class TestCommands(unittest.TestCase):

    def test_move_camera(self):
        camera = Camera()
        MoveCamera(Vector(1, 2, 3)).apply(Scene(), camera)
        self.assertEqual(camera.position, Vector(1, 2, 3))

    def test_set_light_position_upserts(self):
        scene = Scene()
        SetLightPosition(9, Vector(1, 1, 1)).apply(scene, Camera())
        SetLightPosition(9, Vector(2, 2, 2)).apply(scene, Camera())
        self.assertEqual(scene.lights, {9: Vector(2, 2, 2)})


class TestFrameLoop(unittest.TestCase):

    def setUp(self):
        self.scene = Scene()
        self.scene += Sphere(Vector(0, 0, 10000), 125, identity=1)
        self.scene += Light(4, Vector(0, 200, 0))

    def test_commands_wait_for_next_frame(self):
        camera = OrthographicCamera()
        loop = FrameLoop(self.scene, camera, 8, 6)
        loop.submit(MoveCamera(Vector(5, 0, 0)))
        self.assertEqual(camera.position, Vector(0, 0, 0))

        frame = loop.advance()
        self.assertEqual(camera.position, Vector(5, 0, 0))
        self.assertEqual(loop.frame, 1)
        self.assertEqual(len(loop.pending), 0)
        np.testing.assert_array_equal(frame, render(self.scene, OrthographicCamera(Vector(5, 0, 0)), 8, 6))

    def test_orbits_move_existing_lights_only(self):
        loop = FrameLoop(self.scene, OrthographicCamera(), 4, 3, orbits=[LightOrbit(4, 100, 10), LightOrbit(3, 100, 10)])
        loop.advance()
        self.assertIsNone(self.scene.get_light(3))
        expected = LightOrbit(4, 100, 10).position(0, Vector(0, 200, 0))
        self.assertEqual(self.scene.get_light(4), expected)

    def test_orbit_cycle_restores_light(self):
        orbit = LightOrbit(4, 100, 5, sweep=2 * np.pi, phase=0)
        loop = FrameLoop(self.scene, OrthographicCamera(), 2, 2, orbits=[orbit])
        loop.advance()
        first = self.scene.get_light(4)
        for _ in range(orbit.cycle_length):
            loop.advance()
        np.testing.assert_allclose(self.scene.get_light(4).components(), first.components(), atol=1e-9)

    def test_default_scene_animation(self):
        scene = default_scene()
        loop = FrameLoop(scene, OrthographicCamera(), 16, 12, orbits=default_orbits())
        frame = loop.advance()
        self.assertEqual(frame.shape, (12, 16, 3))
        self.assertAlmostEqual(scene.get_light(4).magnitude(), np.hypot(ORBIT_RADIUS, 200))
        self.assertEqual(set(scene.lights), {4})


if __name__ == '__main__':
    unittest.main()
