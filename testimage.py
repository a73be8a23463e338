import copy
import os
import pickle
import tempfile
import unittest

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from PIL import Image as PIM

import cli
import vecmath
from ImLite import Image
from materials import Material
from ray import Camera, Scene
from geometry import Checkerboard
from vecmath import vec


class TestVecMath(unittest.TestCase):

    def test_normalize(self):
        for v in [vec([3, 4, 0]), vec([-1e-3, 2e-3, 5e-4]), vec([1e5, -2e5, 7])]:
            self.assertAlmostEqual(vecmath.norm(vecmath.normalize(v)), 1.0)

    def test_dot_is_scalar(self):
        d = vecmath.dot(vec([1, 2, 3]), vec([4, 5, 6]))
        self.assertIsInstance(d, float)
        self.assertEqual(d, 32.0)

    def test_reflect(self):
        n = vecmath.normalize(vec([1, 2, -1]))
        for v in [vec([0.3, -2, 5]), vec([1, 0, 0]), vec([-4, 1, 1])]:
            r = vecmath.reflect(v, n)
            self.assertAlmostEqual(vecmath.norm(r), vecmath.norm(v))
            self.assertAlmostEqual(vecmath.dot(r, n), -vecmath.dot(v, n))

    def test_rem_and_signum(self):
        np.testing.assert_allclose(vecmath.rem(vec([5.5, -5.5, 3.0]), 2.0), vec([1.5, -1.5, 1.0]))
        self.assertEqual(vecmath.signum(0.0), 1.0)
        self.assertEqual(vecmath.signum(-0.0), -1.0)
        self.assertEqual(vecmath.signum(-3.0), -1.0)


class TestMaterial(unittest.TestCase):

    def test_immutable(self):
        mat = Material(vec([0.4, 0.4, 0.3]), 50., vec([0.6, 0.3, 0.0]))
        with self.assertRaises(AttributeError):
            mat.specular_exponent = 1.
        with self.assertRaises(ValueError):
            mat.albedo[0] = 1.
        self.assertEqual(mat, Material(vec([0.4, 0.4, 0.3]), 50., vec([0.6, 0.3, 0.0])))

    def test_copies_inputs(self):
        colour = vec([0.1, 0.2, 0.3])
        mat = Material(colour)
        colour[0] = 9.
        self.assertEqual(mat.diffuse_colour[0], 0.1)

    def test_copy_and_pickle(self):
        mat = Material(vec([0.4, 0.4, 0.3]), 50., vec([0.6, 0.3, 0.0]))
        for dup in [copy.copy(mat), copy.deepcopy(mat), pickle.loads(pickle.dumps(mat))]:
            self.assertEqual(dup, mat)
            with self.assertRaises(AttributeError):
                dup.specular_exponent = 1.
            with self.assertRaises(ValueError):
                dup.diffuse_colour[0] = 1.


class TestImage(unittest.TestCase):

    def test_tone_mapping(self):
        im = Image(pixels=np.array([[[2.0, 0.5, 0.5], [0.2, 0.4, 0.6]]]))
        np.testing.assert_allclose(im.tone_mapped().pixels[0, 0], [1.0, 0.25, 0.25])
        # pixels within range are untouched
        np.testing.assert_allclose(im.tone_mapped().pixels[0, 1], [0.2, 0.4, 0.6])
        np.testing.assert_array_equal(im.ipixels[0, 0], [255, 64, 64])

    def test_clamp(self):
        im = Image(pixels=np.array([[[-0.5, 0.0, 1.0]]]))
        np.testing.assert_array_equal(im.ipixels[0, 0], [0, 0, 255])

    def test_ppm_full_size(self):
        im = Image(pixels=np.zeros((768, 1024, 3)))
        data = im.ppmBytes()
        header = b"P6\n1024 768\n255\n"
        self.assertTrue(data.startswith(header))
        self.assertEqual(len(data) - len(header), 1024 * 768 * 3)

    def test_ppm_pixel_order(self):
        pix = np.zeros((2, 3, 3))
        pix[0, 2] = [1.0, 0.0, 0.0]
        pix[1, 0] = [0.0, 0.0, 1.0]
        data = Image(pixels=pix).ppmBytes()
        body = data[len(b"P6\n3 2\n255\n"):]
        self.assertEqual(body[6:9], bytes([255, 0, 0]))
        self.assertEqual(body[9:12], bytes([0, 0, 255]))

    def test_write_files(self):
        im = Image(pixels=np.random.rand(4, 5, 3))
        with tempfile.TemporaryDirectory() as tmp:
            ppm = os.path.join(tmp, "out.ppm")
            im.writeToFile(ppm)
            with open(ppm, "rb") as f:
                self.assertEqual(f.read(), im.ppmBytes())
            png = os.path.join(tmp, "out.png")
            im.writeToFile(png)
            np.testing.assert_array_equal(np.array(PIM.open(png)), im.ipixels)

    def test_show(self):
        im = Image(pixels=np.random.rand(4, 5, 3))
        axis = im.show(title="preview")
        self.assertEqual(axis.images[0].get_array().shape, (4, 5, 3))
        plt.close('all')


class TestCli(unittest.TestCase):

    def empty_scene(self):
        return Camera(), Scene([], floor=Checkerboard(center=vec([0, -1e6, 0]))), []

    def test_render(self):
        camera, scene, lights = self.empty_scene()
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "out.ppm")
            cli.render(camera, scene, lights, output_path=path, output_shape=[3, 4], verbose=False)
            with open(path, "rb") as f:
                data = f.read()
        self.assertTrue(data.startswith(b"P6\n4 3\n255\n"))
        self.assertEqual(len(data), len(b"P6\n4 3\n255\n") + 4 * 3 * 3)

    def test_unwritable_path_aborts(self):
        camera, scene, lights = self.empty_scene()
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "missing", "out.ppm")
            with self.assertRaises(SystemExit) as cm:
                cli.render(camera, scene, lights, output_path=path, output_shape=[2, 2], verbose=False)
        self.assertIn(path, str(cm.exception.code))

    def test_unknown_extension_aborts(self):
        camera, scene, lights = self.empty_scene()
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "out")
            with self.assertRaises(SystemExit) as cm:
                cli.render(camera, scene, lights, output_path=path, output_shape=[2, 2], verbose=False)
        self.assertIn(path, str(cm.exception.code))


if __name__ == '__main__':
    unittest.main()
