import unittest
import numpy as np
from ray import *
from materials import Material
from SceneDef import DefaultScene
from vecmath import normalize, vec

def assert_direction_matches(v, w):
    np.testing.assert_almost_equal(normalize(v), normalize(w))


def far_floor():
    # a board no test ray can reach
    return Checkerboard(center=vec([0, -1e6, 0]))


class TestSphereIntersect(unittest.TestCase):

    def confirm_hit(self, sphere, ray):
        # make sure hit is self-consistent, then return it
        hit = sphere.intersect(ray)
        self.assertLess(hit.t, np.inf)
        np.testing.assert_almost_equal(ray.origin + hit.t * ray.direction, hit.point)
        np.testing.assert_almost_equal(normalize(hit.point - sphere.center), hit.normal)
        self.assertAlmostEqual(np.linalg.norm(hit.point - sphere.center), sphere.radius)
        self.assertIs(hit.material, sphere.material)
        return hit

    def test_unitsphere_hits(self):
        unit_sphere = Sphere(vec([0,0,0]), 1.0, None)
        # dead center hit: distance to center minus radius
        hit = self.confirm_hit(unit_sphere, Ray(vec([2.0,0.0,0.0]), vec([-1.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 1.0)
        # off center hit
        hit = self.confirm_hit(unit_sphere, Ray(vec([1.0,0.5,0.0]), vec([-1.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 1 - np.sin(np.pi/3))
        # center hit from off axis
        hit = self.confirm_hit(unit_sphere, Ray(vec([2.0,3.0,4.0]), normalize(vec([-2.0,-3.0,-4.0]))))
        self.assertAlmostEqual(hit.t, np.sqrt(29) - 1)

    def test_unitsphere_misses(self):
        unit_sphere = Sphere(vec([0,0,0]), 1.0, None)
        # on axis miss
        hit = unit_sphere.intersect(Ray(vec([2.0,3.0,0.0]), vec([-1.0,0.0,0.0])))
        self.assertEqual(hit.t, np.inf)
        # aimed away from the sphere: both roots negative
        hit = unit_sphere.intersect(Ray(vec([2.0,0.0,0.0]), vec([1.0,0.0,0.0])))
        self.assertIs(hit, no_hit)

    def test_origin_inside(self):
        unit_sphere = Sphere(vec([0,0,0]), 1.0, None)
        # near root is behind the origin, far root is used
        hit = self.confirm_hit(unit_sphere, Ray(vec([0.0,0.0,0.0]), vec([1.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 1.0)
        np.testing.assert_almost_equal(hit.normal, vec([1,0,0]))

    def test_nonunit_hits(self):
        # all the same as the first case, but scaled by 3 and shifted by (-1, -5, -7)
        sphere = Sphere(vec([-1,-5,-7]), 3.0, None)
        hit = self.confirm_hit(sphere, Ray(vec([5.0,-5.0,-7.0]), vec([-1.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 3.0)
        hit = self.confirm_hit(sphere, Ray(vec([2.0,-3.5,-7.0]), vec([-1.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 3 * (1 - np.sin(np.pi/3)))


class TestCheckerboard(unittest.TestCase):

    def test_tile_colors(self):
        board = Checkerboard()
        # floor((0.5 + 10) * 1.5) = 15 in x, 15 in z: same parity
        mat = board.material_at(vec([0.5, 0, 0.5]))
        np.testing.assert_array_equal(mat.diffuse_colour, vec([1, 0, 0]))
        # 15 in x, floor(9.5 * 1.5) = 14 in z: different parity
        mat = board.material_at(vec([0.5, 0, -0.5]))
        np.testing.assert_array_equal(mat.diffuse_colour, vec([0, 0, 1]))
        self.assertEqual(mat.specular_exponent, 20.)
        np.testing.assert_array_equal(mat.albedo, vec([0.1, 0.1, 0.1]))

    def test_hit(self):
        board = Checkerboard()
        target = vec([0.5, -10, -20.5])
        ray = Ray(vec([0,0,0]), normalize(target))
        hit = board.intersect(ray)
        self.assertAlmostEqual(hit.t, np.linalg.norm(target))
        np.testing.assert_almost_equal(hit.point, target)
        np.testing.assert_array_equal(hit.normal, vec([0, 1, 0]))
        np.testing.assert_array_equal(hit.material.diffuse_colour, vec([0, 0, 1]))

    def test_misses(self):
        board = Checkerboard()
        # beyond the far edge
        self.assertIs(board.intersect(Ray(vec([0,0,0]), normalize(vec([0, -10, -35])))), no_hit)
        # pointing away from the plane
        self.assertIs(board.intersect(Ray(vec([0,0,0]), normalize(vec([0, 1, -20])))), no_hit)
        # nearly parallel
        self.assertIs(board.intersect(Ray(vec([0,-10.5,-20]), normalize(vec([1, 1e-4, 0])))), no_hit)
        # something nearer already found
        self.assertIs(board.intersect(Ray(vec([0,0,0]), normalize(vec([0, -10, -20]))), t_max=5.0), no_hit)

    def test_fresh_material_per_hit(self):
        board = Checkerboard()
        ray = Ray(vec([0,0,0]), normalize(vec([0.5, -10, -20.5])))
        self.assertIsNot(board.intersect(ray).material, board.intersect(ray).material)


class TestScene(unittest.TestCase):

    def test_nearest_sphere(self):
        near = Material(vec([1,0,0]))
        far = Material(vec([0,1,0]))
        scene = Scene([
            Sphere(vec([0,0,-10]), 1.0, far),
            Sphere(vec([0,0,-5]), 1.0, near),
        ])
        hit = scene.intersect(Ray(vec([0,0,0]), vec([0,0,-1])))
        self.assertAlmostEqual(hit.t, 4.0)
        self.assertIs(hit.material, near)

    def test_overlapping_spheres(self):
        a = Material(vec([1,0,0]))
        b = Material(vec([0,1,0]))
        scene = Scene([
            Sphere(vec([0,0,-6]), 2.0, b),
            Sphere(vec([0,0,-5]), 2.0, a),
        ])
        hit = scene.intersect(Ray(vec([0,0,0]), vec([0,0,-1])))
        self.assertAlmostEqual(hit.t, 3.0)
        self.assertIs(hit.material, a)

    def test_floor_and_spheres(self):
        target = vec([0.5, -10, -20.5])
        direction = normalize(target)
        # sphere in front of the board wins
        blocker = Material(vec([1,1,1]))
        scene = Scene([Sphere(0.5 * target, 1.0, blocker)])
        hit = scene.intersect(Ray(vec([0,0,0]), direction))
        self.assertIs(hit.material, blocker)
        # board in front of the sphere wins
        scene = Scene([Sphere(2.0 * target, 1.0, blocker)])
        hit = scene.intersect(Ray(vec([0,0,0]), direction))
        np.testing.assert_almost_equal(hit.point, target)
        np.testing.assert_array_equal(hit.normal, vec([0, 1, 0]))

    def test_empty(self):
        scene = Scene([], floor=far_floor())
        self.assertIs(scene.intersect(Ray(vec([0,0,0]), vec([0,0,-1]))), no_hit)


class TestCamera(unittest.TestCase):

    def test_default_camera(self):
        # A camera located at the origin facing the -z direction
        cam = Camera(vfov=90)
        # Center ray is straight down the axis
        ray = cam.generate_ray(1, 1, 3, 3)
        np.testing.assert_almost_equal(ray.origin, vec([0,0,0]))
        assert_direction_matches(ray.direction, vec([0,0,-1]))
        # Row 0 is the top of the image
        ray = cam.generate_ray(0, 0, 2, 2)
        assert_direction_matches(ray.direction, vec([-0.5, 0.5, -1]))
        ray = cam.generate_ray(1, 1, 2, 2)
        assert_direction_matches(ray.direction, vec([0.5, -0.5, -1]))
        self.assertAlmostEqual(np.linalg.norm(ray.direction), 1.0)

    def test_pixel_mapping(self):
        cam = Camera(vfov=60)
        nx, ny = 1024, 768
        for (i, j) in [(0, 0), (1023, 0), (512, 384), (17, 700)]:
            ray = cam.generate_ray(i, j, nx, ny)
            expected = vec([i + 0.5 - nx/2, -(j + 0.5) + ny/2, -ny / (2 * np.tan(np.pi/6))])
            np.testing.assert_almost_equal(ray.direction, normalize(expected))

    def test_square_frame(self):
        # A camera with a frame where up is equal to v
        cam = Camera(eye=vec([1,2,2]), target=vec([1,4,2]), up=vec([0,0,1]), vfov=90)
        # Center ray is straight down the y axis
        ray = cam.generate_ray(1, 1, 3, 3)
        np.testing.assert_almost_equal(ray.origin, vec([1,2,2]))
        assert_direction_matches(ray.direction, vec([0,1,0]))

    def test_arbitrary_frame(self):
        # A camera that lines up with nothing in particular
        eye = vec([3,4,5])
        target = vec([6,7,8])
        up = vec([1,2,3])
        cam = Camera(eye=eye, target=target, up=up, vfov=47)
        # Center ray points towards target
        ray = cam.generate_ray(2, 2, 5, 5)
        np.testing.assert_almost_equal(ray.origin, eye)
        assert_direction_matches(ray.direction, target - eye)


class TestPointLight(unittest.TestCase):

    def shading_test(self, p, n, d, l, r, I, material, scene):
        # shading at p with normal n, ray direction d and light direction l
        # r is distance to light, I is intensity
        t = 1.3        # arbitrary value
        d = normalize(d)
        ray = Ray(p - t*d, d)  # ray consistent with hit
        hit = Hit(t, p, n, material)
        light = PointLight(p + r * normalize(l), I)
        return light.illuminate(ray, hit, scene)

    def test_diffuse(self):
        mat = Material(vec([0.2,0.4,0.6]), 0.)
        # light directly overhead, unit distance and intensity
        diffuse, _ = self.shading_test(
            vec([0,0,0]), vec([0,1,0]), vec([1,-1,0]),
            vec([0,1,0]), 1, 1.0, mat, Scene([], floor=far_floor()))
        self.assertAlmostEqual(diffuse, 1.0)
        # light at 60 degrees, intensity 2
        diffuse, _ = self.shading_test(
            vec([0,0,0]), vec([0,1,0]), vec([1,-1,0]),
            vec([0,1,np.sqrt(3)]), 5, 2.0, mat, Scene([], floor=far_floor()))
        self.assertAlmostEqual(diffuse, 1.0)
        # light below the surface
        diffuse, _ = self.shading_test(
            vec([0,0,0]), vec([0,1,0]), vec([1,-1,0]),
            vec([0,-1,1]), 5, 2.0, mat, Scene([], floor=far_floor()))
        self.assertEqual(diffuse, 0.0)

    def test_specular(self):
        # looking straight down the mirror direction of the light
        _, specular = self.shading_test(
            vec([0,0,0]), vec([0,1,0]), vec([0,-1,0]),
            vec([0,1,0]), 1, 1.5, Material(vec([1,1,1]), 1425.), Scene([], floor=far_floor()))
        self.assertAlmostEqual(specular, 1.5)
        # 45 degrees off the mirror direction, exponent 2
        _, specular = self.shading_test(
            vec([0,0,0]), vec([0,1,0]), vec([1,-1,0]),
            vec([0,1,0]), 1, 1.0, Material(vec([1,1,1]), 2.), Scene([], floor=far_floor()))
        self.assertAlmostEqual(specular, 0.5)

    def test_shadow(self):
        mat = Material(vec([0.2,0.4,0.6]), 10.)
        occluder = Sphere(vec([0,5,0]), 1.0, mat)
        shadowed = self.shading_test(
            vec([0,0,0]), vec([0,1,0]), vec([0,-1,0]),
            vec([0,1,0]), 10, 1.0, mat, Scene([occluder], floor=far_floor()))
        self.assertEqual(shadowed, (0.0, 0.0))
        # a sphere beyond the light does not cast a shadow
        beyond = Sphere(vec([0,20,0]), 1.0, mat)
        diffuse, specular = self.shading_test(
            vec([0,0,0]), vec([0,1,0]), vec([0,-1,0]),
            vec([0,1,0]), 10, 1.0, mat, Scene([beyond], floor=far_floor()))
        self.assertAlmostEqual(diffuse, 1.0)
        self.assertAlmostEqual(specular, 1.0)

    def test_shadow_origin_side(self):
        mat = Material(vec([1,1,1]), 10.)
        # a sphere that dips less than EPSILON below the surface
        resting = Sphere(vec([0,1,0]), 1.0 + EPSILON / 2, mat)
        # light below: the shadow ray starts under the surface and clears the sphere
        diffuse, specular = self.shading_test(
            vec([0,0,0]), vec([0,1,0]), vec([0,1,0]),
            vec([0,-1,0]), 10, 1.0, mat, Scene([resting], floor=far_floor()))
        self.assertEqual(diffuse, 0.0)
        self.assertAlmostEqual(specular, 1.0)
        # light above: the shadow ray starts inside the sphere and is blocked
        shadowed = self.shading_test(
            vec([0,0,0]), vec([0,1,0]), vec([0,-1,0]),
            vec([0,1,0]), 10, 1.0, mat, Scene([resting], floor=far_floor()))
        self.assertEqual(shadowed, (0.0, 0.0))

    def test_shadow_origin_grazing_light(self):
        mat = Material(vec([1,1,1]), 10.)
        # the light lies in the tangent plane; the origin still moves along +n
        hanging = Sphere(vec([0,-1,0]), 1.0 + EPSILON / 2, mat)
        diffuse, specular = self.shading_test(
            vec([0,0,0]), vec([0,1,0]), vec([1,0,0]),
            vec([1,0,0]), 10, 1.0, mat, Scene([hanging], floor=far_floor()))
        self.assertEqual(diffuse, 0.0)
        self.assertAlmostEqual(specular, 1.0)


class TestShade(unittest.TestCase):

    def test_local_and_background_reflection(self):
        mat = Material(vec([0.2,0.4,0.6]), 10., vec([1.0, 0.5, 0.5]))
        scene = Scene([Sphere(vec([0,0,-5]), 1.0, mat)])
        lights = [PointLight(vec([0,0,10]), 1.0)]
        color = cast_ray(Ray(vec([0,0,0]), vec([0,0,-1])), scene, lights, 0)
        # diffuse 1 + specular 1 * 0.5 + reflection ray misses: background * 0.5
        np.testing.assert_allclose(color, vec([0.2,0.4,0.6]) + 0.5 + 0.5 * BACKGROUND)

    def test_miss(self):
        scene = Scene([Sphere(vec([0,0,-5]), 1.0, Material(vec([1,1,1])))])
        self.assertIsNone(cast_ray(Ray(vec([0,0,0]), vec([0,0,1])), scene, [], 0))

    def test_depth_cutoff(self):
        mirror = Material(vec([1,1,1]), 0., vec([0.0, 0.0, 0.5]))
        scene = Scene([
            Sphere(vec([0,0,-5]), 1.0, mirror),
            Sphere(vec([0,0,5]), 1.0, mirror),
        ])
        ray = Ray(vec([0,0,0]), vec([0,0,-1]))
        # primary: one bounce to the second mirror, whose own bounce is cut off
        np.testing.assert_allclose(cast_ray(ray, scene, [], 0), 0.25 * BACKGROUND)
        # first reflection level: its bounce is already cut off
        np.testing.assert_allclose(cast_ray(ray, scene, [], 1), 0.5 * BACKGROUND)
        self.assertIsNone(cast_ray(ray, scene, [], 2))

    def test_reflection_from_inside(self):
        # the reflected ray leaves on the inner side of the surface
        mirror = Material(vec([1,1,1]), 0., vec([0.0, 0.0, 0.5]))
        black = Material(vec([1,1,1]), 0., vec([0.0, 0.0, 0.0]))
        scene = Scene([
            Sphere(vec([0,0,0]), 1.0, mirror),
            Sphere(vec([0,0,0.5]), 0.1, black),
        ], floor=far_floor())
        color = cast_ray(Ray(vec([0,0,0]), vec([0,0,-1])), scene, [], 0)
        np.testing.assert_allclose(color, vec([0, 0, 0]))


class TestRender(unittest.TestCase):

    def test_gradient(self):
        img = background_gradient(1024, 768)
        self.assertEqual(img.shape, (768, 1024, 3))
        for (j, i) in [(0, 0), (0, 1023), (767, 0), (400, 300)]:
            self.assertEqual(tuple(img[j, i]), (j / 768, i / 1024, 1 - i / 1024))

    def test_empty_scene_keeps_gradient(self):
        scene = Scene([], floor=far_floor())
        img = render_image(Camera(), scene, [], 8, 6, verbose=False)
        np.testing.assert_array_equal(img, background_gradient(8, 6))

    def test_default_scene_missed_pixel(self):
        example = DefaultScene()
        # top right corner sees only sky
        ray = example.camera.generate_ray(1023, 0, 1024, 768)
        self.assertIsNone(cast_ray(ray, example.scene, example.lights, 0))
        # image center sees the near mirror sphere
        ray = example.camera.generate_ray(512, 384, 1024, 768)
        self.assertIsNotNone(cast_ray(ray, example.scene, example.lights, 0))

    def test_default_scene_small(self):
        example = DefaultScene()
        self.assertEqual(len(example.scene.spheres), 5)
        self.assertEqual(len(example.lights), 3)
        img = render_image(example.camera, example.scene, example.lights, 16, 12, verbose=False)
        self.assertEqual(img.shape, (12, 16, 3))
        self.assertTrue(np.all(np.isfinite(img)))
        # some pixels are shaded, the top right one is not
        self.assertTrue(np.any(img != background_gradient(16, 12)))
        np.testing.assert_array_equal(img[0, 15], background_gradient(16, 12)[0, 15])


if __name__ == '__main__':
    unittest.main()
