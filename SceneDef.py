import ray
from ImLite import Image
from materials import Material
from geometry import Sphere
from vecmath import vec

FOV = 60.0 # vertical field of view, degrees


class SceneDef(object):
    def __init__(self, camera, scene, lights):
        self.camera = camera;
        self.scene = scene;
        self.lights = lights;

    def render(self, output_path=None, output_shape=None, verbose=True):
        """Render the scene; output_shape is [height, width].

        Returns the Image when output_path is None, otherwise writes it there.
        """
        if(output_shape is None):
            output_shape=[768,1024];
        pix = ray.render_image(self.camera, self.scene, self.lights, output_shape[1], output_shape[0], verbose=verbose);
        im = Image(pixels=pix);
        if(output_path is None):
            return im;
        else:
            im.writeToFile(output_path);


def DefaultScene():
    grey = Material(vec([0.4, 0.4, 0.3]), 50., vec([0.6, 0.3, 0.0]))
    red = Material(vec([0.3, 0.1, 0.1]), 10., vec([0.9, 0.1, 0.0]))
    mirror = Material(vec([1.0, 1.0, 1.0]), 1425., vec([0.0, 10.0, 0.8]))

    scene = ray.Scene([
        Sphere(vec([-3, 0, -16]), 2., grey),
        Sphere(vec([-1, -1.5, -12]), 2., mirror),
        Sphere(vec([1.5, -0.5, -18]), 3., red),
        Sphere(vec([7, 5, -18]), 4., mirror),
        Sphere(vec([-20, 0, -50]), 30., mirror),
    ])

    lights = [
        ray.PointLight(vec([-20, 20, 20]), 1.5),
        ray.PointLight(vec([30, 50, -25]), 1.8),
        ray.PointLight(vec([30, 20, 30]), 1.7),
    ]

    camera = ray.Camera(vfov=FOV)
    return SceneDef(camera=camera, scene=scene, lights=lights);
