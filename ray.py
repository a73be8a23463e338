import numpy as np
from geometry import Sphere, Checkerboard, no_hit, Hit
from vecmath import *

"""
Core implementation of the ray tracer.
"""


class Ray:

    def __init__(self, origin, direction):
        """Create a ray with the given origin and direction.

        Parameters:
          origin : (3,) -- the start point of the ray, a 3D point
          direction : (3,) -- the direction of the ray, a unit 3D vector
        """
        self.origin = np.array(origin, np.float64)
        self.direction = np.array(direction, np.float64)


class Camera:

    def __init__(self, eye=vec([0,0,0]), target=vec([0,0,-1]), up=vec([0,1,0]),
                 vfov=60.0):
        """Create a pinhole camera with given viewing parameters.

        Parameters:
          eye : (3,) -- the camera's location, aka viewpoint (a 3D point)
          target : (3,) -- where the camera is looking: a 3D point that appears centered in the view
          up : (3,) -- the camera's orientation: a 3D vector that appears straight up in the view
          vfov : float -- the full vertical field of view in degrees
        """
        self.eye = eye
        self.vfov = vfov

        self.w = normalize(eye - target)
        self.u = normalize(np.cross(up, self.w))
        self.v = np.cross(self.w, self.u)

        self.tan_half = np.tan(np.radians(self.vfov) / 2.0)

    def generate_ray(self, i, j, nx, ny):
        """Compute the primary ray through the center of pixel (i, j).

        Parameters:
          i, j : int -- column and row of the pixel; row 0 is the top of the image
          nx, ny : int -- the dimensions of the image
        Return:
          Ray -- the ray from the eye through that pixel, with unit direction
        """
        x = (i + 0.5) - nx / 2.0
        y = -(j + 0.5) + ny / 2.0
        z = ny / (2.0 * self.tan_half)

        direction = (x * self.u) + (y * self.v) - (z * self.w)

        return Ray(self.eye, normalize(direction))


class PointLight:
    def __init__(self, position, intensity):
        """Create a point light at given position and with given intensity

        Parameters:
          position : (3,) -- 3D point giving the light source location in scene
          intensity : float -- scalar intensity of the source
        """
        self.position = position
        self.intensity = intensity

    def illuminate(self, ray, hit, scene):
        """Compute the light arriving at a surface point from this light.

        Parameters:
          ray : Ray -- the ray that hit the surface
          hit : Hit -- the hit data
          scene : Scene -- the scene, for shadow rays
        Return:
          (float, float) -- the diffuse and specular intensities, both zero
          when something blocks the way to the light
        """
        light_vec_full = sub(self.position, hit.point)
        light_vec = normalize(light_vec_full)
        light_dist = norm(light_vec_full)

        # shadow ray starts on the same side of the surface as the light
        shadow_origin = add(hit.point, scale(hit.normal, signum(dot(light_vec, hit.normal)) * EPSILON))
        blocker = scene.intersect(Ray(shadow_origin, light_vec))
        if blocker.t < np.inf and norm(sub(blocker.point, shadow_origin)) < light_dist:
            return 0.0, 0.0

        diffuse = self.intensity * max(0.0, dot(light_vec, hit.normal))
        highlight = max(0.0, dot(-reflect(-light_vec, hit.normal), ray.direction))
        specular = self.intensity * highlight ** hit.material.specular_exponent

        return diffuse, specular


BACKGROUND = vec([0.4, 0.3, 0.5])

class Scene:

    def __init__(self, spheres, floor=None, bg_color=BACKGROUND):
        """Create a scene containing the given objects.

        Parameters:
          spheres : [Sphere] -- list of the spheres in the scene
          floor : Checkerboard -- the ground plane; a default board when None
          bg_color : (3,) -- RGB color seen by reflection rays that hit nothing
        """
        self.spheres = spheres
        self.floor = floor if floor is not None else Checkerboard()
        self.bg_color = bg_color

    def intersect(self, ray):
        """Computes the first (smallest t) intersection between a ray and the scene.

        Parameters:
          ray : Ray -- the ray to intersect with the scene
        Return:
          Hit -- the hit data, or no_hit
        """
        closest_hit = no_hit

        for sphere in self.spheres:
            hit = sphere.intersect(ray)
            if hit.t < closest_hit.t:
                closest_hit = hit

        floor_hit = self.floor.intersect(ray, closest_hit.t)
        if floor_hit.t < np.inf:
            return floor_hit

        return closest_hit


MAX_DEPTH = 1 # max recursion depth, counting the primary ray as depth 0
EPSILON = 1e-3 # for offsetting rays

def shade(ray, hit, scene, lights, depth=0):
    """Compute shading for a ray-surface intersection.

    Parameters:
      ray : Ray -- the ray that hit the surface
      hit : Hit -- the hit data
      scene : Scene -- the scene
      lights : [PointLight] -- the lights
      depth : int -- the recursion depth so far
    Return:
      (3,) -- the color seen along this ray
    """
    mat = hit.material
    n = hit.normal

    reflect_dir = reflect(ray.direction, n)
    reflect_origin = add(hit.point, scale(n, signum(dot(reflect_dir, n)) * EPSILON))
    reflect_color = cast_ray(Ray(reflect_origin, reflect_dir), scene, lights, depth + 1)
    if reflect_color is None:
        reflect_color = scene.bg_color

    diffuse = 0.0
    specular = 0.0
    for light in lights:
        d, s = light.illuminate(ray, hit, scene)
        diffuse += d
        specular += s

    color = scale(mat.diffuse_colour, diffuse * mat.albedo[0])
    color = color + specular * mat.albedo[1]
    color = color + scale(reflect_color, mat.albedo[2])
    return color


def cast_ray(ray, scene, lights, depth=0):
    """Trace a ray into the scene.

    Return:
      (3,) or None -- the color seen along the ray, or None when the ray
      escapes the scene or the depth limit is passed
    """
    if depth > MAX_DEPTH:
        return None

    hit = scene.intersect(ray)
    if hit.t == np.inf:
        return None

    return shade(ray, hit, scene, lights, depth)


def background_gradient(nx, ny):
    """The image a render starts from: (row/ny, col/nx, 1 - col/nx) per pixel."""
    rows = np.arange(ny, dtype=np.float64) / ny
    cols = np.arange(nx, dtype=np.float64) / nx
    image = np.empty((ny, nx, 3), np.float64)
    image[:, :, 0] = rows[:, None]
    image[:, :, 1] = cols[None, :]
    image[:, :, 2] = 1.0 - cols[None, :]
    return image


def render_image(camera, scene, lights, nx, ny, verbose=True):
    """Render a ray traced image.

    Parameters:
      camera : Camera -- the camera defining the view
      scene : Scene -- the scene to be rendered
      lights : [PointLight] -- the lights illuminating the scene
      nx, ny : int -- the dimensions of the rendered image
    Returns:
      (ny, nx, 3) float64 -- the RGB image, unclamped
    Pixels whose primary ray hits nothing keep the background gradient.
    """
    output_image = background_gradient(nx, ny)

    for j in range(ny):
        if verbose:
            print(f"rendering row {j+1}/{ny}...")
        for i in range(nx):
            ray = camera.generate_ray(i, j, nx, ny)
            color = cast_ray(ray, scene, lights, 0)
            if color is not None:
                output_image[j, i] = color

    return output_image
