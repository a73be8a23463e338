import math
import numpy as np
from materials import Material
from vecmath import vec, add, sub, dot, scale, normalize, rem

class Hit:
    def __init__(self, t, point=None, normal=None, material=None):
        """Create a Hit with the given data.

        Parameters:
          t : float -- the distance of the intersection along the ray
          point : (3,) -- the 3D point where the intersection happens
          normal : (3,) -- the 3D outward-facing unit normal to the surface at the hit point
          material : (Material) -- the material of the surface
        """
        self.t = t
        self.point = point
        self.normal = normal
        self.material = material

# Value to represent absence of an intersection
no_hit = Hit(np.inf)


class Sphere:

    def __init__(self, center, radius, material):
        """Create a sphere with the given center and radius.

        Parameters:
          center : (3,) -- a 3D point specifying the sphere's center
          radius : float -- a Python float specifying the sphere's radius
          material : Material -- the material of the surface
        """
        self.center = center
        self.radius = radius
        self.material = material

    def intersect(self, ray):
        """Computes the nearest non-negative intersection between a ray and this sphere.

        The ray direction must be unit length, so that t is a distance.

        Parameters:
          ray : Ray -- the ray to intersect with the sphere
        Return:
          Hit -- the hit data, or no_hit
        """
        to_center = sub(self.center, ray.origin)
        tca = dot(to_center, ray.direction)
        d2 = dot(to_center, to_center) - tca * tca
        r2 = self.radius * self.radius
        if d2 > r2:
            return no_hit

        thc = math.sqrt(r2 - d2)
        t0 = tca - thc
        if t0 < 0:
            t0 = tca + thc
        # sphere entirely behind the origin
        if t0 < 0:
            return no_hit

        point = add(ray.origin, scale(ray.direction, t0))
        normal = normalize(sub(point, self.center))
        return Hit(t0, point, normal, self.material)


class Checkerboard:

    def __init__(self, center=vec([0, -10, -20]), half_size=10.,
                 color_a=vec([1, 0, 0]), color_b=vec([0, 0, 1]),
                 specular_exponent=20., albedo=vec([0.1, 0.1, 0.1])):
        """Create a bounded horizontal checkerboard plane.

        Parameters:
          center : (3,) -- center of the board; its y is the height of the plane
          half_size : float -- half extent of the board along x and z
          color_a, color_b : (3,) -- the two tile colours
          specular_exponent : float -- shininess of every tile
          albedo : (3,) -- diffuse/specular/mirror weights of every tile
        """
        self.center = center
        self.half_size = half_size
        self.color_a = color_a
        self.color_b = color_b
        self.specular_exponent = specular_exponent
        self.albedo = albedo
        self.normal = vec([0, 1, 0])

    def material_at(self, offset):
        """Build the tile material for a point at the given offset from the center."""
        mods = rem(scale(offset + self.half_size, 1.5), 2.0)
        if (int(mods[0]) == 0) == (int(mods[2]) == 0):
            color = self.color_a
        else:
            color = self.color_b
        return Material(color, self.specular_exponent, self.albedo)

    def intersect(self, ray, t_max=np.inf):
        """Intersect the ray with the board, accepting only hits nearer than t_max.

        Rays within 1e-3 of parallel to the plane are ignored.
        """
        if abs(ray.direction[1]) <= 1e-3:
            return no_hit

        d = (self.center[1] - ray.origin[1]) / ray.direction[1]
        if d <= 0 or d >= t_max:
            return no_hit

        point = add(ray.origin, scale(ray.direction, d))
        offset = sub(point, self.center)
        if abs(offset[0]) >= self.half_size or abs(offset[2]) >= self.half_size:
            return no_hit

        return Hit(d, point, self.normal, self.material_at(offset))
