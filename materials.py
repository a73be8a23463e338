import numpy as np
from vecmath import vec


def _frozen(v):
    v = vec(v)
    v.setflags(write=False)
    return v


class Material:

    __slots__ = ('_diffuse_colour', '_specular_exponent', '_albedo')

    def __init__(self, diffuse_colour, specular_exponent=0., albedo=(1., 0., 0.)):
        """
        Create a new material with the given parameters.

        Parameters:
          diffuse_colour : (3,) -- Diffuse colour
          specular_exponent : float -- Specular exponent (shininess), >= 0
          albedo : (3,) -- weights of the diffuse, specular and mirror
                   reflection terms, in that order. They need not sum to 1.

        A Material is immutable; the vectors it returns are read-only.
        """
        object.__setattr__(self, '_diffuse_colour', _frozen(diffuse_colour))
        object.__setattr__(self, '_specular_exponent', float(specular_exponent))
        object.__setattr__(self, '_albedo', _frozen(albedo))

    def __setattr__(self, name, value):
        raise AttributeError("Material is immutable")

    def __reduce__(self):
        return (Material, (self.diffuse_colour, self.specular_exponent, self.albedo))

    @property
    def diffuse_colour(self):
        return self._diffuse_colour

    @property
    def specular_exponent(self):
        return self._specular_exponent

    @property
    def albedo(self):
        return self._albedo

    def __eq__(self, other):
        if not isinstance(other, Material):
            return NotImplemented
        return (np.array_equal(self.diffuse_colour, other.diffuse_colour)
                and self.specular_exponent == other.specular_exponent
                and np.array_equal(self.albedo, other.albedo))

    def __hash__(self):
        return hash((tuple(self.diffuse_colour), self.specular_exponent, tuple(self.albedo)))

    def __repr__(self):
        return "Material({}, {}, {})".format(
            list(self.diffuse_colour), self.specular_exponent, list(self.albedo))
