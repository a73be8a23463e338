import math
import numpy as np

"""
Vector math on (3,) float64 arrays. A vector is used as a point, a direction,
or an RGB colour.
"""


def vec(list):
    """Handy shorthand to make a double-precision float array."""
    return np.array(list, dtype=np.float64)


def add(a, b):
    return a + b


def sub(a, b):
    return a - b


def dot(a, b):
    """Dot product of a and b, always a Python float."""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def scale(v, s):
    return v * s


def norm(v):
    return math.sqrt(dot(v, v))


def normalize(v):
    """Return a unit vector in the direction of the vector v.

    v must have non-zero length; a zero vector gives inf/nan components.
    """
    return v / norm(v)


def reflect(v, n):
    """Mirror the incoming direction v about the unit normal n."""
    return v - scale(n, 2.0 * dot(v, n))


def rem(a, b):
    """Component-wise floating remainder, sign follows the dividend."""
    return np.fmod(a, b)


def signum(x):
    """+1.0 or -1.0 following the sign bit of x, so signum(0.0) is 1.0."""
    return math.copysign(1.0, x)
