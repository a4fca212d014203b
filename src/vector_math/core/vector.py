"""Double precision vector types and vector utilities.

This module defines the fixed-size vector and matrix aliases used across the
package and the small vector helpers the geometry code is written in terms of.
All helpers are Taichi functions and can be called from any kernel.

Matrices are indexed ``m[row, col]`` and act on column vectors, so a
translation lives in the last column (the OpenGL convention).

Example:
    >>> import taichi as ti
    >>> from vector_math.core.vector import vec3, dot
    >>> @ti.kernel
    ... def k() -> ti.f64:
    ...     return dot(vec3(1.0, 2.0, 3.0), vec3(4.0, 5.0, 6.0))
"""

import taichi as ti
import taichi.math as tm

vec2 = ti.types.vector(2, ti.f64)
vec3 = ti.types.vector(3, ti.f64)
vec4 = ti.types.vector(4, ti.f64)

mat2 = ti.types.matrix(2, 2, ti.f64)
mat3 = ti.types.matrix(3, 3, ti.f64)
mat4 = ti.types.matrix(4, 4, ti.f64)


@ti.func
def dot(a, b) -> ti.f64:
    """Compute the dot product of two vectors of equal size."""
    return tm.dot(a, b)


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product a x b."""
    return tm.cross(a, b)


@ti.func
def length_squared(v) -> ti.f64:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return tm.dot(v, v)


@ti.func
def length(v) -> ti.f64:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(tm.dot(v, v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v. A zero-length vector is
        returned unchanged instead of producing NaNs.
    """
    result = v
    len_sq = tm.dot(v, v)
    if len_sq > 0.0:
        result = v / ti.sqrt(len_sq)
    return result


@ti.func
def distance_squared(a, b) -> ti.f64:
    """Compute the squared distance between two points."""
    d = a - b
    return tm.dot(d, d)


@ti.func
def distance(a, b) -> ti.f64:
    """Compute the distance between two points."""
    return ti.sqrt(distance_squared(a, b))


@ti.func
def component_min(a, b):
    """Componentwise minimum of two vectors of equal size."""
    return ti.min(a, b)


@ti.func
def component_max(a, b):
    """Componentwise maximum of two vectors of equal size."""
    return ti.max(a, b)


@ti.func
def near_zero(v: vec3) -> ti.i32:
    """Check if a vector is near zero in all components.

    Returns:
        1 if all components are near zero, 0 otherwise.
    """
    s = 1e-8
    return ti.abs(v.x) < s and ti.abs(v.y) < s and ti.abs(v.z) < s
