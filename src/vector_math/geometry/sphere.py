"""Sphere primitive.

A sphere is a center point and a radius. Ray/sphere intersection lives with
the other ray tests in ``vector_math.core.ray``; this module holds the
primitive itself and the containment and overlap tests.

Example:
    >>> import taichi as ti
    >>> from vector_math.geometry.sphere import Sphere, vec3
    >>> sphere = Sphere(center=vec3(0.0, 0.0, -1.0), radius=0.5)
"""

import taichi as ti

from vector_math.core.vector import distance_squared, vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere. Must be non-negative for tests
            against it to be meaningful; this is not validated.
    """

    center: vec3
    radius: ti.f64


@ti.func
def make_sphere(center: vec3, radius: ti.f64) -> Sphere:
    """Create a sphere from center and radius."""
    return Sphere(center=center, radius=radius)


@ti.func
def sphere_contains_point(sphere: Sphere, point: vec3) -> ti.i32:
    """Return 1 if point lies strictly inside the sphere."""
    return distance_squared(point, sphere.center) < sphere.radius * sphere.radius


@ti.func
def sphere_intersects_sphere(a: Sphere, b: Sphere) -> ti.i32:
    """Return 1 if two spheres overlap or touch."""
    r = a.radius + b.radius
    return distance_squared(a.center, b.center) <= r * r
