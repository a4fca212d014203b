"""Quad primitive.

A quad is four corner points in order around its boundary. For intersection
it is split along the diagonal point0-point2 into two triangles:

    A = (point0, point1, point2)
    B = (point3, point0, point2)

The quad should be planar and convex for this split to cover the visual
quad exactly; neither property is validated.

Example:
    >>> import taichi as ti
    >>> from vector_math.geometry.quad import Quad, vec3
    >>> # Unit square in the xy-plane
    >>> quad = Quad(
    ...     point0=vec3(0.0, 0.0, 0.0),
    ...     point1=vec3(1.0, 0.0, 0.0),
    ...     point2=vec3(1.0, 1.0, 0.0),
    ...     point3=vec3(0.0, 1.0, 0.0),
    ... )
"""

import taichi as ti

from vector_math.core.vector import vec3

from .triangle import Triangle, triangle_area, triangle_normal


@ti.dataclass
class Quad:
    """A quad defined by four corner points.

    Attributes:
        point0: First corner (vec3).
        point1: Second corner (vec3).
        point2: Third corner, opposite point0 (vec3).
        point3: Fourth corner (vec3).
    """

    point0: vec3
    point1: vec3
    point2: vec3
    point3: vec3


@ti.func
def make_quad(point0: vec3, point1: vec3, point2: vec3, point3: vec3) -> Quad:
    """Create a quad from four corner points."""
    return Quad(point0=point0, point1=point1, point2=point2, point3=point3)


@ti.func
def quad_triangles(quad: Quad):
    """Split a quad into its two triangles along the point0-point2 diagonal.

    Returns:
        A tuple (A, B) with A = (point0, point1, point2) and
        B = (point3, point0, point2).
    """
    first = Triangle(point0=quad.point0, point1=quad.point1, point2=quad.point2)
    second = Triangle(point0=quad.point3, point1=quad.point0, point2=quad.point2)
    return first, second


@ti.func
def quad_normal(quad: Quad) -> vec3:
    """Unit normal of the quad, taken from its first triangle."""
    first, _ = quad_triangles(quad)
    return triangle_normal(first)


@ti.func
def quad_area(quad: Quad) -> ti.f64:
    """Area of the quad as the sum of its two triangles."""
    first, second = quad_triangles(quad)
    return triangle_area(first) + triangle_area(second)
