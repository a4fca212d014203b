"""Triangle primitive.

Triangles are three points. Winding follows the right-hand rule: the
normal points along (point1 - point0) x (point2 - point0).
"""

import taichi as ti
import taichi.math as tm

from vector_math.core.vector import normalize, vec3


@ti.dataclass
class Triangle:
    """A triangle defined by three corner points.

    Attributes:
        point0: First corner (vec3).
        point1: Second corner (vec3).
        point2: Third corner (vec3).
    """

    point0: vec3
    point1: vec3
    point2: vec3


@ti.func
def make_triangle(point0: vec3, point1: vec3, point2: vec3) -> Triangle:
    """Create a triangle from three points."""
    return Triangle(point0=point0, point1=point1, point2=point2)


@ti.func
def triangle_normal(triangle: Triangle) -> vec3:
    """Unit normal of the triangle, or zero for a degenerate triangle."""
    e1 = triangle.point1 - triangle.point0
    e2 = triangle.point2 - triangle.point0
    return normalize(tm.cross(e1, e2))


@ti.func
def triangle_area(triangle: Triangle) -> ti.f64:
    """Area of the triangle."""
    e1 = triangle.point1 - triangle.point0
    e2 = triangle.point2 - triangle.point0
    return 0.5 * tm.length(tm.cross(e1, e2))


@ti.func
def triangle_point_from_barycentric(triangle: Triangle, u: ti.f64, v: ti.f64) -> vec3:
    """Point with barycentric weights (1 - u - v, u, v).

    u weights point1 and v weights point2, matching the (u, v) pair
    returned by the ray/triangle test.
    """
    return (1.0 - u - v) * triangle.point0 + u * triangle.point1 + v * triangle.point2
