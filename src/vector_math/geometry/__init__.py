"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with containment and overlap tests
    triangle: Triangle primitive with normal, area and barycentric helpers
    quad: Four-point quad, split into two triangles for intersection
    aabb: 2D and 3D axis-aligned bounding boxes
    plane: Plane in Hessian normal form

All primitives are Taichi dataclasses and all operations are Taichi
functions. Ray/shape intersection lives in ``vector_math.core.ray``.
"""

from .aabb import (
    Aabb2,
    Aabb3,
    aabb2_center,
    aabb2_contains_aabb,
    aabb2_contains_point,
    aabb2_from_center_half_extents,
    aabb2_half_extents,
    aabb2_hull,
    aabb2_hull_point,
    aabb2_intersects_aabb,
    aabb2_intersects_point,
    aabb2_rotate,
    aabb2_transform,
    aabb3_center,
    aabb3_contains_aabb,
    aabb3_contains_point,
    aabb3_from_center_half_extents,
    aabb3_half_extents,
    aabb3_hull,
    aabb3_hull_point,
    aabb3_intersects_aabb,
    aabb3_intersects_point,
    aabb3_rotate,
    aabb3_transform,
    make_aabb2,
    make_aabb3,
)
from .plane import (
    Plane,
    plane_distance_to_point,
    plane_from_components,
    plane_from_normal_constant,
    plane_from_normal_point,
    plane_intersection,
    plane_normalize,
)
from .quad import Quad, make_quad, quad_area, quad_normal, quad_triangles
from .sphere import Sphere, make_sphere, sphere_contains_point, sphere_intersects_sphere
from .triangle import (
    Triangle,
    make_triangle,
    triangle_area,
    triangle_normal,
    triangle_point_from_barycentric,
)

__all__ = [
    "Sphere",
    "make_sphere",
    "sphere_contains_point",
    "sphere_intersects_sphere",
    "Triangle",
    "make_triangle",
    "triangle_normal",
    "triangle_area",
    "triangle_point_from_barycentric",
    "Quad",
    "make_quad",
    "quad_triangles",
    "quad_normal",
    "quad_area",
    "Aabb2",
    "Aabb3",
    "make_aabb2",
    "make_aabb3",
    "aabb2_from_center_half_extents",
    "aabb3_from_center_half_extents",
    "aabb2_center",
    "aabb3_center",
    "aabb2_half_extents",
    "aabb3_half_extents",
    "aabb2_hull",
    "aabb3_hull",
    "aabb2_hull_point",
    "aabb3_hull_point",
    "aabb2_contains_aabb",
    "aabb3_contains_aabb",
    "aabb2_contains_point",
    "aabb3_contains_point",
    "aabb2_intersects_aabb",
    "aabb3_intersects_aabb",
    "aabb2_intersects_point",
    "aabb3_intersects_point",
    "aabb2_transform",
    "aabb3_transform",
    "aabb2_rotate",
    "aabb3_rotate",
    "Plane",
    "plane_from_components",
    "plane_from_normal_constant",
    "plane_from_normal_point",
    "plane_normalize",
    "plane_distance_to_point",
    "plane_intersection",
]
