"""Double precision vector math for Taichi.

This package provides fixed-size vector and matrix types, geometric
primitives and ray intersection tests, written as Taichi functions so they
can run inside GPU kernels, plus OpenGL-style camera matrix builders.

Subpackages:
    core: Vector and matrix types, rays, intersection tests and queries
    geometry: Spheres, triangles, quads, planes and bounding boxes
    camera: View, projection and picking matrices

Example:
    >>> import vector_math
    >>> from vector_math import Ray, Sphere, intersect_sphere, vec3
    >>> vector_math.init()
    >>> ray = Ray(origin=vec3(0.0, 0.0, 5.0), direction=vec3(0.0, 0.0, -1.0))
    >>> intersect_sphere(ray, Sphere(center=vec3(0.0, 0.0, 0.0), radius=1.0))
    4.0
"""

from .config import EPSILON, RuntimeConfig, init
from .core.query import (
    intersect_aabb3,
    intersect_quad,
    intersect_sphere,
    intersect_triangle,
    intersect_triangle_barycentric,
)
from .core.ray import Ray, RayHit, TriangleHit
from .core.vector import mat2, mat3, mat4, vec2, vec3, vec4
from .geometry import Aabb2, Aabb3, Plane, Quad, Sphere, Triangle

__version__ = "0.1.0"

__all__ = [
    "EPSILON",
    "RuntimeConfig",
    "init",
    "vec2",
    "vec3",
    "vec4",
    "mat2",
    "mat3",
    "mat4",
    "Ray",
    "RayHit",
    "TriangleHit",
    "Sphere",
    "Triangle",
    "Quad",
    "Aabb2",
    "Aabb3",
    "Plane",
    "intersect_sphere",
    "intersect_triangle",
    "intersect_triangle_barycentric",
    "intersect_quad",
    "intersect_aabb3",
]
