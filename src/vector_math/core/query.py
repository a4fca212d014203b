"""Python-scope ray intersection queries.

Thin wrappers that launch a small kernel per query, for callers that are
not writing their own Taichi kernels. Inputs are Python-scope Ray and
primitive structs (anything with the same attributes works). A miss is
returned as ``None``, never as a sentinel distance.

Example:
    >>> from vector_math.core.query import intersect_sphere
    >>> from vector_math.core.ray import Ray
    >>> from vector_math.core.vector import vec3
    >>> from vector_math.geometry.sphere import Sphere
    >>> ray = Ray(origin=vec3(0.0, 0.0, 5.0), direction=vec3(0.0, 0.0, -1.0))
    >>> intersect_sphere(ray, Sphere(center=vec3(0.0, 0.0, 0.0), radius=1.0))
    4.0
"""

from typing import Optional, Tuple

import taichi as ti

from vector_math.config import ensure_initialized
from vector_math.geometry.aabb import Aabb3
from vector_math.geometry.quad import Quad
from vector_math.geometry.sphere import Sphere
from vector_math.geometry.triangle import Triangle

from . import ray as _ray
from .vector import vec2, vec3, vec4

# =============================================================================
# Kernels
# =============================================================================


@ti.kernel
def _sphere_kernel(origin: vec3, direction: vec3, center: vec3, radius: ti.f64) -> vec2:
    rec = _ray.intersect_sphere(
        _ray.Ray(origin=origin, direction=direction),
        Sphere(center=center, radius=radius),
    )
    return vec2(ti.cast(rec.hit, ti.f64), rec.t)


@ti.kernel
def _triangle_kernel(
    origin: vec3, direction: vec3, point0: vec3, point1: vec3, point2: vec3
) -> vec4:
    rec = _ray.intersect_triangle_barycentric(
        _ray.Ray(origin=origin, direction=direction),
        Triangle(point0=point0, point1=point1, point2=point2),
    )
    return vec4(ti.cast(rec.hit, ti.f64), rec.t, rec.u, rec.v)


@ti.kernel
def _quad_kernel(
    origin: vec3,
    direction: vec3,
    point0: vec3,
    point1: vec3,
    point2: vec3,
    point3: vec3,
) -> vec2:
    rec = _ray.intersect_quad(
        _ray.Ray(origin=origin, direction=direction),
        Quad(point0=point0, point1=point1, point2=point2, point3=point3),
    )
    return vec2(ti.cast(rec.hit, ti.f64), rec.t)


@ti.kernel
def _aabb3_kernel(origin: vec3, direction: vec3, box_min: vec3, box_max: vec3) -> vec2:
    rec = _ray.intersect_aabb3(
        _ray.Ray(origin=origin, direction=direction),
        Aabb3(min=box_min, max=box_max),
    )
    return vec2(ti.cast(rec.hit, ti.f64), rec.t)


def _distance_or_none(result) -> Optional[float]:
    if result[0] == 0.0:
        return None
    return float(result[1])


# =============================================================================
# Queries
# =============================================================================


def intersect_sphere(ray, sphere) -> Optional[float]:
    """Distance along ray to sphere, or None if the ray misses.

    Args:
        ray: A Ray (origin, direction).
        sphere: A Sphere (center, radius).

    Returns:
        The distance to the first surface crossing. From inside the sphere
        this is the exit distance.
    """
    ensure_initialized()
    result = _sphere_kernel(ray.origin, ray.direction, sphere.center, sphere.radius)
    return _distance_or_none(result)


def intersect_triangle(ray, triangle) -> Optional[float]:
    """Distance along ray to triangle, or None if the ray misses.

    The distance may be negative: intersections behind the origin are
    reported, not rejected.
    """
    hit = intersect_triangle_barycentric(ray, triangle)
    if hit is None:
        return None
    return hit[0]


def intersect_triangle_barycentric(ray, triangle) -> Optional[Tuple[float, float, float]]:
    """Distance and barycentric coordinates of a ray/triangle hit.

    Returns:
        A tuple (t, u, v) with the hit point at
        (1 - u - v) * point0 + u * point1 + v * point2, or None if the ray
        misses.
    """
    ensure_initialized()
    result = _triangle_kernel(
        ray.origin, ray.direction, triangle.point0, triangle.point1, triangle.point2
    )
    if result[0] == 0.0:
        return None
    return float(result[1]), float(result[2]), float(result[3])


def intersect_quad(ray, quad) -> Optional[float]:
    """Distance along ray to quad, or None if the ray misses.

    The quad is tested as triangles (point0, point1, point2) and
    (point3, point0, point2), in that order. The distance may be negative.
    """
    ensure_initialized()
    result = _quad_kernel(
        ray.origin,
        ray.direction,
        quad.point0,
        quad.point1,
        quad.point2,
        quad.point3,
    )
    return _distance_or_none(result)


def intersect_aabb3(ray, box) -> Optional[float]:
    """Entry distance of ray into box, or None if the ray misses.

    The distance is negative when the ray origin is inside the box.
    """
    ensure_initialized()
    result = _aabb3_kernel(ray.origin, ray.direction, box.min, box.max)
    return _distance_or_none(result)
