"""Ray data structure and ray/shape intersection tests.

This module provides the Ray dataclass and closed-form intersection tests
against spheres, triangles, quads and axis-aligned boxes. Every test is a
pure Taichi function: scratch vectors are locals, so tests can run in
parallel over any number of rays.

A test returns a RayHit record. ``hit`` is 1 when the ray intersects the
shape, and only then is ``t`` meaningful. Distances are in units of the
ray direction; normalize the direction first when comparing distances
across rays.

The triangle, quad and box tests report intersections behind the ray
origin as negative ``t``. Callers that only want forward hits must check
``t >= 0`` themselves.

Example:
    >>> import taichi as ti
    >>> from vector_math.core.ray import Ray, intersect_sphere, vec3
    >>> from vector_math.geometry.sphere import Sphere
    >>> @ti.kernel
    ... def k() -> ti.f64:
    ...     ray = Ray(origin=vec3(0.0, 0.0, 5.0), direction=vec3(0.0, 0.0, -1.0))
    ...     rec = intersect_sphere(ray, Sphere(center=vec3(0.0), radius=1.0))
    ...     return rec.t
"""

import taichi as ti
import taichi.math as tm

from vector_math.config import EPSILON, INFINITY
from vector_math.geometry.aabb import Aabb3
from vector_math.geometry.quad import Quad, quad_triangles
from vector_math.geometry.sphere import Sphere
from vector_math.geometry.triangle import Triangle

from .vector import vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Need not be
            unit length; intersection distances scale with it.
    """

    origin: vec3
    direction: vec3


@ti.dataclass
class RayHit:
    """Result of a ray/shape intersection test.

    Attributes:
        hit: 1 if the ray intersected the shape, 0 otherwise.
        t: Distance along the ray in units of its direction.
            Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f64


@ti.dataclass
class TriangleHit:
    """Result of a ray/triangle test with barycentric coordinates.

    The hit point is (1 - u - v) * point0 + u * point1 + v * point2.

    Attributes:
        hit: 1 if the ray intersected the triangle, 0 otherwise.
        t: Distance along the ray. Only valid if hit == 1.
        u: Barycentric weight of point1. Only valid if hit == 1.
        v: Barycentric weight of point2. Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f64
    u: ti.f64
    v: ti.f64


@ti.func
def ray_at(ray: Ray, t: ti.f64) -> vec3:
    """Compute the point origin + t * direction."""
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


@ti.func
def _miss() -> RayHit:
    return RayHit(hit=0, t=0.0)


# =============================================================================
# Sphere
# =============================================================================


@ti.func
def intersect_sphere(ray: Ray, sphere: Sphere) -> RayHit:
    """Test for ray-sphere intersection using the geometric method.

    With l the vector from the ray origin to the center, s the projection
    of l on the direction and m2 the squared distance from the center to
    the ray's line:

        l = center - origin
        s = dot(l, direction)
        m2 = dot(l, l) - s^2

    The ray misses when the sphere is behind an outside origin (s < 0) or
    when the line passes farther than the radius (m2 > r^2). Otherwise
    q = sqrt(r^2 - m2) and the near root is s - q from outside the sphere,
    or s + q from inside it.

    Args:
        ray: The ray to test.
        sphere: The sphere to test against.

    Returns:
        A RayHit with the distance to the first surface crossing.
    """
    r2 = sphere.radius * sphere.radius
    l = sphere.center - ray.origin
    s = tm.dot(l, ray.direction)
    l2 = tm.dot(l, l)

    did_hit = 0
    hit_t = ti.cast(0.0, ti.f64)

    # Origin outside and sphere behind it
    if not (s < 0.0 and l2 > r2):
        m2 = l2 - s * s
        if m2 <= r2:
            q = ti.sqrt(r2 - m2)
            did_hit = 1
            if l2 > r2:
                hit_t = s - q
            else:
                hit_t = s + q

    return RayHit(hit=did_hit, t=hit_t)


# =============================================================================
# Triangle and quad
# =============================================================================


@ti.func
def _moller_trumbore(origin: vec3, direction: vec3, point0: vec3, point1: vec3, point2: vec3):
    """Moller-Trumbore ray/triangle test.

    Returns:
        A tuple (hit, t, u, v). u and v are the barycentric weights of
        point1 and point2; all three values are only valid if hit == 1.
    """
    e1 = point1 - point0
    e2 = point2 - point0
    q = tm.cross(direction, e2)
    a = tm.dot(e1, q)

    did_hit = 0
    hit_t = ti.cast(0.0, ti.f64)
    u = ti.cast(0.0, ti.f64)
    v = ti.cast(0.0, ti.f64)

    # |a| below EPSILON means the ray is parallel to the triangle's plane
    if a <= -EPSILON or a >= EPSILON:
        f = 1.0 / a
        s = origin - point0
        u = f * tm.dot(s, q)
        if u >= 0.0:
            r = tm.cross(s, e1)
            v = f * tm.dot(direction, r)
            if v >= -EPSILON and u + v <= 1.0 + EPSILON:
                did_hit = 1
                hit_t = f * tm.dot(e2, r)

    return did_hit, hit_t, u, v


@ti.func
def intersect_triangle_barycentric(ray: Ray, triangle: Triangle) -> TriangleHit:
    """Test for ray-triangle intersection, keeping barycentric coordinates.

    Uses the Moller-Trumbore algorithm. The ray misses when it is parallel
    to the triangle (|det| < EPSILON), when u < 0, or when v < -EPSILON or
    u + v > 1 + EPSILON. The EPSILON slack makes edges inclusive.

    No check is made that t >= 0.

    Args:
        ray: The ray to test.
        triangle: The triangle to test against.

    Returns:
        A TriangleHit with t and the barycentric pair (u, v).
    """
    did_hit, t, u, v = _moller_trumbore(
        ray.origin, ray.direction, triangle.point0, triangle.point1, triangle.point2
    )
    return TriangleHit(hit=did_hit, t=t, u=u, v=v)


@ti.func
def intersect_triangle(ray: Ray, triangle: Triangle) -> RayHit:
    """Test for ray-triangle intersection.

    See intersect_triangle_barycentric. No check is made that t >= 0.
    """
    did_hit, t, _, _ = _moller_trumbore(
        ray.origin, ray.direction, triangle.point0, triangle.point1, triangle.point2
    )
    return RayHit(hit=did_hit, t=t)


@ti.func
def intersect_quad(ray: Ray, quad: Quad) -> RayHit:
    """Test for ray-quad intersection.

    Tests triangle (point0, point1, point2) first and, only if that misses,
    triangle (point3, point0, point2). The first hit is returned; for a
    planar quad at most one half can be hit anyway, since they only share
    the point0-point2 diagonal.

    No check is made that t >= 0.
    """
    first, second = quad_triangles(quad)
    result = intersect_triangle(ray, first)
    if result.hit == 0:
        result = intersect_triangle(ray, second)
    return result


# =============================================================================
# Axis-aligned box
# =============================================================================


@ti.func
def intersect_aabb3(ray: Ray, box: Aabb3) -> RayHit:
    """Test for ray-box intersection using the slab method.

    The box is the intersection of three axis-aligned slabs. Starting from
    the interval (-inf, inf), each axis narrows [t_near, t_far] to the part
    of the ray inside its slab:

        t1 = (min[axis] - origin[axis]) / direction[axis]
        t2 = (max[axis] - origin[axis]) / direction[axis]

    A direction component of zero means the ray is parallel to that slab
    and misses unless its origin already lies within it. The ray misses as
    soon as the interval is empty or lies entirely behind the origin.

    Args:
        ray: The ray to test.
        box: The box to test against.

    Returns:
        A RayHit with t = t_near, the entry distance. t_near is negative
        when the origin is inside the box.
    """
    t_near = ti.cast(-INFINITY, ti.f64)
    t_far = ti.cast(INFINITY, ti.f64)
    missed = 0

    for axis in ti.static(range(3)):
        if missed == 0:
            origin = ray.origin[axis]
            direction = ray.direction[axis]
            lo = box.min[axis]
            hi = box.max[axis]
            if direction == 0.0:
                if origin < lo or origin > hi:
                    missed = 1
            else:
                t1 = (lo - origin) / direction
                t2 = (hi - origin) / direction
                if t1 > t2:
                    temp = t1
                    t1 = t2
                    t2 = temp
                if t1 > t_near:
                    t_near = t1
                if t2 < t_far:
                    t_far = t2
                if t_near > t_far or t_far < 0.0:
                    missed = 1

    result = _miss()
    if missed == 0:
        result = RayHit(hit=1, t=t_near)
    return result
