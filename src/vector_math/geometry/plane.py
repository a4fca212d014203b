"""Plane primitive in Hessian normal form.

A plane is the set of points p with ``dot(normal, p) + constant == 0``. For a
unit normal, ``constant`` is the negated distance from the origin along the
normal and ``plane_distance_to_point`` is a signed Euclidean distance.
"""

import taichi as ti
import taichi.math as tm

from vector_math.core.vector import vec3


@ti.dataclass
class Plane:
    """A plane defined by a normal and a constant.

    Attributes:
        normal: The plane normal (vec3). Need not be unit length.
        constant: Offset term of the plane equation.
    """

    normal: vec3
    constant: ti.f64


@ti.func
def plane_from_components(x: ti.f64, y: ti.f64, z: ti.f64, w: ti.f64) -> Plane:
    """Create the plane x*px + y*py + z*pz + w = 0."""
    return Plane(normal=vec3(x, y, z), constant=w)


@ti.func
def plane_from_normal_constant(normal: vec3, constant: ti.f64) -> Plane:
    return Plane(normal=normal, constant=constant)


@ti.func
def plane_from_normal_point(normal: vec3, point: vec3) -> Plane:
    """Create the plane with the given normal passing through point."""
    return Plane(normal=normal, constant=-tm.dot(normal, point))


@ti.func
def plane_normalize(plane: Plane) -> Plane:
    """Scale the plane equation so the normal has unit length."""
    inverse_length = 1.0 / tm.length(plane.normal)
    return Plane(normal=plane.normal * inverse_length, constant=plane.constant * inverse_length)


@ti.func
def plane_distance_to_point(plane: Plane, point: vec3) -> ti.f64:
    """Evaluate the plane equation at point.

    Positive on the side the normal points to. This is the Euclidean
    distance only when the normal is unit length.
    """
    return tm.dot(plane.normal, point) + plane.constant


@ti.func
def plane_intersection(a: Plane, b: Plane, c: Plane) -> vec3:
    """Point shared by three planes.

    The planes must not share a common line; otherwise the result is not
    finite.
    """
    bc = tm.cross(b.normal, c.normal)
    f = -tm.dot(a.normal, bc)
    v1 = bc * a.constant
    v2 = tm.cross(c.normal, a.normal) * b.constant
    v3 = tm.cross(a.normal, b.normal) * c.constant
    return (v1 + v2 + v3) / f
