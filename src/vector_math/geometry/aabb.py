"""Axis-aligned bounding boxes in 2D and 3D.

A box is a min/max corner pair with min <= max on every axis. Boxes are
values: operations that grow or transform a box return a new one.

Containment tests are strict (a point on the boundary is not contained),
while intersection tests are inclusive (touching boxes intersect).

Transforming a box maps its center through the matrix and its half extents
through the absolute value of the rotation block, so the result is the
tightest axis-aligned box around the transformed box.
"""

import taichi as ti

from vector_math.core.matrix import absolute_rotate2, absolute_rotate3, transform2, transform3
from vector_math.core.vector import mat3, mat4, vec2, vec3


@ti.dataclass
class Aabb2:
    """A 2D axis-aligned bounding box.

    Attributes:
        min: The minimum corner (vec2).
        max: The maximum corner (vec2).
    """

    min: vec2
    max: vec2


@ti.dataclass
class Aabb3:
    """A 3D axis-aligned bounding box.

    Attributes:
        min: The minimum corner (vec3).
        max: The maximum corner (vec3).
    """

    min: vec3
    max: vec3


# =============================================================================
# Aabb2
# =============================================================================


@ti.func
def make_aabb2(min_corner: vec2, max_corner: vec2) -> Aabb2:
    """Create a 2D box from its corners."""
    return Aabb2(min=min_corner, max=max_corner)


@ti.func
def aabb2_from_center_half_extents(center: vec2, half_extents: vec2) -> Aabb2:
    """Create a 2D box from its center and half extents."""
    return Aabb2(min=center - half_extents, max=center + half_extents)


@ti.func
def aabb2_center(box: Aabb2) -> vec2:
    return (box.min + box.max) * 0.5


@ti.func
def aabb2_half_extents(box: Aabb2) -> vec2:
    return (box.max - box.min) * 0.5


@ti.func
def aabb2_hull(a: Aabb2, b: Aabb2) -> Aabb2:
    """Smallest box containing both a and b."""
    return Aabb2(min=ti.min(a.min, b.min), max=ti.max(a.max, b.max))


@ti.func
def aabb2_hull_point(box: Aabb2, point: vec2) -> Aabb2:
    """Smallest box containing box and point."""
    return Aabb2(min=ti.min(box.min, point), max=ti.max(box.max, point))


@ti.func
def aabb2_contains_aabb(box: Aabb2, other: Aabb2) -> ti.i32:
    return (
        box.min.x < other.min.x
        and box.min.y < other.min.y
        and box.max.x > other.max.x
        and box.max.y > other.max.y
    )


@ti.func
def aabb2_contains_point(box: Aabb2, point: vec2) -> ti.i32:
    return (
        box.min.x < point.x and box.min.y < point.y and box.max.x > point.x and box.max.y > point.y
    )


@ti.func
def aabb2_intersects_aabb(box: Aabb2, other: Aabb2) -> ti.i32:
    return (
        box.min.x <= other.max.x
        and box.min.y <= other.max.y
        and box.max.x >= other.min.x
        and box.max.y >= other.min.y
    )


@ti.func
def aabb2_intersects_point(box: Aabb2, point: vec2) -> ti.i32:
    return (
        box.min.x <= point.x
        and box.min.y <= point.y
        and box.max.x >= point.x
        and box.max.y >= point.y
    )


@ti.func
def aabb2_transform(box: Aabb2, m: mat3) -> Aabb2:
    """Bounding box of box after the 2D affine transform m."""
    center = transform2(m, aabb2_center(box))
    half_extents = absolute_rotate2(m, aabb2_half_extents(box))
    return aabb2_from_center_half_extents(center, half_extents)


@ti.func
def aabb2_rotate(box: Aabb2, m: mat3) -> Aabb2:
    """Bounding box of box rotated by m about its own center."""
    half_extents = absolute_rotate2(m, aabb2_half_extents(box))
    return aabb2_from_center_half_extents(aabb2_center(box), half_extents)


# =============================================================================
# Aabb3
# =============================================================================


@ti.func
def make_aabb3(min_corner: vec3, max_corner: vec3) -> Aabb3:
    """Create a 3D box from its corners."""
    return Aabb3(min=min_corner, max=max_corner)


@ti.func
def aabb3_from_center_half_extents(center: vec3, half_extents: vec3) -> Aabb3:
    """Create a 3D box from its center and half extents."""
    return Aabb3(min=center - half_extents, max=center + half_extents)


@ti.func
def aabb3_center(box: Aabb3) -> vec3:
    return (box.min + box.max) * 0.5


@ti.func
def aabb3_half_extents(box: Aabb3) -> vec3:
    return (box.max - box.min) * 0.5


@ti.func
def aabb3_hull(a: Aabb3, b: Aabb3) -> Aabb3:
    """Smallest box containing both a and b."""
    return Aabb3(min=ti.min(a.min, b.min), max=ti.max(a.max, b.max))


@ti.func
def aabb3_hull_point(box: Aabb3, point: vec3) -> Aabb3:
    """Smallest box containing box and point."""
    return Aabb3(min=ti.min(box.min, point), max=ti.max(box.max, point))


@ti.func
def aabb3_contains_aabb(box: Aabb3, other: Aabb3) -> ti.i32:
    return (
        box.min.x < other.min.x
        and box.min.y < other.min.y
        and box.min.z < other.min.z
        and box.max.x > other.max.x
        and box.max.y > other.max.y
        and box.max.z > other.max.z
    )


@ti.func
def aabb3_contains_point(box: Aabb3, point: vec3) -> ti.i32:
    return (
        box.min.x < point.x
        and box.min.y < point.y
        and box.min.z < point.z
        and box.max.x > point.x
        and box.max.y > point.y
        and box.max.z > point.z
    )


@ti.func
def aabb3_intersects_aabb(box: Aabb3, other: Aabb3) -> ti.i32:
    return (
        box.min.x <= other.max.x
        and box.min.y <= other.max.y
        and box.min.z <= other.max.z
        and box.max.x >= other.min.x
        and box.max.y >= other.min.y
        and box.max.z >= other.min.z
    )


@ti.func
def aabb3_intersects_point(box: Aabb3, point: vec3) -> ti.i32:
    return (
        box.min.x <= point.x
        and box.min.y <= point.y
        and box.min.z <= point.z
        and box.max.x >= point.x
        and box.max.y >= point.y
        and box.max.z >= point.z
    )


@ti.func
def aabb3_transform(box: Aabb3, m: mat4) -> Aabb3:
    """Bounding box of box after the affine transform m."""
    center = transform3(m, aabb3_center(box))
    half_extents = absolute_rotate3(m, aabb3_half_extents(box))
    return aabb3_from_center_half_extents(center, half_extents)


@ti.func
def aabb3_rotate(box: Aabb3, m: mat4) -> Aabb3:
    """Bounding box of box rotated by m about its own center."""
    half_extents = absolute_rotate3(m, aabb3_half_extents(box))
    return aabb3_from_center_half_extents(aabb3_center(box), half_extents)
