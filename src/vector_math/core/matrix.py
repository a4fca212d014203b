"""Matrix3 and Matrix4 helpers.

Matrices are ``ti.f64`` Taichi matrices indexed ``m[row, col]`` and act on
column vectors. A Matrix3 doubles as a 2D affine transform (upper-left 2x2
block plus translation in column 2), and a Matrix4 as a 3D affine or
projective transform (translation in column 3).

Inversion uses cofactor expansion and reports the determinant, so callers
can detect singular matrices instead of dividing by zero:

    det, inverse = invert4(m)
    if det != 0.0:
        ...
"""

import taichi as ti
import taichi.math as tm

from .vector import mat3, mat4, vec2, vec3, vec4

# =============================================================================
# Matrix3
# =============================================================================


@ti.func
def from_columns3(c0: vec3, c1: vec3, c2: vec3) -> mat3:
    """Build a Matrix3 from three column vectors."""
    return mat3(
        [
            [c0.x, c1.x, c2.x],
            [c0.y, c1.y, c2.y],
            [c0.z, c1.z, c2.z],
        ]
    )


@ti.func
def rotation_x3(radians: ti.f64) -> mat3:
    """Rotation about the x axis (right-handed)."""
    c = ti.cos(radians)
    s = ti.sin(radians)
    return mat3([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])


@ti.func
def rotation_y3(radians: ti.f64) -> mat3:
    """Rotation about the y axis (right-handed)."""
    c = ti.cos(radians)
    s = ti.sin(radians)
    return mat3([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])


@ti.func
def rotation_z3(radians: ti.f64) -> mat3:
    """Rotation about the z axis (right-handed)."""
    c = ti.cos(radians)
    s = ti.sin(radians)
    return mat3([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


@ti.func
def determinant3(m: mat3) -> ti.f64:
    """Determinant of a Matrix3 by cofactor expansion along the first row."""
    return (
        m[0, 0] * (m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1])
        - m[0, 1] * (m[1, 0] * m[2, 2] - m[1, 2] * m[2, 0])
        + m[0, 2] * (m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0])
    )


@ti.func
def scale_adjoint3(m: mat3, scale: ti.f64) -> mat3:
    """Adjugate (transposed cofactor matrix) of m, scaled by ``scale``.

    For an invertible matrix, ``scale_adjoint3(m, 1.0 / determinant3(m))``
    is its inverse.
    """
    a00 = m[0, 0]
    a01 = m[0, 1]
    a02 = m[0, 2]
    a10 = m[1, 0]
    a11 = m[1, 1]
    a12 = m[1, 2]
    a20 = m[2, 0]
    a21 = m[2, 1]
    a22 = m[2, 2]
    return (
        mat3(
            [
                [a11 * a22 - a12 * a21, a02 * a21 - a01 * a22, a01 * a12 - a02 * a11],
                [a12 * a20 - a10 * a22, a00 * a22 - a02 * a20, a02 * a10 - a00 * a12],
                [a10 * a21 - a11 * a20, a01 * a20 - a00 * a21, a00 * a11 - a01 * a10],
            ]
        )
        * scale
    )


@ti.func
def invert3(m: mat3):
    """Invert a Matrix3.

    Returns:
        A tuple (det, inverse). When det is zero the matrix is singular and
        ``inverse`` is m unchanged.
    """
    det = determinant3(m)
    result = m
    if det != 0.0:
        result = scale_adjoint3(m, 1.0 / det)
    return det, result


@ti.func
def transpose_multiply3(a: mat3, b: mat3) -> mat3:
    """Compute transpose(a) * b."""
    return a.transpose() @ b


@ti.func
def multiply_transpose3(a: mat3, b: mat3) -> mat3:
    """Compute a * transpose(b)."""
    return a @ b.transpose()


@ti.func
def dot_row3(m: mat3, row: ti.template(), v: vec3) -> ti.f64:
    """Dot product of a row of m with v."""
    return m[row, 0] * v.x + m[row, 1] * v.y + m[row, 2] * v.z


@ti.func
def dot_column3(m: mat3, col: ti.template(), v: vec3) -> ti.f64:
    """Dot product of a column of m with v."""
    return m[0, col] * v.x + m[1, col] * v.y + m[2, col] * v.z


@ti.func
def transform2(m: mat3, v: vec2) -> vec2:
    """Apply a Matrix3 as a 2D affine transform to a point."""
    return vec2(
        m[0, 0] * v.x + m[0, 1] * v.y + m[0, 2],
        m[1, 0] * v.x + m[1, 1] * v.y + m[1, 2],
    )


@ti.func
def absolute_rotate2(m: mat3, v: vec2) -> vec2:
    """Rotate v by the absolute values of the upper-left 2x2 block of m.

    Used to transform box half extents: the result bounds every rotated
    corner regardless of the rotation's sign.
    """
    return vec2(
        ti.abs(m[0, 0]) * v.x + ti.abs(m[0, 1]) * v.y,
        ti.abs(m[1, 0]) * v.x + ti.abs(m[1, 1]) * v.y,
    )


@ti.func
def solve3(a: mat3, b: vec3) -> vec3:
    """Solve a * x = b with Cramer's rule.

    A singular matrix yields a zero vector.
    """
    c0 = vec3(a[0, 0], a[1, 0], a[2, 0])
    c1 = vec3(a[0, 1], a[1, 1], a[2, 1])
    c2 = vec3(a[0, 2], a[1, 2], a[2, 2])
    det = tm.dot(c0, tm.cross(c1, c2))
    result = vec3(0.0, 0.0, 0.0)
    if det != 0.0:
        inv_det = 1.0 / det
        result = vec3(
            tm.dot(b, tm.cross(c1, c2)) * inv_det,
            tm.dot(c0, tm.cross(b, c2)) * inv_det,
            tm.dot(c0, tm.cross(c1, b)) * inv_det,
        )
    return result


@ti.func
def solve2(a: mat3, b: vec2) -> vec2:
    """Solve transform2(a, x) = b for x.

    The translation part of a is removed from b before solving the 2x2
    system. A singular 2x2 block yields a zero vector.
    """
    a00 = a[0, 0]
    a01 = a[0, 1]
    a10 = a[1, 0]
    a11 = a[1, 1]
    bx = b.x - a[0, 2]
    by = b.y - a[1, 2]
    det = a00 * a11 - a01 * a10
    result = vec2(0.0, 0.0)
    if det != 0.0:
        inv_det = 1.0 / det
        result = vec2((a11 * bx - a01 * by) * inv_det, (a00 * by - a10 * bx) * inv_det)
    return result


# =============================================================================
# Matrix4
# =============================================================================


@ti.func
def translation4(t: vec3) -> mat4:
    """Build a translation matrix."""
    return mat4(
        [
            [1.0, 0.0, 0.0, t.x],
            [0.0, 1.0, 0.0, t.y],
            [0.0, 0.0, 1.0, t.z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


@ti.func
def outer4(a: vec4, b: vec4) -> mat4:
    """Outer product a * transpose(b)."""
    return a.outer_product(b)


@ti.func
def _cofactor_terms4(m: mat4):
    # 2x2 sub-determinants of the top two and bottom two rows
    b00 = m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0]
    b01 = m[0, 0] * m[1, 2] - m[0, 2] * m[1, 0]
    b02 = m[0, 0] * m[1, 3] - m[0, 3] * m[1, 0]
    b03 = m[0, 1] * m[1, 2] - m[0, 2] * m[1, 1]
    b04 = m[0, 1] * m[1, 3] - m[0, 3] * m[1, 1]
    b05 = m[0, 2] * m[1, 3] - m[0, 3] * m[1, 2]
    b06 = m[2, 0] * m[3, 1] - m[2, 1] * m[3, 0]
    b07 = m[2, 0] * m[3, 2] - m[2, 2] * m[3, 0]
    b08 = m[2, 0] * m[3, 3] - m[2, 3] * m[3, 0]
    b09 = m[2, 1] * m[3, 2] - m[2, 2] * m[3, 1]
    b10 = m[2, 1] * m[3, 3] - m[2, 3] * m[3, 1]
    b11 = m[2, 2] * m[3, 3] - m[2, 3] * m[3, 2]
    return b00, b01, b02, b03, b04, b05, b06, b07, b08, b09, b10, b11


@ti.func
def determinant4(m: mat4) -> ti.f64:
    """Determinant of a Matrix4."""
    b00, b01, b02, b03, b04, b05, b06, b07, b08, b09, b10, b11 = _cofactor_terms4(m)
    return b00 * b11 - b01 * b10 + b02 * b09 + b03 * b08 - b04 * b07 + b05 * b06


@ti.func
def invert4(m: mat4):
    """Invert a Matrix4 by cofactor expansion.

    Returns:
        A tuple (det, inverse). When det is zero the matrix is singular and
        ``inverse`` is m unchanged.
    """
    b00, b01, b02, b03, b04, b05, b06, b07, b08, b09, b10, b11 = _cofactor_terms4(m)
    det = b00 * b11 - b01 * b10 + b02 * b09 + b03 * b08 - b04 * b07 + b05 * b06
    result = m
    if det != 0.0:
        inv = 1.0 / det
        result = (
            mat4(
                [
                    [
                        m[1, 1] * b11 - m[1, 2] * b10 + m[1, 3] * b09,
                        m[0, 2] * b10 - m[0, 1] * b11 - m[0, 3] * b09,
                        m[3, 1] * b05 - m[3, 2] * b04 + m[3, 3] * b03,
                        m[2, 2] * b04 - m[2, 1] * b05 - m[2, 3] * b03,
                    ],
                    [
                        m[1, 2] * b08 - m[1, 0] * b11 - m[1, 3] * b07,
                        m[0, 0] * b11 - m[0, 2] * b08 + m[0, 3] * b07,
                        m[3, 2] * b02 - m[3, 0] * b05 - m[3, 3] * b01,
                        m[2, 0] * b05 - m[2, 2] * b02 + m[2, 3] * b01,
                    ],
                    [
                        m[1, 0] * b10 - m[1, 1] * b08 + m[1, 3] * b06,
                        m[0, 1] * b08 - m[0, 0] * b10 - m[0, 3] * b06,
                        m[3, 0] * b04 - m[3, 1] * b02 + m[3, 3] * b00,
                        m[2, 1] * b02 - m[2, 0] * b04 - m[2, 3] * b00,
                    ],
                    [
                        m[1, 1] * b07 - m[1, 0] * b09 - m[1, 2] * b06,
                        m[0, 0] * b09 - m[0, 1] * b07 + m[0, 2] * b06,
                        m[3, 1] * b01 - m[3, 0] * b03 - m[3, 2] * b00,
                        m[2, 0] * b03 - m[2, 1] * b01 + m[2, 2] * b00,
                    ],
                ]
            )
            * inv
        )
    return det, result


@ti.func
def transform4(m: mat4, v: vec4) -> vec4:
    """Multiply a homogeneous vector by m."""
    return m @ v


@ti.func
def transform3(m: mat4, v: vec3) -> vec3:
    """Transform a point by m, treating w as 1. No perspective divide."""
    return vec3(
        m[0, 0] * v.x + m[0, 1] * v.y + m[0, 2] * v.z + m[0, 3],
        m[1, 0] * v.x + m[1, 1] * v.y + m[1, 2] * v.z + m[1, 3],
        m[2, 0] * v.x + m[2, 1] * v.y + m[2, 2] * v.z + m[2, 3],
    )


@ti.func
def rotate3(m: mat4, v: vec3) -> vec3:
    """Transform a direction by the upper-left 3x3 block of m."""
    return vec3(
        m[0, 0] * v.x + m[0, 1] * v.y + m[0, 2] * v.z,
        m[1, 0] * v.x + m[1, 1] * v.y + m[1, 2] * v.z,
        m[2, 0] * v.x + m[2, 1] * v.y + m[2, 2] * v.z,
    )


@ti.func
def absolute_rotate3(m: mat4, v: vec3) -> vec3:
    """Rotate v by the absolute values of the upper-left 3x3 block of m."""
    return vec3(
        ti.abs(m[0, 0]) * v.x + ti.abs(m[0, 1]) * v.y + ti.abs(m[0, 2]) * v.z,
        ti.abs(m[1, 0]) * v.x + ti.abs(m[1, 1]) * v.y + ti.abs(m[1, 2]) * v.z,
        ti.abs(m[2, 0]) * v.x + ti.abs(m[2, 1]) * v.y + ti.abs(m[2, 2]) * v.z,
    )
