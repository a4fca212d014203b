"""Core vector math module.

Components:
    vector: f64 vector/matrix type aliases and vector helpers
    matrix: Matrix3 and Matrix4 helpers (inversion, transforms, solving)
    ray: Ray data structure and ray/shape intersection tests
    query: Python-scope wrappers around the intersection tests

Everything except ``query`` is written as Taichi functions for use inside
kernels.
"""

from .matrix import (
    absolute_rotate2,
    absolute_rotate3,
    determinant3,
    determinant4,
    dot_column3,
    dot_row3,
    from_columns3,
    invert3,
    invert4,
    multiply_transpose3,
    outer4,
    rotate3,
    rotation_x3,
    rotation_y3,
    rotation_z3,
    scale_adjoint3,
    solve2,
    solve3,
    transform2,
    transform3,
    transform4,
    translation4,
    transpose_multiply3,
)
from .vector import (
    component_max,
    component_min,
    cross,
    distance,
    distance_squared,
    dot,
    length,
    length_squared,
    mat2,
    mat3,
    mat4,
    near_zero,
    normalize,
    vec2,
    vec3,
    vec4,
)

# Note: ray and query are NOT imported here. They depend on the geometry
# package, which itself imports from core. Import them directly:
#   from vector_math.core.ray import Ray, intersect_sphere

__all__ = [
    "vec2",
    "vec3",
    "vec4",
    "mat2",
    "mat3",
    "mat4",
    "dot",
    "cross",
    "length",
    "length_squared",
    "normalize",
    "distance",
    "distance_squared",
    "component_min",
    "component_max",
    "near_zero",
    "from_columns3",
    "rotation_x3",
    "rotation_y3",
    "rotation_z3",
    "determinant3",
    "scale_adjoint3",
    "invert3",
    "transpose_multiply3",
    "multiply_transpose3",
    "dot_row3",
    "dot_column3",
    "transform2",
    "absolute_rotate2",
    "solve2",
    "solve3",
    "translation4",
    "outer4",
    "determinant4",
    "invert4",
    "transform3",
    "transform4",
    "rotate3",
    "absolute_rotate3",
]
