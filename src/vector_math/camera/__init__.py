"""Camera module for view, projection and picking matrices.

Components:
    opengl: OpenGL-convention view, frustum, perspective, orthographic and
        planar projection/reflection builders, plus unproject and pick_ray

Matrices are built on the Python side with NumPy, once per camera
configuration, and can be copied into Taichi fields or ``mat4`` values.
"""

from .opengl import (
    make_frustum_matrix,
    make_orthographic_matrix,
    make_perspective_matrix,
    make_plane_projection,
    make_plane_reflection,
    make_rotation_matrix,
    make_view_matrix,
    pick_ray,
    unproject,
)

__all__ = [
    "make_view_matrix",
    "make_rotation_matrix",
    "make_frustum_matrix",
    "make_perspective_matrix",
    "make_orthographic_matrix",
    "make_plane_projection",
    "make_plane_reflection",
    "unproject",
    "pick_ray",
]
