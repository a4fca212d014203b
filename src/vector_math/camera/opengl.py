"""OpenGL-style camera and projection matrices.

Builders for view, rotation, frustum, perspective, orthographic and planar
projection/reflection matrices, plus screen-to-world unprojection for
picking. These run on the Python side with NumPy, once per camera
configuration, and return 4x4 ``float64`` arrays indexed ``[row, col]``
that act on column vectors (translation in column 3). Use ``.tolist()``
to copy one into a Taichi ``mat4``.

Clip space follows OpenGL: the visible volume maps to the cube [-1, 1]^3
and the camera looks down -z in view space.

Example:
    >>> import math
    >>> from vector_math.camera.opengl import make_perspective_matrix, make_view_matrix
    >>> view = make_view_matrix((0.0, 0.0, 5.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    >>> projection = make_perspective_matrix(math.radians(60.0), 16.0 / 9.0, 0.1, 100.0)
    >>> camera = projection @ view
"""

import logging
import math
from typing import Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt

logger = logging.getLogger(__name__)

Vector3Like = Sequence[float]


def _as_vec3(v: Vector3Like) -> npt.NDArray[np.float64]:
    arr = np.asarray(v, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {arr.shape}")
    return arr


def _normalized(v: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    n = np.linalg.norm(v)
    if n == 0.0:
        return v
    return v / n


def _check_extent(low: float, high: float, name: str) -> None:
    if low == high:
        raise ValueError(f"Degenerate {name} range: both bounds are {low}")


# =============================================================================
# View and rotation
# =============================================================================


def make_rotation_matrix(
    forward_direction: Vector3Like, up_direction: Vector3Like
) -> npt.NDArray[np.float64]:
    """Build a per-model rotation matrix from forward and up directions.

    The right direction is normalize(forward x up). The rows of the upper
    3x3 block are forward, up and right, in that order.

    Args:
        forward_direction: The model's forward vector.
        up_direction: The model's up vector, orthogonal to forward.

    Returns:
        A 4x4 rotation matrix.
    """
    forward = _as_vec3(forward_direction)
    up = _as_vec3(up_direction)
    right = _normalized(np.cross(forward, up))

    m = np.eye(4, dtype=np.float64)
    m[0, :3] = forward
    m[1, :3] = up
    m[2, :3] = right
    return m


def make_view_matrix(
    camera_position: Vector3Like,
    camera_focus_position: Vector3Like,
    up_direction: Vector3Like,
) -> npt.NDArray[np.float64]:
    """Build a view matrix looking from camera_position at the focus point.

    Args:
        camera_position: Position of the camera.
        camera_focus_position: Point the camera is focused on.
        up_direction: Up direction, usually +Y.

    Returns:
        A 4x4 matrix mapping world space to view space, where the camera
        sits at the origin looking down -z.
    """
    eye = _as_vec3(camera_position)
    focus = _as_vec3(camera_focus_position)
    up = _as_vec3(up_direction)

    # z points from the focus back toward the eye
    z = _normalized(eye - focus)
    x = _normalized(np.cross(up, z))
    y = _normalized(np.cross(z, x))

    m = np.eye(4, dtype=np.float64)
    m[0, :3] = x
    m[1, :3] = y
    m[2, :3] = z
    m[:3, 3] = m[:3, :3] @ -eye
    return m


# =============================================================================
# Projections
# =============================================================================


def make_frustum_matrix(
    left: float, right: float, bottom: float, top: float, near: float, far: float
) -> npt.NDArray[np.float64]:
    """Build a perspective projection from the clipping planes.

    Args:
        left: Left vertical clipping plane at the near distance.
        right: Right vertical clipping plane at the near distance.
        bottom: Bottom horizontal clipping plane at the near distance.
        top: Top horizontal clipping plane at the near distance.
        near: Distance to the near depth clipping plane.
        far: Distance to the far depth clipping plane.

    Raises:
        ValueError: If any pair of opposite planes coincide.
    """
    _check_extent(left, right, "left/right")
    _check_extent(bottom, top, "bottom/top")
    _check_extent(near, far, "near/far")

    two_near = 2.0 * near
    right_minus_left = right - left
    top_minus_bottom = top - bottom
    far_minus_near = far - near

    m = np.zeros((4, 4), dtype=np.float64)
    m[0, 0] = two_near / right_minus_left
    m[1, 1] = two_near / top_minus_bottom
    m[0, 2] = (right + left) / right_minus_left
    m[1, 2] = (top + bottom) / top_minus_bottom
    m[2, 2] = -(far + near) / far_minus_near
    m[3, 2] = -1.0
    m[2, 3] = -(two_near * far) / far_minus_near
    return m


def make_perspective_matrix(
    fov_y_radians: float, aspect_ratio: float, z_near: float, z_far: float
) -> npt.NDArray[np.float64]:
    """Build a symmetric perspective projection.

    Args:
        fov_y_radians: Vertical field of view in radians.
        aspect_ratio: Width divided by height.
        z_near: Distance to the near plane (positive).
        z_far: Distance to the far plane (positive).
    """
    height = math.tan(fov_y_radians * 0.5) * z_near
    width = height * aspect_ratio
    return make_frustum_matrix(-width, width, -height, height, z_near, z_far)


def make_orthographic_matrix(
    left: float, right: float, bottom: float, top: float, near: float, far: float
) -> npt.NDArray[np.float64]:
    """Build an orthographic projection from the clipping planes.

    Raises:
        ValueError: If any pair of opposite planes coincide.
    """
    _check_extent(left, right, "left/right")
    _check_extent(bottom, top, "bottom/top")
    _check_extent(near, far, "near/far")

    rml = right - left
    rpl = right + left
    tmb = top - bottom
    tpb = top + bottom
    fmn = far - near
    fpn = far + near

    m = np.zeros((4, 4), dtype=np.float64)
    m[0, 0] = 2.0 / rml
    m[1, 1] = 2.0 / tmb
    m[2, 2] = -2.0 / fmn
    m[0, 3] = -rpl / rml
    m[1, 3] = -tpb / tmb
    m[2, 3] = -fpn / fmn
    m[3, 3] = 1.0
    return m


def make_plane_projection(
    plane_normal: Vector3Like, plane_point: Vector3Like
) -> npt.NDArray[np.float64]:
    """Build a matrix projecting points orthogonally onto a plane.

    Args:
        plane_normal: Unit normal of the plane.
        plane_point: Any point on the plane.
    """
    n = _as_vec3(plane_normal)
    p = _as_vec3(plane_point)

    m = np.eye(4, dtype=np.float64)
    m[:3, :3] -= np.outer(n, n)
    m[:3, 3] = n * np.dot(p, n)
    return m


def make_plane_reflection(
    plane_normal: Vector3Like, plane_point: Vector3Like
) -> npt.NDArray[np.float64]:
    """Build a matrix reflecting points through a plane.

    Args:
        plane_normal: Unit normal of the plane.
        plane_point: Any point on the plane.
    """
    n = _as_vec3(plane_normal)
    p = _as_vec3(plane_point)

    m = np.eye(4, dtype=np.float64)
    m[:3, :3] -= 2.0 * np.outer(n, n)
    m[:3, 3] = n * (2.0 * np.dot(p, n))
    return m


# =============================================================================
# Picking
# =============================================================================


def unproject(
    camera_matrix: npt.ArrayLike,
    viewport_x: float,
    viewport_width: float,
    viewport_y: float,
    viewport_height: float,
    pick_x: float,
    pick_y: float,
    pick_z: float,
) -> Optional[npt.NDArray[np.float64]]:
    """Map a window-space point back to world space.

    Args:
        camera_matrix: Combined projection * view matrix.
        viewport_x: Left edge of the viewport.
        viewport_width: Width of the viewport.
        viewport_y: Bottom edge of the viewport.
        viewport_height: Height of the viewport.
        pick_x: Window x coordinate.
        pick_y: Window y coordinate, measured from the viewport bottom.
        pick_z: Window depth, 0.0 for the near plane and 1.0 for the far plane.

    Returns:
        The world-space position, or None if the point lies outside the
        viewport, the camera matrix is singular, or the point maps to
        infinity.

    Raises:
        ValueError: If the viewport has zero width or height.
    """
    _check_extent(0.0, viewport_width, "viewport width")
    _check_extent(0.0, viewport_height, "viewport height")

    ndc_x = (2.0 * (pick_x - viewport_x) / viewport_width) - 1.0
    ndc_y = (2.0 * (pick_y - viewport_y) / viewport_height) - 1.0
    ndc_z = (2.0 * pick_z) - 1.0

    # Reject points outside the unit cube
    if not (-1.0 <= ndc_x <= 1.0 and -1.0 <= ndc_y <= 1.0 and -1.0 <= ndc_z <= 1.0):
        logger.debug("Pick point (%s, %s, %s) lies outside the viewport", pick_x, pick_y, pick_z)
        return None

    camera = np.asarray(camera_matrix, dtype=np.float64)
    if np.linalg.det(camera) == 0.0:
        logger.debug("Camera matrix is singular, cannot unproject")
        return None

    v = np.linalg.inv(camera) @ np.array([ndc_x, ndc_y, ndc_z, 1.0])
    if v[3] == 0.0:
        logger.debug("Pick point maps to infinity")
        return None

    return v[:3] / v[3]


def pick_ray(
    camera_matrix: npt.ArrayLike,
    viewport_x: float,
    viewport_width: float,
    viewport_y: float,
    viewport_height: float,
    pick_x: float,
    pick_y: float,
) -> Optional[Tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]]:
    """World-space points under a window position on the near and far planes.

    pick_y is measured from the top of the viewport, as mouse coordinates
    usually are.

    Returns:
        A tuple (ray_near, ray_far), or None if either unprojection fails.

    Raises:
        ValueError: If the viewport has zero width or height.
    """
    viewport = (viewport_x, viewport_width, viewport_y, viewport_height)
    flipped_y = viewport_height - pick_y
    ray_near = unproject(camera_matrix, *viewport, pick_x, flipped_y, 0.0)
    if ray_near is None:
        return None
    ray_far = unproject(camera_matrix, *viewport, pick_x, flipped_y, 1.0)
    if ray_far is None:
        return None
    return ray_near, ray_far
