"""Tests for OpenGL-style camera matrices and picking."""

import logging
import math

import numpy as np
import pytest

from vector_math.camera.opengl import (
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


def _apply(m, point):
    """Transform a 3D point by a 4x4 matrix with perspective divide."""
    v = m @ np.array([point[0], point[1], point[2], 1.0])
    return v[:3] / v[3]


@pytest.fixture
def camera():
    """Perspective camera at (0, 0, 5) looking at the origin."""
    view = make_view_matrix((0.0, 0.0, 5.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    projection = make_perspective_matrix(math.radians(90.0), 2.0, 1.0, 10.0)
    return projection @ view


class TestViewMatrices:
    def test_view_matrix_axis_aligned(self):
        m = make_view_matrix((0.0, 0.0, 5.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))

        np.testing.assert_allclose(m[:3, :3], np.eye(3), atol=1e-12)
        np.testing.assert_allclose(_apply(m, (0.0, 0.0, 0.0)), [0.0, 0.0, -5.0], atol=1e-12)
        np.testing.assert_allclose(_apply(m, (0.0, 0.0, 5.0)), [0.0, 0.0, 0.0], atol=1e-12)

    def test_view_matrix_focus_on_negative_z(self):
        """Test the focus point always ends up on the -z axis."""
        eye = (3.0, 2.0, -1.0)
        focus = (-1.0, 0.5, 2.0)
        m = make_view_matrix(eye, focus, (0.0, 1.0, 0.0))

        p = _apply(m, focus)
        distance = math.dist(eye, focus)
        np.testing.assert_allclose(p, [0.0, 0.0, -distance], atol=1e-12)
        # Rotation block is orthonormal
        np.testing.assert_allclose(m[:3, :3] @ m[:3, :3].T, np.eye(3), atol=1e-12)

    def test_rotation_matrix_rows(self):
        m = make_rotation_matrix((1.0, 0.0, 0.0), (0.0, 1.0, 0.0))

        np.testing.assert_allclose(m[0, :3], [1.0, 0.0, 0.0])
        np.testing.assert_allclose(m[1, :3], [0.0, 1.0, 0.0])
        np.testing.assert_allclose(m[2, :3], [0.0, 0.0, 1.0])
        assert m[3, 3] == 1.0

    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            make_view_matrix((0.0, 0.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))


class TestProjectionMatrices:
    def test_perspective_maps_near_and_far(self):
        m = make_perspective_matrix(math.radians(90.0), 1.0, 1.0, 10.0)

        assert _apply(m, (0.0, 0.0, -1.0))[2] == pytest.approx(-1.0, abs=1e-12)
        assert _apply(m, (0.0, 0.0, -10.0))[2] == pytest.approx(1.0, abs=1e-12)
        # Corner of the near plane maps to the corner of the clip cube
        np.testing.assert_allclose(_apply(m, (1.0, 1.0, -1.0)), [1.0, 1.0, -1.0], atol=1e-12)

    def test_frustum_off_center(self):
        m = make_frustum_matrix(0.0, 2.0, -1.0, 1.0, 1.0, 3.0)

        np.testing.assert_allclose(_apply(m, (0.0, -1.0, -1.0)), [-1.0, -1.0, -1.0], atol=1e-12)
        np.testing.assert_allclose(_apply(m, (2.0, 1.0, -1.0)), [1.0, 1.0, -1.0], atol=1e-12)

    def test_orthographic_unit_cube_flips_z(self):
        m = make_orthographic_matrix(-1.0, 1.0, -1.0, 1.0, -1.0, 1.0)
        np.testing.assert_allclose(m, np.diag([1.0, 1.0, -1.0, 1.0]), atol=1e-12)

    def test_orthographic_maps_bounds(self):
        m = make_orthographic_matrix(0.0, 4.0, 0.0, 2.0, 1.0, 5.0)

        np.testing.assert_allclose(_apply(m, (0.0, 0.0, -1.0)), [-1.0, -1.0, -1.0], atol=1e-12)
        np.testing.assert_allclose(_apply(m, (4.0, 2.0, -5.0)), [1.0, 1.0, 1.0], atol=1e-12)

    @pytest.mark.parametrize(
        "builder", [make_frustum_matrix, make_orthographic_matrix], ids=["frustum", "ortho"]
    )
    @pytest.mark.parametrize(
        "bounds",
        [
            (1.0, 1.0, -1.0, 1.0, 1.0, 10.0),
            (-1.0, 1.0, 2.0, 2.0, 1.0, 10.0),
            (-1.0, 1.0, -1.0, 1.0, 3.0, 3.0),
        ],
        ids=["left-right", "bottom-top", "near-far"],
    )
    def test_degenerate_bounds_raise(self, builder, bounds):
        with pytest.raises(ValueError, match="Degenerate"):
            builder(*bounds)


class TestPlaneMatrices:
    def test_projection_onto_plane(self):
        ground = make_plane_projection((0.0, 0.0, 1.0), (0.0, 0.0, 0.0))
        raised = make_plane_projection((0.0, 0.0, 1.0), (5.0, 5.0, 1.0))

        np.testing.assert_allclose(_apply(ground, (1.0, 2.0, 3.0)), [1.0, 2.0, 0.0])
        np.testing.assert_allclose(_apply(raised, (1.0, 2.0, 3.0)), [1.0, 2.0, 1.0])

    def test_reflection_through_plane(self):
        m = make_plane_reflection((0.0, 0.0, 1.0), (0.0, 0.0, 1.0))

        np.testing.assert_allclose(_apply(m, (1.0, 2.0, 3.0)), [1.0, 2.0, -1.0])
        # Reflecting twice is the identity
        np.testing.assert_allclose(m @ m, np.eye(4), atol=1e-12)


class TestUnproject:
    def test_identity_camera(self):
        identity = np.eye(4)

        center = unproject(identity, 0.0, 100.0, 0.0, 100.0, 50.0, 50.0, 0.5)
        corner = unproject(identity, 0.0, 100.0, 0.0, 100.0, 100.0, 100.0, 1.0)

        np.testing.assert_allclose(center, [0.0, 0.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(corner, [1.0, 1.0, 1.0], atol=1e-12)

    def test_round_trip(self, camera):
        """Test projecting a world point and unprojecting it gets it back."""
        world = np.array([0.3, -0.2, 0.0])
        ndc = _apply(camera, world)
        viewport = (10.0, 200.0, 20.0, 100.0)
        window_x = viewport[0] + (ndc[0] + 1.0) * 0.5 * viewport[1]
        window_y = viewport[2] + (ndc[1] + 1.0) * 0.5 * viewport[3]
        window_z = (ndc[2] + 1.0) * 0.5

        result = unproject(camera, *viewport, window_x, window_y, window_z)
        np.testing.assert_allclose(result, world, atol=1e-9)

    def test_outside_viewport(self, caplog):
        caplog.set_level(logging.DEBUG, logger="vector_math.camera.opengl")

        assert unproject(np.eye(4), 0.0, 100.0, 0.0, 100.0, 150.0, 50.0, 0.5) is None
        assert unproject(np.eye(4), 0.0, 100.0, 0.0, 100.0, 50.0, 50.0, 1.5) is None
        assert "outside the viewport" in caplog.text

    def test_singular_camera(self):
        assert unproject(np.zeros((4, 4)), 0.0, 100.0, 0.0, 100.0, 50.0, 50.0, 0.5) is None

    def test_point_at_infinity(self):
        m = np.eye(4)
        m[3, 2] = 1.0
        # Inverse has w' = w - z, which vanishes on the far plane
        assert unproject(m, 0.0, 100.0, 0.0, 100.0, 50.0, 50.0, 1.0) is None


class TestPickRay:
    def test_center_of_viewport(self, camera):
        result = pick_ray(camera, 0.0, 200.0, 0.0, 100.0, 100.0, 50.0)
        assert result is not None

        ray_near, ray_far = result
        np.testing.assert_allclose(ray_near, [0.0, 0.0, 4.0], atol=1e-9)
        np.testing.assert_allclose(ray_far, [0.0, 0.0, -5.0], atol=1e-9)

    def test_y_is_measured_from_top(self, camera):
        """Test a pick near the top edge lands above the view axis."""
        ray_near, ray_far = pick_ray(camera, 0.0, 200.0, 0.0, 100.0, 100.0, 10.0)

        assert ray_near[1] > 0.0
        assert ray_far[1] > ray_near[1]

    def test_outside_viewport(self, camera):
        assert pick_ray(camera, 0.0, 200.0, 0.0, 100.0, 300.0, 50.0) is None

    @pytest.mark.parametrize("width,height", [(0.0, 100.0), (100.0, 0.0)])
    def test_empty_viewport_raises(self, camera, width, height):
        with pytest.raises(ValueError, match="viewport"):
            pick_ray(camera, 0.0, width, 0.0, height, 0.0, 0.0)
        with pytest.raises(ValueError, match="viewport"):
            unproject(camera, 0.0, width, 0.0, height, 0.0, 0.0, 0.5)


class TestExamplePixelRays:
    @pytest.fixture
    def raycast_depth(self):
        import importlib.util
        from pathlib import Path

        pytest.importorskip("PIL")
        path = Path(__file__).resolve().parent.parent / "examples" / "raycast_depth.py"
        module_spec = importlib.util.spec_from_file_location("raycast_depth", path)
        module = importlib.util.module_from_spec(module_spec)
        module_spec.loader.exec_module(module)
        return module

    @pytest.mark.parametrize("i,j", [(0, 0), (7, 2), (15, 11)])
    def test_matches_pick_ray(self, raycast_depth, camera, i, j):
        """Test every pixel center unprojects the same way as pick_ray."""
        width, height = 16, 12
        near_points, far_points = raycast_depth.pixel_rays(camera, width, height)

        ray_near, ray_far = pick_ray(camera, 0.0, width, 0.0, height, i + 0.5, j + 0.5)
        np.testing.assert_allclose(near_points[i, j], ray_near, atol=1e-9)
        np.testing.assert_allclose(far_points[i, j], ray_far, atol=1e-9)
