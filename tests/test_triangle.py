"""Tests for triangle primitive and ray/triangle intersection."""

import taichi as ti

from vector_math.core.vector import vec3, vec4

# Triangle in the z=0 plane used by most tests
P0 = (-1.0, -1.0, 0.0)
P1 = (1.0, -1.0, 0.0)
P2 = (0.0, 1.0, 0.0)


def _run_triangle_query(origin, direction, p0=P0, p1=P1, p2=P2):
    """Run intersect_triangle_barycentric in a kernel, return (hit, t, u, v)."""
    from vector_math.core.ray import Ray, intersect_triangle_barycentric
    from vector_math.geometry.triangle import Triangle

    result = ti.field(dtype=vec4, shape=())

    @ti.kernel
    def test_kernel(o: vec3, d: vec3, a: vec3, b: vec3, c: vec3):
        rec = intersect_triangle_barycentric(
            Ray(origin=o, direction=d), Triangle(point0=a, point1=b, point2=c)
        )
        result[None] = vec4(ti.cast(rec.hit, ti.f64), rec.t, rec.u, rec.v)

    test_kernel(vec3(*origin), vec3(*direction), vec3(*p0), vec3(*p1), vec3(*p2))
    r = result[None]
    return int(r[0]), r[1], r[2], r[3]


class TestTriangleIntersection:
    """Tests for the Moller-Trumbore ray/triangle test."""

    def test_hit_through_interior(self):
        """Test a perpendicular ray through the interior."""
        hit, t, u, v = _run_triangle_query((0.0, 0.0, -1.0), (0.0, 0.0, 1.0))

        assert hit == 1
        assert abs(t - 1.0) < 1e-12
        assert abs(u - 0.25) < 1e-12
        assert abs(v - 0.5) < 1e-12

    def test_behind_origin_reports_negative_t(self):
        """Test the triangle behind the origin is still reported."""
        hit, t, _, _ = _run_triangle_query((0.0, 0.0, 1.0), (0.0, 0.0, 1.0))

        assert hit == 1
        assert abs(t + 1.0) < 1e-12

    def test_parallel_ray_misses(self):
        """Test a ray parallel to the triangle plane."""
        hit, _, _, _ = _run_triangle_query((0.0, 0.0, -1.0), (1.0, 0.0, 0.0))
        assert hit == 0

    def test_ray_in_plane_misses(self):
        """Test a ray lying in the triangle plane."""
        hit, _, _, _ = _run_triangle_query((-5.0, 0.0, 0.0), (1.0, 0.0, 0.0))
        assert hit == 0

    def test_outside_misses(self):
        """Test rays passing beside the triangle."""
        hit, _, _, _ = _run_triangle_query((0.6, 0.0, -1.0), (0.0, 0.0, 1.0))
        assert hit == 0

        hit, _, _, _ = _run_triangle_query((0.0, -2.0, -1.0), (0.0, 0.0, 1.0))
        assert hit == 0

    def test_edge_is_inclusive(self):
        """Test a ray exactly on the point1-point2 edge hits."""
        hit, t, u, v = _run_triangle_query((0.5, 0.0, -1.0), (0.0, 0.0, 1.0))

        assert hit == 1
        assert abs(t - 1.0) < 1e-12
        assert abs(u + v - 1.0) < 1e-12

    def test_edge_tolerance(self):
        """Test u + v slightly above 1 is accepted within tolerance."""
        hit, _, u, v = _run_triangle_query((0.5 + 1e-5, 0.0, -1.0), (0.0, 0.0, 1.0))

        assert hit == 1
        assert u + v > 1.0

    def test_vertex_hit(self):
        """Test a ray through point0 hits with both weights at zero."""
        hit, t, u, v = _run_triangle_query((-1.0, -1.0, -2.0), (0.0, 0.0, 1.0))

        assert hit == 1
        assert abs(t - 2.0) < 1e-12
        assert abs(u) < 1e-12
        assert abs(v) < 1e-12

    def test_degenerate_triangle_misses(self):
        """Test a triangle with collinear points is never hit."""
        hit, _, _, _ = _run_triangle_query(
            (1.0, 0.0, -1.0),
            (0.0, 0.0, 1.0),
            p0=(0.0, 0.0, 0.0),
            p1=(1.0, 0.0, 0.0),
            p2=(2.0, 0.0, 0.0),
        )
        assert hit == 0

    def test_oblique_hit_point_matches_barycentric(self):
        """Test ray_at(t) and the barycentric point agree."""
        from vector_math.core.ray import Ray, intersect_triangle_barycentric, ray_at
        from vector_math.geometry.triangle import Triangle, triangle_point_from_barycentric

        along_ray = ti.field(dtype=vec3, shape=())
        from_weights = ti.field(dtype=vec3, shape=())
        hit = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            tri = Triangle(
                point0=vec3(0.0, 0.0, 1.0),
                point1=vec3(2.0, 0.0, 2.0),
                point2=vec3(0.0, 3.0, 1.5),
            )
            ray = Ray(origin=vec3(0.3, 0.4, -2.0), direction=vec3(0.1, 0.2, 1.0))
            rec = intersect_triangle_barycentric(ray, tri)
            hit[None] = rec.hit
            along_ray[None] = ray_at(ray, rec.t)
            from_weights[None] = triangle_point_from_barycentric(tri, rec.u, rec.v)

        test_kernel()
        assert hit[None] == 1
        for i in range(3):
            assert abs(along_ray[None][i] - from_weights[None][i]) < 1e-9

    def test_distance_only_variant_agrees(self):
        """Test intersect_triangle matches the barycentric variant."""
        from vector_math.core.ray import Ray, intersect_triangle
        from vector_math.geometry.triangle import Triangle

        hit = ti.field(dtype=ti.i32, shape=())
        t_val = ti.field(dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            tri = Triangle(
                point0=vec3(-1.0, -1.0, 0.0),
                point1=vec3(1.0, -1.0, 0.0),
                point2=vec3(0.0, 1.0, 0.0),
            )
            rec = intersect_triangle(
                Ray(origin=vec3(0.0, 0.0, -1.0), direction=vec3(0.0, 0.0, 1.0)), tri
            )
            hit[None] = rec.hit
            t_val[None] = rec.t

        test_kernel()
        assert hit[None] == 1
        assert abs(t_val[None] - 1.0) < 1e-12


class TestTriangleHelpers:
    """Tests for triangle normal, area and barycentric points."""

    def test_normal_and_area(self):
        """Test normal of a counter-clockwise triangle in the xy-plane."""
        from vector_math.geometry.triangle import make_triangle, triangle_area, triangle_normal

        normal = ti.field(dtype=vec3, shape=())
        area = ti.field(dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            tri = make_triangle(
                vec3(-1.0, -1.0, 0.0), vec3(1.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0)
            )
            normal[None] = triangle_normal(tri)
            area[None] = triangle_area(tri)

        test_kernel()
        n = normal[None]
        assert abs(n[0]) < 1e-12
        assert abs(n[1]) < 1e-12
        assert abs(n[2] - 1.0) < 1e-12
        assert abs(area[None] - 2.0) < 1e-12

    def test_degenerate_normal_is_zero(self):
        """Test a collinear triangle has a zero normal and area."""
        from vector_math.geometry.triangle import make_triangle, triangle_area, triangle_normal

        normal = ti.field(dtype=vec3, shape=())
        area = ti.field(dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            tri = make_triangle(vec3(0.0, 0.0, 0.0), vec3(1.0, 1.0, 1.0), vec3(2.0, 2.0, 2.0))
            normal[None] = triangle_normal(tri)
            area[None] = triangle_area(tri)

        test_kernel()
        assert all(abs(normal[None][i]) < 1e-12 for i in range(3))
        assert abs(area[None]) < 1e-12

    def test_barycentric_corners(self):
        """Test (u, v) = (1, 0) and (0, 1) give point1 and point2."""
        from vector_math.geometry.triangle import make_triangle, triangle_point_from_barycentric

        at_p1 = ti.field(dtype=vec3, shape=())
        at_p2 = ti.field(dtype=vec3, shape=())

        @ti.kernel
        def test_kernel():
            tri = make_triangle(
                vec3(-1.0, -1.0, 0.0), vec3(1.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0)
            )
            at_p1[None] = triangle_point_from_barycentric(tri, 1.0, 0.0)
            at_p2[None] = triangle_point_from_barycentric(tri, 0.0, 1.0)

        test_kernel()
        for i in range(3):
            assert abs(at_p1[None][i] - P1[i]) < 1e-12
            assert abs(at_p2[None][i] - P2[i]) < 1e-12
