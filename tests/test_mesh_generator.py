import math

import pytest

from rudemesh.geometry import Vec3
from rudemesh.mesh_generator import (
    calculate_normal,
    generate_cone,
    generate_cube,
    generate_cylinder,
    generate_grid,
    generate_icosphere,
    generate_plane,
    generate_sphere,
    generate_torus,
    spherical_to_uv,
)


def triangles(mesh):
    it = iter(mesh.indices)
    return list(zip(it, it, it))


def test_indices_are_in_range():
    meshes = [
        generate_cube(),
        generate_sphere(1.0, 8, 4),
        generate_cylinder(1.0, 2.0, 8),
        generate_plane(2.0, 2.0, 3, 2),
        generate_cone(1.0, 2.0, 8),
        generate_torus(1.0, 0.3, 8, 6),
        generate_icosphere(1.0, 1),
    ]
    for mesh in meshes:
        assert len(mesh.indices) > 0
        assert len(mesh.indices) % 3 == 0
        assert all(0 <= i < len(mesh.vertices) for i in mesh.indices)


def test_normals_are_unit_length():
    meshes = [
        generate_cube(),
        generate_sphere(1.0, 8, 4),
        generate_cylinder(1.0, 2.0, 8),
        generate_plane(2.0, 2.0, 3, 2),
        generate_cone(1.0, 2.0, 8),
        generate_torus(1.0, 0.3, 8, 6),
        generate_icosphere(1.0, 1),
    ]
    for mesh in meshes:
        lengths = [v.normal.length() for v in mesh.vertices]
        assert lengths == pytest.approx([1.0] * len(lengths), abs=1e-6)


def test_cube_bounds_match_size():
    low, high = generate_cube(3.0).bounding_box()
    assert tuple(low) == pytest.approx((-1.5, -1.5, -1.5))
    assert tuple(high) == pytest.approx((1.5, 1.5, 1.5))


def test_cube_triangles_wind_outward():
    mesh = generate_cube(2.0)
    assert len(mesh.vertices) == 24
    assert mesh.triangle_count() == 12
    for a, b, c in triangles(mesh):
        face_normal = calculate_normal(
            mesh.vertices[a].position, mesh.vertices[b].position, mesh.vertices[c].position
        )
        assert tuple(face_normal) == pytest.approx(tuple(mesh.vertices[a].normal), abs=1e-6)


def test_sphere_vertices_lie_on_radius():
    radius = 2.5
    mesh = generate_sphere(radius, 12, 6)
    assert len(mesh.vertices) == (12 + 1) * (6 + 1)
    for v in mesh.vertices:
        assert math.isclose(v.position.length(), radius, rel_tol=1e-9)
        assert tuple(v.normal) == pytest.approx(tuple(v.position / radius), abs=1e-6)


def test_sphere_first_vertex_is_top_pole():
    mesh = generate_sphere(2.0, 6, 3)
    assert tuple(mesh.vertices[0].position) == pytest.approx((0.0, 2.0, 0.0), abs=1e-6)


def test_sphere_rejects_zero_segments():
    with pytest.raises(ValueError):
        generate_sphere(1.0, 0, 4)


def test_cylinder_vertices_on_surface():
    radius, height = 1.5, 4.0
    mesh = generate_cylinder(radius, height, 10)
    for v in mesh.vertices:
        assert math.isclose(abs(v.position.y), height / 2)
        radial = math.hypot(v.position.x, v.position.z)
        assert math.isclose(radial, radius) or math.isclose(radial, 0.0, abs_tol=1e-12)


def test_cylinder_caps_face_away():
    mesh = generate_cylinder(1.0, 2.0, 6)
    for v in mesh.vertices:
        if math.isclose(math.hypot(v.position.x, v.position.z), 0.0, abs_tol=1e-12):
            assert math.copysign(1.0, v.normal.y) == math.copysign(1.0, v.position.y)


def test_plane_is_flat_and_faces_up():
    mesh = generate_plane(4.0, 6.0, 3, 2)
    assert len(mesh.vertices) == (3 + 1) * (2 + 1)
    assert all(v.position.y == 0.0 for v in mesh.vertices)
    for a, b, c in triangles(mesh):
        n = calculate_normal(mesh.vertices[a].position, mesh.vertices[b].position, mesh.vertices[c].position)
        assert tuple(n) == pytest.approx((0.0, 1.0, 0.0), abs=1e-6)
    low, high = mesh.bounding_box()
    assert tuple(low) == pytest.approx((-2.0, 0.0, -3.0), abs=1e-6)
    assert tuple(high) == pytest.approx((2.0, 0.0, 3.0), abs=1e-6)


def test_grid_is_line_pairs_without_indices():
    size, divisions = 8.0, 4
    mesh = generate_grid(size, divisions)
    assert mesh.indices == []
    assert len(mesh.vertices) == 4 * (divisions + 1)
    assert tuple(mesh.vertices[0].position) == pytest.approx((-size / 2, 0.0, -size / 2), abs=1e-6)
    for start, end in zip(mesh.vertices[0::2], mesh.vertices[1::2]):
        assert math.isclose((end.position - start.position).length(), size)


def test_cone_apex_and_side_normals():
    height = 3.0
    mesh = generate_cone(1.0, height, 8)
    assert tuple(mesh.vertices[0].position) == pytest.approx((0.0, height / 2, 0.0), abs=1e-6)
    side = mesh.vertices[2::2]
    assert all(v.normal.y > 0 for v in side)
    base = mesh.vertices[3::2]
    for v in base:
        assert tuple(v.normal) == pytest.approx((0.0, -1.0, 0.0), abs=1e-6)


def test_torus_vertices_on_tube():
    major, minor = 2.0, 0.5
    mesh = generate_torus(major, minor, 10, 8)
    for v in mesh.vertices:
        p = v.position
        ring_distance = math.hypot(p.x, p.z) - major
        assert math.isclose(math.hypot(ring_distance, p.y), minor, abs_tol=1e-9)


@pytest.mark.parametrize("level", [0, 1, 2])
def test_icosphere_faces_wind_outward(level):
    radius = 1.5
    mesh = generate_icosphere(radius, level)
    assert mesh.triangle_count() == 20 * 4**level
    for v in mesh.vertices:
        assert math.isclose(v.position.length(), radius, rel_tol=1e-9)
    for a, b, c in triangles(mesh):
        pa, pb, pc = (mesh.vertices[i].position for i in (a, b, c))
        centroid = (pa + pb + pc) / 3
        assert calculate_normal(pa, pb, pc).dot(centroid) > 0


def test_icosphere_base_has_twelve_vertices():
    assert len(generate_icosphere(1.0, 0).vertices) == 12


def test_icosphere_shares_midpoints():
    mesh = generate_icosphere(1.0, 1)
    positions = [tuple(round(c, 9) for c in v.position) for v in mesh.vertices]
    assert len(set(positions)) == len(positions)


def test_icosphere_rejects_negative_subdivisions():
    with pytest.raises(ValueError):
        generate_icosphere(1.0, -1)


def test_calculate_normal_orthogonal_to_edges():
    v0, v1, v2 = Vec3(0.3, 1.0, -2.0), Vec3(2.0, -1.0, 0.5), Vec3(-1.0, 0.0, 1.0)
    n = calculate_normal(v0, v1, v2)
    assert math.isclose(n.length(), 1.0)
    assert math.isclose(n.dot(v1 - v0), 0.0, abs_tol=1e-9)
    assert math.isclose(n.dot(v2 - v0), 0.0, abs_tol=1e-9)


def test_spherical_to_uv_on_positive_x():
    uv = spherical_to_uv(Vec3(3.0, 0.0, 0.0))
    assert math.isclose(uv.x, 0.5)
    assert math.isclose(uv.y, 0.5)


def test_spherical_to_uv_in_unit_square():
    for v in generate_sphere(1.0, 10, 6).vertices:
        uv = spherical_to_uv(v.position)
        assert 0.0 <= uv.x <= 1.0
        assert 0.0 <= uv.y <= 1.0