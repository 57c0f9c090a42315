"""Procedural generation of primitive meshes."""

from __future__ import annotations

import math

from rudemesh.geometry import Mesh, Vec2, Vec3, Vertex

_UP = Vec3(0.0, 1.0, 0.0)
_DOWN = Vec3(0.0, -1.0, 0.0)


def _require_positive(name: str, value: int) -> None:
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")


def _angle(step: int, count: int) -> float:
    return step * 2.0 * math.pi / count


def _grid_indices(rows: int, columns: int) -> list[int]:
    """Two triangles per cell of a (rows+1) x (columns+1) vertex lattice."""
    indices: list[int] = []
    for row in range(rows):
        for column in range(columns):
            current = row * (columns + 1) + column
            below = current + columns + 1
            indices += [current, below, current + 1, current + 1, below, below + 1]
    return indices


def generate_cube(size: float = 1.0) -> Mesh:
    """Axis-aligned cube centred on the origin, with four vertices per face."""
    h = size * 0.5
    corners = [
        Vec3(-h, -h, -h), Vec3(h, -h, -h), Vec3(h, h, -h), Vec3(-h, h, -h),
        Vec3(-h, -h, h), Vec3(h, -h, h), Vec3(h, h, h), Vec3(-h, h, h),
    ]
    faces = [
        ((1, 0, 3, 2), Vec3(0, 0, -1)),
        ((4, 5, 6, 7), Vec3(0, 0, 1)),
        ((0, 4, 7, 3), Vec3(-1, 0, 0)),
        ((5, 1, 2, 6), Vec3(1, 0, 0)),
        ((0, 1, 5, 4), Vec3(0, -1, 0)),
        ((3, 7, 6, 2), Vec3(0, 1, 0)),
    ]
    uvs = [Vec2(0, 0), Vec2(1, 0), Vec2(1, 1), Vec2(0, 1)]

    mesh = Mesh()
    for corner_ids, normal in faces:
        base = len(mesh.vertices)
        mesh.vertices += [Vertex(corners[c], normal, uv) for c, uv in zip(corner_ids, uvs)]
        mesh.indices += [base, base + 1, base + 2, base, base + 2, base + 3]
    return mesh


def generate_sphere(radius: float = 1.0, segments: int = 32, rings: int = 16) -> Mesh:
    """UV sphere with poles on the Y axis."""
    _require_positive("segments", segments)
    _require_positive("rings", rings)
    mesh = Mesh()
    for ring in range(rings + 1):
        theta = ring * math.pi / rings
        sin_t, cos_t = math.sin(theta), math.cos(theta)
        for segment in range(segments + 1):
            phi = _angle(segment, segments)
            position = Vec3(radius * sin_t * math.cos(phi), radius * cos_t, radius * sin_t * math.sin(phi))
            mesh.vertices.append(
                Vertex(position, position.normalized(), Vec2(segment / segments, ring / rings))
            )
    mesh.indices = _grid_indices(rings, segments)
    return mesh


def generate_cylinder(radius: float = 1.0, height: float = 2.0, segments: int = 32) -> Mesh:
    """Capped cylinder along the Y axis, centred on the origin."""
    _require_positive("segments", segments)
    half = height * 0.5
    mesh = Mesh()

    for segment in range(segments + 1):
        angle = _angle(segment, segments)
        c, s = math.cos(angle), math.sin(angle)
        normal = Vec3(c, 0.0, s)
        u = segment / segments
        mesh.vertices.append(Vertex(Vec3(radius * c, -half, radius * s), normal, Vec2(u, 0.0)))
        mesh.vertices.append(Vertex(Vec3(radius * c, half, radius * s), normal, Vec2(u, 1.0)))

    for segment in range(segments):
        current = segment * 2
        following = (segment + 1) * 2
        mesh.indices += [current, following, current + 1, current + 1, following, following + 1]

    for y, normal, v_sign, flip in ((-half, _DOWN, 1.0, False), (half, _UP, -1.0, True)):
        center = len(mesh.vertices)
        mesh.vertices.append(Vertex(Vec3(0.0, y, 0.0), normal, Vec2(0.5, 0.5)))
        for segment in range(segments):
            angle = _angle(segment, segments)
            c, s = math.cos(angle), math.sin(angle)
            mesh.vertices.append(
                Vertex(Vec3(radius * c, y, radius * s), normal, Vec2(0.5 + 0.5 * c, 0.5 + v_sign * 0.5 * s))
            )
        for segment in range(segments):
            current = center + 1 + segment
            following = center + 1 + (segment + 1) % segments
            if flip:
                mesh.indices += [center, following, current]
            else:
                mesh.indices += [center, current, following]
    return mesh


def generate_plane(
    width: float = 2.0, height: float = 2.0, width_segments: int = 1, height_segments: int = 1
) -> Mesh:
    """Subdivided plane in the XZ plane facing +Y."""
    _require_positive("width_segments", width_segments)
    _require_positive("height_segments", height_segments)
    half_w, half_h = width * 0.5, height * 0.5
    mesh = Mesh()
    for y in range(height_segments + 1):
        v = y / height_segments
        for x in range(width_segments + 1):
            u = x / width_segments
            mesh.vertices.append(
                Vertex(Vec3(-half_w + u * width, 0.0, -half_h + v * height), _UP, Vec2(u, v))
            )
    mesh.indices = _grid_indices(height_segments, width_segments)
    return mesh


def generate_grid(size: float = 10.0, divisions: int = 10) -> Mesh:
    """Line-list grid in the XZ plane: pairs of vertices, no index list."""
    _require_positive("divisions", divisions)
    half = size * 0.5
    step = size / divisions
    mesh = Mesh()
    for i in range(divisions + 1):
        z = -half + i * step
        mesh.vertices += [Vertex(Vec3(-half, 0.0, z)), Vertex(Vec3(half, 0.0, z))]
    for i in range(divisions + 1):
        x = -half + i * step
        mesh.vertices += [Vertex(Vec3(x, 0.0, -half)), Vertex(Vec3(x, 0.0, half))]
    return mesh


def generate_cone(radius: float = 1.0, height: float = 2.0, segments: int = 32) -> Mesh:
    """Cone with its apex on +Y and a capped base, centred on the origin."""
    _require_positive("segments", segments)
    half = height * 0.5
    apex = Vertex(Vec3(0.0, half, 0.0), _UP, Vec2(0.5, 0.5))
    mesh = Mesh(vertices=[apex, Vertex(Vec3(0.0, -half, 0.0), _DOWN, Vec2(0.5, 0.5))])

    for i in range(segments + 1):
        angle = _angle(i, segments)
        c, s = math.cos(angle), math.sin(angle)
        position = Vec3(radius * c, -half, radius * s)
        to_apex = (apex.position - position).normalized()
        radial = Vec3(position.x, 0.0, position.z).normalized()
        side_normal = to_apex.cross(radial).cross(to_apex).normalized()
        mesh.vertices.append(Vertex(position, side_normal, Vec2(i / segments, 0.0)))
        mesh.vertices.append(Vertex(position, _DOWN, Vec2(0.5 + 0.5 * c, 0.5 + 0.5 * s)))

    for i in range(segments):
        mesh.indices += [0, 2 + i * 2, 2 + (i + 1) % segments * 2]
    for i in range(segments):
        mesh.indices += [1, 3 + (i + 1) % segments * 2, 3 + i * 2]
    return mesh


def generate_torus(
    major_radius: float = 1.0,
    minor_radius: float = 0.3,
    major_segments: int = 32,
    minor_segments: int = 16,
) -> Mesh:
    """Torus lying in the XZ plane around the Y axis."""
    _require_positive("major_segments", major_segments)
    _require_positive("minor_segments", minor_segments)
    mesh = Mesh()
    for i in range(major_segments + 1):
        major = _angle(i, major_segments)
        cos_major, sin_major = math.cos(major), math.sin(major)
        center = Vec3(major_radius * cos_major, 0.0, major_radius * sin_major)
        for j in range(minor_segments + 1):
            minor = _angle(j, minor_segments)
            reach = major_radius + minor_radius * math.cos(minor)
            position = Vec3(reach * cos_major, minor_radius * math.sin(minor), reach * sin_major)
            mesh.vertices.append(
                Vertex(position, (position - center).normalized(), Vec2(i / major_segments, j / minor_segments))
            )

    for i in range(major_segments):
        for j in range(minor_segments):
            current = i * (minor_segments + 1) + j
            following = current + minor_segments + 1
            mesh.indices += [current, following, current + 1, following, following + 1, current + 1]
    return mesh


def generate_icosphere(radius: float = 1.0, subdivisions: int = 2) -> Mesh:
    """Sphere built by repeatedly subdividing an icosahedron."""
    if subdivisions < 0:
        raise ValueError(f"subdivisions must not be negative, got {subdivisions}")
    phi = (1.0 + math.sqrt(5.0)) * 0.5
    seeds = [
        (-1, phi, 0), (1, phi, 0), (-1, -phi, 0), (1, -phi, 0),
        (0, -1, phi), (0, 1, phi), (0, -1, -phi), (0, 1, -phi),
        (phi, 0, -1), (phi, 0, 1), (-phi, 0, -1), (-phi, 0, 1),
    ]
    positions = [Vec3(*seed).normalized() * radius for seed in seeds]
    faces = [
        (0, 11, 5), (0, 5, 1), (0, 1, 7), (0, 7, 10), (0, 10, 11),
        (1, 5, 9), (5, 11, 4), (11, 10, 2), (10, 7, 6), (7, 1, 8),
        (3, 9, 4), (3, 4, 2), (3, 2, 6), (3, 6, 8), (3, 8, 9),
        (4, 9, 5), (2, 4, 11), (6, 2, 10), (8, 6, 7), (9, 8, 1),
    ]

    for _ in range(subdivisions):
        cache: dict[tuple[int, int], int] = {}

        def midpoint(i: int, j: int) -> int:
            key = (min(i, j), max(i, j))
            if key not in cache:
                cache[key] = len(positions)
                positions.append(((positions[i] + positions[j]) * 0.5).normalized() * radius)
            return cache[key]

        subdivided = []
        for a, b, c in faces:
            ab, bc, ac = midpoint(a, b), midpoint(b, c), midpoint(a, c)
            subdivided += [(a, ab, ac), (b, bc, ab), (c, ac, bc), (ab, bc, ac)]
        faces = subdivided

    mesh = Mesh()
    mesh.vertices = [Vertex(p, p.normalized(), spherical_to_uv(p)) for p in positions]
    mesh.indices = [index for face in faces for index in face]
    return mesh


def calculate_normal(v0: Vec3, v1: Vec3, v2: Vec3) -> Vec3:
    """Unit normal of the counter-clockwise triangle v0, v1, v2."""
    return (v1 - v0).cross(v2 - v0).normalized()


def spherical_to_uv(position: Vec3) -> Vec2:
    """Equirectangular texture coordinate for a direction from the origin."""
    n = position.normalized()
    u = 0.5 + math.atan2(n.z, n.x) / (2.0 * math.pi)
    v = 0.5 - math.asin(max(-1.0, min(1.0, n.y))) / math.pi
    return Vec2(u, v)