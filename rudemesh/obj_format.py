"""Reading and writing Wavefront OBJ files."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from os import PathLike
from typing import Iterable, Optional, Sequence, TextIO, Union

from rudemesh.geometry import Mesh, Vec2, Vec3, Vertex

logger = logging.getLogger(__name__)

PathType = Union[str, "PathLike[str]"]
_HEADER = "# Written by rudemesh"
_DEFAULT_MESH_NAME = "ImportedMesh"

# A face corner: (vertex index, texture coordinate index, normal index), zero-based.
# Missing or invalid optional indices are stored as -1.
_Corner = tuple[int, int, int]


class ObjFormatError(Exception):
    """Raised when OBJ data cannot be read or written."""


@dataclass
class ImportOptions:
    """Settings applied while building a mesh from OBJ data."""

    merge_vertices: bool = True
    generate_normals: bool = True
    generate_tex_coords: bool = False
    vertex_merge_tolerance: float = 1e-6


@dataclass
class ExportOptions:
    """Settings controlling what is written to an OBJ file."""

    export_normals: bool = True
    export_tex_coords: bool = True
    export_groups: bool = False
    precision: int = 6


@dataclass
class ImportResult:
    """Meshes read from OBJ data, with the raw vertex and face counts."""

    meshes: list[Mesh] = field(default_factory=list)
    mesh_names: list[str] = field(default_factory=list)
    vertex_count: int = 0
    face_count: int = 0


def format_float(value: float, precision: int) -> str:
    """Fixed-point text for a coordinate with the given number of decimals."""
    return f"{value:.{precision}f}"


def parse_index(text: str, max_index: int) -> int:
    """Zero-based index for a one-based or negative (relative) OBJ index."""
    try:
        index = int(text)
    except ValueError:
        raise ObjFormatError(f"invalid index: {text!r}") from None
    if index > 0:
        return index - 1
    if index < 0:
        return max_index + index
    raise ObjFormatError("index 0 is not valid in OBJ data")


def _parse_floats(args: Sequence[str], count: int) -> Optional[tuple[float, ...]]:
    if len(args) < count:
        return None
    try:
        return tuple(float(token) for token in args[:count])
    except ValueError:
        return None


def _parse_optional_index(parts: list[str], position: int) -> int:
    if len(parts) <= position or not parts[position]:
        return -1
    try:
        index = int(parts[position]) - 1
    except ValueError:
        return -1
    return index if index >= 0 else -1


def _parse_face(args: Sequence[str]) -> Optional[list[_Corner]]:
    if len(args) < 3:
        return None
    corners: list[_Corner] = []
    for token in args:
        parts = token.split("/")
        try:
            vertex_index = int(parts[0]) - 1
        except ValueError:
            return None
        if vertex_index < 0:
            return None
        corners.append(
            (vertex_index, _parse_optional_index(parts, 1), _parse_optional_index(parts, 2))
        )
    return corners


def _grid_key(position: Vec3, cell: float) -> tuple[int, int, int]:
    return (
        math.floor(position.x / cell),
        math.floor(position.y / cell),
        math.floor(position.z / cell),
    )


def merge_vertices(
    vertices: Sequence[Vertex], indices: Sequence[int], tolerance: float
) -> tuple[list[Vertex], list[int]]:
    """Collapse vertices closer than ``tolerance`` to the first one seen.

    Returns the merged vertex list and the remapped index list.
    """
    if tolerance <= 0.0:
        return list(vertices), list(indices)

    merged: list[Vertex] = []
    grid: dict[tuple[int, int, int], list[int]] = {}
    vertex_map: list[int] = []

    for vertex in vertices:
        kx, ky, kz = _grid_key(vertex.position, tolerance)
        match: Optional[int] = None
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for dz in (-1, 0, 1):
                    for candidate in grid.get((kx + dx, ky + dy, kz + dz), ()):
                        if (match is None or candidate < match) and (
                            (vertex.position - merged[candidate].position).length() < tolerance
                        ):
                            match = candidate
        if match is None:
            match = len(merged)
            merged.append(vertex)
            grid.setdefault((kx, ky, kz), []).append(match)
        vertex_map.append(match)

    remapped = [vertex_map[i] if 0 <= i < len(vertex_map) else i for i in indices]
    return merged, remapped


def generate_normals(vertices: Sequence[Vertex], indices: Sequence[int]) -> list[Vertex]:
    """Vertices with smooth normals averaged from the faces that use them."""
    sums = [Vec3() for _ in vertices]
    for start in range(0, len(indices) - 2, 3):
        a, b, c = indices[start:start + 3]
        v0, v1, v2 = vertices[a].position, vertices[b].position, vertices[c].position
        face_normal = (v1 - v0).cross(v2 - v0).normalized()
        for i in (a, b, c):
            sums[i] = sums[i] + face_normal
    return [
        Vertex(vertex.position, total.normalized(), vertex.tex_coord)
        for vertex, total in zip(vertices, sums)
    ]


def _build_mesh(
    positions: list[Vec3],
    normals: list[Vec3],
    tex_coords: list[Vec2],
    faces: list[list[_Corner]],
    options: ImportOptions,
) -> Mesh:
    vertices: list[Vertex] = []
    indices: list[int] = []

    for face in faces:
        for i in range(1, len(face) - 1):
            for vertex_index, tex_index, normal_index in (face[0], face[i], face[i + 1]):
                if not 0 <= vertex_index < len(positions):
                    logger.warning("Invalid vertex index: %d", vertex_index)
                    continue
                normal = normals[normal_index] if 0 <= normal_index < len(normals) else Vec3()
                tex = tex_coords[tex_index] if 0 <= tex_index < len(tex_coords) else Vec2()
                vertices.append(Vertex(positions[vertex_index], normal, tex))
                indices.append(len(vertices) - 1)

    if options.merge_vertices:
        vertices, indices = merge_vertices(vertices, indices, options.vertex_merge_tolerance)
    if options.generate_normals:
        vertices = generate_normals(vertices, indices)
    return Mesh(vertices=vertices, indices=indices)


def read_obj(stream: Iterable[str], options: Optional[ImportOptions] = None) -> ImportResult:
    """Read OBJ text from an iterable of lines; malformed lines are skipped."""
    options = options or ImportOptions()
    positions: list[Vec3] = []
    normals: list[Vec3] = []
    tex_coords: list[Vec2] = []
    faces: list[list[_Corner]] = []

    for number, raw in enumerate(stream, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        command, *args = line.split()

        if command in ("v", "vn"):
            values = _parse_floats(args, 3)
            if values is None:
                kind = "vertex" if command == "v" else "normal"
                logger.warning("Invalid %s at line %d", kind, number)
            else:
                (positions if command == "v" else normals).append(Vec3(*values))
        elif command == "vt":
            values = _parse_floats(args, 2)
            if values is None:
                logger.warning("Invalid texture coordinate at line %d", number)
            else:
                tex_coords.append(Vec2(*values))
        elif command == "f":
            corners = _parse_face(args)
            if corners is None:
                logger.warning("Invalid face at line %d", number)
            else:
                faces.append(corners)

    mesh = _build_mesh(positions, normals, tex_coords, faces, options)
    return ImportResult(
        meshes=[mesh],
        mesh_names=[_DEFAULT_MESH_NAME],
        vertex_count=len(positions),
        face_count=len(faces),
    )


def load_obj(path: PathType, options: Optional[ImportOptions] = None) -> ImportResult:
    """Read an OBJ file from disk."""
    try:
        with open(path, encoding="utf-8") as stream:
            return read_obj(stream, options)
    except OSError as error:
        raise ObjFormatError(f"Cannot open file: {path}") from error


def _write_attributes(stream: TextIO, vertices: Sequence[Vertex], options: ExportOptions) -> None:
    p = options.precision
    for vertex in vertices:
        x, y, z = vertex.position
        stream.write(f"v {format_float(x, p)} {format_float(y, p)} {format_float(z, p)}\n")
    if options.export_normals:
        for vertex in vertices:
            x, y, z = vertex.normal
            stream.write(f"vn {format_float(x, p)} {format_float(y, p)} {format_float(z, p)}\n")
    if options.export_tex_coords:
        for vertex in vertices:
            u, v = vertex.tex_coord
            stream.write(f"vt {format_float(u, p)} {format_float(v, p)}\n")


def _corner_text(index: int, options: ExportOptions) -> str:
    text = str(index)
    if options.export_tex_coords:
        text += f"/{index}"
    if options.export_normals:
        if not options.export_tex_coords:
            text += "/"
        text += f"/{index}"
    return text


def _write_faces(stream: TextIO, indices: Sequence[int], offset: int, options: ExportOptions) -> None:
    for start in range(0, len(indices) - 2, 3):
        corners = (_corner_text(i + offset + 1, options) for i in indices[start:start + 3])
        stream.write("f " + " ".join(corners) + "\n")


def write_obj(stream: TextIO, mesh: Mesh, options: Optional[ExportOptions] = None) -> None:
    """Write one mesh as OBJ text to a text stream."""
    if mesh is None:
        raise ObjFormatError("no mesh to export")
    options = options or ExportOptions()
    stream.write(f"{_HEADER}\n")
    stream.write(f"# Vertices: {len(mesh.vertices)}\n")
    stream.write(f"# Faces: {len(mesh.indices) // 3}\n")
    stream.write("\n")
    _write_attributes(stream, mesh.vertices, options)
    stream.write("\n")
    _write_faces(stream, mesh.indices, 0, options)


def save_obj(path: PathType, mesh: Mesh, options: Optional[ExportOptions] = None) -> None:
    """Write one mesh to an OBJ file."""
    if mesh is None:
        raise ObjFormatError("no mesh to export")
    with open(path, "w", encoding="utf-8") as stream:
        write_obj(stream, mesh, options)


def save_obj_meshes(
    path: PathType, meshes: Sequence[Optional[Mesh]], options: Optional[ExportOptions] = None
) -> None:
    """Write several meshes to one OBJ file, each as its own group and object."""
    if not meshes:
        raise ObjFormatError("no meshes to export")
    options = options or ExportOptions()
    with open(path, "w", encoding="utf-8") as stream:
        stream.write(f"{_HEADER}\n")
        stream.write(f"# Meshes: {len(meshes)}\n")
        stream.write("\n")
        offset = 0
        for number, mesh in enumerate(meshes):
            if mesh is None:
                continue
            stream.write(f"g mesh_{number}\n")
            stream.write(f"o mesh_{number}\n")
            _write_attributes(stream, mesh.vertices, options)
            _write_faces(stream, mesh.indices, offset, options)
            offset += len(mesh.vertices)
            stream.write("\n")