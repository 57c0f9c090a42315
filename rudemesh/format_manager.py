"""One entry point for importing and exporting meshes by file extension."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Optional, Sequence, Union

from rudemesh.geometry import Mesh
from rudemesh.obj_format import ExportOptions, ImportOptions, load_obj, save_obj, save_obj_meshes

PathType = Union[str, "PathLike[str]"]

_OBJ_IMPORT_OPTIONS = ImportOptions()
_OBJ_EXPORT_OPTIONS = ExportOptions()


class FileFormat(enum.Enum):
    """Mesh file formats recognised by extension."""

    OBJ = "obj"
    STL = "stl"
    PLY = "ply"
    UNKNOWN = "unknown"


class UnsupportedFormatError(Exception):
    """Raised when a file's format cannot be read or written."""


@dataclass
class ImportedFile:
    """Meshes read from a file together with the format that was detected."""

    path: str
    detected_format: FileFormat
    meshes: list[Mesh] = field(default_factory=list)
    mesh_names: list[str] = field(default_factory=list)


def _extension(path: PathType) -> str:
    name = Path(path).name
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


def detect_format(path: PathType) -> FileFormat:
    """Format named by the file's last extension, case-insensitively."""
    extension = _extension(path)
    for file_format in FileFormat:
        if file_format is not FileFormat.UNKNOWN and file_format.value == extension:
            return file_format
    return FileFormat.UNKNOWN


def supported_import_extensions() -> list[str]:
    """Extensions that the manager knows about for import."""
    return ["obj", "stl", "ply"]


def supported_export_extensions() -> list[str]:
    """Extensions that the manager knows about for export."""
    return ["obj", "stl", "ply"]


def import_file(path: PathType) -> ImportedFile:
    """Read every mesh from a file whose format is chosen by its extension."""
    file_format = detect_format(path)
    if file_format is FileFormat.OBJ:
        result = load_obj(path, _OBJ_IMPORT_OPTIONS)
        return ImportedFile(
            path=str(path),
            detected_format=file_format,
            meshes=list(result.meshes),
            mesh_names=list(result.mesh_names),
        )
    if file_format is FileFormat.UNKNOWN:
        raise UnsupportedFormatError("Unsupported file format")
    raise UnsupportedFormatError(f"{file_format.name} import is unavailable")


def export_file(path: PathType, mesh: Optional[Mesh]) -> None:
    """Write one mesh in the format chosen by the file's extension."""
    file_format = detect_format(path)
    if file_format is FileFormat.OBJ:
        save_obj(path, mesh, _OBJ_EXPORT_OPTIONS)
        return
    if file_format is FileFormat.UNKNOWN:
        raise UnsupportedFormatError("Unsupported file format")
    raise UnsupportedFormatError(f"{file_format.name} export is unavailable")


def export_meshes(path: PathType, meshes: Sequence[Optional[Mesh]]) -> None:
    """Write several meshes; formats without multi-mesh support get the first one."""
    if detect_format(path) is FileFormat.OBJ:
        save_obj_meshes(path, meshes, _OBJ_EXPORT_OPTIONS)
        return
    if not meshes:
        raise ValueError("no meshes to export")
    export_file(path, meshes[0])