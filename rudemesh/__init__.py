"""Mesh primitives, OBJ reading and writing, asset caching and lighting presets."""

__version__ = "1.0.0"

__all__ = [
    "asset_manager",
    "format_manager",
    "geometry",
    "lighting",
    "mesh_generator",
    "obj_format",
]