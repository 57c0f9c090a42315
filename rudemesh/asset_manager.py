"""Named caches of meshes and materials, with primitive factories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from rudemesh.geometry import Mesh
from rudemesh.mesh_generator import (
    generate_cone,
    generate_cube,
    generate_cylinder,
    generate_grid,
    generate_plane,
    generate_sphere,
)

Color = tuple[float, float, float, float]
AssetCallback = Callable[[str, str], None]

_MESH = "Mesh"
_MATERIAL = "Material"
_DEFAULT_MATERIAL_NAME = "Default"


@dataclass
class Material:
    """Surface appearance: RGBA colours and a specular exponent."""

    diffuse_color: Color = (1.0, 1.0, 1.0, 1.0)
    specular_color: Color = (0.0, 0.0, 0.0, 1.0)
    ambient_color: Color = (0.2, 0.2, 0.2, 1.0)
    shininess: float = 32.0


def _unique_name(base: str, existing: set[str]) -> str:
    name = base
    counter = 1
    while name in existing:
        name = f"{base}_{counter}"
        counter += 1
    return name


class AssetManager:
    """Keeps meshes and materials under unique names."""

    def __init__(self) -> None:
        self._meshes: dict[str, Mesh] = {}
        self._materials: dict[str, Material] = {}
        self._mesh_counter = 1
        self._material_counter = 1
        self._loaded_callbacks: list[AssetCallback] = []

    def on_asset_loaded(self, callback: AssetCallback) -> None:
        """Register a callback called with (name, kind) whenever an asset is added."""
        self._loaded_callbacks.append(callback)

    def _emit_loaded(self, name: str, kind: str) -> None:
        for callback in self._loaded_callbacks:
            callback(name, kind)

    def initialize(self) -> bool:
        """Create the default assets."""
        self.create_default_material()
        return True

    def cleanup(self) -> None:
        """Drop every cached asset."""
        self.clear_cache()

    # Meshes

    def _store_mesh(self, name: str, mesh: Mesh) -> Mesh:
        self._meshes[name] = mesh
        self._emit_loaded(name, _MESH)
        return mesh

    def create_mesh(self, name: str) -> Mesh:
        """Add an empty mesh; a taken name gets a numeric suffix."""
        unique = _unique_name(name, set(self._meshes))
        return self._store_mesh(unique, Mesh())

    def get_mesh(self, name: str) -> Optional[Mesh]:
        """The mesh stored under ``name``, or None."""
        return self._meshes.get(name)

    def remove_mesh(self, name: str) -> None:
        """Forget the mesh stored under ``name``, if any."""
        self._meshes.pop(name, None)

    def _next_mesh_name(self, prefix: str) -> str:
        name = f"{prefix}_{self._mesh_counter}"
        self._mesh_counter += 1
        return name

    def create_cube_mesh(self, size: float = 1.0) -> Mesh:
        """Generate and store a cube."""
        name = self._next_mesh_name("Cube")
        return self._store_mesh(name, generate_cube(size))

    def create_sphere_mesh(self, radius: float = 0.5, segments: int = 32, rings: int = 16) -> Mesh:
        """Generate and store a UV sphere."""
        name = self._next_mesh_name("Sphere")
        return self._store_mesh(name, generate_sphere(radius, segments, rings))

    def create_plane_mesh(self, width: float = 2.0, height: float = 2.0) -> Mesh:
        """Generate and store a single-quad plane."""
        name = self._next_mesh_name("Plane")
        return self._store_mesh(name, generate_plane(width, height))

    def create_cylinder_mesh(self, radius: float = 0.5, height: float = 1.0, segments: int = 32) -> Mesh:
        """Generate and store a capped cylinder."""
        name = self._next_mesh_name("Cylinder")
        return self._store_mesh(name, generate_cylinder(radius, height, segments))

    def create_cone_mesh(self, radius: float = 0.5, height: float = 1.0, segments: int = 32) -> Mesh:
        """Generate and store a cone."""
        name = self._next_mesh_name("Cone")
        return self._store_mesh(name, generate_cone(radius, height, segments))

    def create_grid_mesh(self, size: float = 20.0, divisions: int = 20) -> Mesh:
        """Generate and store a line grid."""
        name = self._next_mesh_name("Grid")
        return self._store_mesh(name, generate_grid(size, divisions))

    # Materials

    def _store_material(self, name: str, material: Material) -> Material:
        self._materials[name] = material
        self._emit_loaded(name, _MATERIAL)
        return material

    def create_material(self, name: str) -> Material:
        """Add a default material; a taken name gets a numeric suffix."""
        unique = _unique_name(name, set(self._materials))
        return self._store_material(unique, Material())

    def get_material(self, name: str) -> Optional[Material]:
        """The material stored under ``name``, or None."""
        return self._materials.get(name)

    def remove_material(self, name: str) -> None:
        """Forget the material stored under ``name``, if any."""
        self._materials.pop(name, None)

    def _next_material_name(self, prefix: str) -> str:
        name = f"{prefix}_{self._material_counter}"
        self._material_counter += 1
        return name

    def create_default_material(self) -> Material:
        """The shared grey default material, created on first use."""
        existing = self._materials.get(_DEFAULT_MATERIAL_NAME)
        if existing is not None:
            return existing
        material = Material(
            diffuse_color=(0.7, 0.7, 0.7, 1.0),
            specular_color=(0.3, 0.3, 0.3, 1.0),
            shininess=32.0,
        )
        return self._store_material(_DEFAULT_MATERIAL_NAME, material)

    def create_colored_material(self, color: Color) -> Material:
        """A plain material with the given diffuse colour."""
        material = Material(
            diffuse_color=tuple(color),
            specular_color=(0.2, 0.2, 0.2, 1.0),
            shininess=16.0,
        )
        return self._store_material(self._next_material_name("ColoredMaterial"), material)

    def create_metallic_material(
        self, color: Color, metallic: float = 0.8, roughness: float = 0.2
    ) -> Material:
        """A material whose specular colour and shininess follow metallic and roughness."""
        dielectric = (0.04, 0.04, 0.04, 1.0)
        specular = tuple(c * metallic + d * (1.0 - metallic) for c, d in zip(color, dielectric))
        material = Material(
            diffuse_color=tuple(color),
            specular_color=specular,
            shininess=(1.0 - roughness) * 256.0,
        )
        return self._store_material(self._next_material_name("MetallicMaterial"), material)

    # Queries and cache control

    def mesh_names(self) -> list[str]:
        """Names of all stored meshes."""
        return list(self._meshes)

    def material_names(self) -> list[str]:
        """Names of all stored materials."""
        return list(self._materials)

    def clear_cache(self) -> None:
        """Drop all meshes and materials."""
        self.clear_mesh_cache()
        self.clear_material_cache()

    def clear_mesh_cache(self) -> None:
        """Drop all meshes and restart mesh numbering."""
        self._meshes.clear()
        self._mesh_counter = 1

    def clear_material_cache(self) -> None:
        """Drop all materials and restart material numbering."""
        self._materials.clear()
        self._material_counter = 1