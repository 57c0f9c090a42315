# rudemesh

Building blocks for a 3D modeling tool, in plain Python with no
third-party dependencies:

- **`rudemesh.geometry`** – immutable `Vec3` and `Vec2`, `Vertex`
  (position, normal, texture coordinate) and an indexed triangle `Mesh`
  with `bounding_box()` and `triangle_count()`.
- **`rudemesh.mesh_generator`** – cubes, UV spheres, icospheres,
  cylinders, cones, tori, planes and line grids, plus `calculate_normal`
  and `spherical_to_uv`.
- **`rudemesh.obj_format`** – read and write Wavefront `.obj` files, with
  optional vertex merging and smooth-normal generation.
- **`rudemesh.format_manager`** – choose a reader or writer from a file's
  extension.
- **`rudemesh.asset_manager`** – a named cache of meshes and materials.
- **`rudemesh.lighting`** – a key/fill/rim/ambient light rig with studio,
  Maya-like, Blender-like and outdoor presets.

## Installation

```
pip install rudemesh
```

## Generating primitives

```python
from rudemesh.mesh_generator import generate_cube, generate_sphere, generate_icosphere

cube = generate_cube(2.0)
print(len(cube.vertices), cube.triangle_count())   # 24 12

sphere = generate_sphere(1.0, 32, 16)
low, high = sphere.bounding_box()

ico = generate_icosphere(1.0, 2)
```

`generate_grid` returns a line list: pairs of vertices and no index list.
Segment counts below 1 (or a negative icosphere subdivision count) raise
`ValueError`.

## Reading and writing OBJ files

```python
from rudemesh.mesh_generator import generate_torus
from rudemesh.obj_format import ExportOptions, ImportOptions, load_obj, save_obj

torus = generate_torus(1.0, 0.3, 32, 16)
save_obj("torus.obj", torus, ExportOptions(precision=4))

result = load_obj("torus.obj", ImportOptions(merge_vertices=True, generate_normals=True))
mesh = result.meshes[0]
print(result.mesh_names, result.vertex_count, result.face_count)
```

- `read_obj(lines, options)` reads from any iterable of text lines, such as
  an open file; `write_obj(stream, mesh, options)` writes to a text stream.
- `save_obj_meshes(path, meshes, options)` writes several meshes to one
  file, each under its own `g mesh_N` / `o mesh_N` name.
- Polygons are fan-triangulated. Malformed `v`, `vn`, `vt` and `f` lines
  are logged and skipped; other statements (groups, materials) are ignored,
  so every import yields a single mesh named `ImportedMesh`.
- `merge_vertices`, `generate_normals`, `parse_index` and `format_float`
  are available on their own.
- A file that cannot be opened, or a missing mesh, raises `ObjFormatError`.

## Choosing a format by extension

```python
from rudemesh.format_manager import FileFormat, detect_format, export_file, import_file

assert detect_format("model.OBJ") is FileFormat.OBJ
export_file("model.obj", torus)
imported = import_file("model.obj")
print(imported.detected_format, imported.mesh_names)
```

`export_meshes(path, meshes)` writes all meshes to an OBJ file; for other
formats it exports only the first mesh.

## Assets

```python
from rudemesh.asset_manager import AssetManager

assets = AssetManager()
assets.on_asset_loaded(lambda name, kind: print("loaded", kind, name))
assets.initialize()                     # creates the "Default" material
cube = assets.create_cube_mesh(1.0)     # cached as "Cube_1"
gold = assets.create_metallic_material((1.0, 0.8, 0.2, 1.0), 0.8, 0.2)
print(assets.mesh_names(), assets.material_names())
```

`create_mesh(name)` and `create_material(name)` add a numeric suffix when
the name is taken. Clearing a cache restarts its numbering.

## Lighting

```python
from rudemesh.geometry import Vec3
from rudemesh.lighting import LightingPreset, LightingSystem

lights = LightingSystem()
lights.on_change(lambda: print("lighting changed"))
lights.set_preset(LightingPreset.OUTDOOR)
lights.set_key_light(Vec3(0, -1, 0), (1.0, 1.0, 1.0, 1.0), 0.9)
print(lights.preset)                    # LightingPreset.CUSTOM
```

`apply_lighting(renderer, camera_position)` hands the key light (colour
scaled by its intensity) and the camera position to any object that offers
`set_lighting(direction, color)` and `set_view_position(position)`; passing
`None` raises `ValueError`. `update_uniforms(renderer)` sends only the key
light.

## What this package does not do

- It does not read or write STL or PLY files. They are recognised by
  extension, but `import_file` and `export_file` raise
  `UnsupportedFormatError` for them, as for unknown extensions.
- It does not render, display or edit meshes and has no command-line
  program; the lighting rig only passes values to a renderer you supply.
- `AssetManager` keeps assets in memory only; it does not load meshes or
  materials from files.

## Tests

The test suite uses pytest, available through the `test` extra.