import pytest

from rudemesh.asset_manager import AssetManager, Material
from rudemesh.mesh_generator import generate_cone, generate_cube, generate_sphere


@pytest.fixture
def manager():
    return AssetManager()


def test_initialize_creates_default_material(manager):
    assert manager.initialize() is True
    assert manager.material_names() == ["Default"]
    default = manager.get_material("Default")
    assert default.diffuse_color == pytest.approx((0.7, 0.7, 0.7, 1.0))
    assert default.specular_color == pytest.approx((0.3, 0.3, 0.3, 1.0))
    assert default.shininess == pytest.approx(32.0)


def test_default_material_is_shared(manager):
    first = manager.create_default_material()
    second = manager.create_default_material()
    assert first is second
    assert manager.material_names() == ["Default"]


def test_create_mesh_unique_names(manager):
    a = manager.create_mesh("Box")
    b = manager.create_mesh("Box")
    c = manager.create_mesh("Box")
    assert manager.mesh_names() == ["Box", "Box_1", "Box_2"]
    assert manager.get_mesh("Box") is a
    assert manager.get_mesh("Box_1") is b
    assert manager.get_mesh("Box_2") is c
    assert a.vertices == []


def test_get_and_remove_mesh(manager):
    manager.create_mesh("Thing")
    manager.remove_mesh("Thing")
    assert manager.get_mesh("Thing") is None
    manager.remove_mesh("Thing")
    assert manager.mesh_names() == []


def test_primitive_names_share_counter(manager):
    cube = manager.create_cube_mesh()
    manager.create_sphere_mesh()
    manager.create_plane_mesh()
    manager.create_cylinder_mesh()
    manager.create_cone_mesh()
    manager.create_grid_mesh()
    assert manager.mesh_names() == [
        "Cube_1", "Sphere_2", "Plane_3", "Cylinder_4", "Cone_5", "Grid_6",
    ]
    assert cube == generate_cube(1.0)


def test_primitive_defaults(manager):
    assert manager.create_sphere_mesh() == generate_sphere(0.5, 32, 16)
    assert manager.create_cone_mesh() == generate_cone(0.5, 1.0, 32)


def test_clear_mesh_cache_resets_counter(manager):
    manager.create_cube_mesh()
    manager.create_cube_mesh()
    manager.clear_mesh_cache()
    assert manager.mesh_names() == []
    manager.create_cube_mesh()
    assert manager.mesh_names() == ["Cube_1"]


def test_create_material_unique_names(manager):
    manager.create_material("Paint")
    manager.create_material("Paint")
    assert manager.material_names() == ["Paint", "Paint_1"]
    assert manager.get_material("Paint_1") == Material()


def test_remove_material(manager):
    manager.create_material("Paint")
    manager.remove_material("Paint")
    assert manager.get_material("Paint") is None


def test_colored_material(manager):
    color = (0.1, 0.5, 0.9, 1.0)
    material = manager.create_colored_material(color)
    assert material.diffuse_color == color
    assert material.specular_color == pytest.approx((0.2, 0.2, 0.2, 1.0))
    assert material.shininess == pytest.approx(16.0)
    assert manager.get_material("ColoredMaterial_1") is material


def test_metallic_material_fully_metallic(manager):
    color = (0.8, 0.6, 0.2, 1.0)
    material = manager.create_metallic_material(color, metallic=1.0, roughness=0.0)
    assert material.specular_color == pytest.approx(color)
    assert material.shininess == pytest.approx(256.0)


def test_metallic_material_dielectric(manager):
    material = manager.create_metallic_material((0.8, 0.6, 0.2, 1.0), metallic=0.0, roughness=1.0)
    assert material.specular_color == pytest.approx((0.04, 0.04, 0.04, 1.0))
    assert material.shininess == pytest.approx(0.0)


def test_material_counter_shared(manager):
    manager.create_colored_material((1.0, 0.0, 0.0, 1.0))
    manager.create_metallic_material((0.0, 1.0, 0.0, 1.0))
    assert manager.material_names() == ["ColoredMaterial_1", "MetallicMaterial_2"]
    manager.clear_material_cache()
    manager.create_colored_material((1.0, 0.0, 0.0, 1.0))
    assert manager.material_names() == ["ColoredMaterial_1"]


def test_asset_loaded_callback(manager):
    events = []
    manager.on_asset_loaded(lambda name, kind: events.append((name, kind)))
    manager.create_mesh("Box")
    manager.create_cube_mesh()
    manager.initialize()
    manager.create_default_material()
    assert events == [("Box", "Mesh"), ("Cube_1", "Mesh"), ("Default", "Material")]


def test_cleanup_clears_everything(manager):
    manager.initialize()
    manager.create_cube_mesh()
    manager.cleanup()
    assert manager.mesh_names() == []
    assert manager.material_names() == []