[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rudemesh"
version = "1.0.0"
description = "Mesh primitives, Wavefront OBJ reading and writing, asset caching and three-point lighting presets for 3D modeling tools"
requires-python = ">=3.10"
dependencies = []
keywords = ["3d", "mesh", "obj", "wavefront", "geometry", "primitives", "lighting"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rudemesh"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
