[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "petrosurvive"
version = "0.1.0"
description = "Engine-side logic for a 3D survival game: cameras, skeletal animation, textures and materials, particles and instanced draw batching."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["game", "3d", "animation", "skeletal", "camera", "particles", "rendering", "materials"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["petrosurvive"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
