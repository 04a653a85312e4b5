[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bonevox"
version = "1.0.0"
description = "Octree grid building blocks for voxel finite element models of trabecular bone"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "bone",
    "voxel",
    "finite element",
    "octree",
    "morton",
    "biomechanics",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bonevox"]

[tool.pytest.ini_options]
addopts = "-ra"
