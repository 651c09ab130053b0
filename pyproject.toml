[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pars3d"
version = "0.1.0"
description = "Small 3D mesh toolkit: quaternions, ASCII PLY/STL and VRML geometry I/O, quadrangulation and mesh visualization helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["3d", "mesh", "ply", "stl", "vrml", "quaternion", "quadrangulation", "geometry", "svg", "uv"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pars3d"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
