[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coldet"
version = "0.1.0"
description = "Rigid-body collision detection and response for spheres and planes, with a Galton board solver"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["physics", "collision detection", "rigid body", "simulation", "galton board"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["coldet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
