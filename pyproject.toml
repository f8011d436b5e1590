[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dtfegrid"
version = "0.1.0"
description = "Interpolate particle data to grids by linear interpolation on a Delaunay triangulation or by NGP, CIC and TSC mass assignment"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "scipy",
]
keywords = ["DTFE", "Delaunay", "cosmology", "density field", "interpolation", "N-body", "CIC", "TSC"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Astronomy",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dtfegrid"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
