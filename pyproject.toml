[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "poreflow"
version = "0.1.0"
description = "Two-phase flow simulation in a diagonal pore network of capillary tubes, with BMP plotting"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "porous media",
    "pore network",
    "two-phase flow",
    "capillary",
    "meniscus",
    "imbibition",
    "simulation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
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

[project.scripts]
poreflow-simulate = "poreflow.cli:main_simulate"
poreflow-plot = "poreflow.cli:main_plot"
poreflow-radius-report = "poreflow.cli:main_radius_report"
poreflow-makegen = "poreflow.makegen:main"

[tool.hatch.build.targets.wheel]
packages = ["poreflow"]

[tool.pytest.ini_options]
addopts = "-ra"
