[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pcbgcode"
version = "0.1.0"
description = "G-code generation helpers for milling, drilling and engraving printed circuit boards"
requires-python = ">=3.10"
dependencies = []
keywords = ["pcb", "gcode", "cnc", "milling", "drilling", "drill rack"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Manufacturing",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pcbgcode"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
