[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dcver"
version = "1.0.0"
description = "Convert comma-separated data files into packed or raw binary files"
requires-python = ">=3.10"
dependencies = []
keywords = ["csv", "binary", "converter", "bit-packing", "getopt"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dcver = "dcver.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["dcver"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
