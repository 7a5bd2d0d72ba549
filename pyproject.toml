[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blocksort"
version = "0.1.0"
description = "Burrows-Wheeler block sorting transforms (BWT, bijective BWTS) built on a divsufsort-style suffix array constructor"
requires-python = ">=3.10"
dependencies = []
keywords = ["bwt", "burrows-wheeler", "bwts", "suffix-array", "divsufsort", "compression"]
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
    "Topic :: System :: Archiving :: Compression",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["blocksort"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
