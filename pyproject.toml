[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ssbpack"
version = "0.1.0"
description = "Bit-packing and delta bit-packing of 32-bit integer columns, with benchmark column generators"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "compression",
    "bit-packing",
    "delta encoding",
    "frame of reference",
    "columnar",
    "benchmark",
]
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
    "Topic :: Database",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ssbpack = "ssbpack.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ssbpack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
