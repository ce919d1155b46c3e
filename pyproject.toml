[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pd2mm"
version = "0.1.0"
description = "Shared utilities for file handling, binary I/O, PE inspection, downloads, msgpack and terminal output"
requires-python = ">=3.10"
keywords = ["filesystem", "pe", "binary", "download", "msgpack", "ansi", "logging"]
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
    "Topic :: Software Development :: Libraries",
]
dependencies = [
    "msgpack",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["pd2mm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
