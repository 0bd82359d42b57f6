[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rutkit"
version = "0.1.0"
description = "Small utilities for paths, code pages, text and binary files, INI and JSON documents, byte buffers and command arguments"
requires-python = ">=3.10"
dependencies = []
keywords = ["utilities", "ini", "json", "path", "encoding", "bom", "arguments", "buffer"]
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

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rutkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
