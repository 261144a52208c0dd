[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "unifiedlogs"
version = "0.1.0"
description = "Parsers for macOS Unified Log timesync and UUIDText files, plus printf-style log value formatting"
requires-python = ">=3.10"
dependencies = []
keywords = ["macos", "unified log", "timesync", "uuidtext", "printf", "forensics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Information Technology",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["unifiedlogs"]

[tool.pytest.ini_options]
addopts = "-ra"
