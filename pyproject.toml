[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quickcsv"
version = "0.1.0"
description = "Read, edit and write CSV documents with label-based row and column access"
requires-python = ">=3.10"
dependencies = []
keywords = ["csv", "table", "parser", "labels", "utf-16"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: File Formats",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["quickcsv"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
