[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rsvcore"
version = "0.1.0"
description = "Building blocks for processing CSV and other delimited text: row splitting, column selection, filters, type guessing, statistics and sorting."
requires-python = ">=3.10"
dependencies = []
keywords = ["csv", "tsv", "delimited", "text", "filter", "statistics", "sort"]
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
    "Topic :: Text Processing :: Filters",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rsvcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
