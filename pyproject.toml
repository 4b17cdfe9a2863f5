[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "librarydesk"
version = "0.1.0"
description = "A small library desk: catalogue resources, lend, reserve, renew and keep a borrowing history in JSON files."
requires-python = ">=3.10"
dependencies = []
keywords = ["library", "catalogue", "loans", "reservations", "circulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
librarydesk = "librarydesk.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["librarydesk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
