[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hexcells"
version = "0.1.0"
description = "A networked turn-based strategy game of growing and attacking cells on a hexagonal field"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "turn-based", "strategy", "hexagonal", "multiplayer", "network"]
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
    "Topic :: Games/Entertainment :: Turn Based Strategy",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
hexcells-host = "hexcells.host:main"
hexcells-console = "hexcells.console:main"

[tool.hatch.build.targets.wheel]
packages = ["hexcells"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
