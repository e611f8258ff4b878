[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "georoute"
version = "0.1.0"
description = "Real-time routing engine with range-based congestion updates"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "routing",
    "dijkstra",
    "shortest-path",
    "segment-tree",
    "congestion",
    "graph",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
georoute-server = "georoute.app:main"
georoute-cli = "georoute.cli:main"
georoute-bench = "georoute.bench:main"

[tool.hatch.build.targets.wheel]
packages = ["georoute"]

[tool.hatch.build.targets.sdist]
include = ["georoute", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
files = ["georoute"]
