[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "giuchess"
version = "2.0.0"
description = "A small bitboard chess engine speaking the XBoard and UCI protocols"
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "engine", "xboard", "winboard", "uci", "alpha-beta", "bitboard"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
giuchess = "giuchess.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["giuchess"]

[tool.pytest.ini_options]
addopts = "-ra"
