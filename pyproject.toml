[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "tetrolab"
version = "0.1.0"
description = "Falling-block puzzle tooling: board data files, censoring reports, adaptive board sampling, training schedules and terminal panels"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "tetris",
    "puzzle",
    "game-ai",
    "kaplan-meier",
    "censoring",
    "genetic-algorithm",
    "terminal",
]
classifiers = [
    "Development Status :: 3 - Alpha",
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
    "Topic :: Games/Entertainment :: Puzzle Games",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tetrolab = "tetrolab.cli:main"

[tool.setuptools.packages.find]
include = ["tetrolab*"]

[tool.pytest.ini_options]
addopts = "-ra"
