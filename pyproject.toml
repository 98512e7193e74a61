[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oopchess"
version = "0.1.0"
description = "A chess rules engine: piece movement, check, mate, draws, move history, saved games and algebraic notation."
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "board game", "rules", "engine", "notation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["oopchess"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
