[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "neovide"
version = "0.11.2"
description = "Editor-side core of a graphical Neovim front end: redraw event parsing, grids, windows, cursor state, draw command batching and command-line settings."
requires-python = ">=3.10"
dependencies = []
keywords = ["neovim", "nvim", "gui", "editor", "redraw"]
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
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["neovide"]

[tool.hatch.build.targets.sdist]
include = ["neovide", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
