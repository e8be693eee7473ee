[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lazydot"
version = "0.4.0"
description = "Manage and deploy dotfiles by symlinking them from a single dotfolder"
requires-python = ">=3.10"
keywords = ["dotfiles", "symlink", "configuration", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
    "Topic :: Utilities",
]
dependencies = [
    "tomlkit",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
lazydot = "lazydot.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["lazydot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
