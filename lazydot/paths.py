"""Filesystem helpers: home-relative path expansion, validation, copy and delete."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

__all__ = [
    "PathError",
    "check_path",
    "expand_path",
    "get_home_dir",
    "delete",
    "copy_all",
]


class PathError(ValueError):
    """A path is missing, outside the home directory or of an unusable kind."""


def get_home_dir() -> Path:
    """Return the home directory taken from the HOME environment variable."""
    home = os.environ.get("HOME")
    if home is None:
        raise PathError("missing HOME environment variable")
    return Path(home)


def expand_path(path: str | os.PathLike[str]) -> Path:
    """Expand a leading ``~/`` and make the result absolute against the cwd."""
    text = os.fspath(path)
    if text.startswith("~/"):
        result = get_home_dir() / text[2:]
    else:
        result = Path(text)
    if not result.is_absolute():
        result = Path.cwd() / result
    return result


def check_path(path: str) -> str:
    """Validate an existing path inside home and return it in ``~/`` form."""
    expanded = expand_path(path)
    if not expanded.exists():
        raise PathError(f"path {path} does not exist")

    home = get_home_dir()
    if expanded == home:
        raise PathError(f"path {path} is the home directory")
    if not expanded.is_relative_to(home):
        raise PathError(f"path {path} is not in the home directory")

    relative = expanded.relative_to(home)
    return f"~/{relative.as_posix()}"


def delete(path: str | os.PathLike[str]) -> None:
    """Remove a file, a symlink or a whole directory tree."""
    target = Path(path)
    if target.is_symlink() or target.is_file():
        target.unlink()
    elif target.is_dir():
        shutil.rmtree(target)
    else:
        raise PathError(f'Path: "{target}" is not a valid file, or directory')


def copy_all(source: str | os.PathLike[str], target: str | os.PathLike[str]) -> None:
    """Copy a file or a directory tree, creating parent directories as needed."""
    source = Path(source)
    target = Path(target)
    if not source.exists():
        raise FileNotFoundError(f"{source} can't be copied: path does not exist")

    if source.is_file():
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy(source, target)
        return

    if source.is_dir():
        target.mkdir(parents=True, exist_ok=True)
        for entry in source.iterdir():
            copy_all(entry, target / entry.name)
        return

    raise OSError(f"Failed to copy {source}: it is not a file or directory")