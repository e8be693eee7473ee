"""The configuration file written when none exists yet."""

from __future__ import annotations

import os
from pathlib import Path

import tomlkit

__all__ = ["DEFAULT_CONFIG", "create_default_config"]

_DUPLICATE_CHOICES = (
    ("ask", "ask interactively which copy wins"),
    ("overwritehome", "replace the copy in HOME by the dotfolder copy"),
    ("overwritedotfile", "replace the dotfolder copy by the copy in HOME"),
    ("backuphome", "rename the copy in HOME to *.bak, then link"),
    ("skip", "leave both copies untouched"),
)

_DELINK_CHOICES = (
    ("remove", "delete the dotfolder copy once HOME has its own (default)"),
    ("keep", "leave the dotfolder copy in place"),
)


def _build_default_document() -> tomlkit.TOMLDocument:
    doc = tomlkit.document()
    doc.add(tomlkit.comment("lazydot settings"))
    doc.add(tomlkit.nl())

    doc.add(tomlkit.comment("Folder holding the managed dotfiles; it has to begin with ~/"))
    doc.add("dotfolder_path", "~/mydotfolder")
    doc.add(tomlkit.nl())

    doc.add(tomlkit.comment("Managed entries, each beginning with ~/ or /"))
    paths = tomlkit.array()
    paths.append("~/.config/lazydot.toml")
    paths.multiline(True)
    doc.add("paths", paths)
    doc.add(tomlkit.nl())

    defaults = tomlkit.table()
    defaults.add(tomlkit.comment("What sync does when an entry exists in both places:"))
    for name, meaning in _DUPLICATE_CHOICES:
        defaults.add(tomlkit.comment(f"  {name}: {meaning}"))
    defaults.add("on_duplicate", "ask")
    defaults.add(tomlkit.nl())
    defaults.add(tomlkit.comment("What happens to the dotfolder copy when a link is disabled:"))
    for name, meaning in _DELINK_CHOICES:
        defaults.add(tomlkit.comment(f"  {name}: {meaning}"))
    defaults.add("on_delink", "remove")
    doc.add("defaults", defaults)
    return doc


DEFAULT_CONFIG = tomlkit.dumps(_build_default_document())


def create_default_config(config_file: str | os.PathLike[str]) -> None:
    """Write the default configuration to ``config_file``, replacing it."""
    Path(config_file).write_text(DEFAULT_CONFIG)