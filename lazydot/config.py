"""Loading, validating and saving the lazydot configuration file."""

from __future__ import annotations

import enum
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from lazydot.default_config import create_default_config
from lazydot.paths import PathError, check_path, delete, expand_path, get_home_dir

__all__ = [
    "CONFIG_RELATIVE_PATH",
    "ConfigError",
    "DuplicateBehavior",
    "OnDelinkBehavior",
    "Defaults",
    "Config",
    "get_path_in_dotfolder",
    "get_home_and_dot_path",
]

CONFIG_RELATIVE_PATH = ".config/lazydot.toml"


class ConfigError(ValueError):
    """The configuration is unreadable or breaks one of its rules."""


class DuplicateBehavior(enum.Enum):
    """What to do when a path exists both in home and in the dotfolder."""

    ASK = "ask"
    OVERWRITE_HOME = "overwritehome"
    OVERWRITE_DOTFILE = "overwritedotfile"
    BACKUP_HOME = "backuphome"
    SKIP = "skip"


class OnDelinkBehavior(enum.Enum):
    """What to do with the dotfolder copy after a path is unlinked."""

    REMOVE = "remove"
    KEEP = "keep"


@dataclass
class Defaults:
    on_duplicate: DuplicateBehavior = DuplicateBehavior.ASK
    on_delink: OnDelinkBehavior = OnDelinkBehavior.REMOVE


def _parse_enum(enum_type: type[enum.Enum], value: Any, key: str) -> Any:
    try:
        return enum_type(value)
    except ValueError:
        raise ConfigError(f"Failed to parse lazydot.toml: invalid value {value!r} for {key}") from None


def _parse_config(content: str) -> Config:
    try:
        data = tomlkit.parse(content).unwrap()
    except TOMLKitError as exc:
        raise ConfigError(f"Failed to parse lazydot.toml: {exc}") from exc

    defaults = data.get("defaults")
    if not isinstance(defaults, dict):
        raise ConfigError("Failed to parse lazydot.toml: missing table `defaults`")
    dotfolder_path = data.get("dotfolder_path")
    if not isinstance(dotfolder_path, str):
        raise ConfigError("Failed to parse lazydot.toml: missing string `dotfolder_path`")
    paths = data.get("paths")
    if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
        raise ConfigError("Failed to parse lazydot.toml: `paths` must be a list of strings")

    return Config(
        dotfolder_path=dotfolder_path,
        paths=list(paths),
        defaults=Defaults(
            on_duplicate=_parse_enum(
                DuplicateBehavior, defaults.get("on_duplicate", "ask"), "on_duplicate"
            ),
            on_delink=_parse_enum(
                OnDelinkBehavior, defaults.get("on_delink", "remove"), "on_delink"
            ),
        ),
    )


@dataclass
class Config:
    """The user's configuration. Paths are kept unexpanded."""

    dotfolder_path: str
    paths: list[str] = field(default_factory=list)
    defaults: Defaults = field(default_factory=Defaults)

    @classmethod
    def load(cls) -> Config:
        """Read the config, linking a local one in or creating the default if needed."""
        global_path = get_home_dir() / CONFIG_RELATIVE_PATH
        local_path = expand_path(CONFIG_RELATIVE_PATH)

        if global_path.exists():
            config_file = global_path
        elif local_path.exists():
            if global_path.is_symlink():
                delete(global_path)
            global_path.parent.mkdir(parents=True, exist_ok=True)
            global_path.symlink_to(local_path)
            config_file = local_path
        else:
            global_path.parent.mkdir(parents=True, exist_ok=True)
            create_default_config(global_path)
            config_file = global_path

        config = _parse_config(config_file.read_text())
        config.validate()
        return config

    def save(self) -> None:
        """Write the values back to the global config, keeping its comments."""
        self.validate()

        config_file = get_home_dir() / CONFIG_RELATIVE_PATH
        if not config_file.exists():
            print(
                f"Config file does not exist. Creating a new one at {config_file}",
                file=sys.stderr,
            )
            config_file.parent.mkdir(parents=True, exist_ok=True)
            create_default_config(config_file)

        try:
            doc = tomlkit.parse(config_file.read_text())
        except TOMLKitError as exc:
            raise ConfigError(f"Failed to parse config as TOML document: {exc}") from exc

        doc["dotfolder_path"] = self.dotfolder_path
        paths_array = tomlkit.array()
        paths_array.extend(self.paths)
        doc["paths"] = paths_array

        if "defaults" not in doc:
            doc["defaults"] = tomlkit.table()
        doc["defaults"]["on_duplicate"] = self.defaults.on_duplicate.value
        doc["defaults"]["on_delink"] = self.defaults.on_delink.value

        config_file.write_text(tomlkit.dumps(doc))

    def _restrict_to_home(self, path: str) -> str:
        checked = check_path(path)
        prefix = self.dotfolder_path.rstrip("/")
        if checked == prefix or checked.startswith(prefix + "/"):
            relative = checked[len(prefix):].lstrip("/")
            checked = str(get_home_dir() / relative)
        return checked

    def add_path(self, path: str) -> None:
        """Register a path and save; already registered paths are ignored."""
        normalized = self._restrict_to_home(path)
        if normalized in self.paths:
            return
        self.paths.append(normalized)
        self.save()

    def remove_path(self, path: str) -> None:
        """Unregister a path and save, if it is registered."""
        normalized = self._restrict_to_home(path)
        if normalized in self.paths:
            self.paths.remove(normalized)
            self.save()

    def validate(self) -> None:
        """Raise ConfigError if a path or the dotfolder lies outside home."""
        home = get_home_dir()
        for raw in self.paths:
            if raw.startswith("~/"):
                continue
            path = Path(raw)
            if not path.is_absolute():
                raise ConfigError(f'Invalid path: "{path}" paths should not be relative.')
            if not path.is_relative_to(home):
                raise ConfigError(
                    f'Invalid path: "{path}" paths should be in the home directory.'
                )

        if not self.dotfolder_path.startswith("~/"):
            raise ConfigError(
                f'Invalid path: "{self.dotfolder_path}" the dotfolder path should be '
                "in the home directory."
            )


def get_path_in_dotfolder(path_in_home: str | os.PathLike[str]) -> Path:
    """Map a path inside home to its place inside the configured dotfolder."""
    config = Config.load()
    expanded = expand_path(os.fspath(path_in_home))
    home = get_home_dir()
    try:
        relative = expanded.relative_to(home)
    except ValueError:
        raise PathError(f"path {expanded} is not in the home directory") from None
    return expand_path(config.dotfolder_path) / relative


def get_home_and_dot_path(path: str) -> tuple[Path, Path]:
    """Return the expanded home path and the matching dotfolder path."""
    home = expand_path(path)
    return home, get_path_in_dotfolder(home)