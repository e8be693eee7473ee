"""The record of which paths were linked by the last sync."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import tomlkit
from tomlkit.exceptions import TOMLKitError

from lazydot.config import Config, ConfigError
from lazydot.paths import expand_path

__all__ = ["STATE_FILE_NAME", "CurrentState"]

STATE_FILE_NAME = "current_state.toml"


def _state_file(config: Config) -> Path:
    return expand_path(config.dotfolder_path) / STATE_FILE_NAME


@dataclass
class CurrentState:
    """Paths that were linked when the state was last saved."""

    paths: list[str] = field(default_factory=list)

    @classmethod
    def load(cls, config: Config) -> CurrentState:
        """Read the state from the dotfolder; an absent file means no paths."""
        path = _state_file(config)
        if not path.exists():
            return cls()

        try:
            data = tomlkit.parse(path.read_text()).unwrap()
        except TOMLKitError as exc:
            raise ConfigError(f"Failed to parse current state file: {exc}") from exc

        paths = data.get("paths")
        if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
            raise ConfigError("Failed to parse current state file: `paths` must be a list of strings")
        return cls(paths=list(paths))

    def save(self, config: Config) -> None:
        """Record the config's paths as the current state in the dotfolder."""
        paths_array = tomlkit.array()
        paths_array.extend(config.paths)
        if config.paths:
            paths_array.multiline(True)
        doc = tomlkit.document()
        doc["paths"] = paths_array
        _state_file(config).write_text(tomlkit.dumps(doc))