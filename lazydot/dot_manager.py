"""Linking, unlinking and inspecting the dotfiles listed in the configuration."""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from lazydot.config import (
    Config,
    DuplicateBehavior,
    OnDelinkBehavior,
    get_home_and_dot_path,
    get_path_in_dotfolder,
)
from lazydot.current_state import CurrentState
from lazydot.paths import copy_all, delete, expand_path

__all__ = ["DotManager", "paths_to_remove", "paths_to_add"]

_RED = "\x1b[31m"
_GREEN = "\x1b[32m"
_YELLOW = "\x1b[33m"
_BLUE = "\x1b[34m"
_GREY = "\x1b[38;5;8m"
_RESET = "\x1b[0m"

_CHECK = "\u2714"
_CROSS = "\u2718"

Selector = Callable[[Sequence[str]], Sequence[int]]


def _paint(colour: str, text: str) -> str:
    return f"{colour}{text}{_RESET}"


class _LinkState(enum.Enum):
    """How a managed path currently looks on disk, with its label and colour."""

    LINKED = ("[LINKED]", _GREEN)
    WRONG_TARGET = ("[WRONG-TGT]", _RED)
    BROKEN_LINK = ("[BROKEN-LNK]", _RED)
    TYPE_MISMATCH = ("[TYPE-MISM]", _YELLOW)
    DISABLED = ("[DISABLED]", _BLUE)
    UNLINKED = ("[UNLINKED]", _YELLOW)
    BOTH_MISSING = ("[BOTH-MISS]", _GREY)

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def colour(self) -> str:
        return self.value[1]


def _link_state(home: Path, dot: Path) -> _LinkState:
    if home.is_symlink():
        try:
            target = home.resolve(strict=True)
        except (OSError, RuntimeError):
            return _LinkState.BROKEN_LINK
        return _LinkState.LINKED if target == dot else _LinkState.WRONG_TARGET

    dot_exists = dot.exists()
    home_exists = home.exists()
    if dot_exists and home_exists:
        if dot.is_dir() != home.is_dir():
            return _LinkState.TYPE_MISMATCH
        return _LinkState.DISABLED
    if dot_exists or home_exists:
        return _LinkState.UNLINKED
    return _LinkState.BOTH_MISSING


def _prompt_selection(options: Sequence[str]) -> list[int]:
    """Ask on the terminal which of ``options`` to select; returns sorted indices."""
    for number, option in enumerate(options):
        print(f"  [{number}] {option}")
    while True:
        answer = input("Numbers to select (separated by spaces or commas, empty for none): ")
        try:
            picked = sorted({int(token) for token in answer.replace(",", " ").split()})
        except ValueError:
            print("Please enter numbers only.")
            continue
        if all(0 <= number < len(options) for number in picked):
            return picked
        print(f"Numbers must be between 0 and {len(options) - 1}.")


def paths_to_remove(current_paths: Iterable[str], config_paths: Iterable[str]) -> list[str]:
    """Paths recorded as linked that are no longer in the configuration."""
    wanted = set(config_paths)
    return list(dict.fromkeys(p for p in current_paths if p not in wanted))


def paths_to_add(current_paths: Iterable[str], config_paths: Iterable[str]) -> list[str]:
    """Paths in the configuration that are not yet recorded as linked."""
    linked = set(current_paths)
    return list(dict.fromkeys(p for p in config_paths if p not in linked))


class DotManager:
    """Keeps the symlinks in home in line with the configuration."""

    def __init__(
        self,
        config: Config | None = None,
        current_state: CurrentState | None = None,
        select: Selector | None = None,
    ) -> None:
        self.config = config if config is not None else Config.load()
        dotfolder = expand_path(self.config.dotfolder_path)
        if not dotfolder.exists():
            dotfolder.mkdir(parents=True)
        if not dotfolder.is_dir():
            raise NotADirectoryError(f"{dotfolder} is not a directory")
        self.current_state = (
            current_state if current_state is not None else CurrentState.load(self.config)
        )
        self.select: Selector = select if select is not None else _prompt_selection

    @staticmethod
    def _link(dot: Path, home: Path) -> bool:
        try:
            home.symlink_to(dot)
        except OSError as exc:
            print(f"{_paint(_RED, _CROSS)} Failed to create symlink: {exc}")
            return False
        return True

    def sync(self) -> None:
        """Unlink dropped paths, link every configured path and record the state."""
        self.delink(paths_to_remove(self.current_state.paths, self.config.paths))

        duplicated: list[tuple[Path, Path]] = []
        behavior = self.config.defaults.on_duplicate

        for path in self.config.paths:
            print(_paint(_BLUE, "Linking: "), end="")
            home, dot = get_home_and_dot_path(path)

            if home.is_symlink() and not home.exists():
                delete(home)

            home_exists, dot_exists = home.exists(), dot.exists()

            if home_exists and not dot_exists:
                copy_all(home, dot)
                delete(home)
                if not self._link(dot, home):
                    continue
            elif dot_exists and not home_exists:
                if not self._link(dot, home):
                    continue
            elif home_exists and dot_exists:
                if behavior is DuplicateBehavior.ASK:
                    if home.resolve(strict=True) == dot:
                        continue
                    duplicated.append((home, dot))
                elif behavior is DuplicateBehavior.OVERWRITE_HOME:
                    delete(home)
                    if not self._link(dot, home):
                        continue
                elif behavior is DuplicateBehavior.OVERWRITE_DOTFILE:
                    delete(dot)
                    copy_all(home, dot)
                    delete(home)
                    if not self._link(dot, home):
                        continue
                elif behavior is DuplicateBehavior.BACKUP_HOME:
                    home.rename(home.with_suffix(".bak"))
                    if not self._link(dot, home):
                        continue
            else:
                print(
                    f"{_paint(_YELLOW, '!')} Warning: path doesn't exist in home or "
                    f"dotfolder, skipping.\n {home}"
                )
            print(f"{_paint(_GREEN, _CHECK)} {path}")

        if duplicated:
            self._process_duplicated(duplicated)

        self.current_state.save(self.config)

    def _process_duplicated(self, duplicated: list[tuple[Path, Path]]) -> None:
        print(
            "\n"
            + _paint(
                _YELLOW,
                "Some files exist in both home and dotfolder. "
                "Select the ones to KEEP from home:",
            )
            + "\n- 'Select All' = keep all home versions"
            + "\n- No selection = use dotfolder versions\n"
        )

        options = ["Select All", *(str(home) for home, _ in duplicated)]
        selected = sorted(set(self.select(options)))

        if 0 in selected:
            keep_home = set(range(len(duplicated)))
        else:
            keep_home = {index - 1 for index in selected}
        if any(not 0 <= index < len(duplicated) for index in keep_home):
            raise IndexError("Index out of range")

        for index in sorted(keep_home):
            print(_paint(_BLUE, "Overwriting Home with Dotfile: "), end="")
            home, dot = duplicated[index]
            delete(dot)
            copy_all(home, dot)
            delete(home)
            if not self._link(dot, home):
                continue
            print(f"{_paint(_GREEN, _CHECK)} {home}")

        for index, (home, dot) in enumerate(duplicated):
            if index in keep_home:
                continue
            print(_paint(_BLUE, "Keeping Home: "), end="")
            delete(home)
            if not self._link(dot, home):
                continue
            print(f"{_paint(_GREEN, _CHECK)} {home}")

    def delink_all(self) -> None:
        """Unlink every configured path."""
        self.delink(self.config.paths)

    def delink(self, paths: Iterable[str]) -> None:
        """Replace each symlink into the dotfolder with a real copy in home."""
        for path in list(paths):
            print(_paint(_YELLOW, "Unlinking: "), end="")
            home = expand_path(path)

            if not home.is_symlink():
                print(f"{_paint(_RED, path)} is not a symlink")
                continue

            dot = get_path_in_dotfolder(home)
            if not dot.exists():
                print(f"{_paint(_RED, path)} doesn't exist in dotfolder")
                continue

            if home.resolve(strict=True) != dot:
                print(f"{_paint(_RED, path)} is not a symlink to dotfolder")
                continue

            delete(home)
            copy_all(dot, home)

            if self.config.defaults.on_delink is OnDelinkBehavior.REMOVE:
                delete(dot)
            print(f"{_paint(_GREEN, _CHECK)} {path}")

    def status(self) -> None:
        """Print the paths the next sync would link (++) and unlink (--)."""
        for path in paths_to_add(self.current_state.paths, self.config.paths):
            print(f"{_paint(_GREEN, '++')} {path}")
        for path in paths_to_remove(self.current_state.paths, self.config.paths):
            print(f"{_paint(_RED, '--')} {path}")

    def check(self) -> None:
        """Print the on-disk state of every configured path."""
        for path in self.config.paths:
            home, dot = get_home_and_dot_path(path)
            state = _link_state(home, dot)
            print(f"{_paint(state.colour, f'{state.label:<13}')} {path}")