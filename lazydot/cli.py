"""Command-line entry point: argument parsing, shell completion and dispatch."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from lazydot.config import Config, ConfigError, OnDelinkBehavior
from lazydot.dot_manager import DotManager
from lazydot.paths import PathError

__all__ = ["VERSION", "SHELLS", "build_parser", "completion_script", "main"]

PROG = "lazydot"
VERSION = "v0.4.0"
SHELLS = ("bash", "elvish", "fish", "powershell", "zsh")

_DESCRIPTION = "Lazydot: CLI tool to manage and deploy your dotfiles efficiently"
_EPILOG = (
    "Lazydot automates symlink creation for your configuration files, "
    "enabling consistent environments across multiple systems."
)
_ALL_HELP = "Unlink all managed symlinks"


@dataclass(frozen=True)
class _Subcommand:
    name: str
    short: str
    help: str
    path_help: str = ""
    hidden: bool = False

    @property
    def takes_paths(self) -> bool:
        return bool(self.path_help)


_SUBCOMMANDS = (
    _Subcommand(
        "add", "a", "Register one or more dotfile paths in your config.",
        path_help="Path to add (at least one required)",
    ),
    _Subcommand(
        "remove", "r", "Remove one or more paths from your config.",
        path_help="Path to remove (at least one required)",
    ),
    _Subcommand("sync", "s", "Create or update all symlinks according to the current config."),
    _Subcommand(
        "disable-link", "d", "Unlink one or all paths without changing config.",
        path_help="Specific paths to unlink",
    ),
    _Subcommand("status", "t", "Show what would be added or removed on next sync."),
    _Subcommand("check", "c", "Check the current state of each managed path."),
    _Subcommand(
        "generate-completion", "g", "Output shell completion script for a given shell.",
        hidden=True,
    ),
)

_SHORT_COMMANDS = {f"-{sub.short}": sub.name for sub in _SUBCOMMANDS}
_VISIBLE = tuple(sub for sub in _SUBCOMMANDS if not sub.hidden)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for every subcommand."""
    parser = argparse.ArgumentParser(prog=PROG, description=_DESCRIPTION, epilog=_EPILOG)
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("--completion-shell", choices=SHELLS, help=argparse.SUPPRESS)

    subparsers = parser.add_subparsers(
        dest="command",
        metavar="{" + ",".join(sub.name for sub in _VISIBLE) + "}",
    )
    for sub in _SUBCOMMANDS:
        sub_parser = subparsers.add_parser(
            sub.name,
            help=argparse.SUPPRESS if sub.hidden else f"{sub.help} (short: -{sub.short})",
            description=sub.help,
        )
        if sub.name == "disable-link":
            sub_parser.add_argument("-a", "--all", action="store_true", help=_ALL_HELP)
            sub_parser.add_argument("paths", nargs="*", help=sub.path_help)
        elif sub.name == "generate-completion":
            sub_parser.add_argument("shell", choices=SHELLS)
        elif sub.takes_paths:
            sub_parser.add_argument("paths", nargs="+", help=sub.path_help)
    return parser


def _expand_short_commands(argv: Sequence[str]) -> list[str]:
    """Replace a short subcommand flag such as ``-a`` with the subcommand's name."""
    args = list(argv)
    index = 0
    while index < len(args):
        token = args[index]
        if token == "--completion-shell":
            index += 2
            continue
        if token.startswith("--completion-shell="):
            index += 1
            continue
        if token in _SHORT_COMMANDS:
            args[index] = _SHORT_COMMANDS[token]
        break
    return args


def _quote(text: str) -> str:
    return "'" + text.replace("'", "'\\''") + "'"


def _bash_script() -> str:
    top_words = " ".join(
        [sub.name for sub in _VISIBLE]
        + [f"-{sub.short}" for sub in _VISIBLE]
        + ["-h", "--help", "-V", "--version"]
    )
    lines = [
        f"_{PROG}() {{",
        '    local cur="${COMP_WORDS[COMP_CWORD]}"',
        '    if [ "$COMP_CWORD" -eq 1 ]; then',
        f'        COMPREPLY=( $(compgen -W "{top_words}" -- "$cur") )',
        "        return 0",
        "    fi",
        '    case "${COMP_WORDS[1]}" in',
    ]
    for sub in _VISIBLE:
        options = "-h --help"
        if sub.name == "disable-link":
            options = "-a --all " + options
        files = "-f " if sub.takes_paths else ""
        lines.append(
            f'        {sub.name}|-{sub.short}) COMPREPLY=( $(compgen {files}-W "{options}" -- "$cur") ) ;;'
        )
    lines += [
        "    esac",
        "}",
        f"complete -F _{PROG} -o bashdefault -o default {PROG}",
    ]
    return "\n".join(lines) + "\n"


def _zsh_script() -> str:
    lines = [
        f"#compdef {PROG}",
        "",
        f"_{PROG}() {{",
        "    local -a commands",
        "    commands=(",
    ]
    lines += [f"        {_quote(sub.name + ':' + sub.help)}" for sub in _VISIBLE]
    lines += [
        "    )",
        "    if (( CURRENT == 2 )); then",
        "        _describe 'command' commands",
        "        return",
        "    fi",
        "    case $words[2] in",
    ]
    for sub in _VISIBLE:
        if sub.name == "disable-link":
            action = f"_arguments '(-a --all)'{{-a,--all}}'[{_ALL_HELP}]' '*:path:_files'"
        elif sub.takes_paths:
            action = "_files"
        else:
            action = ":"
        lines.append(f"        {sub.name}|-{sub.short}) {action} ;;")
    lines += [
        "    esac",
        "}",
        "",
        f"compdef _{PROG} {PROG}",
    ]
    return "\n".join(lines) + "\n"


def _fish_script() -> str:
    lines = [
        f"complete -c {PROG} -n '__fish_use_subcommand' -f -a {sub.name} -d {_quote(sub.help)}"
        for sub in _VISIBLE
    ]
    lines.append(f"complete -c {PROG} -s V -l version -d 'Print version'")
    lines.append(
        f"complete -c {PROG} -n '__fish_seen_subcommand_from disable-link' "
        f"-s a -l all -d {_quote(_ALL_HELP)}"
    )
    with_paths = " ".join(sub.name for sub in _VISIBLE if sub.takes_paths)
    lines.append(f"complete -c {PROG} -n '__fish_seen_subcommand_from {with_paths}' -F")
    return "\n".join(lines) + "\n"


def _powershell_script() -> str:
    lines = [
        "using namespace System.Management.Automation",
        "",
        f"Register-ArgumentCompleter -Native -CommandName '{PROG}' -ScriptBlock {{",
        "    param($wordToComplete, $commandAst, $cursorPosition)",
        "    $elements = $commandAst.CommandElements",
        "    if ($elements.Count -le 2) {",
        "        @(",
    ]
    entries = [
        f"            [CompletionResult]::new('{sub.name}', '{sub.name}', "
        f"[CompletionResultType]::ParameterValue, '{sub.help}')"
        for sub in _VISIBLE
    ]
    lines.append(",\n".join(entries))
    lines += [
        '        ) | Where-Object { $_.CompletionText -like "$wordToComplete*" }',
        "    }",
        "}",
    ]
    return "\n".join(lines) + "\n"


def _elvish_script() -> str:
    lines = [
        "fn cand {|text desc|",
        "    edit:complex-candidate $text &display=$text' '$desc",
        "}",
        "",
        f"set edit:completion:arg-completer[{PROG}] = {{|@words|",
        "    if (== (count $words) 2) {",
    ]
    lines += [f"        cand {sub.name} {_quote(sub.help)}" for sub in _VISIBLE]
    lines += [
        "    } elif (has-value [disable-link -d] $words[1]) {",
        f"        cand --all {_quote(_ALL_HELP)}",
        "    }",
        "}",
    ]
    return "\n".join(lines) + "\n"


_GENERATORS = {
    "bash": _bash_script,
    "elvish": _elvish_script,
    "fish": _fish_script,
    "powershell": _powershell_script,
    "zsh": _zsh_script,
}


def completion_script(shell: str) -> str:
    """Return the completion script for ``shell``; unknown shells raise ValueError."""
    try:
        generator = _GENERATORS[shell]
    except KeyError:
        raise ValueError(f"Invalid shell type: {shell}") from None
    return generator()


def _run(args: argparse.Namespace) -> None:
    command = args.command
    if command == "add":
        config = Config.load()
        for path in args.paths:
            config.add_path(path)
    elif command == "remove":
        config = Config.load()
        for path in args.paths:
            config.remove_path(path)
    elif command == "sync":
        DotManager().sync()
    elif command == "generate-completion":
        sys.stdout.write(completion_script(args.shell))
    elif command == "disable-link":
        manager = DotManager()
        if args.all:
            manager.config.defaults.on_delink = OnDelinkBehavior.KEEP
            manager.delink_all()
        else:
            manager.delink(args.paths)
    elif command == "status":
        DotManager().status()
    elif command == "check":
        DotManager().check()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; returns the process exit status."""
    parser = build_parser()
    raw = sys.argv[1:] if argv is None else argv
    args = parser.parse_args(_expand_short_commands(raw))

    if args.completion_shell is not None:
        sys.stdout.write(completion_script(args.completion_shell))
        return 0
    if args.command is None:
        parser.error("a subcommand is required")
    if args.command == "disable-link" and not args.all and not args.paths:
        parser.error("disable-link: the following arguments are required: paths (or --all)")

    try:
        _run(args)
    except (ConfigError, PathError, OSError) as exc:
        print(f"{PROG}: error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())