# lazydot

lazydot keeps your configuration files in one dotfolder and links them back
into your home directory, so the same setup can be deployed on any machine.

## Installation

```
pip install .
```

This installs the `lazydot` command. The only runtime dependency is `tomlkit`.

## Configuration

The configuration lives in `~/.config/lazydot.toml`. lazydot looks for it in
this order:

1. `~/.config/lazydot.toml`, if it exists, is used as is.
2. Otherwise, if `.config/lazydot.toml` exists in the current directory, a
   symlink to it is created at `~/.config/lazydot.toml` and it is used.
3. Otherwise a default file is written to `~/.config/lazydot.toml`.

The default file holds these settings (with explanatory comments):

```toml
dotfolder_path = "~/mydotfolder"
paths = [
    "~/.config/lazydot.toml",
]

[defaults]
on_duplicate = "ask"
on_delink = "remove"
```

- `dotfolder_path` must start with `~/`. The folder is created when a command
  that needs it runs.
- Every entry in `paths` must either start with `~/` or be an absolute path
  inside your home directory.
- `on_duplicate` decides what `sync` does when an entry exists both in home and
  in the dotfolder:
  - `ask`: list the conflicting entries and ask, by number, which ones to keep
    from home (`0` selects all; an empty answer keeps the dotfolder versions).
  - `overwritehome`: replace the copy in home with a link to the dotfolder copy.
  - `overwritedotfile`: move the copy in home into the dotfolder, then link.
  - `backuphome`: rename the copy in home to one with a `.bak` suffix
    (replacing any existing suffix), then link.
  - `skip`: leave both copies untouched.
- `on_delink` decides whether an entry is deleted from the dotfolder (`remove`)
  or kept there (`keep`) after it is restored to home.

Saving the configuration keeps the comments already in the file.

## Usage

Register files or folders (they must exist and lie inside your home
directory; the home directory itself is refused):

```
lazydot add ~/.bashrc ~/.config/nvim
```

Paths are stored in `~/...` form. A path given inside the dotfolder is stored
as the matching location in home.

Unregister them:

```
lazydot remove ~/.bashrc
```

Move registered entries into the dotfolder and link them back. Entries that
were linked by an earlier sync but are no longer registered are unlinked
first. The list of linked entries is recorded in `current_state.toml` in the
dotfolder:

```
lazydot sync
```

Show what the next sync would add (`++`) or remove (`--`):

```
lazydot status
```

Check the state of every managed path (`[LINKED]`, `[WRONG-TGT]`,
`[BROKEN-LNK]`, `[TYPE-MISM]`, `[DISABLED]`, `[UNLINKED]`, `[BOTH-MISS]`):

```
lazydot check
```

Restore real copies in place of links without touching the config:

```
lazydot disable-link ~/.bashrc
lazydot disable-link --all
```

`--all` always keeps the copies in the dotfolder; naming paths follows
`on_delink`.

Each command also has a short flag given in its place: `-a` (add), `-r`
(remove), `-s` (sync), `-d` (disable-link), `-t` (status), `-c` (check).

Print a shell completion script for `bash`, `zsh`, `fish`, `elvish` or
`powershell`:

```
lazydot generate-completion bash
```

`lazydot --version` prints the version. On a configuration or path error the
command prints the message and exits with status 1.

## Using it from Python

- `lazydot.config.Config.load()` reads the configuration; `add_path`,
  `remove_path`, `save` and `validate` change and check it.
- `lazydot.dot_manager.DotManager` offers `sync`, `delink`, `delink_all`,
  `status` and `check`. It takes an optional `select` callable used in place
  of the terminal prompt when `on_duplicate` is `ask`.
- `lazydot.paths` holds `expand_path`, `check_path`, `copy_all` and `delete`.
- `lazydot.cli.completion_script(shell)` returns a completion script as text.

lazydot relies on symbolic links and reads the home directory from the `HOME`
environment variable, so it targets POSIX systems.