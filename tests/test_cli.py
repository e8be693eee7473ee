import pytest

from lazydot.cli import SHELLS, build_parser, completion_script, main
from lazydot.config import Config


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".bashrc").write_text("bash settings")
    return tmp_path


def test_parser_reads_add_paths():
    args = build_parser().parse_args(["add", "~/.bashrc", "~/.vimrc"])
    assert args.command == "add"
    assert args.paths == ["~/.bashrc", "~/.vimrc"]


def test_parser_requires_paths_for_add():
    with pytest.raises(SystemExit) as info:
        build_parser().parse_args(["add"])
    assert info.value.code == 2


def test_parser_disable_link_all_flag():
    args = build_parser().parse_args(["disable-link", "--all"])
    assert args.all is True
    assert args.paths == []


def test_version_output(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--version"])
    assert info.value.code == 0
    assert capsys.readouterr().out.strip() == "lazydot v0.4.0"


def test_add_registers_path(home):
    assert main(["add", "~/.bashrc"]) == 0
    assert Config.load().paths == ["~/.config/lazydot.toml", "~/.bashrc"]


def test_short_flag_add(home):
    assert main(["-a", str(home / ".bashrc")]) == 0
    assert "~/.bashrc" in Config.load().paths


def test_add_missing_path_fails(home, capsys):
    assert main(["add", "~/some_path"]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_remove_unregisters_path(home):
    main(["add", "~/.bashrc"])
    assert main(["-r", "~/.bashrc"]) == 0
    assert "~/.bashrc" not in Config.load().paths


def test_status_lists_pending_paths(home, capsys):
    main(["add", "~/.bashrc"])
    capsys.readouterr()
    assert main(["status"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert any("++" in line and line.endswith("~/.bashrc") for line in lines)


def test_sync_links_and_check_reports(home, capsys):
    main(["add", "~/.bashrc"])
    assert main(["-s"]) == 0
    bashrc = home / ".bashrc"
    assert bashrc.is_symlink()
    assert bashrc.resolve() == home / "mydotfolder" / ".bashrc"
    capsys.readouterr()
    assert main(["check"]) == 0
    out = capsys.readouterr().out
    assert "[LINKED]" in out
    assert "~/.bashrc" in out


def test_disable_link_all_keeps_dotfolder(home):
    main(["add", "~/.bashrc"])
    main(["sync"])
    assert main(["disable-link", "--all"]) == 0
    bashrc = home / ".bashrc"
    assert not bashrc.is_symlink()
    assert bashrc.read_text() == "bash settings"
    assert (home / "mydotfolder" / ".bashrc").exists()


def test_disable_link_path_removes_dotfolder_copy(home):
    main(["add", "~/.bashrc"])
    main(["sync"])
    assert main(["-d", "~/.bashrc"]) == 0
    assert not (home / ".bashrc").is_symlink()
    assert not (home / "mydotfolder" / ".bashrc").exists()


def test_disable_link_requires_paths_or_all(home):
    with pytest.raises(SystemExit) as info:
        main(["disable-link"])
    assert info.value.code == 2


def test_missing_subcommand_is_an_error():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2


@pytest.mark.parametrize("shell", SHELLS)
def test_completion_scripts_name_subcommands(shell):
    script = completion_script(shell)
    for name in ("add", "remove", "sync", "disable-link", "status", "check"):
        assert name in script
    assert "generate-completion" not in script


def test_completion_unknown_shell():
    with pytest.raises(ValueError):
        completion_script("tcsh")


def test_completion_shell_option(capsys):
    assert main(["--completion-shell", "fish"]) == 0
    assert capsys.readouterr().out == completion_script("fish")


def test_generate_completion_subcommand(capsys):
    assert main(["-g", "zsh"]) == 0
    out = capsys.readouterr().out
    assert out == completion_script("zsh")
    assert out.startswith("#compdef lazydot")