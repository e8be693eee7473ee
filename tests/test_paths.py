import os
from pathlib import Path

import pytest

from lazydot.paths import (
    PathError,
    check_path,
    copy_all,
    delete,
    expand_path,
    get_home_dir,
)


@pytest.fixture
def home(tmp_path, monkeypatch):
    home_dir = tmp_path / "home"
    (home_dir / ".config").mkdir(parents=True)
    (home_dir / ".bashrc").write_text("bash")
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.chdir(home_dir)
    return home_dir


def create_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


def test_expand_path_with_tilde(home):
    assert expand_path("~/some/path") == home / "some/path"


def test_expand_path_relative(home):
    cwd = Path.cwd()
    assert expand_path("some/relative/path") == cwd / "some/relative/path"


def test_expand_path_absolute_is_unchanged(home, tmp_path):
    target = tmp_path / "elsewhere" / "file"
    assert expand_path(str(target)) == target


def test_expand_path_empty_is_cwd(home):
    assert expand_path("") == Path.cwd()


def test_check_path_valid(home):
    create_file(home / ".testfile", "data")
    assert check_path("~/.testfile") == "~/.testfile"


def test_check_path_absolute_inside_home(home):
    create_file(home / ".config" / "app" / "conf.toml", "x")
    assert check_path(str(home / ".config/app/conf.toml")) == "~/.config/app/conf.toml"


def test_check_path_relative_to_cwd(home):
    assert check_path(".bashrc") == "~/.bashrc"


def test_check_path_invalid_outside_home(home, tmp_path):
    outside = tmp_path / "outside" / "passwd"
    create_file(outside, "root")
    with pytest.raises(PathError, match="is not in the home directory"):
        check_path(str(outside))


def test_check_path_missing(home):
    with pytest.raises(PathError, match="does not exist"):
        check_path("~/nothing/here")


@pytest.mark.parametrize("value", ["~/", ""])
def test_check_path_home_itself(home, value):
    with pytest.raises(PathError, match="is the home directory"):
        check_path(value)


def test_check_path_home_absolute(home):
    with pytest.raises(PathError, match="home"):
        check_path(str(home))


def test_get_home_dir(home):
    assert get_home_dir() == home


def test_get_home_dir_missing(monkeypatch):
    monkeypatch.delenv("HOME", raising=False)
    with pytest.raises(PathError, match="HOME"):
        get_home_dir()


def test_delete_file(home, tmp_path):
    file_path = tmp_path / "work" / "file.txt"
    create_file(file_path, "hi")
    assert file_path.exists()
    delete(file_path)
    assert not file_path.exists()


def test_delete_directory(home, tmp_path):
    nested = tmp_path / "work" / "nested" / "dir"
    nested.mkdir(parents=True)
    create_file(nested / "inner.txt", "x")
    delete(nested)
    assert not nested.exists()


def test_delete_broken_symlink(home, tmp_path):
    link = tmp_path / "broken"
    link.symlink_to(tmp_path / "missing-target")
    assert link.is_symlink()
    delete(link)
    assert not link.is_symlink()


def test_delete_symlink_keeps_target(home, tmp_path):
    target = tmp_path / "target_dir"
    target.mkdir()
    create_file(target / "kept.txt", "keep")
    link = tmp_path / "link"
    link.symlink_to(target)
    delete(link)
    assert not link.is_symlink()
    assert (target / "kept.txt").read_text() == "keep"


def test_delete_invalid_path(home, tmp_path):
    with pytest.raises(PathError, match="not a valid file"):
        delete(tmp_path / "nonexistent")


def test_copy_all_file(home, tmp_path):
    source = tmp_path / "a.txt"
    target = tmp_path / "b.txt"
    create_file(source, "copy me")
    copy_all(source, target)
    assert target.read_text() == "copy me"


def test_copy_all_file_creates_parents(home, tmp_path):
    source = tmp_path / "a.txt"
    target = tmp_path / "deep" / "er" / "b.txt"
    create_file(source, "copy me")
    copy_all(source, target)
    assert target.read_text() == "copy me"


def test_copy_all_directory(home, tmp_path):
    source_dir = tmp_path / "source"
    target_dir = tmp_path / "target"
    create_file(source_dir / "nested" / "file.txt", "nested data")
    copy_all(source_dir, target_dir)
    copied = target_dir / "nested" / "file.txt"
    assert copied.exists()
    assert copied.read_text() == "nested data"


def test_copy_all_preserves_source(home, tmp_path):
    source_dir = tmp_path / "source"
    create_file(source_dir / "one.txt", "1")
    create_file(source_dir / "two" / "two.txt", "2")
    copy_all(source_dir, tmp_path / "target")
    copied = sorted(
        p.relative_to(tmp_path / "target").as_posix()
        for p in (tmp_path / "target").rglob("*")
        if p.is_file()
    )
    original = sorted(
        p.relative_to(source_dir).as_posix() for p in source_dir.rglob("*") if p.is_file()
    )
    assert copied == original
    assert (source_dir / "one.txt").read_text() == "1"


def test_copy_all_missing_source(home, tmp_path):
    with pytest.raises(FileNotFoundError):
        copy_all(tmp_path / "missing", tmp_path / "target")
    assert not os.path.exists(tmp_path / "target")