"""Tests for the file reconciliation I/O shell."""

from pathlib import Path

from base_tooling.core.reconcile.files import reconcile_file, write_text_atomic


def _append_marker(content: str) -> str:
    if "marker" in content:
        return content
    return content + "marker\n"


def test_creates_missing_file_and_parents(tmp_path: Path) -> None:
    path = tmp_path / ".config" / "nix" / "nix.conf"

    changed = reconcile_file(path, _append_marker, owner=None, dry_run=False)

    assert changed is True
    assert path.read_text(encoding="utf-8") == "marker\n"


def test_unchanged_content_is_not_rewritten(tmp_path: Path) -> None:
    path = tmp_path / ".bashrc"
    path.write_text("marker\n", encoding="utf-8")
    mtime = path.stat().st_mtime_ns

    changed = reconcile_file(path, _append_marker, owner=None, dry_run=False)

    assert changed is False
    assert path.stat().st_mtime_ns == mtime


def test_existing_empty_file_that_needs_no_change_is_unchanged(tmp_path: Path) -> None:
    path = tmp_path / ".profile"
    path.write_text("", encoding="utf-8")

    changed = reconcile_file(path, lambda content: content, owner=None, dry_run=False)

    assert changed is False


def test_dry_run_reports_change_without_writing(tmp_path: Path, capsys) -> None:
    path = tmp_path / ".profile"
    path.write_text("# mine\n", encoding="utf-8")

    changed = reconcile_file(path, _append_marker, owner=None, dry_run=True)

    assert changed is True
    assert path.read_text(encoding="utf-8") == "# mine\n"
    assert f"[dry-run] would update {path}" in capsys.readouterr().err


def test_dry_run_does_not_create_missing_file(tmp_path: Path) -> None:
    path = tmp_path / "missing" / ".zprofile"

    changed = reconcile_file(path, _append_marker, owner=None, dry_run=True)

    assert changed is True
    assert not path.exists()
    assert not path.parent.exists()


def test_atomic_write_preserves_mode_and_leaves_no_temp_file(tmp_path: Path) -> None:
    path = tmp_path / ".bashrc"
    path.write_text("old\n", encoding="utf-8")
    path.chmod(0o600)

    write_text_atomic(path, "new\n")

    assert path.read_text(encoding="utf-8") == "new\n"
    assert path.stat().st_mode & 0o777 == 0o600
    assert [p.name for p in tmp_path.iterdir()] == [".bashrc"]


def test_symlinked_file_is_updated_through_the_link(tmp_path: Path) -> None:
    dotfiles = tmp_path / "dotfiles"
    dotfiles.mkdir()
    target = dotfiles / "bashrc"
    target.write_text("# mine\n", encoding="utf-8")
    link = tmp_path / ".bashrc"
    link.symlink_to(target)

    changed = reconcile_file(link, _append_marker, owner=None, dry_run=False)

    assert changed is True
    assert link.is_symlink()
    assert link.resolve() == target.resolve()
    assert target.read_text(encoding="utf-8") == "# mine\nmarker\n"
    assert sorted(p.name for p in dotfiles.iterdir()) == ["bashrc"]


def test_symlinked_file_second_pass_is_unchanged(tmp_path: Path) -> None:
    target = tmp_path / "dotfiles" / "profile"
    target.parent.mkdir()
    target.write_text("marker\n", encoding="utf-8")
    link = tmp_path / ".profile"
    link.symlink_to(target)

    assert reconcile_file(link, _append_marker, owner=None, dry_run=False) is False
    assert link.is_symlink()
