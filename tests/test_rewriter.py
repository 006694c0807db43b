"""Tests for backup-preserving writes."""

import shutil

import pytest

from nsmodernizer.exceptions import BackupWriteError
from nsmodernizer.rewriter import backup_path_for, read_script, write_with_backup


def test_backup_path_appends_suffix(tmp_path):
    assert backup_path_for(tmp_path / "a.tcl") == tmp_path / "a.tcl-original"
    assert backup_path_for(tmp_path / "a.tcl", ".bak") == tmp_path / "a.tcl.bak"


def test_backup_holds_original_and_live_holds_new(tmp_path):
    script = tmp_path / "a.tcl"
    script.write_text("ns_mkdir $foo\n")

    backup = write_with_backup(script, "file mkdir $foo\n")

    assert backup == tmp_path / "a.tcl-original"
    assert backup.read_text() == "ns_mkdir $foo\n"
    assert script.read_text() == "file mkdir $foo\n"


def test_no_temporary_files_are_left_behind(tmp_path):
    script = tmp_path / "a.tcl"
    script.write_text("ns_mkdir $foo\n")

    write_with_backup(script, "file mkdir $foo\n")

    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.tcl", "a.tcl-original"]


def test_line_endings_and_odd_bytes_survive(tmp_path):
    script = tmp_path / "a.tcl"
    raw = b"ns_mkdir $foo\r\n# caf\xe9\r\n"
    script.write_bytes(raw)

    text = read_script(script)
    write_with_backup(script, text.replace("ns_mkdir", "file mkdir"))

    assert (tmp_path / "a.tcl-original").read_bytes() == raw
    assert script.read_bytes() == b"file mkdir $foo\r\n# caf\xe9\r\n"


def test_permissions_are_kept(tmp_path):
    script = tmp_path / "a.tcl"
    script.write_text("ns_mkdir $foo\n")
    script.chmod(0o640)

    write_with_backup(script, "file mkdir $foo\n")

    assert script.stat().st_mode & 0o777 == 0o640


def test_existing_backup_is_never_overwritten(tmp_path):
    script = tmp_path / "a.tcl"
    script.write_text("ns_mkdir $foo\n")
    write_with_backup(script, "file mkdir $foo\n")
    script.write_text("file mkdir $foo\nns_rmdir $foo\n")

    with pytest.raises(BackupWriteError, match="already exists"):
        write_with_backup(script, "file mkdir $foo\nfile delete $foo\n")

    assert (tmp_path / "a.tcl-original").read_text() == "ns_mkdir $foo\n"
    assert script.read_text() == "file mkdir $foo\nns_rmdir $foo\n"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.tcl", "a.tcl-original"]


def test_failed_backup_leaves_file_untouched(tmp_path, monkeypatch):
    script = tmp_path / "a.tcl"
    script.write_text("ns_mkdir $foo\n")

    def refuse(src, dst, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(dst))

    monkeypatch.setattr(shutil, "copy2", refuse)

    with pytest.raises(BackupWriteError) as excinfo:
        write_with_backup(script, "file mkdir $foo\n")

    assert excinfo.value.path == str(script)
    assert script.read_text() == "ns_mkdir $foo\n"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.tcl"]


def test_failed_live_write_keeps_original_content(tmp_path, monkeypatch):
    script = tmp_path / "a.tcl"
    script.write_text("ns_mkdir $foo\n")

    def refuse(src, dst, *args, **kwargs):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(shutil, "copymode", refuse)

    with pytest.raises(BackupWriteError, match="original kept"):
        write_with_backup(script, "file mkdir $foo\n")

    assert script.read_text() == "ns_mkdir $foo\n"
    assert (tmp_path / "a.tcl-original").read_text() == "ns_mkdir $foo\n"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.tcl", "a.tcl-original"]
