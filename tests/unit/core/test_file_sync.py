"""Tests for fsync helpers and atomic file replacement."""

import stat
from unittest.mock import MagicMock, patch

import pytest

from ttynamed.core.file_sync_utils import atomic_write_text, fsync_file, safe_fsync


class TestFsync:

    def test_safe_fsync_reports_failure(self):
        with patch("ttynamed.core.file_sync_utils.os.fsync", side_effect=OSError("EINVAL")):
            assert safe_fsync(3) is False

    def test_fsync_file_without_fileno(self):
        assert fsync_file(MagicMock(fileno=MagicMock(side_effect=ValueError))) is False

    def test_fsync_real_file(self, tmp_path):
        with open(tmp_path / "f", "w") as fh:
            fh.write("x")
            assert fsync_file(fh) is True


class TestAtomicWriteText:

    def test_creates_file_and_parents(self, tmp_path):
        target = tmp_path / "nested" / "ttys.json"
        atomic_write_text(target, "hello")
        assert target.read_text() == "hello"

    def test_replaces_existing(self, tmp_path):
        target = tmp_path / "ttys.json"
        target.write_text("old")
        atomic_write_text(target, "new")
        assert target.read_text() == "new"
        assert [p.name for p in tmp_path.iterdir()] == ["ttys.json"]

    def test_failed_rename_leaves_old_contents(self, tmp_path):
        target = tmp_path / "ttys.json"
        target.write_text("old")

        with patch("ttynamed.core.file_sync_utils.os.replace", side_effect=OSError("read-only")):
            with pytest.raises(OSError, match="read-only"):
                atomic_write_text(target, "new")

        assert target.read_text() == "old"
        assert [p.name for p in tmp_path.iterdir()] == ["ttys.json"]

    def test_keeps_existing_permissions(self, tmp_path):
        target = tmp_path / "ttys.json"
        target.write_text("old")
        target.chmod(0o644)

        atomic_write_text(target, "new")

        assert stat.S_IMODE(target.stat().st_mode) == 0o644

    def test_writes_through_symlink(self, tmp_path):
        real = tmp_path / "dotfiles" / "ttys.json"
        real.parent.mkdir()
        real.write_text("old")
        link = tmp_path / "ttys.json"
        link.symlink_to(real)

        atomic_write_text(link, "new")

        assert link.is_symlink()
        assert real.read_text() == "new"
        assert link.read_text() == "new"

    def test_non_ascii(self, tmp_path):
        target = tmp_path / "ttys.json"
        atomic_write_text(target, "Gerät Ω")
        assert target.read_text(encoding="utf-8") == "Gerät Ω"
