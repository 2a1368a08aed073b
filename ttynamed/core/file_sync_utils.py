"""
File sync helpers.

``atomic_write_text`` writes through a temporary sibling file and
``os.replace`` so readers only ever see the old or the new contents.
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import Optional, Union

from ttynamed.core.logging_utils import get_module_logger

logger = get_module_logger("FileSyncUtils")


def safe_fsync(fd: int) -> bool:
    """Sync file descriptor to disk.

    Returns:
        True if sync succeeded, False if it failed (failure is logged at
        debug level; fsync is advisory on some filesystems).
    """
    try:
        os.fsync(fd)
        return True
    except OSError as e:
        logger.debug("fsync failed for fd %d: %s", fd, e)
        return False


def fsync_file(file_obj) -> bool:
    """Flush and sync an open file object to disk."""
    try:
        file_obj.flush()
        return safe_fsync(file_obj.fileno())
    except (OSError, AttributeError, ValueError) as e:
        logger.debug("fsync_file failed: %s", e)
        return False


def atomic_write_text(path: Union[str, Path], text: str, *, encoding: str = "utf-8") -> None:
    """Replace ``path`` with ``text`` atomically.

    A symlinked ``path`` is written through to its target, and an existing
    file keeps its permission bits.

    Raises:
        OSError: if the directory cannot be created, the temporary file
            cannot be written, or the final rename fails. The previous
            contents of ``path`` are left in place in every failure case.
    """
    target = Path(os.path.realpath(path))
    target.parent.mkdir(parents=True, exist_ok=True)
    try:
        mode: Optional[int] = stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        mode = None

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            dir=str(target.parent),
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
            encoding=encoding,
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(text)
            fsync_file(tmp)

        if mode is not None:
            os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
        tmp_path = None
    finally:
        if tmp_path is not None:
            try:
                tmp_path.unlink()
            except FileNotFoundError:
                pass


__all__ = ["atomic_write_text", "fsync_file", "safe_fsync"]
