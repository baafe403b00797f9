"""
sshlink Utilities

File helpers shared by the services.
"""

import os
import re
import tempfile
from pathlib import Path

from sshlink.constants import SSH_CONFIG_PERMISSIONS

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def strip_ansi(text: str) -> str:
    """Remove terminal color sequences."""
    return ANSI_ESCAPE.sub("", text)


def atomic_write_text(
    path: Path, content: str, mode: int = SSH_CONFIG_PERMISSIONS
) -> None:
    """
    Replace a file's content so readers never see a partial write.

    Content goes to a sibling temporary file which is fsynced and renamed
    over the target. On any failure the temporary file is removed and the
    target is left as it was.

    Args:
        path: File to replace
        content: New full content
        mode: Permission bits for the new file

    Raises:
        OSError: If any step of the write or rename fails
    """
    path = Path(path)
    fd = None
    tmp_path = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        os.fchmod(fd, mode)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            fd = None
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
        tmp_path = None
    finally:
        if fd is not None:
            os.close(fd)
        if tmp_path is not None:
            try:
                tmp_path.unlink()
            except OSError:
                pass
