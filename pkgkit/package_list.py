"""
Package list file handling

The package list is a flat text file with one entry per line. It is
written by generate and read back by install. There is no locking: a
generate running concurrently with an install on the same path may leave
the reader with a partially written file.
"""

import getpass
import os
import pwd
import shutil
from pathlib import Path
from typing import Iterable, List, Optional

from .logger import get_logger

logger = get_logger(__name__)

LIST_FILE_MODE = 0o644


def invoking_user() -> str:
    """The user who ran the tool, looking through sudo when present"""
    return os.environ.get('SUDO_USER') or getpass.getuser()


def write_package_list(path: Path, entries: Iterable[str],
                       owner: Optional[str] = None) -> Path:
    """
    Write entries to path, replacing any existing file.

    The file is made owner read/write, group/other read, and handed to the
    invoking user. A failed ownership change is logged, not raised.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = list(entries)
    with open(path, 'w', encoding='utf-8') as f:
        for line in lines:
            f.write(f"{line}\n")

    os.chmod(path, LIST_FILE_MODE)
    _chown(path, owner or invoking_user())

    logger.debug(f"Wrote {len(lines)} entries to {path}")
    return path


def _chown(path: Path, user: str) -> None:
    try:
        group = pwd.getpwnam(user).pw_gid
    except KeyError:
        logger.warning(f"Cannot change owner of '{path}': unknown user {user}")
        return

    try:
        shutil.chown(path, user=user, group=group)
    except PermissionError as e:
        logger.warning(f"Cannot change owner of '{path}' to {user}: {e}")


def read_package_names(path: Path) -> List[str]:
    """Whitespace separated package names from a list file"""
    with open(path, 'r', encoding='utf-8') as f:
        return f.read().split()
