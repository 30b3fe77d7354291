# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Safe filesystem operations for sbpack.

Atomic writes work by writing to a temporary file in the same directory as
the target, then renaming. Rename on the same filesystem is atomic on POSIX.
If the process dies mid-write you get a leftover temp file instead of a
truncated archive at the published path.
"""

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

TEMP_PREFIX = ".sbpack_tmp_"


def _default_file_mode() -> int:
    """Mode a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


@contextmanager
def atomic_output(target_path: Path) -> Iterator[Path]:
    """
    Yield a temporary path next to `target_path`; move it into place on success.

    The caller writes the complete file to the yielded path. When the block
    exits cleanly the temp file replaces the target in a single rename. When
    the block raises, the temp file is deleted and the target is untouched.

    Args:
        target_path: Where the final file should end up.

    Raises:
        OSError: If the target directory is missing, or the temp file cannot
            be created or renamed.
    """
    # dir= same directory as target so the rename stays on one filesystem.
    fd, name = tempfile.mkstemp(
        dir=str(target_path.parent),
        prefix=TEMP_PREFIX,
        suffix=".tmp",
    )
    os.close(fd)
    temp_path = Path(name)

    try:
        yield temp_path
        # mkstemp creates 0600 files; published archives get the usual mode.
        os.chmod(temp_path, _default_file_mode())
        # os.replace instead of Path.rename: the target may already exist
        # (reserved default path, or a previous archive).
        os.replace(temp_path, target_path)
    except BaseException:
        if temp_path.exists():
            temp_path.unlink()
        raise


def safe_delete(file_path: Path) -> bool:
    """
    Delete a file if it exists. Returns whether anything was actually deleted.

    Raises:
        OSError: If the file exists but can't be deleted (permissions, etc).
    """
    if file_path.exists():
        file_path.unlink()
        return True
    return False
