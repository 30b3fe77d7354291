# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Path utilities for sbpack.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

ARCHIVE_SUFFIX = ".tar.gz"
DEFAULT_OUTPUT_PREFIX = "sbpack-release-"


def default_output_path(temp_dir: Optional[Path] = None) -> Path:
    """
    Reserve a fresh, unique archive path ending in .tar.gz.

    mkstemp creates the file exclusively (O_EXCL), so the name is claimed on
    disk before we return it. Two calls can never hand out the same path,
    even from concurrent processes. The empty placeholder is replaced when the
    archive is written.

    Args:
        temp_dir: Directory to create the path in. System temp dir if None.

    Returns:
        Absolute path to the reserved (empty) file.
    """
    fd, name = tempfile.mkstemp(
        suffix=ARCHIVE_SUFFIX,
        prefix=DEFAULT_OUTPUT_PREFIX,
        dir=str(temp_dir) if temp_dir is not None else None,
    )
    os.close(fd)
    return Path(name)


def is_within(path: Path, parent: Path) -> bool:
    """Return True if `path` resolves to `parent` or somewhere beneath it."""
    try:
        path.resolve().relative_to(parent.resolve())
    except ValueError:
        return False
    return True
