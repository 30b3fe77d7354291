# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Scoped staging directory for release assembly.

The staging tree mirrors the final archive layout:

    <staging root>/
    ├─ include/
    └─ lib/
       └─ pkgconfig/

StagingContext owns the tree for exactly one `with` block. It is created
fresh on entry and removed on every exit path, whether the block finished,
raised, or was interrupted. Callers get the root from the context object
instead of changing the process working directory.
"""

import logging
import shutil
import tempfile
from pathlib import Path
from types import TracebackType
from typing import Optional

from sbpack.logging.logger import get_logger
from sbpack.release.artifacts import RELEASE_LAYOUT_DIRS, ArtifactMatch
from sbpack.release.exceptions import StagingError

_logger: logging.Logger = get_logger(__name__)

STAGING_PREFIX = "sbpack-staging-"


class StagingContext:
    """
    A temporary directory laid out like the release archive.

    Usage:
        with StagingContext() as staging:
            staging.stage(match)
            create_archive(staging, output)
        # staging.root no longer exists here
    """

    def __init__(
        self,
        temp_dir: Optional[Path] = None,
        layout_dirs: tuple[str, ...] = RELEASE_LAYOUT_DIRS,
    ) -> None:
        self._temp_dir = temp_dir
        self.layout_dirs = layout_dirs
        self._root: Optional[Path] = None
        self.staged: dict[Path, Path] = {}
        self.overwritten: list[Path] = []

    @property
    def root(self) -> Path:
        if self._root is None:
            raise StagingError("Staging directory is only available inside its `with` block")
        return self._root

    def __enter__(self) -> "StagingContext":
        try:
            root = Path(
                tempfile.mkdtemp(
                    prefix=STAGING_PREFIX,
                    dir=str(self._temp_dir) if self._temp_dir is not None else None,
                )
            )
        except OSError as err:
            raise StagingError(f"Cannot create staging directory: {err}") from err

        self._root = root
        try:
            for rel in self.layout_dirs:
                (root / rel).mkdir(parents=True, exist_ok=True)
        except OSError as err:
            self._cleanup()
            raise StagingError(f"Cannot create staging layout in {root}: {err}") from err

        _logger.debug("Staging directory created", extra={"staging_root": str(root)})
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if exc is None:
            self._cleanup()
            return
        # The block already failed; that error is the one the caller sees.
        try:
            self._cleanup()
        except StagingError as cleanup_err:
            _logger.error(
                "Staging cleanup failed after an earlier error",
                extra={"error": str(cleanup_err), "original_error": repr(exc)},
            )

    def _cleanup(self) -> None:
        if self._root is None:
            return
        root = self._root
        self._root = None
        try:
            shutil.rmtree(root)
        except OSError as err:
            raise StagingError(f"Cannot remove staging directory {root}: {err}") from err
        _logger.debug("Staging directory removed", extra={"staging_root": str(root)})

    def stage(self, match: ArtifactMatch) -> Path:
        """
        Copy one discovered artifact into its layout directory.

        A second file with the same name replaces the first. The replacement
        is recorded in `overwritten` and logged as a warning.

        Returns:
            Path of the staged copy.

        Raises:
            StagingError: If the copy fails.
        """
        dest_dir = self.root / match.spec.destination
        dest = dest_dir / match.spec.filename

        previous = self.staged.get(dest)
        if previous is not None:
            self.overwritten.append(previous)
            _logger.warning(
                "Duplicate artifact replaces earlier copy",
                extra={
                    "artifact": match.spec.filename,
                    "replaced": str(previous),
                    "source": str(match.source),
                },
            )

        try:
            shutil.copy2(str(match.source), str(dest))
        except OSError as err:
            raise StagingError(f"Cannot stage {match.source}: {err}") from err

        self.staged[dest] = match.source
        _logger.info(
            "Staged artifact",
            extra={"source": str(match.source), "destination": match.spec.destination},
        )
        return dest

    def top_level_entries(self) -> list[Path]:
        """Sorted top-level entries of the staging root, hidden names excluded."""
        return sorted(p for p in self.root.iterdir() if not p.name.startswith("."))
