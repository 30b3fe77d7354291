# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The sector-builder FFI artifact catalogue and tree search.

A release holds three build outputs, each with a fixed filename and a fixed
home inside the archive:

    include/sector_builder_ffi.h
    lib/libsector_builder_ffi.a
    lib/pkgconfig/sector_builder_ffi.pc

Cargo drops these somewhere under target/ depending on profile and triple,
so we search the whole tree for them instead of hardcoding a build path.
Artifact contents are opaque; we only match on names.
"""

import logging
import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from sbpack.logging.logger import get_logger
from sbpack.release.exceptions import ArtifactDiscoveryError
from sbpack.utils.paths import is_within

_logger: logging.Logger = get_logger(__name__)


@dataclass(frozen=True)
class ArtifactSpec:
    """A well-known artifact filename and the archive directory it belongs in."""

    filename: str
    destination: str


@dataclass(frozen=True)
class ArtifactMatch:
    """One file on disk that matched an ArtifactSpec."""

    spec: ArtifactSpec
    source: Path


SECTOR_BUILDER_ARTIFACTS: tuple[ArtifactSpec, ...] = (
    ArtifactSpec(filename="sector_builder_ffi.h", destination="include"),
    ArtifactSpec(filename="libsector_builder_ffi.a", destination="lib"),
    ArtifactSpec(filename="sector_builder_ffi.pc", destination="lib/pkgconfig"),
)

# Every directory the archive layout promises, parents before children.
RELEASE_LAYOUT_DIRS: tuple[str, ...] = ("include", "lib", "lib/pkgconfig")


def _is_regular_file(path: Path) -> bool:
    # Same rule as `find -type f`: symlinks are skipped even if they point at a file.
    return path.is_file() and not path.is_symlink()


def discover_artifacts(
    search_root: Path,
    artifacts: Sequence[ArtifactSpec] = SECTOR_BUILDER_ARTIFACTS,
    exclude: Iterable[Path] = (),
) -> list[ArtifactMatch]:
    """
    Find every regular file under `search_root` named like one of `artifacts`.

    The walk does not follow directory symlinks. Matches come back grouped
    in `artifacts` order and sorted by path inside each group, so when two
    files share a name the later one in this list is the one that ends up in
    the archive.

    Finding nothing is fine; the result is just empty.

    Args:
        search_root: Top of the tree to search.
        artifacts: Which filenames to look for.
        exclude: Directories or files to skip (the staging dir and the output
            archive, for instance).

    Returns:
        List of ArtifactMatch, possibly empty.

    Raises:
        ArtifactDiscoveryError: If search_root is not a directory.
    """
    if not search_root.is_dir():
        raise ArtifactDiscoveryError(f"Search root is not a directory: {search_root}")

    by_name: dict[str, ArtifactSpec] = {spec.filename: spec for spec in artifacts}
    found: dict[str, list[Path]] = {name: [] for name in by_name}
    excluded = [Path(p) for p in exclude]

    def _on_error(err: OSError) -> None:
        raise ArtifactDiscoveryError(f"Cannot read {err.filename}: {err.strerror}") from err

    for dirpath, dirnames, filenames in os.walk(search_root, onerror=_on_error):
        current = Path(dirpath)
        dirnames[:] = sorted(
            d for d in dirnames if not any(is_within(current / d, ex) for ex in excluded)
        )
        for filename in filenames:
            if filename not in by_name:
                continue
            candidate = current / filename
            if any(is_within(candidate, ex) for ex in excluded):
                continue
            if _is_regular_file(candidate):
                found[filename].append(candidate)

    matches: list[ArtifactMatch] = []
    for spec in artifacts:
        for source in sorted(found[spec.filename]):
            matches.append(ArtifactMatch(spec=spec, source=source))
        if not found[spec.filename]:
            _logger.debug("No matches for artifact", extra={"artifact": spec.filename})

    _logger.info(
        "Artifact discovery complete",
        extra={"search_root": str(search_root), "matches": len(matches)},
    )
    return matches
