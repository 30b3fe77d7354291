# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Release packager — bundles the sector-builder FFI header, static library and
pkg-config descriptor into one gzip-compressed tarball.

A release archive always has this layout:

    include/
    └─ sector_builder_ffi.h
    lib/
    ├─ libsector_builder_ffi.a
    └─ pkgconfig/
       └─ sector_builder_ffi.pc

The three directories are present even when no artifact was found. Downstream
build scripts unpack the archive into a prefix and point pkg-config at
lib/pkgconfig, so these paths are a compatibility contract.

Steps:
  1. Pick the output path (caller's, or a freshly reserved temp file)
  2. Open a StagingContext with the layout directories
  3. Search the tree and copy every match into place
  4. Tar + gzip the staging root's top-level entries
  5. Leave the `with` block, which removes the staging tree
"""

import logging
import tarfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from sbpack.logging.logger import get_logger
from sbpack.release.artifacts import discover_artifacts
from sbpack.release.exceptions import PackagingError
from sbpack.release.staging import StagingContext
from sbpack.utils.filesystem import atomic_output, safe_delete
from sbpack.utils.hashing import compute_sha256
from sbpack.utils.paths import default_output_path

_logger: logging.Logger = get_logger(__name__)

DEFAULT_COMPRESSLEVEL = 6


@dataclass(frozen=True)
class PackageResult:
    """Outcome of a successful packaging run."""

    output_path: str
    archive_path: Path
    staged_files: list[str]
    overwritten: list[str]
    sha256: str
    size_bytes: int


def create_archive(
    staging: StagingContext,
    archive_path: Path,
    compresslevel: int = DEFAULT_COMPRESSLEVEL,
) -> Path:
    """
    Write the staging tree to `archive_path` as a .tar.gz.

    Entry names are relative to the staging root (`include`, `lib`, ...), so
    the archive unpacks straight into a prefix. The file is written next to
    the target and renamed into place, so a failure never leaves a truncated
    archive at `archive_path`.

    Raises:
        PackagingError: If the archive cannot be written.
    """
    try:
        with atomic_output(archive_path) as temp_path:
            with tarfile.open(temp_path, mode="w:gz", compresslevel=compresslevel) as tar:
                for entry in staging.top_level_entries():
                    tar.add(str(entry), arcname=entry.name)
    except (OSError, tarfile.TarError) as err:
        raise PackagingError(f"Cannot write archive {archive_path}: {err}") from err

    return archive_path


def package_release(
    output_path: Optional[Union[str, Path]] = None,
    search_root: Optional[Path] = None,
    temp_dir: Optional[Path] = None,
    compresslevel: int = DEFAULT_COMPRESSLEVEL,
) -> PackageResult:
    """
    Build a release archive from whatever artifacts live under `search_root`.

    Finding no artifacts is not an error; the archive then holds only the
    empty layout directories. If the same artifact name shows up more than
    once, every copy is staged in path order and the last one wins.

    Args:
        output_path: Where to write the archive. Used as given; relative paths
            resolve against the current working directory. When None, a unique
            `*.tar.gz` path is reserved under `temp_dir`.
        search_root: Tree to search. Defaults to the current working directory.
        temp_dir: Parent for the staging directory and the default output path.
            System temp dir when None.
        compresslevel: gzip level, 0-9.

    Returns:
        PackageResult whose `output_path` is the string to report to the caller.

    Raises:
        ArtifactDiscoveryError: If search_root is not a readable directory.
        StagingError: If the staging tree cannot be created or filled.
        PackagingError: If the archive cannot be written.
    """
    root = Path.cwd() if search_root is None else search_root

    reserved = output_path is None
    if output_path is None:
        try:
            archive_path = default_output_path(temp_dir)
        except OSError as err:
            raise PackagingError(f"Cannot reserve an output path: {err}") from err
        printed = str(archive_path)
    else:
        printed = str(output_path)
        archive_path = Path(output_path).absolute()

    _logger.info(
        "Packaging release",
        extra={"search_root": str(root), "output": printed},
    )

    try:
        with StagingContext(temp_dir=temp_dir) as staging:
            matches = discover_artifacts(root, exclude=[staging.root, archive_path])
            for match in matches:
                staging.stage(match)
            create_archive(staging, archive_path, compresslevel)
            staged_files = sorted(p.relative_to(staging.root).as_posix() for p in staging.staged)
            overwritten = [str(p) for p in staging.overwritten]
    except BaseException:
        # The reserved placeholder is ours; an explicit output path is not.
        if reserved:
            safe_delete(archive_path)
        raise

    sha256 = compute_sha256(archive_path)
    size_bytes = archive_path.stat().st_size

    _logger.info(
        "Release archive created",
        extra={
            "output": printed,
            "staged_files": len(staged_files),
            "overwritten": len(overwritten),
            "size_bytes": size_bytes,
            "sha256": sha256[:16] + "...",
        },
    )

    return PackageResult(
        output_path=printed,
        archive_path=archive_path,
        staged_files=staged_files,
        overwritten=overwritten,
        sha256=sha256,
        size_bytes=size_bytes,
    )
