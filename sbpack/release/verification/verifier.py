# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Release archive verification — checks that a tarball has the layout
downstream builds expect.

Checks, in order:
  1. archive_exists: the path is a file
  2. archive_readable: it opens as a gzip-compressed tar
  3. paths_safe: no absolute member names, no `..` components
  4. layout_present: include/, lib/, lib/pkgconfig/ are all there
  5. files_in_place: every regular file is a known artifact in its directory

Contents of the artifacts are not inspected. An empty layout (no artifacts at
all) is still a valid archive.
"""

import logging
import tarfile
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from sbpack.logging.logger import get_logger
from sbpack.release.artifacts import (
    RELEASE_LAYOUT_DIRS,
    SECTOR_BUILDER_ARTIFACTS,
    ArtifactSpec,
)

_logger: logging.Logger = get_logger(__name__)


@dataclass(frozen=True)
class VerificationReport:
    """Complete outcome of an archive verification."""

    is_valid: bool
    archive_path: str
    checks_passed: list[str] = field(default_factory=list)
    checks_failed: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    members: list[str] = field(default_factory=list)


def _normalize(name: str) -> str:
    """Strip the `./` prefix that `tar -czf x ./*` style archives carry."""
    while name.startswith("./"):
        name = name[2:]
    return name.rstrip("/")


def _check_paths_safe(names: list[str]) -> tuple[bool, list[str]]:
    errors: list[str] = []
    for name in names:
        path = PurePosixPath(name)
        if path.is_absolute() or ".." in path.parts:
            errors.append(f"Unsafe member path: {name}")
    return len(errors) == 0, errors


def _check_layout_present(directories: set[str]) -> tuple[bool, list[str]]:
    missing = [d for d in RELEASE_LAYOUT_DIRS if d not in directories]
    if missing:
        return False, [f"Missing layout directory: {d}/" for d in missing]
    return True, []


def _check_files_in_place(
    files: list[str],
    artifacts: Sequence[ArtifactSpec],
) -> tuple[bool, list[str]]:
    expected = {f"{spec.destination}/{spec.filename}" for spec in artifacts}
    errors = [f"Unexpected file in archive: {name}" for name in files if name not in expected]
    return len(errors) == 0, errors


def verify_archive(
    archive_path: Path,
    artifacts: Sequence[ArtifactSpec] = SECTOR_BUILDER_ARTIFACTS,
) -> VerificationReport:
    """
    Run the full verification suite on a release archive.

    Args:
        archive_path: Path to the .tar.gz to verify.
        artifacts: The artifact catalogue the archive should follow.

    Returns:
        VerificationReport with complete pass/fail details.
    """
    if not archive_path.is_file():
        return VerificationReport(
            is_valid=False,
            archive_path=str(archive_path),
            checks_failed=["archive_exists"],
            errors=[f"Archive not found: {archive_path}"],
        )

    passed: list[str] = ["archive_exists"]
    failed: list[str] = []
    all_errors: list[str] = []

    try:
        with tarfile.open(archive_path, mode="r:gz") as tar:
            tar_members = tar.getmembers()
    except (OSError, tarfile.TarError) as err:
        _logger.error(
            "Archive could not be read",
            extra={"archive": str(archive_path), "error": str(err)},
        )
        return VerificationReport(
            is_valid=False,
            archive_path=str(archive_path),
            checks_passed=passed,
            checks_failed=["archive_readable"],
            errors=[f"Cannot read archive: {err}"],
        )
    passed.append("archive_readable")

    names: list[str] = []
    directories: set[str] = set()
    files: list[str] = []
    for member in tar_members:
        name = _normalize(member.name)
        if not name or name == ".":
            continue
        names.append(name)
        if member.isdir():
            directories.add(name)
        else:
            files.append(name)

    checks = [
        ("paths_safe", _check_paths_safe(names)),
        ("layout_present", _check_layout_present(directories)),
        ("files_in_place", _check_files_in_place(files, artifacts)),
    ]
    for check_name, (ok, errors) in checks:
        if ok:
            passed.append(check_name)
        else:
            failed.append(check_name)
            all_errors.extend(errors)

    is_valid = len(failed) == 0

    if is_valid:
        _logger.info(
            "Archive verification passed",
            extra={"archive": str(archive_path), "members": len(names)},
        )
    else:
        _logger.error(
            "Archive verification failed",
            extra={"archive": str(archive_path), "failed_checks": failed},
        )

    return VerificationReport(
        is_valid=is_valid,
        archive_path=str(archive_path),
        checks_passed=passed,
        checks_failed=failed,
        errors=all_errors,
        members=sorted(names),
    )
