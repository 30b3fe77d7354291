# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Exceptions raised by the release subsystem.

Every failure while discovering, staging, or archiving artifacts surfaces as a
ReleaseError subclass. The underlying OSError or TarError stays attached as
__cause__ so the CLI can log the original diagnostic.
"""


class ReleaseError(Exception):
    """Base for all release packaging errors."""


class ArtifactDiscoveryError(ReleaseError):
    """Raised when the artifact search root is missing or unreadable."""


class StagingError(ReleaseError):
    """Raised when the staging directory cannot be created, filled, or used."""


class PackagingError(ReleaseError):
    """Raised when the release archive cannot be written."""
