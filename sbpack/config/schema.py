# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for sbpack.

Each config section gets its own frozen pydantic model. Frozen means once you
create it, you cannot mutate it. CLI flags override values by building the
effective settings at the call site, never by mutating the config.

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class GlobalConfig(BaseModel):
    """
    Cross-cutting settings: project identity and observability.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    project_name: str = Field(
        default="sbpack", description="Human-readable project identifier"
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_VALID_LOG_LEVELS)}, got '{value}'"
            )
        return upper


class PackageConfig(BaseModel):
    """Knobs for the release packager."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    search_root: str = Field(
        default=".",
        description="Directory tree searched for build artifacts",
    )
    temp_dir: Optional[str] = Field(
        default=None,
        description="Parent for the staging directory and default output path; system temp if unset",
    )
    compresslevel: int = Field(
        default=6,
        ge=0,
        le=9,
        description="gzip compression level for the archive",
    )


class SbpackConfig(BaseModel):
    """
    Top-level config container.

    A YAML file always has `global:`; the `package:` section is optional and
    falls back to defaults when absent.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(alias="global")
    package: PackageConfig = Field(default_factory=PackageConfig)
