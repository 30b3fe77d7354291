# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
YAML config loading for sbpack.

The config file is optional; the CLI only calls `load_config` when --config
is given. File, YAML and schema problems all surface as ConfigError
subclasses so the CLI can map them to CONFIG_ERROR in one place.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from sbpack.config.exceptions import ConfigLoadError, ConfigValidationError
from sbpack.config.schema import SbpackConfig


def _read_yaml_file(config_path: Path) -> dict[str, Any]:
    if not config_path.is_file():
        problem = "is not a file" if config_path.exists() else "not found"
        raise ConfigLoadError(f"Config file {problem}: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as handle:
            parsed = yaml.safe_load(handle)
    except OSError as err:
        raise ConfigLoadError(f"Cannot read config file {config_path}: {err}") from err
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"Invalid YAML in {config_path}: {err}") from err

    # An empty file parses to None; the `global` section is still required.
    if not isinstance(parsed, dict):
        raise ConfigLoadError(
            f"{config_path} must hold a YAML mapping, got {type(parsed).__name__}"
        )
    return parsed


def load_config(config_path: Path) -> SbpackConfig:
    """
    Read `config_path` and validate it into a frozen SbpackConfig.

    Raises:
        ConfigLoadError: Missing file, unreadable file or malformed YAML.
        ConfigValidationError: Unknown keys, wrong types or missing fields.
    """
    raw_data = _read_yaml_file(config_path)
    try:
        return SbpackConfig.model_validate(raw_data)
    except ValidationError as err:
        raise ConfigValidationError(f"Invalid config in {config_path}:\n{err}") from err
