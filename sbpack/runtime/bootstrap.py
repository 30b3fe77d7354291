# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap for sbpack.

The one-time setup that happens before a command touches the filesystem:
  1. Validate the environment (Python version)
  2. Apply the configured log level and log file to every sbpack logger
  3. Log a startup line with the system snapshot
"""

import logging
from pathlib import Path
from typing import Optional

from sbpack.config.schema import GlobalConfig
from sbpack.logging.logger import get_logger, set_package_log_level
from sbpack.runtime.environment import check_minimum_python, get_system_info


def bootstrap(config: GlobalConfig, log_level: Optional[str] = None) -> logging.Logger:
    """
    Run the bootstrap sequence and return the runtime logger.

    Args:
        config: The validated global configuration.
        log_level: Explicit override (from --log-level); config value otherwise.
    """
    check_minimum_python()

    level = log_level if log_level is not None else config.log_level
    log_file = None
    if config.log_file is not None:
        log_file = Path(config.log_file)

    set_package_log_level(level, log_file=log_file)

    logger = get_logger("sbpack.runtime", log_level=level, log_file=log_file)

    system_info = get_system_info()
    logger.debug(
        "sbpack bootstrap complete",
        extra={
            "project_name": config.project_name,
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
        },
    )
    return logger
