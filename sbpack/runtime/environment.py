# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Interpreter check and system snapshot used by bootstrap and `sbpack info`."""

import platform
import sys
from typing import NamedTuple

MINIMUM_PYTHON: tuple[int, int] = (3, 10)


class SystemInfo(NamedTuple):
    python_version: str
    platform: str
    architecture: str
    hostname: str


def get_python_version() -> tuple[int, int, int]:
    return sys.version_info[:3]


def check_minimum_python() -> None:
    """
    Raises:
        RuntimeError: If the interpreter is older than MINIMUM_PYTHON.
    """
    current = get_python_version()
    if current[:2] < MINIMUM_PYTHON:
        required = ".".join(str(part) for part in MINIMUM_PYTHON)
        raise RuntimeError(
            f"sbpack requires Python >= {required}, running {current[0]}.{current[1]}"
        )


def get_system_info() -> SystemInfo:
    return SystemInfo(
        python_version=platform.python_version(),
        platform=platform.system(),
        architecture=platform.machine(),
        hostname=platform.node(),
    )
