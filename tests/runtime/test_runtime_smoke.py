# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Smoke tests for the runtime bootstrap and environment checks.
"""

import logging

import pytest

from sbpack.config.schema import GlobalConfig
from sbpack.runtime import environment
from sbpack.runtime.bootstrap import bootstrap
from sbpack.runtime.environment import check_minimum_python, get_system_info


class TestEnvironment:
    def test_current_python_passes(self) -> None:
        check_minimum_python()

    def test_old_python_is_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(environment, "get_python_version", lambda: (3, 8, 0))
        with pytest.raises(RuntimeError, match="requires Python"):
            check_minimum_python()

    def test_system_info_fields(self) -> None:
        info = get_system_info()
        assert info.python_version
        assert info.platform


class TestBootstrap:
    def test_returns_runtime_logger(self) -> None:
        logger = bootstrap(GlobalConfig(config_version="1.0.0"))
        assert isinstance(logger, logging.Logger)
        assert logger.name == "sbpack.runtime"

    def test_override_level_wins_over_config(self) -> None:
        bootstrap(GlobalConfig(config_version="1.0.0", log_level="DEBUG"), log_level="ERROR")
        assert logging.getLogger("sbpack.runtime").level == logging.ERROR
        bootstrap(GlobalConfig(config_version="1.0.0"))
        assert logging.getLogger("sbpack.runtime").level == logging.INFO
