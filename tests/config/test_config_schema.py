# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Schema-level validation tests.

These focus on the pydantic models themselves: boundary values, constraint
enforcement, and structural correctness.
"""

import pytest
from pydantic import ValidationError

from sbpack.config.schema import GlobalConfig, PackageConfig, SbpackConfig


class TestGlobalConfigSchema:
    def test_default_log_level_is_info(self) -> None:
        config = GlobalConfig(config_version="1.0.0")
        assert config.log_level == "INFO"

    def test_default_project_name(self) -> None:
        config = GlobalConfig(config_version="1.0.0")
        assert config.project_name == "sbpack"

    def test_log_level_is_normalized(self) -> None:
        config = GlobalConfig(config_version="1.0.0", log_level="warning")
        assert config.log_level == "WARNING"

    def test_invalid_log_level_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig(config_version="1.0.0", log_level="LOUD")

    def test_config_version_is_required(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig()  # type: ignore[call-arg]


class TestPackageConfigSchema:
    @pytest.mark.parametrize("level", [0, 6, 9])
    def test_compresslevel_bounds_accepted(self, level: int) -> None:
        assert PackageConfig(compresslevel=level).compresslevel == level

    @pytest.mark.parametrize("level", [-1, 10])
    def test_compresslevel_out_of_range_rejected(self, level: int) -> None:
        with pytest.raises(ValidationError):
            PackageConfig(compresslevel=level)

    def test_unknown_field_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PackageConfig(artifact_set="other")  # type: ignore[call-arg]


class TestSbpackConfigSchema:
    def test_global_alias(self) -> None:
        config = SbpackConfig.model_validate({"global": {"config_version": "1.0.0"}})
        assert config.global_config.config_version == "1.0.0"
        assert config.package == PackageConfig()

    def test_global_section_is_required(self) -> None:
        with pytest.raises(ValidationError):
            SbpackConfig.model_validate({"package": {}})
