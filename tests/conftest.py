# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for sbpack tests.

Fixtures here are available to every test file automatically.
"""

import textwrap
from pathlib import Path

import pytest


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """
    Create a minimal valid config YAML file in a temp directory.

    This is the smallest config that passes schema validation.
    """
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          project_name: "sbpack-test"
          log_level: "DEBUG"
    """)
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """A config file that's valid YAML but fails schema validation (missing required field)."""
    config_content = textwrap.dedent("""\
        global:
          project_name: "sbpack-test"
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file


@pytest.fixture()
def build_tree(tmp_path: Path) -> Path:
    """
    A fake cargo workspace with one of each artifact at different depths,
    plus files that must not be packaged.
    """
    root = tmp_path / "workspace"
    release_dir = root / "target" / "release"
    include_dir = root / "sector-builder-ffi" / "include"
    release_dir.mkdir(parents=True)
    include_dir.mkdir(parents=True)

    (include_dir / "sector_builder_ffi.h").write_text("/* header */\n", encoding="utf-8")
    (release_dir / "libsector_builder_ffi.a").write_bytes(b"!<arch>\nfake static lib\n")
    (release_dir / "sector_builder_ffi.pc").write_text(
        "Name: sector_builder_ffi\n", encoding="utf-8"
    )

    (release_dir / "libsector_builder_ffi.so").write_bytes(b"not packaged")
    (root / "README.md").write_text("readme", encoding="utf-8")
    return root


@pytest.fixture()
def staging_temp(tmp_path: Path) -> Path:
    """A private temp dir for staging and default outputs, outside the build tree."""
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    return temp_dir
