# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the sbpack CLI.

Each function here corresponds to one CLI subcommand and returns an exit
code. Diagnostics go through the structured logger on stderr. The only thing
ever written to stdout is the archive path printed by `package`.

The release modules are imported up front: their module-level loggers must
exist before bootstrap applies the requested log level.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from sbpack import __version__
from sbpack.cli.exit_codes import CONFIG_ERROR, RUNTIME_ERROR, SUCCESS, VALIDATION_ERROR
from sbpack.config.exceptions import ConfigError
from sbpack.config.loader import load_config
from sbpack.config.schema import SbpackConfig
from sbpack.logging.logger import get_logger
from sbpack.release.artifacts import discover_artifacts
from sbpack.release.exceptions import ReleaseError
from sbpack.release.packaging.packager import package_release
from sbpack.release.verification.verifier import verify_archive
from sbpack.runtime.bootstrap import bootstrap
from sbpack.runtime.environment import get_system_info

# Used when no --config is given. Only `global.config_version` is required.
_DEFAULT_CONFIG_DATA = {"global": {"config_version": "1.0.0"}}


def _load_and_bootstrap(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, Optional[SbpackConfig], logging.Logger]:
    """
    The shared setup that every command needs: load config, run bootstrap.

    Returns a tuple of (exit_code, config, logger). If exit_code is not SUCCESS,
    the caller should return it immediately.
    """
    logger_name = f"sbpack.cli.{command_name}"

    if args.config is not None:
        try:
            config = load_config(Path(args.config))
        except ConfigError as err:
            logger = get_logger(logger_name, log_level=args.log_level or "INFO")
            logger.error(
                "Configuration error",
                extra={"command": command_name, "error": str(err)},
            )
            return CONFIG_ERROR, None, logger
    else:
        config = SbpackConfig.model_validate(_DEFAULT_CONFIG_DATA)

    bootstrap(config.global_config, log_level=args.log_level)

    global_config = config.global_config
    level = args.log_level if args.log_level is not None else global_config.log_level
    log_file = Path(global_config.log_file) if global_config.log_file is not None else None
    logger = get_logger(logger_name, log_level=level, log_file=log_file)

    if args.config is None:
        logger.debug(
            "No config provided, running with defaults",
            extra={"command": command_name},
        )
    return SUCCESS, config, logger


def handle_package(args: argparse.Namespace) -> int:
    """Stage the FFI artifacts and write the release archive."""
    exit_code, config, logger = _load_and_bootstrap(args, "package")
    if exit_code != SUCCESS or config is None:
        return exit_code

    package_config = config.package
    search_root = Path(
        args.search_root if args.search_root is not None else package_config.search_root
    )
    temp_dir = Path(package_config.temp_dir) if package_config.temp_dir is not None else None

    try:
        if args.dry_run:
            matches = discover_artifacts(search_root)
            for match in matches:
                logger.info(
                    "Dry run: would stage artifact",
                    extra={"source": str(match.source), "destination": match.spec.destination},
                )
            logger.info("Dry run complete", extra={"matches": len(matches)})
            return SUCCESS

        result = package_release(
            output_path=args.output,
            search_root=search_root,
            temp_dir=temp_dir,
            compresslevel=package_config.compresslevel,
        )
    except ReleaseError as err:
        logger.error("Packaging failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR

    sys.stdout.write(result.output_path + "\n")
    sys.stdout.flush()
    return SUCCESS


def handle_verify(args: argparse.Namespace) -> int:
    """Check that a release archive has the expected layout."""
    exit_code, _, logger = _load_and_bootstrap(args, "verify")
    if exit_code != SUCCESS:
        return exit_code

    report = verify_archive(Path(args.archive))
    if not report.is_valid:
        for error in report.errors:
            logger.error("Verification error", extra={"error": error})
        return VALIDATION_ERROR

    logger.info(
        "Verification complete",
        extra={"archive": report.archive_path, "checks_passed": report.checks_passed},
    )
    return SUCCESS


def handle_info(args: argparse.Namespace) -> int:
    """Display version and environment information."""
    exit_code, _, logger = _load_and_bootstrap(args, "info")
    if exit_code != SUCCESS:
        return exit_code

    system_info = get_system_info()

    logger.info(
        "System information",
        extra={
            "sbpack_version": __version__,
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
            "hostname": system_info.hostname,
            "config": args.config,
        },
    )
    return SUCCESS
