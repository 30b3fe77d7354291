# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoints for sbpack.

Two console scripts share the same handlers:

    sbpack <subcommand> [options]
    sbpack package [output-path]
    sbpack verify release.tar.gz
    sbpack info

    package-release [output-path]

`package-release` is the drop-in replacement for the old release shell
script: same single optional argument, same single line on stdout.

The global options (--config, --log-level, --dry-run) are attached to every
subcommand through argparse's parent parser mechanism.
"""

import argparse
import signal
import sys
from collections.abc import Callable
from types import FrameType
from typing import Optional

from sbpack.cli.commands import handle_info, handle_package, handle_verify
from sbpack.cli.exit_codes import USER_ERROR

PACKAGE_RELEASE_LOG_LEVEL = "WARNING"


def _build_global_parser() -> argparse.ArgumentParser:
    """
    Build the parent parser with global options.

    add_help=False so that help text doesn't collide between the parent and
    the parsers that inherit from it.
    """
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file.",
    )
    parent.add_argument(
        "--log-level",
        type=str.upper,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging verbosity level (overrides config).",
    )
    parent.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        dest="dry_run",
        help="Report what would be done without writing anything.",
    )
    return parent


def _add_package_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "output",
        nargs="?",
        default=None,
        help="Archive path to write. A unique temporary *.tar.gz is used when omitted.",
    )
    parser.add_argument(
        "--search-root",
        type=str,
        default=None,
        dest="search_root",
        help="Directory tree to search for artifacts (default: current directory).",
    )


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    """Register all subcommands and bind their handlers via set_defaults(func=...)."""
    package_parser = subparsers.add_parser(
        "package", parents=[parent], help="Create the release archive."
    )
    _add_package_arguments(package_parser)
    package_parser.set_defaults(func=handle_package)

    verify_parser = subparsers.add_parser(
        "verify", parents=[parent], help="Check a release archive's layout."
    )
    verify_parser.add_argument("archive", help="Path to the .tar.gz to verify.")
    verify_parser.set_defaults(func=handle_verify)

    info_parser = subparsers.add_parser(
        "info", parents=[parent], help="Display version and environment info."
    )
    info_parser.set_defaults(func=handle_info)


def _raise_system_exit(signum: int, frame: Optional[FrameType]) -> None:
    raise SystemExit(128 + signum)


def _run(func: Callable[[argparse.Namespace], int], args: argparse.Namespace) -> None:
    # SIGTERM would otherwise kill us without unwinding, leaving the staging
    # directory behind. As SystemExit it runs every `with` block's cleanup.
    signal.signal(signal.SIGTERM, _raise_system_exit)
    sys.exit(func(args))


def main(argv: Optional[list[str]] = None) -> None:
    """
    Main CLI entrypoint for `sbpack`.

    If no subcommand is given, we show help and exit with USER_ERROR.
    """
    parent = _build_global_parser()

    root_parser = argparse.ArgumentParser(
        prog="sbpack",
        description="Packages sector-builder FFI build outputs into a release tarball.",
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, parent)

    args = root_parser.parse_args(argv)

    if getattr(args, "func", None) is None:
        root_parser.print_help(file=sys.stderr)
        sys.exit(USER_ERROR)

    _run(args.func, args)


def package_release_main(argv: Optional[list[str]] = None) -> None:
    """Entrypoint for `package-release [output-path]`."""
    parser = argparse.ArgumentParser(
        prog="package-release",
        description="Package the sector-builder FFI header, static library and "
        "pkg-config file into a .tar.gz and print its path.",
        parents=[_build_global_parser()],
    )
    _add_package_arguments(parser)
    args = parser.parse_args(argv)
    # Quiet on success unless --log-level or a config file asks otherwise.
    if args.log_level is None and args.config is None:
        args.log_level = PACKAGE_RELEASE_LOG_LEVEL
    _run(handle_package, args)


if __name__ == "__main__":
    main()
