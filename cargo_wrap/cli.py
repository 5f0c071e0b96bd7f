#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command-line interface for cargo_wrap.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import ValidationError

from .core.errors import CargoWrapError, ConfigurationError
from .core.models import BuildStatus
from .utils.config import BuildConfig, BuildProfile
from . import __version__


def setup_logging(args: argparse.Namespace) -> None:
    """Set up loguru sinks for the console and an optional log file."""
    logger.remove()

    log_level = args.log_level
    if args.verbose and log_level == "INFO":
        log_level = "DEBUG"

    if log_level in ["DEBUG", "TRACE"]:
        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )
    else:
        log_format = (
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<level>{message}</level>"
        )

    logger.add(sys.stderr, level=log_level, format=log_format, colorize=True)

    if args.log_file:
        logger.add(
            args.log_file,
            level=log_level,
            format=log_format,
            rotation="10 MB",
            retention=3,
        )

    logger.debug(f"Logging initialized at {log_level} level")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cargo-wrap",
        description="Run cargo build with captured output and an optional build log",
        epilog="Examples:\n"
               "  %(prog)s --project-dir . --release --jobs 4\n"
               "  %(prog)s --features serde tokio --build-log build.log\n"
               "  %(prog)s --config cargo-wrap.toml --dry-run",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version",
                        version=f"cargo_wrap v{__version__}")

    project_group = parser.add_argument_group("Project")
    project_group.add_argument("--project-dir", type=Path,
                               help="Root of the cargo project (default: .)")
    project_group.add_argument("--output-dir", type=Path,
                               help="Artifact directory, exported as CARGO_TARGET_DIR")
    project_group.add_argument("--target", dest="target_triple",
                               help="Cross-compilation target triple")
    project_group.add_argument("--release", action="store_true",
                               help="Build in release mode")
    project_group.add_argument("--features", nargs="*", metavar="FEATURE",
                               help="Features to enable (a bare --features is passed through)")
    project_group.add_argument("--no-default-features", action="store_true",
                               help="Disable the default feature set")
    project_group.add_argument("--build-target", metavar="NAME",
                               help="Build only this binary (or library with --lib)")
    project_group.add_argument("--lib", dest="is_lib", action="store_true",
                               help="Treat --build-target as the library target")

    exec_group = parser.add_argument_group("Execution")
    exec_group.add_argument("-j", "--jobs", type=int,
                            help="Parallel jobs for cargo, 0 for cargo's default")
    exec_group.add_argument("--verbose", action="store_true",
                            help="Pass --verbose to cargo and log at DEBUG level")
    exec_group.add_argument("--rustflag", dest="rustflags", action="append",
                            metavar="FLAG", help="Extra rustc flag (repeatable)")
    exec_group.add_argument("--build-log", dest="build_log", type=Path,
                            help="Append captured cargo output to this file")

    action_group = parser.add_argument_group("Actions")
    action_group.add_argument("--list-features", action="store_true",
                              help="List features declared in Cargo.toml and exit")
    action_group.add_argument("--dry-run", action="store_true",
                              help="Print the cargo command without running it")

    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument("--config", type=Path,
                              help="Load a build profile from a TOML/JSON/YAML file")
    config_group.add_argument("--auto-config", action="store_true",
                              help="Look for cargo-wrap.{toml,json,yaml,yml} in the project")

    logging_group = parser.add_argument_group("Logging")
    logging_group.add_argument("--log-level",
                               choices=["TRACE", "DEBUG", "INFO", "SUCCESS",
                                        "WARNING", "ERROR", "CRITICAL"],
                               default="INFO", help="Set the logging level")
    logging_group.add_argument("--log-file", type=Path,
                               help="Also write wrapper log messages to this file")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.jobs is not None and args.jobs < 0:
        parser.error("--jobs must be >= 0")
    return args


def profile_from_args(args: argparse.Namespace) -> BuildProfile:
    """Build a profile holding only the options given on the command line."""
    values: Dict[str, Any] = {}
    for key in ("project_dir", "output_dir", "target_triple", "build_target", "jobs"):
        value = getattr(args, key)
        if value is not None:
            values[key] = value
    if args.features is not None:
        values["features"] = args.features
    if args.rustflags:
        values["rustflags"] = args.rustflags
    if args.build_log is not None:
        values["log_file"] = args.build_log
    for flag in ("release", "no_default_features", "is_lib", "verbose"):
        if getattr(args, flag):
            values[flag] = True
    try:
        return BuildProfile.model_validate(values)
    except ValidationError as e:
        first = e.errors()[0]
        invalid_option = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid command-line option: {e}",
            invalid_option=invalid_option or None,
            cause=e,
        ) from e


def load_profile(args: argparse.Namespace) -> BuildProfile:
    """Merge a profile file (if any) with command-line options, which take precedence."""
    cli_profile = profile_from_args(args)

    file_profile: Optional[BuildProfile] = None
    if args.config:
        file_profile = BuildConfig.load_from_file(args.config)
        logger.info(f"Loaded profile from {args.config}")
    elif args.auto_config:
        file_profile = BuildConfig.auto_discover(args.project_dir or Path("."))

    if file_profile is None:
        return cli_profile
    return file_profile.merge(cli_profile)


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to run cargo_wrap from the command line."""
    args = parse_args(argv)
    setup_logging(args)
    logger.debug(f"cargo_wrap v{__version__} starting")

    status = BuildStatus.NOT_STARTED
    try:
        profile = load_profile(args)

        if args.list_features:
            for feature in profile.to_settings().get_features():
                print(feature)
            return 0

        builder = profile.create_builder()

        if args.dry_run:
            invocation = builder.plan()
            print(f"(cd {invocation.cwd} && {invocation.describe()})")
            return 0

        status = BuildStatus.BUILDING
        builder.build()
        status = BuildStatus.COMPLETED
        return 0

    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    except CargoWrapError as e:
        status = BuildStatus.FAILED
        logger.error(f"Build failed: {e}")
        if args.verbose:
            logger.debug(f"Error context: {e.context.to_dict()}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Build interrupted by user")
        return 130
    finally:
        logger.debug(f"Finished with status {status.name}")


if __name__ == "__main__":
    sys.exit(main())
