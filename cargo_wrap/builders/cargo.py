#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CargoBuilder implementation wrapping the ``cargo build`` command.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from loguru import logger

from ..core.errors import (
    BuildError,
    CargoNotFoundError,
    ErrorContext,
    LogWriteError,
)
from ..core.models import (
    CARGO_ENV_VAR,
    RUSTFLAGS_ENV_VAR,
    TARGET_DIR_ENV_VAR,
    BuildInvocation,
    BuildResult,
)
from ..core.project import ProjectSettings
from ..core.runner import CommandRunner, run_invocation


def resolve_cargo_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the cargo binary path from the CARGO environment variable.

    Args:
        environ: Mapping to read from instead of os.environ.

    Raises:
        CargoNotFoundError: If CARGO is unset or empty.
    """
    env = os.environ if environ is None else environ
    value = env.get(CARGO_ENV_VAR)
    if not value:
        raise CargoNotFoundError(
            f"{CARGO_ENV_VAR} environment variable not found",
            variable=CARGO_ENV_VAR,
        )
    return Path(value)


class CargoBuilder:
    """
    Wrapper around ``cargo build`` for one project.

    The builder owns a ProjectSettings instance and adds execution options:
    job count, verbosity, extra rustc flags and an optional log file that
    receives the captured output of every build.

    Attributes:
        cargo_path: Path to the cargo binary, resolved at construction.
        project_settings: The settings of the project to build.
        thread_count: Number of jobs (``--jobs N``); 0 keeps cargo's default.
        output_path: Optional log file the build output is appended to.
        verbose_build: Whether ``--verbose`` is passed.
        additional_flags: Flags passed to rustc through RUSTFLAGS.
    """

    def __init__(
        self,
        project_settings: ProjectSettings,
        thread_count: int = 0,
        output_path: Optional[Union[Path, str]] = None,
        *,
        cargo_path: Optional[Union[Path, str]] = None,
        environ: Optional[Mapping[str, str]] = None,
        command_runner: Optional[CommandRunner] = None,
    ) -> None:
        if thread_count < 0:
            raise ValueError(f"thread_count must be >= 0, got {thread_count}")

        self.cargo_path = (
            Path(cargo_path) if cargo_path is not None else resolve_cargo_path(environ)
        )
        self.project_settings = project_settings
        self.thread_count = thread_count
        self.output_path = Path(output_path) if output_path is not None else None
        self.verbose_build = False
        self.additional_flags: List[str] = []
        self.run_command = command_runner or run_invocation

        logger.debug(
            f"Initialized {self.__class__.__name__} with cargo at {self.cargo_path}",
            extra={
                "project_path": str(project_settings.project_path),
                "thread_count": thread_count,
                "log_file": str(self.output_path) if self.output_path else None,
            },
        )

    def set_verbose(self) -> None:
        """Tells the builder to use the ``--verbose`` flag when building."""
        self.verbose_build = True

    def add_rustc_flag(self, flag: str) -> None:
        """Adds a flag to the list of additional flags passed to rustc."""
        self.additional_flags.append(flag)

    def plan(self) -> BuildInvocation:
        """
        Assemble the cargo command without running it.

        The argument order is fixed: verbose, release, jobs, target triple,
        features, no-default-features, then the lib/bin target.
        """
        settings = self.project_settings
        args: List[str] = ["build"]
        env: Dict[str, str] = {}

        if self.verbose_build:
            args.append("--verbose")
        if settings.release:
            args.append("--release")
        if self.thread_count > 0:
            args.extend(["--jobs", str(self.thread_count)])
        if settings.output_path is not None:
            env[TARGET_DIR_ENV_VAR] = str(settings.output_path)
        if self.additional_flags:
            env[RUSTFLAGS_ENV_VAR] = " ".join(self.additional_flags)
        if settings.compilation_target is not None:
            args.extend(["--target", settings.compilation_target])
        if settings.features is not None:
            args.append("--features")
            args.extend(settings.features)
        if settings.no_default_features:
            args.append("--no-default-features")
        if settings.target is not None:
            args.extend(["--lib" if settings.is_lib else "--bin", settings.target])

        return BuildInvocation(
            program=self.cargo_path,
            args=tuple(args),
            cwd=settings.project_path,
            env=env,
        )

    def build(self) -> BuildResult:
        """
        Execute ``cargo build`` with the configured settings.

        Output is captured in full and, when a log file is configured,
        appended to it (stdout first, then stderr) before the exit status
        is checked, so failing builds are logged too.

        Returns:
            BuildResult of the successful build.

        Raises:
            CargoLaunchError: If cargo cannot be started.
            LogWriteError: If the log file cannot be opened or written.
            BuildError: If cargo exits with a non-zero status.
        """
        invocation = self.plan()
        logger.info(f"Building {self.project_settings.project_path}: {invocation.describe()}")

        result = self.run_command(invocation)

        if self.output_path is not None:
            self._append_log(result)

        if result.failed:
            status = result.status_description()
            logger.error(f"cargo build failed ({status})")
            raise BuildError(
                f"Failed to compile project: {status}",
                result=result,
                context=ErrorContext(
                    command=invocation.describe(),
                    exit_code=result.exit_code,
                    working_directory=invocation.cwd,
                    environment_vars=dict(invocation.env),
                    stderr=result.stderr.decode("utf-8", errors="replace").strip(),
                ),
            )

        logger.success(
            f"Build of {self.project_settings.project_path} succeeded "
            f"in {result.execution_time:.2f}s"
        )
        return result

    def _append_log(self, result: BuildResult) -> None:
        log_path = self.output_path
        try:
            with open(log_path, "ab") as log_file:
                log_file.write(result.stdout)
                log_file.write(result.stderr)
        except OSError as e:
            raise LogWriteError(
                f"Failed to write build log {log_path}: {e}",
                path=log_path,
                cause=e,
            ) from e
        logger.debug(f"Appended {result.output_size} bytes to {log_path}")
