#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exception hierarchy for cargo_wrap with structured error context.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class ErrorContext:
    """Context information attached to cargo_wrap errors."""

    command: Optional[str] = None
    exit_code: Optional[int] = None
    working_directory: Optional[Path] = None
    environment_vars: Dict[str, str] = field(default_factory=dict)
    stderr: Optional[str] = None
    additional_info: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary for structured logging."""
        return {
            "command": self.command,
            "exit_code": self.exit_code,
            "working_directory": (
                str(self.working_directory) if self.working_directory else None
            ),
            "environment_vars": self.environment_vars,
            "stderr": self.stderr,
            "additional_info": self.additional_info,
        }


class CargoWrapError(Exception):
    """
    Base exception class for cargo_wrap errors.

    Carries an ErrorContext describing the command and environment that
    produced the failure, plus the original exception when one exists.
    """

    def __init__(
        self,
        message: str,
        *,
        context: Optional[ErrorContext] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.cause = cause

    def __str__(self) -> str:
        """String representation with the most useful context appended."""
        base_msg = self.message

        if self.context.command:
            base_msg += f"\nCommand: {self.context.command}"

        if self.context.exit_code is not None:
            base_msg += f"\nExit Code: {self.context.exit_code}"

        if self.context.stderr:
            base_msg += f"\nStderr: {self.context.stderr}"

        if self.cause:
            base_msg += f"\nCaused by: {self.cause}"

        return base_msg


class CargoNotFoundError(CargoWrapError):
    """Raised when the cargo driver cannot be located."""

    def __init__(self, message: str, *, variable: str, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.variable = variable


class CargoIOError(CargoWrapError):
    """Base class for filesystem and process-launch failures."""

    def __init__(
        self,
        message: str,
        *,
        path: Optional[Union[str, Path]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.path = Path(path) if path is not None else None


class ManifestReadError(CargoIOError):
    """Raised when Cargo.toml cannot be read."""


class LogWriteError(CargoIOError):
    """Raised when the build log cannot be opened or written."""


class CargoLaunchError(CargoIOError):
    """Raised when the cargo process cannot be started at all."""


class ManifestFormatError(CargoWrapError):
    """Raised when Cargo.toml is not valid TOML or has a malformed features table."""

    def __init__(
        self,
        message: str,
        *,
        path: Optional[Union[str, Path]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.path = Path(path) if path is not None else None


class BuildError(CargoWrapError):
    """Raised when cargo exits with a non-zero status."""

    def __init__(self, message: str, *, result: Any = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.result = result


class ConfigurationError(CargoWrapError):
    """Exception raised for errors in build profile files."""

    def __init__(
        self,
        message: str,
        *,
        config_file: Optional[Union[str, Path]] = None,
        invalid_option: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        additional_info: Dict[str, Any] = {}
        if config_file:
            additional_info["config_file"] = str(config_file)
        if invalid_option:
            additional_info["invalid_option"] = invalid_option

        context = kwargs.pop("context", None) or ErrorContext()
        context.additional_info.update(additional_info)

        super().__init__(message, context=context, **kwargs)
        self.config_file = Path(config_file) if config_file else None
