#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Data models for cargo_wrap.
"""

from __future__ import annotations

import shlex
import signal
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Mapping, Tuple

# Environment variable naming the cargo executable.
CARGO_ENV_VAR = "CARGO"
# Environment variables set on the cargo child process.
TARGET_DIR_ENV_VAR = "CARGO_TARGET_DIR"
RUSTFLAGS_ENV_VAR = "RUSTFLAGS"

MANIFEST_FILE_NAME = "Cargo.toml"


class BuildStatus(Enum):
    """Enumeration of possible build status values."""

    NOT_STARTED = auto()
    BUILDING = auto()
    COMPLETED = auto()
    FAILED = auto()


@dataclass(frozen=True)
class BuildInvocation:
    """A fully assembled cargo command, ready to be executed."""

    program: Path
    args: Tuple[str, ...]
    cwd: Path
    env: Mapping[str, str] = field(default_factory=dict)

    @property
    def command(self) -> list[str]:
        return [str(self.program), *self.args]

    def describe(self) -> str:
        """Render the invocation as a shell-like line for logs and dry runs."""
        env_prefix = " ".join(
            f"{key}={shlex.quote(value)}" for key, value in self.env.items()
        )
        cmd_str = " ".join(shlex.quote(part) for part in self.command)
        return f"{env_prefix} {cmd_str}" if env_prefix else cmd_str


@dataclass
class BuildResult:
    """Data class to store the outcome of one cargo build."""

    invocation: BuildInvocation
    exit_code: int
    stdout: bytes = b""
    stderr: bytes = b""
    execution_time: float = 0.0

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    @property
    def failed(self) -> bool:
        """Convenience property to check if the build failed."""
        return not self.success

    @property
    def output_size(self) -> int:
        """Number of captured bytes across stdout and stderr."""
        return len(self.stdout) + len(self.stderr)

    def status_description(self) -> str:
        """Describe the exit status the way the process reported it."""
        if self.exit_code < 0:
            signum = -self.exit_code
            try:
                return f"signal: {signum} ({signal.Signals(signum).name})"
            except ValueError:
                return f"signal: {signum}"
        return f"exit status: {self.exit_code}"

