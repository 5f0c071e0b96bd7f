#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Synchronous execution of assembled cargo invocations.
"""

from __future__ import annotations

import os
import subprocess
import time
from typing import Callable

from loguru import logger

from .errors import CargoLaunchError, ErrorContext
from .models import BuildInvocation, BuildResult

CommandRunner = Callable[[BuildInvocation], BuildResult]


def run_invocation(invocation: BuildInvocation) -> BuildResult:
    """
    Run an invocation to completion, capturing stdout and stderr in full.

    The child inherits the current environment with the invocation's
    overrides applied on top. There is no timeout: the call blocks until
    cargo exits.

    Raises:
        CargoLaunchError: If the process cannot be started (missing
            executable, missing working directory, permission denied).
    """
    env = os.environ.copy()
    env.update(invocation.env)

    logger.debug(f"Executing command: {invocation.describe()} (cwd={invocation.cwd})")
    start_time = time.time()

    try:
        completed = subprocess.run(
            invocation.command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=invocation.cwd,
            env=env,
            check=False,
        )
    except OSError as e:
        raise CargoLaunchError(
            f"Failed to launch {invocation.program}: {e}",
            path=invocation.program,
            context=ErrorContext(
                command=invocation.describe(),
                working_directory=invocation.cwd,
                environment_vars=dict(invocation.env),
            ),
            cause=e,
        ) from e

    execution_time = time.time() - start_time
    logger.debug(
        f"Command exited with code {completed.returncode} in {execution_time:.2f}s"
    )

    return BuildResult(
        invocation=invocation,
        exit_code=completed.returncode,
        stdout=completed.stdout or b"",
        stderr=completed.stderr or b"",
        execution_time=execution_time,
    )
