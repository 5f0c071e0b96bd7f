#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core components for cargo_wrap.
"""

from .project import ProjectSettings
from .models import BuildStatus, BuildResult, BuildInvocation
from .runner import run_invocation
from .errors import (
    CargoWrapError,
    CargoNotFoundError,
    CargoIOError,
    CargoLaunchError,
    ManifestReadError,
    ManifestFormatError,
    LogWriteError,
    BuildError,
    ConfigurationError,
    ErrorContext,
)

__all__ = [
    "ProjectSettings",
    "BuildStatus",
    "BuildResult",
    "BuildInvocation",
    "run_invocation",
    "CargoWrapError",
    "CargoNotFoundError",
    "CargoIOError",
    "CargoLaunchError",
    "ManifestReadError",
    "ManifestFormatError",
    "LogWriteError",
    "BuildError",
    "ConfigurationError",
    "ErrorContext",
]
