#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
cargo_wrap

A thin wrapper around ``cargo build``: describe the project and the build
options in Python, run the build synchronously and get its output captured
and optionally appended to a log file.
"""

from .core.project import ProjectSettings
from .core.models import BuildStatus, BuildResult, BuildInvocation
from .core.errors import (
    CargoWrapError,
    CargoNotFoundError,
    CargoIOError,
    CargoLaunchError,
    ManifestReadError,
    ManifestFormatError,
    LogWriteError,
    BuildError,
    ConfigurationError,
)
from .builders.cargo import CargoBuilder, resolve_cargo_path
from .utils.config import BuildConfig, BuildProfile

# Package metadata
__version__ = "0.1.0"
__license__ = "GPL-3.0-or-later"

__all__ = [
    'ProjectSettings', 'CargoBuilder', 'resolve_cargo_path',
    'BuildStatus', 'BuildResult', 'BuildInvocation',
    'CargoWrapError', 'CargoNotFoundError', 'CargoIOError', 'CargoLaunchError',
    'ManifestReadError', 'ManifestFormatError', 'LogWriteError',
    'BuildError', 'ConfigurationError',
    'BuildConfig', 'BuildProfile',
    '__version__', '__license__'
]
