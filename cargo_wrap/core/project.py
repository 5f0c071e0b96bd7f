#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Project settings describing what cargo should build.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from loguru import logger

from .errors import ErrorContext, ManifestFormatError, ManifestReadError
from .models import MANIFEST_FILE_NAME


class ProjectSettings:
    """
    Holds configuration settings for a Rust project build.

    Attributes:
        project_path: The root directory of the Rust project.
        cargo_toml_path: Path to the project's Cargo.toml, derived from project_path.
        compilation_target: Optional target triple (e.g. "x86_64-unknown-linux-gnu").
        features: Features to enable, or None to build with cargo's defaults only.
        output_path: Optional directory for compiled artifacts (CARGO_TARGET_DIR).
        release: Whether to compile in release mode instead of debug.
        is_lib: Select ``--lib`` instead of ``--bin`` when a target name is set.
        no_default_features: Pass ``--no-default-features`` to cargo.
        target: Optional specific binary/library to build.
    """

    def __init__(
        self,
        project_path: Union[Path, str],
        output_path: Optional[Union[Path, str]] = None,
        compilation_target: Optional[str] = None,
        is_lib: bool = False,
        *,
        features: Optional[Iterable[str]] = None,
    ) -> None:
        self._project_path = Path(project_path)
        self._cargo_toml_path = self._project_path / MANIFEST_FILE_NAME
        self.output_path = Path(output_path) if output_path is not None else None
        self.compilation_target = compilation_target
        self.is_lib = is_lib
        self.release = False
        self.no_default_features = False
        self.target: Optional[str] = None
        self._features: Optional[List[str]] = (
            list(features) if features is not None else None
        )

    @property
    def project_path(self) -> Path:
        return self._project_path

    @property
    def cargo_toml_path(self) -> Path:
        return self._cargo_toml_path

    @property
    def features(self) -> Optional[Tuple[str, ...]]:
        """Enabled features; None when no feature list was ever started."""
        if self._features is None:
            return None
        return tuple(self._features)

    def get_features(self) -> List[str]:
        """
        Retrieve the features declared in the ``[features]`` table of Cargo.toml.

        The manifest is read again on every call.

        Returns:
            Feature names in the order they are declared; empty if the
            manifest declares no features table.

        Raises:
            ManifestReadError: If Cargo.toml cannot be read.
            ManifestFormatError: If Cargo.toml is not valid UTF-8 TOML.
        """
        manifest = self._cargo_toml_path
        try:
            content = manifest.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ManifestFormatError(
                f"{manifest} is not valid UTF-8: {e}",
                path=manifest,
                context=ErrorContext(working_directory=self._project_path),
                cause=e,
            ) from e
        except OSError as e:
            raise ManifestReadError(
                f"Failed to read {manifest}: {e}",
                path=manifest,
                context=ErrorContext(working_directory=self._project_path),
                cause=e,
            ) from e

        try:
            parsed = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ManifestFormatError(
                f"Invalid TOML in {manifest}: {e}",
                path=manifest,
                context=ErrorContext(working_directory=self._project_path),
                cause=e,
            ) from e

        features = parsed.get("features")
        if not isinstance(features, dict):
            logger.debug(f"No [features] table in {manifest}")
            return []

        names = list(features.keys())
        logger.debug(f"Found {len(names)} feature(s) in {manifest}: {names}")
        return names

    def set_release(self) -> None:
        """Marks the project to be built as release."""
        self.release = True

    def add_feature(self, feature: str) -> None:
        """Manually enable a feature that's available in the project."""
        if self._features is None:
            self._features = []
        self._features.append(feature)

    def set_no_default_features(self) -> None:
        self.no_default_features = True

    def set_build_target(self, target: str) -> None:
        """Build only the named binary, or the library when is_lib is set."""
        self.target = target

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(project_path={str(self._project_path)!r}, "
            f"release={self.release}, features={self.features!r}, "
            f"compilation_target={self.compilation_target!r}, "
            f"output_path={str(self.output_path) if self.output_path else None!r}, "
            f"is_lib={self.is_lib}, no_default_features={self.no_default_features}, "
            f"target={self.target!r})"
        )
