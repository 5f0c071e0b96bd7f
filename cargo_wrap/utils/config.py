#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Build profile loading from TOML, JSON and YAML files.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..builders.cargo import CargoBuilder
from ..core.errors import ConfigurationError, ErrorContext
from ..core.project import ProjectSettings
from ..core.runner import CommandRunner

PROFILE_SECTION = "cargo_wrap"


class BuildProfile(BaseModel):
    """Declarative description of one cargo build, as read from a profile file."""

    model_config = ConfigDict(extra="forbid")

    project_dir: Path = Field(default=Path("."), description="Root of the cargo project")
    output_dir: Optional[Path] = Field(
        default=None, description="Artifact directory (CARGO_TARGET_DIR)"
    )
    target_triple: Optional[str] = Field(
        default=None, description="Cross-compilation target triple"
    )
    is_lib: bool = Field(default=False, description="Build target is the library")
    release: bool = Field(default=False, description="Build in release mode")
    features: Optional[List[str]] = Field(
        default=None, description="Features to enable; absent keeps defaults only"
    )
    no_default_features: bool = Field(
        default=False, description="Disable the default feature set"
    )
    build_target: Optional[str] = Field(
        default=None, description="Specific binary or library name to build"
    )
    jobs: int = Field(default=0, ge=0, description="Parallel jobs, 0 for cargo default")
    log_file: Optional[Path] = Field(
        default=None, description="File the captured build output is appended to"
    )
    verbose: bool = Field(default=False, description="Pass --verbose to cargo")
    rustflags: List[str] = Field(
        default_factory=list, description="Extra flags passed to rustc via RUSTFLAGS"
    )

    @field_validator("features", "rustflags")
    @classmethod
    def validate_names(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        for item in v:
            if not item:
                raise ValueError("entries must be non-empty strings")
        return v

    def merge(self, other: BuildProfile) -> BuildProfile:
        """Return a new profile where fields explicitly set on other win."""
        data = self.model_dump()
        data.update(other.model_dump(exclude_unset=True))
        return BuildProfile.model_validate(data)

    def to_settings(self) -> ProjectSettings:
        # An explicit empty feature list still emits a bare --features flag.
        settings = ProjectSettings(
            self.project_dir,
            output_path=self.output_dir,
            compilation_target=self.target_triple,
            is_lib=self.is_lib,
            features=self.features,
        )
        if self.release:
            settings.set_release()
        if self.no_default_features:
            settings.set_no_default_features()
        if self.build_target is not None:
            settings.set_build_target(self.build_target)
        return settings

    def create_builder(
        self,
        *,
        cargo_path: Optional[Union[Path, str]] = None,
        environ: Optional[Mapping[str, str]] = None,
        command_runner: Optional[CommandRunner] = None,
    ) -> CargoBuilder:
        """
        Create a CargoBuilder for this profile.

        Raises:
            CargoNotFoundError: If no cargo_path is given and CARGO is unset.
        """
        builder = CargoBuilder(
            self.to_settings(),
            self.jobs,
            self.log_file,
            cargo_path=cargo_path,
            environ=environ,
            command_runner=command_runner,
        )
        if self.verbose:
            builder.set_verbose()
        for flag in self.rustflags:
            builder.add_rustc_flag(flag)
        return builder


class BuildConfig:
    """
    Utility class for loading build profiles from files.

    Relative paths inside a profile file are resolved against the directory
    containing that file.
    """

    _SUPPORTED_EXTENSIONS = {
        ".toml": "toml",
        ".json": "json",
        ".yaml": "yaml",
        ".yml": "yaml",
    }

    _PATH_KEYS = ("project_dir", "output_dir", "log_file")

    DEFAULT_BASE_NAME = "cargo-wrap"

    @classmethod
    def load_from_file(cls, file_path: Union[Path, str]) -> BuildProfile:
        """
        Load a build profile from a file.

        Raises:
            ConfigurationError: If the file is missing, has an unsupported
                format, or does not describe a valid profile.
        """
        config_path = Path(file_path)

        if not config_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                config_file=config_path,
                context=ErrorContext(working_directory=config_path.parent),
            )

        suffix = config_path.suffix.lower()
        if suffix not in cls._SUPPORTED_EXTENSIONS:
            supported = ", ".join(cls._SUPPORTED_EXTENSIONS)
            raise ConfigurationError(
                f"Unsupported configuration file format: {suffix}. "
                f"Supported formats: {supported}",
                config_file=config_path,
            )

        try:
            content = config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Failed to read configuration file: {e}",
                config_file=config_path,
                cause=e,
            ) from e

        format_type = cls._SUPPORTED_EXTENSIONS[suffix]
        logger.debug(f"Loading {format_type.upper()} profile from {config_path}")

        match format_type:
            case "toml":
                return cls.load_from_toml(content, config_path)
            case "json":
                return cls.load_from_json(content, config_path)
            case "yaml":
                return cls.load_from_yaml(content, config_path)
            case _:
                raise ConfigurationError(
                    f"Internal error: unhandled format type {format_type}",
                    config_file=config_path,
                )

    @classmethod
    def load_from_toml(
        cls, toml_str: str, source_file: Optional[Path] = None
    ) -> BuildProfile:
        """Load a profile from TOML, either from a [cargo_wrap] table or the root."""
        try:
            config_data = tomllib.loads(toml_str)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(
                f"Invalid TOML configuration: {e}", config_file=source_file, cause=e
            ) from e

        if PROFILE_SECTION in config_data:
            config_data = config_data[PROFILE_SECTION]

        return cls._normalize_config(config_data, source_file)

    @classmethod
    def load_from_json(
        cls, json_str: str, source_file: Optional[Path] = None
    ) -> BuildProfile:
        try:
            config_data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON configuration: {e}",
                config_file=source_file,
                context=ErrorContext(
                    additional_info={"line": e.lineno, "column": e.colno}
                ),
                cause=e,
            ) from e

        return cls._normalize_config(config_data, source_file)

    @classmethod
    def load_from_yaml(
        cls, yaml_str: str, source_file: Optional[Path] = None
    ) -> BuildProfile:
        try:
            import yaml
        except ImportError as e:
            raise ConfigurationError(
                "PyYAML is not installed. Install it with: pip install cargo_wrap[yaml]",
                config_file=source_file,
                cause=e,
            ) from e

        try:
            config_data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            error_details = {}
            mark = getattr(e, "problem_mark", None)
            if mark is not None:
                error_details.update({"line": mark.line + 1, "column": mark.column + 1})
            raise ConfigurationError(
                f"Invalid YAML configuration: {e}",
                config_file=source_file,
                context=ErrorContext(additional_info=error_details),
                cause=e,
            ) from e

        if config_data is None:
            config_data = {}
        return cls._normalize_config(config_data, source_file)

    @classmethod
    def _normalize_config(
        cls, config_data: Any, source_file: Optional[Path] = None
    ) -> BuildProfile:
        """Resolve relative paths and validate the data as a BuildProfile."""
        if not isinstance(config_data, dict):
            raise ConfigurationError(
                "Configuration must be a mapping of profile settings",
                config_file=source_file,
            )

        data: Dict[str, Any] = dict(config_data)
        if source_file is not None:
            base_dir = source_file.parent
            for key in cls._PATH_KEYS:
                value = data.get(key)
                if isinstance(value, str) and not Path(value).is_absolute():
                    data[key] = base_dir / value
            data.setdefault("project_dir", base_dir)

        try:
            return BuildProfile.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            invalid_option = ".".join(str(part) for part in first.get("loc", ()))
            raise ConfigurationError(
                f"Invalid build profile: {e}",
                config_file=source_file,
                invalid_option=invalid_option or None,
                cause=e,
            ) from e

    @classmethod
    def get_default_config_files(cls, directory: Path) -> List[Path]:
        """List profile files present in directory, in order of preference."""
        return [
            directory / f"{cls.DEFAULT_BASE_NAME}{ext}"
            for ext in cls._SUPPORTED_EXTENSIONS
            if (directory / f"{cls.DEFAULT_BASE_NAME}{ext}").is_file()
        ]

    @classmethod
    def auto_discover(cls, directory: Union[Path, str]) -> Optional[BuildProfile]:
        """Load the first profile file found in directory, if any."""
        config_files = cls.get_default_config_files(Path(directory))
        if not config_files:
            logger.debug(f"No profile file found in {directory}")
            return None
        logger.info(f"Auto-discovered profile file: {config_files[0]}")
        return cls.load_from_file(config_files[0])
