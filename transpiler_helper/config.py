#!/usr/bin/env python3
"""
Executor settings for the transpiler helper module.

Settings are immutable for the lifetime of an executor and are passed to it
explicitly, so concurrent executors (and concurrent test runs) never share
mutable process-wide state.
"""

from __future__ import annotations

import json
import os
import shutil
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .core_types import InvalidConfigurationError, PathLike

PACKAGE_DIRECTORY = Path(__file__).resolve().parent
DEFAULT_RESOURCE_DIRECTORY = PACKAGE_DIRECTORY / "resources"
DEFAULT_DISALLOWED_PARENT_EXTENSIONS: Tuple[str, ...] = (".png", ".jpg", ".jpeg", ".gif")

ENV_RUNTIME = "TRANSPILER_HELPER_RUNTIME"
ENV_RESOURCES = "TRANSPILER_HELPER_RESOURCES"
ENV_TEMP_DIRECTORY = "TRANSPILER_HELPER_TEMP"


class ExecutorSettings(BaseModel):
    """Runtime configuration shared by every invocation of an executor."""

    model_config = ConfigDict(
        extra="forbid", validate_assignment=True, str_strip_whitespace=True
    )

    runtime_path: str = Field(
        default="node", description="Bundled runtime that interprets compiler scripts"
    )
    resource_directory: Path = Field(
        default=DEFAULT_RESOURCE_DIRECTORY,
        description="Directory that relative compiler script paths resolve against",
    )
    disallowed_parent_extensions: Tuple[str, ...] = Field(
        default=DEFAULT_DISALLOWED_PARENT_EXTENSIONS,
        description="Sibling extensions that make a source file ineligible",
    )
    register_generated_files: bool = Field(
        default=True,
        description="Call the add-to-project hook after a successful compile",
    )
    temp_directory: Optional[Path] = Field(
        default=None, description="Directory for captured diagnostic files"
    )
    timeout: Optional[float] = Field(
        default=None, gt=0, description="Compilation timeout in seconds"
    )

    @field_validator("runtime_path")
    @classmethod
    def resolve_runtime_path(cls, v: str) -> str:
        """Resolve a bare runtime name against PATH when possible."""
        if not v:
            raise ValueError("runtime_path cannot be empty")
        if not os.path.isabs(v):
            resolved = shutil.which(v)
            if resolved:
                return resolved
            logger.debug(f"Runtime '{v}' not found in PATH, keeping it as given")
        return v

    @field_validator("disallowed_parent_extensions")
    @classmethod
    def normalize_extensions(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Lower-case every extension and make sure it starts with a dot."""
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return tuple(normalized)

    def resolve_script(self, script: PathLike) -> Path:
        """Resolve a compiler script path against the resource directory."""
        path = Path(script)
        if path.is_absolute():
            return path
        return self.resource_directory / path

    @classmethod
    def from_env(cls, **overrides: Any) -> ExecutorSettings:
        """Build settings from environment variables, then apply overrides."""
        data: Dict[str, Any] = {}
        if runtime := os.environ.get(ENV_RUNTIME):
            data["runtime_path"] = runtime
        if resources := os.environ.get(ENV_RESOURCES):
            data["resource_directory"] = resources
        if temp_directory := os.environ.get(ENV_TEMP_DIRECTORY):
            data["temp_directory"] = temp_directory
        data.update(overrides)
        return cls.model_validate(data)

    @classmethod
    def load(cls, file_path: PathLike) -> ExecutorSettings:
        """
        Load and validate settings from a JSON file.

        Args:
            file_path: Path to the JSON settings file

        Returns:
            Validated settings

        Raises:
            InvalidConfigurationError: If the file cannot be read, parsed or validated
        """
        path = Path(file_path)

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise InvalidConfigurationError(
                f"Settings file not found: {path}",
                error_code="FILE_NOT_FOUND",
                file_path=str(path),
            ) from e
        except json.JSONDecodeError as e:
            raise InvalidConfigurationError(
                f"Invalid JSON in file {path}: {e}",
                error_code="INVALID_JSON",
                file_path=str(path),
                json_error=str(e),
            ) from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidConfigurationError(
                f"Invalid configuration in {path}: {e}",
                error_code="INVALID_CONFIGURATION",
                file_path=str(path),
                validation_errors=e.errors(),
            ) from e
