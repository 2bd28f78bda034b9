#!/usr/bin/env python3
"""
Core types and data models for the transpiler helper module.

This module provides the result and diagnostic models shared by the process
invoker, the diagnostic parsers and the executor, together with the
exception hierarchy raised by the package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, TypeAlias, Union

from loguru import logger
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Type aliases for improved type hinting
PathLike: TypeAlias = Union[str, Path]


class CompilerError(BaseModel):
    """
    A single diagnostic reported by a compiler.

    Records decoded from compiler JSON output use camelCase or PascalCase
    keys (``fileName``, ``Message``...), so every field accepts those
    spellings in addition to its own name.
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    file_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("file_name", "fileName", "FileName"),
        description="Source file the diagnostic refers to",
    )
    message: str = Field(
        validation_alias=AliasChoices("message", "Message"),
        description="Human-readable diagnostic text",
    )
    line: Optional[int] = Field(
        default=None,
        ge=1,
        validation_alias=AliasChoices("line", "Line"),
        description="1-based line number",
    )
    column: int = Field(
        default=1,
        ge=1,
        validation_alias=AliasChoices("column", "Column"),
        description="1-based column number",
    )

    @field_validator("line", mode="before")
    @classmethod
    def clamp_line(cls, v: Any) -> Any:
        """Report file-level diagnostics (line 0) on the first line."""
        if isinstance(v, int) and v < 1:
            return 1
        return v

    @field_validator("column", mode="before")
    @classmethod
    def default_unknown_column(cls, v: Any) -> Any:
        """Treat a missing or 0 column as the first column."""
        if v is None or (isinstance(v, int) and v < 1):
            return 1
        return v

    def __str__(self) -> str:
        location = self.file_name or ""
        if self.line is not None:
            location = f"{location}({self.line},{self.column})"
        return f"{location}: {self.message}" if location else self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "fileName": self.file_name,
            "message": self.message,
            "line": self.line,
            "column": self.column,
        }


class CompilerResult(BaseModel):
    """
    Outcome of one compilation attempt.

    Created fresh for every invocation and populated by a single call to the
    result validator. ``source_file_name`` cannot be reassigned.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    source_file_name: str = Field(
        frozen=True, description="Source file this result belongs to"
    )
    is_success: bool = Field(
        default=False, description="Whether compilation succeeded"
    )
    result: Optional[str] = Field(
        default=None, description="Compiled artifact text when successful"
    )
    errors: Optional[List[CompilerError]] = Field(
        default=None, description="Diagnostics when unsuccessful"
    )

    @property
    def has_errors(self) -> bool:
        """Check if the result carries any diagnostics."""
        return bool(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "sourceFileName": self.source_file_name,
            "isSuccess": self.is_success,
            "result": self.result,
            "errors": (
                [error.to_dict() for error in self.errors]
                if self.errors is not None
                else None
            ),
        }


@dataclass(frozen=True, slots=True)
class ProcessOutcome:
    """
    Immutable outcome of one compiler process run.

    Uses slots for memory efficiency and frozen=True for immutability.
    """

    exit_code: int
    output: str = ""
    command: List[str] = field(default_factory=list)
    execution_time: float = 0.0

    def __post_init__(self) -> None:
        if self.execution_time < 0:
            raise ValueError("execution_time cannot be negative")

    @property
    def success(self) -> bool:
        """Check if the process exited with status 0."""
        return self.exit_code == 0


@dataclass(frozen=True, slots=True)
class DecodeOutcome:
    """Result of decoding structured diagnostic text."""

    ok: bool
    errors: List[CompilerError] = field(default_factory=list)
    raw: str = ""
    reason: Optional[str] = None

    @classmethod
    def decoded(cls, errors: List[CompilerError], raw: str) -> DecodeOutcome:
        return cls(ok=True, errors=errors, raw=raw)

    @classmethod
    def malformed(cls, raw: str, reason: str) -> DecodeOutcome:
        return cls(ok=False, raw=raw, reason=reason)


# Custom exceptions with error context
class TranspilerException(Exception):
    """Base exception for transpiler-related errors."""

    def __init__(
        self, message: str, *, error_code: Optional[str] = None, **kwargs: Any
    ):
        super().__init__(message)
        self.error_code = error_code
        self.context = kwargs

        logger.bind(error_code=error_code, context=kwargs).error(
            f"TranspilerException: {message}"
        )


class ProcessStartError(TranspilerException):
    """Exception raised when the compiler process cannot be started."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        working_directory: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(
            message, command=command, working_directory=working_directory, **kwargs
        )
        self.command = command
        self.working_directory = working_directory


class InvalidConfigurationError(TranspilerException):
    """Exception raised when configuration is invalid."""

    pass
