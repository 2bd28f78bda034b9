#!/usr/bin/env python3
"""
Diagnostic parsers for compiler error output.

Two interchangeable strategies turn the text a compiler printed into a list
of :class:`CompilerError` records:

- :class:`JsonDiagnosticParser` decodes a JSON array of error records.
- :class:`RegexDiagnosticParser` matches a compiler-specific pattern with the
  named groups ``fileName``, ``message``, ``line`` and ``column``.

Both degrade to a single synthetic error carrying the raw text when the
output cannot be understood, so a failed compilation always reports at
least one diagnostic.
"""

from __future__ import annotations

import json
import re
from typing import List, Optional, Protocol, Union

from loguru import logger
from pydantic import ValidationError

from .core_types import CompilerError, DecodeOutcome

REQUIRED_GROUPS = ("message", "line")


class DiagnosticParser(Protocol):
    """Protocol defining interface for diagnostic parsers."""

    def parse(self, output: str) -> Optional[List[CompilerError]]:
        """Parse compiler diagnostic text into error records."""
        ...


def decode_errors(output: str) -> DecodeOutcome:
    """Decode a JSON array of error records without raising."""
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        return DecodeOutcome.malformed(output, f"invalid JSON: {e}")

    if not isinstance(data, list):
        return DecodeOutcome.malformed(
            output, f"expected a JSON array, got {type(data).__name__}"
        )

    errors = []
    for item in data:
        if not isinstance(item, dict):
            return DecodeOutcome.malformed(
                output, f"expected an error object, got {type(item).__name__}"
            )
        try:
            errors.append(CompilerError.model_validate(item))
        except ValidationError as e:
            return DecodeOutcome.malformed(output, f"invalid error record: {e}")

    return DecodeOutcome.decoded(errors, output)


class JsonDiagnosticParser:
    """Parser for compilers that report their errors as a JSON array."""

    def __init__(self, service_name: str) -> None:
        self.service_name = service_name

    def parse(self, output: str) -> Optional[List[CompilerError]]:
        if not output:
            return None

        outcome = decode_errors(output)

        if not outcome.ok:
            logger.warning(f"{self.service_name} parse error: {output}")
            logger.debug(f"{self.service_name}: {outcome.reason}")
            return [CompilerError(message=output)]

        if not outcome.errors:
            # A compiler exiting non-zero is expected to say why.
            logger.warning(f"{self.service_name} parse error: {output}")

        return outcome.errors


class RegexDiagnosticParser:
    """Parser for compilers whose errors are matched by a named-group pattern."""

    def __init__(self, service_name: str, pattern: Union[str, re.Pattern[str]]) -> None:
        self.service_name = service_name
        self.pattern = compile_error_pattern(pattern)

    def parse(self, output: str) -> Optional[List[CompilerError]]:
        match = self.pattern.search(output)

        if match is None:
            logger.warning(f"{self.service_name} parse error: {output}")
            return [CompilerError(message=output)]

        groups = match.groupdict()
        column = groups.get("column")

        return [
            CompilerError(
                file_name=groups.get("fileName") or None,
                message=groups.get("message") or "",
                line=int(groups["line"]),
                column=int(column) if column else 1,
            )
        ]


def compile_error_pattern(pattern: Union[str, re.Pattern[str]]) -> re.Pattern[str]:
    """
    Compile an error pattern and check it carries the groups parsing relies on.

    Raises:
        ValueError: If the pattern is invalid or lacks a required group
    """
    if isinstance(pattern, str):
        try:
            pattern = re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid error pattern: {e}") from e

    missing = [name for name in REQUIRED_GROUPS if name not in pattern.groupindex]
    if missing:
        raise ValueError(
            f"Error pattern is missing named groups: {', '.join(missing)}"
        )
    return pattern


def create_parser(
    service_name: str, pattern: Union[str, re.Pattern[str], None] = None
) -> DiagnosticParser:
    """Create the regex parser when a pattern is given, the JSON parser otherwise."""
    if pattern is None:
        return JsonDiagnosticParser(service_name)
    return RegexDiagnosticParser(service_name, pattern)
