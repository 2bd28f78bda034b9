#!/usr/bin/env python3
"""
Turns a finished compiler process into a populated CompilerResult.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from loguru import logger

from .core_types import CompilerResult, PathLike, ProcessOutcome
from .diagnostics import DiagnosticParser
from .utils import FileManager


async def validate_result(
    outcome: ProcessOutcome,
    target_file: Optional[PathLike],
    error_text: str,
    result: CompilerResult,
    parser: DiagnosticParser,
    service_name: str,
) -> None:
    """
    Populate result from the process exit code and its captured output.

    Exit code 0 loads the target file as the artifact and marks the result
    successful. A missing target file is logged and leaves the result
    unsuccessful without diagnostics. Any other exit code hands the captured
    text to the diagnostic parser.
    """
    if not outcome.success:
        # Patterns are written against Unix line endings.
        result.errors = parser.parse(error_text.replace("\r", ""))
        return

    try:
        if target_file:
            result.result = await FileManager.read_text_async(target_file)
        result.is_success = True
    except FileNotFoundError as e:
        logger.error(
            f"{service_name}: {Path(target_file).name} compilation failed. {e}"
        )
