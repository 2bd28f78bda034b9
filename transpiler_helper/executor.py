#!/usr/bin/env python3
"""
Compiler executor with async support.

A compiler front-end is described by the small capability set in
:class:`TranspilerDefinition`: a display name, the entry script run by the
bundled runtime, an optional error pattern, an argument builder and an
artifact post-processor. :class:`NodeExecutor` depends only on that set and
runs the whole pipeline for one source file:

    prerequisites -> arguments -> process -> validation -> post-processing

The temporary file that captures compiler output is removed before
``compile`` returns, whatever the outcome.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import ExecutorSettings
from .core_types import CompilerResult, PathLike, ProcessOutcome
from .diagnostics import DiagnosticParser, compile_error_pattern, create_parser
from .hooks import NullProjectHooks, ProjectHooks
from .prerequisites import check_prerequisites
from .process import NodeProcessRunner, quote_path
from .utils import FileManager
from .validation import validate_result

PLACEHOLDER_PATTERN = re.compile(r"\{(source|target|source_name|target_name)\}")


class TranspilerDefinition(Protocol):
    """Capability set implemented by every compiler front-end."""

    @property
    def service_name(self) -> str:
        """Display name used in log messages."""
        ...

    @property
    def compiler_path(self) -> PathLike:
        """Entry script, absolute or relative to the resource directory."""
        ...

    @property
    def error_pattern(self) -> Optional[Union[str, re.Pattern[str]]]:
        """Named-group error pattern, or None for JSON diagnostics."""
        ...

    def get_arguments(self, source_file: str, target_file: str) -> str:
        """Build the compiler-specific argument text."""
        ...

    def post_process_result(
        self, result_source: Optional[str], source_file: str, target_file: str
    ) -> Optional[str]:
        """Transform the artifact text after a successful compile."""
        ...


class ScriptTranspiler(BaseModel):
    """
    Front-end described entirely by data.

    ``arguments`` is a template; ``{source}``, ``{target}``, ``{source_name}``
    and ``{target_name}`` are replaced by shell-quoted values.
    """

    model_config = ConfigDict(
        extra="forbid", frozen=True, str_strip_whitespace=True
    )

    name: str = Field(min_length=1, description="Compiler display name")
    script: Path = Field(description="Compiler entry script")
    arguments: str = Field(
        default="{source} {target}", description="Argument template"
    )
    error_pattern: Optional[str] = Field(
        default=None, description="Error pattern; JSON diagnostics when omitted"
    )

    @field_validator("error_pattern")
    @classmethod
    def validate_error_pattern(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            compile_error_pattern(v)
        return v

    @property
    def service_name(self) -> str:
        return self.name

    @property
    def compiler_path(self) -> Path:
        return self.script

    def get_arguments(self, source_file: str, target_file: str) -> str:
        replacements = {
            "source": quote_path(source_file),
            "target": quote_path(target_file),
            "source_name": quote_path(Path(source_file).name),
            "target_name": quote_path(Path(target_file).name),
        }
        # Single pass: substituted values are never rescanned for placeholders.
        return PLACEHOLDER_PATTERN.sub(
            lambda match: replacements[match.group(1)], self.arguments
        )

    def post_process_result(
        self, result_source: Optional[str], source_file: str, target_file: str
    ) -> Optional[str]:
        return result_source


class NodeExecutor:
    """
    Runs one compiler front-end and interprets what happened.

    Each ``compile`` call owns its temporary file, its process and its
    result, so several calls may be awaited concurrently on one executor.
    """

    def __init__(
        self,
        definition: TranspilerDefinition,
        settings: Optional[ExecutorSettings] = None,
        hooks: Optional[ProjectHooks] = None,
        runner: Optional[NodeProcessRunner] = None,
    ) -> None:
        self.definition = definition
        self.settings = settings or ExecutorSettings()
        self.hooks = hooks or NullProjectHooks()
        self.runner = runner or NodeProcessRunner(self.settings)
        self.parser: DiagnosticParser = create_parser(
            definition.service_name, definition.error_pattern
        )

    @property
    def service_name(self) -> str:
        return self.definition.service_name

    async def compile(
        self, source_file: PathLike, target_file: Optional[PathLike]
    ) -> Optional[CompilerResult]:
        """
        Compile source_file into target_file.

        Returns:
            The populated CompilerResult, or None when the source file is not
            eligible for compilation (no process is started)

        Raises:
            ProcessStartError: If the compiler process cannot be started
        """
        source = Path(source_file)
        target = str(target_file) if target_file else ""

        if not check_prerequisites(source, self.settings.disallowed_parent_extensions):
            return None

        script_args = self.definition.get_arguments(str(source), target)
        compiler_path = self.settings.resolve_script(self.definition.compiler_path)

        async with FileManager.temporary_file_async(
            self.settings.temp_directory
        ) as error_output_file:
            if target:
                self.hooks.check_out_file(target)

            outcome = await self.runner.run_async(
                compiler_path, script_args, source.parent, error_output_file
            )
            return await self._process_result(outcome, str(source), target)

    def compile_sync(
        self, source_file: PathLike, target_file: Optional[PathLike]
    ) -> Optional[CompilerResult]:
        """
        Compile synchronously.

        This is a convenience wrapper around compile for synchronous usage.
        """
        return asyncio.run(self.compile(source_file, target_file))

    async def _process_result(
        self, outcome: ProcessOutcome, source_file: str, target_file: str
    ) -> CompilerResult:
        result = CompilerResult(source_file_name=source_file)

        await validate_result(
            outcome, target_file, outcome.output, result, self.parser, self.service_name
        )

        if result.is_success:
            result.result = self.definition.post_process_result(
                result.result, source_file, target_file
            )
            if self.settings.register_generated_files:
                self.hooks.add_file_to_project(source_file, target_file)
        else:
            logger.error(
                f"{self.service_name}: {Path(source_file).name} compilation failed."
            )

        return result

    def describe(self) -> Dict[str, Any]:
        """Summarize the executor configuration."""
        return {
            "service_name": self.service_name,
            "compiler_path": str(
                self.settings.resolve_script(self.definition.compiler_path)
            ),
            "runtime_path": self.settings.runtime_path,
            "diagnostics": type(self.parser).__name__,
        }
