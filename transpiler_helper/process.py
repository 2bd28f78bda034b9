#!/usr/bin/env python3
"""
Compiler process execution.

The compiler entry script is run by the bundled runtime through a shell
wrapper that redirects stdout and stderr into a single file and exits with
the child's status. Output is never read from pipes; it is read back from
the file once the process has exited.
"""

from __future__ import annotations

import asyncio
import os
import shlex
import signal
import subprocess
import sys
import time
from typing import Any, Dict, Optional

from loguru import logger

from .config import ExecutorSettings
from .core_types import PathLike, ProcessOutcome, ProcessStartError
from .utils import FileManager

IS_WINDOWS = sys.platform == "win32"


def quote_path(path: PathLike) -> str:
    """Quote a path for the platform shell."""
    if IS_WINDOWS:
        return f'"{path}"'
    return shlex.quote(str(path))


class NodeProcessRunner:
    """Runs compiler scripts under the bundled runtime."""

    def __init__(self, settings: Optional[ExecutorSettings] = None) -> None:
        self.settings = settings or ExecutorSettings()

    def build_command_line(
        self, compiler_path: PathLike, script_args: str, output_file: PathLike
    ) -> str:
        """Build the shell command line that runs the compiler into output_file."""
        command = f"{quote_path(self.settings.runtime_path)} {quote_path(compiler_path)}"
        if script_args:
            command = f"{command} {script_args}"
        return f"{command} > {quote_path(output_file)} 2>&1"

    @staticmethod
    def _platform_options() -> Dict[str, Any]:
        if IS_WINDOWS:
            return {"creationflags": subprocess.CREATE_NO_WINDOW}
        # Own process group so the runtime started by the shell can be killed too.
        return {"start_new_session": True}

    @staticmethod
    async def _terminate(process: asyncio.subprocess.Process) -> None:
        """Kill a still-running compiler process and reap it."""
        if process.returncode is not None:
            return
        try:
            if IS_WINDOWS:
                process.kill()
            else:
                os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
        await process.wait()
        logger.debug(f"Killed compiler process {process.pid}")

    async def run_async(
        self,
        compiler_path: PathLike,
        script_args: str,
        working_directory: Optional[PathLike],
        output_file: PathLike,
    ) -> ProcessOutcome:
        """
        Run the compiler and wait for it without blocking the event loop.

        Args:
            compiler_path: Compiler entry script
            script_args: Compiler-specific argument text, inserted verbatim
            working_directory: Directory the compiler runs in
            output_file: File that receives stdout and stderr

        Returns:
            ProcessOutcome with the exit code and the captured text

        Raises:
            ProcessStartError: If the shell cannot be started
            asyncio.TimeoutError: If the configured timeout expires
            asyncio.CancelledError: If the awaiting task is cancelled
        """
        command_line = self.build_command_line(compiler_path, script_args, output_file)
        cwd = str(working_directory) if working_directory else None
        start_time = time.time()

        logger.bind(cwd=cwd, timeout=self.settings.timeout).debug(
            f"Executing command: {command_line}"
        )

        try:
            process = await asyncio.create_subprocess_shell(
                command_line,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
                cwd=cwd,
                **self._platform_options(),
            )
        except OSError as e:
            raise ProcessStartError(
                f"Failed to start compiler process: {e}",
                command=[command_line],
                working_directory=cwd,
                error_code="PROCESS_START_FAILED",
            ) from e

        try:
            if self.settings.timeout is not None:
                exit_code = await asyncio.wait_for(
                    process.wait(), timeout=self.settings.timeout
                )
            else:
                exit_code = await process.wait()
        except (asyncio.CancelledError, asyncio.TimeoutError):
            await self._terminate(process)
            raise

        output = await FileManager.read_text_async(output_file)
        execution_time = time.time() - start_time

        logger.debug(
            f"Compiler exited with code {exit_code} in {execution_time:.2f}s"
        )

        return ProcessOutcome(
            exit_code=exit_code,
            output=output.strip(),
            command=[command_line],
            execution_time=execution_time,
        )
