#!/usr/bin/env python3
"""
File utilities for the transpiler helper module.
"""

from __future__ import annotations

import os
import sys
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator, Optional

import aiofiles
from loguru import logger

from .core_types import PathLike

TEMP_FILE_PREFIX = "transpiler_helper_"


class FileManager:
    """File management utilities with async support."""

    @staticmethod
    @asynccontextmanager
    async def temporary_file_async(
        directory: Optional[PathLike] = None, suffix: str = ".log"
    ) -> AsyncGenerator[Path, Any]:
        """
        Async context manager for a temporary file owned by one caller.

        The file is created empty and removed on exit, whether the body
        completed, raised or was cancelled.
        """
        fd, name = tempfile.mkstemp(
            prefix=TEMP_FILE_PREFIX,
            suffix=suffix,
            dir=str(directory) if directory else None,
        )
        os.close(fd)
        temp_file = Path(name)
        logger.debug(f"Created temporary file: {temp_file}")
        try:
            yield temp_file
        finally:
            temp_file.unlink(missing_ok=True)
            logger.debug(f"Cleaned up temporary file: {temp_file}")

    @staticmethod
    async def read_text_async(path: PathLike) -> str:
        """
        Read a whole text file asynchronously.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        async with aiofiles.open(path, "r", encoding="utf-8", errors="replace") as f:
            return await f.read()



LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru's handlers with a single stderr handler."""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper())
