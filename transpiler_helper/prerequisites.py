#!/usr/bin/env python3
"""
Eligibility check run before any compiler process is started.
"""

from pathlib import Path
from typing import Iterable

from loguru import logger

from .config import DEFAULT_DISALLOWED_PARENT_EXTENSIONS
from .core_types import PathLike


def check_prerequisites(
    source_file: PathLike,
    disallowed_extensions: Iterable[str] = DEFAULT_DISALLOWED_PARENT_EXTENSIONS,
) -> bool:
    """
    Decide whether a source file may be compiled.

    A source file sharing its stem with an image in the same directory
    (``logo.less`` next to ``logo.png``) is treated as belonging to that
    asset and is not compiled.

    Args:
        source_file: Source file to check
        disallowed_extensions: Sibling extensions that block compilation

    Returns:
        True if compilation should proceed
    """
    source_path = Path(source_file)
    directory = source_path.parent

    if not directory.is_dir():
        return True

    disallowed = {ext.lower() for ext in disallowed_extensions}

    prefix = f"{source_path.stem}."

    for sibling in directory.iterdir():
        if not sibling.name.startswith(prefix) or not sibling.is_file():
            continue
        if sibling.suffix.lower() in disallowed:
            logger.debug(
                f"Skipping {source_path.name}: found sibling asset {sibling.name}"
            )
            return False

    return True
