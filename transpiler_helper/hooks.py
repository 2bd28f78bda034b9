#!/usr/bin/env python3
"""
Host integration hooks.

An editor or build host plugs its source-control and project systems into the
executor through :class:`ProjectHooks`. The executor calls
``check_out_file`` before the compiler writes the target and
``add_file_to_project`` after a successful, post-processed compile.
"""

from __future__ import annotations

from typing import List, Protocol, Tuple

from loguru import logger

from .core_types import PathLike


class ProjectHooks(Protocol):
    """Protocol defining the host callbacks used by the executor."""

    def check_out_file(self, target_file: PathLike) -> None:
        """Prepare target_file for writing (e.g. source-control check-out)."""
        ...

    def add_file_to_project(self, source_file: PathLike, target_file: PathLike) -> None:
        """Register target_file as generated from source_file."""
        ...


class NullProjectHooks:
    """Hooks for hosts without source control or a project system."""

    def check_out_file(self, target_file: PathLike) -> None:
        logger.debug(f"No check-out needed for {target_file}")

    def add_file_to_project(self, source_file: PathLike, target_file: PathLike) -> None:
        logger.debug(f"Not registering {target_file} with a project")


class RecordingProjectHooks:
    """Hooks that remember every call, in order."""

    def __init__(self) -> None:
        self.checked_out: List[str] = []
        self.added: List[Tuple[str, str]] = []

    def check_out_file(self, target_file: PathLike) -> None:
        self.checked_out.append(str(target_file))

    def add_file_to_project(self, source_file: PathLike, target_file: PathLike) -> None:
        self.added.append((str(source_file), str(target_file)))
