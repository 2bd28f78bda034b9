#!/usr/bin/env python3
"""
High-level API for the transpiler helper module.
"""

import asyncio
from typing import Iterable, List, Optional, Tuple

from .config import ExecutorSettings
from .core_types import CompilerResult, PathLike
from .executor import NodeExecutor, TranspilerDefinition
from .hooks import ProjectHooks


def compile_file(source_file: PathLike,
                 target_file: Optional[PathLike],
                 definition: TranspilerDefinition,
                 settings: Optional[ExecutorSettings] = None,
                 hooks: Optional[ProjectHooks] = None) -> Optional[CompilerResult]:
    """
    Compile a single source file synchronously.
    """
    executor = NodeExecutor(definition, settings=settings, hooks=hooks)
    return executor.compile_sync(source_file, target_file)


async def compile_many(pairs: Iterable[Tuple[PathLike, Optional[PathLike]]],
                       definition: TranspilerDefinition,
                       settings: Optional[ExecutorSettings] = None,
                       hooks: Optional[ProjectHooks] = None) -> List[Optional[CompilerResult]]:
    """
    Compile several (source, target) pairs concurrently.

    Results are returned in the order of the input pairs.
    """
    executor = NodeExecutor(definition, settings=settings, hooks=hooks)
    return await asyncio.gather(
        *(executor.compile(source, target) for source, target in pairs)
    )
