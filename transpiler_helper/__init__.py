#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Transpiler Helper Module

Runs source-to-source compilers whose entry point is a script interpreted by
a bundled runtime (typically node), and turns the process exit state and the
captured compiler output into a structured success/failure result.

Features:
- Non-blocking process execution with output captured through a temp file
- Eligibility check that skips sources belonging to image assets
- JSON and named-group regex diagnostic parsing
- Host hooks for source-control check-out and project registration
- Configuration via JSON file, environment or command-line
"""

import os

from .api import compile_file, compile_many
from .config import ExecutorSettings
from .core_types import (
    CompilerError,
    CompilerResult,
    DecodeOutcome,
    InvalidConfigurationError,
    ProcessOutcome,
    ProcessStartError,
    TranspilerException,
)
from .diagnostics import (
    DiagnosticParser,
    JsonDiagnosticParser,
    RegexDiagnosticParser,
    create_parser,
    decode_errors,
)
from .executor import NodeExecutor, ScriptTranspiler, TranspilerDefinition
from .hooks import NullProjectHooks, ProjectHooks, RecordingProjectHooks
from .prerequisites import check_prerequisites
from .process import NodeProcessRunner
from .utils import configure_logging

# Module metadata
__version__ = '0.1.0'
__license__ = "GPL-3.0-or-later"

# Configure default logging
configure_logging(os.environ.get("TRANSPILER_HELPER_LOG_LEVEL", "INFO"))


__all__ = [
    # Core types
    'CompilerError',
    'CompilerResult',
    'DecodeOutcome',
    'ProcessOutcome',
    'TranspilerException',
    'ProcessStartError',
    'InvalidConfigurationError',

    # Configuration
    'ExecutorSettings',

    # Classes
    'NodeExecutor',
    'NodeProcessRunner',
    'ScriptTranspiler',
    'TranspilerDefinition',
    'DiagnosticParser',
    'JsonDiagnosticParser',
    'RegexDiagnosticParser',
    'ProjectHooks',
    'NullProjectHooks',
    'RecordingProjectHooks',

    # Functions
    'check_prerequisites',
    'create_parser',
    'decode_errors',
    'compile_file',
    'compile_many',
    'configure_logging',
]
