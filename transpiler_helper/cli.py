#!/usr/bin/env python3
"""
Command-line interface for the transpiler helper module.
"""
import argparse
import asyncio
import json
from pathlib import Path
from typing import List, Optional

from loguru import logger
from pydantic import ValidationError

from .config import ExecutorSettings
from .core_types import InvalidConfigurationError, ProcessStartError
from .executor import NodeExecutor, ScriptTranspiler
from .utils import configure_logging

EXIT_SUCCESS = 0
EXIT_FAILED = 1
EXIT_SKIPPED = 2


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser for command-line usage.
    """
    parser = argparse.ArgumentParser(
        prog="transpiler_helper",
        description="Run a script-based compiler and report its diagnostics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Compiler that prints a JSON array of errors
  transpiler_helper site.less site.css --script less/lessc.js

  # Compiler with plain-text errors
  transpiler_helper app.coffee app.js --script coffee/coffee.js \\
      --arguments "-c -o . {source_name}" \\
      --error-pattern "(?P<fileName>[^:]+):(?P<line>\\d+):(?P<column>\\d+): (?P<message>.*)"
""",
    )

    parser.add_argument("source_file", type=Path, help="Source file to compile")
    parser.add_argument("target_file", type=Path, help="File the compiler writes")
    parser.add_argument(
        "--script", type=Path, required=True,
        help="Compiler entry script (relative paths use the resource directory)",
    )
    parser.add_argument("--name", help="Compiler display name used in logs")
    parser.add_argument(
        "--arguments", default="{source} {target}",
        help="Argument template with {source}, {target}, {source_name}, {target_name}",
    )
    parser.add_argument(
        "--error-pattern",
        help="Regex with fileName, message, line and column groups; "
             "JSON diagnostics are expected when omitted",
    )

    settings_group = parser.add_argument_group("Settings")
    settings_group.add_argument("--config", type=Path, help="JSON settings file")
    settings_group.add_argument("--runtime", help="Runtime that executes the script")
    settings_group.add_argument(
        "--resource-dir", type=Path, help="Directory holding compiler scripts"
    )
    settings_group.add_argument("--timeout", type=float, help="Timeout in seconds")
    settings_group.add_argument(
        "--no-register", action="store_true",
        help="Do not register the generated file with the project",
    )

    output_group = parser.add_argument_group("Output")
    output_group.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )
    output_group.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    return parser


def load_settings(args: argparse.Namespace) -> ExecutorSettings:
    """Combine the settings file, environment and command-line overrides."""
    overrides = {}
    if args.runtime:
        overrides["runtime_path"] = args.runtime
    if args.resource_dir:
        overrides["resource_directory"] = args.resource_dir
    if args.timeout:
        overrides["timeout"] = args.timeout
    if args.no_register:
        overrides["register_generated_files"] = False

    if args.config:
        base = ExecutorSettings.load(args.config)
        return base.model_validate({**base.model_dump(), **overrides})
    return ExecutorSettings.from_env(**overrides)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function for command-line usage.
    """
    args = build_parser().parse_args(argv)

    if args.verbose:
        configure_logging("DEBUG")

    try:
        settings = load_settings(args)
        definition = ScriptTranspiler(
            name=args.name or args.script.stem,
            script=args.script,
            arguments=args.arguments,
            error_pattern=args.error_pattern,
        )
    except (InvalidConfigurationError, ValidationError) as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_FAILED

    executor = NodeExecutor(definition, settings=settings)
    logger.debug(f"Executor: {executor.describe()}")

    try:
        result = executor.compile_sync(args.source_file, args.target_file)
    except ProcessStartError as e:
        logger.error(str(e))
        return EXIT_FAILED
    except asyncio.TimeoutError:
        logger.error(
            f"{definition.name}: compilation timed out after {settings.timeout}s"
        )
        return EXIT_FAILED

    if result is None:
        logger.info(f"Skipped {args.source_file}: it belongs to an image asset")
        return EXIT_SKIPPED

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    elif result.is_success:
        print(f"Compiled {args.source_file} -> {args.target_file}")
    else:
        for error in result.errors or []:
            print(str(error))

    return EXIT_SUCCESS if result.is_success else EXIT_FAILED
