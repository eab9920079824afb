# SPDX-License-Identifier: Apache-2.0
"""
Code Translator - CLI Tool

Translates a source file into another programming language using the
remote translation service.

Usage:
    translate-code <file> --target <language> [options]

Examples:
    translate-code app.py -t javascript               # Print translation
    translate-code Main.java -t kotlin -o Main.kt     # Write to file
    translate-code - -s python -t go < script.py      # Read from stdin
    translate-code app.py --list-targets              # Show valid targets
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import NoReturn

from dotenv import load_dotenv

from code_translator.core.languages import (
    LanguageRegistry,
    display_name,
    language_from_filename,
)
from code_translator.core.models import ErrorKind, TranslationFailure
from code_translator.pipeline.continuation import (
    HealthContinuation,
    HealthDecision,
    HealthReport,
    fixed_decision,
)
from code_translator.pipeline.diagnostics import (
    collect_network_diagnostics,
    format_diagnostics,
)
from code_translator.pipeline.orchestrator import (
    OrchestratorConfig,
    TranslationOrchestrator,
)
from code_translator.translators.base import ConfigurationError

logger = logging.getLogger(__name__)

SUPPORT_EMAIL = "info@unelmaplatforms.com"

EXIT_INTERRUPTED = 130


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="translate-code",
        description="Code Translation Tool - Translates source code between languages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s app.py -t javascript               # Python to JavaScript
  %(prog)s Main.java -t kotlin -o Main.kt     # Write result to a file
  %(prog)s - -s python -t go < script.py      # Read code from stdin
  %(prog)s app.py --list-targets              # List supported targets

Environment Variables:
  CODE_TRANSLATOR_ENDPOINT           Translate endpoint URL
  CODE_TRANSLATOR_TIMEOUT            Per-attempt timeout in seconds
  CODE_TRANSLATOR_MAX_RETRIES        Retries after the first attempt
  CODE_TRANSLATOR_PRESERVE_COMMENTS  true/false
""",
    )

    parser.add_argument(
        "input",
        help="Path to the source file, or '-' to read from stdin",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file path (default: print to stdout)",
    )

    # Language options
    parser.add_argument(
        "-s",
        "--source",
        help="Source language (default: detected from the file name)",
    )
    parser.add_argument(
        "-t",
        "--target",
        help="Target language (required unless --list-targets)",
    )
    parser.add_argument(
        "--list-targets",
        action="store_true",
        help="List supported target languages for the source and exit",
    )

    # Service options
    service_group = parser.add_argument_group("Service options")
    service_group.add_argument(
        "--endpoint",
        help="Translate endpoint URL (or set CODE_TRANSLATOR_ENDPOINT)",
    )
    service_group.add_argument(
        "--timeout",
        type=float,
        help="Per-attempt timeout in seconds (default: 10)",
    )
    service_group.add_argument(
        "--max-retries",
        type=int,
        help="Retries after the first attempt (default: 1)",
    )
    service_group.add_argument(
        "--no-preserve-comments",
        action="store_true",
        help="Allow the service to drop comments",
    )
    service_group.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Proceed without asking when the service health check fails",
    )

    parser.add_argument(
        "--diagnostics",
        action="store_true",
        help="Print network diagnostics and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    return parser.parse_args(argv)


def resolve_source_language(args: argparse.Namespace) -> str | None:
    """Source language from --source, else from the input file name."""
    if args.source:
        return str(args.source)
    if args.input == "-":
        return None
    return language_from_filename(args.input)


def read_source(args: argparse.Namespace) -> str:
    if args.input == "-":
        return sys.stdin.read()
    return Path(args.input).read_text(encoding="utf-8")


def describe_failure(failure: TranslationFailure) -> str:
    """Message shown to the user for a failed translation."""
    message = failure.detail
    if failure.kind is ErrorKind.UNSUPPORTED:
        message += (
            "\n\nIf you need this translation, please contact us at "
            f"{SUPPORT_EMAIL} to request support for this language pair."
        )
    return message


def prompt_continuation() -> HealthContinuation:
    """Ask on the terminal whether to continue past a failed health check."""

    async def ask(report: HealthReport) -> HealthDecision:
        print(report.describe(), file=sys.stderr)
        try:
            answer = await asyncio.to_thread(
                input, "Try anyway? [y]es / [c]heck again / [N]o: "
            )
        except EOFError:
            return HealthDecision.ABORT
        choice = answer.strip().lower()
        if choice in ("y", "yes"):
            return HealthDecision.PROCEED
        if choice in ("c", "check", "check again"):
            return HealthDecision.RECHECK
        return HealthDecision.ABORT

    return ask


def select_continuation(args: argparse.Namespace) -> HealthContinuation:
    """Health-check answer source: --yes, the terminal, or abort.

    Stdin that carries the source code or is not a terminal cannot be
    prompted, so a failed health check aborts unless --yes was given.
    """
    if args.yes:
        return fixed_decision(HealthDecision.PROCEED)
    if args.input == "-" or not sys.stdin.isatty():
        return fixed_decision(HealthDecision.ABORT)
    return prompt_continuation()


def print_targets(source: str, registry: LanguageRegistry) -> int:
    targets = sorted(registry.targets_for(source))
    if not targets:
        print(
            f"No supported target languages for {source}.\n\n"
            "If you need support for this language, please contact us at "
            f"{SUPPORT_EMAIL}",
            file=sys.stderr,
        )
        return 1

    print(f"Supported targets for {display_name(source)}:")
    for tag in targets:
        print(f"  {tag:<12} {display_name(tag)}")
    return 0


async def run(args: argparse.Namespace) -> int:
    """Execute one translation.

    Args:
        args: Command line arguments.

    Returns:
        Exit code (0: success, 1: failure).
    """
    if args.diagnostics:
        print(format_diagnostics(collect_network_diagnostics()))
        return 0

    source_lang = resolve_source_language(args)
    if source_lang is None:
        print(
            "Error: Could not determine source language from file name. "
            "Use --source.",
            file=sys.stderr,
        )
        return 1

    registry = LanguageRegistry()
    if args.list_targets:
        return print_targets(source_lang, registry)

    if not args.target:
        print("Error: --target is required", file=sys.stderr)
        return 1

    try:
        config = OrchestratorConfig.from_env(
            endpoint=args.endpoint,
            timeout=args.timeout,
            max_retries=args.max_retries,
            preserve_comments=False if args.no_preserve_comments else None,
        )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        code = read_source(args)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Cannot read input: {e}", file=sys.stderr)
        return 1

    continuation = select_continuation(args)

    print(
        f"Translating from {display_name(source_lang)} to {display_name(args.target)}...",
        file=sys.stderr,
    )
    async with TranslationOrchestrator(
        config, registry=registry, continuation=continuation
    ) as orchestrator:
        outcome = await orchestrator.translate_code(code, source_lang, args.target)

    if isinstance(outcome, TranslationFailure):
        print(f"Error: {describe_failure(outcome)}", file=sys.stderr)
        return 1

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(outcome.translated_text + "\n", encoding="utf-8")
        print(f"Complete: {args.output}", file=sys.stderr)
    else:
        print(outcome.translated_text)
    return 0


def main() -> NoReturn:
    """Main entry point."""
    load_dotenv()
    args = parse_args()

    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    try:
        exit_code = asyncio.run(run(args))
    except KeyboardInterrupt:
        print("Translation cancelled", file=sys.stderr)
        exit_code = EXIT_INTERRUPTED
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
