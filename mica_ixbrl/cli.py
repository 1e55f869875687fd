# Path: mica_ixbrl/cli.py
"""
MiCA iXBRL CLI
==============

Command-line interface for validating whitepaper records and generating
their inline XBRL documents.

Exit codes: 0 success, 1 validation errors or failed document check,
2 input error.
"""

import asyncio
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.logging import RichHandler

from .constants import TOKEN_TYPES, SEVERITY_ERROR
from .core.config_loader import ConfigLoader
from .core.logger import setup_ipo_logging
from .engine.document_generator import generate_document
from .engine.orchestrator import (
    get_validation_requirements,
    quick_validate,
    validate_whitepaper,
    validate_whitepaper_async,
)
from .errors import MicaEngineError
from .loaders.record_reader import read_record
from .models.validation import ValidationIssue, ValidationOptions, ValidationReport
from .output.document_checker import DocumentCheckResult, check_document
from .output.report_writer import ReportWriter, build_report_payload


EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INPUT_ERROR = 2

MESSAGE_WIDTH = 100

console = Console()
error_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """IPO logging with a rich console handler on stderr."""
    config = ConfigLoader()
    level = 'DEBUG' if verbose else config.get('log_level')
    setup_ipo_logging(
        log_dir=config.get('log_dir'),
        log_level=level,
        console_output=True,
        console_handler=RichHandler(rich_tracebacks=True, console=error_console, show_path=False),
    )


def _truncate(message: str) -> str:
    return message[:MESSAGE_WIDTH] + "..." if len(message) > MESSAGE_WIDTH else message


def display_issues(title: str, issues: list[ValidationIssue], style: str) -> None:
    """Display issues as a rich table."""
    if not issues:
        return
    table = Table(title=title, show_header=True, header_style=f"bold {style}")
    table.add_column("#", style="dim", width=4)
    table.add_column("Rule", style=style)
    table.add_column("Field", style="cyan")
    table.add_column("Message", style="white")
    for i, issue in enumerate(issues, 1):
        table.add_row(str(i), issue.rule_id, issue.field_path or "-", _truncate(issue.message))
    console.print(table)


def display_report(report: ValidationReport) -> None:
    """Display a full validation report with rich formatting."""
    status_color = "green" if report.valid else "red"
    status_symbol = "✓" if report.valid else "✗"
    registry = f"\nRegistry: {report.registry_status}" if report.registry_status else ""

    console.print(Panel(
        f"[{status_color} bold]{status_symbol} {'VALID' if report.valid else 'INVALID'}[/{status_color} bold]\n"
        f"Token type: {report.token_type}\n"
        f"Errors: {len(report.errors)} | Warnings: {len(report.warnings)}\n"
        f"Assertions passed: {report.passed_assertions}/{report.total_assertions}"
        f"{registry}",
        title="Validation Result",
        border_style=status_color,
    ))

    counts = Table(title="Assertions by Category", show_header=True)
    counts.add_column("Category", style="cyan")
    counts.add_column("Total", justify="right")
    counts.add_column("Passed", justify="right", style="green")
    counts.add_column("Failed", justify="right", style="red")
    for category, count in report.assertion_counts.items():
        counts.add_row(category, str(count.total), str(count.passed), str(count.failed))
    console.print(counts)

    display_issues("Errors", report.errors, "red")
    display_issues("Warnings", report.warnings, "yellow")


def display_document_check(result: DocumentCheckResult) -> None:
    status_color = "green" if result.is_valid else "red"
    console.print(Panel(
        f"[{status_color} bold]{result.status.value.upper()}[/{status_color} bold]\n"
        f"Facts: {result.fact_count} | Contexts: {result.context_count} | Units: {result.unit_count}",
        title="Document Check",
        border_style=status_color,
    ))
    for issue in result.issues:
        console.print(f"[red]{issue}[/red]")


# ==============================================================================
# COMMANDS
# ==============================================================================

def command_validate(args: argparse.Namespace) -> int:
    record = read_record(args.record)

    if args.quick:
        result = quick_validate(record, args.token_type)
        if args.json:
            sys.stdout.write(json.dumps(result.to_dict(), indent=2) + "\n")
        else:
            display_issues("Errors", result.errors, "red")
            symbol = "[green]✓ No errors[/green]" if result.valid else f"[red]✗ {result.error_count} errors[/red]"
            console.print(symbol)
        return EXIT_OK if result.valid else EXIT_FAILED

    options = ValidationOptions(
        check_registry=args.check_registry,
        skip_rules=frozenset(args.skip_rule or []),
    )
    if options.check_registry:
        report = asyncio.run(validate_whitepaper_async(record, args.token_type, options))
    else:
        report = validate_whitepaper(record, args.token_type, options)

    if args.output:
        ReportWriter().write_report(report, args.output)

    if args.json:
        sys.stdout.write(json.dumps(build_report_payload(report), indent=2, ensure_ascii=False) + "\n")
    else:
        display_report(report)

    return EXIT_OK if report.valid else EXIT_FAILED


def command_generate(args: argparse.Namespace) -> int:
    record = read_record(args.record)
    xhtml = generate_document(record, token_type=args.token_type)

    output_path = ReportWriter().write_document(xhtml, args.output)
    console.print(f"[green]✓[/green] Wrote {output_path}")

    if args.check:
        result = check_document(xhtml)
        display_document_check(result)
        if not result.is_valid:
            return EXIT_FAILED
    return EXIT_OK


def command_requirements(args: argparse.Namespace) -> int:
    requirements = get_validation_requirements(args.token_type)

    table = Table(title=f"Validation Requirements: {requirements['token_type']}", show_header=True)
    table.add_column("Rule", style="cyan")
    table.add_column("Severity")
    table.add_column("Field", style="dim")
    table.add_column("Description", style="white")

    for entry in requirements['existence'] + requirements['value']:
        severity_style = "red" if entry['severity'] == SEVERITY_ERROR else "yellow"
        table.add_row(
            entry['id'],
            f"[{severity_style}]{entry['severity']}[/{severity_style}]",
            entry['field_path'],
            entry['description'],
        )
    for entry in requirements['lei']:
        table.add_row(entry['id'], "-", "lei", entry['description'])
    console.print(table)

    existence = requirements['summary']['existence']
    value = requirements['summary']['value']
    console.print(
        f"Existence: {existence['total']} ({existence['required']} required, "
        f"{existence['recommended']} recommended) | Value: {value['total']}"
    )
    return EXIT_OK


# ==============================================================================
# ENTRY POINT
# ==============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='mica-ixbrl',
        description="MiCA white paper validation and inline XBRL generation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a record
  mica-ixbrl validate whitepaper.json

  # Validate as ART and confirm the offeror LEI with GLEIF
  mica-ixbrl validate whitepaper.json --token-type ART --check-registry

  # Generate the iXBRL document and check its structure
  mica-ixbrl generate whitepaper.json -o whitepaper.xhtml --check

  # List the assertions for e-money tokens
  mica-ixbrl requirements --token-type EMT
        """
    )
    parser.add_argument('--version', action='version', version='mica-ixbrl 1.0.0')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    validate_parser = subparsers.add_parser('validate', help='Validate a whitepaper record')
    validate_parser.add_argument('record', type=Path, help='Path to record JSON')
    validate_parser.add_argument('-t', '--token-type', choices=TOKEN_TYPES, help='Token type (default: from record)')
    validate_parser.add_argument('--quick', action='store_true', help='Existence and LEI checks only')
    validate_parser.add_argument('--check-registry', action='store_true', help='Look up the offeror LEI in GLEIF')
    validate_parser.add_argument('--skip-rule', action='append', metavar='ID', help='Rule ID to skip (repeatable)')
    validate_parser.add_argument('--json', action='store_true', help='Print the report as JSON')
    validate_parser.add_argument('-o', '--output', type=Path, help='Also write the JSON report to this file')

    generate_parser = subparsers.add_parser('generate', help='Generate the iXBRL document')
    generate_parser.add_argument('record', type=Path, help='Path to record JSON')
    generate_parser.add_argument('-t', '--token-type', choices=TOKEN_TYPES, help='Token type (default: from record)')
    generate_parser.add_argument('-o', '--output', type=Path, default=Path('whitepaper.xhtml'), help='Output file')
    generate_parser.add_argument('--check', action='store_true', help='Run the structural self-check')

    requirements_parser = subparsers.add_parser('requirements', help='List assertions for a token type')
    requirements_parser.add_argument('-t', '--token-type', choices=TOKEN_TYPES, required=True, help='Token type')

    return parser


COMMANDS = {
    'validate': command_validate,
    'generate': command_generate,
    'requirements': command_requirements,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_OK

    setup_logging(args.verbose)

    try:
        return COMMANDS[args.command](args)

    except MicaEngineError as e:
        error_console.print(f"[red bold]Input error:[/red bold] {e}")
        return EXIT_INPUT_ERROR

    except KeyboardInterrupt:
        error_console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130

    except Exception as e:
        error_console.print(f"\n[red bold]Error:[/red bold] {e}")
        if args.verbose:
            error_console.print_exception()
        logging.getLogger('process.cli').exception("Unhandled error")
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
