#!/usr/bin/env python3
"""
YAML-DOCTOR CLI
---------------
Primary interface: scans a directory tree, prints the score and findings,
and writes the JSON / HTML / badge reports. With --json only the JSON
result is printed to stdout and nothing is written to disk.

Author: yaml-doctor Team
Date: 2026-10-19
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from yamldoctor.cli.formatter import ScanFormatter
from yamldoctor.core.engine import YamlDoctorEngine
from yamldoctor.core.models import DEFAULT_IGNORE_PATTERNS, OutputOptions, ScanOptions
from yamldoctor.report.writer import to_json

VERSION = "1.0.0"

# stdout carries results, stderr carries logs and errors
console = Console()
err_console = Console(stderr=True)


class YamlDoctorCLI:
    """
    CLI wrapper that translates flags into ScanOptions/OutputOptions
    and engine calls.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="yaml-doctor",
            description="yaml-doctor - Practical YAML linting and validation",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=(
                "Examples:\n"
                "  yaml-doctor                    # Scan current directory\n"
                "  yaml-doctor --path ./src       # Scan specific directory\n"
                "  yaml-doctor --json             # Output JSON only"
            ),
        )
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("-v", "--version", action="version", version=f"yaml-doctor {VERSION}")
        self.parser.add_argument("--path", default=".", help="Path to scan (default: current directory)")
        self.parser.add_argument("--json", action="store_true", help="Output only JSON to stdout")
        self.parser.add_argument("--output-dir", default=None, help="Where to write reports (default: scan path)")
        self.parser.add_argument("--no-html", action="store_true", help="Skip the HTML report")
        self.parser.add_argument("--no-badge", action="store_true", help="Skip the SVG badge")
        self.parser.add_argument("--no-report-json", action="store_true", help="Skip the JSON report file")
        self.parser.add_argument(
            "--ignore", action="append", default=None, metavar="GLOB",
            help="Ignore glob (repeatable). Replaces the default list: " + ", ".join(DEFAULT_IGNORE_PATTERNS),
        )
        self.parser.add_argument("--no-gitignore", action="store_true", help="Do not apply the root .gitignore")
        self.parser.add_argument("--workers", type=int, default=1, help="Parallel file workers (default: 1)")
        self.parser.add_argument("--verbose", action="store_true", help="Debug logging on stderr")

    def build_scan_options(self, args: argparse.Namespace) -> ScanOptions:
        options = ScanOptions(respect_gitignore=not args.no_gitignore, workers=args.workers)
        if args.ignore is not None:
            options.ignore_patterns = list(args.ignore)
        return options

    def build_output_options(self, args: argparse.Namespace) -> OutputOptions:
        return OutputOptions(
            generate_json=not args.no_report_json,
            generate_html=not args.no_html,
            generate_badge=not args.no_badge,
            output_dir=args.output_dir,
        )

    def run(self, argv: Optional[List[str]] = None) -> int:
        args = self.parser.parse_args(argv)
        configure_logging(args.verbose)

        scan_path = Path(args.path).resolve()
        engine = YamlDoctorEngine(self.build_scan_options(args))

        try:
            if args.json:
                result = engine.scan(str(scan_path))
                print(to_json(result))
                return 0

            console.print(f"[yaml-doctor] Scanning {scan_path} ...", markup=False, highlight=False)
            report = engine.scan_and_report(str(scan_path), self.build_output_options(args))
        except OSError as e:
            err_console.print(f"[bold red]\\[yaml-doctor] Error:[/bold red] {escape(str(e))}")
            return 1

        formatter = ScanFormatter(console)
        formatter.print_findings(report["result"])
        formatter.print_summary(report["result"])
        formatter.print_outputs(report["outputs"])
        return 0


def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point with interrupt handling."""
    try:
        return YamlDoctorCLI().run(argv)
    except KeyboardInterrupt:
        err_console.print("\n[bold red]Terminated by user.[/bold red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
