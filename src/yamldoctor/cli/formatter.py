# src/yamldoctor/cli/formatter.py
from typing import Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from yamldoctor.core.models import ScanResult, Severity

SEVERITY_STYLES = {
    Severity.ERROR: ("bold red", "❌"),
    Severity.WARN: ("yellow", "⚠️"),
    Severity.INFO: ("cyan", "ℹ️"),
}


class ScanFormatter:
    """
    Terminal rendering of a finished scan: the score line, a per-file
    findings table and the list of generated report files.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def score_line(self, result: ScanResult) -> str:
        totals = result.totals
        return (
            f"[yaml-doctor] Score: {result.score}/100 | "
            f"errors={totals.get(Severity.ERROR, 0)} "
            f"warnings={totals.get(Severity.WARN, 0)} "
            f"info={totals.get(Severity.INFO, 0)}"
        )

    def print_summary(self, result: ScanResult):
        color = "green" if result.score >= 90 else "yellow" if result.score >= 75 else "red"
        self.console.print(Panel.fit(
            f"[bold {color}]{result.score}/100[/bold {color}]\n"
            f"Files: {len(result.files)}",
            title="[bold white]yaml-doctor score[/bold white]",
            border_style=color,
        ))
        # markup off: the line contains literal brackets
        self.console.print(self.score_line(result), markup=False, highlight=False)

    def print_findings(self, result: ScanResult):
        """One row per finding; clean files get a single ✅ row."""
        table = Table(title="yaml-doctor Findings", show_lines=False, header_style="bold magenta")
        table.add_column("File Path", style="cyan")
        table.add_column("Type", style="white")
        table.add_column("Severity", justify="center")
        table.add_column("Line", justify="right")
        table.add_column("Code", style="dim")
        table.add_column("Message")

        for f in result.files:
            if not f.issues:
                table.add_row(Text(f.path), f.type.value, "✅", "", "", "[green]No issues[/green]")
                continue
            for issue in f.issues:
                style, icon = SEVERITY_STYLES[issue.severity]
                table.add_row(
                    Text(f.path),
                    f.type.value,
                    f"[{style}]{icon} {issue.severity.value.upper()}[/{style}]",
                    str(issue.line) if issue.line is not None else "",
                    Text(issue.code),
                    Text(issue.message),
                )

        self.console.print(table)

    def print_outputs(self, outputs: Dict[str, str]):
        if not outputs:
            return
        self.console.print("[yaml-doctor] Generated:", markup=False, highlight=False)
        for path in outputs.values():
            self.console.print(f"  - {path}", markup=False, highlight=False)
