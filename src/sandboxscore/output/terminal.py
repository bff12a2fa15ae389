"""Rich terminal reporter — grade banner, category grades, findings table."""

from __future__ import annotations

from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from sandboxscore import METHODOLOGY_VERSION, __version__
from sandboxscore.findings.models import Finding, Status
from sandboxscore.findings.remediation import remediation_for
from sandboxscore.scoring.grading import GradeReport
from sandboxscore.scoring.policy import effective_severity
from sandboxscore.scoring.projector import cross_profile

_GRADE_STYLE = {
    "A+": "bold green",
    "A": "bold green",
    "B": "bold yellow",
    "C": "bold dark_orange",
    "D": "bold red",
    "F": "bold white on red",
}

_SEVERITY_TAG = {
    "critical": ("CRIT", "bold white on red"),
    "high": ("HIGH", "bold white on dark_orange"),
    "medium": ("MED", "bold black on yellow"),
    "low": ("LOW", "bold black on bright_cyan"),
    "ignore": ("IGN", "dim"),
}

_CATEGORY_LABELS = {
    "credentials": "Credentials",
    "personal_data": "Personal Data",
    "system_visibility": "System Visibility",
    "persistence": "Persistence",
    "network": "Network",
    "intelligence": "Intelligence",
}


def _grade_text(grade: str) -> Text:
    return Text(grade, style=_GRADE_STYLE.get(grade, "bold"))


def _status_tag(finding: Finding, report: GradeReport) -> Text:
    if finding.status is Status.EXPOSED:
        sev = effective_severity(finding.test_name, finding.base_severity, report.profile)
        label, style = _SEVERITY_TAG.get(sev.value, ("----", "dim"))
        return Text(f" {label} ", style=style)
    if finding.status is Status.BLOCKED:
        return Text(" SAFE ", style="bold black on green")
    return Text(" ---- ", style="dim")


def render(
    findings: Iterable[Finding],
    report: GradeReport,
    *,
    console: Optional[Console] = None,
    show_summary: bool = True,
    show_remediation: bool = True,
) -> None:
    """Print a graded scan using Rich."""
    console = console or Console()
    snapshot = tuple(findings)

    console.print("[bold]SANDBOXSCORE: Coding Agents[/bold]")
    console.print(
        f"[dim]Scanner: v{__version__} | Methodology: v{METHODOLOGY_VERSION} | "
        f"Profile: {report.profile.value}[/dim]"
    )
    console.print()
    console.print(Text("GRADE: ", style="bold") + _grade_text(report.final_grade))
    console.print(f"[dim]Points lost:[/dim] {report.total_points}")
    console.print()

    categories = Table(title="Categories", title_style="bold", border_style="dim", show_header=False)
    categories.add_column("Category", min_width=20)
    categories.add_column("Grade", justify="center")
    for cat, grade in report.category_grades().items():
        categories.add_row(_CATEGORY_LABELS.get(cat, cat), _grade_text(grade))
    console.print(categories)

    if report.applied_caps:
        console.print(
            f"[yellow]Grade capped due to:[/yellow] {' '.join(report.applied_caps)}"
        )
        console.print()

    if not snapshot:
        console.print("[dim]Findings: (no findings)[/dim]")
    else:
        table = Table(title="Findings", title_style="bold", border_style="dim")
        table.add_column("Severity", justify="center", width=8)
        table.add_column("Test", style="cyan", min_width=20)
        table.add_column("Status")
        table.add_column("Value", style="green")
        for f in snapshot:
            table.add_row(
                _status_tag(f, report),
                f.test_name,
                f.status.value,
                f.value if f.value and f.value != "0" else "",
            )
        console.print(table)

    if show_remediation:
        _print_remediation(console, snapshot, report)

    console.print()
    console.print("[bold]Against other profiles:[/bold]")
    for profile, grade in cross_profile(snapshot).items():
        console.print(Text(f"  {profile + ':':<15} ") + _grade_text(grade))

    if show_summary:
        _print_summary(console, report)


def _print_remediation(console: Console, findings: Iterable[Finding], report: GradeReport) -> None:
    hints = {}
    for f in findings:
        if f.status is not Status.EXPOSED or f.test_name in hints:
            continue
        sev = effective_severity(f.test_name, f.base_severity, report.profile)
        if sev.value in ("info", "ignore"):
            continue
        hint = remediation_for(f.test_name)
        if hint:
            hints[f.test_name] = hint
    if not hints:
        return
    console.print()
    console.print("[bold]Remediation:[/bold]")
    for test_name, hint in hints.items():
        console.print(f"  [cyan]{test_name}[/cyan]: {hint}")


def _print_summary(console: Console, report: GradeReport) -> None:
    console.print()
    console.print(
        f"Summary: {report.summary.get('total', 0)} tests | "
        f"{report.summary.get('protected', 0)} protected | "
        f"{report.summary.get('exposed', 0)} exposed"
    )
