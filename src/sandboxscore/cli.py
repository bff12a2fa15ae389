"""SandboxScore CLI — Typer application with grade, gate, and init commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from sandboxscore import __version__
from sandboxscore.scoring.gate import EXIT_PASS, EXIT_USAGE

app = typer.Typer(
    name="sandboxscore",
    help="Grade what a sandboxed coding agent can reach on this machine.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(message)s", force=True)


def _usage_error(label: str, exc: Exception) -> typer.Exit:
    console.print(f"[bold red]{label}:[/bold red] {exc}")
    return typer.Exit(code=EXIT_USAGE)


# ── grade ─────────────────────────────────────────────────────────────────────


@app.command()
def grade(
    findings_file: str = typer.Argument(..., help="YAML/JSON findings document, or - for stdin"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="personal | professional | sensitive"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: human | json | raw"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    fail_on: Optional[str] = typer.Option(
        None, "--fail-on", help="Exit 1 when the condition holds: score>=N | exposures>=N | grade>=X",
    ),
    categories: Optional[str] = typer.Option(None, "--categories", help="Only grade these categories (comma-separated)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .sandboxscore.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """Grade recorded scan findings and optionally gate on the result."""
    from sandboxscore.config.loader import ConfigError, load_config
    from sandboxscore.config.schema import OUTPUT_FORMATS
    from sandboxscore.findings.loader import FindingsFileError, load_findings, parse_categories
    from sandboxscore.findings.models import FindingError
    from sandboxscore.findings.store import FindingStore
    from sandboxscore.output import json_report, raw, terminal
    from sandboxscore.scoring.gate import GateError, evaluate, exit_code_for, parse_gate
    from sandboxscore.scoring.grading import compute_report
    from sandboxscore.scoring.policy import Profile

    _configure_logging(verbose, debug)

    # --- Load config ---
    try:
        cfg = load_config(Path.cwd(), config, profile_override=profile)
    except ConfigError as exc:
        raise _usage_error("Config error", exc) from exc

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=EXIT_USAGE)
        cfg.output.format = format  # type: ignore[assignment]
    if fail_on is not None:
        cfg.scan.fail_on = fail_on
    if categories:
        cfg.scan.categories = parse_categories(categories) or []

    # --- Parse the gate before grading so a broken gate never passes ---
    gate_expr = None
    if cfg.scan.fail_on is not None:
        try:
            gate_expr = parse_gate(cfg.scan.fail_on)
        except GateError as exc:
            raise _usage_error("Invalid --fail-on", exc) from exc

    active = Profile.parse(cfg.scan.profile)
    if verbose or debug:
        console.print(f"[dim]Profile: {active.value}[/dim]")

    # --- Record findings ---
    store = FindingStore(active)
    try:
        load_findings(findings_file, store, categories=cfg.scan.categories or None)
    except (FindingsFileError, FindingError) as exc:
        raise _usage_error("Findings error", exc) from exc

    report = compute_report(store, active)

    # --- Output ---
    fmt = cfg.output.format
    report_text: Optional[str] = None
    if fmt == "json":
        report_text = json_report.render(store, report)
    elif fmt == "raw":
        report_text = raw.render(store)

    if output:
        if report_text is not None:
            Path(output).write_text(report_text + "\n", encoding="utf-8")
        else:
            with open(output, "w", encoding="utf-8") as fh:
                terminal.render(
                    store, report,
                    console=Console(file=fh, width=100),
                    show_summary=cfg.output.show_summary,
                    show_remediation=cfg.output.show_remediation,
                )
        console.print(f"Output written to: {output}")
    elif report_text is not None:
        if report_text:
            print(report_text)
    else:
        terminal.render(
            store, report,
            show_summary=cfg.output.show_summary,
            show_remediation=cfg.output.show_remediation,
        )

    # --- Exit code ---
    if gate_expr is not None:
        failed = evaluate(gate_expr, report)
        if failed:
            console.print(f"[bold red]Policy check failed:[/bold red] {gate_expr}")
        raise typer.Exit(code=exit_code_for(failed))

    raise typer.Exit(code=EXIT_PASS)


# ── gate ──────────────────────────────────────────────────────────────────────


@app.command()
def gate(
    expression: str = typer.Argument(..., help="Failure condition, e.g. score>=50"),
    report_file: str = typer.Argument(..., help="JSON report written by 'sandboxscore grade -f json'"),
) -> None:
    """Evaluate a gate expression against a saved JSON report."""
    import json

    from sandboxscore.scoring.gate import GateError, GateMetrics, evaluate, exit_code_for, parse_gate

    try:
        parsed = parse_gate(expression)
    except GateError as exc:
        raise _usage_error("Invalid gate", exc) from exc

    try:
        data = json.loads(Path(report_file).read_text(encoding="utf-8"))
        metrics = GateMetrics.from_json(data)
    except (OSError, ValueError) as exc:
        raise _usage_error("Report error", exc) from exc

    failed = evaluate(parsed, metrics)
    if failed:
        console.print(f"[bold red]Policy check failed:[/bold red] {parsed}")
    else:
        console.print(f"[green]✓[/green] Policy check passed: {parsed}")
    raise typer.Exit(code=exit_code_for(failed))


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .sandboxscore.toml in the current directory."""
    from sandboxscore.config.defaults import CONFIG_FILENAME, DEFAULT_TOML

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"sandboxscore {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """SandboxScore — grade what a sandboxed coding agent can reach."""
