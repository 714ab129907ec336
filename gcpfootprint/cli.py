"""
gcpfootprint CLI entry point.
"""
import os
import sys
from typing import Dict, Optional

import click
from rich.console import Console
from rich.table import Table

from gcpfootprint import __version__
from gcpfootprint.clients import ClientFactory
from gcpfootprint.collector import Collector
from gcpfootprint.config import load_config
from gcpfootprint.context import RunContext
from gcpfootprint.errors import OutputSinkError, SetupError
from gcpfootprint.models.outcome import OutcomeStatus
from gcpfootprint.models.summary import RunSummary
from gcpfootprint.providers.registry import select_providers
from gcpfootprint.reporters import json_reporter
from gcpfootprint.reporters.text import TextReporter, report_filename
from gcpfootprint.scopes import ScopeEnumerator

CREDENTIALS_ENV = "GOOGLE_APPLICATION_CREDENTIALS"

EXIT_SETUP_ERROR = 2
EXIT_CANCELLED = 130

_BANNER = """\
GCP Footprint Tool
=================="""


def _print_banner(no_color: bool = False) -> None:
    c = Console(stderr=True, no_color=no_color)
    c.print(f"[bold blue]{_BANNER}[/bold blue]")
    c.print(f"  [dim]v{__version__}[/dim]\n")


def _resolve_credentials(credentials: Optional[str], stderr: Console) -> None:
    if credentials is None:
        stderr.print(f"\nNo {CREDENTIALS_ENV} environment variable found.")
        credentials = click.prompt(
            "Enter path to service account key JSON file (or press Enter to use default credentials)",
            default="",
            show_default=False,
            err=True,
        ).strip()
    if credentials:
        os.environ[CREDENTIALS_ENV] = credentials


def _kind_rows(summary: RunSummary) -> Dict[str, Dict[str, int]]:
    rows: Dict[str, Dict[str, int]] = {}
    for s in summary.stats:
        row = rows.setdefault(s.provider, {"scopes": 0, "records": 0, "not_applicable": 0, "failures": 0})
        row["scopes"] += 1
        row["records"] += s.count
        if s.status == OutcomeStatus.NOT_APPLICABLE:
            row["not_applicable"] += 1
        elif s.status == OutcomeStatus.FAILED:
            row["failures"] += 1
    return rows


def _print_summary_table(summary: RunSummary, no_color: bool) -> None:
    """Print a rich summary table to stderr."""
    tbl = Table(title="Footprint Summary", show_header=True, header_style="bold")
    tbl.add_column("Resource Kind", width=22)
    tbl.add_column("Scopes", justify="right")
    tbl.add_column("Records", justify="right")
    tbl.add_column("Not Applicable", justify="right")
    tbl.add_column("Failures", justify="right")

    for kind, row in _kind_rows(summary).items():
        failures = str(row["failures"])
        if row["failures"] and not no_color:
            failures = f"[red]{failures}[/red]"
        tbl.add_row(kind, str(row["scopes"]), str(row["records"]), str(row["not_applicable"]), failures)

    Console(stderr=True, no_color=no_color).print(tbl)


def _print_failures(summary: RunSummary, stderr: Console) -> None:
    failures = summary.failures
    if not failures:
        return
    stderr.print(f"\n[yellow]{len(failures)} provider call(s) failed:[/yellow]")
    for f in failures:
        category = f.category.value if f.category else "unknown"
        stderr.print(f"  - {f.provider} @ {f.scope} [{category}]: {f.error}")


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(__version__)
@click.option("--project", "-p", default=None, help="GCP project ID (prompted when omitted).")
@click.option(
    "--credentials",
    envvar=CREDENTIALS_ENV,
    type=click.Path(dir_okay=False),
    default=None,
    help=f"Service account key JSON file (default: ${CREDENTIALS_ENV}, then prompt).",
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML configuration file (default: ./gcpfootprint.yaml when present).",
)
@click.option("--output-dir", type=click.Path(file_okay=False), default=None, help="Directory for the report.")
@click.option("--workers", type=int, default=None, help="Concurrent provider calls.")
@click.option("--timeout", type=float, default=None, help="Stop issuing calls after this many seconds.")
@click.option(
    "--summary-json",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write the run summary as JSON to this file.",
)
@click.option("--no-color", is_flag=True, default=False, help="Disable rich terminal color output.")
def cli(
    project: Optional[str],
    credentials: Optional[str],
    config_path: Optional[str],
    output_dir: Optional[str],
    workers: Optional[int],
    timeout: Optional[float],
    summary_json: Optional[str],
    no_color: bool,
) -> None:
    """
    Inventory a GCP project's resources into gcp_footprint_<project>.txt.
    """
    _print_banner(no_color)
    stderr = Console(stderr=True, no_color=no_color)

    if project is None:
        project = click.prompt("Enter GCP Project ID", default="", show_default=False, err=True)
    _resolve_credentials(credentials, stderr)

    # 1. Setup: anything failing here aborts before a single API call
    try:
        config = load_config(config_path).with_overrides(
            output_dir=output_dir, max_workers=workers, timeout=timeout,
        )
        ctx = RunContext(project_id=project, console=stderr)
        ctx.clients = ClientFactory(ctx.project_id)
        providers = select_providers(config.disabled_providers)
        enumerator = ScopeEnumerator(config.regions, config.zone_suffixes)
        try:
            os.makedirs(config.output_dir, exist_ok=True)
        except OSError as exc:
            raise OutputSinkError(f"cannot create output directory {config.output_dir}: {exc}") from exc
        report_path = os.path.join(config.output_dir, report_filename(ctx.project_id))
        reporter = TextReporter.open(report_path)
    except SetupError as exc:
        stderr.print(f"[red]Error:[/red] {exc}")
        sys.exit(EXIT_SETUP_ERROR)

    # 2. Collect
    collector = Collector(
        providers, enumerator, reporter,
        max_workers=config.max_workers,
        grace_period=config.grace_period,
    )
    if config.timeout:
        ctx.start_deadline(config.timeout)
    try:
        summary = collector.run(ctx)
    finally:
        ctx.stop_deadline()

    # 3. Summary
    _print_summary_table(summary, no_color)
    _print_failures(summary, stderr)

    if summary_json:
        try:
            with open(summary_json, "w", encoding="utf-8", newline="\n") as fh:
                fh.write(json_reporter.build_summary(summary, ctx))
        except OSError as exc:
            stderr.print(f"[red]Error:[/red] cannot write summary to {summary_json}: {exc}")
        else:
            stderr.print(f"Summary written to [bold]{summary_json}[/bold]")

    stderr.print(f"\n\nGCP footprint saved to: [bold]{report_path}[/bold]")

    if summary.abandoned:
        stderr.print(f"[yellow]{summary.abandoned} provider call(s) abandoned after the grace period.[/yellow]")
    if summary.cancelled:
        stderr.print("[yellow]Run cancelled; the report is incomplete.[/yellow]")
        sys.exit(EXIT_CANCELLED)
    sys.exit(0)


def main():
    cli()


if __name__ == "__main__":
    main()
