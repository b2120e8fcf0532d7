# Path: cdr_monitor/cli/monitor_cli.py
"""
Console Monitor CLI

Renders the monitor state as a rich console dashboard: header with last
refresh and backend health, error panel, stats and status distribution
tables, and the search-filtered record table.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.config_loader import ConfigLoader
from ..core.logger import get_logger, configure_logging
from ..client.api_client import CDRAPIClient
from ..engine.orchestrator import MonitorBackend, MonitorOrchestrator
from ..engine.state import MonitorState

logger = get_logger(__name__, 'cli')

console = Console()

WIDTH: int = 70
HASH_DISPLAY_LENGTH: int = 16
REF_DISPLAY_LENGTH: int = 20


def _cell(value: Optional[str]) -> Text:
    # Text keeps backend values from being parsed as markup
    return Text(value) if value else Text('-', style="dim")


def display_dashboard(state: MonitorState, out: Optional[Console] = None) -> None:
    """
    Print the current state.

    Args:
        state: Monitor state to render
        out: Console to print to (module console if None)
    """
    out = out or console
    stats = state.stats
    last_refresh = state.last_refresh.strftime('%H:%M:%S') if state.last_refresh else 'never'
    health = {True: '[green]healthy[/green]', False: '[red]unreachable[/red]', None: 'unknown'}[state.healthy]

    out.print(f"[bold cyan]{'=' * WIDTH}[/bold cyan]")
    out.print("[bold]CDR MONITOR[/bold]")
    out.print(f"[bold cyan]{'=' * WIDTH}[/bold cyan]")
    out.print(f"  Last updated: {last_refresh}   Backend: {health}"
              f"{'   [dim](refreshing...)[/dim]' if state.loading else ''}")

    if state.error_message:
        out.print(Panel(Text(state.error_message), title="Error", border_style="red"))

    stats_table = Table(title="Stats", show_header=True)
    stats_table.add_column("Metric", style="bold")
    stats_table.add_column("Count", justify="right")
    stats_table.add_row("Total records", str(stats.total))
    stats_table.add_row("Verified", f"[green]{stats.verified}[/green]")
    stats_table.add_row("With IPFS", str(stats.with_external_storage))
    stats_table.add_row("Errors", f"[red]{stats.errors}[/red]")
    out.print(stats_table)

    distribution_table = Table(title="Status Distribution", show_header=True)
    distribution_table.add_column("Status", style="cyan")
    distribution_table.add_column("Count", justify="right")
    for name, count in state.distribution.items():
        distribution_table.add_row(name, str(count))
    out.print(distribution_table)

    if state.search_term.strip():
        out.print(f"  Search: '{escape(state.search_term)}' "
                  f"({len(state.filtered_records)} of {stats.total} records)")

    if not state.filtered_records:
        out.print("  [dim]No records to display[/dim]")
        return

    records_table = Table(title="Call Detail Records", show_header=True, header_style="bold cyan")
    records_table.add_column("#", style="dim", width=4)
    records_table.add_column("Caller")
    records_table.add_column("Callee")
    records_table.add_column("Hash", max_width=HASH_DISPLAY_LENGTH, overflow="ellipsis", no_wrap=True)
    records_table.add_column("IPFS CID", max_width=REF_DISPLAY_LENGTH, overflow="ellipsis", no_wrap=True)
    records_table.add_column("Status")
    records_table.add_column("Verified", justify="center")

    for index, record in enumerate(state.filtered_records, 1):
        verified = {True: '[green]yes[/green]', False: '[red]no[/red]', None: '-'}[record.verified]
        records_table.add_row(
            str(index),
            _cell(record.caller),
            _cell(record.callee),
            _cell(record.hash),
            _cell(record.external_storage_ref),
            _cell(record.status),
            verified
        )

    out.print(records_table)


class MonitorCLI:
    """
    Console presentation layer for the monitor.

    Features:
    - Single-shot mode (--once): one refresh, one render, exit code
    - Continuous mode: render after the first refresh, then every interval
    - Search term applied to the rendered table
    """

    def __init__(self, args: argparse.Namespace, out: Optional[Console] = None):
        self.args = args
        self.console = out or console
        self.config = ConfigLoader(env_file=args.env_file)
        configure_logging(self.config)

    async def run(self) -> int:
        """Run the monitor against the configured backend; returns a process exit code."""
        async with CDRAPIClient(self.config) as client:
            return await self.run_with(client)

    async def run_with(self, client: MonitorBackend) -> int:
        """Run the monitor against an open backend client."""
        interval = self.args.interval if self.args.interval is not None else self.config.get('refresh_interval')
        monitor = MonitorOrchestrator(client, self.config, refresh_interval=interval)
        monitor.set_search_term(self.args.search or '')

        if self.args.once:
            await monitor.refresh()
            await monitor.check_health()
            display_dashboard(monitor.state, self.console)
            return 1 if monitor.state.error_message else 0

        async with monitor:
            await monitor.wait_idle()
            display_dashboard(monitor.state, self.console)
            rendered = 1
            while self.args.cycles is None or rendered < self.args.cycles:
                await asyncio.sleep(interval)
                display_dashboard(monitor.state, self.console)
                rendered += 1

        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CDR Monitor - verified call detail record dashboard")
    parser.add_argument("--once", action="store_true", help="Refresh once, print and exit")
    parser.add_argument("--search", default='', help="Filter records by caller, callee, hash or IPFS CID")
    parser.add_argument("--interval", type=float, default=None, help="Refresh interval in seconds")
    parser.add_argument("--cycles", type=int, default=None, help="Stop after N renders")
    parser.add_argument("--env-file", type=Path, default=None, help="Path to .env file")
    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse and range-check command line options (exits with status 2 on bad input)."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.interval is not None and args.interval <= 0:
        parser.error("--interval must be positive")
    if args.cycles is not None and args.cycles < 1:
        parser.error("--cycles must be at least 1")

    return args


async def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    args = parse_args(argv)
    cli = MonitorCLI(args)

    logger.info(f"CDR monitor CLI started ({'single refresh' if args.once else 'continuous'})")
    exit_code = await cli.run()
    logger.info(f"CDR monitor CLI finished (exit code {exit_code})")
    return exit_code


def run(argv: Optional[list[str]] = None) -> int:
    """Console script entry point."""
    try:
        return asyncio.run(main(argv))
    except KeyboardInterrupt:
        console.print("\n[yellow]Exiting...[/yellow]")
        return 0


if __name__ == '__main__':
    sys.exit(run())
