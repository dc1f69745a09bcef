"""
volscan CLI - Main entry point.

Typer-based command-line interface for the earnings volatility scanner.

Usage:
    volscan analyze AAPL MSFT NVDA
    volscan scan --top 5
    volscan context
"""

import asyncio
import dataclasses
import json
import logging
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from volscan.config.config import Config
from volscan.config.validation import ConfigurationError
from volscan.container import Container
from volscan.domain.enums import MarketRegime
from volscan.domain.types import Opportunity, VolatilityAnalysis
from volscan.utils.logging import setup_logging

app = typer.Typer(
    name="volscan",
    help="Earnings volatility scanner - rank upcoming earnings by options volatility",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()

logger = logging.getLogger(__name__)

REGIME_STYLES = {
    MarketRegime.LOW: "green",
    MarketRegime.NORMAL: "white",
    MarketRegime.ELEVATED: "yellow",
    MarketRegime.HIGH: "red",
    MarketRegime.UNKNOWN: "dim",
}


def _load_config(verbose: bool) -> Config:
    config = Config.from_env()
    setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        log_file=config.logging.log_file,
        console_output=config.logging.console_output,
        log_format=config.logging.format,
    )
    return config


def _quality_style(analysis: VolatilityAnalysis) -> str:
    return "green" if not analysis.is_estimated else "yellow"


def _display_analyses(results: Dict[str, Optional[VolatilityAnalysis]]) -> None:
    table = Table(title="Volatility Analysis")
    table.add_column("Symbol", style="cyan")
    table.add_column("Price", justify="right")
    table.add_column("Chg %", justify="right")
    table.add_column("HV %", justify="right")
    table.add_column("IV % (est)", justify="right")
    table.add_column("Exp. Move", justify="right")
    table.add_column("5W Range", justify="right")
    table.add_column("Score", justify="right", style="bold")
    table.add_column("Data")

    for symbol, analysis in results.items():
        if analysis is None:
            table.add_row(symbol, "-", "-", "-", "-", "-", "-", "-", "[red]invalid[/red]")
            continue
        rng = analysis.five_week_range
        table.add_row(
            analysis.symbol,
            f"${analysis.current_price:,.2f}",
            f"{analysis.change_percent:+.2f}",
            f"{analysis.historical_volatility:.2f}",
            f"{analysis.implied_volatility:.1f}",
            f"±${analysis.expected_move:,.2f}",
            f"{rng.low:,.2f}-{rng.high:,.2f} ({rng.source.value})",
            str(analysis.volatility_score),
            f"[{_quality_style(analysis)}]{analysis.data_quality.value}[/]",
        )
    console.print(table)


def _display_opportunities(opportunities: List[Opportunity]) -> None:
    table = Table(title="Earnings Opportunities")
    table.add_column("#", justify="right")
    table.add_column("Symbol", style="cyan")
    table.add_column("Earnings")
    table.add_column("Days", justify="right")
    table.add_column("HV %", justify="right")
    table.add_column("IV % (est)", justify="right")
    table.add_column("Opt Vol (est)", justify="right")
    table.add_column("Quality", justify="right", style="bold")
    table.add_column("Data")

    for rank, opp in enumerate(opportunities, 1):
        analysis = opp.analysis
        hour = f" {opp.event.hour.value}" if opp.event.hour.value else ""
        table.add_row(
            str(rank),
            opp.symbol,
            f"{opp.event.date.isoformat()}{hour}",
            str(opp.days_to_earnings),
            f"{analysis.historical_volatility:.2f}",
            f"{analysis.implied_volatility:.1f}",
            f"{analysis.options_volume_estimate:,}",
            str(opp.quality_score),
            f"[{_quality_style(analysis)}]{analysis.data_quality.value}[/]",
        )
    console.print(table)


async def _run_analyze(config: Config, symbols: List[str]) -> Dict[str, Optional[VolatilityAnalysis]]:
    async with Container(config) as container:
        return await container.bulk_analyzer.analyze_many(symbols)


async def _run_scan(config: Config) -> List[Opportunity]:
    async with Container(config) as container:
        return await container.scanner.scan()


async def _run_context(config: Config):
    async with Container(config) as container:
        return await container.market_context.get_context()


@app.command()
def analyze(
    symbols: List[str] = typer.Argument(
        ...,
        help="Ticker symbols to analyze (space-separated).",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print analyses as JSON instead of a table.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output.",
    ),
):
    """
    Analyze volatility for specific symbols.

    Symbols are processed sequentially with a delay between requests.
    Invalid symbols are reported and skipped.
    """
    try:
        config = _load_config(verbose)
        if not as_json:
            console.print(Panel(
                f"Analyzing [bold cyan]{', '.join(symbols)}[/bold cyan]",
                title="Volatility Analyzer",
            ))
        results = asyncio.run(_run_analyze(config, symbols))
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)

    if as_json:
        payload = {s: (a.to_dict() if a else None) for s, a in results.items()}
        typer.echo(json.dumps(payload, indent=2))
    else:
        _display_analyses(results)

    if all(analysis is None for analysis in results.values()):
        raise typer.Exit(1)


@app.command()
def scan(
    top: Optional[int] = typer.Option(
        None,
        "--top", "-n",
        help="Number of opportunities to return (default TOP_N).",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print opportunities as JSON instead of a table.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output.",
    ),
):
    """
    Scan the earnings calendar and rank opportunities.

    Fetches upcoming earnings, keeps liquid names inside the scan window,
    analyzes each one and prints the top-ranked opportunities.
    """
    try:
        config = _load_config(verbose)
        if top is not None:
            config = dataclasses.replace(config, scan=dataclasses.replace(config.scan, top_n=top))
        if not as_json:
            console.print(Panel(
                f"Scanning the next [bold cyan]{config.scan.window_days}[/bold cyan] days of earnings",
                title="Earnings Scanner",
            ))
        opportunities = asyncio.run(_run_scan(config))
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)

    if as_json:
        typer.echo(json.dumps([opp.to_dict() for opp in opportunities], indent=2))
        return

    if not opportunities:
        console.print("[yellow]No opportunities found.[/yellow]")
        return
    _display_opportunities(opportunities)


@app.command()
def context(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output.",
    ),
):
    """
    Show the current VIX level and volatility regime.
    """
    try:
        config = _load_config(verbose)
        market = asyncio.run(_run_context(config))
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)

    vix = f"{market.vix:.2f}" if market.vix is not None else "N/A"
    style = REGIME_STYLES[market.regime]
    console.print(Panel(
        f"VIX: [bold]{vix}[/bold]\nRegime: [{style}]{market.regime.value}[/]",
        title="Market Context",
    ))


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
