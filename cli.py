#!/usr/bin/env python3
import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from stockdash import (
    AccountSnapshot,
    PerformancePoint,
    Portfolio,
    PricePoint,
    ReturnSummary,
)
from stockdash.analytics import summarize
from stockdash.loaders import read_price_points
from stockdash.normalize import parse_date
from stockdash.sync import PriceSyncResult, SeriesFetchResult, SeriesFetchStatus, SyncStatus

logger = logging.getLogger(__name__)
console = Console()

app = typer.Typer(add_completion=False, help="Stockdash portfolio valuation CLI")

STATUS_STYLES: dict[SyncStatus, str] = {
    SyncStatus.STORED: "green",
    SyncStatus.ALREADY_UP_TO_DATE: "green",
    SyncStatus.NO_NEW_ROWS: "dim",
    SyncStatus.NO_PURCHASE_HISTORY: "yellow",
    SyncStatus.RATE_LIMITED: "red",
    SyncStatus.NO_DATA: "red",
    SyncStatus.UNKNOWN: "red",
}


def _money(value: Decimal) -> str:
    return f"${value:,.2f}"


def _percent(value: Optional[Decimal]) -> Text:
    if value is None:
        return Text("n/a", style="dim")
    return Text(f"{float(value):+.2%}", style="green" if value >= 0 else "red")


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(code=1)


def snapshot_table(snapshot: AccountSnapshot) -> Table:
    """Build a Rich table of an account's open positions."""
    t = Table(
        title=f"{snapshot.account_name} · {snapshot.as_of_date.isoformat()}",
        box=box.ROUNDED,
        title_style="bold white",
    )
    t.add_column("Symbol", style="cyan")
    t.add_column("Shares", justify="right")
    t.add_column("Price", justify="right")
    t.add_column("Value", justify="right", style="yellow")

    for p in snapshot.positions:
        t.add_row(p.symbol, f"{p.quantity:,}", _money(p.current_price), _money(p.market_value))
    if not snapshot.positions:
        t.add_row("[dim]no open positions[/dim]", "", "", "")

    t.add_section()
    t.add_row("", "", "Total", f"[bold]{_money(snapshot.total_value)}[/bold]")
    return t


def performance_table(
    points: list[PerformancePoint], title: str, by_stock: bool = False
) -> Table:
    """Build a Rich table with one row per valuation date."""
    t = Table(title=title, box=box.ROUNDED, title_style="bold white")
    t.add_column("Date", style="cyan")
    t.add_column("Total", justify="right", style="yellow")
    t.add_column("Change", justify="right")

    symbols = sorted({s.symbol for p in points for s in p.stocks}) if by_stock else []
    for symbol in symbols:
        t.add_column(symbol, justify="right")

    previous: Optional[Decimal] = None
    for p in points:
        values = {s.symbol: s.market_value for s in p.stocks}
        change = Text("") if previous is None else Text(
            f"{p.total_value - previous:+,.2f}",
            style="green" if p.total_value >= previous else "red",
        )
        t.add_row(
            p.date.isoformat(),
            _money(p.total_value),
            change,
            *(_money(values[s]) if s in values else "[dim]-[/dim]" for s in symbols),
        )
        previous = p.total_value
    return t


def returns_panel(summary: ReturnSummary) -> Panel:
    """Panel with net gain/loss, total return and CAGR over the window."""
    if summary.start_date is None:
        return Panel("[dim]No valuation dates in range.[/dim]", title="Returns", box=box.ROUNDED)

    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="dim")
    grid.add_column(justify="right")
    grid.add_row("Window", f"{summary.start_date.isoformat()} → {summary.end_date.isoformat()}")
    grid.add_row("Start value", _money(summary.start_value))
    grid.add_row("End value", _money(summary.end_value))
    grid.add_row(
        "Net gain/loss",
        Text(
            f"{summary.net_gain_loss:+,.2f}",
            style="green" if summary.net_gain_loss >= 0 else "red",
        ),
    )
    grid.add_row("Total return", _percent(summary.total_return))
    grid.add_row("CAGR", _percent(summary.cagr))
    return Panel(grid, title="Returns", box=box.ROUNDED)


def history_table(symbol: str, points: list[PricePoint]) -> Table:
    t = Table(title=f"{symbol} closes", box=box.ROUNDED, title_style="bold white")
    t.add_column("Date", style="cyan")
    t.add_column("Close", justify="right")
    for p in points:
        t.add_row(p.date.isoformat(), _money(p.close_price))
    return t


def sync_table(result: PriceSyncResult) -> Table:
    t = Table(title="Price Sync", box=box.ROUNDED, title_style="bold white")
    t.add_column("Symbol", style="cyan")
    t.add_column("Status")
    t.add_column("Stored", justify="right")
    for symbol, status in result.status_by_symbol.items():
        t.add_row(
            symbol,
            Text(status.value, style=STATUS_STYLES[status]),
            str(result.stored_by_symbol.get(symbol, 0)),
        )
    t.add_section()
    t.add_row(
        "",
        f"[bold]{result.symbols_with_purchases}/{result.symbols_requested} with purchases[/bold]",
        f"[bold]{result.prices_stored}[/bold]",
    )
    return t


def csv_fetcher(path: Path):
    """Use a CSV of ``symbol, date, close_price`` rows as the fetch source."""
    series: dict[str, dict[date, Decimal]] = {}
    for point in read_price_points(path):
        series.setdefault(point.symbol, {})[point.date] = point.close_price

    def fetch(symbol: str) -> SeriesFetchResult:
        if symbol not in series:
            return SeriesFetchResult(SeriesFetchStatus.NO_DATA)
        return SeriesFetchResult(SeriesFetchStatus.SUCCESS, series[symbol])

    return fetch


@app.callback()
def main(
    ctx: typer.Context,
    transactions: Optional[Path] = typer.Option(
        None, "--transactions", envvar="STOCKDASH_TRANSACTIONS", help="Transactions CSV"
    ),
    prices: Optional[Path] = typer.Option(
        None, "--prices", envvar="STOCKDASH_PRICES", help="Daily closes CSV"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Value accounts and chart performance from a trade ledger and daily closes."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )

    try:
        if transactions is None:
            logger.info("No transactions file given; using the demo portfolio")
            ctx.obj = Portfolio.demo()
            console.print("[dim]Using demo portfolio (pass --transactions to load your own).[/dim]")
        else:
            ctx.obj = Portfolio.from_csv(transactions, prices)
    except ValueError as e:
        _fail(e)


@app.command()
def summary(
    ctx: typer.Context,
    as_of: Optional[str] = typer.Option(None, "--date", help="As-of date (yyyy-MM-dd)"),
) -> None:
    """Value every account as of a date (default: latest price date)."""
    portfolio: Portfolio = ctx.obj
    try:
        snapshots = portfolio.daily_summary(as_of)
    except ValueError as e:
        _fail(e)

    if not snapshots:
        console.print("[yellow]No transactions loaded.[/yellow]")
        return
    for snapshot in snapshots:
        console.print(snapshot_table(snapshot))
    grand_total = sum((s.total_value for s in snapshots), start=Decimal("0"))
    console.print(f"  [bold]All accounts:[/bold] {_money(grand_total)}")


@app.command()
def performance(
    ctx: typer.Context,
    account: str = typer.Option("TOTAL", "--account", "-a", help="Account name or TOTAL"),
    start: Optional[str] = typer.Option(None, "--start", help="Start date (yyyy-MM-dd)"),
    end: Optional[str] = typer.Option(None, "--end", help="End date (yyyy-MM-dd)"),
    by_stock: bool = typer.Option(False, "--by-stock", help="One column per symbol"),
) -> None:
    """Daily portfolio value with return and CAGR over the window."""
    portfolio: Portfolio = ctx.obj
    try:
        points = portfolio.performance(account, start, end)
    except ValueError as e:
        _fail(e)

    console.print(performance_table(points, f"Performance · {account.strip().upper()}", by_stock))
    console.print(returns_panel(summarize(points)))


@app.command()
def history(
    ctx: typer.Context,
    symbol: str = typer.Argument(..., help="Ticker symbol"),
    start: Optional[str] = typer.Option(None, "--start", help="Start date (yyyy-MM-dd)"),
    end: Optional[str] = typer.Option(None, "--end", help="End date (yyyy-MM-dd)"),
) -> None:
    """Stored daily closes for a symbol, newest first."""
    portfolio: Portfolio = ctx.obj
    try:
        points = portfolio.history(symbol, start, end)
    except ValueError as e:
        _fail(e)

    if not points:
        console.print(f"[yellow]No stored closes for {symbol.strip().upper()}.[/yellow]")
        return
    console.print(history_table(points[0].symbol, points))


@app.command()
def symbols(ctx: typer.Context) -> None:
    """Symbols with at least one purchase."""
    portfolio: Portfolio = ctx.obj
    for symbol in portfolio.symbols():
        console.print(symbol)


@app.command()
def sync(
    ctx: typer.Context,
    stocks: List[str] = typer.Argument(..., help="Symbols to sync"),
    from_csv: Path = typer.Option(..., "--from-csv", help="CSV of closes to merge"),
    today: Optional[str] = typer.Option(None, "--today", help="Reference date (yyyy-MM-dd)"),
) -> None:
    """Merge closes for purchased symbols and report the status of each."""
    portfolio: Portfolio = ctx.obj
    try:
        result = portfolio.sync_prices(
            stocks, csv_fetcher(from_csv), parse_date(today, "today")
        )
    except ValueError as e:
        _fail(e)

    console.print(sync_table(result))


if __name__ == "__main__":
    app()
