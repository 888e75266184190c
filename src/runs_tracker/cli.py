"""CLI entrypoint for the MLB slate runs tracker."""

from __future__ import annotations

import asyncio
import json
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import structlog
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from runs_tracker.config import get_settings
from runs_tracker.core.collector import SlateCollector
from runs_tracker.core.implied_total import build_alt_line_curve, median_from_curve
from runs_tracker.core.odds_math import american_to_prob, get_overround, get_vig_pct
from runs_tracker.core.slate import compute_slate_summary, project_slate
from runs_tracker.errors import ConfigurationError, OddsAPIError, RunsTrackerError
from runs_tracker.models.game import GameProjection, GameSnapshot, GameState, SlateSummary
from runs_tracker.models.odds import TwoWayQuote
from runs_tracker.observability.logging import setup_logging

app = typer.Typer(
    name="runs-tracker",
    help="Market-implied run totals for today's MLB slate.",
    no_args_is_help=True,
)
console = Console()
logger = structlog.get_logger()

SOURCE_LABELS = {
    "live_alternates": "live alts",
    "live_main": "live",
    "pregame_alternates": "pre alts",
    "pregame_main": "pre",
}


def _format_runs(value: float) -> str:
    return str(round(value)) if math.isfinite(value) else "—"


def _format_projection(value: float) -> str:
    return f"{value:.1f}" if math.isfinite(value) else "—"


def _first_pitch(game: GameSnapshot) -> str:
    if game.commence_time is None:
        return ""
    return game.commence_time.astimezone().strftime("%I:%M %p").lstrip("0")


def _status_text(game: GameSnapshot) -> str:
    if game.state == GameState.IN_PROGRESS:
        return f"[bold red]LIVE[/] {game.detail}".rstrip()
    if game.state == GameState.FINAL:
        return "[dim]FINAL[/]"
    return f"SCHEDULED {_first_pitch(game)}".rstrip()


def _market_text(game: GameSnapshot, projection: GameProjection) -> str:
    implied = projection.implied_total
    if implied is None:
        if game.is_final:
            return "[dim]—[/]"
        return "[dim]No market[/]" if game.markets.is_empty else "[dim]No usable line[/]"
    source = SOURCE_LABELS[implied.source.value]
    value = f"[bold red]{implied.value:.1f}[/]" if implied.is_live else f"{implied.value:.1f}"
    return f"{value} [dim]({source})[/]"


def _render_kpis(summary: SlateSummary) -> None:
    now = datetime.now(timezone.utc).astimezone().strftime("%b %d %Y %I:%M%p")
    console.print(f"\n[bold]MLB RUNS TRACKER[/]  |  {now}")
    console.print(f"  Runs scored:      [cyan]{_format_runs(summary.total_runs_scored)}[/]")
    console.print(f"  Projected finish: [green]{_format_projection(summary.projected_slate_finish)}[/]\n")


def _render_games_table(games: list[GameSnapshot], show_final: bool = True) -> None:
    if not games:
        console.print("[dim]No games on the board[/]")
        return
    table = Table(title="Games", show_header=True, header_style="bold")
    table.add_column("Game", width=34)
    table.add_column("Score", width=7)
    table.add_column("Status", width=22)
    table.add_column("Imp. total", width=18)
    table.add_column("Exp. rem.", width=9)
    table.add_column("Proj.", width=6)
    for game, projection in zip(games, project_slate(games)):
        if game.is_final and not show_final:
            continue
        table.add_row(
            game.label[:34],
            f"{game.away_runs:.0f} - {game.home_runs:.0f}",
            _status_text(game),
            _market_text(game, projection),
            f"{projection.expected_remaining:.1f}",
            f"{projection.projected_finish:.1f}",
        )
    console.print(table)


def _ticker_line(games: list[GameSnapshot]) -> str:
    items = []
    for g in games:
        if g.is_final:
            tag = "F"
        elif g.state == GameState.IN_PROGRESS:
            tag = g.detail or "LIVE"
        else:
            tag = _first_pitch(g) or "SCHEDULED"
        away = (g.away_team or "AWY")[:3].upper()
        home = (g.home_team or "HOME")[:3].upper()
        items.append(f"{away} {g.away_runs:.0f} - {home} {g.home_runs:.0f} | {tag}")
    return "  •  ".join(items)


def _render_slate(games: list[GameSnapshot], show_final: bool = True) -> SlateSummary:
    summary = compute_slate_summary(games)
    _render_kpis(summary)
    if games:
        console.print(f"[dim]{_ticker_line(games)}[/]\n")
    _render_games_table(games, show_final=show_final)
    return summary


def _load_json_array(path: Path) -> list:
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise typer.BadParameter(f"{path} is not valid JSON: {e}")
    if not isinstance(data, list):
        raise typer.BadParameter(f"{path} must contain a JSON array")
    return data


@app.command("summary")
def summary(
    sport: Optional[str] = typer.Option(None, "--sport", "-s", help="Sport key (default from config)"),
    live: Optional[bool] = typer.Option(None, "--live/--no-live", help="Fetch in-play totals for live games"),
    show_final: bool = typer.Option(True, "--show-final/--hide-final", help="List final games on the board"),
) -> None:
    """One refresh: fetch odds and scores, print the slate projection, and exit."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if sport:
        settings.sport_key = sport

    async def _run() -> list[GameSnapshot]:
        collector = SlateCollector.from_settings(settings, include_live=live)
        async with collector.adapter:
            return await collector.collect()

    try:
        games = asyncio.run(_run())
    except ConfigurationError:
        console.print("[red]✗ The Odds API not configured. Set RUNS_TRACKER_ODDS_API_KEY[/]")
        raise typer.Exit(1)
    except OddsAPIError as e:
        console.print(f"[red]✗ Failed to fetch games: {e}[/]")
        raise typer.Exit(1)

    _render_slate(games, show_final=show_final)


@app.command("watch")
def watch(
    sport: Optional[str] = typer.Option(None, "--sport", "-s"),
    interval: Optional[float] = typer.Option(None, "--interval", "-i", help="Refresh interval in seconds"),
    live: Optional[bool] = typer.Option(None, "--live/--no-live"),
    show_final: bool = typer.Option(True, "--show-final/--hide-final"),
) -> None:
    """Refresh the slate projection on a loop until interrupted."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if sport:
        settings.sport_key = sport
    if interval:
        settings.poll_interval_seconds = interval
    if not settings.odds_api_configured:
        console.print("[red]✗ The Odds API not configured. Set RUNS_TRACKER_ODDS_API_KEY[/]")
        raise typer.Exit(1)
    console.print(f"[green]Watching {settings.sport_key} every {settings.poll_interval_seconds:.0f}s...[/]")

    async def _run() -> None:
        collector = SlateCollector.from_settings(settings, include_live=live)
        async with collector.adapter:
            while True:
                try:
                    games = await collector.collect()
                    _render_slate(games, show_final=show_final)
                except (RunsTrackerError, ValueError) as e:
                    logger.error("refresh_failed", error=str(e))
                    console.print(f"[red]Error loading games: {e}[/]")
                await asyncio.sleep(settings.poll_interval_seconds)

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped[/]")


@app.command("from-file")
def from_file(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON array of game snapshots"),
    show_final: bool = typer.Option(True, "--show-final/--hide-final"),
) -> None:
    """Compute the slate projection from saved game snapshots."""
    try:
        games = [GameSnapshot.model_validate(d) for d in _load_json_array(path)]
    except ValidationError as e:
        raise typer.BadParameter(f"{path} has an invalid game snapshot: {e}")
    _render_slate(games, show_final=show_final)


@app.command("curve")
def curve(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON array of alternate-total quotes"),
) -> None:
    """Show the fair P(under) curve and implied median for one game's alternates."""
    try:
        quotes = [TwoWayQuote.model_validate(d) for d in _load_json_array(path)]
    except ValidationError as e:
        raise typer.BadParameter(f"{path} has an invalid quote: {e}")
    usable = {q.line: q for q in quotes if q.is_usable}
    points = build_alt_line_curve(quotes)

    table = Table(title="Alternate totals", show_header=True, header_style="bold")
    table.add_column("Line")
    table.add_column("Over")
    table.add_column("Under")
    table.add_column("Vig")
    table.add_column("P(under)")
    for point in points:
        quote = usable[point.line]
        overround = get_overround([american_to_prob(quote.over.odds), american_to_prob(quote.under.odds)])  # type: ignore[union-attr]
        table.add_row(
            f"{point.line:g}",
            f"{quote.over.odds:+.0f}",  # type: ignore[union-attr]
            f"{quote.under.odds:+.0f}",  # type: ignore[union-attr]
            f"{get_vig_pct(overround):.2f}%",
            f"{point.p_under:.3f}",
        )
    console.print(table)

    skipped = sum(1 for q in quotes if not q.is_usable)
    if skipped:
        console.print(f"[yellow]Skipped {skipped} unusable quote(s)[/]")

    median = median_from_curve(points)
    if median is None:
        console.print("[dim]No usable alternate lines[/]")
    else:
        console.print(f"Implied median total: [green]{median:.2f}[/]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
