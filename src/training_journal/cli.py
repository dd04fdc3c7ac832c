#!/usr/bin/env python3
"""
Training Journal CLI.

Log daily entries and metrics, and read back readiness risk and weekly
summaries.

Usage:
    training-journal log --user ana --mood 4 --volume 8.5 --notes "felt strong"
    training-journal metrics --user ana --rpe 7 --resting-hr 52
    training-journal risk --user ana --date 2024-05-14 --recompute
    training-journal week --user ana
    training-journal history --user ana --weeks 6
    training-journal recent --user ana --days 7
    training-journal notes --user ana
"""

import argparse
import logging
import sys
from datetime import date
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box
from rich.markup import escape

from .config import get_settings
from .db.repositories import (
    DailyEntryRepository,
    DailyMetricsRepository,
    RiskScoreRepository,
)
from .exceptions import TrainingJournalError
from .models.journal import RiskResult
from .services.risk_service import RiskService
from .utils.log_sanitizer import install_log_sanitizer

console = Console()


def get_risk_color(score: float) -> str:
    """Get rich color for a 0..1 risk score."""
    if score >= 0.7:
        return "red"
    if score >= 0.4:
        return "yellow"
    return "green"


def format_risk(score: float) -> str:
    color = get_risk_color(score)
    return f"[{color}]{score:.2f}[/{color}]"


def print_risk(result: RiskResult) -> None:
    """Render a risk result as a table plus its drivers."""
    table = Table(title=f"Readiness Risk - {result.date}", box=box.ROUNDED)
    table.add_column("Risk", style="cyan")
    table.add_column("Score", justify="right")
    table.add_row("Overtraining", format_risk(result.overtrain_risk))
    table.add_row("Motivation", format_risk(result.motivation_risk))
    table.add_row("Performance dip", format_risk(result.performance_risk))
    console.print(table)

    if result.drivers:
        console.print("[bold]Drivers:[/bold]")
        for driver in result.drivers:
            console.print(f"  - {driver}")
    else:
        console.print("[dim]No risk drivers.[/dim]")
    console.print(f"[dim]Model {result.model_version}[/dim]")


def build_service(db_path: Optional[str] = None) -> RiskService:
    """Create a RiskService over the given (or configured) database."""
    settings = get_settings()
    path = db_path or settings.db_path
    return RiskService(
        entries=DailyEntryRepository(path),
        metrics=DailyMetricsRepository(path),
        risk_store=RiskScoreRepository(path),
        settings=settings,
    )


def cmd_log(args, service: RiskService):
    """Save a daily entry."""
    fields = {
        "mood": args.mood,
        "training_volume": args.volume,
        "heart_rate": args.hr,
        "notes": args.notes,
    }
    fields = {k: v for k, v in fields.items() if v is not None}

    entry = service.save_entry(args.user, args.date, **fields)

    console.print()
    console.print(Panel(f"[bold]Entry saved for {entry.date}[/bold]"))
    table = Table(box=box.ROUNDED, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Mood", str(entry.mood) if entry.mood else "-")
    table.add_row("Training volume", f"{entry.training_volume:g}" if entry.training_volume is not None else "-")
    table.add_row("Heart rate", f"{entry.heart_rate:g} bpm" if entry.heart_rate is not None else "-")
    table.add_row("Notes", escape(entry.notes) if entry.notes else "-")
    console.print(table)

    result = service.get_risk(args.user, entry.date)
    if result:
        console.print()
        print_risk(result)
    console.print()


def cmd_metrics(args, service: RiskService):
    """Patch a day's metrics."""
    patch = {"rpe": args.rpe, "resting_hr": args.resting_hr, "sleep_hours": args.sleep}
    patch = {k: v for k, v in patch.items() if v is not None}
    if not patch:
        console.print("[yellow]Nothing to save. Use --rpe, --resting-hr or --sleep.[/yellow]")
        return

    record = service.save_metrics(args.user, args.date, **patch)
    console.print(f"[green]Metrics saved for {record.date}[/green]")


def cmd_risk(args, service: RiskService):
    """Show (optionally recompute) readiness risk."""
    if args.recompute:
        result = service.recompute(args.user, args.date)
    else:
        result = service.get_risk(args.user, args.date)

    console.print()
    if result is None:
        console.print(f"[yellow]No risk score for {args.user} on {args.date}.[/yellow]")
        if not args.recompute:
            console.print("Run with --recompute to score it from the journal.")
        return

    print_risk(result)
    console.print()


def cmd_week(args, service: RiskService):
    """Show the weekly summary."""
    summary = service.get_week_summary(args.user, args.date)

    console.print()
    console.print(Panel(
        f"[bold]Week of {summary.week_start.strftime('%b %d')} - {summary.week_end.strftime('%b %d')}[/bold]"
    ))

    table = Table(box=box.ROUNDED, show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Entries", str(summary.volume.entry_count))
    table.add_row("Total volume", f"{summary.volume.total:.1f}")
    table.add_row("Average volume", f"{summary.volume.average:.1f}")
    table.add_row(
        "Average heart rate",
        f"{summary.average_heart_rate:.1f} bpm" if summary.average_heart_rate else "-",
    )
    table.add_row("Mood", summary.mood_trend)
    console.print(table)

    for insight in summary.insights:
        console.print(f"  * {insight}")
    console.print()


def cmd_recent(args, service: RiskService):
    """Show the last N days, one row per calendar day."""
    days = service.get_recent_days(args.user, args.days, args.date)

    table = Table(title=f"Last {args.days} days", box=box.ROUNDED)
    table.add_column("Date", style="cyan")
    table.add_column("Mood", justify="right")
    table.add_column("Volume", justify="right")
    table.add_column("HR", justify="right")
    table.add_column("Notes")

    for entry in days:
        table.add_row(
            entry.date,
            str(entry.mood) if entry.mood else "-",
            f"{entry.training_volume:g}" if entry.training_volume is not None else "-",
            f"{entry.heart_rate:g}" if entry.heart_rate is not None else "-",
            escape(entry.notes) if entry.notes else "[dim]-[/dim]",
        )

    console.print()
    console.print(table)
    console.print()


def cmd_notes(args, service: RiskService):
    """List every day with notes, newest first."""
    entries = service.get_notes_archive(args.user)
    console.print()
    if not entries:
        console.print(f"[yellow]No notes saved for {args.user}.[/yellow]")
        return

    for entry in entries:
        console.print(f"[bold cyan]{entry.date}[/bold cyan]  {escape(entry.notes)}")
    console.print()


def cmd_history(args, service: RiskService):
    """Show average training volume per week."""
    weeks = service.get_training_history(args.user, args.weeks)

    table = Table(title=f"Weekly Training Averages ({args.weeks} weeks)", box=box.ROUNDED)
    table.add_column("Week", style="cyan")
    table.add_column("Starts")
    table.add_column("Average", justify="right")

    peak = max((w.average for w in weeks), default=0.0)
    for week in weeks:
        bar = "#" * int(round(20 * week.average / peak)) if peak else ""
        table.add_row(week.label, week.week_start.isoformat(), f"{week.average:.2f} {bar}")

    console.print()
    console.print(table)
    console.print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="training-journal",
        description="Training journal with readiness-risk scoring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  training-journal log --user ana --mood 4 --volume 8.5 --notes "felt strong"
  training-journal metrics --user ana --rpe 7 --resting-hr 52
  training-journal risk --user ana --recompute
  training-journal week --user ana --date 2024-05-14
  training-journal history --user ana --weeks 6
  training-journal recent --user ana --days 14
        """,
    )
    parser.add_argument("--db", help="Path to the journal database (default: JOURNAL_DB_PATH)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    today = date.today().isoformat()

    def day_command(name: str, help_text: str) -> argparse.ArgumentParser:
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("--user", required=True, help="User ID")
        p.add_argument("--date", default=today, help="Day (YYYY-MM-DD, default today)")
        return p

    log_p = day_command("log", "Save a daily entry")
    log_p.add_argument("--mood", type=int, help="Mood 1-5")
    log_p.add_argument("--volume", type=float, help="Training volume (e.g. km)")
    log_p.add_argument("--hr", type=float, help="Heart rate (bpm)")
    log_p.add_argument("--notes", help="Free-text notes")

    metrics_p = day_command("metrics", "Save daily metrics")
    metrics_p.add_argument("--rpe", type=float, help="Session RPE (1-10)")
    metrics_p.add_argument("--resting-hr", type=float, dest="resting_hr", help="Resting heart rate (bpm)")
    metrics_p.add_argument("--sleep", type=float, help="Sleep hours")

    risk_p = day_command("risk", "Show readiness risk")
    risk_p.add_argument("--recompute", action="store_true", help="Recompute from the journal first")

    day_command("week", "Show the weekly summary")

    history_p = subparsers.add_parser("history", help="Show weekly training averages")
    history_p.add_argument("--user", required=True, help="User ID")
    history_p.add_argument("--weeks", type=int, default=4, help="Number of weeks (default: 4)")

    recent_p = day_command("recent", "Show the last N days")
    recent_p.add_argument("--days", type=int, default=7, help="Number of days (default: 7)")

    notes_p = subparsers.add_parser("notes", help="List all saved notes")
    notes_p.add_argument("--user", required=True, help="User ID")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        settings = get_settings()
        logging.basicConfig(
            level=getattr(logging, settings.log_level, logging.INFO),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        install_log_sanitizer()

        service = build_service(args.db)

        # Route to appropriate command
        if args.command == "log":
            cmd_log(args, service)
        elif args.command == "metrics":
            cmd_metrics(args, service)
        elif args.command == "risk":
            cmd_risk(args, service)
        elif args.command == "week":
            cmd_week(args, service)
        elif args.command == "history":
            cmd_history(args, service)
        elif args.command == "recent":
            cmd_recent(args, service)
        elif args.command == "notes":
            cmd_notes(args, service)
        else:
            parser.print_help()
    except TrainingJournalError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
