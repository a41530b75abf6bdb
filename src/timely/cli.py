import json
import time

import typer
from pydantic import ValidationError
from rich.console import Console, Group
from rich.live import Live
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from timely.clock import LiveClock
from timely.exceptions import TimelyError
from timely.form import FORM_FIELDS, parse_form
from timely.generator import build_schedule
from timely.schema import EntryKind, Schedule
from timely.settings import settings
from timely.utils.banner import display as display_banner
from timely.utils.logging import setup_logging
from timely.utils.time import format_clock, format_duration_minutes

app = typer.Typer(help="Timely - Work Day Planner")
console = Console()

KIND_STYLES = {
    EntryKind.WORK_SESSION: "green",
    EntryKind.SHORT_BREAK: "yellow",
    EntryKind.LUNCH_BREAK: "magenta",
}

PROMPTS = {
    "name": "Enter your name",
    "work_hours": "Total work hours",
    "lunch_break": "Lunch break duration in hours",
    "short_break": "Short break duration in minutes",
    "work_session": "Work session duration in minutes",
    "start_hour": "Start time",
}


def prompt_form() -> dict[str, str]:
    """Asks for each plan field in turn, offering the configured defaults."""
    answers = {}
    for field in FORM_FIELDS:
        default = "" if field == "name" else str(getattr(settings, field))
        answers[field] = Prompt.ask(
            PROMPTS[field], default=default, show_default=bool(default), console=console
        )
    return answers


def render_plan(schedule: Schedule, current_time: str | None = None) -> Group:
    """Builds the plan view: an optional clock line, a heading and the entries."""
    parts = []
    if current_time:
        parts.append(Text(current_time, style="bold white"))
    parts.append(Text(f"Work Plan for {schedule.request.name}", style="bold"))
    for entry in schedule.entries:
        parts.append(Text(f"  • {entry.render()}", style=KIND_STYLES[entry.kind]))
    if not schedule.entries:
        parts.append(Text("  No blocks fit in this work day.", style="dim"))
    return Group(*parts)


def schedule_as_dict(schedule: Schedule) -> dict:
    return {
        "name": schedule.request.name,
        "request": schedule.request.model_dump(mode="json"),
        "entries": [
            {
                "kind": entry.kind.value,
                "start_time": format_clock(entry.start_time),
                "duration_minutes": entry.duration_minutes,
                "text": entry.render(),
            }
            for entry in schedule.entries
        ],
        "consumed_minutes": schedule.consumed_minutes,
    }


def watch_plan(schedule: Schedule) -> None:
    """Keeps the plan on screen with a ticking clock until Ctrl+C."""
    with Live(render_plan(schedule), console=console, auto_refresh=False) as live:
        clock = LiveClock(
            on_tick=lambda now: live.update(render_plan(schedule, now), refresh=True),
            interval=settings.clock_interval_seconds,
        )
        with clock:
            try:
                while clock.running:
                    time.sleep(0.25)
            except KeyboardInterrupt:
                pass
    console.print("[yellow]Stopped watching.[/yellow]")


@app.command()
def plan(
    name: str | None = typer.Option(None, "--name", "-n", help="Name shown in the heading"),
    work_hours: str | None = typer.Option(
        None, "--work-hours", "-H", help=f"Total work hours (default {settings.work_hours:g})"
    ),
    lunch_break: str | None = typer.Option(
        None,
        "--lunch-break",
        "-l",
        help=f"Lunch break duration in hours (default {settings.lunch_break:g})",
    ),
    short_break: str | None = typer.Option(
        None,
        "--short-break",
        "-b",
        help=f"Short break duration in minutes (default {settings.short_break:g})",
    ),
    work_session: str | None = typer.Option(
        None,
        "--work-session",
        "-s",
        help=f"Work session duration in minutes (default {settings.work_session:g})",
    ),
    start_hour: str | None = typer.Option(
        None, "--start", "-t", help=f"Start time, HH:MM (default {settings.start_hour})"
    ),
    interactive: bool = typer.Option(
        False, "--interactive", "-i", help="Fill in the plan form field by field"
    ),
    watch: bool = typer.Option(
        False, "--watch", "-w", help="Keep the plan on screen with a live clock"
    ),
    json_output: bool = typer.Option(False, "--json", help="Print the plan as JSON"),
    banner: bool | None = typer.Option(
        None, "--banner/--no-banner", help="Show the Timely banner first"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Generate the day's work sessions and breaks."""
    setup_logging(verbose=verbose)

    show_banner = settings.show_banner if banner is None else banner
    if show_banner and not json_output:
        display_banner(console)

    if interactive:
        fields = prompt_form()
    else:
        fields = {
            "name": name,
            "work_hours": work_hours,
            "lunch_break": lunch_break,
            "short_break": short_break,
            "work_session": work_session,
            "start_hour": start_hour,
        }

    try:
        request = parse_form(fields)
    except (TimelyError, ValidationError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    schedule = build_schedule(request)

    if json_output:
        typer.echo(json.dumps(schedule_as_dict(schedule), indent=2))
        return

    if watch:
        watch_plan(schedule)
        return

    console.print(render_plan(schedule))
    console.print(
        f"[dim]{len(schedule.entries)} blocks, "
        f"{format_duration_minutes(schedule.consumed_minutes)} of "
        f"{format_duration_minutes(request.total_minutes)} planned.[/dim]"
    )


@app.command()
def defaults(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Show the defaults used for empty plan fields."""
    setup_logging(verbose=verbose)

    table = Table(title="Plan Defaults")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("Work Hours", f"{settings.work_hours:g}")
    table.add_row("Lunch Break (h)", f"{settings.lunch_break:g}")
    table.add_row("Short Break (m)", f"{settings.short_break:g}")
    table.add_row("Work Session (m)", f"{settings.work_session:g}")
    table.add_row("Start Time", settings.start_hour)
    table.add_row("Clock Interval (s)", f"{settings.clock_interval_seconds:g}")
    table.add_row("Log Directory", str(settings.log_dir))
    console.print(table)
    console.print("[dim]Override with TIMELY_* environment variables or a .env file.[/dim]")


if __name__ == "__main__":
    app()
