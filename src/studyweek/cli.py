"""studyweek CLI - weekly study session planner."""

import json
import logging
import math
import sys
from datetime import date
from pathlib import Path

import click

from .adapters.ics import subscription_url
from .config import load_config
from .core.busy import find_overlaps, group_busy_periods
from .core.schedule import GeneratedSchedule, sessions_by_day
from .core.slots import calculate_week_slots
from .ports.schedule_store import StoreError
from .workflows import export_calendar, generate_schedule, get_schedule, get_store, score_tasks

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


@click.group()
@click.version_option(package_name="studyweek")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """studyweek - fit your tasks into your week."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


def _show_schedule(schedule: GeneratedSchedule, as_json: bool) -> None:
    """Shared schedule display logic."""
    if as_json:
        click.echo(json.dumps(schedule.to_dict(), indent=2))
        return

    if not schedule.sessions:
        click.echo(f"No sessions scheduled for the week of {schedule.week_start_date}.")
        return

    click.echo(f"Week of {schedule.week_start_date} ({len(schedule.sessions)} sessions)")
    for sessions in sessions_by_day(schedule).values():
        click.echo()
        click.echo(f"### {sessions[0].start_time.strftime('%A, %B %d')}")
        for session in sessions:
            click.echo(f"  {session.format_time():11} {session.title}")


@main.command()
@click.argument("user_id")
@click.option("--week", "week_start", default=None, help="Week start date (YYYY-MM-DD), defaults to this Monday")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def generate(user_id: str, week_start: str | None, as_json: bool):
    """Generate and save a study schedule."""
    config = load_config()
    try:
        start = date.fromisoformat(week_start) if week_start else None
    except ValueError:
        click.echo(f"Error: Invalid week start date {week_start!r}", err=True)
        sys.exit(1)

    try:
        schedule = generate_schedule(config, user_id, start)
    except StoreError as e:
        click.echo(f"Error: Failed to generate schedule: {e}", err=True)
        sys.exit(1)

    _show_schedule(schedule, as_json)


@main.command()
@click.argument("user_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(user_id: str, as_json: bool):
    """Show the saved schedule."""
    config = load_config()
    try:
        schedule = get_schedule(config, user_id)
    except StoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _show_schedule(schedule, as_json)


@main.command()
@click.argument("user_id")
@click.option("--output", "-o", "output_dir", default=".", type=click.Path(file_okay=False),
              help="Directory to write the .ics file to")
def export(user_id: str, output_dir: str):
    """Export the saved schedule as an .ics file."""
    config = load_config()
    try:
        path = export_calendar(config, user_id, Path(output_dir))
    except StoreError as e:
        click.echo(f"Error: Failed to generate calendar file: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Calendar saved to {path}")


@main.command()
@click.argument("user_id")
@click.option("--base-url", default=None, help="Calendar server base URL")
def subscribe(user_id: str, base_url: str | None):
    """Print the calendar subscription URL."""
    config = load_config()
    url = subscription_url(user_id, base_url or config.calendar_base_url)
    click.echo(url)
    click.echo()
    click.echo("Add it to your calendar app as a subscription:")
    click.echo("  Google Calendar: Other calendars > + > From URL")
    click.echo("  Apple Calendar:  File > New Calendar Subscription")
    click.echo("  Outlook:         Add calendar > From internet")


@main.command()
@click.argument("user_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def priorities(user_id: str, as_json: bool):
    """Show how each open task is scored."""
    config = load_config()
    try:
        results = score_tasks(config, user_id)
    except StoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "task_id": r.task_id,
                        "priority": r.priority,
                        "urgency_multiplier": r.urgency_multiplier,
                        "base_priority": r.base_priority,
                        "days_until_due": None if math.isinf(r.days_until_due) else r.days_until_due,
                        "average_hours_per_day": r.average_hours_per_day,
                    }
                    for r in results
                ],
                indent=2,
            )
        )
        return

    if not results:
        click.echo("No open tasks.")
        return

    for r in results:
        due = "undated" if math.isinf(r.days_until_due) else f"{r.days_until_due:g}d"
        click.echo(f"{r.priority:8.2f}  x{r.urgency_multiplier:<3} {due:>8}  {r.task_id}")


@main.command()
@click.argument("user_id")
def slots(user_id: str):
    """Show free slots for the week after busy time and buffers."""
    config = load_config()
    try:
        busy = get_store(config).fetch_busy_periods(user_id)
    except StoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    days = group_busy_periods(busy)
    week = calculate_week_slots(
        days,
        buffer_time=config.buffer_time,
        min_session_length=config.min_session_length,
        merge_overlaps=config.merge_overlaps,
    )
    for day, day_slots in enumerate(week):
        click.echo(f"{DAY_NAMES[day]}:")
        if not day_slots:
            click.echo("  (no free time)")
        for slot in day_slots:
            click.echo(f"  {slot.format()}")
        if not config.merge_overlaps:
            for first, second in find_overlaps(days[day]):
                click.echo(f"  ! overlapping busy time: {first.format()} and {second.format()}")


if __name__ == "__main__":
    main()
