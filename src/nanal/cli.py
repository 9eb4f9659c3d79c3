"""nanal CLI - calendar occurrences and goal-bar layout."""

import json
import logging
import sys
from datetime import date

import click

from .adapters.remote_store import RemoteStoreError
from .config import load_config
from .core.dates import DAY_CODES, Month, format_date
from .core.engine import BarSegment, DayCell
from .core.items import InstantItem
from .core.recurrence import next_occurrences, parse_rule
from .workflows import get_engine, pull as pull_remote, push as push_remote


def _parse_date_option(ctx, param, value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a YYYY-MM-DD date")


def _parse_month_argument(ctx, param, value: str | None) -> Month:
    if value is None:
        return Month.from_date(date.today())
    try:
        return Month.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


@click.group()
@click.version_option(package_name="nanal")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """nanal - calendar occurrence and layout engine."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


def _task_to_json(task: InstantItem) -> dict:
    return {
        "id": task.id,
        "title": task.title,
        "start_at": task.start_at.isoformat() if task.start_at else None,
        "end_at": task.end_at.isoformat() if task.end_at else None,
        "recurring": task.is_recurring,
        "status": task.status,
    }


def format_task_line(task: InstantItem) -> str:
    """One task line for the day view."""
    check = "✓" if task.is_done else " "
    when = task.start_at.strftime("%H:%M") if task.start_at else "     "
    repeat = " ↻" if task.is_recurring else ""
    return f"[{check}] {when} {task.title}{repeat}"


@main.command()
@click.option("--date", "-d", "target_date", default=None, callback=_parse_date_option,
              help="Date to view (YYYY-MM-DD), defaults to today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def day(target_date: date | None, as_json: bool):
    """List tasks occurring on a date."""
    target = target_date or date.today()
    tasks = get_engine(load_config()).tasks_on(target)

    if as_json:
        click.echo(json.dumps([_task_to_json(t) for t in tasks], indent=2))
        return

    click.echo(f"### {target.strftime('%A, %B %d')}")
    if not tasks:
        click.echo("No tasks.")
        return
    for task in tasks:
        click.echo(f"  {format_task_line(task)}")


def _cell_label(cell: DayCell) -> str:
    if not cell.in_month:
        return "     "
    count = f"·{cell.total}" if cell.total else ""
    marker = "*" if cell.is_today else " "
    return f"{marker}{cell.date.day:>2}{count:<2}"


@main.command()
@click.argument("month", required=False, callback=_parse_month_argument)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def month(month: Month, as_json: bool):
    """Show the month grid with task counts (MONTH is YYYY-MM)."""
    config = load_config()
    cells = get_engine(config).cells(
        month,
        today=date.today(),
        max_items=config.max_cell_items,
        min_rows=config.min_grid_rows,
    )

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "date": format_date(c.date),
                        "in_month": c.in_month,
                        "is_today": c.is_today,
                        "items": [_task_to_json(t) for t in c.items],
                        "overflow": c.overflow,
                    }
                    for c in cells
                ],
                indent=2,
            )
        )
        return

    click.echo(month.label())
    click.echo(" ".join(f"{code:^5}" for code in DAY_CODES))
    for start in range(0, len(cells), 7):
        click.echo(" ".join(_cell_label(c) for c in cells[start : start + 7]))

    busy = [c for c in cells if c.in_month and c.total]
    if busy:
        click.echo()
    for cell in busy:
        click.echo(f"{cell.date.strftime('%a %d')}")
        for task in cell.items:
            click.echo(f"  {format_task_line(task)}")
        if cell.overflow:
            click.echo(f"  +{cell.overflow} more")


def format_segment_line(segment: BarSegment) -> str:
    """One goal-bar segment as text, with caps where the goal really starts/ends."""
    left = "[" if segment.is_interval_start else "<"
    right = "]" if segment.is_interval_end else ">"
    return (
        f"row {segment.row_index}  cols {segment.start_column}-{segment.end_column}  "
        f"lane {segment.lane}  {left}{segment.title}{right}"
    )


@main.command()
@click.argument("month", required=False, callback=_parse_month_argument)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--metrics", is_flag=True, help="Include configured bar offsets")
def layout(month: Month, as_json: bool, metrics: bool):
    """Lay out goal bars for a month (MONTH is YYYY-MM)."""
    config = load_config()
    result = get_engine(config).layout(month, config.bar_metrics() if metrics else None)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if not result.segments:
        click.echo(f"No goals in {month.label()}.")
        return

    click.echo(f"{month.label()} - {len(result.lanes)} goals in {result.lane_count} lanes")
    for row, segments in result.rows().items():
        if not segments:
            continue
        click.echo(f"\nWeek {row + 1}")
        for segment in segments:
            top = f"  top {segment.top:g}" if segment.top is not None else ""
            click.echo(f"  {format_segment_line(segment)}{top}")


@main.command()
@click.argument("rule_text", metavar="RULE")
@click.option("--from", "start", default=None, callback=_parse_date_option,
              help="First date to consider (YYYY-MM-DD), defaults to today")
@click.option("--count", "-n", default=5, show_default=True, help="Occurrences to list")
def rule(rule_text: str, start: date | None, count: int):
    """Check a recurrence rule and list its next occurrences."""
    parsed = parse_rule(rule_text)
    if parsed is None:
        click.echo(f"Unsupported rule (treated as non-recurring): {rule_text}", err=True)
        sys.exit(1)

    click.echo(parsed.to_rule())
    for d in next_occurrences(parsed, start or date.today(), count):
        click.echo(f"  {format_date(d)} {d.strftime('%A')}")


@main.command()
def pull():
    """Copy the remote store into the local data file."""
    try:
        task_count, goal_count = pull_remote(load_config())
    except (RemoteStoreError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Pulled {task_count} tasks and {goal_count} goals.")


@main.command()
def push():
    """Back up the local data file to the remote store."""
    try:
        task_count, goal_count = push_remote(load_config())
    except (RemoteStoreError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Pushed {task_count} tasks and {goal_count} goals.")


if __name__ == "__main__":
    main()
