"""StudyNext CLI - homework tracker."""

import json
import sys
from datetime import date, datetime

import click

from .adapters.http_assignments import AuthenticationError, DataSourceError
from .config import load_config
from .core.assignments import Priority, filter_assignments, paginate, unique_subjects
from .core.calendar import (
    assignments_on,
    chunk_weeks,
    has_pending_on,
    month_grid,
    parse_week_start,
    week_days,
)
from .core.dashboard import format_dashboard
from .core.display import format_assignment_line
from .core.gamification import level_progress
from .core.reports import completion_stats, daily_breakdown, subject_breakdown
from .workflows import (
    AssignmentNotFoundError,
    LimitReachedError,
    add_assignment,
    collect_reminders,
    complete_focus_session,
    current_time,
    delete_assignment,
    get_profile,
    leaderboard,
    load_assignments,
    load_dashboard,
    set_completed,
)

SOURCE_ERRORS = (AuthenticationError, DataSourceError)


def _fail(e: Exception):
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _parse_at(value: str | None, config) -> datetime:
    """--at override for the reference time, else now."""
    if not value:
        return current_time(config)
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"Not an ISO date/time: {value}", param_hint="--at")


def _parse_day(value: str | None, config) -> date:
    """--date option for calendar views, else today."""
    if not value:
        return current_time(config).date()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"Not an ISO date: {value}", param_hint="--date")


def _serialize(a) -> dict:
    return {
        "id": a.id,
        "subject": a.subject,
        "title": a.title,
        "due": a.due.isoformat(),
        "priority": a.priority.value if a.priority else None,
        "completed": a.completed,
    }


@click.group()
@click.version_option(package_name="studynext")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """StudyNext - homework tracker."""
    if debug:
        import logging

        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--at", "at", default=None, help="Reference time (ISO), defaults to now")
def dashboard(as_json: bool, at: str | None):
    """Show what's due, in display order."""
    config = load_config()
    now = _parse_at(at, config)
    try:
        data = load_dashboard(config, now)
    except SOURCE_ERRORS as e:
        _fail(e)

    if as_json:
        t = data.triage
        click.echo(
            json.dumps(
                {
                    "tonight_mode": t.tonight_mode,
                    "visible": [_serialize(a) for a in t.visible],
                    "overdue": len(t.overdue),
                    "today": len(t.today),
                    "upcoming": len(t.upcoming),
                    "completed": t.completed_count,
                    "week": {"total": t.week.total, "completed": t.week.completed},
                },
                indent=2,
            )
        )
    else:
        click.echo(format_dashboard(data))


@main.command("list")
@click.option(
    "--status",
    type=click.Choice(["all", "active", "completed"]),
    default="all",
    help="Filter by completion",
)
@click.option("--subject", default="all", help="Filter by subject (premium)")
@click.option("--search", default="", help="Search title or subject")
@click.option("--page", default=1, type=int, help="Page number")
def list_cmd(status: str, subject: str, search: str, page: int):
    """List assignments."""
    config = load_config()
    now = current_time(config)
    try:
        assignments = load_assignments(config, now)
    except SOURCE_ERRORS as e:
        _fail(e)

    if subject != "all" and not config.is_premium:
        click.echo("Filtering by subject is a PRO feature.", err=True)
        subject = "all"

    matches = filter_assignments(assignments, status=status, subject=subject, query=search)
    if not matches:
        click.echo(f'No results for "{search}".' if search else f"No {status} assignments.")
        return

    shown = paginate(matches, page)
    for a in shown.items:
        click.echo(format_assignment_line(a, now))
    click.echo(
        f"\nShowing {len(shown.items)} of {shown.total_items} assignments "
        f"(page {shown.number}/{shown.total_pages})"
    )
    if config.is_premium:
        click.echo(f"Subjects: {', '.join(unique_subjects(assignments)) or 'none'}")


@main.command()
@click.argument("subject")
@click.argument("title")
@click.option("--due", "due", required=True, help="Due date/time (ISO)")
@click.option(
    "--priority",
    type=click.Choice([p.value for p in Priority]),
    default=None,
    help="Priority",
)
@click.option("--color", default=None, help="Accent color override")
def add(subject: str, title: str, due: str, priority: str | None, color: str | None):
    """Add an assignment."""
    config = load_config()
    try:
        due_dt = datetime.fromisoformat(due)
    except ValueError:
        raise click.BadParameter(f"Not an ISO date/time: {due}", param_hint="--due")

    try:
        new_id = add_assignment(
            config, subject, title, due_dt, Priority.parse(priority), color
        )
    except LimitReachedError as e:
        _fail(e)
    except SOURCE_ERRORS as e:
        _fail(e)

    click.echo(f"Added {subject}: {title} ({new_id})")


def _toggle(assignment_id: str, completed: bool):
    config = load_config()
    try:
        award = set_completed(config, assignment_id, completed)
    except AssignmentNotFoundError as e:
        _fail(e)
    except SOURCE_ERRORS as e:
        _fail(e)

    if award is None:
        click.echo("Already done." if completed else "Marked as not done.")
        return
    click.echo(f"Done! +{award.amount} XP")
    if award.did_level_up:
        click.echo(f"Level up! You reached stage {award.new_level}.")
    if award.streak_extended:
        click.echo(f"Streak: {award.new_streak} days")


@main.command()
@click.argument("assignment_id")
def done(assignment_id: str):
    """Mark an assignment complete."""
    _toggle(assignment_id, True)


@main.command()
@click.argument("assignment_id")
def undo(assignment_id: str):
    """Mark an assignment not complete."""
    _toggle(assignment_id, False)


@main.command()
@click.argument("assignment_id")
@click.option("--yes", is_flag=True, help="Don't ask for confirmation")
def delete(assignment_id: str, yes: bool):
    """Delete an assignment."""
    if not yes:
        click.confirm("Are you sure you want to delete this assignment?", abort=True)
    config = load_config()
    try:
        delete_assignment(config, assignment_id)
    except AssignmentNotFoundError as e:
        _fail(e)
    except SOURCE_ERRORS as e:
        _fail(e)
    click.echo(f"Deleted {assignment_id}")


@main.group(invoke_without_command=True)
@click.pass_context
def calendar(ctx):
    """Show assignments on a calendar."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(calendar_month)


@calendar.command("month")
@click.option("--date", "-d", "target_date", default=None, help="Any day in the month (YYYY-MM-DD)")
def calendar_month(target_date: str | None = None):
    """Month grid; '*' marks days with pending assignments."""
    config = load_config()
    now = current_time(config)
    anchor = _parse_day(target_date, config)
    try:
        assignments = load_assignments(config, now)
    except SOURCE_ERRORS as e:
        _fail(e)

    days = month_grid(anchor, parse_week_start(config.week_start_day))
    click.echo(anchor.strftime("%B %Y"))
    click.echo(" ".join(f"{d.strftime('%a')[:2]:>3}" for d in days[:7]))
    for week in chunk_weeks(days):
        cells = []
        for d in week:
            if d.month != anchor.month:
                cells.append("   ")
                continue
            marker = "*" if has_pending_on(assignments, d, now) else " "
            cells.append(f"{d.day:>2}{marker}")
        click.echo(" ".join(cells))


@calendar.command("week")
@click.option("--date", "-d", "target_date", default=None, help="Any day in the week (YYYY-MM-DD)")
def calendar_week(target_date: str | None = None):
    """Assignments for each day of the week."""
    config = load_config()
    now = current_time(config)
    anchor = _parse_day(target_date, config)
    try:
        assignments = load_assignments(config, now)
    except SOURCE_ERRORS as e:
        _fail(e)

    for day in week_days(anchor, parse_week_start(config.week_start_day)):
        click.echo(f"### {day.strftime('%A, %B %d')}")
        on_day = assignments_on(assignments, day, now)
        if not on_day:
            click.echo("  Nothing due")
        for a in on_day:
            click.echo(f"  {format_assignment_line(a, now)}")


@main.command()
def report():
    """Progress numbers: completion rate, last 7 days, subjects."""
    config = load_config()
    now = current_time(config)
    try:
        assignments = load_assignments(config, now)
    except SOURCE_ERRORS as e:
        _fail(e)

    stats = completion_stats(assignments)
    click.echo(f"Completion: {stats.completion_rate}% ({stats.completed}/{stats.total})\n")
    click.echo("Last 7 days (done / pending):")
    for day in daily_breakdown(assignments, now.date(), now=now):
        click.echo(f"  {day.day.strftime('%a %b %d')}: {day.completed} / {day.pending}")
    click.echo("\nBy subject:")
    for subject, count in subject_breakdown(assignments).items():
        click.echo(f"  {subject or '(none)'}: {count}")


@main.command()
def profile():
    """Show level, XP and streak."""
    config = load_config()
    p = get_profile(config)
    click.echo(f"{p.display_name} ({p.plan})")
    click.echo(f"Stage {p.level} - {p.xp} XP ({level_progress(p.xp):.0f}% to next)")
    click.echo(f"Streak: {p.streak} days")


@main.command("leaderboard")
@click.option("--limit", default=50, type=int, help="Number of students to show")
def leaderboard_cmd(limit: int):
    """Top students by XP."""
    config = load_config()
    ranked = leaderboard(config, limit)
    if not ranked:
        click.echo("No students yet.")
        return
    for i, p in enumerate(ranked, start=1):
        click.echo(f"{i:>3}. {p.display_name:20} {p.xp:>6} XP  stage {p.level}  {p.streak}d")


@main.command()
def focus():
    """Record a finished focus session (bonus XP)."""
    config = load_config()
    award = complete_focus_session(config)
    click.echo(f"Unstoppable Focus! +{award.amount} XP")
    if award.did_level_up:
        click.echo(f"Level up! You reached stage {award.new_level}.")


@main.command()
def remind():
    """Print reminders that are due now (premium)."""
    config = load_config()
    if not config.is_premium:
        click.echo("Reminders are a PRO feature.")
        return
    try:
        reminders = collect_reminders(config)
    except SOURCE_ERRORS as e:
        _fail(e)

    if not reminders:
        click.echo("No reminders right now.")
        return
    for r in reminders:
        click.echo(f"{r.title}\n  {r.body}")


@main.command()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def bot(debug: bool):
    """Run the Telegram bot."""
    import logging

    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )

    try:
        from .telegram_bot import run_bot
        click.echo("Starting StudyNext Telegram bot...")
        click.echo("Press Ctrl+C to stop")
        run_bot()
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nBot stopped.")


if __name__ == "__main__":
    main()
