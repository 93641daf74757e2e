"""Pure dashboard assembly logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime

from .assignments import Assignment
from .calendar import SUNDAY
from .display import format_assignment_line
from .gamification import Profile, level_progress
from .triage import TONIGHT_START_HOUR, TriageResult, triage


@dataclass
class DashboardData:
    """Assembled dashboard data ready for formatting."""

    now: datetime
    greeting: str
    status_message: str
    triage: TriageResult
    profile: Profile
    level_progress: float


def greeting(name: str, hour: int) -> str:
    """Supportive greeting for the time of day."""
    if 5 <= hour < 12:
        return f"Good morning, {name}. Ready for 10 minutes?"
    if 12 <= hour < 17:
        return f"Good afternoon, {name}. How's your energy?"
    if 17 <= hour < 21:
        return f"Good evening, {name}. Let's start small tonight."
    return f"It's late, {name}. Rest is productive too."


def status_message(active_count: int) -> str:
    if active_count == 0:
        return "Your schedule is clear. Take this time for yourself."
    if active_count <= 2:
        return "Just a couple of things to look at. You've got this."
    return f"You have {active_count} tasks synced. Let's take them one by one."


def assemble_dashboard(
    assignments: list[Assignment],
    profile: Profile,
    now: datetime,
    tonight_start_hour: int = TONIGHT_START_HOUR,
    week_start: int = SUNDAY,
) -> DashboardData:
    """
    Assemble dashboard data from raw assignments and the user's profile.

    Pure function - no I/O. Handles all filtering, sorting, bucketing.
    """
    result = triage(assignments, now, tonight_start_hour, week_start)
    return DashboardData(
        now=now,
        greeting=greeting(profile.first_name, now.hour),
        status_message=status_message(len(result.active)),
        triage=result,
        profile=profile,
        level_progress=level_progress(profile.xp),
    )


def format_dashboard(data: DashboardData) -> str:
    """
    Format dashboard data as plain text / markdown.

    Pure function - no I/O.
    """
    t = data.triage
    p = data.profile

    if t.visible:
        tasks_md = "\n".join(f"- {format_assignment_line(a, data.now)}" for a in t.visible)
    elif t.tonight_mode:
        tasks_md = "You're free tonight. Good job staying ahead. Enjoy your evening!"
    else:
        tasks_md = "You're all caught up! No assignments due at the moment."

    header = "### Tonight Mode: Focusing on what matters now" if t.tonight_mode else "### Up Next"

    return f"""{data.greeting}
{data.status_message}

Stage {p.level} | {p.streak}d streak | {p.xp} Growth ({data.level_progress:.0f}% to next stage)
Due today: {len(t.today)} | Overdue: {len(t.overdue)} | Completed: {t.completed_count}
This week: {t.week.completed}/{t.week.total} done

{header}
{tasks_md}"""
