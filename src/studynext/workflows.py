"""Shared workflow layer between CLI and Telegram.

Each function loads what it needs through the adapters, runs the pure core,
writes back any changes, and returns plain results for the caller to show.
"""

import logging
from datetime import datetime
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .adapters.file_store import FileAssignmentRepository, FileProfileStore, FileReminderLog
from .adapters.http_assignments import (
    AuthenticationError,
    DataSourceError,
    HttpAssignmentRepository,
)
from .config import Config
from .core.assignments import Assignment, Priority, apply_history_limit, count_active, parse_assignments
from .core.calendar import parse_week_start
from .core.dashboard import DashboardData, assemble_dashboard
from .core.gamification import (
    XP_PER_ASSIGNMENT,
    XP_PER_FOCUS_SESSION,
    Profile,
    XPAward,
    award_xp,
    rank_leaderboard,
)
from .core.gesture import SwipeGesture
from .core.reminders import Reminder, due_reminders
from .ports import AssignmentRepository, ProfileStore, ReminderLog, Timer

logger = logging.getLogger(__name__)


class LimitReachedError(Exception):
    """Raised when a free account already has the maximum active assignments."""

    pass


class AssignmentNotFoundError(LookupError):
    """Raised when an id does not match any of the user's assignments."""

    pass


def current_time(config: Config) -> datetime:
    """Now, in the configured timezone."""
    try:
        return datetime.now(ZoneInfo(config.timezone))
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone {config.timezone!r}, using local time")
        return datetime.now()


def get_repository(config: Config) -> AssignmentRepository:
    """Cloud storage for premium users with an API configured, else local files."""
    if config.is_premium and config.api_base_url:
        return HttpAssignmentRepository(config)
    return FileAssignmentRepository(config.data_path)


def get_profile_store(config: Config) -> ProfileStore:
    return FileProfileStore(config.data_path)


def get_reminder_log(config: Config) -> ReminderLog:
    return FileReminderLog(config.data_path)


def get_profile(config: Config) -> Profile:
    """Load the user's profile, creating a default one on first use."""
    store = get_profile_store(config)
    profile = store.get(config.user_id)
    if profile is None:
        profile = Profile(uid=config.user_id, display_name=config.display_name, plan=config.plan)
        store.save(profile)
        logger.info(f"Created profile for {config.user_id}")
    return profile


def load_assignments(config: Config, now: datetime | None = None) -> list[Assignment]:
    """Fetch and parse the user's assignments. Free accounts only see recent history."""
    now = now or current_time(config)
    records = get_repository(config).get_all(config.user_id)
    assignments = parse_assignments(records)
    if not config.is_premium:
        assignments = apply_history_limit(assignments, now, config.history_days)
    return assignments


def load_dashboard(config: Config, now: datetime | None = None) -> DashboardData:
    """Fetch assignments and profile, then assemble the dashboard."""
    now = now or current_time(config)
    return assemble_dashboard(
        load_assignments(config, now),
        get_profile(config),
        now,
        tonight_start_hour=config.tonight_start_hour,
        week_start=parse_week_start(config.week_start_day),
    )


def add_assignment(
    config: Config,
    subject: str,
    title: str,
    due: datetime,
    priority: Priority | None = None,
    color: str | None = None,
) -> str:
    """Create an assignment. Free accounts are capped on active assignments."""
    if not config.is_premium:
        active = count_active(load_assignments(config))
        if active >= config.free_active_limit:
            raise LimitReachedError(
                f"Free plan allows {config.free_active_limit} active assignments. "
                "Complete some or upgrade to add more."
            )

    fields = {
        "subject": subject,
        "title": title,
        "dueDate": due.isoformat(),
        "priority": priority.value if priority else None,
    }
    if color:
        fields["color"] = color
    new_id = get_repository(config).add(config.user_id, fields)
    logger.info(f"Added assignment {new_id}")
    return new_id


def award(config: Config, amount: int, now: datetime | None = None) -> XPAward:
    """Give the user XP and persist the updated profile."""
    now = now or current_time(config)
    profile, result = award_xp(get_profile(config), amount, now)
    get_profile_store(config).save(profile)
    if result.did_level_up:
        logger.info(f"{config.user_id} reached level {result.new_level}")
    return result


def _find_record(repo: AssignmentRepository, config: Config, assignment_id: str) -> dict:
    for record in repo.get_all(config.user_id):
        if str(record.get("id")) == assignment_id:
            return record
    raise AssignmentNotFoundError(f"No assignment with id {assignment_id}")


def set_completed(
    config: Config,
    assignment_id: str,
    completed: bool,
    now: datetime | None = None,
) -> XPAward | None:
    """
    Mark an assignment done or not done in the source of truth.

    XP is only awarded when an open assignment becomes complete. Reopening,
    or asking for the state it is already in, returns None. Unknown ids raise
    AssignmentNotFoundError; source errors propagate and callers reconcile
    by reloading.
    """
    repo = get_repository(config)
    record = _find_record(repo, config, assignment_id)
    if bool(record.get("isCompleted", False)) == completed:
        logger.info(f"Assignment {assignment_id} already {'done' if completed else 'open'}")
        return None

    repo.update(assignment_id, {"isCompleted": completed})
    if not completed:
        return None
    return award(config, XP_PER_ASSIGNMENT, now)


def delete_assignment(config: Config, assignment_id: str) -> None:
    """Remove one of the user's assignments from the source of truth."""
    repo = get_repository(config)
    _find_record(repo, config, assignment_id)
    repo.delete(assignment_id)
    logger.info(f"Deleted assignment {assignment_id}")


def complete_focus_session(config: Config, now: datetime | None = None) -> XPAward:
    """Bonus XP for finishing a focus session."""
    return award(config, XP_PER_FOCUS_SESSION, now)


def leaderboard(config: Config, limit: int = 50) -> list[Profile]:
    return rank_leaderboard(get_profile_store(config).list_all(), limit)


def bind_swipe(
    config: Config,
    assignment: Assignment,
    timer: Timer,
    on_award: Callable[[XPAward | None], None] | None = None,
    on_reload: Callable[[list[Assignment]], None] | None = None,
) -> SwipeGesture:
    """
    Swipe recognizer whose commit toggles the assignment's completion.

    On failure the list is reloaded from the source and handed to `on_reload`
    instead of patching local state.
    """

    def commit() -> None:
        try:
            result = set_completed(config, assignment.id, not assignment.completed)
        except (AssignmentNotFoundError, DataSourceError, AuthenticationError, OSError) as e:
            logger.error(f"Failed to update status of {assignment.id}: {e}")
            if on_reload is not None:
                on_reload(load_assignments(config))
            return
        if on_award is not None:
            on_award(result)

    return SwipeGesture(on_commit=commit, timer=timer)


def collect_reminders(config: Config, now: datetime | None = None) -> list[Reminder]:
    """
    Reminders due now, marked as sent. Premium feature.

    The caller delivers them; each one is only ever returned once.
    """
    if not config.is_premium:
        return []
    now = now or current_time(config)
    log = get_reminder_log(config)

    reminders, notified = due_reminders(load_assignments(config, now), now, log.load(config.user_id))
    if reminders:
        log.save(config.user_id, notified)
        logger.info(f"{len(reminders)} reminder(s) due for {config.user_id}")
    return reminders
