"""Tests for dashboard assembly and row display."""

from datetime import datetime, timedelta, timezone

import pytest

from studynext.core.assignments import Assignment, Priority
from studynext.core.dashboard import (
    assemble_dashboard,
    format_dashboard,
    greeting,
    status_message,
)
from studynext.core.display import format_assignment_line, priority_color, status_label
from studynext.core.gamification import Profile
from studynext.core.triage import Bucket


@pytest.fixture
def profile():
    return Profile(uid="u1", display_name="Sam Rivera", xp=1250, level=2, streak=3)


@pytest.fixture
def homework():
    return [
        Assignment(id="1", subject="Math", title="Worksheet", due=datetime(2026, 2, 3), priority=Priority.HIGH),
        Assignment(id="2", subject="English", title="Read ch. 4", due=datetime(2026, 2, 5), priority=Priority.LOW),
        Assignment(id="3", subject="Physics", title="Problem set", due=datetime(2026, 2, 6)),
        Assignment(id="4", subject="Art", title="Portfolio", due=datetime(2026, 2, 12)),
        Assignment(id="5", subject="Math", title="Quiz prep", due=datetime(2026, 2, 4), completed=True),
    ]


class TestGreeting:
    @pytest.mark.parametrize(
        "hour,start",
        [
            (5, "Good morning"),
            (11, "Good morning"),
            (12, "Good afternoon"),
            (17, "Good evening"),
            (20, "Good evening"),
            (21, "It's late"),
            (3, "It's late"),
        ],
    )
    def test_by_hour(self, hour, start):
        assert greeting("Sam", hour).startswith(start)


class TestStatusMessage:
    def test_clear(self):
        assert "clear" in status_message(0)

    def test_couple(self):
        assert "couple" in status_message(2)

    def test_many(self):
        assert status_message(5) == "You have 5 tasks synced. Let's take them one by one."


class TestAssembleDashboard:
    def test_afternoon(self, homework, profile):
        data = assemble_dashboard(homework, profile, datetime(2026, 2, 5, 14, 0))
        assert data.greeting == "Good afternoon, Sam. How's your energy?"
        assert [a.id for a in data.triage.visible] == ["1", "2", "3", "4"]
        assert data.level_progress == 25

    def test_tonight_mode_hides_far_items(self, homework, profile):
        data = assemble_dashboard(homework, profile, datetime(2026, 2, 5, 20, 0))
        assert data.triage.tonight_mode is True
        assert [a.id for a in data.triage.visible] == ["1", "2", "3"]

    def test_custom_tonight_hour(self, homework, profile):
        data = assemble_dashboard(homework, profile, datetime(2026, 2, 5, 20, 0), tonight_start_hour=22)
        assert data.triage.tonight_mode is False

    def test_format_includes_counts(self, homework, profile):
        text = format_dashboard(assemble_dashboard(homework, profile, datetime(2026, 2, 5, 14, 0)))
        assert "Due today: 1 | Overdue: 1 | Completed: 1" in text
        assert "Stage 2 | 3d streak | 1250 Growth" in text
        assert "Worksheet" in text

    def test_format_tonight_empty(self, profile):
        text = format_dashboard(assemble_dashboard([], profile, datetime(2026, 2, 5, 20, 0)))
        assert "Tonight Mode" in text
        assert "free tonight" in text

    def test_format_all_caught_up(self, profile):
        text = format_dashboard(assemble_dashboard([], profile, datetime(2026, 2, 5, 10, 0)))
        assert "all caught up" in text


class TestDisplay:
    def test_status_labels(self):
        a = Assignment(id="1", subject="", title="", due=datetime(2026, 2, 6))
        assert status_label(a, Bucket.OVERDUE) == "Overdue"
        assert status_label(a, Bucket.TODAY) == "Today"
        assert status_label(a, Bucket.UPCOMING) == "Feb 6"

    def test_done_label(self):
        a = Assignment(id="1", subject="", title="", due=datetime(2026, 2, 6), completed=True)
        assert status_label(a, None) == "Done"

    def test_upcoming_date_in_reference_zone(self):
        now = datetime(2026, 2, 5, 10, 0, tzinfo=timezone(timedelta(hours=-5)))
        a = Assignment(id="1", subject="", title="", due=datetime(2026, 2, 7, 3, 0, tzinfo=timezone.utc))
        assert status_label(a, Bucket.UPCOMING, now) == "Feb 6"
        assert status_label(a, Bucket.UPCOMING) == "Feb 7"

    def test_priority_color(self):
        base = dict(id="1", subject="", title="", due=datetime(2026, 2, 6))
        assert priority_color(Assignment(**base, priority=Priority.HIGH)) == "danger"
        assert priority_color(Assignment(**base)) == "border-heavy"
        assert priority_color(Assignment(**base, priority=Priority.LOW, color="#123456")) == "#123456"

    def test_format_line(self):
        a = Assignment(id="7", subject="Math", title="Worksheet", due=datetime(2026, 2, 5), priority=Priority.HIGH)
        line = format_assignment_line(a, datetime(2026, 2, 5, 9, 0))
        assert line == "[ ] Math: Worksheet (Today, priority: high, id: 7)"
