"""Functional core - pure business logic with no I/O."""

from .assignments import Assignment, Priority, InvalidAssignmentError, parse_assignments
from .triage import Bucket, TriageResult, WeekSummary, triage, classify, sort_for_display
from .gesture import GestureState, SwipeGesture
from .dashboard import DashboardData, assemble_dashboard, format_dashboard
from .gamification import Profile, XPAward, award_xp

__all__ = [
    # Assignments
    "Assignment",
    "Priority",
    "InvalidAssignmentError",
    "parse_assignments",
    # Triage
    "Bucket",
    "TriageResult",
    "WeekSummary",
    "triage",
    "classify",
    "sort_for_display",
    # Gesture
    "GestureState",
    "SwipeGesture",
    # Dashboard
    "DashboardData",
    "assemble_dashboard",
    "format_dashboard",
    # Gamification
    "Profile",
    "XPAward",
    "award_xp",
]
