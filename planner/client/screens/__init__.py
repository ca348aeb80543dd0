"""
Screen Controllers.

Each screen owns an explicit view-state dataclass and async actions that
call the API and update that state. State changes only after the server
confirms; failures leave it untouched and set a notice instead.
"""

from planner.client.screens.calendar import CalendarScreen, CalendarState
from planner.client.screens.notes import NotesScreen, NotesState
from planner.client.screens.notices import Notice
from planner.client.screens.profile import ProfileScreen, ProfileState, ProfileStats

__all__ = [
    "CalendarScreen",
    "CalendarState",
    "Notice",
    "NotesScreen",
    "NotesState",
    "ProfileScreen",
    "ProfileState",
    "ProfileStats",
]
