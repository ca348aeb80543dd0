"""
Database Models.

Importing this package registers every table on Base.metadata.
"""

from planner.backend.models.appointment import Appointment
from planner.backend.models.base import Base
from planner.backend.models.diet import DietEntry, DietPlan
from planner.backend.models.folder import Folder
from planner.backend.models.note import Note, NoteMedia

__all__ = [
    "Appointment",
    "Base",
    "DietEntry",
    "DietPlan",
    "Folder",
    "Note",
    "NoteMedia",
]
