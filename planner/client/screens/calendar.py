"""
Calendar Screen.

One selected day at a time: its appointments and diet entries, with
forms to add either. A month overview marks the days that have events.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any

from planner.backend.core.logging import get_logger, log_with_source
from planner.client.api import REQUEST_ERRORS, PlannerClient
from planner.client.screens.notices import Notice

logger = get_logger(__name__)

SOURCE = "mobile"
MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")


def _today() -> date:
    return datetime.now(timezone.utc).date()


@dataclass
class CalendarState:
    selected_date: date = field(default_factory=_today)
    appointments: list[dict[str, Any]] = field(default_factory=list)
    diet_entries: list[dict[str, Any]] = field(default_factory=list)
    diet_folders: list[dict[str, Any]] = field(default_factory=list)
    month: dict[str, Any] | None = None
    active_tab: str = "appointments"
    loading: bool = True
    show_new_appointment_modal: bool = False
    show_new_diet_modal: bool = False
    new_appointment_title: str = ""
    new_appointment_description: str = ""
    new_appointment_location: str = ""
    new_diet_meal_type: str = "breakfast"
    new_diet_food_name: str = ""
    new_diet_calories: str = ""
    new_diet_notes: str = ""
    notice: Notice | None = None

    @property
    def total_calories(self) -> int:
        return sum(entry.get("calories") or 0 for entry in self.diet_entries)


class CalendarScreen:
    """Controller for the calendar and diet screen."""

    def __init__(self, client: PlannerClient, selected_date: date | None = None) -> None:
        self.client = client
        self.state = CalendarState()
        if selected_date is not None:
            self.state.selected_date = selected_date

    @property
    def date_key(self) -> str:
        return self.state.selected_date.isoformat()

    async def load(self) -> None:
        await self.load_diet_folders()
        await self.load_day()

    async def load_day(self) -> None:
        """Load appointments and diet entries for the selected day."""
        await self.load_appointments()
        await self.load_diet_entries()

    async def load_appointments(self) -> None:
        day = self.date_key
        log_with_source(logger, SOURCE, "debug", "Loading appointments", date=day)
        try:
            self.state.appointments = await self.client.list_appointments(start_date=day, end_date=day)
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "error", "Failed to load appointments", error=str(e))
            self.state.notice = Notice.error("Failed to load appointments. Please try again.")
        finally:
            self.state.loading = False

    async def load_diet_entries(self) -> None:
        day = self.date_key
        log_with_source(logger, SOURCE, "debug", "Loading diet entries", date=day)
        try:
            self.state.diet_entries = await self.client.list_diet_entries(start_date=day, end_date=day)
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "error", "Failed to load diet entries", error=str(e))
            self.state.notice = Notice.error("Failed to load diet entries. Please try again.")

    async def load_diet_folders(self) -> None:
        try:
            self.state.diet_folders = await self.client.list_folders(type="diet")
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "warning", "Failed to load diet folders", error=str(e))

    async def load_month(self, year_month: str | None = None) -> None:
        """Load the month overview, defaulting to the selected day's month."""
        year_month = year_month or self.state.selected_date.strftime("%Y-%m")
        try:
            self.state.month = await self.client.calendar_month(year_month)
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "error", "Failed to load month", error=str(e))
            self.state.notice = Notice.error("Failed to load the month overview. Please try again.")

    async def change_date(self, days: int) -> None:
        """Move the selection by a number of days and reload."""
        self.state.selected_date += timedelta(days=days)
        await self.load_day()

    async def select_date(self, selected: date) -> None:
        self.state.selected_date = selected
        await self.load_day()

    def switch_tab(self, tab: str) -> None:
        self.state.active_tab = tab

    def select_meal_type(self, meal_type: str) -> None:
        if meal_type not in MEAL_TYPES:
            raise ValueError(f"Unknown meal type: {meal_type!r}")
        self.state.new_diet_meal_type = meal_type

    def _selected_instant(self) -> str:
        now = datetime.now(timezone.utc)
        instant = datetime.combine(self.state.selected_date, now.time())
        return instant.isoformat(timespec="milliseconds") + "Z"

    async def create_appointment(self) -> dict[str, Any] | None:
        """Create an appointment on the selected day from the form."""
        title = self.state.new_appointment_title.strip()
        if not title:
            self.state.notice = Notice.error("Please enter an appointment title")
            return None

        payload: dict[str, Any] = {"title": title, "date": self._selected_instant()}
        if self.state.new_appointment_description.strip():
            payload["description"] = self.state.new_appointment_description
        if self.state.new_appointment_location.strip():
            payload["location"] = self.state.new_appointment_location

        try:
            appointment = await self.client.create_appointment(payload)
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "error", "Failed to create appointment", error=str(e))
            self.state.notice = Notice.error("Failed to create appointment. Please try again.")
            return None

        self.state.appointments = [*self.state.appointments, appointment]
        self.state.new_appointment_title = ""
        self.state.new_appointment_description = ""
        self.state.new_appointment_location = ""
        self.state.show_new_appointment_modal = False
        self.state.notice = Notice.success("Appointment created successfully!")
        return appointment

    async def create_diet_entry(self, folder_id: str | None = None) -> dict[str, Any] | None:
        """Log a diet entry on the selected day from the form."""
        food_name = self.state.new_diet_food_name.strip()
        if not food_name:
            self.state.notice = Notice.error("Please enter a food name")
            return None

        payload: dict[str, Any] = {
            "mealType": self.state.new_diet_meal_type,
            "foodName": food_name,
            "date": self._selected_instant(),
        }
        calories = self.state.new_diet_calories.strip()
        if calories:
            try:
                payload["calories"] = int(calories)
            except ValueError:
                self.state.notice = Notice.error("Calories must be a whole number")
                return None
        if self.state.new_diet_notes.strip():
            payload["notes"] = self.state.new_diet_notes
        if folder_id:
            payload["folderId"] = folder_id

        try:
            entry = await self.client.create_diet_entry(payload)
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "error", "Failed to create diet entry", error=str(e))
            self.state.notice = Notice.error("Failed to create diet entry. Please try again.")
            return None

        self.state.diet_entries = [*self.state.diet_entries, entry]
        self.state.new_diet_food_name = ""
        self.state.new_diet_calories = ""
        self.state.new_diet_notes = ""
        self.state.show_new_diet_modal = False
        self.state.notice = Notice.success("Diet entry added successfully!")
        return entry

    async def delete_appointment(self, appointment_id: str) -> bool:
        try:
            await self.client.delete_appointment(appointment_id)
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "error", "Failed to delete appointment", error=str(e))
            self.state.notice = Notice.error("Failed to delete appointment. Please try again.")
            return False

        self.state.appointments = [a for a in self.state.appointments if a["id"] != appointment_id]
        return True

    async def delete_diet_entry(self, entry_id: str) -> bool:
        try:
            await self.client.delete_diet_entry(entry_id)
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "error", "Failed to delete diet entry", error=str(e))
            self.state.notice = Notice.error("Failed to delete diet entry. Please try again.")
            return False

        self.state.diet_entries = [e for e in self.state.diet_entries if e["id"] != entry_id]
        return True
