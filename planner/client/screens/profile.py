"""
Profile Screen.

Usage statistics and the active diet plan.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any

from planner.backend.core.logging import get_logger, log_with_source
from planner.client.api import REQUEST_ERRORS, PlannerClient

logger = get_logger(__name__)

SOURCE = "mobile"


@dataclass
class ProfileStats:
    notes_count: int = 0
    appointments_count: int = 0
    folders_count: int = 0
    diet_entries_count: int = 0


@dataclass
class ProfileState:
    stats: ProfileStats = field(default_factory=ProfileStats)
    active_plan: dict[str, Any] | None = None
    loading: bool = True


class ProfileScreen:
    """
    Controller for the profile screen.

    Statistics are informational: on any failure the counts stay at zero
    and nothing is shown to the user.
    """

    def __init__(self, client: PlannerClient) -> None:
        self.client = client
        self.state = ProfileState()

    async def load(self) -> None:
        await self.load_stats()
        await self.load_active_plan()

    async def load_stats(self) -> None:
        self.state.loading = True
        try:
            notes, appointments, folders, diet_entries = await asyncio.gather(
                self.client.list_notes(),
                self.client.list_appointments(),
                self.client.list_folders(),
                self.client.list_diet_entries(),
            )
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "warning", "Failed to load stats", error=str(e))
        else:
            self.state.stats = ProfileStats(
                notes_count=len(notes),
                appointments_count=len(appointments),
                folders_count=len(folders),
                diet_entries_count=len(diet_entries),
            )
        finally:
            self.state.loading = False

    async def load_active_plan(self) -> None:
        try:
            self.state.active_plan = await self.client.get_active_diet_plan()
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "warning", "Failed to load active diet plan", error=str(e))
