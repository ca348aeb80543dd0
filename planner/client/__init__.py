"""
Planner Client.

Authenticated HTTP client for the planner API and the screen
controllers that drive the app's views.
"""

from planner.client.api import ApiError, PlannerClient

__all__ = ["ApiError", "PlannerClient"]
