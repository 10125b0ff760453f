"""Application state shared by the CLI screens."""

import logging
from typing import Optional, TYPE_CHECKING

from .models.athlete import Athlete

if TYPE_CHECKING:
    from .services.athlete_manager import AthleteManager

logger = logging.getLogger(__name__)


class AppState:
    """
    Holds the active athlete pointer.

    Only the id is kept; the athlete itself is always re-read through the
    manager so the pointer never serves stale data.
    """

    def __init__(self, active_athlete_id: Optional[str] = None) -> None:
        self.active_athlete_id = active_athlete_id

    def select(self, athlete: Optional[Athlete]) -> None:
        self.active_athlete_id = athlete.id if athlete is not None else None
        logger.debug(f"Active athlete set to {self.active_athlete_id}")

    def active(self, manager: "AthleteManager") -> Optional[Athlete]:
        """The active athlete, or None if unset or no longer stored."""
        if self.active_athlete_id is None:
            return None
        return manager.repository.get_by_id(self.active_athlete_id)

    def on_athlete_added(self, athlete: Athlete) -> None:
        """Auto-select the first athlete added when nobody is active."""
        if self.active_athlete_id is None:
            self.select(athlete)

    def on_athlete_deleted(self, manager: "AthleteManager") -> None:
        """Reassign to the first remaining athlete by name if the active one is gone."""
        if self.active_athlete_id is not None and manager.repository.exists(self.active_athlete_id):
            return
        remaining = manager.list_all()
        self.select(remaining[0] if remaining else None)
