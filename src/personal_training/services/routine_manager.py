"""Routine management: CRUD, searches and injury follow-up."""

from datetime import date, timedelta
import logging
from typing import Callable, List, Optional, Sequence, Tuple, TYPE_CHECKING

from ..db.repositories.routine_repository import RoutineFilter, RoutineRepository, RoutineSummary
from ..models.enums import Intensity, MuscleGroup, RoutineKind
from ..models.insurance import MedicalInsurance
from ..models.routine import Routine
from ..validators.routine_validator import RoutineValidator
from .base import ChangeNotifier, Confirmer, EntityManager

if TYPE_CHECKING:
    from .insurance_manager import InsuranceManager

# Routines expiring within this many days need attention
EXPIRY_WARNING_DAYS = 7


class RoutineManager(EntityManager[Routine]):
    entity_label = "rutina"

    def __init__(
        self,
        repository: RoutineRepository,
        validator: Optional[RoutineValidator] = None,
        notifiers: Optional[Sequence[ChangeNotifier]] = None,
        confirmer: Optional[Confirmer] = None,
        logger: Optional[logging.Logger] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        super().__init__(
            repository, validator or RoutineValidator(today=today), notifiers, confirmer, logger
        )
        self._today = today

    def list_for_athlete(self, athlete_name: str) -> List[Routine]:
        return self.repository.find_by_athlete(athlete_name)

    def search(self, athlete_name: Optional[str], term: str) -> List[Routine]:
        """Free-text search, optionally restricted to one athlete."""
        return self.repository.find_by_criteria(
            {RoutineFilter.ATHLETE: athlete_name, RoutineFilter.TERM: term}
        )

    def find_by_date_range(self, start: date, end: date) -> List[Routine]:
        return self.repository.find_by_date_range(start, end)

    def find_by_intensity(self, intensity: "Intensity | str") -> List[Routine]:
        return self.repository.find_by_intensity(intensity)

    def combined_search(
        self,
        kind: "RoutineKind | str | None" = None,
        intensity: "Intensity | str | None" = None,
        muscle_group: "MuscleGroup | str | None" = None,
        athlete_name: Optional[str] = None,
    ) -> List[Routine]:
        """Routines matching every given criterion; ``None`` means any."""
        return self.repository.find_by_criteria({
            RoutineFilter.KIND: kind or None,
            RoutineFilter.INTENSITY: intensity or None,
            RoutineFilter.MUSCLE_GROUP: muscle_group or None,
            RoutineFilter.ATHLETE: athlete_name or None,
        })

    def needing_attention(self, athlete_name: str) -> List[Routine]:
        """Routines expiring within a week, or with reported injuries."""
        today = self._today()
        horizon = today + timedelta(days=EXPIRY_WARNING_DAYS)

        def needs_attention(routine: Routine) -> bool:
            expiring = routine.expires_on is not None and today <= routine.expires_on <= horizon
            return expiring or routine.has_injury

        return [r for r in self.list_for_athlete(athlete_name) if needs_attention(r)]

    def summary(self, athlete_name: Optional[str] = None) -> RoutineSummary:
        return self.repository.summary(athlete_name)

    def add_with_claim(
        self,
        routine: Routine,
        claim: MedicalInsurance,
        insurance_manager: "InsuranceManager",
    ) -> Tuple[Routine, MedicalInsurance]:
        """
        Record a routine together with the claim opened for its injury.

        The routine is stored first, already linked to the claim id, then
        the claim. The two writes are independent: if the claim is
        rejected the routine stays stored with a dangling link.
        """
        routine.insurance_id = claim.id
        stored_routine = self.add(routine)
        stored_claim = insurance_manager.add(claim)
        return stored_routine, stored_claim
