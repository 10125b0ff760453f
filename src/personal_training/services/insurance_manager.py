"""Insurance claim management: CRUD, searches and lifecycle transitions."""

from datetime import date
import logging
from typing import Callable, List, Optional, Sequence

from ..db.repositories.insurance_repository import FinancialSummary, InsuranceRepository
from ..models.insurance import MedicalInsurance
from ..validators.insurance_validator import InsuranceValidator
from .base import ChangeNotifier, Confirmer, EntityManager


class InsuranceManager(EntityManager[MedicalInsurance]):
    """
    Manages insurance claims.

    Lifecycle transitions (complete, suspend, reactivate, cancel) build the
    modified claim and go through the regular ``update`` path, so they are
    validated, confirmed and notified like any other change.
    """

    entity_label = "seguro"

    def __init__(
        self,
        repository: InsuranceRepository,
        validator: Optional[InsuranceValidator] = None,
        notifiers: Optional[Sequence[ChangeNotifier]] = None,
        confirmer: Optional[Confirmer] = None,
        logger: Optional[logging.Logger] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        super().__init__(
            repository, validator or InsuranceValidator(today=today), notifiers, confirmer, logger
        )
        self._today = today

    # -- searches -----------------------------------------------------------

    def search(self, term: str) -> List[MedicalInsurance]:
        return [s for s in self.repository.get_all() if s.matches(term)]

    def search_by_insurer(self, insurer: str) -> List[MedicalInsurance]:
        return self.repository.find_by_insurer(insurer)

    def search_by_amount_covered(self, minimum=None, maximum=None) -> List[MedicalInsurance]:
        return self.repository.find_by_amount_covered(minimum, maximum)

    def search_by_amount_patient(self, minimum=None, maximum=None) -> List[MedicalInsurance]:
        return self.repository.find_by_amount_patient(minimum, maximum)

    def search_by_athlete(self, athlete_name: str) -> List[MedicalInsurance]:
        return self.repository.find_by_athlete(athlete_name)

    def search_by_total_range(self, minimum=None, maximum=None) -> List[MedicalInsurance]:
        return self.repository.find_by_total_range(minimum, maximum)

    def list_active(self) -> List[MedicalInsurance]:
        return self.repository.find_active()

    def financial_summary(self, athlete_name: Optional[str] = None) -> FinancialSummary:
        return self.repository.financial_summary(athlete_name)

    # -- lifecycle ----------------------------------------------------------

    def complete(self, claim_id: str) -> MedicalInsurance:
        """Finish the treatment today."""
        claim = self.get(claim_id)
        return self.update(claim_id, claim.completed(today=self._today()))

    def suspend(self, claim_id: str) -> MedicalInsurance:
        return self.update(claim_id, self.get(claim_id).suspended())

    def reactivate(self, claim_id: str) -> MedicalInsurance:
        return self.update(claim_id, self.get(claim_id).reactivated())

    def cancel(self, claim_id: str) -> MedicalInsurance:
        return self.update(claim_id, self.get(claim_id).cancelled())
