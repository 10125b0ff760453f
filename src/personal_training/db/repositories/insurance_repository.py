"""File-backed repository for insurance claims."""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from ...models.insurance import MedicalInsurance, to_decimal
from .base import FileRepository


class FinancialSummary(BaseModel):
    """Money totals over a set of claims."""
    claims: int = 0
    active: int = 0
    total_covered: Decimal = Decimal("0")
    total_patient: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.total_covered + self.total_patient

    @property
    def coverage_pct(self) -> float:
        """Share of the grand total paid by insurers."""
        if self.total <= 0:
            return 0.0
        return float(self.total_covered / self.total * 100)


def _in_range(value: Decimal, minimum, maximum) -> bool:
    if minimum is not None and value < to_decimal(minimum):
        return False
    if maximum is not None and value > to_decimal(maximum):
        return False
    return True


class InsuranceRepository(FileRepository[MedicalInsurance]):
    """Claims ordered by application date, newest first."""

    entity_name = "Seguro"
    sort_descending = True

    def _deserialize(self, data: dict) -> MedicalInsurance:
        return MedicalInsurance.from_dict(data)

    def _sort_key(self, entity: MedicalInsurance):
        return entity.applied_on

    def find_by_insurer(self, insurer: str) -> List[MedicalInsurance]:
        needle = (insurer or "").strip().lower()
        if not needle:
            return []
        return self._find(lambda s: needle in s.insurer_name.lower())

    def find_by_athlete(self, athlete_name: str) -> List[MedicalInsurance]:
        needle = (athlete_name or "").strip().lower()
        return self._find(lambda s: s.athlete_name.lower() == needle)

    def find_by_amount_covered(self, minimum=None, maximum=None) -> List[MedicalInsurance]:
        return self._find(lambda s: _in_range(s.amount_covered, minimum, maximum))

    def find_by_amount_patient(self, minimum=None, maximum=None) -> List[MedicalInsurance]:
        return self._find(lambda s: _in_range(s.amount_patient, minimum, maximum))

    def find_by_total_range(self, minimum=None, maximum=None) -> List[MedicalInsurance]:
        return self._find(lambda s: _in_range(s.total_amount, minimum, maximum))

    def find_active(self) -> List[MedicalInsurance]:
        return self._find(lambda s: s.is_active)

    def financial_summary(self, athlete_name: Optional[str] = None) -> FinancialSummary:
        claims = self.get_all() if athlete_name is None else self.find_by_athlete(athlete_name)
        return FinancialSummary(
            claims=len(claims),
            active=sum(1 for s in claims if s.is_active),
            total_covered=sum((s.amount_covered for s in claims), Decimal("0")),
            total_patient=sum((s.amount_patient for s in claims), Decimal("0")),
        )
