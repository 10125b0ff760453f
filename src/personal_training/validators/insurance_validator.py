"""Business rules for insurance claims."""

from enum import Enum
from typing import Dict

from ..models.insurance import MedicalInsurance
from .base import Rule, Validator


class InsuranceRule(str, Enum):
    INSURER = "insurer"
    AMOUNTS = "amounts"
    AMOUNT_POSITIVE = "amount_positive"
    INJURY = "injury"
    ATHLETE = "athlete"
    DATES = "dates"


class InsuranceValidator(Validator[MedicalInsurance]):
    missing_message = "El seguro no puede ser nulo"

    def _build_rules(self) -> Dict[InsuranceRule, Rule]:
        return {
            InsuranceRule.INSURER: Rule(
                lambda s: bool(s.insurer_name.strip()),
                lambda s: "El nombre del seguro es requerido",
            ),
            InsuranceRule.AMOUNTS: Rule(
                lambda s: s.amount_covered >= 0 and s.amount_patient >= 0,
                lambda s: "Los montos no pueden ser negativos",
            ),
            InsuranceRule.AMOUNT_POSITIVE: Rule(
                lambda s: s.amount_covered > 0 or s.amount_patient > 0,
                lambda s: "Al menos uno de los montos debe ser mayor a cero",
            ),
            InsuranceRule.INJURY: Rule(
                lambda s: bool(s.injury.strip()),
                lambda s: "La lesión tratada es requerida",
            ),
            InsuranceRule.ATHLETE: Rule(
                lambda s: bool(s.athlete_name.strip()),
                lambda s: "El nombre del atleta es requerido",
            ),
            InsuranceRule.DATES: Rule(
                self._dates_are_consistent,
                lambda s: "Fechas inválidas o inconsistentes",
            ),
        }

    def _dates_are_consistent(self, claim: MedicalInsurance) -> bool:
        if claim.applied_on > self.today():
            return False
        if claim.completed_on is not None:
            return claim.completed_on > claim.applied_on
        return True
