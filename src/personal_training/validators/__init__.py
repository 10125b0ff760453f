"""Rule-table validators for each entity type."""

from .base import Rule, Validator
from .athlete_validator import AthleteRule, AthleteValidator
from .routine_validator import RoutineRule, RoutineValidator
from .insurance_validator import InsuranceRule, InsuranceValidator

__all__ = [
    "Rule",
    "Validator",
    "AthleteRule",
    "AthleteValidator",
    "RoutineRule",
    "RoutineValidator",
    "InsuranceRule",
    "InsuranceValidator",
]
