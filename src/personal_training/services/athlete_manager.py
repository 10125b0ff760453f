"""Athlete management: CRUD with uniqueness rules, search and overview."""

from collections import Counter
import logging
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field, field_validator

from ..db.repositories.athlete_repository import AthleteRepository
from ..exceptions import DuplicateError
from ..models.athlete import Athlete
from ..models.enums import Level
from ..validators.athlete_validator import AthleteValidator
from .base import ChangeNotifier, Confirmer, EntityManager


class AthleteSearchCriteria(BaseModel):
    """Optional filters for ``AthleteManager.search``; unset fields are ignored."""
    name: Optional[str] = None
    level: Optional[Level] = None
    goals: Optional[str] = None
    bmi_min: Optional[float] = Field(None, ge=0)
    bmi_max: Optional[float] = Field(None, ge=0)

    @field_validator("level", mode="before")
    @classmethod
    def parse_level(cls, v):
        """Accept Spanish labels or English names."""
        if v is None or v == "":
            return None
        return Level.parse(v)

    @field_validator("name", "goals")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip().lower()

    def matches(self, athlete: Athlete) -> bool:
        if self.name and self.name not in athlete.name.lower():
            return False
        if self.level and athlete.level is not self.level:
            return False
        if self.goals and self.goals not in athlete.goals.lower():
            return False
        if self.bmi_min is not None and athlete.bmi < self.bmi_min:
            return False
        if self.bmi_max is not None and athlete.bmi > self.bmi_max:
            return False
        return True


class AthleteOverview(BaseModel):
    """Aggregate figures over every registered athlete."""
    total: int = 0
    average_weight_kg: float = 0.0
    average_height_m: float = 0.0
    average_bmi: float = 0.0
    min_bmi: float = 0.0
    max_bmi: float = 0.0
    by_level: Dict[str, int] = Field(default_factory=dict)
    top_goals: Dict[str, int] = Field(default_factory=dict)


class CompatibilityReport(BaseModel):
    compatible: bool = True
    recommendations: List[str] = Field(default_factory=list)


class AthleteManager(EntityManager[Athlete]):
    """
    Manages athletes.

    Names are unique case-insensitively: adding "ana" when "Ana" exists,
    or renaming someone to an existing name, raises ``DuplicateError``.
    """

    entity_label = "atleta"

    def __init__(
        self,
        repository: AthleteRepository,
        validator: Optional[AthleteValidator] = None,
        notifiers: Optional[Sequence[ChangeNotifier]] = None,
        confirmer: Optional[Confirmer] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(repository, validator or AthleteValidator(), notifiers, confirmer, logger)

    def _check_conflicts(self, entity: Athlete, exclude_id: Optional[str] = None) -> None:
        existing = self.repository.find_by_name(entity.name)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateError(
                f"Ya existe un atleta con el nombre '{entity.name}'",
                details={"name": entity.name, "existing_id": existing.id},
            )

    # -- queries ----------------------------------------------------------

    def find_by_name(self, name: str) -> Optional[Athlete]:
        return self.repository.find_by_name(name)

    def search(self, criteria: "AthleteSearchCriteria | dict") -> List[Athlete]:
        if not isinstance(criteria, AthleteSearchCriteria):
            criteria = AthleteSearchCriteria(**criteria)
        return [a for a in self.repository.get_all() if criteria.matches(a)]

    def search_text(self, term: str) -> List[Athlete]:
        return self.repository.search(term)

    def consistency_warnings(self, athlete: Athlete) -> List[str]:
        return self.validator.consistency_warnings(athlete)

    def general_statistics(self) -> AthleteOverview:
        athletes = self.repository.get_all()
        if not athletes:
            return AthleteOverview()
        bmis = [a.bmi for a in athletes]
        total = len(athletes)
        return AthleteOverview(
            total=total,
            average_weight_kg=round(sum(a.weight_kg for a in athletes) / total, 2),
            average_height_m=round(sum(a.height_m for a in athletes) / total, 2),
            average_bmi=round(sum(bmis) / total, 2),
            min_bmi=min(bmis),
            max_bmi=max(bmis),
            by_level=dict(Counter(a.level.value for a in athletes)),
            top_goals=dict(Counter(a.goals for a in athletes).most_common(3)),
        )

    def evaluate_compatibility(self, athlete: Athlete, training_type: str) -> CompatibilityReport:
        """Advice on whether ``training_type`` suits the athlete's body and goals."""
        if athlete is None:
            return CompatibilityReport(compatible=False, recommendations=["Atleta no válido"])

        report = CompatibilityReport()
        training = (training_type or "").strip().lower()

        if athlete.bmi > 30 and training == "fuerza":
            report.recommendations.append(
                "Considerar comenzar con cardio para reducir peso antes de entrenamiento intenso de fuerza"
            )
        if athlete.bmi < 18.5 and training == "cardio":
            report.recommendations.append(
                "Considerar agregar entrenamiento de fuerza para ganancia de masa muscular"
            )
        if athlete.level is Level.BEGINNER and "alta intensidad" in training:
            report.compatible = False
            report.recommendations.append(
                "Comenzar con entrenamientos de baja intensidad y progresar gradualmente"
            )
        if not athlete.is_compatible_with(training_type):
            report.recommendations.append(
                f"El entrenamiento {training_type} no está alineado con los objetivos actuales"
            )
        if not report.recommendations:
            report.recommendations.append("Atleta compatible con el tipo de entrenamiento seleccionado")
        return report
