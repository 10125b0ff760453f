"""Business rules for athletes."""

from enum import Enum
import re
from typing import Dict, List, Optional

from ..models.athlete import Athlete
from ..models.enums import Level
from .base import Rule, Validator

NAME_PATTERN = re.compile(r"^[a-zA-ZáéíóúÁÉÍÓÚñÑüÜ\s]{2,50}$")
FORBIDDEN_NAME_WORDS = ("admin", "test", "null", "undefined")

MIN_WEIGHT_KG, MAX_WEIGHT_KG = 10.0, 500.0
MIN_HEIGHT_M, MAX_HEIGHT_M = 0.5, 2.5
MIN_GOALS_LEN, MAX_GOALS_LEN = 3, 200
MIN_BMI, MAX_BMI = 10.0, 60.0


class AthleteRule(str, Enum):
    NAME = "name"
    WEIGHT = "weight"
    HEIGHT = "height"
    LEVEL = "level"
    GOALS = "goals"
    BMI = "bmi"


def is_valid_name(name: str) -> bool:
    if not name or not name.strip():
        return False
    if not NAME_PATTERN.match(name):
        return False
    lowered = name.lower()
    return not any(word in lowered for word in FORBIDDEN_NAME_WORDS)


class AthleteValidator(Validator[Athlete]):
    """Validates athletes against realistic human ranges."""

    missing_message = "El atleta no puede ser nulo."

    def _build_rules(self) -> Dict[AthleteRule, Rule]:
        levels = ", ".join(level.value for level in Level)
        return {
            AthleteRule.NAME: Rule(
                lambda a: is_valid_name(a.name),
                lambda a: (
                    f"Nombre '{a.name}' no es válido. Debe contener solo letras y "
                    f"espacios (2-50 caracteres)"
                ),
            ),
            AthleteRule.WEIGHT: Rule(
                lambda a: MIN_WEIGHT_KG <= a.weight_kg <= MAX_WEIGHT_KG,
                lambda a: f"Peso {a.weight_kg:g} kg está fuera del rango válido (10-500 kg)",
            ),
            AthleteRule.HEIGHT: Rule(
                lambda a: MIN_HEIGHT_M <= a.height_m <= MAX_HEIGHT_M,
                lambda a: f"Altura {a.height_m:g} m está fuera del rango válido (0.5-2.5 m)",
            ),
            AthleteRule.LEVEL: Rule(
                lambda a: isinstance(a.level, Level),
                lambda a: f"Nivel '{a.level}' no es válido. Debe ser: {levels}",
            ),
            AthleteRule.GOALS: Rule(
                lambda a: MIN_GOALS_LEN <= len((a.goals or "").strip()) <= MAX_GOALS_LEN,
                lambda a: f"Objetivos '{a.goals}' deben tener entre 3 y 200 caracteres",
            ),
            AthleteRule.BMI: Rule(
                lambda a: MIN_BMI <= a.bmi <= MAX_BMI,
                lambda a: f"IMC {a.bmi:.1f} indica valores extremos. Revisar peso y altura",
            ),
        }

    def consistency_warnings(self, athlete: Optional[Athlete]) -> List[str]:
        """Non-blocking advisories about suspicious but valid combinations."""
        if athlete is None:
            return []
        warnings = []
        bmi = athlete.bmi
        goals = athlete.goals.lower()
        if bmi > 30 and athlete.level is Level.ADVANCED:
            warnings.append("ADVERTENCIA: IMC alto para nivel avanzado. Verificar datos.")
        if ("pérdida" in goals or "perdida" in goals) and bmi < 18.5:
            warnings.append("ADVERTENCIA: Objetivo de pérdida de peso con IMC bajo.")
        if "ganancia" in goals and bmi > 25:
            warnings.append("ADVERTENCIA: Objetivo de ganancia de peso con IMC alto.")
        if athlete.weight_kg < 30 and athlete.height_m < 1.2:
            warnings.append("ADVERTENCIA: Datos sugieren atleta menor de edad. Verificar permisos.")
        return warnings
