"""Athlete entity."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional
import uuid

from ..exceptions import ValidationError
from ..metrics.body import calculate_bmi, bmi_category
from .enums import Level, RoutineKind
from .fields import number_field, require_mapping, text_field

MAX_WEIGHT_KG = 500.0
MAX_HEIGHT_M = 3.0


@dataclass(eq=False)
class Athlete:
    """
    A person being trained, with physical data and training goals.

    Identity is the opaque ``id``; ``name`` is unique case-insensitively
    across the store (enforced by the athlete manager).
    """
    id: str
    name: str
    weight_kg: float
    height_m: float
    goals: str
    level: Level
    registered_on: date = field(default_factory=date.today)

    def __post_init__(self):
        """Coerce raw values coming from user input or the data file."""
        if isinstance(self.level, str) and not isinstance(self.level, Level):
            self.level = Level.parse(self.level)
        if isinstance(self.registered_on, str):
            self.registered_on = date.fromisoformat(self.registered_on)
        self.name = (self.name or "").strip()
        self.goals = (self.goals or "").strip()

    @classmethod
    def create(
        cls,
        name: str,
        weight_kg: float,
        height_m: float,
        goals: str,
        level: "Level | str",
        registered_on: Optional[date] = None,
    ) -> "Athlete":
        """Factory method: new athlete with a fresh id, validated."""
        athlete = cls(
            id=uuid.uuid4().hex,
            name=name,
            weight_kg=float(weight_kg),
            height_m=float(height_m),
            goals=goals,
            level=Level.parse(level),
            registered_on=registered_on or date.today(),
        )
        athlete.ensure_valid()
        return athlete

    # -- derived values -------------------------------------------------

    @property
    def bmi(self) -> float:
        return calculate_bmi(self.weight_kg, self.height_m)

    @property
    def bmi_category(self) -> str:
        return bmi_category(self.bmi)

    # -- self-check -----------------------------------------------------

    def validation_errors(self) -> List[str]:
        """Every violated invariant, in a stable order."""
        errors = []
        if not self.name:
            errors.append("El nombre es requerido")
        if not 0 < self.weight_kg <= MAX_WEIGHT_KG:
            errors.append("El peso debe estar entre 0 y 500 kg")
        if not 0 < self.height_m <= MAX_HEIGHT_M:
            errors.append("La altura debe estar entre 0 y 3 metros")
        if not self.goals:
            errors.append("Los objetivos son requeridos")
        if not isinstance(self.level, Level):
            errors.append("El nivel debe ser Principiante, Intermedio o Avanzado")
        return errors

    def is_valid(self) -> bool:
        return not self.validation_errors()

    def ensure_valid(self) -> None:
        errors = self.validation_errors()
        if errors:
            raise ValidationError("Datos del atleta inválidos", errors=errors)

    def update_from(self, other: "Athlete") -> None:
        """Replace every mutable field with ``other``'s, after validating it."""
        if other is None:
            raise ValidationError("Los nuevos datos del atleta son requeridos")
        other.ensure_valid()
        self.name = other.name
        self.weight_kg = other.weight_kg
        self.height_m = other.height_m
        self.goals = other.goals
        self.level = other.level

    # -- queries ----------------------------------------------------------

    def matches(self, term: str) -> bool:
        """Case-insensitive match on name, goals or level."""
        if not term or not term.strip():
            return False
        needle = term.strip().lower()
        return (
            needle in self.name.lower()
            or needle in self.goals.lower()
            or needle in self.level.value.lower()
        )

    def is_compatible_with(self, kind: "RoutineKind | str") -> bool:
        """Whether the athlete's goals point towards the given kind of training."""
        goals = self.goals.lower()
        try:
            kind = RoutineKind.parse(kind)
        except ValidationError:
            return True
        if kind is RoutineKind.STRENGTH:
            return "fuerza" in goals or "muscular" in goals
        return "resistencia" in goals or "peso" in goals or "cardio" in goals

    def describe(self) -> str:
        return (
            f"{self.name} - {self.weight_kg:g} kg - {self.height_m:g} m - "
            f"{self.goals} - {self.level.value} (IMC: {self.bmi})"
        )

    # -- serialization ----------------------------------------------------

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "weight_kg": self.weight_kg,
            "height_m": self.height_m,
            "goals": self.goals,
            "level": self.level.value,
            "registered_on": self.registered_on.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Athlete":
        """Create from dictionary (no validation, data is trusted as stored)."""
        data = require_mapping(data, "atleta")
        return cls(
            id=text_field(data, "id"),
            name=text_field(data, "name"),
            weight_kg=number_field(data, "weight_kg"),
            height_m=number_field(data, "height_m"),
            goals=text_field(data, "goals", ""),
            level=Level.parse(data["level"]),
            registered_on=date.fromisoformat(data["registered_on"]) if data.get("registered_on") else date.today(),
        )

    # -- identity -----------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Athlete):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.describe()
