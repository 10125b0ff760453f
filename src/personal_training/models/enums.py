"""Enumerations shared by the entity layer.

Values are the Spanish labels shown to the user and written to the data
files; ``parse`` also accepts the English member names.
"""

from enum import Enum
from typing import Type, TypeVar

from ..exceptions import ValidationError

E = TypeVar("E", bound="LabeledEnum")


class LabeledEnum(str, Enum):
    """String enum parseable from its value or member name, ignoring case."""

    @classmethod
    def parse(cls: Type[E], text: "str | E") -> E:
        if isinstance(text, cls):
            return text
        if text is not None and not isinstance(text, str):
            raise ValidationError(
                f"Valor {text!r} no válido para {cls.__name__}",
                errors=["Se esperaba un texto"],
            )
        candidate = (text or "").strip().lower()
        for member in cls:
            if candidate in (member.value.lower(), member.name.lower()):
                return member
        valid = ", ".join(m.value for m in cls)
        raise ValidationError(
            f"Valor '{text}' no válido para {cls.__name__}",
            errors=[f"Debe ser uno de: {valid}"],
        )

    def __str__(self) -> str:
        return self.value


class Level(LabeledEnum):
    """Athlete training level."""
    BEGINNER = "Principiante"
    INTERMEDIATE = "Intermedio"
    ADVANCED = "Avanzado"


class Intensity(LabeledEnum):
    """Routine intensity."""
    LOW = "Baja"
    MEDIUM = "Media"
    HIGH = "Alta"

    @property
    def score(self) -> int:
        """Numeric score used by averages and the injury-risk model (1-3)."""
        return {Intensity.LOW: 1, Intensity.MEDIUM: 2, Intensity.HIGH: 3}[self]

    def downgraded(self) -> "Intensity":
        """One step lower intensity (Low stays Low)."""
        return {
            Intensity.HIGH: Intensity.MEDIUM,
            Intensity.MEDIUM: Intensity.LOW,
            Intensity.LOW: Intensity.LOW,
        }[self]


class MuscleGroup(LabeledEnum):
    """Target muscle group of a routine."""
    CHEST = "Pecho"
    BACK = "Espalda"
    LEGS = "Piernas"
    ARMS = "Brazos"
    SHOULDERS = "Hombros"
    ABS = "Abdomen"
    CARDIO = "Cardio"
    GENERAL = "General"


# Groups trained by strength work, in menu order
STRENGTH_GROUPS = (
    MuscleGroup.CHEST,
    MuscleGroup.BACK,
    MuscleGroup.LEGS,
    MuscleGroup.ARMS,
    MuscleGroup.SHOULDERS,
    MuscleGroup.ABS,
)


class RoutineKind(LabeledEnum):
    """Routine variant tag."""
    STRENGTH = "Fuerza"
    CARDIO = "Cardio"


class InsuranceStatus(LabeledEnum):
    """Lifecycle status of an insurance claim."""
    ACTIVE = "Activo"
    SUSPENDED = "Suspendido"
    COMPLETED = "Finalizado"
    CANCELLED = "Cancelado"
