"""Routine entity: one training session of Strength or Cardio kind.

The kind-specific data lives in ``Routine.details``, which is exactly one
of ``StrengthDetails`` or ``CardioDetails``. Kind-dependent behavior is
implemented by the module-level functions below, which dispatch on the
payload type.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import List, Optional, Union
import uuid

from ..exceptions import ValidationError
from ..metrics.load import (
    cardio_calories,
    relative_strength_intensity,
    strength_calories,
    strength_volume,
)
from .enums import Intensity, MuscleGroup, RoutineKind
from .fields import number_field, require_mapping, text_field

MIN_DURATION_MIN = 1
MAX_DURATION_MIN = 480

# Cardio modalities that require machines or facilities
EQUIPMENT_CARDIO_TYPES = {"bicicleta", "natación", "natacion", "remo", "elíptica", "eliptica"}


@dataclass
class StrengthDetails:
    """Strength payload: sets x reps at a given load."""
    sets: int = 3
    reps: int = 10
    weight_used_kg: float = 0.0

    def to_dict(self) -> dict:
        return {"sets": self.sets, "reps": self.reps, "weight_used_kg": self.weight_used_kg}

    @classmethod
    def from_dict(cls, data: dict) -> "StrengthDetails":
        data = require_mapping(data, "fuerza")
        return cls(
            sets=int(data.get("sets", 3)),
            reps=int(data.get("reps", 10)),
            weight_used_kg=number_field(data, "weight_used_kg", 0.0),
        )


@dataclass
class CardioDetails:
    """Cardio payload: modality, distance and average heart rate."""
    cardio_type: str = "General"
    distance_km: float = 0.0
    avg_heart_rate: int = 0

    def to_dict(self) -> dict:
        return {
            "cardio_type": self.cardio_type,
            "distance_km": self.distance_km,
            "avg_heart_rate": self.avg_heart_rate,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CardioDetails":
        data = require_mapping(data, "cardio")
        return cls(
            cardio_type=text_field(data, "cardio_type", "General") or "General",
            distance_km=number_field(data, "distance_km", 0.0),
            avg_heart_rate=int(data.get("avg_heart_rate", 0)),
        )


RoutineDetails = Union[StrengthDetails, CardioDetails]


@dataclass(eq=False)
class Routine:
    """
    A single training session assigned to an athlete (by name).

    ``injury_notes`` is empty when no injury was reported; ``insurance_id``
    links the session to the claim opened for that injury, if any.
    """
    id: str
    duration_min: int
    intensity: Intensity
    muscle_group: MuscleGroup
    athlete_name: str
    performed_on: date
    details: RoutineDetails = field(default_factory=StrengthDetails)
    expires_on: Optional[date] = None
    injury_notes: str = ""
    insurance_id: Optional[str] = None

    def __post_init__(self):
        """Coerce raw values coming from user input or the data file."""
        if not isinstance(self.intensity, Intensity):
            self.intensity = Intensity.parse(self.intensity)
        if not isinstance(self.muscle_group, MuscleGroup):
            self.muscle_group = MuscleGroup.parse(self.muscle_group)
        if isinstance(self.performed_on, str):
            self.performed_on = date.fromisoformat(self.performed_on)
        if isinstance(self.expires_on, str):
            self.expires_on = date.fromisoformat(self.expires_on) if self.expires_on else None
        self.athlete_name = (self.athlete_name or "").strip()
        self.injury_notes = (self.injury_notes or "").strip()

    @classmethod
    def create(
        cls,
        kind: "RoutineKind | str",
        duration_min: int,
        intensity: "Intensity | str",
        muscle_group: "MuscleGroup | str",
        athlete_name: str,
        performed_on: Optional[date] = None,
        expires_on: Optional[date] = None,
        injury_notes: str = "",
        details: Optional[RoutineDetails] = None,
        insurance_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> "Routine":
        """Factory method: new routine of the given kind with a fresh id, validated."""
        kind = RoutineKind.parse(kind)
        if details is None:
            details = StrengthDetails() if kind is RoutineKind.STRENGTH else CardioDetails()
        elif kind_of(details) is not kind:
            raise ValidationError(
                "Datos de rutina incoherentes",
                errors=[f"El detalle no corresponde a una rutina de {kind.value}"],
            )
        routine = cls(
            id=uuid.uuid4().hex,
            duration_min=int(duration_min),
            intensity=Intensity.parse(intensity),
            muscle_group=MuscleGroup.parse(muscle_group),
            athlete_name=athlete_name,
            performed_on=performed_on or date.today(),
            details=details,
            expires_on=expires_on,
            injury_notes=injury_notes,
            insurance_id=insurance_id,
        )
        routine.ensure_valid(today=today)
        return routine

    @property
    def kind(self) -> RoutineKind:
        return kind_of(self.details)

    @property
    def has_injury(self) -> bool:
        return bool(self.injury_notes)

    # -- self-check -----------------------------------------------------

    def validation_errors(self, today: Optional[date] = None) -> List[str]:
        """Every violated invariant, in a stable order."""
        today = today or date.today()
        errors = []
        if not MIN_DURATION_MIN <= self.duration_min <= MAX_DURATION_MIN:
            errors.append(
                f"Duración {self.duration_min} min fuera de rango "
                f"({MIN_DURATION_MIN}-{MAX_DURATION_MIN} min)"
            )
        if not self.athlete_name:
            errors.append("Nombre del atleta requerido")
        if self.performed_on > today:
            errors.append("La fecha de realización no puede ser futura")
        if self.expires_on is not None and self.expires_on <= self.performed_on:
            errors.append("La fecha de vencimiento debe ser posterior a la fecha de realización")
        errors.extend(details_errors(self.details))
        return errors

    def is_valid(self, today: Optional[date] = None) -> bool:
        return not self.validation_errors(today)

    def ensure_valid(self, today: Optional[date] = None) -> None:
        errors = self.validation_errors(today)
        if errors:
            raise ValidationError("Rutina inválida", errors=errors)

    def update_from(self, other: "Routine", today: Optional[date] = None) -> None:
        """Replace every field except ``id`` with ``other``'s, after validating it."""
        if other is None:
            raise ValidationError("Los nuevos datos de la rutina son requeridos")
        other.ensure_valid(today=today)
        self.duration_min = other.duration_min
        self.intensity = other.intensity
        self.muscle_group = other.muscle_group
        self.athlete_name = other.athlete_name
        self.performed_on = other.performed_on
        self.expires_on = other.expires_on
        self.injury_notes = other.injury_notes
        self.insurance_id = other.insurance_id
        self.details = replace(other.details)

    # -- serialization ----------------------------------------------------

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization (``kind`` is the tag)."""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "duration_min": self.duration_min,
            "intensity": self.intensity.value,
            "muscle_group": self.muscle_group.value,
            "athlete_name": self.athlete_name,
            "performed_on": self.performed_on.isoformat(),
            "expires_on": self.expires_on.isoformat() if self.expires_on else None,
            "injury_notes": self.injury_notes,
            "insurance_id": self.insurance_id,
            "details": self.details.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Routine":
        """Create from dictionary, choosing the payload type from ``kind``."""
        data = require_mapping(data, "rutina")
        kind = RoutineKind.parse(data["kind"])
        raw_details = data.get("details")
        if raw_details is None:
            raw_details = {}
        if kind is RoutineKind.STRENGTH:
            details: RoutineDetails = StrengthDetails.from_dict(raw_details)
        else:
            details = CardioDetails.from_dict(raw_details)
        return cls(
            id=text_field(data, "id"),
            duration_min=int(data["duration_min"]),
            intensity=Intensity.parse(data["intensity"]),
            muscle_group=MuscleGroup.parse(data["muscle_group"]),
            athlete_name=text_field(data, "athlete_name"),
            performed_on=date.fromisoformat(data["performed_on"]),
            details=details,
            expires_on=date.fromisoformat(data["expires_on"]) if data.get("expires_on") else None,
            injury_notes=text_field(data, "injury_notes", ""),
            insurance_id=data.get("insurance_id"),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Routine):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return describe(self)


# ============================================================================
# Kind dispatch
# ============================================================================

def kind_of(details: RoutineDetails) -> RoutineKind:
    if isinstance(details, StrengthDetails):
        return RoutineKind.STRENGTH
    if isinstance(details, CardioDetails):
        return RoutineKind.CARDIO
    raise TypeError(f"Unknown routine payload: {type(details).__name__}")


def details_errors(details: RoutineDetails) -> List[str]:
    """Payload-specific invariant violations."""
    errors = []
    if isinstance(details, StrengthDetails):
        if details.sets < 1:
            errors.append("Las series deben ser al menos 1")
        if details.reps < 1:
            errors.append("Las repeticiones deben ser al menos 1")
        if not details.weight_used_kg >= 0:
            errors.append("El peso utilizado no puede ser negativo")
    elif isinstance(details, CardioDetails):
        if not details.distance_km >= 0:
            errors.append("La distancia no puede ser negativa")
        if details.avg_heart_rate != 0 and not 40 <= details.avg_heart_rate <= 220:
            errors.append(f"Frecuencia cardiaca {details.avg_heart_rate} fuera de rango (40-220)")
    return errors


def estimate_calories(routine: Routine) -> float:
    """Estimated calories burned in the session."""
    details = routine.details
    score = routine.intensity.score
    if isinstance(details, StrengthDetails):
        return strength_calories(
            routine.duration_min, score, details.sets, details.reps, details.weight_used_kg
        )
    return cardio_calories(routine.duration_min, score, details.distance_km, details.avg_heart_rate)


def needs_special_equipment(routine: Routine) -> bool:
    details = routine.details
    if isinstance(details, StrengthDetails):
        return details.weight_used_kg > 0
    return details.cardio_type.lower() in EQUIPMENT_CARDIO_TYPES


def total_volume(routine: Routine) -> float:
    """Strength volume in kg (0 for cardio)."""
    details = routine.details
    if isinstance(details, StrengthDetails):
        return strength_volume(details.sets, details.reps, details.weight_used_kg)
    return 0.0


def suggested_rest_seconds(routine: Routine) -> int:
    """Rest between sets; cardio sessions have no sets."""
    if not isinstance(routine.details, StrengthDetails):
        return 0
    return {Intensity.HIGH: 180, Intensity.MEDIUM: 120, Intensity.LOW: 60}[routine.intensity]


def specific_features(routine: Routine) -> str:
    details = routine.details
    if isinstance(details, StrengthDetails):
        return (
            f"Series: {details.sets}, Repeticiones: {details.reps}, "
            f"Peso: {details.weight_used_kg:g}kg, Volumen total: {total_volume(routine):g}kg, "
            f"Enfoque: {relative_strength_intensity(details.reps)}"
        )
    parts = [f"Tipo: {details.cardio_type}"]
    if details.distance_km > 0:
        parts.append(f"Distancia: {details.distance_km:g} km")
    if details.avg_heart_rate > 0:
        parts.append(f"FC promedio: {details.avg_heart_rate} lpm")
    return ", ".join(parts)


def describe(routine: Routine) -> str:
    """One-line description, including the kind-specific summary."""
    details = routine.details
    text = (
        f"[{routine.kind.value}] {routine.duration_min} min - {routine.intensity.value} - "
        f"{routine.muscle_group.value} - {routine.performed_on.isoformat()}"
    )
    if isinstance(details, StrengthDetails):
        text += f" - {details.sets}x{details.reps}"
        if details.weight_used_kg > 0:
            text += f" - {details.weight_used_kg:g}kg"
    else:
        text += f" - {details.cardio_type}"
        if details.distance_km > 0:
            text += f" - {details.distance_km:g} km"
    if routine.expires_on:
        text += f" - Vence: {routine.expires_on.isoformat()}"
    if routine.injury_notes:
        text += f" - Lesiones: {routine.injury_notes}"
    return text


def matches(routine: Routine, term: str) -> bool:
    """Case-insensitive match on kind, intensity, muscle group, injuries and cardio type."""
    if not term or not term.strip():
        return False
    needle = term.strip().lower()
    haystack = [
        routine.kind.value,
        routine.intensity.value,
        routine.muscle_group.value,
        routine.injury_notes,
    ]
    if isinstance(routine.details, CardioDetails):
        haystack.append(routine.details.cardio_type)
    return any(needle in value.lower() for value in haystack)
