"""
Input models for the console forms.

Raw text typed by the user is parsed here (decimal commas, blank dates,
height in centimetres, enum labels) before the entities are created.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from .exceptions import ValidationError
from .models.athlete import Athlete
from .models.enums import Intensity, Level, MuscleGroup, RoutineKind
from .models.insurance import MedicalInsurance
from .models.routine import CardioDetails, Routine, StrengthDetails

F = TypeVar("F", bound=BaseModel)

# Heights above this are taken as centimetres
MAX_HEIGHT_IN_METERS = 3.0


def _number_text(v):
    """Accept "1,75" as well as "1.75"."""
    if isinstance(v, str):
        v = v.strip().replace(",", ".")
    return v


def _optional_date(v):
    if v is None or (isinstance(v, str) and not v.strip()):
        return None
    return v


def parse_form(form_type: Type[F], **data) -> F:
    """Build a form, turning pydantic errors into a ``ValidationError``."""
    try:
        return form_type(**data)
    except PydanticValidationError as e:
        errors: List[str] = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        raise ValidationError("Datos ingresados inválidos", errors=errors) from e


class AthleteForm(BaseModel):
    """Athlete data as typed in the console."""
    name: str = Field(..., min_length=1, max_length=100)
    weight_kg: float = Field(..., gt=0)
    height_m: float = Field(..., gt=0)
    goals: str = Field(..., min_length=1, max_length=500)
    level: Level

    @field_validator("weight_kg", mode="before")
    @classmethod
    def parse_weight(cls, v):
        return _number_text(v)

    @field_validator("height_m", mode="before")
    @classmethod
    def parse_height(cls, v):
        """Convert centimetres to metres when the value is clearly in cm."""
        v = float(_number_text(v))
        return v / 100.0 if v > MAX_HEIGHT_IN_METERS else v

    @field_validator("level", mode="before")
    @classmethod
    def parse_level(cls, v):
        return Level.parse(v)

    def to_athlete(self) -> Athlete:
        return Athlete.create(
            name=self.name,
            weight_kg=self.weight_kg,
            height_m=self.height_m,
            goals=self.goals,
            level=self.level,
        )


class RoutineForm(BaseModel):
    """Routine data as typed in the console; kind-specific fields are optional."""
    kind: RoutineKind
    duration_min: int
    intensity: Intensity
    muscle_group: MuscleGroup
    performed_on: Optional[date] = None
    expires_on: Optional[date] = None
    injury_notes: str = ""

    sets: int = Field(3, ge=1)
    reps: int = Field(10, ge=1)
    weight_used_kg: float = Field(0.0, ge=0)

    cardio_type: str = "General"
    distance_km: float = Field(0.0, ge=0)
    avg_heart_rate: int = Field(0, ge=0)

    @field_validator("kind", mode="before")
    @classmethod
    def parse_kind(cls, v):
        return RoutineKind.parse(v)

    @field_validator("intensity", mode="before")
    @classmethod
    def parse_intensity(cls, v):
        return Intensity.parse(v)

    @field_validator("muscle_group", mode="before")
    @classmethod
    def parse_muscle_group(cls, v):
        return MuscleGroup.parse(v)

    @field_validator("performed_on", "expires_on", mode="before")
    @classmethod
    def blank_date(cls, v):
        return _optional_date(v)

    @field_validator("weight_used_kg", "distance_km", mode="before")
    @classmethod
    def parse_decimal_comma(cls, v):
        return _number_text(v)

    def details(self):
        if self.kind is RoutineKind.STRENGTH:
            return StrengthDetails(sets=self.sets, reps=self.reps, weight_used_kg=self.weight_used_kg)
        return CardioDetails(
            cardio_type=self.cardio_type.strip() or "General",
            distance_km=self.distance_km,
            avg_heart_rate=self.avg_heart_rate,
        )

    def to_routine(self, athlete_name: str, today: Optional[date] = None) -> Routine:
        today = today or date.today()
        return Routine.create(
            kind=self.kind,
            duration_min=self.duration_min,
            intensity=self.intensity,
            muscle_group=self.muscle_group,
            athlete_name=athlete_name,
            performed_on=self.performed_on or today,
            expires_on=self.expires_on,
            injury_notes=self.injury_notes,
            details=self.details(),
            today=today,
        )


class InsuranceForm(BaseModel):
    """Insurance claim data as typed in the console."""
    insurer_name: str = Field(..., min_length=1)
    amount_covered: Decimal = Field(..., ge=0)
    amount_patient: Decimal = Field(..., ge=0)
    injury: str = Field(..., min_length=1)
    treatment: str = ""

    @field_validator("amount_covered", "amount_patient", mode="before")
    @classmethod
    def parse_amount(cls, v):
        return _number_text(v)

    def to_claim(self, athlete_name: str, today: Optional[date] = None) -> MedicalInsurance:
        today = today or date.today()
        return MedicalInsurance.create(
            insurer_name=self.insurer_name,
            amount_covered=self.amount_covered,
            amount_patient=self.amount_patient,
            injury=self.injury,
            treatment=self.treatment,
            athlete_name=athlete_name,
            applied_on=today,
            today=today,
        )
