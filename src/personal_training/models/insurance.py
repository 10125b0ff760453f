"""Medical insurance claim opened for a training injury."""

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import List, Optional
import uuid

from ..exceptions import ValidationError
from .enums import InsuranceStatus
from .fields import require_mapping, text_field


def to_decimal(value) -> Decimal:
    """Parse a money amount, rejecting non-numeric input."""
    if isinstance(value, Decimal):
        return value
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise ValidationError(f"Monto '{value}' no válido") from e
    if not amount.is_finite():
        raise ValidationError(f"Monto '{value}' no válido")
    return amount


@dataclass(eq=False)
class MedicalInsurance:
    """
    An insurance claim covering the treatment of an injury.

    The claim belongs to an athlete (by name) and can be linked from the
    routine in which the injury happened. ``athlete_name`` and
    ``applied_on`` never change after creation.
    """
    id: str
    insurer_name: str
    amount_covered: Decimal
    amount_patient: Decimal
    injury: str
    treatment: str
    athlete_name: str
    applied_on: date
    completed_on: Optional[date] = None
    status: InsuranceStatus = InsuranceStatus.ACTIVE

    def __post_init__(self):
        self.amount_covered = to_decimal(self.amount_covered)
        self.amount_patient = to_decimal(self.amount_patient)
        if not isinstance(self.status, InsuranceStatus):
            self.status = InsuranceStatus.parse(self.status)
        if isinstance(self.applied_on, str):
            self.applied_on = date.fromisoformat(self.applied_on)
        if isinstance(self.completed_on, str):
            self.completed_on = date.fromisoformat(self.completed_on) if self.completed_on else None
        self.insurer_name = (self.insurer_name or "").strip()
        self.injury = (self.injury or "").strip()
        self.treatment = (self.treatment or "").strip()
        self.athlete_name = (self.athlete_name or "").strip()

    @classmethod
    def create(
        cls,
        insurer_name: str,
        amount_covered,
        amount_patient,
        injury: str,
        treatment: str,
        athlete_name: str,
        applied_on: Optional[date] = None,
        completed_on: Optional[date] = None,
        status: "InsuranceStatus | str" = InsuranceStatus.ACTIVE,
        today: Optional[date] = None,
    ) -> "MedicalInsurance":
        """Factory method: new claim with a fresh id, validated."""
        claim = cls(
            id=uuid.uuid4().hex,
            insurer_name=insurer_name,
            amount_covered=to_decimal(amount_covered),
            amount_patient=to_decimal(amount_patient),
            injury=injury,
            treatment=treatment,
            athlete_name=athlete_name,
            applied_on=applied_on or date.today(),
            completed_on=completed_on,
            status=InsuranceStatus.parse(status),
        )
        claim.ensure_valid(today=today)
        return claim

    # -- derived values -------------------------------------------------

    @property
    def total_amount(self) -> Decimal:
        return self.amount_covered + self.amount_patient

    @property
    def coverage_pct(self) -> float:
        """Share of the total paid by the insurer (0 when the total is 0)."""
        total = self.total_amount
        if total <= 0:
            return 0.0
        return float(self.amount_covered / total * 100)

    def treatment_days(self, today: Optional[date] = None) -> int:
        """Days from application to completion, or to today while open."""
        end = self.completed_on or today or date.today()
        return (end - self.applied_on).days

    @property
    def is_active(self) -> bool:
        return self.status is InsuranceStatus.ACTIVE

    # -- lifecycle --------------------------------------------------------
    #
    # Each helper returns a modified copy; managers persist it through
    # the normal update path.

    def completed(self, today: Optional[date] = None) -> "MedicalInsurance":
        today = today or date.today()
        if today <= self.applied_on:
            raise ValidationError(
                "No se puede finalizar el tratamiento",
                errors=["La fecha de finalización debe ser posterior a la fecha de aplicación"],
            )
        return replace(self, completed_on=today, status=InsuranceStatus.COMPLETED)

    def suspended(self) -> "MedicalInsurance":
        return replace(self, status=InsuranceStatus.SUSPENDED)

    def reactivated(self) -> "MedicalInsurance":
        """Back to Active; only a suspended claim can be reactivated."""
        if self.status is not InsuranceStatus.SUSPENDED:
            raise ValidationError(
                "Solo se puede reactivar un seguro suspendido",
                errors=[f"Estado actual: {self.status.value}"],
            )
        return replace(self, status=InsuranceStatus.ACTIVE)

    def cancelled(self) -> "MedicalInsurance":
        return replace(self, status=InsuranceStatus.CANCELLED)

    # -- self-check -----------------------------------------------------

    def validation_errors(self, today: Optional[date] = None) -> List[str]:
        today = today or date.today()
        errors = []
        if not self.insurer_name:
            errors.append("El nombre del seguro es requerido")
        if self.amount_covered < 0:
            errors.append("El monto cubierto no puede ser negativo")
        if self.amount_patient < 0:
            errors.append("El monto del paciente no puede ser negativo")
        if self.amount_covered == 0 and self.amount_patient == 0:
            errors.append("Al menos uno de los montos debe ser mayor a cero")
        if not self.injury:
            errors.append("La lesión tratada es requerida")
        if not self.athlete_name:
            errors.append("El nombre del atleta es requerido")
        if self.applied_on > today:
            errors.append("La fecha de aplicación no puede ser futura")
        if self.completed_on is not None and self.completed_on <= self.applied_on:
            errors.append("La fecha de finalización debe ser posterior a la fecha de aplicación")
        return errors

    def is_valid(self, today: Optional[date] = None) -> bool:
        return not self.validation_errors(today)

    def ensure_valid(self, today: Optional[date] = None) -> None:
        errors = self.validation_errors(today)
        if errors:
            raise ValidationError("Datos del seguro médico inválidos", errors=errors)

    def update_from(self, other: "MedicalInsurance", today: Optional[date] = None) -> None:
        """Copy every field except id, athlete and application date."""
        if other is None:
            raise ValidationError("Los nuevos datos del seguro son requeridos")
        other.ensure_valid(today=today)
        self.insurer_name = other.insurer_name
        self.amount_covered = other.amount_covered
        self.amount_patient = other.amount_patient
        self.injury = other.injury
        self.treatment = other.treatment
        self.completed_on = other.completed_on
        self.status = other.status

    # -- queries ----------------------------------------------------------

    def matches(self, term: str) -> bool:
        if not term or not term.strip():
            return False
        needle = term.strip().lower()
        return any(
            needle in value.lower()
            for value in (self.insurer_name, self.injury, self.athlete_name, self.treatment)
        ) or needle in str(self.amount_covered) or needle in str(self.amount_patient)

    def describe(self, currency: str = "₡", today: Optional[date] = None) -> str:
        return (
            f"{self.insurer_name} - {self.athlete_name} - Lesión: {self.injury} - "
            f"Total: {currency}{self.total_amount:.2f} (Cobertura: {self.coverage_pct:.1f}%) - "
            f"Duración: {self.treatment_days(today)} días - Estado: {self.status.value}"
        )

    # -- serialization ----------------------------------------------------

    def to_dict(self) -> dict:
        """Convert to dictionary; amounts are written as strings to keep precision."""
        return {
            "id": self.id,
            "insurer_name": self.insurer_name,
            "amount_covered": str(self.amount_covered),
            "amount_patient": str(self.amount_patient),
            "injury": self.injury,
            "treatment": self.treatment,
            "athlete_name": self.athlete_name,
            "applied_on": self.applied_on.isoformat(),
            "completed_on": self.completed_on.isoformat() if self.completed_on else None,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MedicalInsurance":
        data = require_mapping(data, "seguro")
        return cls(
            id=text_field(data, "id"),
            insurer_name=text_field(data, "insurer_name"),
            amount_covered=to_decimal(data["amount_covered"]),
            amount_patient=to_decimal(data["amount_patient"]),
            injury=text_field(data, "injury"),
            treatment=text_field(data, "treatment", ""),
            athlete_name=text_field(data, "athlete_name"),
            applied_on=date.fromisoformat(data["applied_on"]),
            completed_on=date.fromisoformat(data["completed_on"]) if data.get("completed_on") else None,
            status=InsuranceStatus.parse(data.get("status") or InsuranceStatus.ACTIVE.value),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MedicalInsurance):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.describe()
