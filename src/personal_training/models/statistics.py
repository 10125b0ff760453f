"""Per-athlete statistics value object (computed on demand, never persisted)."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Mapping


def _most_frequent(counts: Mapping[str, int], default: str) -> str:
    """Key with the highest count; ties keep the first one seen."""
    best, best_count = default, 0
    for key, count in counts.items():
        if count > best_count:
            best, best_count = key, count
    return best


def _pct(part: int, total: int) -> float:
    return part / total * 100 if total > 0 else 0.0


@dataclass
class AthleteStatistics:
    """
    Statistics compiled for one athlete.

    Instances are filled through the ``configure_*`` methods (each returns
    ``self`` so calls chain) and then sealed; any configuration or field
    assignment after ``seal()`` raises ``RuntimeError``.
    """
    athlete_name: str
    generated_at: datetime = field(default_factory=datetime.now)

    total_routines: int = 0
    average_duration: float = 0.0
    strength_routines: int = 0
    cardio_routines: int = 0
    routines_last_month: int = 0
    routines_last_quarter: int = 0
    routines_by_intensity: Mapping[str, int] = field(default_factory=dict)

    total_injuries: int = 0
    injuries_last_month: int = 0
    injuries_last_quarter: int = 0
    injuries_by_type: Mapping[str, int] = field(default_factory=dict)

    total_insured_amount: Decimal = Decimal("0")
    total_calories: float = 0.0
    injury_risk: float = 0.0

    _sealed: bool = field(default=False, init=False, repr=False)

    # -- configuration ------------------------------------------------------

    def _check_open(self) -> None:
        if self._sealed:
            raise RuntimeError("Statistics are sealed and can no longer be configured")

    def configure_basics(
        self,
        total_routines: int,
        average_duration: float,
        strength_routines: int,
        cardio_routines: int,
    ) -> "AthleteStatistics":
        self._check_open()
        self.total_routines = total_routines
        self.average_duration = average_duration
        self.strength_routines = strength_routines
        self.cardio_routines = cardio_routines
        return self

    def configure_injuries(
        self,
        total_injuries: int,
        injuries_last_month: int,
        injuries_last_quarter: int,
        injuries_by_type: Dict[str, int],
    ) -> "AthleteStatistics":
        self._check_open()
        self.total_injuries = total_injuries
        self.injuries_last_month = injuries_last_month
        self.injuries_last_quarter = injuries_last_quarter
        self.injuries_by_type = dict(injuries_by_type or {})
        return self

    def configure_recent_activity(
        self, routines_last_month: int, routines_last_quarter: int
    ) -> "AthleteStatistics":
        self._check_open()
        self.routines_last_month = routines_last_month
        self.routines_last_quarter = routines_last_quarter
        return self

    def configure_intensity(self, routines_by_intensity: Dict[str, int]) -> "AthleteStatistics":
        self._check_open()
        self.routines_by_intensity = dict(routines_by_intensity or {})
        return self

    def configure_insurance(self, total_insured_amount: Decimal) -> "AthleteStatistics":
        self._check_open()
        self.total_insured_amount = total_insured_amount
        return self

    def configure_load(self, total_calories: float, injury_risk: float) -> "AthleteStatistics":
        self._check_open()
        self.total_calories = total_calories
        self.injury_risk = injury_risk
        return self

    def seal(self) -> "AthleteStatistics":
        """Freeze the statistics; later assignments raise ``RuntimeError``."""
        object.__setattr__(self, "routines_by_intensity", MappingProxyType(dict(self.routines_by_intensity)))
        object.__setattr__(self, "injuries_by_type", MappingProxyType(dict(self.injuries_by_type)))
        object.__setattr__(self, "_sealed", True)
        return self

    def __setattr__(self, name: str, value) -> None:
        if getattr(self, "_sealed", False):
            raise RuntimeError(f"Statistics are sealed, cannot set {name}")
        super().__setattr__(name, value)

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    # -- derived values -----------------------------------------------------

    @property
    def strength_pct(self) -> float:
        return _pct(self.strength_routines, self.total_routines)

    @property
    def cardio_pct(self) -> float:
        return _pct(self.cardio_routines, self.total_routines)

    @property
    def injury_rate_pct(self) -> float:
        """Injuries per routine, as a percentage."""
        return _pct(self.total_injuries, self.total_routines)

    @property
    def most_frequent_intensity(self) -> str:
        return _most_frequent(self.routines_by_intensity, "No especificada")

    @property
    def most_frequent_injury(self) -> str:
        return _most_frequent(self.injuries_by_type, "Ninguna")

    def report(self, currency: str = "₡") -> str:
        """Multi-line Spanish report."""
        lines = [
            f"=== Estadisticas de {self.athlete_name.upper()} ===",
            f"Generado: {self.generated_at:%d/%m/%Y %H:%M}",
            "",
            "RUTINAS:",
            f"  • Total de rutinas: {self.total_routines}",
            f"  • Duración promedio: {self.average_duration:.1f} minutos",
            f"  • Rutinas de fuerza: {self.strength_routines} ({self.strength_pct:.1f}%)",
            f"  • Rutinas de cardio: {self.cardio_routines} ({self.cardio_pct:.1f}%)",
            f"  • Rutinas último mes: {self.routines_last_month}",
            f"  • Rutinas último trimestre: {self.routines_last_quarter}",
            f"  • Calorías estimadas: {self.total_calories:.1f} kcal",
            "",
            "LESIONES:",
            f"  • Total de lesiones: {self.total_injuries}",
            f"  • Lesiones último mes: {self.injuries_last_month}",
            f"  • Lesiones último trimestre: {self.injuries_last_quarter}",
            f"  • Tasa de lesiones: {self.injury_rate_pct:.2f}% por rutina",
            f"  • Lesión más frecuente: {self.most_frequent_injury}",
            "",
            "SEGUROS:",
            f"  • Monto total cubierto: {currency}{self.total_insured_amount:.2f}",
            "",
            "ANÁLISIS:",
            f"  • Intensidad más utilizada: {self.most_frequent_intensity}",
            f"  • Riesgo de lesión: {self.injury_risk:.2f}/100",
        ]
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.report()
