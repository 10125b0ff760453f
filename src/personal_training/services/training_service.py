"""
Training statistics service.

Reads routines and insurance claims straight from their repositories on
every call (no caching) and derives per-athlete statistics, the
injury-risk score, textual recommendations and the insurance report.

Time windows are calendar based: "last month" means on or after the same
day one month ago, "last quarter" three months ago, "last week" seven
days ago.
"""

import calendar
from collections import Counter
from datetime import date, timedelta
from decimal import Decimal
import logging
from typing import Callable, List, Optional, Tuple

from ..db.repositories.insurance_repository import InsuranceRepository
from ..db.repositories.routine_repository import RoutineRepository
from ..exceptions import ValidationError
from ..metrics.load import calculate_injury_risk
from ..models.enums import Intensity, InsuranceStatus, RoutineKind
from ..models.routine import Routine, estimate_calories
from ..models.statistics import AthleteStatistics
from .base import BaseService

HIGH_RISK_THRESHOLD = 70.0
MODERATE_RISK_THRESHOLD = 40.0
MIN_MONTHLY_SESSIONS = 8
MAX_MONTHLY_SESSIONS = 20
MIN_KIND_SHARE_PCT = 30.0
FREQUENT_CLAIMS_PER_MONTH = 2


def months_before(day: date, months: int) -> date:
    """Same calendar day ``months`` earlier, clamped to the month's last day."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def _pct(part: int, total: int) -> float:
    return part / total * 100 if total else 0.0


class TrainingService(BaseService):
    """Statistics and analysis over an athlete's routines and claims."""

    def __init__(
        self,
        routines: RoutineRepository,
        insurance: InsuranceRepository,
        today: Callable[[], date] = date.today,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(logger)
        self.routines = routines
        self.insurance = insurance
        self._today = today

    # -- windows ------------------------------------------------------------

    def _month_start(self) -> date:
        return months_before(self._today(), 1)

    def _quarter_start(self) -> date:
        return months_before(self._today(), 3)

    def _week_start(self) -> date:
        return self._today() - timedelta(days=7)

    def _routines_for(self, athlete_name: str) -> List[Routine]:
        return self.routines.find_by_athlete(athlete_name)

    # -- statistics ---------------------------------------------------------

    def injury_risk(self, athlete_name: str) -> float:
        return self._injury_risk(self._routines_for(athlete_name))

    def _injury_risk(self, routines: List[Routine]) -> float:
        if not routines:
            return 0.0
        total = len(routines)
        injured = sum(1 for r in routines if r.has_injury)
        high = sum(1 for r in routines if r.intensity is Intensity.HIGH)
        week_start = self._week_start()
        recent = sum(1 for r in routines if r.performed_on >= week_start)
        return calculate_injury_risk(
            injury_rate_pct=_pct(injured, total),
            avg_intensity_score=sum(r.intensity.score for r in routines) / total,
            high_intensity_pct=_pct(high, total),
            sessions_last_week=recent,
        )

    def generate_statistics(self, athlete_name: str) -> AthleteStatistics:
        """Compile and seal the statistics for one athlete."""
        if not athlete_name or not athlete_name.strip():
            raise ValidationError("El nombre del atleta es requerido")

        routines = self._routines_for(athlete_name)
        claims = self.insurance.find_by_athlete(athlete_name)
        month_start, quarter_start = self._month_start(), self._quarter_start()

        total = len(routines)
        injured = [r for r in routines if r.has_injury]

        stats = AthleteStatistics(athlete_name=athlete_name.strip())
        stats.configure_basics(
            total_routines=total,
            average_duration=sum(r.duration_min for r in routines) / total if total else 0.0,
            strength_routines=sum(1 for r in routines if r.kind is RoutineKind.STRENGTH),
            cardio_routines=sum(1 for r in routines if r.kind is RoutineKind.CARDIO),
        )
        stats.configure_injuries(
            total_injuries=len(injured),
            injuries_last_month=sum(1 for r in injured if r.performed_on >= month_start),
            injuries_last_quarter=sum(1 for r in injured if r.performed_on >= quarter_start),
            injuries_by_type=dict(Counter(r.injury_notes for r in injured)),
        )
        stats.configure_recent_activity(
            routines_last_month=sum(1 for r in routines if r.performed_on >= month_start),
            routines_last_quarter=sum(1 for r in routines if r.performed_on >= quarter_start),
        )
        stats.configure_intensity(dict(Counter(r.intensity.value for r in routines)))
        stats.configure_insurance(sum((c.total_amount for c in claims), Decimal("0")))
        stats.configure_load(
            total_calories=round(sum(estimate_calories(r) for r in routines), 1),
            injury_risk=self._injury_risk(routines),
        )
        self.logger.debug(f"Generated statistics for {athlete_name}: {total} routines")
        return stats.seal()

    def injuries_last_month(self, athlete_name: str) -> List[Routine]:
        if not athlete_name or not athlete_name.strip():
            return []
        month_start = self._month_start()
        return [
            r for r in self._routines_for(athlete_name)
            if r.has_injury and r.performed_on >= month_start
        ]

    def top_injuries_last_quarter(self, athlete_name: str, limit: int = 3) -> List[Tuple[str, int]]:
        """Most frequent injuries of the last quarter as ``(injury, count)``."""
        if not athlete_name or not athlete_name.strip():
            return []
        quarter_start = self._quarter_start()
        counts = Counter(
            r.injury_notes for r in self._routines_for(athlete_name)
            if r.has_injury and r.performed_on >= quarter_start
        )
        return counts.most_common(limit)

    def routines_with_follow_up(self, athlete_name: str) -> List[Routine]:
        """Routines with an injury, a linked claim, or high intensity."""
        return [
            r for r in self._routines_for(athlete_name)
            if r.has_injury or r.insurance_id or r.intensity is Intensity.HIGH
        ]

    # -- advice -------------------------------------------------------------

    def recommendations(self, athlete_name: str) -> List[str]:
        routines = self._routines_for(athlete_name)
        advice: List[str] = []

        risk = self._injury_risk(routines)
        if risk > HIGH_RISK_THRESHOLD:
            advice.append("ALTO RIESGO: Reducir intensidad y aumentar días de descanso")
            advice.append("Considerar evaluación médica preventiva")
        elif risk > MODERATE_RISK_THRESHOLD:
            advice.append("RIESGO MODERADO: Incluir más ejercicios de recuperación")
            advice.append("Implementar técnicas de relajación y estiramiento")

        month_start = self._month_start()
        last_month = sum(1 for r in routines if r.performed_on >= month_start)
        if last_month < MIN_MONTHLY_SESSIONS:
            advice.append("Aumentar frecuencia de entrenamiento (mínimo 2 por semana)")
        elif last_month > MAX_MONTHLY_SESSIONS:
            advice.append("Incluir más días de descanso para evitar sobreentrenamiento")

        if routines:
            total = len(routines)
            cardio_pct = _pct(sum(1 for r in routines if r.kind is RoutineKind.CARDIO), total)
            strength_pct = _pct(sum(1 for r in routines if r.kind is RoutineKind.STRENGTH), total)
            if cardio_pct < MIN_KIND_SHARE_PCT:
                advice.append("Incluir más ejercicios cardiovasculares (mínimo 30% del total)")
            if strength_pct < MIN_KIND_SHARE_PCT:
                advice.append("Incluir más ejercicios de fuerza (mínimo 30% del total)")

        recurring = [
            (injury, count)
            for injury, count in Counter(r.injury_notes for r in routines if r.has_injury).items()
            if count > 1
        ]
        if recurring:
            advice.append("Lesiones recurrentes detectadas. Consultar especialista en medicina deportiva")
            advice.extend(f"   • {injury}: {count} ocurrencias" for injury, count in recurring)

        if not advice:
            advice.append("Perfil de entrenamiento saludable. Continuar con la rutina actual")
            advice.append("Considerar progresión gradual en intensidad")
        return advice

    def insurance_report(self, athlete_name: str, currency: str = "₡") -> str:
        """Spanish text analysis of an athlete's insurance claims."""
        if not athlete_name or not athlete_name.strip():
            return "Nombre de atleta requerido para análisis de seguros."

        claims = self.insurance.find_by_athlete(athlete_name)
        if not claims:
            return f"No hay seguros médicos registrados para {athlete_name}."

        covered = sum((c.amount_covered for c in claims), Decimal("0"))
        patient = sum((c.amount_patient for c in claims), Decimal("0"))
        total = covered + patient

        lines = [
            f"=== ANÁLISIS DE SEGUROS MÉDICOS - {athlete_name.upper()} ===",
            "",
            "RESUMEN GENERAL:",
            f"Total de seguros: {len(claims)}",
            f"Seguros activos: {sum(1 for c in claims if c.status is InsuranceStatus.ACTIVE)}",
            f"Monto total cubierto por seguros: {currency}{covered:.2f}",
            f"Monto total pagado por paciente: {currency}{patient:.2f}",
            f"Monto total de tratamientos: {currency}{total:.2f}",
        ]
        if total > 0:
            lines.append(f"Porcentaje de cobertura promedio: {float(covered / total * 100):.1f}%")

        injury, injury_count = Counter(c.injury for c in claims).most_common(1)[0]
        injury_cost = sum((c.total_amount for c in claims if c.injury == injury), Decimal("0"))
        lines += [
            "",
            "ANÁLISIS DE LESIONES:",
            f"Lesión más frecuente: {injury} ({injury_count} ocurrencias)",
            f"Costo total de lesión más frecuente: {currency}{injury_cost:.2f}",
        ]

        insurer, insurer_count = Counter(c.insurer_name for c in claims).most_common(1)[0]
        insurer_claims = [c for c in claims if c.insurer_name == insurer]
        avg_coverage = sum(c.coverage_pct for c in insurer_claims) / len(insurer_claims)
        lines += [
            "",
            "ANÁLISIS DE SEGUROS:",
            f"Seguro más utilizado: {insurer} ({insurer_count} usos)",
            f"Cobertura promedio del seguro principal: {avg_coverage:.1f}%",
        ]

        month_start, quarter_start = self._month_start(), self._quarter_start()
        last_month = sum(1 for c in claims if c.applied_on >= month_start)
        last_quarter = sum(1 for c in claims if c.applied_on >= quarter_start)
        lines += [
            "",
            "TENDENCIAS TEMPORALES:",
            f"Seguros aplicados último mes: {last_month}",
            f"Seguros aplicados último trimestre: {last_quarter}",
            "",
            "RECOMENDACIONES:",
        ]
        if last_month > FREQUENT_CLAIMS_PER_MONTH:
            lines.append("Alta frecuencia de lesiones recientes. Revisar intensidad de entrenamientos.")
        if patient > covered:
            lines.append("Considerar mejorar cobertura del seguro médico.")
        if last_month <= FREQUENT_CLAIMS_PER_MONTH and patient <= covered:
            lines.append("Cobertura y frecuencia de lesiones dentro de lo esperado.")
        return "\n".join(lines)
