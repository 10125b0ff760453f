"""Shared fixtures: file-backed stores in a temp dir and a fixed clock."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from personal_training.db.repositories import (
    AthleteRepository,
    InsuranceRepository,
    RoutineRepository,
)
from personal_training.models import Athlete, MedicalInsurance, Routine
from personal_training.models.routine import CardioDetails, StrengthDetails
from personal_training.services import (
    AthleteManager,
    InsuranceManager,
    RoutineManager,
    SuggestionService,
    TrainingService,
)

# Every test runs "on" this date; entity dates stay on or before it.
TODAY = date(2024, 6, 15)


def clock() -> date:
    return TODAY


def days_ago(days: int) -> date:
    return TODAY - timedelta(days=days)


@pytest.fixture
def athlete_repo(tmp_path):
    return AthleteRepository(tmp_path / "atletas.txt")


@pytest.fixture
def routine_repo(tmp_path):
    return RoutineRepository(tmp_path / "rutinas.txt")


@pytest.fixture
def insurance_repo(tmp_path):
    return InsuranceRepository(tmp_path / "seguros.txt")


@pytest.fixture
def athlete_manager(athlete_repo):
    return AthleteManager(athlete_repo)


@pytest.fixture
def routine_manager(routine_repo):
    return RoutineManager(routine_repo, today=clock)


@pytest.fixture
def insurance_manager(insurance_repo):
    return InsuranceManager(insurance_repo, today=clock)


@pytest.fixture
def training_service(routine_repo, insurance_repo):
    return TrainingService(routine_repo, insurance_repo, today=clock)


@pytest.fixture
def suggestion_service():
    return SuggestionService()


@pytest.fixture
def carla():
    """Intermediate athlete with a normal BMI (70 kg, 1.75 m)."""
    return Athlete.create(
        name="Carla",
        weight_kg=70,
        height_m=1.75,
        goals="Ganar fuerza",
        level="Intermedio",
    )


@pytest.fixture
def make_athlete():
    def _make(name="Ana", weight_kg=60.0, height_m=1.65, goals="Mejorar resistencia", level="Principiante"):
        return Athlete.create(name=name, weight_kg=weight_kg, height_m=height_m, goals=goals, level=level)
    return _make


@pytest.fixture
def make_strength():
    def _make(athlete_name="Carla", days=1, duration_min=45, intensity="Media",
              muscle_group="Pecho", injury_notes="", sets=3, reps=10, weight_used_kg=40.0,
              expires_on=None):
        return Routine.create(
            kind="Fuerza",
            duration_min=duration_min,
            intensity=intensity,
            muscle_group=muscle_group,
            athlete_name=athlete_name,
            performed_on=days_ago(days),
            expires_on=expires_on,
            injury_notes=injury_notes,
            details=StrengthDetails(sets=sets, reps=reps, weight_used_kg=weight_used_kg),
            today=TODAY,
        )
    return _make


@pytest.fixture
def make_cardio():
    def _make(athlete_name="Carla", days=1, duration_min=30, intensity="Media",
              muscle_group="Cardio", injury_notes="", cardio_type="Carrera",
              distance_km=5.0, avg_heart_rate=140):
        return Routine.create(
            kind="Cardio",
            duration_min=duration_min,
            intensity=intensity,
            muscle_group=muscle_group,
            athlete_name=athlete_name,
            performed_on=days_ago(days),
            injury_notes=injury_notes,
            details=CardioDetails(cardio_type=cardio_type, distance_km=distance_km, avg_heart_rate=avg_heart_rate),
            today=TODAY,
        )
    return _make


@pytest.fixture
def make_claim():
    def _make(athlete_name="Carla", insurer_name="INS", covered="800", patient="200",
              injury="Esguince", treatment="Fisioterapia", days=10):
        return MedicalInsurance.create(
            insurer_name=insurer_name,
            amount_covered=Decimal(covered),
            amount_patient=Decimal(patient),
            injury=injury,
            treatment=treatment,
            athlete_name=athlete_name,
            applied_on=days_ago(days),
            today=TODAY,
        )
    return _make
