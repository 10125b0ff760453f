"""Tests for the entity managers (validate, confirm, persist, notify)."""

from datetime import timedelta
from decimal import Decimal

import pytest

from conftest import TODAY, clock, days_ago
from personal_training.db.repositories import AthleteRepository
from personal_training.exceptions import (
    CancelledError,
    DuplicateError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from personal_training.models import (
    Athlete,
    InsuranceStatus,
    Intensity,
    Level,
    MuscleGroup,
    Routine,
    StrengthDetails,
)
from personal_training.services import AthleteManager, AthleteSearchCriteria, Operation


class Recorder:
    """Change notifier that remembers every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, entity, operation):
        self.calls.append((entity, operation))


class TestAthleteManagerCrud:
    def test_add_and_list(self, athlete_manager, carla):
        athlete_manager.add(carla)
        assert [a.name for a in athlete_manager.list_all()] == ["Carla"]
        assert athlete_manager.count() == 1

    def test_names_unique_ignoring_case(self, athlete_manager, make_athlete):
        athlete_manager.add(make_athlete(name="Ana"))
        with pytest.raises(DuplicateError) as exc:
            athlete_manager.add(make_athlete(name="ana"))
        assert "Ya existe un atleta con el nombre 'ana'" in exc.value.message
        assert athlete_manager.count() == 1

    def test_validator_rules_applied(self, athlete_manager, make_athlete):
        with pytest.raises(ValidationError) as exc:
            athlete_manager.add(make_athlete(name="Ana3"))
        assert exc.value.errors
        assert athlete_manager.count() == 0

    def test_rename_to_existing_name_rejected(self, athlete_manager, make_athlete):
        ana = athlete_manager.add(make_athlete(name="Ana"))
        athlete_manager.add(make_athlete(name="Luis"))
        with pytest.raises(DuplicateError):
            athlete_manager.update(ana.id, make_athlete(name="LUIS"))

    def test_update_keeping_own_name(self, athlete_manager, make_athlete):
        ana = athlete_manager.add(make_athlete(name="Ana"))
        updated = athlete_manager.update(ana.id, make_athlete(name="ANA", weight_kg=62))
        assert updated.id == ana.id
        assert updated.name == "ANA"
        assert athlete_manager.get(ana.id).weight_kg == 62

    def test_update_unknown_id(self, athlete_manager, carla, make_athlete):
        athlete_manager.add(carla)
        before = athlete_manager.repository.path.read_bytes()
        with pytest.raises(NotFoundError):
            athlete_manager.update("no-existe", make_athlete())
        assert athlete_manager.repository.path.read_bytes() == before

    def test_get_unknown_id(self, athlete_manager):
        with pytest.raises(NotFoundError) as exc:
            athlete_manager.get("no-existe")
        assert exc.value.message == "Atleta con ID 'no-existe' no encontrado"

    def test_delete_returns_removed_athlete(self, athlete_manager, carla):
        athlete_manager.add(carla)
        removed = athlete_manager.delete(carla.id)
        assert removed.name == "Carla"
        assert athlete_manager.count() == 0


class TestManagerStrategies:
    def test_notifiers_receive_each_operation(self, athlete_repo, carla, make_athlete):
        recorder = Recorder()
        manager = AthleteManager(athlete_repo, notifiers=[recorder])
        manager.add(carla)
        manager.update(carla.id, make_athlete(name="Carla Ruiz"))
        manager.delete(carla.id)
        assert [op for _, op in recorder.calls] == [Operation.ADD, Operation.UPDATE, Operation.DELETE]

    def test_declined_confirmation_cancels(self, athlete_repo, carla):
        manager = AthleteManager(athlete_repo, confirmer=lambda entity, op: op is not Operation.DELETE)
        manager.add(carla)
        with pytest.raises(CancelledError):
            manager.delete(carla.id)
        assert manager.count() == 1

    def test_no_notification_when_rejected(self, athlete_repo, make_athlete):
        recorder = Recorder()
        manager = AthleteManager(athlete_repo, notifiers=[recorder])
        with pytest.raises(ValidationError):
            manager.add(make_athlete(name="Ana1"))
        assert recorder.calls == []

    def test_persistence_error_gets_operation_context(self, tmp_path, carla):
        blocker = tmp_path / "bloqueado"
        blocker.write_text("", encoding="utf-8")
        manager = AthleteManager(AthleteRepository(blocker / "atletas.txt"))
        with pytest.raises(PersistenceError) as exc:
            manager.add(carla)
        assert exc.value.message.startswith("Error al agregar atleta")
        assert isinstance(exc.value.__cause__, PersistenceError)


class TestAthleteManagerQueries:
    @pytest.fixture
    def manager(self, athlete_manager, make_athlete):
        athlete_manager.add(make_athlete(name="Carla", weight_kg=70, height_m=1.75,
                                         goals="Ganar fuerza", level="Intermedio"))
        athlete_manager.add(make_athlete(name="Pedro", weight_kg=100, height_m=1.70,
                                         goals="Perder peso", level="Principiante"))
        athlete_manager.add(make_athlete(name="Marta", weight_kg=55, height_m=1.68,
                                         goals="Ganar fuerza", level="Avanzado"))
        return athlete_manager

    def test_search_with_dict(self, manager):
        found = manager.search({"goals": "fuerza", "bmi_max": 21})
        assert [a.name for a in found] == ["Marta"]

    def test_search_with_criteria_model(self, manager):
        found = manager.search(AthleteSearchCriteria(level="principiante"))
        assert [a.name for a in found] == ["Pedro"]

    def test_blank_criteria_match_everyone(self, manager):
        assert len(manager.search({"name": "  ", "level": ""})) == 3

    def test_search_text(self, manager):
        assert [a.name for a in manager.search_text("avanzado")] == ["Marta"]

    def test_find_by_name(self, manager):
        assert manager.find_by_name("pedro").goals == "Perder peso"

    def test_general_statistics(self, manager):
        overview = manager.general_statistics()
        assert overview.total == 3
        assert overview.by_level == {"Intermedio": 1, "Principiante": 1, "Avanzado": 1}
        assert overview.top_goals["Ganar fuerza"] == 2
        assert overview.max_bmi == pytest.approx(34.6, abs=0.01)

    def test_general_statistics_empty(self, athlete_manager):
        assert athlete_manager.general_statistics().total == 0

    def test_compatibility_for_high_bmi_strength(self, manager):
        pedro = manager.find_by_name("Pedro")
        report = manager.evaluate_compatibility(pedro, "Fuerza")
        assert report.compatible
        assert any("cardio para reducir peso" in r for r in report.recommendations)

    def test_beginner_high_intensity_incompatible(self, manager):
        pedro = manager.find_by_name("Pedro")
        assert not manager.evaluate_compatibility(pedro, "Cardio alta intensidad").compatible

    def test_compatible_profile(self, manager):
        carla = manager.find_by_name("Carla")
        report = manager.evaluate_compatibility(carla, "Fuerza")
        assert report.recommendations == ["Atleta compatible con el tipo de entrenamiento seleccionado"]


class TestRoutineManager:
    def test_duration_500_rejected(self, routine_manager):
        routine = Routine(
            id="r1", duration_min=500, intensity=Intensity.LOW, muscle_group=MuscleGroup.LEGS,
            athlete_name="Carla", performed_on=days_ago(1), details=StrengthDetails(),
        )
        with pytest.raises(ValidationError):
            routine_manager.add(routine)
        assert routine_manager.count() == 0

    def test_date_after_clock_rejected(self, routine_manager):
        routine = Routine(
            id="r1", duration_min=30, intensity=Intensity.LOW, muscle_group=MuscleGroup.LEGS,
            athlete_name="Carla", performed_on=TODAY + timedelta(days=1), details=StrengthDetails(),
        )
        with pytest.raises(ValidationError):
            routine_manager.add(routine)

    def test_cardio_on_chest_rejected(self, routine_manager, make_cardio):
        with pytest.raises(ValidationError):
            routine_manager.add(make_cardio(muscle_group="Pecho"))

    def test_update_keeps_id(self, routine_manager, make_strength):
        stored = routine_manager.add(make_strength(duration_min=40))
        updated = routine_manager.update(stored.id, make_strength(duration_min=50))
        assert updated.id == stored.id
        assert routine_manager.get(stored.id).duration_min == 50

    def test_search_with_and_without_athlete(self, routine_manager, make_cardio):
        routine_manager.add(make_cardio(cardio_type="Natación"))
        routine_manager.add(make_cardio(athlete_name="Luis", cardio_type="Natación"))
        assert len(routine_manager.search(None, "natación")) == 2
        assert len(routine_manager.search("luis", "natación")) == 1

    def test_combined_search_blank_means_any(self, routine_manager, make_strength, make_cardio):
        routine_manager.add(make_strength(intensity="Alta"))
        routine_manager.add(make_cardio())
        assert len(routine_manager.combined_search(kind="", intensity="alta")) == 1
        assert len(routine_manager.combined_search()) == 2

    def test_needing_attention(self, routine_manager, make_strength):
        expiring = routine_manager.add(make_strength(days=10, expires_on=TODAY + timedelta(days=3)))
        injured = routine_manager.add(make_strength(days=2, injury_notes="Tendinitis"))
        routine_manager.add(make_strength(days=20, expires_on=TODAY + timedelta(days=30)))
        routine_manager.add(make_strength(days=1))
        found = {r.id for r in routine_manager.needing_attention("Carla")}
        assert found == {expiring.id, injured.id}

    def test_add_with_claim_links_both(self, routine_manager, insurance_manager, make_strength, make_claim):
        routine, claim = routine_manager.add_with_claim(
            make_strength(injury_notes="Esguince"), make_claim(), insurance_manager
        )
        assert routine.insurance_id == claim.id
        assert routine_manager.repository.find_by_insurance(claim.id)[0].id == routine.id
        assert insurance_manager.count() == 1

    def test_summary(self, routine_manager, make_strength, make_cardio):
        routine_manager.add(make_strength())
        routine_manager.add(make_cardio(athlete_name="Luis"))
        assert routine_manager.summary("Carla").total == 1
        assert routine_manager.summary().total == 2


class TestInsuranceManager:
    def test_add_after_clock_rejected(self, insurance_manager, make_claim):
        claim = make_claim()
        claim.applied_on = TODAY + timedelta(days=1)
        with pytest.raises(ValidationError):
            insurance_manager.add(claim)

    def test_complete(self, insurance_manager, make_claim):
        claim = insurance_manager.add(make_claim(days=10))
        done = insurance_manager.complete(claim.id)
        assert done.status is InsuranceStatus.COMPLETED
        assert insurance_manager.get(claim.id).completed_on == TODAY

    def test_suspend_and_reactivate(self, insurance_manager, make_claim):
        claim = insurance_manager.add(make_claim())
        assert insurance_manager.suspend(claim.id).status is InsuranceStatus.SUSPENDED
        assert insurance_manager.reactivate(claim.id).status is InsuranceStatus.ACTIVE

    def test_reactivate_active_claim_rejected(self, insurance_manager, make_claim):
        claim = insurance_manager.add(make_claim())
        with pytest.raises(ValidationError):
            insurance_manager.reactivate(claim.id)

    def test_cancel_removes_from_active(self, insurance_manager, make_claim):
        claim = insurance_manager.add(make_claim())
        insurance_manager.cancel(claim.id)
        assert insurance_manager.list_active() == []

    def test_update_cannot_move_claim_to_other_athlete(self, insurance_manager, make_claim):
        claim = insurance_manager.add(make_claim(athlete_name="Carla"))
        updated = insurance_manager.update(claim.id, make_claim(athlete_name="Luis", insurer_name="Otra"))
        assert updated.athlete_name == "Carla"
        assert updated.insurer_name == "Otra"

    def test_searches(self, insurance_manager, make_claim):
        insurance_manager.add(make_claim(insurer_name="Seguros del Sur", covered="300", patient="300"))
        insurance_manager.add(make_claim(athlete_name="Luis", insurer_name="Vida Plena"))
        assert len(insurance_manager.search("vida")) == 1
        assert len(insurance_manager.search_by_insurer("seguros")) == 1
        assert len(insurance_manager.search_by_athlete("luis")) == 1
        assert len(insurance_manager.search_by_amount_covered(minimum="500")) == 1
        assert len(insurance_manager.search_by_amount_patient(maximum="250")) == 1
        assert len(insurance_manager.search_by_total_range("600", "600")) == 1

    def test_financial_summary(self, insurance_manager, make_claim):
        insurance_manager.add(make_claim(covered="800", patient="200"))
        summary = insurance_manager.financial_summary()
        assert summary.total == Decimal("1000")
        assert summary.active == 1
