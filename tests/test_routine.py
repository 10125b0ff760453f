"""Tests for the Routine entity and its kind-specific helpers."""

from datetime import timedelta

import pytest

from conftest import TODAY, days_ago
from personal_training.exceptions import ValidationError
from personal_training.models import (
    CardioDetails,
    Intensity,
    MuscleGroup,
    Routine,
    RoutineKind,
    StrengthDetails,
)
from personal_training.models.routine import (
    describe,
    estimate_calories,
    matches,
    needs_special_equipment,
    specific_features,
    suggested_rest_seconds,
    total_volume,
)


class TestRoutineCreate:
    def test_default_strength_details(self):
        routine = Routine.create("Fuerza", 45, "Media", "Pecho", "Carla", performed_on=TODAY, today=TODAY)
        assert routine.kind is RoutineKind.STRENGTH
        assert routine.details == StrengthDetails()

    def test_default_cardio_details(self):
        routine = Routine.create("cardio", 30, "Baja", "Cardio", "Carla", performed_on=TODAY, today=TODAY)
        assert routine.kind is RoutineKind.CARDIO
        assert routine.details.cardio_type == "General"

    def test_details_must_match_kind(self):
        with pytest.raises(ValidationError):
            Routine.create("Fuerza", 30, "Media", "Pecho", "Carla",
                           performed_on=TODAY, details=CardioDetails(), today=TODAY)

    def test_duration_out_of_range(self):
        with pytest.raises(ValidationError) as exc:
            Routine.create("Fuerza", 500, "Media", "Pecho", "Carla", performed_on=TODAY, today=TODAY)
        assert "500" in str(exc.value)

    def test_future_date_rejected(self):
        with pytest.raises(ValidationError):
            Routine.create("Fuerza", 30, "Media", "Pecho", "Carla",
                           performed_on=TODAY + timedelta(days=1), today=TODAY)

    def test_expiry_must_follow_performed_date(self):
        with pytest.raises(ValidationError):
            Routine.create("Fuerza", 30, "Media", "Pecho", "Carla",
                           performed_on=TODAY, expires_on=TODAY, today=TODAY)

    def test_athlete_name_required(self):
        with pytest.raises(ValidationError):
            Routine.create("Fuerza", 30, "Media", "Pecho", "  ", performed_on=TODAY, today=TODAY)

    @pytest.mark.parametrize("details", [
        StrengthDetails(sets=0),
        StrengthDetails(reps=0),
        StrengthDetails(weight_used_kg=-1),
        StrengthDetails(weight_used_kg=float("nan")),
    ])
    def test_invalid_strength_details(self, details):
        with pytest.raises(ValidationError):
            Routine.create("Fuerza", 30, "Media", "Pecho", "Carla",
                           performed_on=TODAY, details=details, today=TODAY)

    def test_heart_rate_zero_means_not_measured(self, make_cardio):
        assert make_cardio(avg_heart_rate=0).details.avg_heart_rate == 0

    def test_heart_rate_out_of_range(self, make_cardio):
        with pytest.raises(ValidationError):
            make_cardio(avg_heart_rate=30)


class TestRoutineHelpers:
    def test_calories_by_kind(self, make_strength, make_cardio):
        assert estimate_calories(make_strength(duration_min=30, weight_used_kg=0)) == 240.0
        assert estimate_calories(make_cardio(distance_km=0, avg_heart_rate=0)) == 240.0

    def test_special_equipment(self, make_strength, make_cardio):
        assert needs_special_equipment(make_strength(weight_used_kg=20))
        assert not needs_special_equipment(make_strength(weight_used_kg=0))
        assert needs_special_equipment(make_cardio(cardio_type="Bicicleta"))
        assert not needs_special_equipment(make_cardio(cardio_type="Carrera"))

    def test_volume_is_zero_for_cardio(self, make_strength, make_cardio):
        assert total_volume(make_strength(sets=3, reps=10, weight_used_kg=50)) == 1500
        assert total_volume(make_cardio()) == 0.0

    def test_rest_by_intensity(self, make_strength, make_cardio):
        assert suggested_rest_seconds(make_strength(intensity="Alta")) == 180
        assert suggested_rest_seconds(make_strength(intensity="Baja")) == 60
        assert suggested_rest_seconds(make_cardio()) == 0

    def test_specific_features(self, make_strength, make_cardio):
        assert "Hipertrofia" in specific_features(make_strength(reps=10))
        features = specific_features(make_cardio(distance_km=0, avg_heart_rate=0))
        assert features == "Tipo: Carrera"

    def test_describe_mentions_injury_and_expiry(self, make_strength):
        routine = make_strength(injury_notes="Tendinitis", expires_on=TODAY + timedelta(days=5))
        text = describe(routine)
        assert text.startswith("[Fuerza]")
        assert "Lesiones: Tendinitis" in text
        assert "Vence:" in text

    def test_matches_cardio_type(self, make_cardio):
        routine = make_cardio(cardio_type="Natación")
        assert matches(routine, "nata")
        assert matches(routine, "media")
        assert not matches(routine, "pecho")
        assert not matches(routine, "")

    def test_has_injury(self, make_strength):
        assert make_strength(injury_notes="Esguince").has_injury
        assert not make_strength().has_injury


class TestRoutineUpdate:
    def test_update_from_keeps_id_and_copies_details(self, make_strength):
        original = make_strength()
        other = make_strength(duration_min=60, sets=5)
        original_id = original.id
        original.update_from(other, today=TODAY)
        assert original.id == original_id
        assert original.duration_min == 60
        assert original.details.sets == 5
        assert original.details is not other.details

    def test_update_from_invalid_rejected(self, make_strength):
        original = make_strength()
        broken = make_strength()
        broken.duration_min = 0
        with pytest.raises(ValidationError):
            original.update_from(broken, today=TODAY)
        assert original.duration_min == 45


class TestRoutineSerialization:
    def test_round_trip_cardio(self, make_cardio):
        routine = make_cardio(injury_notes="Calambre")
        routine.insurance_id = "abc"
        restored = Routine.from_dict(routine.to_dict())
        assert restored.to_dict() == routine.to_dict()
        assert isinstance(restored.details, CardioDetails)

    def test_kind_tag_written(self, make_strength):
        data = make_strength().to_dict()
        assert data["kind"] == "Fuerza"
        assert data["details"]["sets"] == 3

    def test_missing_details_use_defaults(self):
        restored = Routine.from_dict({
            "id": "r1",
            "kind": "Cardio",
            "duration_min": 20,
            "intensity": "Baja",
            "muscle_group": "Cardio",
            "athlete_name": "Carla",
            "performed_on": days_ago(3).isoformat(),
        })
        assert restored.details == CardioDetails()
        assert restored.intensity is Intensity.LOW
        assert restored.muscle_group is MuscleGroup.CARDIO
        assert restored.expires_on is None

    @pytest.mark.parametrize("details", ["x", [3, 10], 5])
    def test_details_must_be_an_object(self, make_strength, details):
        with pytest.raises(ValidationError):
            Routine.from_dict(dict(make_strength().to_dict(), details=details))

    def test_nan_distance_rejected(self, make_cardio):
        data = make_cardio().to_dict()
        data["details"]["distance_km"] = float("nan")
        with pytest.raises(ValidationError):
            Routine.from_dict(data)
