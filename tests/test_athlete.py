"""Tests for the Athlete entity."""

import pytest

from personal_training.exceptions import ValidationError
from personal_training.models import Athlete, Level, RoutineKind


class TestAthleteCreate:
    def test_create_computes_bmi(self, carla):
        assert carla.bmi == 22.86
        assert carla.bmi_category == "Peso normal"

    def test_create_assigns_unique_ids(self, make_athlete):
        assert make_athlete().id != make_athlete().id

    def test_create_parses_level_labels_and_names(self, make_athlete):
        assert make_athlete(level="intermedio").level is Level.INTERMEDIATE
        assert make_athlete(level="ADVANCED").level is Level.ADVANCED

    def test_create_strips_text(self, make_athlete):
        athlete = make_athlete(name="  Ana  ", goals="  correr  ")
        assert athlete.name == "Ana"
        assert athlete.goals == "correr"

    @pytest.mark.parametrize("field,value", [
        ("weight_kg", 0),
        ("weight_kg", 501),
        ("height_m", 0),
        ("height_m", 3.5),
        ("weight_kg", float("nan")),
        ("height_m", float("nan")),
        ("name", ""),
        ("goals", ""),
    ])
    def test_create_rejects_broken_data(self, make_athlete, field, value):
        with pytest.raises(ValidationError):
            make_athlete(**{field: value})

    def test_unknown_level_rejected(self, make_athlete):
        with pytest.raises(ValidationError) as exc:
            make_athlete(level="Experto")
        assert "Principiante" in str(exc.value)

    def test_non_text_level_rejected(self, make_athlete):
        with pytest.raises(ValidationError):
            make_athlete(level=1)


class TestAthleteBehavior:
    def test_update_from_keeps_id(self, carla, make_athlete):
        other = make_athlete(name="Carla Ruiz", weight_kg=68)
        original_id = carla.id
        carla.update_from(other)
        assert carla.id == original_id
        assert carla.name == "Carla Ruiz"
        assert carla.weight_kg == 68

    def test_update_from_none_rejected(self, carla):
        with pytest.raises(ValidationError):
            carla.update_from(None)

    def test_matches_name_goals_and_level(self, carla):
        assert carla.matches("carl")
        assert carla.matches("FUERZA")
        assert carla.matches("intermedio")
        assert not carla.matches("natación")
        assert not carla.matches("   ")

    def test_compatibility_follows_goals(self, carla):
        assert carla.is_compatible_with(RoutineKind.STRENGTH)
        assert not carla.is_compatible_with("Cardio")

    def test_unknown_training_type_is_compatible(self, carla):
        assert carla.is_compatible_with("Yoga")

    def test_equality_is_by_id(self, carla):
        clone = Athlete.from_dict(carla.to_dict())
        clone.weight_kg = 90
        assert clone == carla
        assert len({carla, clone}) == 1

    def test_describe_mentions_bmi(self, carla):
        assert "IMC: 22.86" in carla.describe()


class TestAthleteSerialization:
    def test_round_trip(self, carla):
        restored = Athlete.from_dict(carla.to_dict())
        assert restored.to_dict() == carla.to_dict()
        assert restored.level is Level.INTERMEDIATE

    def test_level_written_as_label(self, carla):
        assert carla.to_dict()["level"] == "Intermedio"

    def test_nan_athlete_fails_self_check(self, carla):
        carla.weight_kg = float("nan")
        assert not carla.is_valid()
        assert "El peso debe estar entre 0 y 500 kg" in carla.validation_errors()

    @pytest.mark.parametrize("changes", [
        {"weight_kg": float("nan")},
        {"height_m": float("inf")},
        {"level": 2},
        {"name": None},
    ])
    def test_from_dict_rejects_bad_values(self, carla, changes):
        with pytest.raises(ValidationError):
            Athlete.from_dict(dict(carla.to_dict(), **changes))

    def test_from_dict_requires_an_object(self):
        with pytest.raises(ValidationError):
            Athlete.from_dict(["Carla", 70])
