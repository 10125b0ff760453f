"""Tests for parsing console input into entities."""

from decimal import Decimal

import pytest

from conftest import TODAY, days_ago
from personal_training.exceptions import ValidationError
from personal_training.forms import AthleteForm, InsuranceForm, RoutineForm, parse_form
from personal_training.models import CardioDetails, Level, RoutineKind, StrengthDetails


class TestAthleteForm:
    def test_height_in_centimetres(self):
        form = parse_form(AthleteForm, name="Carla", weight_kg="70", height_m="175",
                          goals="Ganar fuerza", level="intermedio")
        assert form.height_m == 1.75
        assert form.level is Level.INTERMEDIATE

    def test_decimal_comma(self):
        form = parse_form(AthleteForm, name="Carla", weight_kg="70,5", height_m="1,75",
                          goals="Ganar fuerza", level="Avanzado")
        assert form.weight_kg == 70.5
        assert form.height_m == 1.75

    def test_builds_athlete(self):
        athlete = parse_form(AthleteForm, name="Carla", weight_kg="70", height_m="1.75",
                             goals="Ganar fuerza", level="Intermedio").to_athlete()
        assert athlete.bmi == 22.86

    def test_non_numeric_weight(self):
        with pytest.raises(ValidationError) as exc:
            parse_form(AthleteForm, name="Carla", weight_kg="setenta", height_m="1.75",
                       goals="Ganar fuerza", level="Intermedio")
        assert exc.value.errors[0].startswith("weight_kg")

    def test_unknown_level(self):
        with pytest.raises(ValidationError):
            parse_form(AthleteForm, name="Carla", weight_kg="70", height_m="1.75",
                       goals="Ganar fuerza", level="Experto")


class TestRoutineForm:
    def test_blank_dates_default_to_today(self):
        form = parse_form(RoutineForm, kind="Fuerza", duration_min="45", intensity="Media",
                          muscle_group="Pecho", performed_on="", expires_on="",
                          sets="4", reps="8", weight_used_kg="60,5")
        routine = form.to_routine("Carla", today=TODAY)
        assert routine.performed_on == TODAY
        assert routine.expires_on is None
        assert routine.details == StrengthDetails(sets=4, reps=8, weight_used_kg=60.5)

    def test_cardio_details(self):
        form = parse_form(RoutineForm, kind="cardio", duration_min="30", intensity="Baja",
                          muscle_group="Cardio", performed_on=days_ago(2).isoformat(),
                          cardio_type="  ", distance_km="5,2", avg_heart_rate="135")
        routine = form.to_routine("Carla", today=TODAY)
        assert routine.kind is RoutineKind.CARDIO
        assert routine.details == CardioDetails(cardio_type="General", distance_km=5.2, avg_heart_rate=135)
        assert routine.performed_on == days_ago(2)

    def test_bad_date(self):
        with pytest.raises(ValidationError):
            parse_form(RoutineForm, kind="Fuerza", duration_min="45", intensity="Media",
                       muscle_group="Pecho", performed_on="15/06/2024")

    def test_duration_out_of_range_rejected_on_build(self):
        form = parse_form(RoutineForm, kind="Fuerza", duration_min="500", intensity="Media",
                          muscle_group="Pecho")
        with pytest.raises(ValidationError):
            form.to_routine("Carla", today=TODAY)


class TestInsuranceForm:
    def test_amounts_with_decimal_comma(self):
        form = parse_form(InsuranceForm, insurer_name="INS", amount_covered="1500,50",
                          amount_patient="0", injury="Esguince")
        claim = form.to_claim("Carla", today=TODAY)
        assert claim.amount_covered == Decimal("1500.50")
        assert claim.applied_on == TODAY
        assert claim.athlete_name == "Carla"

    def test_negative_amount(self):
        with pytest.raises(ValidationError):
            parse_form(InsuranceForm, insurer_name="INS", amount_covered="-1",
                       amount_patient="0", injury="Esguince")
