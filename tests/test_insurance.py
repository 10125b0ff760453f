"""Tests for the MedicalInsurance entity and its lifecycle."""

from datetime import timedelta
from decimal import Decimal

import pytest

from conftest import TODAY, days_ago
from personal_training.exceptions import ValidationError
from personal_training.models import InsuranceStatus, MedicalInsurance
from personal_training.models.insurance import to_decimal


class TestAmounts:
    def test_total_and_coverage(self, make_claim):
        claim = make_claim(covered="800", patient="200")
        assert claim.total_amount == Decimal("1000")
        assert claim.coverage_pct == 80.0

    def test_coverage_zero_total(self):
        claim = MedicalInsurance(
            id="c1", insurer_name="INS", amount_covered=0, amount_patient=0,
            injury="Esguince", treatment="", athlete_name="Carla", applied_on=TODAY,
        )
        assert claim.coverage_pct == 0.0

    def test_amounts_parsed_from_text(self):
        assert to_decimal(" 1500.50 ") == Decimal("1500.50")

    def test_non_numeric_amount(self):
        with pytest.raises(ValidationError):
            to_decimal("mil")

    @pytest.mark.parametrize("text", ["NaN", "Infinity", "-inf"])
    def test_non_finite_amount(self, text):
        with pytest.raises(ValidationError):
            to_decimal(text)


class TestClaimCreate:
    def test_both_amounts_zero_rejected(self, make_claim):
        with pytest.raises(ValidationError) as exc:
            make_claim(covered="0", patient="0")
        assert "mayor a cero" in str(exc.value)

    def test_negative_amount_rejected(self, make_claim):
        with pytest.raises(ValidationError):
            make_claim(covered="-1")

    def test_injury_required(self, make_claim):
        with pytest.raises(ValidationError):
            make_claim(injury=" ")

    def test_future_application_rejected(self):
        with pytest.raises(ValidationError):
            MedicalInsurance.create(
                insurer_name="INS", amount_covered="100", amount_patient="0",
                injury="Esguince", treatment="", athlete_name="Carla",
                applied_on=TODAY + timedelta(days=1), today=TODAY,
            )

    def test_new_claim_is_active(self, make_claim):
        claim = make_claim()
        assert claim.status is InsuranceStatus.ACTIVE
        assert claim.is_active
        assert claim.completed_on is None


class TestLifecycle:
    def test_complete_sets_date_and_status(self, make_claim):
        claim = make_claim(days=10)
        done = claim.completed(today=TODAY)
        assert done.status is InsuranceStatus.COMPLETED
        assert done.completed_on == TODAY
        assert done.treatment_days() == 10
        assert claim.status is InsuranceStatus.ACTIVE

    def test_complete_same_day_rejected(self, make_claim):
        claim = make_claim(days=0)
        with pytest.raises(ValidationError):
            claim.completed(today=TODAY)

    def test_suspend_then_reactivate(self, make_claim):
        suspended = make_claim().suspended()
        assert suspended.status is InsuranceStatus.SUSPENDED
        assert suspended.reactivated().status is InsuranceStatus.ACTIVE

    def test_reactivate_requires_suspended(self, make_claim):
        with pytest.raises(ValidationError):
            make_claim().reactivated()
        with pytest.raises(ValidationError):
            make_claim().cancelled().reactivated()

    def test_open_claim_counts_days_until_today(self, make_claim):
        assert make_claim(days=4).treatment_days(today=TODAY) == 4


class TestClaimUpdate:
    def test_update_keeps_athlete_and_application_date(self, make_claim):
        claim = make_claim(athlete_name="Carla", days=10)
        other = make_claim(athlete_name="Luis", insurer_name="Otra", days=2)
        claim.update_from(other)
        assert claim.insurer_name == "Otra"
        assert claim.athlete_name == "Carla"
        assert claim.applied_on == days_ago(10)


class TestClaimQueries:
    def test_matches_text_and_amounts(self, make_claim):
        claim = make_claim(insurer_name="Seguros del Sur", covered="750")
        assert claim.matches("sur")
        assert claim.matches("esguince")
        assert claim.matches("750")
        assert not claim.matches("fractura")

    def test_describe_uses_currency(self, make_claim):
        text = make_claim().describe(currency="$", today=TODAY)
        assert "Total: $1000.00" in text
        assert "Cobertura: 80.0%" in text


class TestClaimSerialization:
    def test_amounts_written_as_strings(self, make_claim):
        data = make_claim(covered="800.10").to_dict()
        assert data["amount_covered"] == "800.10"
        assert data["status"] == "Activo"

    def test_round_trip_keeps_precision(self, make_claim):
        claim = make_claim(covered="800.10", patient="0.05").completed(today=TODAY)
        restored = MedicalInsurance.from_dict(claim.to_dict())
        assert restored.amount_covered == Decimal("800.10")
        assert restored.amount_patient == Decimal("0.05")
        assert restored.status is InsuranceStatus.COMPLETED
        assert restored.completed_on == TODAY
