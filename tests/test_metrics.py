"""Tests for body and training-load metric calculations."""

import pytest

from personal_training.metrics import (
    base_calories,
    bmi_category,
    calculate_bmi,
    calculate_injury_risk,
    cardio_calories,
    relative_strength_intensity,
    strength_calories,
    strength_volume,
)


class TestBmi:
    """Tests for BMI and its category."""

    def test_bmi_rounded_to_two_decimals(self):
        assert calculate_bmi(70, 1.75) == 22.86

    def test_bmi_zero_height(self):
        """Non-positive height should give 0 instead of dividing by zero."""
        assert calculate_bmi(70, 0) == 0.0

    @pytest.mark.parametrize("bmi,expected", [
        (0, "No determinado"),
        (18.4, "Bajo peso"),
        (18.5, "Peso normal"),
        (24.99, "Peso normal"),
        (25, "Sobrepeso"),
        (30, "Obesidad"),
    ])
    def test_category_boundaries(self, bmi, expected):
        assert bmi_category(bmi) == expected


class TestCalories:
    """Tests for the calorie estimates."""

    def test_base_calories_per_intensity(self):
        assert base_calories(10, 1) == 50
        assert base_calories(10, 2) == 80
        assert base_calories(10, 3) == 110

    def test_strength_without_load_or_volume_bonus(self):
        """3x10 is exactly 30 reps, which does not earn the volume bonus."""
        assert strength_calories(30, 2, 3, 10, 0) == 240.0

    def test_strength_weight_and_volume_factors(self):
        # 240 * (1 + 50/100) * 1.2
        assert strength_calories(30, 2, 4, 10, 50) == 432.0

    def test_cardio_plain(self):
        assert cardio_calories(30, 2, 0, 0) == 240.0

    def test_cardio_heart_rate_factor_only_above_120(self):
        assert cardio_calories(30, 2, 0, 120) == 240.0
        assert cardio_calories(30, 2, 0, 140) == 264.0

    def test_cardio_distance_factor(self):
        assert cardio_calories(30, 2, 10, 0) == 288.0


class TestStrengthHelpers:
    def test_volume(self):
        assert strength_volume(3, 10, 50) == 1500

    @pytest.mark.parametrize("reps,focus", [
        (5, "Fuerza máxima"),
        (8, "Fuerza"),
        (12, "Hipertrofia"),
        (15, "Resistencia muscular"),
    ])
    def test_rep_range_focus(self, reps, focus):
        assert relative_strength_intensity(reps) == focus


class TestInjuryRisk:
    """Tests for the injury-risk score."""

    def test_low_intensity_baseline(self):
        assert calculate_injury_risk(0, 1, 0, 0) == 15.0

    def test_overtraining_penalty_above_five_sessions(self):
        base = calculate_injury_risk(10, 2, 20, 5)
        assert calculate_injury_risk(10, 2, 20, 6) == pytest.approx(base + 10)

    def test_clamped_to_100(self):
        assert calculate_injury_risk(100, 3, 100, 7) == 100.0

    def test_monotonic_in_injury_rate(self):
        scores = [calculate_injury_risk(rate, 2, 30, 3) for rate in range(0, 101, 10)]
        assert scores == sorted(scores)
        assert all(0 <= score <= 100 for score in scores)

    def test_monotonic_in_average_intensity(self):
        scores = [calculate_injury_risk(10, level / 4, 20, 3) for level in range(4, 13)]
        assert scores == sorted(scores)
        assert scores[0] < scores[-1]

    def test_monotonic_in_high_intensity_share(self):
        scores = [calculate_injury_risk(10, 2, pct, 3) for pct in range(0, 101, 10)]
        assert scores == sorted(scores)
        assert scores[0] < scores[-1]

    def test_monotonic_in_every_input_at_the_ceiling(self):
        scores = [calculate_injury_risk(100, 3, pct, 7) for pct in range(0, 101, 25)]
        assert scores == sorted(scores)
        assert scores[-1] == 100.0

    def test_clamped_to_zero(self):
        assert calculate_injury_risk(0, 0, 0, 0) == 0.0
        assert calculate_injury_risk(-100, -3, -100, 0) == 0.0
