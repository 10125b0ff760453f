"""Training metrics calculations."""

from .body import calculate_bmi, bmi_category
from .load import (
    base_calories,
    strength_calories,
    cardio_calories,
    strength_volume,
    relative_strength_intensity,
    calculate_injury_risk,
)

__all__ = [
    "calculate_bmi",
    "bmi_category",
    "base_calories",
    "strength_calories",
    "cardio_calories",
    "strength_volume",
    "relative_strength_intensity",
    "calculate_injury_risk",
]
