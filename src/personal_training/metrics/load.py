"""Training load calculations (calories, strength volume, injury risk)."""

# kcal per minute by intensity score (1=Baja, 2=Media, 3=Alta)
CALORIES_PER_MINUTE = {1: 5.0, 2: 8.0, 3: 11.0}

# Injury-risk weights
INJURY_RATE_WEIGHT = 0.4
INTENSITY_WEIGHT = 15.0
HIGH_INTENSITY_WEIGHT = 0.3
OVERTRAINING_PENALTY = 10.0
OVERTRAINING_SESSIONS_PER_WEEK = 5
MAX_RISK = 100.0


def base_calories(duration_min: float, intensity_score: int) -> float:
    """Calories for a session before variant-specific multipliers."""
    return duration_min * CALORIES_PER_MINUTE.get(intensity_score, CALORIES_PER_MINUTE[2])


def strength_calories(
    duration_min: float,
    intensity_score: int,
    sets: int,
    reps: int,
    weight_used_kg: float,
) -> float:
    """
    Calorie estimate for a strength session.

    Heavier loads scale linearly (1 + kg/100) and high-volume sessions
    (more than 30 total reps) get a 20% bonus.
    """
    calories = base_calories(duration_min, intensity_score)
    weight_factor = 1 + (weight_used_kg / 100) if weight_used_kg > 0 else 1.0
    volume_factor = 1.2 if sets * reps > 30 else 1.0
    return round(calories * weight_factor * volume_factor, 1)


def cardio_calories(
    duration_min: float,
    intensity_score: int,
    distance_km: float,
    avg_heart_rate: int,
) -> float:
    """
    Calorie estimate for a cardio session.

    Average heart rate above 120 bpm adds 0.5% per beat; distance adds
    2% per kilometre.
    """
    calories = base_calories(duration_min, intensity_score)
    hr_factor = 1 + (avg_heart_rate - 120) / 200 if avg_heart_rate > 120 else 1.0
    distance_factor = 1 + max(distance_km, 0.0) / 50
    return round(calories * hr_factor * distance_factor, 1)


def strength_volume(sets: int, reps: int, weight_used_kg: float) -> float:
    """Total volume lifted: sets x reps x weight."""
    return sets * reps * weight_used_kg


def relative_strength_intensity(reps: int) -> str:
    """Training focus implied by the repetition range."""
    if reps <= 5:
        return "Fuerza máxima"
    if reps <= 8:
        return "Fuerza"
    if reps <= 12:
        return "Hipertrofia"
    return "Resistencia muscular"


def calculate_injury_risk(
    injury_rate_pct: float,
    avg_intensity_score: float,
    high_intensity_pct: float,
    sessions_last_week: int,
) -> float:
    """
    Injury-risk score as a weighted linear combination.

    Args:
        injury_rate_pct: Percentage of sessions with reported injuries (0-100)
        avg_intensity_score: Mean intensity score (1-3)
        high_intensity_pct: Percentage of high-intensity sessions (0-100)
        sessions_last_week: Number of sessions in the last 7 days

    Returns:
        Risk score clamped to [0, 100]
    """
    risk = (
        injury_rate_pct * INJURY_RATE_WEIGHT
        + avg_intensity_score * INTENSITY_WEIGHT
        + high_intensity_pct * HIGH_INTENSITY_WEIGHT
    )
    if sessions_last_week > OVERTRAINING_SESSIONS_PER_WEEK:
        risk += OVERTRAINING_PENALTY
    return round(max(0.0, min(risk, MAX_RISK)), 2)
