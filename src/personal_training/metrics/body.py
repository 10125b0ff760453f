"""Body composition metrics (BMI)."""


def calculate_bmi(weight_kg: float, height_m: float) -> float:
    """
    Body Mass Index: weight / height².

    Args:
        weight_kg: Body weight in kilograms
        height_m: Height in meters

    Returns:
        BMI rounded to 2 decimals, or 0.0 when height is not positive
    """
    if height_m <= 0:
        return 0.0
    return round(weight_kg / (height_m * height_m), 2)


def bmi_category(bmi: float) -> str:
    """Spanish BMI category label."""
    if bmi <= 0:
        return "No determinado"
    if bmi < 18.5:
        return "Bajo peso"
    if bmi < 25:
        return "Peso normal"
    if bmi < 30:
        return "Sobrepeso"
    return "Obesidad"
