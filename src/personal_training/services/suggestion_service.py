"""
Exercise and routine suggestions from static tables.

Suggestions are deterministic: the same athlete always gets the same
list. Routine templates are chosen by training level and by the goal
keywords found in the athlete's goals, then personalised by BMI, goals
and level.
"""

from enum import Enum
import logging
from typing import Dict, List, NamedTuple, Optional, Tuple

from ..exceptions import ValidationError
from ..models.athlete import Athlete
from ..models.enums import Intensity, Level, MuscleGroup, STRENGTH_GROUPS
from .base import BaseService

EXERCISES_PER_GROUP_FOR_LEVEL = 2


class GoalKeyword(str, Enum):
    """Goal families recognised in an athlete's free-text goals."""
    STRENGTH = "fuerza"
    CARDIO = "cardio"
    WEIGHT_LOSS = "peso"
    POWER = "potencia"


GOAL_TERMS: Dict[GoalKeyword, Tuple[str, ...]] = {
    GoalKeyword.STRENGTH: ("fuerza", "muscular"),
    GoalKeyword.CARDIO: ("cardio", "resistencia"),
    GoalKeyword.WEIGHT_LOSS: ("peso", "pérdida", "perdida"),
    GoalKeyword.POWER: ("explosividad", "potencia"),
}


def goal_keywords(goals: str) -> List[GoalKeyword]:
    text = (goals or "").lower()
    return [key for key, terms in GOAL_TERMS.items() if any(term in text for term in terms)]


class RoutineTemplate(NamedTuple):
    category: str
    duration_min: int
    intensity: Intensity
    focus: str
    detail: str

    def render(self, intensity: Optional[Intensity] = None) -> str:
        intensity = intensity or self.intensity
        return f"{self.category} - {self.duration_min} min - {intensity.value} - {self.focus} ({self.detail})"


LOW, MEDIUM, HIGH = Intensity.LOW, Intensity.MEDIUM, Intensity.HIGH

_BEGINNER_CARDIO = (
    RoutineTemplate("Cardio", 15, LOW, "Caminata", "Caminata rápida en terreno plano"),
    RoutineTemplate("Cardio", 20, LOW, "Bicicleta", "Bicicleta estática ritmo suave"),
    RoutineTemplate("Cardio", 10, LOW, "Escaleras", "Subir y bajar escaleras lentamente"),
)

ROUTINE_TEMPLATES: Dict[Tuple[Level, GoalKeyword], Tuple[RoutineTemplate, ...]] = {
    (Level.BEGINNER, GoalKeyword.STRENGTH): (
        RoutineTemplate("Fuerza", 25, LOW, "Pecho", "Flexiones de rodillas 2x12"),
        RoutineTemplate("Fuerza", 20, LOW, "Piernas", "Sentadillas con peso corporal 2x15"),
        RoutineTemplate("Fuerza", 15, LOW, "Brazos", "Flexiones de brazos asistidas 2x10"),
    ),
    (Level.BEGINNER, GoalKeyword.CARDIO): _BEGINNER_CARDIO,
    (Level.BEGINNER, GoalKeyword.WEIGHT_LOSS): _BEGINNER_CARDIO,
    (Level.INTERMEDIATE, GoalKeyword.STRENGTH): (
        RoutineTemplate("Fuerza", 40, MEDIUM, "Pecho", "Press de banca 3x10, Fondos 3x12"),
        RoutineTemplate("Fuerza", 45, MEDIUM, "Piernas", "Sentadillas con peso 3x12, Peso muerto 3x10"),
        RoutineTemplate("Fuerza", 35, MEDIUM, "Espalda", "Dominadas asistidas 3x8, Remo con mancuernas 3x12"),
    ),
    (Level.INTERMEDIATE, GoalKeyword.CARDIO): (
        RoutineTemplate(
            "Cardio", 30, MEDIUM, "Intervalos",
            "5 min calentamiento + 20 min intervalos + 5 min enfriamiento",
        ),
        RoutineTemplate("Cardio", 35, MEDIUM, "Trote", "Trote continuo ritmo moderado"),
        RoutineTemplate("Cardio", 25, MEDIUM, "HIIT", "Entrenamiento intervalos alta intensidad"),
    ),
    (Level.INTERMEDIATE, GoalKeyword.WEIGHT_LOSS): (
        RoutineTemplate(
            "Circuito", 30, MEDIUM, "Quema grasa",
            "6 estaciones x 45 seg trabajo / 15 seg descanso",
        ),
    ),
    (Level.ADVANCED, GoalKeyword.STRENGTH): (
        RoutineTemplate("Fuerza", 60, HIGH, "Pecho", "Press banca 4x6, Press inclinado 4x8, Fondos lastrados 3x10"),
        RoutineTemplate("Fuerza", 70, HIGH, "Piernas", "Sentadilla profunda 5x5, Peso muerto 4x6, Prensa 4x12"),
        RoutineTemplate("Fuerza", 55, HIGH, "Espalda", "Dominadas lastradas 4x6, Remo con barra 4x8, Jalones 3x10"),
    ),
    (Level.ADVANCED, GoalKeyword.CARDIO): (
        RoutineTemplate("Cardio", 45, HIGH, "Resistencia", "Carrera continua ritmo competitivo"),
        RoutineTemplate("Cardio", 30, HIGH, "HIIT Avanzado", "Sprints máximos + recuperación activa"),
        RoutineTemplate("Cardio", 60, MEDIUM, "Volumen", "Entrenamiento aeróbico extenso"),
    ),
    (Level.ADVANCED, GoalKeyword.POWER): (
        RoutineTemplate("Pliométrico", 40, HIGH, "Potencia", "Saltos explosivos + levantamientos olímpicos"),
    ),
}

# Always appended for the level, whatever the goals
LEVEL_BASELINE: Dict[Level, Tuple[RoutineTemplate, ...]] = {
    Level.BEGINNER: (
        RoutineTemplate("Flexibilidad", 10, LOW, "Estiramiento", "Rutina de estiramiento básica"),
    ),
}

GENERAL_TEMPLATES: Tuple[RoutineTemplate, ...] = (
    RoutineTemplate("Fuerza", 35, MEDIUM, "Cuerpo completo", "Rutina funcional general"),
    RoutineTemplate("Cardio", 25, MEDIUM, "Mixto", "Combinación cardio + fuerza"),
    RoutineTemplate("Flexibilidad", 20, LOW, "Movilidad", "Yoga + estiramiento dinámico"),
    RoutineTemplate("Funcional", 30, MEDIUM, "Equilibrio", "Ejercicios de estabilidad + coordinación"),
)

B, I, A = Level.BEGINNER, Level.INTERMEDIATE, Level.ADVANCED

EXERCISES: Dict[Tuple[MuscleGroup, Level], Tuple[str, ...]] = {
    (MuscleGroup.CHEST, B): (
        "Press de pecho con mancuernas - 3x12 (peso ligero)",
        "Flexiones de rodillas - 3x10",
        "Aperturas con mancuernas - 2x15 (peso muy ligero)",
        "Flexiones en pared - 2x20",
    ),
    (MuscleGroup.CHEST, I): (
        "Press de banca con barra - 3x10",
        "Press inclinado con mancuernas - 3x12",
        "Fondos en paralelas - 3x8",
        "Aperturas inclinadas - 3x12",
        "Flexiones diamante - 2x15",
    ),
    (MuscleGroup.CHEST, A): (
        "Press de banca pesado - 4x6",
        "Press inclinado con barra - 4x8",
        "Fondos lastrados - 4x10",
        "Aperturas con cables - 3x15",
        "Press decline - 3x10",
        "Flexiones pliométricas - 3x8",
    ),
    (MuscleGroup.BACK, B): (
        "Remo con banda elástica - 3x15",
        "Superman - 3x12",
        "Jalón al pecho asistido - 3x10",
        "Remo invertido - 2x8",
    ),
    (MuscleGroup.BACK, I): (
        "Dominadas asistidas - 3x8",
        "Remo con barra - 3x10",
        "Jalón al pecho - 3x12",
        "Remo con mancuerna - 3x12 cada brazo",
        "Peso muerto rumano - 3x10",
    ),
    (MuscleGroup.BACK, A): (
        "Dominadas lastradas - 4x6",
        "Peso muerto convencional - 4x5",
        "Remo con barra T - 4x8",
        "Jalones con agarre amplio - 3x10",
        "Remo en polea baja - 4x12",
        "Muscle-ups - 3x5",
    ),
    (MuscleGroup.LEGS, B): (
        "Sentadilla con peso corporal - 3x15",
        "Zancadas estáticas - 3x10 cada pierna",
        "Elevación de talones - 3x20",
        "Glute bridge - 3x15",
        "Wall sit - 3x30 segundos",
    ),
    (MuscleGroup.LEGS, I): (
        "Sentadilla con barra - 3x12",
        "Peso muerto - 3x10",
        "Zancadas con mancuernas - 3x12 cada pierna",
        "Prensa de piernas - 3x15",
        "Extensiones de cuádriceps - 3x15",
        "Curl de femoral - 3x12",
    ),
    (MuscleGroup.LEGS, A): (
        "Sentadilla profunda - 4x8",
        "Peso muerto sumo - 4x6",
        "Sentadilla búlgara - 4x10 cada pierna",
        "Hip thrust con barra - 4x12",
        "Sentadilla frontal - 3x10",
        "Saltos en cajón - 4x8",
    ),
    (MuscleGroup.ARMS, B): (
        "Curl de bíceps con mancuernas - 3x12",
        "Extensiones de tríceps - 3x12",
        "Martillo con mancuernas - 3x10",
        "Fondos en silla - 2x10",
    ),
    (MuscleGroup.ARMS, I): (
        "Curl con barra - 3x10",
        "Press francés - 3x12",
        "Curl martillo - 3x12",
        "Fondos en paralelas - 3x10",
        "Curl concentrado - 3x10 cada brazo",
    ),
    (MuscleGroup.ARMS, A): (
        "Curl con barra Z - 4x8",
        "Press de banca agarre cerrado - 4x8",
        "Curl 21s - 3 series",
        "Fondos lastrados - 4x8",
        "Curl con cables - 3x12",
        "Extensiones sobre cabeza - 4x10",
    ),
    (MuscleGroup.SHOULDERS, B): (
        "Press militar con mancuernas sentado - 3x12",
        "Elevaciones laterales - 3x15",
        "Elevaciones frontales - 3x12",
        "Pájaros - 3x15",
    ),
    (MuscleGroup.SHOULDERS, I): (
        "Press militar con barra - 3x10",
        "Press Arnold - 3x12",
        "Elevaciones laterales con cables - 3x15",
        "Face pulls - 3x15",
        "Upright rows - 3x12",
    ),
    (MuscleGroup.SHOULDERS, A): (
        "Press militar estricto - 4x6",
        "Press tras nuca - 4x8",
        "Elevaciones laterales 21s - 3 series",
        "Handstand push-ups - 3x8",
        "Dislocaciones con banda - 3x20",
        "Press de hombros unilateral - 3x8 cada lado",
    ),
    (MuscleGroup.ABS, B): (
        "Crunches básicos - 3x15",
        "Plancha - 3x30 segundos",
        "Bicicleta - 3x20",
        "Dead bug - 3x10 cada lado",
    ),
    (MuscleGroup.ABS, I): (
        "Crunches con peso - 3x20",
        "Plancha lateral - 3x45 segundos cada lado",
        "Mountain climbers - 3x30",
        "Russian twists - 3x25",
        "Leg raises - 3x15",
    ),
    (MuscleGroup.ABS, A): (
        "Dragon flags - 3x8",
        "Plancha con elevación de piernas - 3x60 segundos",
        "V-ups - 4x15",
        "Hanging leg raises - 4x12",
        "Ab wheel rollouts - 3x10",
        "L-sits - 3x30 segundos",
    ),
    (MuscleGroup.CARDIO, B): (
        "Caminata rápida - 20-30 minutos",
        "Bicicleta estática - 15-20 minutos",
        "Natación suave - 15-20 minutos",
        "Subir escaleras - 10-15 minutos",
    ),
    (MuscleGroup.CARDIO, I): (
        "Trote - 25-35 minutos",
        "Intervalos en bicicleta - 20-30 minutos",
        "Elíptica - 25-30 minutos",
        "Circuito cardio - 20-25 minutos",
        "Natación con intervalos - 25-30 minutos",
    ),
    (MuscleGroup.CARDIO, A): (
        "Sprints - 15-20 series de 100m",
        "HIIT extremo - 20-25 minutos",
        "Carrera de tempo - 35-45 minutos",
        "Crosstraining - 30-40 minutos",
        "Burpees - 10 series de 30 segundos",
        "Battle ropes - 15 series de 45 segundos",
    ),
}


def generic_exercises(group_name: str) -> List[str]:
    return [
        f"Ejercicio básico de {group_name} - 3x12",
        f"Ejercicio intermedio de {group_name} - 3x10",
        f"Ejercicio de estabilización {group_name} - 2x15",
    ]


def training_phase(week: int) -> str:
    if week <= 2:
        return "adaptación"
    if week <= 4:
        return "desarrollo"
    if week <= 6:
        return "intensificación"
    return "especialización"


class SuggestionService(BaseService):
    """Routine and exercise suggestions personalised per athlete."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        super().__init__(logger)
        self._templates = ROUTINE_TEMPLATES
        self._exercises = EXERCISES

    def _templates_for(self, athlete: Athlete) -> List[RoutineTemplate]:
        selected: List[RoutineTemplate] = []
        for keyword in goal_keywords(athlete.goals):
            for template in self._templates.get((athlete.level, keyword), ()):
                if template not in selected:
                    selected.append(template)
        if not selected:
            return list(GENERAL_TEMPLATES)
        return selected + list(LEVEL_BASELINE.get(athlete.level, ()))

    def personalize(self, template: RoutineTemplate, athlete: Athlete) -> str:
        """Render ``template`` adjusted to the athlete's BMI, goals and level."""
        bmi = athlete.bmi
        keywords = goal_keywords(athlete.goals)
        intensity = template.intensity.downgraded() if bmi > 30 else template.intensity
        text = template.render(intensity)

        if bmi > 30:
            text += " (Adaptado para sobrepeso)"
        elif bmi < 18.5:
            text += " (Enfoque en ganancia de masa)"
        if GoalKeyword.WEIGHT_LOSS in keywords and template.category == "Cardio":
            text += " + 5 min extra quema grasa"
        if "fuerza" in athlete.goals.lower() and template.category == "Fuerza":
            text += " + series adicionales"
        if athlete.level is Level.ADVANCED:
            text += " (Progresión avanzada)"
        return text

    def suggest_routines(self, athlete: Athlete) -> List[str]:
        if athlete is None:
            raise ValidationError("El atleta es requerido para generar sugerencias")
        return [self.personalize(t, athlete) for t in self._templates_for(athlete)]

    def exercises_for_group(self, group: "MuscleGroup | str", level: "Level | str") -> List[str]:
        """Exercises for a muscle group; unknown groups get a generic list."""
        if group is None or (isinstance(group, str) and not group.strip()):
            return []
        level = Level.parse(level)
        try:
            muscle_group = MuscleGroup.parse(group)
        except ValidationError:
            return generic_exercises(str(group).strip())
        exercises = self._exercises.get((muscle_group, level))
        if exercises is None:
            return generic_exercises(muscle_group.value)
        return list(exercises)

    def exercises_for_level(self, level: "Level | str") -> List[str]:
        """The first two exercises of every strength group."""
        exercises: List[str] = []
        for group in STRENGTH_GROUPS:
            exercises.extend(self.exercises_for_group(group, level)[:EXERCISES_PER_GROUP_FOR_LEVEL])
        return exercises

    def progressive_program(self, athlete: Athlete, weeks: int) -> Dict[int, List[str]]:
        """Week number -> suggested routines annotated with the training phase."""
        if weeks < 1:
            raise ValidationError("El número de semanas debe ser al menos 1")
        routines = self.suggest_routines(athlete)
        return {
            week: [f"{routine} (Fase {training_phase(week)})" for routine in routines]
            for week in range(1, weeks + 1)
        }
