#!/usr/bin/env python3
"""
Personal Training Manager CLI.

Menu-driven console for managing athletes, routines and insurance claims,
with statistics, reports and exercise suggestions.

Usage:
    personal-training
    python -m personal_training

Data files live in ``TRAINER_DATA_DIR`` (default ``./data``).
"""

from dataclasses import dataclass, field
from datetime import date
import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from .config import Settings, get_settings
from .db.repositories import AthleteRepository, InsuranceRepository, RoutineRepository
from .exceptions import PersistenceError, TrainingAppError, ValidationError
from .forms import AthleteForm, InsuranceForm, RoutineForm, parse_form
from .logging_config import configure_logging
from .models.athlete import Athlete
from .models.enums import Level, MuscleGroup, RoutineKind
from .models.insurance import MedicalInsurance
from .models.routine import CardioDetails, Routine, StrengthDetails, estimate_calories, specific_features
from .services import (
    AthleteManager,
    InsuranceManager,
    Operation,
    RoutineManager,
    SuggestionService,
    TrainingService,
)
from .state import AppState

console = Console()
logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class AppContext:
    """Everything the menu handlers need, wired once at startup."""
    settings: Settings
    athletes: AthleteManager
    routines: RoutineManager
    insurance: InsuranceManager
    training: TrainingService
    suggestions: SuggestionService
    state: AppState = field(default_factory=AppState)

    @property
    def repositories(self):
        return (self.athletes.repository, self.routines.repository, self.insurance.repository)


def confirm_deletes(entity: object, operation: Operation) -> bool:
    """Ask before deleting; additions and updates go through."""
    if operation is not Operation.DELETE:
        return True
    return Confirm.ask(f"¿Está seguro de eliminar [bold]{entity}[/bold]?", default=False)


def build_context(settings: Optional[Settings] = None) -> AppContext:
    settings = settings or get_settings()
    settings.ensure_data_dir()

    athlete_repo = AthleteRepository(settings.athletes_path)
    routine_repo = RoutineRepository(settings.routines_path)
    insurance_repo = InsuranceRepository(settings.insurance_path)

    ctx = AppContext(
        settings=settings,
        athletes=AthleteManager(athlete_repo, confirmer=confirm_deletes),
        routines=RoutineManager(routine_repo, confirmer=confirm_deletes),
        insurance=InsuranceManager(insurance_repo, confirmer=confirm_deletes),
        training=TrainingService(routine_repo, insurance_repo),
        suggestions=SuggestionService(),
    )
    ctx.athletes.notifiers.append(lambda athlete, op: _track_active(ctx, athlete, op))

    existing = ctx.athletes.list_all()
    if existing:
        ctx.state.select(existing[0])
    return ctx


def _track_active(ctx: AppContext, athlete: Athlete, operation: Operation) -> None:
    if operation is Operation.ADD:
        ctx.state.on_athlete_added(athlete)
    elif operation is Operation.DELETE:
        ctx.state.on_athlete_deleted(ctx.athletes)


# ============================================================================
# Console helpers
# ============================================================================

def title(text: str) -> None:
    console.print()
    console.print(Panel(f"[bold]{text}[/bold]"))


def success(text: str) -> None:
    console.print(f"[green]{text}[/green]")


def warn(text: str) -> None:
    console.print(f"[yellow]{text}[/yellow]")


def error(text: str) -> None:
    console.print(f"[red]{text}[/red]")


def ask(label: str, default: str = "") -> str:
    return Prompt.ask(label, default=default, show_default=bool(default)).strip()


def choose(items: Sequence[T], label: str) -> T:
    """Pick an item by its 1-based position in the list just shown."""
    index = IntPrompt.ask(label)
    if not 1 <= index <= len(items):
        raise ValidationError("Número inválido")
    return items[index - 1]


def run_menu(heading: str, options: List[Tuple[str, Callable[[], None]]]) -> None:
    """Show a sub-menu until the user picks the last option (back)."""
    while True:
        title(heading)
        for number, (label, _) in enumerate(options, start=1):
            console.print(f"  {number}. {label}")
        console.print(f"  {len(options) + 1}. Volver al menú principal")
        choice = ask("Seleccione una opción")
        if choice == str(len(options) + 1):
            return
        handlers: Dict[str, Callable[[], None]] = {
            str(number): handler for number, (_, handler) in enumerate(options, start=1)
        }
        handler = handlers.get(choice)
        if handler is None:
            error("Opción no válida.")
            continue
        guarded(handler)


def guarded(handler: Callable[[], None]) -> None:
    """Run a handler, reporting application errors without leaving the loop."""
    try:
        handler()
    except TrainingAppError as e:
        logger.debug(f"Handled error: {e!r}")
        error(f"Error: {e.message}")


def require_active(ctx: AppContext) -> Optional[Athlete]:
    athlete = ctx.state.active(ctx.athletes)
    if athlete is None:
        warn("Debe seleccionar un atleta activo primero.")
    return athlete


# ============================================================================
# Tables
# ============================================================================

def athletes_table(athletes: Sequence[Athlete], active_id: Optional[str] = None) -> Table:
    table = Table(title="Atletas", box=box.ROUNDED)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Nombre", style="cyan")
    table.add_column("Peso (kg)", justify="right")
    table.add_column("Altura (m)", justify="right")
    table.add_column("IMC", justify="right")
    table.add_column("Categoría")
    table.add_column("Nivel")
    table.add_column("Objetivos")
    for i, a in enumerate(athletes, start=1):
        name = f"{a.name} [green](ACTIVO)[/green]" if a.id == active_id else a.name
        table.add_row(
            str(i), name, f"{a.weight_kg:g}", f"{a.height_m:g}", f"{a.bmi:.2f}",
            a.bmi_category, a.level.value, a.goals,
        )
    return table


def routines_table(routines: Sequence[Routine], heading: str = "Rutinas") -> Table:
    table = Table(title=heading, box=box.ROUNDED)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Fecha")
    table.add_column("Tipo", style="cyan")
    table.add_column("Min", justify="right")
    table.add_column("Intensidad")
    table.add_column("Grupo")
    table.add_column("Detalle")
    table.add_column("kcal", justify="right")
    table.add_column("Lesiones", style="red")
    for i, r in enumerate(routines, start=1):
        table.add_row(
            str(i), r.performed_on.isoformat(), r.kind.value, str(r.duration_min),
            r.intensity.value, r.muscle_group.value, specific_features(r),
            f"{estimate_calories(r):.1f}", r.injury_notes or "-",
        )
    return table


def claims_table(claims: Sequence[MedicalInsurance], currency: str, heading: str = "Seguros médicos") -> Table:
    table = Table(title=heading, box=box.ROUNDED)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Aseguradora", style="cyan")
    table.add_column("Atleta")
    table.add_column("Lesión")
    table.add_column("Cubierto", justify="right")
    table.add_column("Paciente", justify="right")
    table.add_column("Cobertura", justify="right")
    table.add_column("Aplicado")
    table.add_column("Estado")
    for i, c in enumerate(claims, start=1):
        table.add_row(
            str(i), c.insurer_name, c.athlete_name, c.injury,
            f"{currency}{c.amount_covered:.2f}", f"{currency}{c.amount_patient:.2f}",
            f"{c.coverage_pct:.1f}%", c.applied_on.isoformat(), c.status.value,
        )
    return table


def show_list(items: Sequence[T], table: Table, empty_message: str) -> bool:
    if not items:
        warn(empty_message)
        return False
    console.print(table)
    return True


# ============================================================================
# Athletes
# ============================================================================

def read_athlete_form(current: Optional[Athlete] = None) -> AthleteForm:
    if current is not None:
        console.print("[dim]Presione Enter para mantener el valor actual[/dim]")
    return parse_form(
        AthleteForm,
        name=ask("Nombre", current.name if current else ""),
        weight_kg=ask("Peso (kg)", f"{current.weight_kg:g}" if current else ""),
        height_m=ask("Altura (m o cm)", f"{current.height_m:g}" if current else ""),
        goals=ask("Objetivos", current.goals if current else ""),
        level=ask(
            "Nivel (Principiante/Intermedio/Avanzado)",
            current.level.value if current else "",
        ),
    )


def list_athletes(ctx: AppContext) -> List[Athlete]:
    athletes = ctx.athletes.list_all()
    show_list(athletes, athletes_table(athletes, ctx.state.active_athlete_id), "No hay atletas registrados.")
    return athletes


def add_athlete(ctx: AppContext) -> None:
    athlete = read_athlete_form().to_athlete()
    for warning in ctx.athletes.consistency_warnings(athlete):
        warn(warning)
    ctx.athletes.add(athlete)
    if ctx.state.active_athlete_id == athlete.id:
        success("Atleta registrado exitosamente y seleccionado como activo.")
    else:
        success("Atleta registrado exitosamente.")


def select_active(ctx: AppContext) -> None:
    athletes = list_athletes(ctx)
    if athletes:
        athlete = choose(athletes, "Seleccione el número del atleta")
        ctx.state.select(athlete)
        success(f"Atleta activo: {athlete.name}")


def edit_athlete(ctx: AppContext) -> None:
    athletes = list_athletes(ctx)
    if athletes:
        athlete = choose(athletes, "Seleccione el número del atleta a editar")
        updated = read_athlete_form(athlete).to_athlete()
        ctx.athletes.update(athlete.id, updated)
        success("Atleta actualizado exitosamente.")


def delete_athlete(ctx: AppContext) -> None:
    athletes = list_athletes(ctx)
    if athletes:
        athlete = choose(athletes, "Seleccione el número del atleta a eliminar")
        ctx.athletes.delete(athlete.id)
        success("Atleta eliminado exitosamente.")


def search_athletes(ctx: AppContext) -> None:
    console.print("[dim]Deje en blanco los criterios que no quiera usar[/dim]")
    criteria = {
        "name": ask("Nombre contiene") or None,
        "level": ask("Nivel") or None,
        "goals": ask("Objetivos contienen") or None,
        "bmi_min": ask("IMC mínimo").replace(",", ".") or None,
        "bmi_max": ask("IMC máximo").replace(",", ".") or None,
    }
    results = ctx.athletes.search(criteria)
    show_list(results, athletes_table(results, ctx.state.active_athlete_id), "Sin resultados.")


def athlete_overview(ctx: AppContext) -> None:
    overview = ctx.athletes.general_statistics()
    if overview.total == 0:
        warn("No hay atletas registrados.")
        return
    table = Table(title="Estadísticas generales", box=box.ROUNDED)
    table.add_column("Métrica", style="cyan")
    table.add_column("Valor", justify="right")
    table.add_row("Total de atletas", str(overview.total))
    table.add_row("Peso promedio", f"{overview.average_weight_kg:.1f} kg")
    table.add_row("Altura promedio", f"{overview.average_height_m:.2f} m")
    table.add_row("IMC promedio", f"{overview.average_bmi:.2f}")
    table.add_row("Rango IMC", f"{overview.min_bmi:.2f} - {overview.max_bmi:.2f}")
    for level, count in overview.by_level.items():
        table.add_row(f"Nivel {level}", str(count))
    for goals, count in overview.top_goals.items():
        table.add_row(f"Objetivo: {goals}", str(count))
    console.print(table)


def evaluate_compatibility(ctx: AppContext) -> None:
    athlete = require_active(ctx)
    if athlete is None:
        return
    training_type = ask("Tipo de entrenamiento (Fuerza/Cardio/...)")
    report = ctx.athletes.evaluate_compatibility(athlete, training_type)
    style = "green" if report.compatible else "red"
    console.print(f"[{style}]Compatible: {'Sí' if report.compatible else 'No'}[/{style}]")
    for line in report.recommendations:
        console.print(f"  • {line}")


def athletes_menu(ctx: AppContext) -> None:
    run_menu("GESTIÓN DE ATLETAS", [
        ("Mostrar atletas", lambda: list_athletes(ctx)),
        ("Agregar nuevo atleta", lambda: add_athlete(ctx)),
        ("Seleccionar atleta activo", lambda: select_active(ctx)),
        ("Editar atleta", lambda: edit_athlete(ctx)),
        ("Eliminar atleta", lambda: delete_athlete(ctx)),
        ("Buscar atletas", lambda: search_athletes(ctx)),
        ("Estadísticas generales", lambda: athlete_overview(ctx)),
        ("Evaluar compatibilidad", lambda: evaluate_compatibility(ctx)),
    ])


# ============================================================================
# Routines
# ============================================================================

def read_routine_form(current: Optional[Routine] = None) -> RoutineForm:
    def default(value) -> str:
        return "" if current is None or value is None else str(value)

    data = {
        "kind": ask("Tipo (Fuerza/Cardio)", default(current and current.kind.value)),
        "duration_min": ask("Duración (min)", default(current and current.duration_min)),
        "intensity": ask("Intensidad (Baja/Media/Alta)", default(current and current.intensity.value)),
        "muscle_group": ask(
            "Grupo muscular (" + "/".join(g.value for g in MuscleGroup) + ")",
            default(current and current.muscle_group.value),
        ),
        "performed_on": ask("Fecha de realización (AAAA-MM-DD, Enter para hoy)",
                            default(current and current.performed_on.isoformat())),
        "expires_on": ask("Fecha de vencimiento (AAAA-MM-DD, Enter si no aplica)",
                          default(current and current.expires_on and current.expires_on.isoformat())),
        "injury_notes": ask("Lesiones post-entrenamiento (Enter si no hay)",
                            default(current and current.injury_notes)),
    }
    # Payload defaults come from the routine being edited when the kind is unchanged
    details = current.details if current is not None else None
    if RoutineKind.parse(data["kind"]) is RoutineKind.STRENGTH:
        if not isinstance(details, StrengthDetails):
            details = StrengthDetails()
        data["sets"] = ask("Series", str(details.sets))
        data["reps"] = ask("Repeticiones", str(details.reps))
        data["weight_used_kg"] = ask("Peso utilizado (kg)", f"{details.weight_used_kg:g}")
    else:
        if not isinstance(details, CardioDetails):
            details = CardioDetails()
        data["cardio_type"] = ask("Tipo de cardio", details.cardio_type)
        data["distance_km"] = ask("Distancia (km)", f"{details.distance_km:g}")
        data["avg_heart_rate"] = ask("FC promedio (0 si no aplica)", str(details.avg_heart_rate))
    return parse_form(RoutineForm, **data)


def read_insurance_form(injury: str = "", current: Optional[MedicalInsurance] = None) -> InsuranceForm:
    return parse_form(
        InsuranceForm,
        insurer_name=ask("Nombre del seguro", current.insurer_name if current else ""),
        amount_covered=ask("Monto cubierto por el seguro", str(current.amount_covered) if current else ""),
        amount_patient=ask("Monto pagado por el paciente", str(current.amount_patient) if current else ""),
        injury=ask("Lesión tratada", current.injury if current else injury),
        treatment=ask("Descripción del tratamiento", current.treatment if current else ""),
    )


def list_routines(ctx: AppContext, athlete: Athlete) -> List[Routine]:
    routines = ctx.routines.list_for_athlete(athlete.name)
    show_list(
        routines,
        routines_table(routines, f"Rutinas de {athlete.name.upper()}"),
        f"No hay rutinas registradas para {athlete.name}.",
    )
    return routines


def add_routine(ctx: AppContext, athlete: Athlete) -> None:
    today = date.today()
    routine = read_routine_form().to_routine(athlete.name, today)
    if not athlete.is_compatible_with(routine.kind):
        warn(f"El entrenamiento {routine.kind.value} no está alineado con los objetivos de {athlete.name}.")
    if routine.has_injury and Confirm.ask("¿Aplica seguro médico?", default=False):
        claim = read_insurance_form(routine.injury_notes).to_claim(athlete.name, today)
        ctx.routines.add_with_claim(routine, claim, ctx.insurance)
        success(f"Rutina de {routine.kind.value.lower()} y seguro médico agregados exitosamente.")
        return
    ctx.routines.add(routine)
    success(f"Rutina de {routine.kind.value.lower()} agregada exitosamente.")


def edit_routine(ctx: AppContext, athlete: Athlete) -> None:
    routines = list_routines(ctx, athlete)
    if routines:
        routine = choose(routines, "Seleccione el número de la rutina a editar")
        updated = read_routine_form(routine).to_routine(athlete.name)
        updated.insurance_id = routine.insurance_id
        ctx.routines.update(routine.id, updated)
        success("Rutina actualizada exitosamente.")


def delete_routine(ctx: AppContext, athlete: Athlete) -> None:
    routines = list_routines(ctx, athlete)
    if routines:
        routine = choose(routines, "Seleccione el número de la rutina a eliminar")
        ctx.routines.delete(routine.id)
        success("Rutina eliminada exitosamente.")


def routines_needing_attention(ctx: AppContext, athlete: Athlete) -> None:
    routines = ctx.routines.needing_attention(athlete.name)
    show_list(routines, routines_table(routines, "Rutinas que requieren atención"),
              "No hay rutinas que requieran atención.")


def routine_summary(ctx: AppContext, athlete: Athlete) -> None:
    summary = ctx.routines.summary(athlete.name)
    table = Table(title=f"Resumen de rutinas - {athlete.name}", box=box.ROUNDED)
    table.add_column("Métrica", style="cyan")
    table.add_column("Valor", justify="right")
    table.add_row("Total", str(summary.total))
    table.add_row("Fuerza", str(summary.strength))
    table.add_row("Cardio", str(summary.cardio))
    table.add_row("Minutos totales", str(summary.total_minutes))
    table.add_row("Duración promedio", f"{summary.average_minutes:.1f} min")
    table.add_row("Calorías estimadas", f"{summary.total_calories:.1f}")
    table.add_row("Con lesiones", str(summary.with_injuries))
    console.print(table)


def routines_menu(ctx: AppContext) -> None:
    athlete = require_active(ctx)
    if athlete is None:
        return
    run_menu(f"GESTIÓN DE RUTINAS - {athlete.name}", [
        ("Mostrar rutinas", lambda: list_routines(ctx, athlete)),
        ("Agregar nueva rutina", lambda: add_routine(ctx, athlete)),
        ("Editar rutina", lambda: edit_routine(ctx, athlete)),
        ("Eliminar rutina", lambda: delete_routine(ctx, athlete)),
        ("Rutinas que requieren atención", lambda: routines_needing_attention(ctx, athlete)),
        ("Resumen de rutinas", lambda: routine_summary(ctx, athlete)),
    ])


# ============================================================================
# Insurance
# ============================================================================

def list_claims(ctx: AppContext, claims: Optional[List[MedicalInsurance]] = None) -> List[MedicalInsurance]:
    claims = ctx.insurance.list_all() if claims is None else claims
    show_list(claims, claims_table(claims, ctx.settings.currency_symbol), "No hay seguros registrados.")
    return claims


def read_range() -> Tuple[Optional[str], Optional[str]]:
    minimum = ask("Monto mínimo (Enter para omitir)").replace(",", ".") or None
    maximum = ask("Monto máximo (Enter para omitir)").replace(",", ".") or None
    return minimum, maximum


def search_claims(ctx: AppContext) -> None:
    searches = {
        "1": ("Por aseguradora", lambda: ctx.insurance.search_by_insurer(ask("Aseguradora"))),
        "2": ("Por monto cubierto", lambda: ctx.insurance.search_by_amount_covered(*read_range())),
        "3": ("Por monto del paciente", lambda: ctx.insurance.search_by_amount_patient(*read_range())),
        "4": ("Por atleta", lambda: ctx.insurance.search_by_athlete(ask("Nombre del atleta"))),
        "5": ("Por rango de monto total", lambda: ctx.insurance.search_by_total_range(*read_range())),
        "6": ("Texto libre", lambda: ctx.insurance.search(ask("Término"))),
    }
    for key, (label, _) in searches.items():
        console.print(f"  {key}. {label}")
    search = searches.get(ask("Tipo de búsqueda"))
    if search is None:
        error("Opción no válida.")
        return
    list_claims(ctx, search[1]())


def add_claim(ctx: AppContext) -> None:
    athlete = require_active(ctx)
    if athlete is not None:
        ctx.insurance.add(read_insurance_form().to_claim(athlete.name))
        success("Seguro médico agregado exitosamente.")


def edit_claim(ctx: AppContext) -> None:
    claims = list_claims(ctx)
    if claims:
        claim = choose(claims, "Seleccione el número del seguro a editar")
        form = read_insurance_form(current=claim)
        updated = MedicalInsurance(
            id=claim.id,
            insurer_name=form.insurer_name,
            amount_covered=form.amount_covered,
            amount_patient=form.amount_patient,
            injury=form.injury,
            treatment=form.treatment,
            athlete_name=claim.athlete_name,
            applied_on=claim.applied_on,
            completed_on=claim.completed_on,
            status=claim.status,
        )
        ctx.insurance.update(claim.id, updated)
        success("Seguro actualizado exitosamente.")


def delete_claim(ctx: AppContext) -> None:
    claims = list_claims(ctx)
    if claims:
        claim = choose(claims, "Seleccione el número del seguro a eliminar")
        ctx.insurance.delete(claim.id)
        success("Seguro eliminado exitosamente.")


def change_claim_status(ctx: AppContext, action: Callable[[str], MedicalInsurance], done: str) -> None:
    claims = list_claims(ctx)
    if claims:
        claim = choose(claims, "Seleccione el número del seguro")
        action(claim.id)
        success(done)


def financial_summary(ctx: AppContext) -> None:
    summary = ctx.insurance.financial_summary()
    currency = ctx.settings.currency_symbol
    table = Table(title="Resumen financiero", box=box.ROUNDED)
    table.add_column("Métrica", style="cyan")
    table.add_column("Valor", justify="right")
    table.add_row("Seguros registrados", str(summary.claims))
    table.add_row("Seguros activos", str(summary.active))
    table.add_row("Total cubierto", f"{currency}{summary.total_covered:.2f}")
    table.add_row("Total pagado por pacientes", f"{currency}{summary.total_patient:.2f}")
    table.add_row("Total de tratamientos", f"{currency}{summary.total:.2f}")
    table.add_row("Cobertura", f"{summary.coverage_pct:.1f}%")
    console.print(table)


def insurance_menu(ctx: AppContext) -> None:
    run_menu("GESTIÓN DE SEGUROS MÉDICOS", [
        ("Mostrar seguros", lambda: list_claims(ctx)),
        ("Mostrar seguros activos", lambda: list_claims(ctx, ctx.insurance.list_active())),
        ("Buscar seguros", lambda: search_claims(ctx)),
        ("Agregar seguro al atleta activo", lambda: add_claim(ctx)),
        ("Editar seguro", lambda: edit_claim(ctx)),
        ("Eliminar seguro", lambda: delete_claim(ctx)),
        ("Finalizar tratamiento",
         lambda: change_claim_status(ctx, ctx.insurance.complete, "Tratamiento finalizado.")),
        ("Suspender seguro",
         lambda: change_claim_status(ctx, ctx.insurance.suspend, "Seguro suspendido.")),
        ("Reactivar seguro",
         lambda: change_claim_status(ctx, ctx.insurance.reactivate, "Seguro reactivado.")),
        ("Cancelar seguro",
         lambda: change_claim_status(ctx, ctx.insurance.cancel, "Seguro cancelado.")),
        ("Resumen financiero", lambda: financial_summary(ctx)),
    ])


# ============================================================================
# Statistics & reports
# ============================================================================

def show_statistics(ctx: AppContext, athlete: Athlete) -> None:
    stats = ctx.training.generate_statistics(athlete.name)
    console.print(Panel(stats.report(ctx.settings.currency_symbol), box=box.ROUNDED))


def show_injuries_last_month(ctx: AppContext, athlete: Athlete) -> None:
    routines = ctx.training.injuries_last_month(athlete.name)
    show_list(routines, routines_table(routines, "Lesiones del último mes"),
              "No hay lesiones registradas en el último mes.")


def show_top_injuries(ctx: AppContext, athlete: Athlete) -> None:
    top = ctx.training.top_injuries_last_quarter(athlete.name)
    if not top:
        warn("No hay lesiones registradas en el último trimestre.")
        return
    table = Table(title="Top 3 lesiones del trimestre", box=box.ROUNDED)
    table.add_column("Lesión", style="red")
    table.add_column("Ocurrencias", justify="right")
    for injury, count in top:
        table.add_row(injury, str(count))
    console.print(table)


def show_insurance_report(ctx: AppContext, athlete: Athlete) -> None:
    console.print(Panel(
        ctx.training.insurance_report(athlete.name, ctx.settings.currency_symbol), box=box.ROUNDED
    ))


def show_recommendations(ctx: AppContext, athlete: Athlete) -> None:
    risk = ctx.training.injury_risk(athlete.name)
    color = "red" if risk > 70 else "yellow" if risk > 40 else "green"
    console.print(f"Riesgo de lesión: [{color}]{risk:.2f}/100[/{color}]")
    for line in ctx.training.recommendations(athlete.name):
        console.print(f"  • {line}")


def show_follow_up(ctx: AppContext, athlete: Athlete) -> None:
    routines = ctx.training.routines_with_follow_up(athlete.name)
    show_list(routines, routines_table(routines, "Rutinas con seguimiento médico"),
              "No hay rutinas que requieran seguimiento.")


def reports_menu(ctx: AppContext) -> None:
    athlete = require_active(ctx)
    if athlete is None:
        return
    run_menu(f"ESTADÍSTICAS Y REPORTES - {athlete.name}", [
        ("Estadísticas del atleta", lambda: show_statistics(ctx, athlete)),
        ("Lesiones del último mes", lambda: show_injuries_last_month(ctx, athlete)),
        ("Top 3 lesiones del trimestre", lambda: show_top_injuries(ctx, athlete)),
        ("Análisis de seguros médicos", lambda: show_insurance_report(ctx, athlete)),
        ("Riesgo y recomendaciones", lambda: show_recommendations(ctx, athlete)),
        ("Rutinas con seguimiento médico", lambda: show_follow_up(ctx, athlete)),
    ])


# ============================================================================
# Suggestions
# ============================================================================

def print_lines(heading: str, lines: Sequence[str]) -> None:
    console.print(f"[bold cyan]{heading}[/bold cyan]")
    for i, line in enumerate(lines, start=1):
        console.print(f"  {i}. {line}")


def suggest_routines(ctx: AppContext, athlete: Athlete) -> None:
    print_lines(f"Rutinas sugeridas para {athlete.name}", ctx.suggestions.suggest_routines(athlete))


def exercises_by_group(ctx: AppContext, athlete: Athlete) -> None:
    group = ask("Grupo muscular (" + "/".join(g.value for g in MuscleGroup) + ")")
    level = ask("Nivel", athlete.level.value)
    print_lines(f"Ejercicios de {group} ({level})", ctx.suggestions.exercises_for_group(group, level))


def exercises_by_level(ctx: AppContext, athlete: Athlete) -> None:
    level = Level.parse(ask("Nivel", athlete.level.value))
    print_lines(f"Ejercicios para nivel {level.value}", ctx.suggestions.exercises_for_level(level))


def progressive_program(ctx: AppContext, athlete: Athlete) -> None:
    weeks = IntPrompt.ask("Número de semanas", default=8)
    for week, routines in ctx.suggestions.progressive_program(athlete, weeks).items():
        print_lines(f"Semana {week}", routines)


def suggestions_menu(ctx: AppContext) -> None:
    athlete = require_active(ctx)
    if athlete is None:
        return
    run_menu(f"SUGERENCIAS DE EJERCICIOS - {athlete.name}", [
        ("Rutinas personalizadas", lambda: suggest_routines(ctx, athlete)),
        ("Ejercicios por grupo muscular", lambda: exercises_by_group(ctx, athlete)),
        ("Ejercicios por nivel", lambda: exercises_by_level(ctx, athlete)),
        ("Programa progresivo", lambda: progressive_program(ctx, athlete)),
    ])


# ============================================================================
# Advanced search
# ============================================================================

def search_routines_text(ctx: AppContext) -> None:
    athlete = ctx.state.active(ctx.athletes)
    results = ctx.routines.search(athlete.name if athlete else None, ask("Término de búsqueda"))
    show_list(results, routines_table(results, "Resultados"), "Sin resultados.")


def search_routines_by_date(ctx: AppContext) -> None:
    start = date.fromisoformat(ask("Desde (AAAA-MM-DD)"))
    end = date.fromisoformat(ask("Hasta (AAAA-MM-DD)", date.today().isoformat()))
    results = ctx.routines.find_by_date_range(start, end)
    show_list(results, routines_table(results, "Resultados"), "Sin resultados.")


def search_routines_by_intensity(ctx: AppContext) -> None:
    results = ctx.routines.find_by_intensity(ask("Intensidad (Baja/Media/Alta)"))
    show_list(results, routines_table(results, "Resultados"), "Sin resultados.")


def combined_search(ctx: AppContext) -> None:
    console.print("[dim]Deje en blanco los criterios que no quiera usar[/dim]")
    results = ctx.routines.combined_search(
        kind=ask("Tipo (Fuerza/Cardio)") or None,
        intensity=ask("Intensidad (Baja/Media/Alta)") or None,
        muscle_group=ask("Grupo muscular") or None,
        athlete_name=ask("Atleta") or None,
    )
    show_list(results, routines_table(results, "Resultados"), "Sin resultados.")


def search_menu(ctx: AppContext) -> None:
    def by_date() -> None:
        try:
            search_routines_by_date(ctx)
        except ValueError as e:
            raise ValidationError("Fecha inválida", errors=[str(e)]) from e

    run_menu("BÚSQUEDAS AVANZADAS", [
        ("Buscar rutinas por texto", lambda: search_routines_text(ctx)),
        ("Buscar rutinas por fecha", by_date),
        ("Buscar rutinas por intensidad", lambda: search_routines_by_intensity(ctx)),
        ("Búsqueda combinada", lambda: combined_search(ctx)),
    ])


# ============================================================================
# System info & exit
# ============================================================================

def system_info(ctx: AppContext) -> None:
    settings = ctx.settings
    table = Table(title="Información del sistema", box=box.ROUNDED)
    table.add_column("Elemento", style="cyan")
    table.add_column("Valor")
    table.add_row("Versión", settings.app_version)
    table.add_row("Directorio de datos", str(settings.data_dir.resolve()))
    table.add_row("Archivo de atletas", str(settings.athletes_path))
    table.add_row("Archivo de rutinas", str(settings.routines_path))
    table.add_row("Archivo de seguros", str(settings.insurance_path))
    table.add_row("Atletas", str(ctx.athletes.count()))
    table.add_row("Rutinas", str(ctx.routines.count()))
    table.add_row("Seguros", str(ctx.insurance.count()))
    active = ctx.state.active(ctx.athletes)
    table.add_row("Atleta activo", active.name if active else "-")
    console.print(table)


def save_all(ctx: AppContext) -> bool:
    """Flush every store; on failure let the user retry or leave unsaved."""
    while True:
        try:
            for repository in ctx.repositories:
                repository.save()
            success("Datos guardados exitosamente.")
            return True
        except PersistenceError as e:
            logger.error(f"Final save failed: {e}")
            error(f"Error al guardar: {e.message}")
            if not Confirm.ask("¿Desea reintentar?", default=True):
                warn("Saliendo sin guardar.")
                return False


def main_menu(ctx: AppContext) -> None:
    options: List[Tuple[str, Callable[[], None]]] = [
        ("Gestionar atletas", lambda: athletes_menu(ctx)),
        ("Gestionar rutinas de entrenamiento", lambda: routines_menu(ctx)),
        ("Gestionar seguros médicos", lambda: insurance_menu(ctx)),
        ("Estadísticas y reportes", lambda: reports_menu(ctx)),
        ("Sugerencias de ejercicios", lambda: suggestions_menu(ctx)),
        ("Búsquedas avanzadas", lambda: search_menu(ctx)),
        ("Información del sistema", lambda: system_info(ctx)),
    ]
    exit_option = str(len(options) + 1)
    while True:
        title("SISTEMA DE ENTRENAMIENTO PERSONAL")
        active = ctx.state.active(ctx.athletes)
        if active is not None:
            console.print(f"Atleta activo: [cyan]{active.name}[/cyan]")
        for number, (label, _) in enumerate(options, start=1):
            console.print(f"  {number}. {label}")
        console.print(f"  {exit_option}. Guardar y salir")

        choice = ask("Seleccione una opción")
        if choice == exit_option:
            save_all(ctx)
            return
        if choice.isdigit() and 1 <= int(choice) <= len(options):
            guarded(options[int(choice) - 1][1])
        else:
            error("Opción no válida, intente de nuevo.")


def main() -> int:
    """Main CLI entry point."""
    settings = get_settings()
    configure_logging(settings)
    try:
        ctx = build_context(settings)
    except PersistenceError as e:
        error(f"No se pudieron cargar los datos: {e.message}")
        return 1

    try:
        main_menu(ctx)
    except (KeyboardInterrupt, EOFError):
        console.print()
        warn("Interrumpido por el usuario.")
        save_all(ctx)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
