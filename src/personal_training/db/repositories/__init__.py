"""Repository pattern implementations for flat-file persistence.

Each store keeps its entities in memory, hands out deep copies,
and rewrites its JSON-lines file after every mutation.
"""

from .base import Repository, FileRepository
from .athlete_repository import AthleteRepository
from .routine_repository import RoutineFilter, RoutineRepository, RoutineSummary
from .insurance_repository import FinancialSummary, InsuranceRepository

__all__ = [
    "Repository",
    "FileRepository",
    "AthleteRepository",
    "RoutineFilter",
    "RoutineRepository",
    "RoutineSummary",
    "FinancialSummary",
    "InsuranceRepository",
]
