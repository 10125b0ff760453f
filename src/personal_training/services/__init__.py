"""
Service layer.

Managers coordinate validation, confirmation, persistence and change
notification for each entity type; the training and suggestion services
provide read-only analysis.
"""

from .base import (
    BaseService,
    EntityManager,
    Operation,
    ChangeNotifier,
    Confirmer,
    always_confirm,
)
from .athlete_manager import (
    AthleteManager,
    AthleteSearchCriteria,
    AthleteOverview,
    CompatibilityReport,
)
from .routine_manager import RoutineManager
from .insurance_manager import InsuranceManager
from .training_service import TrainingService, months_before
from .suggestion_service import GoalKeyword, SuggestionService

__all__ = [
    "BaseService",
    "EntityManager",
    "Operation",
    "ChangeNotifier",
    "Confirmer",
    "always_confirm",
    "AthleteManager",
    "AthleteSearchCriteria",
    "AthleteOverview",
    "CompatibilityReport",
    "RoutineManager",
    "InsuranceManager",
    "TrainingService",
    "months_before",
    "GoalKeyword",
    "SuggestionService",
]
