"""
Base service classes and protocols.

Defines the change-notification and confirmation strategies shared by
the entity managers, plus the generic add/update/delete pipeline.
"""

from abc import ABC
from enum import Enum
import logging
from typing import Generic, List, Optional, Protocol, Sequence, TypeVar

from ..db.repositories.base import FileRepository
from ..exceptions import (
    CancelledError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from ..validators.base import Validator

T = TypeVar("T")


class Operation(str, Enum):
    """Kind of change applied by a manager."""
    ADD = "Agregar"
    UPDATE = "Actualizar"
    DELETE = "Eliminar"


class ChangeNotifier(Protocol):
    """Listener called after a change has been persisted."""

    def __call__(self, entity: object, operation: Operation) -> None:
        ...


class Confirmer(Protocol):
    """Asked before a change is applied; returning False cancels it."""

    def __call__(self, entity: object, operation: Operation) -> bool:
        ...


def always_confirm(entity: object, operation: Operation) -> bool:
    return True


class BaseService(ABC):
    """
    Abstract base class for all services.

    Provides common functionality:
    - Logging setup
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger


class EntityManager(BaseService, Generic[T]):
    """
    Validate -> check conflicts -> confirm -> persist -> notify.

    Business errors (validation, duplicate, not found, cancelled) propagate
    untouched; a ``PersistenceError`` from the repository is re-raised
    with the failed operation as context.
    """

    entity_label = "entidad"

    def __init__(
        self,
        repository: FileRepository[T],
        validator: Validator[T],
        notifiers: Optional[Sequence[ChangeNotifier]] = None,
        confirmer: Optional[Confirmer] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(logger)
        self.repository = repository
        self.validator = validator
        self.notifiers: List[ChangeNotifier] = (
            list(notifiers) if notifiers is not None else [self._log_change]
        )
        self.confirmer: Confirmer = confirmer or always_confirm

    # -- strategy plumbing ------------------------------------------------

    def _log_change(self, entity: object, operation: Operation) -> None:
        self.logger.info(f"{operation.value} {self.entity_label}: {entity}")

    def _notify(self, entity: T, operation: Operation) -> None:
        for notifier in self.notifiers:
            notifier(entity, operation)

    def _confirm(self, entity: T, operation: Operation) -> None:
        if not self.confirmer(entity, operation):
            raise CancelledError(f"{operation.value} {self.entity_label}")

    def _validate(self, entity: Optional[T]) -> None:
        errors = self.validator.errors(entity)
        if errors:
            raise ValidationError(f"Datos de {self.entity_label} inválidos", errors=errors)

    def _check_conflicts(self, entity: T, exclude_id: Optional[str] = None) -> None:
        """Hook for uniqueness rules; no conflicts by default."""

    def _persistence_context(self, operation: Operation, error: PersistenceError) -> PersistenceError:
        return PersistenceError(
            f"Error al {operation.value.lower()} {self.entity_label}",
            path=error.path,
            cause=error,
        )

    # -- reads --------------------------------------------------------------

    def list_all(self) -> List[T]:
        return self.repository.get_all()

    def get(self, entity_id: str) -> T:
        entity = self.repository.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self.repository.entity_name, entity_id)
        return entity

    def count(self) -> int:
        return self.repository.count()

    # -- mutations --------------------------------------------------------

    def add(self, entity: T) -> T:
        self._validate(entity)
        self._check_conflicts(entity)
        self._confirm(entity, Operation.ADD)
        try:
            stored = self.repository.add(entity)
        except PersistenceError as e:
            raise self._persistence_context(Operation.ADD, e) from e
        self._notify(stored, Operation.ADD)
        return stored

    def update(self, original_id: str, new: T) -> T:
        """Copy ``new``'s data onto the stored entity with ``original_id``."""
        self._validate(new)
        original = self.get(original_id)
        self._check_conflicts(new, exclude_id=original_id)
        self._confirm(new, Operation.UPDATE)
        original.update_from(new)
        try:
            stored = self.repository.update(original)
        except PersistenceError as e:
            raise self._persistence_context(Operation.UPDATE, e) from e
        self._notify(stored, Operation.UPDATE)
        return stored

    def delete(self, entity_id: str) -> T:
        existing = self.get(entity_id)
        self._confirm(existing, Operation.DELETE)
        try:
            self.repository.delete(entity_id)
        except PersistenceError as e:
            raise self._persistence_context(Operation.DELETE, e) from e
        self._notify(existing, Operation.DELETE)
        return existing
