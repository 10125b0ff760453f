"""
Base validator.

A validator owns a rule table built once at construction: each entry maps
a member of a per-entity rule ``Enum`` to a predicate and a message
factory. Evaluation walks the table in order and never stops at the
first failure.
"""

from abc import ABC, abstractmethod
from datetime import date
from enum import Enum
from typing import Callable, Dict, Generic, List, NamedTuple, Optional, TypeVar

T = TypeVar("T")

Clock = Callable[[], date]


class Rule(NamedTuple):
    """A predicate over an entity and the message shown when it fails."""
    predicate: Callable[[object], bool]
    message: Callable[[object], str]


class Validator(ABC, Generic[T]):
    """
    Abstract rule-table validator.

    Subclasses implement ``_build_rules`` and set ``missing_message``.
    Date rules read the injected clock instead of calling ``date.today``.
    """

    missing_message = "La entidad no puede ser nula"

    def __init__(self, today: Clock = date.today) -> None:
        self._today = today
        self._rules: Dict[Enum, Rule] = self._build_rules()

    @abstractmethod
    def _build_rules(self) -> Dict[Enum, Rule]:
        """Return the ordered rule table."""
        ...

    @property
    def rules(self) -> List[Enum]:
        return list(self._rules)

    def today(self) -> date:
        return self._today()

    def failed_rules(self, entity: Optional[T]) -> List[Enum]:
        if entity is None:
            return list(self._rules)
        return [key for key, rule in self._rules.items() if not rule.predicate(entity)]

    def validate(self, entity: Optional[T]) -> bool:
        """True when every rule passes."""
        if entity is None:
            return False
        return all(rule.predicate(entity) for rule in self._rules.values())

    def errors(self, entity: Optional[T]) -> List[str]:
        """Messages of every failing rule, in table order."""
        if entity is None:
            return [self.missing_message]
        return [
            rule.message(entity)
            for rule in self._rules.values()
            if not rule.predicate(entity)
        ]

    def validate_with(self, entity: Optional[T], *extra: Callable[[T], bool]) -> bool:
        """Base rules plus ad-hoc predicates supplied by the caller."""
        if not self.validate(entity):
            return False
        return all(predicate(entity) for predicate in extra)
