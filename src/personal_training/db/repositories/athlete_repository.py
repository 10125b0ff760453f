"""File-backed repository for athletes."""

from typing import List, Optional

from ...models.athlete import Athlete
from ...models.enums import Level
from .base import FileRepository


class AthleteRepository(FileRepository[Athlete]):
    """Athletes ordered by name (case-insensitive)."""

    entity_name = "Atleta"

    def _deserialize(self, data: dict) -> Athlete:
        return Athlete.from_dict(data)

    def _sort_key(self, entity: Athlete):
        return entity.name.lower()

    def find_by_name(self, name: str) -> Optional[Athlete]:
        """Exact, case-insensitive name lookup."""
        needle = (name or "").strip().lower()
        if not needle:
            return None
        matches = self._find(lambda a: a.name.lower() == needle)
        return matches[0] if matches else None

    def search_by_name(self, term: str) -> List[Athlete]:
        needle = (term or "").strip().lower()
        if not needle:
            return []
        return self._find(lambda a: needle in a.name.lower())

    def search(self, term: str) -> List[Athlete]:
        """Free-text match on name, goals or level."""
        return self._find(lambda a: a.matches(term))

    def find_by_level(self, level: "Level | str") -> List[Athlete]:
        level = Level.parse(level)
        return self._find(lambda a: a.level is level)

    def find_by_goals(self, term: str) -> List[Athlete]:
        needle = (term or "").strip().lower()
        if not needle:
            return []
        return self._find(lambda a: needle in a.goals.lower())
