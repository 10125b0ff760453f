"""Base repository interfaces and the file-backed implementation.

Every store keeps its entities in memory and mirrors them to a flat text
file, one JSON object per line. The in-memory list is only replaced after
the file write succeeds, so a failed write leaves both untouched.
"""

from abc import ABC, abstractmethod
import copy
import json
import logging
from pathlib import Path
import threading
from typing import Any, Callable, Generic, List, Optional, TypeVar, Union

from ...exceptions import DuplicateError, NotFoundError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)

# Type variable for the entity type stored in the repository
T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """
    Abstract base class for repository implementations.

    Provides a standard interface for CRUD operations on entities,
    abstracting away the underlying storage mechanism.

    Type Parameters:
        T: The type of entity stored in this repository
    """

    @abstractmethod
    def get_all(self) -> List[T]:
        """
        Retrieve every entity in the store's natural order.

        Returns:
            Independent copies; mutating them does not affect the store
        """
        pass

    @abstractmethod
    def get_by_id(self, entity_id: str) -> Optional[T]:
        """
        Retrieve an entity by its ID.

        Args:
            entity_id: The unique identifier of the entity

        Returns:
            A copy of the entity if found, None otherwise
        """
        pass

    @abstractmethod
    def add(self, entity: T) -> T:
        """
        Add a new entity.

        Raises:
            ValidationError: If the entity fails its self-check
            DuplicateError: If an entity with the same ID exists
            PersistenceError: If the backing store cannot be written
        """
        pass

    @abstractmethod
    def update(self, entity: T) -> T:
        """
        Replace the stored entity with the same ID.

        Raises:
            NotFoundError: If no entity has that ID
            PersistenceError: If the backing store cannot be written
        """
        pass

    @abstractmethod
    def delete(self, entity_or_id: Union[T, str]) -> None:
        """
        Delete an entity by instance or ID.

        Raises:
            NotFoundError: If no entity has that ID
            PersistenceError: If the backing store cannot be written
        """
        pass

    @abstractmethod
    def exists(self, entity_id: str) -> bool:
        pass

    @abstractmethod
    def count(self) -> int:
        pass

    @abstractmethod
    def save(self) -> None:
        """Flush the whole collection to the backing store."""
        pass


class FileRepository(Repository[T]):
    """
    Repository persisted to a JSON-lines text file.

    Subclasses provide ``entity_name`` plus the ``_deserialize`` and
    ``_sort_key`` hooks. A single re-entrant lock guards the list and the
    file for every public call.
    """

    entity_name = "Entidad"
    sort_descending = False

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the repository and load the backing file.

        Args:
            path: Text file holding one serialized entity per line.
                  A missing file means an empty store.
        """
        self.path = Path(path)
        self._lock = threading.RLock()
        self._items: List[T] = self._load()

    # -- hooks ------------------------------------------------------------

    def _serialize(self, entity: T) -> dict:
        return entity.to_dict()

    @abstractmethod
    def _deserialize(self, data: dict) -> T:
        pass

    @abstractmethod
    def _sort_key(self, entity: T) -> Any:
        pass

    # -- file I/O ---------------------------------------------------------

    def _load(self) -> List[T]:
        """Read the backing file, skipping blank and malformed lines."""
        if not self.path.exists():
            logger.info(f"No data file at {self.path}, starting empty")
            return []
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"No se pudo leer {self.path}", path=self.path, cause=e) from e

        items: List[T] = []
        seen = set()
        for line_no, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                entity = self._deserialize(json.loads(line))
            except (ValueError, KeyError, TypeError, AttributeError, ValidationError) as e:
                logger.warning(f"Skipping malformed line {line_no} in {self.path.name}: {e}")
                continue
            if entity.id in seen:
                logger.warning(f"Skipping duplicate id {entity.id} at line {line_no} in {self.path.name}")
                continue
            seen.add(entity.id)
            items.append(entity)
        logger.info(f"Loaded {len(items)} {self.entity_name.lower()}(s) from {self.path}")
        return items

    def _write(self, items: List[T]) -> None:
        """Serialize ``items`` to the backing file, replacing it atomically."""
        payload = "".join(
            json.dumps(self._serialize(item), ensure_ascii=False) + "\n" for item in items
        )
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise PersistenceError(f"No se pudo escribir {self.path}", path=self.path, cause=e) from e

    def _commit(self, working: List[T]) -> None:
        """Write the working copy, then make it the in-memory state."""
        self._write(working)
        self._items = working

    # -- queries ----------------------------------------------------------

    def _sorted(self, items: List[T]) -> List[T]:
        return sorted(items, key=self._sort_key, reverse=self.sort_descending)

    def _find(self, predicate: Callable[[T], bool]) -> List[T]:
        """Copies of every entity matching ``predicate``, in natural order."""
        with self._lock:
            return copy.deepcopy(self._sorted([e for e in self._items if predicate(e)]))

    def _index_of(self, entity_id: str) -> int:
        for i, entity in enumerate(self._items):
            if entity.id == entity_id:
                return i
        return -1

    def get_all(self) -> List[T]:
        return self._find(lambda _: True)

    def get_by_id(self, entity_id: str) -> Optional[T]:
        with self._lock:
            index = self._index_of(entity_id)
            return copy.deepcopy(self._items[index]) if index >= 0 else None

    def exists(self, entity_id: str) -> bool:
        with self._lock:
            return self._index_of(entity_id) >= 0

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    # -- mutations --------------------------------------------------------

    def add(self, entity: T) -> T:
        entity.ensure_valid()
        with self._lock:
            if self._index_of(entity.id) >= 0:
                raise DuplicateError(
                    f"{self.entity_name} con ID '{entity.id}' ya existe",
                    details={"resource_id": entity.id},
                )
            stored = copy.deepcopy(entity)
            self._commit(self._items + [stored])
            logger.debug(f"Added {self.entity_name.lower()} {entity.id}")
            return copy.deepcopy(stored)

    def update(self, entity: T) -> T:
        entity.ensure_valid()
        with self._lock:
            index = self._index_of(entity.id)
            if index < 0:
                raise NotFoundError(self.entity_name, entity.id)
            working = list(self._items)
            working[index] = copy.deepcopy(entity)
            self._commit(working)
            logger.debug(f"Updated {self.entity_name.lower()} {entity.id}")
            return copy.deepcopy(working[index])

    def delete(self, entity_or_id: Union[T, str]) -> None:
        entity_id = entity_or_id if isinstance(entity_or_id, str) else entity_or_id.id
        with self._lock:
            index = self._index_of(entity_id)
            if index < 0:
                raise NotFoundError(self.entity_name, entity_id)
            working = self._items[:index] + self._items[index + 1:]
            self._commit(working)
            logger.debug(f"Deleted {self.entity_name.lower()} {entity_id}")

    def save(self) -> None:
        with self._lock:
            self._write(self._items)
            logger.info(f"Saved {len(self._items)} {self.entity_name.lower()}(s) to {self.path}")
