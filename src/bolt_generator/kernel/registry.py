"""Handle registry for native kernel objects.

Maps the string IDs carried by handles to the host objects they stand for.
IDs are stable for the life of the registry: registering the same object
twice returns the same ID.
"""

from threading import Lock
from typing import Any, Dict, List, Optional

# Type alias for native host objects (avoids importing the host API here)
NativeEntity = Any


class HandleRegistry:
    """Registry for tracking and resolving native entity IDs.

    Entities are grouped by kind ("component", "sketch", "profile", "body",
    "face", "edge", "feature"). IDs are generated as ``{kind}_{n:03d}``.
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._lock = Lock()
        self._entities: Dict[str, Dict[str, NativeEntity]] = {}
        self._counters: Dict[str, int] = {}

    def register(self, kind: str, entity: NativeEntity) -> str:
        """Register an entity and return its stable ID.

        Args:
            kind: Entity kind used as the ID prefix
            entity: Native host object

        Returns:
            Stable ID for the entity
        """
        with self._lock:
            entities = self._entities.setdefault(kind, {})

            # Check if already registered by object identity
            for entity_id, existing in entities.items():
                if existing is entity:
                    return entity_id

            self._counters[kind] = self._counters.get(kind, 0) + 1
            entity_id = f"{kind}_{self._counters[kind]:03d}"
            entities[entity_id] = entity
            return entity_id

    def get(self, kind: str, entity_id: str) -> Optional[NativeEntity]:
        """Get an entity by kind and ID, or None if not found."""
        with self._lock:
            return self._entities.get(kind, {}).get(entity_id)

    def ids(self, kind: str) -> List[str]:
        """Get list of all registered IDs of one kind."""
        with self._lock:
            return list(self._entities.get(kind, {}).keys())

    def clear(self) -> None:
        """Clear all registered entities."""
        with self._lock:
            self._entities.clear()
            self._counters.clear()
