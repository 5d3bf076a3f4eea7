"""
In-memory Entity store

Ids come from a counter owned by the store instance; nothing outside the
store can advance it.
"""
import itertools
import threading
from collections import defaultdict
from dataclasses import replace
from typing import Dict, List

from app.domain.entity import Entity


class InMemoryEntityStore:
    """Thread-safe dict of id -> entities, lost on restart"""

    def __init__(self):
        self._storage: Dict[int, List[Entity]] = defaultdict(list)
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create_entity(self, entity: Entity) -> Entity:
        with self._lock:
            created = replace(entity, id=next(self._ids))
            self._storage[created.id].append(created)
        return created

    def get_entities_by_id(self, entity_id: int) -> List[Entity]:
        with self._lock:
            return list(self._storage.get(entity_id, []))
