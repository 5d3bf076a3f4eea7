"""
Entity use cases — toy CRUD поверх in-memory store.
"""
from typing import List

from app.domain.entity import Entity, EntityValidationError
from app.domain.subscription import is_missing_id
from app.infrastructure.entities.store import InMemoryEntityStore


class EntityService:
    def __init__(self, store: InMemoryEntityStore):
        self.store = store

    def create_entity(self, entity: Entity) -> Entity:
        if is_missing_id(entity.user_id):
            raise EntityValidationError("user_id must be provided")
        return self.store.create_entity(entity)

    def get_entities_by_id(self, entity_id: int) -> List[Entity]:
        if entity_id < 1:
            raise EntityValidationError("id must be provided")
        return self.store.get_entities_by_id(entity_id)
