"""
Entity domain object (toy example, not persisted)
"""
import uuid
from dataclasses import dataclass


class EntityValidationError(ValueError):
    pass


@dataclass
class Entity:
    name: str
    user_id: uuid.UUID | None
    id: int = 0  # assigned by the store
