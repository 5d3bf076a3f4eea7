"""
Entity API endpoints (toy example, in-memory)
"""
import uuid

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.api.deps import get_entity_service
from app.application.entities import EntityService
from app.domain.entity import Entity, EntityValidationError


router = APIRouter(prefix="/api/entities", tags=["entities"])


class CreateEntityRequest(BaseModel):
    name: str
    user_id: uuid.UUID


class EntityResponse(BaseModel):
    id: int
    name: str
    user_id: uuid.UUID


@router.post("", response_model=EntityResponse)
def create_entity(
    req: CreateEntityRequest,
    service: EntityService = Depends(get_entity_service),
):
    try:
        entity = service.create_entity(Entity(name=req.name, user_id=req.user_id))
    except EntityValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return EntityResponse(id=entity.id, name=entity.name, user_id=entity.user_id)


@router.get("/{entity_id}", response_model=list[EntityResponse])
def get_entities(
    entity_id: int,
    service: EntityService = Depends(get_entity_service),
):
    """Все сущности с этим id (пустой список если нет)"""
    try:
        entities = service.get_entities_by_id(entity_id)
    except EntityValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [EntityResponse(id=e.id, name=e.name, user_id=e.user_id) for e in entities]
