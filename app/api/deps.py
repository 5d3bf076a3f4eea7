"""
FastAPI dependencies (DB session, services)
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from app.infrastructure.db.session import get_db as _get_db
from app.infrastructure.subscriptions.store import SubscriptionStore
from app.infrastructure.entities.store import InMemoryEntityStore
from app.application.subscriptions import SubscriptionService
from app.application.entities import EntityService


# Re-export get_db для удобства
get_db = _get_db

# One in-memory store per process
_entity_store = InMemoryEntityStore()


def get_subscription_service(db: Session = Depends(get_db)) -> SubscriptionService:
    """
    SubscriptionService поверх store с сессией текущего запроса

    Usage:
        @router.get("/{subscription_id}")
        def get_one(service: SubscriptionService = Depends(get_subscription_service)):
            ...
    """
    return SubscriptionService(SubscriptionStore(db))


def get_entity_service() -> EntityService:
    return EntityService(_entity_store)
