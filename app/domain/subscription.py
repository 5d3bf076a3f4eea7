"""
Subscription domain entity, cost filter and the error taxonomy
"""
import uuid
from dataclasses import dataclass
from datetime import date, datetime

DEFAULT_LIST_LIMIT = 10


def normalize_page(limit: int, offset: int) -> tuple[int, int]:
    """Clamp pagination input: limit <= 0 -> DEFAULT_LIST_LIMIT, offset < 0 -> 0"""
    if limit <= 0:
        limit = DEFAULT_LIST_LIMIT
    if offset < 0:
        offset = 0
    return limit, offset


class SubscriptionError(Exception):
    """Base class for subscription failures"""


class SubscriptionValidationError(SubscriptionError, ValueError):
    """Caller-supplied data violates an invariant"""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class SubscriptionNotFoundError(SubscriptionError, LookupError):
    """No subscription with the given id"""

    def __init__(self, subscription_id: uuid.UUID):
        super().__init__(f"subscription {subscription_id} not found")
        self.subscription_id = subscription_id


class SubscriptionStoreError(SubscriptionError):
    """Durable storage failed (connection, timeout, driver error)"""


@dataclass
class Subscription:
    """
    Подписка пользователя на сервис

    Месяцы (start_date, end_date) — date с day=1.
    id, created_at, updated_at выставляет store.
    """
    service_name: str
    price: int
    user_id: uuid.UUID | None
    start_date: date | None
    end_date: date | None = None
    id: uuid.UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class CostFilter:
    """
    Predicates for the total cost query, all optional, combined with AND

    - user_id: exact match
    - service_name: case-insensitive substring
    - start_date: subscription start_date >= value
    - end_date: subscription end_date <= value, or end_date is NULL
    """
    user_id: uuid.UUID | None = None
    service_name: str | None = None
    start_date: date | None = None
    end_date: date | None = None

    def is_empty(self) -> bool:
        return (
            self.user_id is None
            and self.service_name is None
            and self.start_date is None
            and self.end_date is None
        )


def is_missing_id(value: uuid.UUID | None) -> bool:
    """None and the nil UUID both count as "no id" """
    return value is None or value == uuid.UUID(int=0)


def validate_id(subscription_id: uuid.UUID | None) -> None:
    if is_missing_id(subscription_id):
        raise SubscriptionValidationError("id", "id is required")


def validate_subscription(subscription: Subscription) -> None:
    """
    Check the invariants every stored subscription must satisfy

    Raises:
        SubscriptionValidationError: first violated field
    """
    if not subscription.service_name or not subscription.service_name.strip():
        raise SubscriptionValidationError("service_name", "service_name is required")

    price = subscription.price
    if isinstance(price, bool) or not isinstance(price, int) or price <= 0:
        raise SubscriptionValidationError("price", "price must be positive")

    if is_missing_id(subscription.user_id):
        raise SubscriptionValidationError("user_id", "user_id is required")

    if subscription.start_date is None:
        raise SubscriptionValidationError("start_date", "start_date is required")
