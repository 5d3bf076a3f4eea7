"""
Subscription service — валидация инвариантов перед обращением к store.

Сервис не хранит состояния: один экземпляр можно делить между потоками,
пока store создаётся на запрос.
"""
import logging
import uuid
from typing import List, Protocol

from app.domain.subscription import (
    CostFilter,
    Subscription,
    normalize_page,
    validate_id,
    validate_subscription,
)

logger = logging.getLogger(__name__)


class SubscriptionStorePort(Protocol):
    def create_subscription(self, subscription: Subscription) -> Subscription: ...
    def get_subscription_by_id(self, subscription_id: uuid.UUID) -> Subscription: ...
    def update_subscription(self, subscription: Subscription) -> None: ...
    def delete_subscription(self, subscription_id: uuid.UUID) -> None: ...
    def list_subscriptions(self, limit: int, offset: int) -> List[Subscription]: ...
    def get_total_cost(self, cost_filter: CostFilter) -> int: ...


class SubscriptionService:
    """
    Business rules for subscriptions

    Validation errors are raised before the store is touched; store errors
    (SubscriptionNotFoundError, SubscriptionStoreError) pass through as is.
    """

    def __init__(self, store: SubscriptionStorePort):
        self.store = store

    def create_subscription(self, subscription: Subscription) -> Subscription:
        """
        Создать подписку

        Raises:
            SubscriptionValidationError: пустое имя, price <= 0, нет user_id или start_date
        """
        validate_subscription(subscription)

        created = self.store.create_subscription(subscription)
        logger.info("Subscription created: id=%s user_id=%s", created.id, created.user_id)
        return created

    def get_subscription_by_id(self, subscription_id: uuid.UUID | None) -> Subscription:
        validate_id(subscription_id)
        return self.store.get_subscription_by_id(subscription_id)

    def update_subscription(self, subscription: Subscription) -> None:
        """Полная замена записи (не patch); id обязателен"""
        validate_id(subscription.id)
        validate_subscription(subscription)

        self.store.update_subscription(subscription)
        logger.info("Subscription updated: id=%s", subscription.id)

    def delete_subscription(self, subscription_id: uuid.UUID | None) -> None:
        validate_id(subscription_id)

        self.store.delete_subscription(subscription_id)
        logger.info("Subscription deleted: id=%s", subscription_id)

    def list_subscriptions(self, limit: int, offset: int) -> List[Subscription]:
        """
        Страница подписок, новые первыми

        Некорректная пагинация не ошибка: limit <= 0 -> 10, offset < 0 -> 0.
        """
        limit, offset = normalize_page(limit, offset)
        return self.store.list_subscriptions(limit, offset)

    def get_total_cost(self, cost_filter: CostFilter) -> int:
        """Сумма price по подпискам, подходящим под фильтр (0 если ничего не нашлось)"""
        return self.store.get_total_cost(cost_filter)
