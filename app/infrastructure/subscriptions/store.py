"""
Subscription Store - durable CRUD + cost aggregation over the subscriptions table

Every operation is one statement, committed once. Driver failures are
re-raised as SubscriptionStoreError after the session is rolled back.
"""
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List

from sqlalchemy import Select, delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.subscription import (
    CostFilter,
    Subscription,
    SubscriptionNotFoundError,
    SubscriptionStoreError,
)
from app.infrastructure.db.models import SubscriptionModel


def build_total_cost_query(cost_filter: CostFilter) -> Select:
    """
    Собрать один агрегирующий запрос по фильтру

    Предикаты добавляются через AND в фиксированном порядке
    (user_id, service_name, start_date, end_date), каждый только если поле задано.
    Без предикатов — сумма по всей таблице.

    Note: end_date IS NULL (активная подписка) удовлетворяет любой верхней границе.
    """
    conditions = []

    if cost_filter.user_id is not None:
        conditions.append(SubscriptionModel.user_id == cost_filter.user_id)

    if cost_filter.service_name is not None:
        conditions.append(SubscriptionModel.service_name.ilike(f"%{cost_filter.service_name}%"))

    if cost_filter.start_date is not None:
        conditions.append(SubscriptionModel.start_date >= cost_filter.start_date)

    if cost_filter.end_date is not None:
        conditions.append(
            (SubscriptionModel.end_date.is_(None)) | (SubscriptionModel.end_date <= cost_filter.end_date)
        )

    query = select(func.coalesce(func.sum(SubscriptionModel.price), 0))
    if conditions:
        query = query.where(*conditions)
    return query


class SubscriptionStore:
    """
    Store for Subscription rows

    Holds only the session it was given; create one per request.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _translate_errors(self) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            raise SubscriptionStoreError(str(e)) from e

    def create_subscription(self, subscription: Subscription) -> Subscription:
        """
        Insert a new row; id and timestamps are generated here

        Returns:
            Subscription as persisted
        """
        now = datetime.now(timezone.utc)
        row = SubscriptionModel(
            id=uuid.uuid4(),
            service_name=subscription.service_name,
            price=subscription.price,
            user_id=subscription.user_id,
            start_date=subscription.start_date,
            end_date=subscription.end_date,
            created_at=now,
            updated_at=now,
        )
        with self._translate_errors():
            self.db.add(row)
            self.db.commit()
            # commit expires attributes, so this reads back what the DB stored
            return _to_domain(row)

    def get_subscription_by_id(self, subscription_id: uuid.UUID) -> Subscription:
        with self._translate_errors():
            row = self.db.query(SubscriptionModel).filter(
                SubscriptionModel.id == subscription_id
            ).first()
        if row is None:
            raise SubscriptionNotFoundError(subscription_id)
        return _to_domain(row)

    def update_subscription(self, subscription: Subscription) -> None:
        """Full replace of the mutable fields; created_at is kept"""
        query = (
            update(SubscriptionModel)
            .where(SubscriptionModel.id == subscription.id)
            .values(
                service_name=subscription.service_name,
                price=subscription.price,
                user_id=subscription.user_id,
                start_date=subscription.start_date,
                end_date=subscription.end_date,
                updated_at=datetime.now(timezone.utc),
            )
        )
        with self._translate_errors():
            result = self.db.execute(query)
            if result.rowcount == 0:
                self.db.rollback()
                raise SubscriptionNotFoundError(subscription.id)
            self.db.commit()

    def delete_subscription(self, subscription_id: uuid.UUID) -> None:
        query = (
            delete(SubscriptionModel)
            .where(SubscriptionModel.id == subscription_id)
        )
        with self._translate_errors():
            result = self.db.execute(query)
            if result.rowcount == 0:
                self.db.rollback()
                raise SubscriptionNotFoundError(subscription_id)
            self.db.commit()

    def list_subscriptions(self, limit: int, offset: int) -> List[Subscription]:
        """Newest first (created_at DESC)"""
        query = (
            select(SubscriptionModel)
            .order_by(SubscriptionModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        with self._translate_errors():
            rows = self.db.scalars(query).all()
        return [_to_domain(row) for row in rows]

    def get_total_cost(self, cost_filter: CostFilter) -> int:
        with self._translate_errors():
            total = self.db.scalar(build_total_cost_query(cost_filter))
        return int(total or 0)


def _to_domain(row: SubscriptionModel) -> Subscription:
    return Subscription(
        id=row.id,
        service_name=row.service_name,
        price=row.price,
        user_id=row.user_id,
        start_date=row.start_date,
        end_date=row.end_date,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
