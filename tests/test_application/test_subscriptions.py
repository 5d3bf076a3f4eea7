"""Tests for SubscriptionService — валидация, делегирование в store, расчёт стоимости."""
import uuid
from datetime import date
from unittest.mock import Mock

import pytest

from app.application.subscriptions import SubscriptionService
from app.domain.subscription import (
    CostFilter,
    SubscriptionNotFoundError,
    SubscriptionStoreError,
    SubscriptionValidationError,
)
from app.infrastructure.subscriptions.store import SubscriptionStore


@pytest.fixture
def store_mock():
    return Mock(spec=SubscriptionStore)


@pytest.fixture
def service(db_session):
    return SubscriptionService(SubscriptionStore(db_session))


# ======================================================================
# 1. Validation happens before the store is touched
# ======================================================================

class TestValidationGuardsStore:
    @pytest.mark.parametrize("overrides, field", [
        ({"service_name": ""}, "service_name"),
        ({"price": 0}, "price"),
        ({"price": -100}, "price"),
        ({"user_id": None}, "user_id"),
        ({"user_id": uuid.UUID(int=0)}, "user_id"),
        ({"start_date": None}, "start_date"),
    ])
    def test_create_invalid(self, store_mock, make_subscription, overrides, field):
        with pytest.raises(SubscriptionValidationError) as exc:
            SubscriptionService(store_mock).create_subscription(make_subscription(**overrides))
        assert exc.value.field == field
        store_mock.create_subscription.assert_not_called()

    def test_update_requires_id(self, store_mock, make_subscription):
        with pytest.raises(SubscriptionValidationError) as exc:
            SubscriptionService(store_mock).update_subscription(make_subscription(id=None))
        assert exc.value.field == "id"
        store_mock.update_subscription.assert_not_called()

    def test_update_revalidates_fields(self, store_mock, make_subscription):
        with pytest.raises(SubscriptionValidationError, match="price"):
            SubscriptionService(store_mock).update_subscription(
                make_subscription(id=uuid.uuid4(), price=0)
            )
        store_mock.update_subscription.assert_not_called()

    @pytest.mark.parametrize("bad_id", [None, uuid.UUID(int=0)])
    def test_get_and_delete_require_id(self, store_mock, bad_id):
        service = SubscriptionService(store_mock)
        with pytest.raises(SubscriptionValidationError):
            service.get_subscription_by_id(bad_id)
        with pytest.raises(SubscriptionValidationError):
            service.delete_subscription(bad_id)
        store_mock.get_subscription_by_id.assert_not_called()
        store_mock.delete_subscription.assert_not_called()


# ======================================================================
# 2. Delegation and error pass-through
# ======================================================================

class TestDelegation:
    def test_create_returns_store_result(self, store_mock, make_subscription):
        stored = make_subscription(id=uuid.uuid4())
        store_mock.create_subscription.return_value = stored

        result = SubscriptionService(store_mock).create_subscription(make_subscription())

        assert result is stored
        store_mock.create_subscription.assert_called_once()

    def test_store_error_passes_through(self, store_mock, make_subscription):
        original = SubscriptionStoreError("connection refused")
        store_mock.create_subscription.side_effect = original

        with pytest.raises(SubscriptionStoreError) as exc:
            SubscriptionService(store_mock).create_subscription(make_subscription())
        assert exc.value is original

    def test_not_found_passes_through(self, store_mock):
        store_mock.get_subscription_by_id.side_effect = SubscriptionNotFoundError(uuid.uuid4())
        with pytest.raises(SubscriptionNotFoundError):
            SubscriptionService(store_mock).get_subscription_by_id(uuid.uuid4())

    @pytest.mark.parametrize("limit, offset, expected", [
        (0, -5, (10, 0)),
        (-3, 2, (10, 2)),
        (50, 0, (50, 0)),
    ])
    def test_list_clamps_pagination(self, store_mock, limit, offset, expected):
        store_mock.list_subscriptions.return_value = []
        SubscriptionService(store_mock).list_subscriptions(limit, offset)
        store_mock.list_subscriptions.assert_called_once_with(*expected)

    def test_total_cost_passes_filter(self, store_mock):
        store_mock.get_total_cost.return_value = 42
        cost_filter = CostFilter(service_name="net")
        assert SubscriptionService(store_mock).get_total_cost(cost_filter) == 42
        store_mock.get_total_cost.assert_called_once_with(cost_filter)


# ======================================================================
# 3. Service + real store (SQLite)
# ======================================================================

class TestServiceWithStore:
    def test_create_then_get_round_trip(self, service, make_subscription):
        created = service.create_subscription(make_subscription())
        loaded = service.get_subscription_by_id(created.id)
        assert loaded == created
        assert loaded.id is not None
        assert loaded.created_at is not None

    def test_update_nonexistent_is_not_found(self, service, make_subscription):
        with pytest.raises(SubscriptionNotFoundError):
            service.update_subscription(make_subscription(id=uuid.uuid4()))

    def test_delete_nonexistent_is_not_found(self, service):
        with pytest.raises(SubscriptionNotFoundError):
            service.delete_subscription(uuid.uuid4())

    def test_update_keeps_id(self, service, make_subscription):
        created = service.create_subscription(make_subscription())
        service.update_subscription(make_subscription(id=created.id, price=1))
        loaded = service.get_subscription_by_id(created.id)
        assert loaded.id == created.id
        assert loaded.price == 1

    def test_list_bad_pagination_equals_defaults(self, service, make_subscription):
        for i in range(12):
            service.create_subscription(make_subscription(service_name=f"svc-{i}"))

        clamped = service.list_subscriptions(0, -5)
        defaults = service.list_subscriptions(10, 0)

        assert len(clamped) == 10
        assert [s.id for s in clamped] == [s.id for s in defaults]

    def test_total_cost_empty_filter_sums_all(self, service, make_subscription):
        prices = [999, 499, 150]
        for p in prices:
            service.create_subscription(make_subscription(price=p))
        assert service.get_total_cost(CostFilter()) == sum(prices)

    def test_total_cost_unmatched_name_is_zero(self, service, make_subscription):
        service.create_subscription(make_subscription(service_name="Netflix", price=999))
        assert service.get_total_cost(CostFilter(service_name="Disney")) == 0

    def test_total_cost_no_rows_is_zero(self, service):
        assert service.get_total_cost(CostFilter(user_id=uuid.uuid4())) == 0


class TestNetflixSpotifyScenario:
    """
    Netflix 999 (01-2024, без окончания) и Spotify 499 (03-2024 .. 06-2024)
    у одного пользователя.

    Фильтр start_date сравнивает только start_date подписки (>=),
    фильтр end_date пропускает подписки без end_date.
    """

    @pytest.fixture(autouse=True)
    def subscriptions(self, service, make_subscription):
        service.create_subscription(make_subscription(
            service_name="Netflix", price=999, start_date=date(2024, 1, 1), end_date=None,
        ))
        service.create_subscription(make_subscription(
            service_name="Spotify", price=499, start_date=date(2024, 3, 1), end_date=date(2024, 6, 1),
        ))

    def test_start_date_filter_excludes_earlier_start(self, service):
        # Netflix started 01-2024 < 02-2024, so only Spotify matches
        assert service.get_total_cost(CostFilter(start_date=date(2024, 2, 1))) == 499

    def test_start_date_filter_inclusive(self, service):
        assert service.get_total_cost(CostFilter(start_date=date(2024, 1, 1))) == 999 + 499

    def test_end_date_filter_keeps_open_subscription(self, service):
        # Netflix has no end_date -> matches; Spotify ends 06-2024 > 05-2024
        assert service.get_total_cost(CostFilter(end_date=date(2024, 5, 1))) == 999

    def test_end_date_filter_inclusive(self, service):
        assert service.get_total_cost(CostFilter(end_date=date(2024, 6, 1))) == 999 + 499

    def test_combined_filters(self, service, user_id):
        cost_filter = CostFilter(
            user_id=user_id,
            service_name="spot",
            start_date=date(2024, 2, 1),
            end_date=date(2024, 12, 1),
        )
        assert service.get_total_cost(cost_filter) == 499

    def test_other_user(self, service):
        assert service.get_total_cost(CostFilter(user_id=uuid.uuid4())) == 0
