"""
Subscription API endpoints
"""
import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from app.api.deps import get_subscription_service
from app.application.subscriptions import SubscriptionService
from app.domain.subscription import (
    DEFAULT_LIST_LIMIT,
    CostFilter,
    Subscription,
    SubscriptionError,
    SubscriptionNotFoundError,
    SubscriptionValidationError,
    normalize_page,
)
from app.utils.months import format_month, parse_month, parse_optional_month


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/subscriptions", tags=["subscriptions"])


# === Request/Response models ===

class SubscriptionRequest(BaseModel):
    service_name: str
    price: int  # minor currency units
    user_id: uuid.UUID
    start_date: str  # MM-YYYY
    end_date: str | None = None  # MM-YYYY, null = active


class SubscriptionResponse(BaseModel):
    id: uuid.UUID
    service_name: str
    price: int
    user_id: uuid.UUID
    start_date: str
    end_date: str | None


class ListSubscriptionsResponse(BaseModel):
    items: list[SubscriptionResponse]
    limit: int
    offset: int
    total: int  # items on this page


class TotalCostResponse(BaseModel):
    total_cost: int


# === Helper functions ===

def _parse_month_param(name: str, value: str | None):
    """MM-YYYY -> date; bad format -> 400"""
    try:
        return parse_optional_month(value)
    except ValueError:
        logger.info("Invalid %s: %r", name, value)
        raise HTTPException(status_code=400, detail=f"invalid {name} format, expected MM-YYYY")


def _to_domain(req: SubscriptionRequest, subscription_id: uuid.UUID | None = None) -> Subscription:
    try:
        start_date = parse_month(req.start_date)
    except ValueError:
        raise HTTPException(status_code=400, detail="invalid start_date format, expected MM-YYYY")

    return Subscription(
        id=subscription_id,
        service_name=req.service_name,
        price=req.price,
        user_id=req.user_id,
        start_date=start_date,
        end_date=_parse_month_param("end_date", req.end_date),
    )


def _to_response(subscription: Subscription) -> SubscriptionResponse:
    return SubscriptionResponse(
        id=subscription.id,
        service_name=subscription.service_name,
        price=subscription.price,
        user_id=subscription.user_id,
        start_date=format_month(subscription.start_date),
        end_date=format_month(subscription.end_date),
    )


def _raise_http(e: SubscriptionError, action: str):
    """Map domain errors to HTTP status codes"""
    if isinstance(e, SubscriptionValidationError):
        raise HTTPException(status_code=400, detail=str(e))
    if isinstance(e, SubscriptionNotFoundError):
        logger.info("Subscription not found: %s", e.subscription_id)
        raise HTTPException(status_code=404, detail="subscription not found")
    logger.error("Failed to %s: %s", action, e)
    raise HTTPException(status_code=500, detail="internal server error")


# === Endpoints ===

@router.post("", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED)
def create_subscription(
    req: SubscriptionRequest,
    service: SubscriptionService = Depends(get_subscription_service),
):
    """Create a new subscription"""
    subscription = _to_domain(req)
    try:
        created = service.create_subscription(subscription)
    except SubscriptionError as e:
        _raise_http(e, "create subscription")
    return _to_response(created)


@router.get("", response_model=ListSubscriptionsResponse)
def list_subscriptions(
    limit: int = DEFAULT_LIST_LIMIT,
    offset: int = 0,
    service: SubscriptionService = Depends(get_subscription_service),
):
    """List subscriptions, newest first"""
    limit, offset = normalize_page(limit, offset)
    try:
        subscriptions = service.list_subscriptions(limit, offset)
    except SubscriptionError as e:
        _raise_http(e, "list subscriptions")

    items = [_to_response(s) for s in subscriptions]
    return ListSubscriptionsResponse(items=items, limit=limit, offset=offset, total=len(items))


@router.get("/cost", response_model=TotalCostResponse)
def get_total_cost(
    user_id: str | None = None,
    service_name: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    service: SubscriptionService = Depends(get_subscription_service),
):
    """Total price of subscriptions matching the filters (all optional)"""
    parsed_user_id = None
    if user_id:
        try:
            parsed_user_id = uuid.UUID(user_id)
        except ValueError:
            logger.info("Invalid user_id: %r", user_id)
            raise HTTPException(status_code=400, detail="invalid user_id format")

    cost_filter = CostFilter(
        user_id=parsed_user_id,
        service_name=service_name or None,
        start_date=_parse_month_param("start_date", start_date),
        end_date=_parse_month_param("end_date", end_date),
    )
    try:
        total = service.get_total_cost(cost_filter)
    except SubscriptionError as e:
        _raise_http(e, "get total cost")
    return TotalCostResponse(total_cost=total)


@router.get("/{subscription_id}", response_model=SubscriptionResponse)
def get_subscription(
    subscription_id: uuid.UUID,
    service: SubscriptionService = Depends(get_subscription_service),
):
    try:
        subscription = service.get_subscription_by_id(subscription_id)
    except SubscriptionError as e:
        _raise_http(e, "get subscription")
    return _to_response(subscription)


@router.put("/{subscription_id}", response_model=SubscriptionResponse)
def update_subscription(
    subscription_id: uuid.UUID,
    req: SubscriptionRequest,
    service: SubscriptionService = Depends(get_subscription_service),
):
    """Full replace (PUT), not a partial patch"""
    subscription = _to_domain(req, subscription_id)
    try:
        service.update_subscription(subscription)
    except SubscriptionError as e:
        _raise_http(e, "update subscription")
    return _to_response(subscription)


@router.delete("/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subscription(
    subscription_id: uuid.UUID,
    service: SubscriptionService = Depends(get_subscription_service),
):
    try:
        service.delete_subscription(subscription_id)
    except SubscriptionError as e:
        _raise_http(e, "delete subscription")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
