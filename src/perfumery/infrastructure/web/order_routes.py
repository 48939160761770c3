"""Order endpoints: checkout, lookup and the admin order desk."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from perfumery.application.create_order import CreateOrderHandler
from perfumery.application.dto import OrderUpdateSpec
from perfumery.application.list_orders import ListOrdersHandler
from perfumery.application.order_validation import validate_order_payload
from perfumery.application.resend_confirmation import ResendConfirmationHandler
from perfumery.application.show_order import ShowOrderHandler
from perfumery.application.update_order import UpdateOrderHandler
from perfumery.infrastructure.bootstrap import Container
from perfumery.infrastructure.web.dependencies import get_container, require_admin
from perfumery.infrastructure.web.schemas import OrderUpdateRequest, order_to_json

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", status_code=201)
def create_order(
    payload: Any = Body(default=None),
    container: Container = Depends(get_container),
) -> dict:
    normalized = validate_order_payload(payload)
    handler = CreateOrderHandler(
        order_repo=container.order_repo,
        dispatcher=container.dispatcher,
        max_number_attempts=container.settings.order_number_attempts,
    )
    placement = handler.handle(normalized)
    return {
        "success": True,
        "message": "Order placed successfully! You will receive confirmation via email/SMS.",
        "orderNumber": placement.order.order_number,
        "order": order_to_json(placement.order),
        "notifications": placement.notifications.to_dict(),
    }


@router.get("", dependencies=[Depends(require_admin)])
def list_orders(
    status: str | None = None,
    page: int = 1,
    limit: int = 20,
    container: Container = Depends(get_container),
) -> dict:
    result = ListOrdersHandler(container.order_repo).handle(status=status, page=page, limit=limit)
    return {
        "orders": [order_to_json(o) for o in result.orders],
        "totalPages": result.total_pages,
        "currentPage": result.current_page,
        "totalOrders": result.total_orders,
    }


@router.get("/number/{order_number}")
def get_order_by_number(order_number: str, container: Container = Depends(get_container)) -> dict:
    return order_to_json(ShowOrderHandler(container.order_repo).handle_number(order_number))


@router.get("/{order_id}")
def get_order(order_id: str, container: Container = Depends(get_container)) -> dict:
    return order_to_json(ShowOrderHandler(container.order_repo).handle(order_id))


@router.put("/{order_id}", dependencies=[Depends(require_admin)])
def update_order(
    order_id: str,
    body: OrderUpdateRequest,
    container: Container = Depends(get_container),
) -> dict:
    # Empty status / payment status mean "leave as is"; an explicit
    # adminNotes (even empty or null) replaces the notes.
    update = OrderUpdateSpec(
        status=body.status or None,
        admin_notes=(body.adminNotes or "") if "adminNotes" in body.model_fields_set else None,
        payment_status=body.paymentStatus or None,
    )
    handler = UpdateOrderHandler(order_repo=container.order_repo, dispatcher=container.dispatcher)
    return order_to_json(handler.handle(order_id, update).order)


@router.post("/{order_id}/send-confirmation", dependencies=[Depends(require_admin)])
def send_confirmation(order_id: str, container: Container = Depends(get_container)) -> dict:
    handler = ResendConfirmationHandler(
        order_repo=container.order_repo,
        dispatcher=container.dispatcher,
    )
    results = handler.handle(order_id)
    return {"success": True, "message": "Confirmation sent!", "results": results.to_dict()}
