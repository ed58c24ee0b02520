"""
Orders API Routes

Public submission, confirmation and invoice lookup; everything else
requires an admin bearer token.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from fieldfeed.api.dependencies import get_current_admin
from fieldfeed.api.middleware.logging_middleware import get_client_ip
from fieldfeed.api.responses import success_response
from fieldfeed.domains.orders.api.dependencies import (
    get_confirm_order_use_case,
    get_create_order_use_case,
    get_delete_order_use_case,
    get_invoice_use_case,
    get_list_orders_use_case,
    get_order_stats_use_case,
    get_order_use_case,
    get_provide_quote_use_case,
    get_resend_notification_use_case,
    get_update_order_use_case,
)
from fieldfeed.domains.orders.api.schemas import (
    ConfirmOrderSchema,
    CreateOrderSchema,
    QuoteSchema,
    ResendNotificationSchema,
    UpdateOrderSchema,
)
from fieldfeed.domains.orders.application.dto import OrderListQuery
from fieldfeed.domains.orders.application.use_cases import (
    ConfirmOrderUseCase,
    CreateOrderUseCase,
    DeleteOrderUseCase,
    GetInvoiceUseCase,
    GetOrderStatsUseCase,
    GetOrderUseCase,
    ListOrdersUseCase,
    ProvideQuoteRequest,
    ProvideQuoteUseCase,
    ResendNotificationUseCase,
    UpdateOrderRequest,
    UpdateOrderUseCase,
)
from fieldfeed.domains.orders.domain.entities import AdminAccount, RequestMetadata
from fieldfeed.domains.orders.domain.value_objects import OrderStatus

router = APIRouter(prefix="/orders", tags=["Orders"])


# ==================== Public ====================


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: CreateOrderSchema,
    request: Request,
    use_case: CreateOrderUseCase = Depends(get_create_order_use_case),  # noqa: B008
):
    """Submit a bulk order; notifications go out in the background."""
    metadata = RequestMetadata(
        source_ip=get_client_ip(request),
        user_agent=request.headers.get("User-Agent"),
        referrer=request.headers.get("Referer"),
    )
    order = await use_case.execute(payload.to_request(metadata))
    return success_response({"order": order.to_detail_dict()}, message="Order created successfully")


@router.post("/confirm")
async def confirm_order(
    payload: ConfirmOrderSchema,
    use_case: ConfirmOrderUseCase = Depends(get_confirm_order_use_case),  # noqa: B008
):
    """Customer confirms a quoted or reviewed order by number and email."""
    order = await use_case.execute(payload.order_number, str(payload.customer_email))
    return success_response({"order": order.to_summary_dict()}, message="Order confirmed successfully")


@router.get("/by-number/invoice")
async def get_invoice_by_number(
    order_number: str | None = Query(default=None, alias="orderNumber"),
    customer_email: str | None = Query(default=None, alias="customerEmail"),
    use_case: GetInvoiceUseCase = Depends(get_invoice_use_case),  # noqa: B008
):
    result = await use_case.by_number_and_email(order_number, customer_email)
    return success_response(result.to_dict(), message="Invoice generated successfully")


# ==================== Admin ====================


@router.get("/all")
async def list_orders(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1),
    order_status: OrderStatus | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None, max_length=200),
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    sort_order: str = Query(default="desc", alias="sortOrder", pattern="^(asc|desc)$"),
    admin: AdminAccount = Depends(get_current_admin),  # noqa: B008
    use_case: ListOrdersUseCase = Depends(get_list_orders_use_case),  # noqa: B008
):
    query = OrderListQuery(
        page=page,
        limit=limit,
        status=order_status,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    result = await use_case.execute(query)
    return success_response(
        {
            "orders": [order.to_detail_dict() for order in result.orders],
            "pagination": result.pagination_dict(),
        }
    )


@router.get("/stats")
async def get_order_stats(
    admin: AdminAccount = Depends(get_current_admin),  # noqa: B008
    use_case: GetOrderStatsUseCase = Depends(get_order_stats_use_case),  # noqa: B008
):
    result = await use_case.execute()
    return success_response(
        {
            "stats": result.stats.to_dict(),
            "recentOrders": [order.to_detail_dict() for order in result.recent_orders],
        }
    )


@router.get("/{order_id}")
async def get_order(
    order_id: UUID,
    admin: AdminAccount = Depends(get_current_admin),  # noqa: B008
    use_case: GetOrderUseCase = Depends(get_order_use_case),  # noqa: B008
):
    order = await use_case.execute(order_id)
    return success_response({"order": order.to_detail_dict()})


@router.get("/{order_id}/admin-invoice")
async def get_admin_invoice(
    order_id: UUID,
    admin: AdminAccount = Depends(get_current_admin),  # noqa: B008
    use_case: GetInvoiceUseCase = Depends(get_invoice_use_case),  # noqa: B008
):
    result = await use_case.by_id(order_id)
    return success_response(result.to_dict(), message="Invoice generated successfully")


@router.put("/{order_id}")
async def update_order(
    order_id: UUID,
    payload: UpdateOrderSchema,
    admin: AdminAccount = Depends(get_current_admin),  # noqa: B008
    use_case: UpdateOrderUseCase = Depends(get_update_order_use_case),  # noqa: B008
):
    """Generic admin edit of status, quoted price and notes."""
    order = await use_case.execute(
        UpdateOrderRequest(
            order_id=order_id,
            admin_id=admin.id,
            status=payload.status,
            quoted_price=payload.quoted_price,
            admin_notes=payload.admin_notes,
        )
    )
    return success_response({"order": order.to_detail_dict()}, message="Order updated successfully")


@router.post("/{order_id}/quote")
async def provide_quote(
    order_id: UUID,
    payload: QuoteSchema,
    admin: AdminAccount = Depends(get_current_admin),  # noqa: B008
    use_case: ProvideQuoteUseCase = Depends(get_provide_quote_use_case),  # noqa: B008
):
    order = await use_case.execute(
        ProvideQuoteRequest(
            order_id=order_id,
            admin_id=admin.id,
            quoted_price=payload.quoted_price,
            admin_notes=payload.admin_notes,
            delivery_time=payload.delivery_time,
        )
    )
    return success_response({"order": order.to_detail_dict()}, message="Quote provided successfully")


@router.delete("/{order_id}")
async def delete_order(
    order_id: UUID,
    admin: AdminAccount = Depends(get_current_admin),  # noqa: B008
    use_case: DeleteOrderUseCase = Depends(get_delete_order_use_case),  # noqa: B008
):
    await use_case.execute(order_id)
    return success_response(message="Order deleted successfully")


@router.post("/{order_id}/notifications/resend")
async def resend_notification(
    order_id: UUID,
    payload: ResendNotificationSchema,
    admin: AdminAccount = Depends(get_current_admin),  # noqa: B008
    use_case: ResendNotificationUseCase = Depends(get_resend_notification_use_case),  # noqa: B008
):
    """Operator-triggered re-delivery; waits for the send and reports the outcome."""
    sent = await use_case.execute(order_id, payload.kind, admin.id)
    return success_response(
        {"kind": payload.kind.value, "sent": sent},
        message="Notification sent" if sent else "Notification could not be sent, see logs",
    )


__all__ = ["router"]
