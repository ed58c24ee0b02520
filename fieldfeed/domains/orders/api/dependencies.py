"""
Orders API Dependencies

FastAPI dependencies wiring the order use cases per request.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fieldfeed.api.dependencies import get_di_container
from fieldfeed.core.container import DependencyContainer
from fieldfeed.database.async_db import get_async_db
from fieldfeed.domains.orders.application.ports import IOrderNotifier, IOrderRepository, ITaskRunner
from fieldfeed.domains.orders.application.use_cases import (
    ConfirmOrderUseCase,
    CreateOrderUseCase,
    DeleteOrderUseCase,
    GetInvoiceUseCase,
    GetOrderStatsUseCase,
    GetOrderUseCase,
    ListOrdersUseCase,
    ProvideQuoteUseCase,
    ResendNotificationUseCase,
    UpdateOrderUseCase,
)


def get_order_repository(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
    container: DependencyContainer = Depends(get_di_container),  # noqa: B008
) -> IOrderRepository:
    return container.create_order_repository(db)


def get_notifier(container: DependencyContainer = Depends(get_di_container)) -> IOrderNotifier:  # noqa: B008
    return container.get_notifier()


def get_task_runner(container: DependencyContainer = Depends(get_di_container)) -> ITaskRunner:  # noqa: B008
    return container.get_task_runner()


def get_create_order_use_case(
    repository: IOrderRepository = Depends(get_order_repository),  # noqa: B008
    notifier: IOrderNotifier = Depends(get_notifier),  # noqa: B008
    task_runner: ITaskRunner = Depends(get_task_runner),  # noqa: B008
    container: DependencyContainer = Depends(get_di_container),  # noqa: B008
) -> CreateOrderUseCase:
    """Get CreateOrderUseCase instance."""
    return CreateOrderUseCase(
        order_repository=repository,
        notifier=notifier,
        task_runner=task_runner,
        default_tax_rate=container.settings.INVOICE_TAX_RATE,
        currency=container.settings.DEFAULT_CURRENCY,
    )


def get_list_orders_use_case(
    repository: IOrderRepository = Depends(get_order_repository),  # noqa: B008
) -> ListOrdersUseCase:
    return ListOrdersUseCase(repository)


def get_order_use_case(
    repository: IOrderRepository = Depends(get_order_repository),  # noqa: B008
) -> GetOrderUseCase:
    return GetOrderUseCase(repository)


def get_update_order_use_case(
    repository: IOrderRepository = Depends(get_order_repository),  # noqa: B008
    notifier: IOrderNotifier = Depends(get_notifier),  # noqa: B008
    task_runner: ITaskRunner = Depends(get_task_runner),  # noqa: B008
) -> UpdateOrderUseCase:
    return UpdateOrderUseCase(repository, notifier, task_runner)


def get_provide_quote_use_case(
    repository: IOrderRepository = Depends(get_order_repository),  # noqa: B008
    notifier: IOrderNotifier = Depends(get_notifier),  # noqa: B008
    task_runner: ITaskRunner = Depends(get_task_runner),  # noqa: B008
) -> ProvideQuoteUseCase:
    return ProvideQuoteUseCase(repository, notifier, task_runner)


def get_confirm_order_use_case(
    repository: IOrderRepository = Depends(get_order_repository),  # noqa: B008
    notifier: IOrderNotifier = Depends(get_notifier),  # noqa: B008
    task_runner: ITaskRunner = Depends(get_task_runner),  # noqa: B008
) -> ConfirmOrderUseCase:
    return ConfirmOrderUseCase(repository, notifier, task_runner)


def get_delete_order_use_case(
    repository: IOrderRepository = Depends(get_order_repository),  # noqa: B008
) -> DeleteOrderUseCase:
    return DeleteOrderUseCase(repository)


def get_order_stats_use_case(
    repository: IOrderRepository = Depends(get_order_repository),  # noqa: B008
) -> GetOrderStatsUseCase:
    return GetOrderStatsUseCase(repository)


def get_invoice_use_case(
    repository: IOrderRepository = Depends(get_order_repository),  # noqa: B008
    container: DependencyContainer = Depends(get_di_container),  # noqa: B008
) -> GetInvoiceUseCase:
    """Get GetInvoiceUseCase; shares the calculator used for PDF invoices."""
    return GetInvoiceUseCase(
        repository,
        calculator=container.get_invoice_calculator(),
        company_info=container.settings.company_info,
    )


def get_resend_notification_use_case(
    repository: IOrderRepository = Depends(get_order_repository),  # noqa: B008
    notifier: IOrderNotifier = Depends(get_notifier),  # noqa: B008
) -> ResendNotificationUseCase:
    return ResendNotificationUseCase(repository, notifier)
