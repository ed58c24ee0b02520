"""
Dependency Injection Container

Wires the concrete adapters (SQLAlchemy repositories, SMTP sender, PDF
renderer) to the ports the order use cases depend on.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from fieldfeed.config.settings import Settings, get_settings
from fieldfeed.core.background_tasks import BackgroundTaskRunner
from fieldfeed.domains.orders.application.ports import IEmailSender, IOrderNotifier
from fieldfeed.domains.orders.domain.services import InvoiceCalculator
from fieldfeed.domains.orders.infrastructure.invoices import InvoicePdfGenerator, InvoiceTempStorage
from fieldfeed.domains.orders.infrastructure.notifications import (
    EmailTemplateRenderer,
    OrderNotificationDispatcher,
    SmtpEmailSender,
)
from fieldfeed.domains.orders.infrastructure.repositories import (
    SQLAlchemyAdminRepository,
    SQLAlchemyOrderRepository,
)
from fieldfeed.services.token_service import TokenService

logger = logging.getLogger(__name__)


class DependencyContainer:
    """
    Dependency Injection Container.

    Stateless collaborators (task runner, notifier, renderers) are created
    once per application; repositories are created per request session.
    """

    def __init__(self, settings: Settings | None = None, email_sender: IEmailSender | None = None):
        """
        Initialize container.

        Args:
            settings: Application settings (uses default if not provided)
            email_sender: Transport override, e.g. a recording fake in tests
        """
        self.settings = settings or get_settings()

        # Singletons
        self._email_sender = email_sender
        self._task_runner: BackgroundTaskRunner | None = None
        self._invoice_calculator: InvoiceCalculator | None = None
        self._notifier: IOrderNotifier | None = None
        self._token_service: TokenService | None = None

        logger.info("DependencyContainer initialized")

    # ============================================================
    # SINGLETONS (Shared Resources)
    # ============================================================

    def get_task_runner(self) -> BackgroundTaskRunner:
        if self._task_runner is None:
            self._task_runner = BackgroundTaskRunner()
        return self._task_runner

    def get_invoice_calculator(self) -> InvoiceCalculator:
        if self._invoice_calculator is None:
            self._invoice_calculator = InvoiceCalculator(
                fallback_tax_rate=self.settings.INVOICE_TAX_RATE,
                due_days=self.settings.INVOICE_DUE_DAYS,
                currency=self.settings.DEFAULT_CURRENCY,
            )
        return self._invoice_calculator

    def get_email_sender(self) -> IEmailSender:
        if self._email_sender is None:
            self._email_sender = SmtpEmailSender(
                host=self.settings.EMAIL_HOST,
                port=self.settings.EMAIL_PORT,
                username=self.settings.EMAIL_USER,
                password=self.settings.EMAIL_PASS,
                use_tls=self.settings.EMAIL_USE_TLS,
                timeout_seconds=self.settings.EMAIL_TIMEOUT_SECONDS,
                from_name=self.settings.EMAIL_FROM_NAME,
            )
        return self._email_sender

    def get_notifier(self) -> IOrderNotifier:
        """
        Get the order notification dispatcher (singleton).

        The dispatcher keeps no per-order state, so one instance serves
        every request and every operator resend.
        """
        if self._notifier is None:
            company_info = self.settings.company_info
            self._notifier = OrderNotificationDispatcher(
                sender=self.get_email_sender(),
                templates=EmailTemplateRenderer(company_info, currency=self.settings.DEFAULT_CURRENCY),
                invoice_renderer=InvoicePdfGenerator(self.get_invoice_calculator(), company_info),
                temp_storage=InvoiceTempStorage(self.settings.INVOICE_TEMP_DIR),
                admin_email=self.settings.admin_notification_email,
                enabled=self.settings.NOTIFICATIONS_ENABLED,
            )
        return self._notifier

    def get_token_service(self) -> TokenService:
        if self._token_service is None:
            self._token_service = TokenService(self.settings)
        return self._token_service

    # ============================================================
    # REPOSITORIES (per session)
    # ============================================================

    def create_order_repository(self, db: AsyncSession) -> SQLAlchemyOrderRepository:
        return SQLAlchemyOrderRepository(session=db)

    def create_admin_repository(self, db: AsyncSession) -> SQLAlchemyAdminRepository:
        return SQLAlchemyAdminRepository(session=db)
