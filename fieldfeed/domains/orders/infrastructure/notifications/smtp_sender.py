"""
SMTP Email Sender

Mail transport over smtplib, run in a worker thread so the event loop
never blocks on the SMTP conversation.
"""

import asyncio
import logging
import smtplib
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from fieldfeed.core.domain import NotificationException
from fieldfeed.domains.orders.application.ports import EmailMessage

logger = logging.getLogger(__name__)


class SmtpEmailSender:
    """
    Sends ``EmailMessage`` objects through an SMTP relay.

    Connection, greeting and socket operations share ``timeout_seconds``.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str | None,
        password: str | None,
        use_tls: bool = True,
        timeout_seconds: int = 60,
        from_name: str = "Field to Feed Export",
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout_seconds = timeout_seconds
        self.from_name = from_name

    @property
    def is_configured(self) -> bool:
        return bool(self.username and self.password)

    @property
    def from_address(self) -> str:
        return formataddr((self.from_name, self.username or ""))

    def build_mime(self, message: EmailMessage) -> MIMEMultipart:
        mime = MIMEMultipart("mixed")
        mime["From"] = self.from_address
        mime["To"] = message.to
        mime["Subject"] = message.subject

        body = MIMEMultipart("alternative")
        if message.text:
            body.attach(MIMEText(message.text, "plain", "utf-8"))
        body.attach(MIMEText(message.html, "html", "utf-8"))
        mime.attach(body)

        for attachment in message.attachments:
            part = MIMEApplication(attachment.path.read_bytes(), _subtype=attachment.content_type.split("/")[-1])
            part.add_header("Content-Disposition", "attachment", filename=attachment.filename)
            mime.attach(part)

        return mime

    def _send_sync(self, message: EmailMessage) -> None:
        mime = self.build_mime(message)
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout_seconds) as server:
            if self.use_tls:
                server.starttls()
            server.login(self.username or "", self.password or "")
            server.send_message(mime)

    async def send(self, message: EmailMessage) -> None:
        if not self.is_configured:
            raise NotificationException(
                "Email transport is not configured (EMAIL_USER / EMAIL_PASS)",
                recipient=message.to,
            )

        try:
            await asyncio.to_thread(self._send_sync, message)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationException(
                f"SMTP delivery failed: {e}",
                recipient=message.to,
                original_error=e,
            ) from e

        logger.debug(f"Email sent to {message.to}: {message.subject}")
