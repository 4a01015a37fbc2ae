# portfolio_api/utils/email_service.py

import asyncio
import logging
from abc import ABC, abstractmethod
from email.message import EmailMessage
from email.utils import formataddr

import aiosmtplib

from portfolio_api.core.config import Settings
from portfolio_api.schemas.contacts import ContactCreate
from portfolio_api.utils.email_templates import EmailTemplate

logger = logging.getLogger(__name__)

SUBJECT_PREFIX = "Portfolio Contact: "


class DeliveryError(Exception):
    """Raised when a contact email could not be handed to the mail transport"""
    pass


class EmailTransport(ABC):
    """Black-box mail sending capability: one call, one delivery attempt"""

    name = "transport"

    @abstractmethod
    async def send(self, message: EmailMessage) -> None:
        ...


class SmtpTransport(EmailTransport):
    name = "smtp"

    def __init__(self, hostname: str, port: int, username: str | None, password: str | None,
                 encryption: str = "starttls", timeout: float = 15.0):
        self.hostname = hostname
        self.port = port
        self.username = username
        self.password = password
        self.encryption = encryption
        self.timeout = timeout

    async def send(self, message: EmailMessage) -> None:
        await aiosmtplib.send(
            message,
            hostname=self.hostname,
            port=self.port,
            username=self.username,
            password=self.password,
            use_tls=(self.encryption == "ssl"),
            start_tls=(self.encryption == "starttls"),
            timeout=self.timeout,
        )
        logger.info(f"Email sent via {self.hostname}:{self.port} to {message['To']}")


class LoggingTransport(EmailTransport):
    """Used when no SMTP credentials are configured; nothing leaves the process"""

    name = "logging"

    async def send(self, message: EmailMessage) -> None:
        logger.info(
            f"Mail transport not configured, email to {message['To']} "
            f"with subject '{message['Subject']}' was logged instead of sent"
        )
        logger.debug(message.get_body(preferencelist=("plain",)).get_content())


def build_transport(settings: Settings) -> EmailTransport:
    if settings.smtp_configured:
        return SmtpTransport(
            hostname=settings.MAIL_HOST,
            port=settings.MAIL_PORT,
            username=settings.MAIL_USERNAME,
            password=settings.MAIL_PASSWORD,
            encryption=settings.MAIL_ENCRYPTION,
            timeout=settings.MAIL_TIMEOUT_SECONDS,
        )
    logger.warning("MAIL_HOST/MAIL_USERNAME/MAIL_PASSWORD not set, contact emails will only be logged")
    return LoggingTransport()


class ContactEmailNotifier:
    """
    Renders a contact submission into an email for the site owner and hands it
    to the transport. Any transport error or timeout becomes a DeliveryError.
    """

    def __init__(self, transport: EmailTransport, sender: str, recipient: str,
                 sender_name: str | None = None, timeout: float = 15.0):
        self.transport = transport
        self.sender = sender
        self.recipient = recipient
        self.sender_name = sender_name
        self.timeout = timeout

    def build_message(self, data: ContactCreate) -> EmailMessage:
        fields = dict(name=data.name, email=str(data.email), subject=data.subject, message=data.message)

        message = EmailMessage()
        message["From"] = formataddr((self.sender_name, self.sender)) if self.sender_name else self.sender
        message["To"] = self.recipient
        # header values cannot carry line breaks
        message["Subject"] = f"{SUBJECT_PREFIX}{' '.join(data.subject.splitlines())}"
        message["Reply-To"] = fields["email"]
        message.set_content(EmailTemplate.contact_notification_text(**fields))
        message.add_alternative(EmailTemplate.contact_notification_html(**fields), subtype="html")
        return message

    async def send(self, data: ContactCreate) -> None:
        message = self.build_message(data)
        try:
            await asyncio.wait_for(self.transport.send(message), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Email delivery via {self.transport.name} timed out after {self.timeout}s")
            raise DeliveryError("Failed to send email. Please try again later.") from e
        except Exception as e:
            logger.error(f"Email sending error: {e}")
            raise DeliveryError("Failed to send email. Please try again later.") from e


def build_email_notifier(settings: Settings, transport: EmailTransport | None = None) -> ContactEmailNotifier:
    transport = transport or build_transport(settings)
    logger.info(f"Contact emails go to {settings.mail_recipient} using the {transport.name} transport")
    return ContactEmailNotifier(
        transport=transport,
        sender=settings.mail_sender,
        recipient=settings.mail_recipient,
        sender_name=settings.MAIL_FROM_NAME,
        timeout=settings.MAIL_TIMEOUT_SECONDS,
    )
