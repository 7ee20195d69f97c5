"""Email delivery backends."""

from .base import BaseEmailProvider, EmailDeliveryResult, EmailProvider
from .console import ConsoleProvider
from .factory import create_email_provider
from .sendgrid import SendGridProvider
from .smtp import SMTPProvider

__all__ = [
    "BaseEmailProvider",
    "ConsoleProvider",
    "EmailDeliveryResult",
    "EmailProvider",
    "SMTPProvider",
    "SendGridProvider",
    "create_email_provider",
]
