"""Outbound email: message model, providers and template rendering."""

from .providers import BaseEmailProvider, EmailDeliveryResult, create_email_provider
from .schemas import EmailMessage
from .templates import EmailTemplateRenderer, TemplateNotFoundError, get_template_renderer

__all__ = [
    "BaseEmailProvider",
    "EmailDeliveryResult",
    "EmailMessage",
    "EmailTemplateRenderer",
    "TemplateNotFoundError",
    "create_email_provider",
    "get_template_renderer",
]
