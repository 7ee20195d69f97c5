"""Notification channels."""

from .base import DeliveryResult, NotificationChannel, WebhookChannel
from .discord import DiscordChannel
from .email import EmailChannel
from .slack import SlackChannel

__all__ = [
    "DeliveryResult",
    "DiscordChannel",
    "EmailChannel",
    "NotificationChannel",
    "SlackChannel",
    "WebhookChannel",
]
