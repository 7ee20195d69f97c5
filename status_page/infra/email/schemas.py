"""Email message model handed to providers."""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field


class EmailMessage(BaseModel):
    """A single outbound email.

    Sender fields fall back to the provider's configured defaults when unset.

    Example:
        message = EmailMessage(
            to=["user@example.com"],
            subject="Verify your subscription",
            body_text="...",
            body_html="<p>...</p>",
        )
    """

    to: list[EmailStr] = Field(min_length=1, description="Recipient addresses")
    from_email: EmailStr | None = Field(default=None, description="Override sender address")
    from_name: str | None = Field(default=None, max_length=100)
    subject: str = Field(min_length=1, max_length=998)
    body_text: str | None = None
    body_html: str | None = None

    @property
    def all_recipients(self) -> list[str]:
        return [str(address) for address in self.to]
