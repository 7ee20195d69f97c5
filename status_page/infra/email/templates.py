"""Email template rendering with Jinja2.

Templates live in ``status_page/templates/email`` as ``<name>.html`` and
``<name>.txt`` pairs. Date helpers are registered as filters so templates
can format timestamps the same way the API does.
"""

from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from status_page.utils.dates import format_date_time, format_duration

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent.parent / "templates" / "email"


class TemplateNotFoundError(Exception):
    """Raised when neither an HTML nor a text template exists for a name."""


class EmailTemplateRenderer:
    """Jinja2-based email template renderer.

    Example:
        renderer = EmailTemplateRenderer()
        html, text = renderer.render("verify_subscription", verify_url=url)
    """

    def __init__(
        self,
        template_dir: Path | str = TEMPLATE_DIR,
        default_context: dict[str, Any] | None = None,
    ) -> None:
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["date_time"] = format_date_time
        self.env.filters["duration"] = format_duration
        self.default_context = default_context or {}

        logger.debug(
            "Email template renderer initialized",
            extra={"template_dir": str(self.template_dir)},
        )

    def render(self, template_name: str, **context: Any) -> tuple[str | None, str | None]:
        """Render the HTML and text variants of a template.

        Args:
            template_name: Name of the template (without extension).
            **context: Variables to pass to the template.

        Returns:
            Tuple of (html_content, text_content). A missing variant is None.

        Raises:
            TemplateNotFoundError: If neither variant exists.
        """
        full_context = {**self.default_context, **context}

        html_content = self._render_variant(f"{template_name}.html", full_context)
        text_content = self._render_variant(f"{template_name}.txt", full_context)

        if html_content is None and text_content is None:
            msg = (
                f"No template found for: {template_name} "
                f"(looked for {template_name}.html and {template_name}.txt)"
            )
            raise TemplateNotFoundError(msg)
        return html_content, text_content

    def _render_variant(self, filename: str, context: dict[str, Any]) -> str | None:
        try:
            template = self.env.get_template(filename)
        except TemplateNotFound:
            logger.debug("No template found", extra={"template": filename})
            return None
        return template.render(**context)

    def template_exists(self, template_name: str) -> bool:
        return any(
            (self.template_dir / f"{template_name}.{ext}").is_file() for ext in ("html", "txt")
        )


@lru_cache(maxsize=1)
def get_template_renderer() -> EmailTemplateRenderer:
    """Shared renderer over the packaged templates."""
    return EmailTemplateRenderer()
