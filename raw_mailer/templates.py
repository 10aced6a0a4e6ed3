"""Template rendering used to fill email bodies before sending."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Sequence

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from .errors import MailerConfigurationError


class TemplateRenderer:
    """Interface implemented by concrete template renderers."""

    async def render_template(self, name: str, context: Dict[str, Any]) -> str:
        """Return the rendered template ``name`` for the given ``context``."""
        raise NotImplementedError


class Jinja2TemplateRenderer(TemplateRenderer):
    """Render templates stored on disk with Jinja2."""

    def __init__(
        self,
        templates_path: str | Path,
        *,
        autoescape_extensions: Sequence[str] = ("html", "xml"),
    ):
        self.templates_path = Path(templates_path)
        self._environment = Environment(
            loader=FileSystemLoader(self.templates_path),
            autoescape=select_autoescape(list(autoescape_extensions)),
            trim_blocks=True,
            lstrip_blocks=True,
            enable_async=True,
        )

    async def render_template(self, name: str, context: Dict[str, Any]) -> str:
        try:
            template = self._environment.get_template(name)
        except TemplateNotFound as exc:
            raise MailerConfigurationError(f"Email template '{name}' not found") from exc
        return await template.render_async(**(context or {}))


__all__ = ["TemplateRenderer", "Jinja2TemplateRenderer"]
