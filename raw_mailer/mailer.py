"""Compose raw MIME messages and hand them to a transport."""

from __future__ import annotations

import re
from typing import Any, Dict, Optional, Sequence, Tuple

from .config import MailerConfig
from .errors import MailerConfigurationError
from .logger import get_logger
from .mime import build_raw_message
from .models import MailerMode, ReadyToSendEmail
from .prometheus import MailMetrics
from .templates import Jinja2TemplateRenderer
from .transports import build_transport

EMAIL_PATTERN = re.compile(r".+@.+\.[a-z]+")


def is_valid_email(address: Optional[str]) -> bool:
    """Permissive syntactic check: ``something@something.lowercase``.

    Not RFC 5321; callers rely on exactly this leniency.
    """
    return address is not None and EMAIL_PATTERN.search(address) is not None


class Mailer:
    """Render :class:`ReadyToSendEmail` values and submit them through the configured transport."""

    def __init__(
        self,
        config: MailerConfig,
        *,
        logger=None,
        metrics: MailMetrics | None = None,
    ):
        self.config = config
        self.logger = logger or get_logger()
        self.metrics = metrics

    @classmethod
    def from_settings(cls, settings: Dict[str, Any], **kwargs: Any) -> "Mailer":
        """Build a mailer from the mapping returned by :func:`~raw_mailer.config.load_settings`."""
        templates_path = settings.get("templates_path")
        config = MailerConfig(
            transport=build_transport(settings),
            default_sending_address=settings.get("default_from"),
            auto_bcc_addresses=settings.get("auto_bcc") or (),
            template_renderer=Jinja2TemplateRenderer(templates_path) if templates_path else None,
            mode=settings.get("mode") or MailerMode.NORMAL,
        )
        return cls(config, **kwargs)

    @staticmethod
    def valid_email(address: Optional[str]) -> bool:
        return is_valid_email(address)

    # ----------------------------------------------------------------- bodies
    async def fill_email_body(
        self,
        rts: ReadyToSendEmail,
        context: Dict[str, Any],
        html_template_name: str,
        txt_template_name: Optional[str] = None,
    ) -> ReadyToSendEmail:
        """Render the bodies of ``rts`` in place and return it."""
        renderer = self.config.template_renderer
        if renderer is None:
            raise MailerConfigurationError("No template renderer configured")
        rts.html_message = await renderer.render_template(html_template_name, context)
        rts.txt_message = (
            await renderer.render_template(txt_template_name, context) if txt_template_name else None
        )
        return rts

    async def fill_email_body_and_send(
        self,
        rts: ReadyToSendEmail,
        context: Dict[str, Any],
        html_template_name: str,
        txt_template_name: Optional[str] = None,
    ) -> Any:
        filled = await self.fill_email_body(rts, context, html_template_name, txt_template_name)
        return await self.send_email(filled)

    # --------------------------------------------------------------- dispatch
    def resolve_recipients(self, rts: ReadyToSendEmail) -> Optional[Tuple[str, Sequence[str], Sequence[str]]]:
        """Return ``(to_header, to, bcc)`` for the configured mode, or ``None`` when sending is suppressed.

        In auto-BCC-only mode the auto-BCC list takes the primary recipient
        slot under the ``Bcc`` header and no second ``Bcc`` line is written.
        """
        auto_bcc = self.config.auto_bcc_addresses
        match self.config.mode:
            case MailerMode.DISABLED:
                return None
            case MailerMode.AUTO_BCC_ONLY:
                if not auto_bcc:
                    return None
                return "Bcc", auto_bcc, ()
            case MailerMode.NORMAL:
                return "To", rts.destination_addresses, auto_bcc
        raise ValueError(f"Unsupported mailer mode: {self.config.mode!r}")

    def render(self, rts: ReadyToSendEmail) -> Optional[str]:
        """Return the raw MIME text ``send_email`` would submit, ``None`` when suppressed."""
        recipients = self.resolve_recipients(rts)
        if recipients is None:
            return None
        return self._build(rts, recipients)

    async def send_email(self, rts: ReadyToSendEmail) -> Any:
        """Assemble and submit ``rts``.

        Returns the transport response, or ``None`` when the mode suppressed
        the send or anything failed. Failures are logged, never raised.
        """
        try:
            recipients = self.resolve_recipients(rts)
            if recipients is None:
                self._report_suppressed(rts)
                return None
            if self.config.mode is MailerMode.AUTO_BCC_ONLY:
                self.logger.info(
                    "AutoBcc only mode, sending to %s instead of %s",
                    ", ".join(recipients[1]),
                    ", ".join(rts.destination_addresses or []),
                )
            raw_message = self._build(rts, recipients)
            response = await self.config.transport.submit_raw_message(raw_message)
        except Exception as exc:
            self.logger.error("Error while processing email: %s", exc, exc_info=True)
            if self.metrics is not None:
                self.metrics.inc_error()
            return None
        if self.metrics is not None:
            self.metrics.inc_sent()
        return response

    # ------------------------------------------------------------------ utils
    def _build(self, rts: ReadyToSendEmail, recipients: Tuple[str, Sequence[str], Sequence[str]]) -> str:
        to_header, to_addresses, bcc_addresses = recipients
        return build_raw_message(
            rts,
            sender=rts.from_address or self.config.default_sending_address,
            to_addresses=to_addresses,
            bcc_addresses=bcc_addresses,
            to_header=to_header,
        )

    def _report_suppressed(self, rts: ReadyToSendEmail) -> None:
        if self.config.mode is MailerMode.DISABLED:
            self.logger.info("Not sending email, mailer disabled. Mail was: %s", self._describe(rts))
            reason = "disabled"
        else:
            self.logger.info("Not sending email, mailer on bcc only mode and no bcc set: %s", self._describe(rts))
            reason = "no_auto_bcc"
        if self.metrics is not None:
            self.metrics.inc_suppressed(reason)

    @staticmethod
    def _describe(rts: ReadyToSendEmail) -> str:
        return rts.model_dump_json(by_alias=True, exclude={"attachments"})


__all__ = ["Mailer", "is_valid_email", "EMAIL_PATTERN"]
