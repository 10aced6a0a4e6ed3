"""Raw message transports and the settings based factory."""

from typing import Any, Dict

from ..errors import MailerConfigurationError
from .base import RawMailTransport
from .ses_transport import SESTransport
from .smtp_transport import SMTPTransport, split_envelope


def build_transport(settings: Dict[str, Any]) -> RawMailTransport:
    """Return the transport named by ``settings["transport"]``."""
    name = (settings.get("transport") or "ses").lower()
    if name == "ses":
        return SESTransport(region_name=settings.get("ses_region"))
    if name == "smtp":
        host = settings.get("smtp_host")
        if not host:
            raise MailerConfigurationError("smtp_host must be configured for the smtp transport")
        return SMTPTransport(
            host,
            settings.get("smtp_port") or 25,
            user=settings.get("smtp_user"),
            password=settings.get("smtp_password"),
            use_tls=bool(settings.get("smtp_use_tls")),
            start_tls=bool(settings.get("smtp_start_tls")),
            timeout=float(settings.get("smtp_timeout") or 10.0),
        )
    raise MailerConfigurationError(f"Unknown transport: {name}")


__all__ = ["RawMailTransport", "SESTransport", "SMTPTransport", "build_transport", "split_envelope"]
