"""Mailer configuration and the INI/environment settings loader."""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional

from dotenv import load_dotenv

from .models import MailerMode
from .templates import TemplateRenderer

DEFAULT_CONFIG_PATH = "config.ini"


@dataclass(frozen=True)
class MailerConfig:
    """Collaborators and addresses shared by every send of a mailer.

    ``transport`` is required; ``auto_bcc_addresses`` accepts any iterable
    and is stored as a tuple; ``mode`` accepts anything
    :meth:`MailerMode.parse` understands.
    """

    transport: Any
    default_sending_address: Optional[str] = None
    auto_bcc_addresses: tuple[str, ...] = field(default_factory=tuple)
    template_renderer: Optional[TemplateRenderer] = None
    mode: MailerMode = MailerMode.NORMAL

    def __post_init__(self) -> None:
        if self.transport is None:
            raise ValueError("transport is required")
        object.__setattr__(self, "auto_bcc_addresses", tuple(self.auto_bcc_addresses or ()))
        object.__setattr__(self, "mode", MailerMode.parse(self.mode))


def split_addresses(value: Any) -> list[str]:
    """Split a comma separated string (or iterable) into trimmed addresses."""
    if not value:
        return []
    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    else:
        items = value
    return [str(item).strip() for item in items if item and str(item).strip()]


def load_settings(config_path: str | None = None) -> dict[str, Any]:
    """
    Load configuration from an INI file (default: config.ini) with environment variables as fallbacks.

    Environment variables (all prefixed with RMAIL_):
      RMAIL_CONFIG - Path to config.ini file (default: config.ini)
      RMAIL_LOG_LEVEL - Logging level (default: INFO)
      RMAIL_DEFAULT_FROM - Sender used when an email has no from address
      RMAIL_AUTO_BCC - Comma separated addresses blind-copied on every send
      RMAIL_MODE - normal, disabled or auto_bcc_only (default: normal)
      RMAIL_TEMPLATES_PATH - Directory holding the Jinja2 templates
      RMAIL_TRANSPORT - ses or smtp (default: ses)
      RMAIL_SES_REGION - AWS region of the SES endpoint
      RMAIL_SMTP_HOST, RMAIL_SMTP_PORT, RMAIL_SMTP_USER, RMAIL_SMTP_PASSWORD,
      RMAIL_SMTP_USE_TLS, RMAIL_SMTP_START_TLS, RMAIL_SMTP_TIMEOUT - SMTP relay

    Config file sections/keys:
      [mailer] default_from, auto_bcc, mode, templates_path
      [transport] name
      [ses] region
      [smtp] host, port, user, password, use_tls, start_tls, timeout
      [logging] level
    """
    load_dotenv()
    path = Path(config_path or os.getenv("RMAIL_CONFIG", DEFAULT_CONFIG_PATH))
    parser = configparser.ConfigParser()
    parser.read(path)

    def get(section: str, option: str, env: str, default: str | None = None) -> str | None:
        if parser.has_option(section, option):
            return parser.get(section, option)
        return os.getenv(env, default)

    def get_bool(section: str, option: str, env: str, default: bool = False) -> bool:
        value = get(section, option, env)
        if value is None:
            return default
        normalized = str(value).strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        return default

    return {
        "default_from": get("mailer", "default_from", "RMAIL_DEFAULT_FROM"),
        "auto_bcc": split_addresses(get("mailer", "auto_bcc", "RMAIL_AUTO_BCC")),
        "mode": MailerMode.parse(get("mailer", "mode", "RMAIL_MODE", MailerMode.NORMAL.value)),
        "templates_path": get("mailer", "templates_path", "RMAIL_TEMPLATES_PATH"),
        "transport": (get("transport", "name", "RMAIL_TRANSPORT", "ses") or "ses").strip().lower(),
        "ses_region": get("ses", "region", "RMAIL_SES_REGION"),
        "smtp_host": get("smtp", "host", "RMAIL_SMTP_HOST"),
        "smtp_port": int(get("smtp", "port", "RMAIL_SMTP_PORT", "25")),
        "smtp_user": get("smtp", "user", "RMAIL_SMTP_USER"),
        "smtp_password": get("smtp", "password", "RMAIL_SMTP_PASSWORD"),
        "smtp_use_tls": get_bool("smtp", "use_tls", "RMAIL_SMTP_USE_TLS"),
        "smtp_start_tls": get_bool("smtp", "start_tls", "RMAIL_SMTP_START_TLS"),
        "smtp_timeout": float(get("smtp", "timeout", "RMAIL_SMTP_TIMEOUT", "10")),
        "log_level": (get("logging", "level", "RMAIL_LOG_LEVEL", "INFO") or "INFO").upper(),
    }


__all__ = ["MailerConfig", "load_settings", "split_addresses"]
