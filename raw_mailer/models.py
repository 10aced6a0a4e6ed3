"""Pydantic models describing an email ready for MIME assembly.

Models:
    - MailerMode: Dispatch behaviour of a :class:`~raw_mailer.mailer.Mailer`
    - EmailAttachment: Already base64-encoded attachment
    - ReadyToSendEmail: Recipients, subject, bodies and attachments
"""

from __future__ import annotations

import base64
import mimetypes
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MailerMode(str, Enum):
    """Dispatch modes supported by the mailer.

    Attributes:
        NORMAL: Send to the destination addresses, blind-copy the auto-BCC list.
        DISABLED: Never assemble nor send; every call returns ``None``.
        AUTO_BCC_ONLY: Send only to the auto-BCC list, ignoring destinations.
    """

    NORMAL = "normal"
    DISABLED = "disabled"
    AUTO_BCC_ONLY = "auto_bcc_only"

    @classmethod
    def parse(cls, value: Any) -> "MailerMode":
        """Return the mode matching ``value``.

        Accepts members, values and names in any case, with ``-`` or no
        separator at all (``"AutoBccOnly"``, ``"auto-bcc-only"``).
        """
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower().replace("-", "_")
        for mode in cls:
            if normalized in (mode.value, mode.value.replace("_", "")):
                return mode
        raise ValueError(f"Unknown mailer mode: {value!r}")


class EmailAttachment(BaseModel):
    """Attachment whose payload is already base64 encoded."""

    model_config = ConfigDict(populate_by_name=True)

    content_type: str = Field(alias="contentType")
    filename: str
    base64_data: str = Field(alias="base64Data")

    @classmethod
    def from_bytes(cls, filename: str, data: bytes, content_type: str | None = None) -> "EmailAttachment":
        """Build an attachment from raw bytes, guessing the MIME type from ``filename``."""
        if not content_type:
            guessed, _ = mimetypes.guess_type(filename)
            content_type = guessed or "application/octet-stream"
        return cls(
            content_type=content_type,
            filename=filename,
            base64_data=base64.b64encode(data).decode("ascii"),
        )


class ReadyToSendEmail(BaseModel):
    """Structured description of an outgoing email prior to MIME assembly."""

    model_config = ConfigDict(populate_by_name=True)

    destination_addresses: list[str] = Field(default_factory=list, alias="destinationAddresses")
    from_address: str | None = Field(default=None, alias="fromAddress")
    subject: str = ""
    html_message: str | None = Field(default=None, alias="htmlMessage")
    txt_message: str | None = Field(default=None, alias="txtMessage")
    attachments: list[EmailAttachment] | None = None


__all__ = ["MailerMode", "EmailAttachment", "ReadyToSendEmail"]
