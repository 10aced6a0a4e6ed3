"""Fixed-shape ``multipart/mixed`` message builder.

The output is byte-for-byte stable: a constant boundary, ``\\n`` line endings
and a closing delimiter without the trailing ``--``. Receivers and snapshot
tests depend on this exact text, so it is built by plain concatenation rather
than through :mod:`email`.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from .models import EmailAttachment, ReadyToSendEmail

BOUNDARY = "NextPart"
BASE64_LINE_LENGTH = 76


def wrap_base64(data: str, width: int = BASE64_LINE_LENGTH) -> str:
    """Insert a newline after every complete run of ``width`` characters."""
    return re.sub(r"(.{%d})" % width, r"\1\n", data, flags=re.DOTALL)


def format_address_line(header: str, addresses: Iterable[str]) -> str:
    """Return ``"<header>: a, b\\n"``."""
    return f"{header}: {', '.join(addresses)}\n"


def _part_delimiter() -> str:
    return f"\n\n--{BOUNDARY}\n"


def _attachment_part(attachment: EmailAttachment) -> str:
    return (
        _part_delimiter()
        + f'Content-Type: {attachment.content_type}; name="{attachment.filename}"\n'
        + "Content-Transfer-Encoding: base64\n"
        + "Content-Disposition: attachment\n\n"
        + wrap_base64(attachment.base64_data)
        + "\n\n"
    )


def build_raw_message(
    rts: ReadyToSendEmail,
    *,
    sender: Optional[str],
    to_addresses: Sequence[str],
    bcc_addresses: Sequence[str] = (),
    to_header: str = "To",
) -> str:
    """Render ``rts`` into the raw text handed to the transport.

    ``to_addresses`` and ``bcc_addresses`` are already resolved by the caller
    according to the dispatch mode; an empty ``bcc_addresses`` omits the
    ``Bcc`` header entirely. ``to_header`` names the primary recipient line,
    which is ``Bcc`` when the auto-BCC list replaces the destinations.
    A missing sender is written as ``null``.
    """
    raw = f"From: {'null' if sender is None else sender}\n"
    raw += format_address_line(to_header, to_addresses)
    if bcc_addresses:
        raw += format_address_line("Bcc", bcc_addresses)
    raw += f"Subject: {rts.subject}\n"
    raw += "MIME-Version: 1.0\n"
    raw += f'Content-Type: multipart/mixed; boundary="{BOUNDARY}"\n'
    if rts.html_message:
        raw += _part_delimiter()
        raw += "Content-Type: text/html\n\n"
        raw += rts.html_message
    if rts.txt_message:
        raw += _part_delimiter()
        raw += "Content-Type: text/plain\n\n"
        raw += rts.txt_message
    for attachment in rts.attachments or []:
        raw += _attachment_part(attachment)
    raw += _part_delimiter()
    return raw


__all__ = ["BOUNDARY", "BASE64_LINE_LENGTH", "build_raw_message", "format_address_line", "wrap_base64"]
