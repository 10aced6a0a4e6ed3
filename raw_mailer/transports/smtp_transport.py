"""Deliver raw messages to an SMTP relay."""

from __future__ import annotations

import asyncio
from email.parser import HeaderParser
from email.utils import getaddresses, parseaddr
from typing import Any, List, Optional, Tuple

import aiosmtplib

from .base import RawMailTransport


def split_envelope(raw_message: str) -> Tuple[str, List[str], str]:
    """Return ``(sender, recipients, data)`` for ``raw_message``.

    The envelope comes from the ``From``, ``To``, ``Cc`` and ``Bcc`` headers.
    ``data`` is the message with its ``Bcc`` header removed so blind copies
    stay blind, the way SES handles them.
    """
    headers = HeaderParser().parsestr(raw_message, headersonly=True)
    sender = parseaddr(headers.get("From", ""))[1]
    fields: List[str] = []
    for name in ("To", "Cc", "Bcc"):
        fields.extend(headers.get_all(name) or [])
    recipients = [addr for _, addr in getaddresses(fields) if addr]

    head, sep, body = raw_message.partition("\n\n")
    kept = [line for line in head.split("\n") if not line.lower().startswith("bcc:")]
    data = "\n".join(kept) + sep + body
    return sender, recipients, data


class SMTPTransport(RawMailTransport):
    """Open a connection per call, send, and quit."""

    def __init__(
        self,
        host: str,
        port: int = 25,
        *,
        user: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = False,
        start_tls: bool = False,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = int(port)
        self.user = user
        self.password = password
        self.use_tls = use_tls
        self.start_tls = start_tls
        self.timeout = timeout

    async def _connect(self) -> aiosmtplib.SMTP:
        """Open a new SMTP connection and authenticate if needed."""
        smtp = aiosmtplib.SMTP(
            hostname=self.host,
            port=self.port,
            start_tls=self.start_tls,
            use_tls=self.use_tls,
            timeout=self.timeout,
        )
        await smtp.connect()
        if self.user and self.password:
            await smtp.login(self.user, self.password)
        return smtp

    async def submit_raw_message(self, raw_message: str) -> Any:
        sender, recipients, data = split_envelope(raw_message)
        if not sender:
            raise ValueError("Raw message has no From address")
        if not recipients:
            raise ValueError("Raw message has no recipients")

        smtp = await asyncio.wait_for(self._connect(), timeout=self.timeout + 5.0)
        try:
            return await smtp.sendmail(sender, recipients, data.encode("utf-8"))
        finally:
            await smtp.quit()
