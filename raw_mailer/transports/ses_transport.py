"""Deliver raw messages through Amazon SES ``SendRawEmail``."""

from typing import Any, Dict, Optional

import aioboto3

from .base import RawMailTransport


class SESTransport(RawMailTransport):
    """Open an SES client per call and submit the raw text as-is.

    SES derives the envelope from the ``From``/``To``/``Bcc`` headers and
    strips ``Bcc`` before delivery.
    """

    def __init__(self, *, region_name: Optional[str] = None, session: Optional[aioboto3.Session] = None):
        self.region_name = region_name
        self._session = session or aioboto3.Session()

    async def submit_raw_message(self, raw_message: str) -> Dict[str, Any]:
        async with self._session.client("ses", region_name=self.region_name) as ses:
            return await ses.send_raw_email(RawMessage={"Data": raw_message.encode("utf-8")})
