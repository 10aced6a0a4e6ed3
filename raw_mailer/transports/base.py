"""Base protocol for raw message transports."""

from typing import Any


class RawMailTransport:
    """Interface implemented by concrete transports."""

    async def submit_raw_message(self, raw_message: str) -> Any:
        """Deliver the fully formed MIME text and return the provider response."""
        raise NotImplementedError
