"""Standard JWT claims plus the authenticated (and proxying) user.

In a sudo situation the effective user goes in ``user`` and the real caller
in ``proxy``: if alice runs as bob, ``user`` is bob and ``proxy`` is alice.
Most code can then behave as if bob were logged in, and only code that cares
about impersonation (audit trails) needs to look at ``proxy``.
"""

from __future__ import annotations

import time
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

UserT = TypeVar("UserT")


class CommonJwtToken(BaseModel, Generic[UserT]):
    """Type-safe claim set; extra claims are kept so consumers can extend it."""

    model_config = ConfigDict(extra="allow")

    exp: int = Field(description="Expiration time (epoch seconds)")
    iat: int = Field(description="Issued at (epoch seconds)")
    iss: str = Field(description="Issuer")
    sub: str = Field(description="Subject")
    aud: str = Field(description="Audience")
    jti: str = Field(description="Unique ID for the token")

    user: Optional[UserT] = None
    proxy: Optional[UserT] = None

    roles: list[str] = Field(default_factory=list)

    def is_expired(self, now: Optional[float] = None) -> bool:
        current = time.time() if now is None else now
        return current >= self.exp

    def is_proxied(self) -> bool:
        return self.proxy is not None

    def has_role(self, role: str) -> bool:
        return role in self.roles


__all__ = ["CommonJwtToken"]
