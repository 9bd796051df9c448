"""Session table models."""

from datetime import datetime, timedelta
from typing import Final, NewType

from pydantic import BaseModel, ConfigDict

SessionToken = NewType("SessionToken", str)

GUEST_USER_ID: Final = -1  # Reserved "no user" marker, never a real identity


class SessionRecord(BaseModel):
    """One session in the registry.

    expires_at is fixed at creation and never extended by reads.
    """

    token: SessionToken
    expires_at: datetime
    user_id: int = GUEST_USER_ID

    @property
    def is_guest(self) -> bool:
        return self.user_id == GUEST_USER_ID

    def is_live(self, at: datetime) -> bool:
        return self.expires_at > at


class CookieSpec(BaseModel):
    """Transport cookie derived from a session record."""

    name: str
    value: str
    expires: datetime


class RegistryConfig(BaseModel):
    """Settings a registry is constructed with; immutable afterwards."""

    cookie_name: str
    secret: str
    ttl: timedelta

    model_config = ConfigDict(frozen=True)
