from collections.abc import Callable
from datetime import datetime

from sessionkeeper.core.locks import ReadWriteLock
from sessionkeeper.core.modules.session.models import (
    GUEST_USER_ID,
    CookieSpec,
    RegistryConfig,
    SessionRecord,
    SessionToken,
)
from sessionkeeper.core.modules.session.tokens import generate_token
from sessionkeeper.errors import AlreadyBoundError, InvalidConfigError, NotFoundError, ValidationError
from sessionkeeper.utils import now


class SessionRegistry:
    """In-memory session table keyed by token, with a secondary index by user.

    Lookups share a read lock; every mutation takes the write lock. Records
    handed out are copies, so callers never touch the stored state directly.
    """

    def __init__(
        self,
        config: RegistryConfig,
        clock: Callable[[], datetime] = now,
        sweep_on_lookup: bool = True,
    ) -> None:
        if not config.secret:
            raise InvalidConfigError("Session secret must not be empty")
        if config.ttl.total_seconds() <= 0:
            raise InvalidConfigError("Session ttl must be positive")

        self._config = config
        self._clock = clock
        self._sweep_on_lookup = sweep_on_lookup
        self._lock = ReadWriteLock()
        self._sessions: dict[SessionToken, SessionRecord] = {}
        # Non-guest users only; inner dict keeps creation order
        self._tokens_by_user: dict[int, dict[SessionToken, None]] = {}

    @property
    def config(self) -> RegistryConfig:
        return self._config

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._sessions)

    def create(self, user_id: int = GUEST_USER_ID) -> SessionToken:
        """Create a session and return its token.

        Creation is unconditional; use bind() for single-session-per-user semantics.
        """
        with self._lock.write():
            token = generate_token(self._config.secret)
            while token in self._sessions:
                token = generate_token(self._config.secret)
            record = SessionRecord(token=token, expires_at=self._clock() + self._config.ttl, user_id=user_id)
            self._sessions[token] = record
            self._index(record)
        return token

    def lookup_by_token(self, token: str) -> SessionRecord:
        """Return a copy of the live session for token, sweeping expired sessions afterwards."""
        with self._lock.read():
            record = self._sessions.get(SessionToken(token))
            found = record.model_copy() if record is not None and record.is_live(self._clock()) else None

        if self._sweep_on_lookup:
            self.sweep_expired()

        if found is None:
            raise NotFoundError
        return found

    def lookup_by_user(self, user_id: int) -> SessionToken:
        """Return the token of the earliest live session owned by user_id."""
        with self._lock.read():
            token = self._find_live_user_token(user_id)
        if token is None:
            raise NotFoundError(f"No session found for user '{user_id}'")
        return token

    def bind(self, record: SessionRecord, user_id: int) -> None:
        """Attach user_id to the session, enforcing one live session per user.

        Raises AlreadyBoundError with the other session's token if the user
        already owns a live session. The caller's record is updated in place.
        """
        if user_id == GUEST_USER_ID:
            raise ValidationError("Cannot bind the guest user id")

        with self._lock.write():
            existing = self._find_live_user_token(user_id, exclude=record.token)
            if existing is not None:
                raise AlreadyBoundError(existing)

            stored = self._sessions.get(record.token)
            if stored is None or not stored.is_live(self._clock()):
                raise NotFoundError
            if stored.user_id == user_id:
                record.user_id = user_id
                return
            if not stored.is_guest:
                raise ValidationError("Session is already bound to another user")

            stored.user_id = user_id
            self._index(stored)
        record.user_id = user_id

    def delete(self, token: str) -> None:
        """Remove the session for token; unknown tokens are ignored."""
        with self._lock.write():
            self._remove(SessionToken(token))

    def sweep_expired(self) -> int:
        """Remove every session whose expiry is at or before now. Returns the number removed."""
        with self._lock.write():
            current = self._clock()
            expired = [token for token, record in self._sessions.items() if not record.is_live(current)]
            for token in expired:
                self._remove(token)
        return len(expired)

    def emit_cookie(self, record: SessionRecord) -> CookieSpec:
        return CookieSpec(name=self._config.cookie_name, value=record.token, expires=record.expires_at)

    def _find_live_user_token(self, user_id: int, exclude: SessionToken | None = None) -> SessionToken | None:
        current = self._clock()
        for token in self._tokens_by_user.get(user_id, {}):
            if token != exclude and self._sessions[token].is_live(current):
                return token
        return None

    def _index(self, record: SessionRecord) -> None:
        if not record.is_guest:
            self._tokens_by_user.setdefault(record.user_id, {})[record.token] = None

    def _remove(self, token: SessionToken) -> None:
        record = self._sessions.pop(token, None)
        if record is None or record.is_guest:
            return
        tokens = self._tokens_by_user.get(record.user_id)
        if tokens is not None:
            tokens.pop(token, None)
            if not tokens:
                del self._tokens_by_user[record.user_id]
