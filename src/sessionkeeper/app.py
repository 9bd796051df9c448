from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog

from sessionkeeper.config import Config
from sessionkeeper.core.core import Core
from sessionkeeper.core.modules.session.models import CookieSpec, SessionRecord, SessionToken
from sessionkeeper.core.modules.session.registry import SessionRegistry
from sessionkeeper.errors import AlreadyBoundError

logger = structlog.get_logger(__name__)


class App:
    """Facade for session operations used by the web layer."""

    def __init__(self, config: Config, registry: SessionRegistry | None = None) -> None:
        self._core = Core(config, registry)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def start_session(self) -> SessionRecord:
        """Create a guest session."""
        token = self._core.registry.create()
        logger.debug("session_created")
        return self._core.registry.lookup_by_token(token)

    def get_session(self, token: SessionToken) -> SessionRecord:
        """Get the live session for a token."""
        return self._core.registry.lookup_by_token(token)

    def bind_user(self, token: SessionToken, user_id: int) -> SessionRecord:
        """Attach a user to the session identified by token."""
        record = self._core.registry.lookup_by_token(token)
        try:
            self._core.registry.bind(record, user_id)
        except AlreadyBoundError:
            logger.info("session_bind_rejected", user_id=user_id)
            raise
        logger.info("session_bound", user_id=user_id)
        return record

    def end_session(self, token: SessionToken) -> None:
        """Delete the session for a token."""
        self._core.registry.delete(token)
        logger.debug("session_deleted")

    def session_cookie(self, record: SessionRecord) -> CookieSpec:
        return self._core.registry.emit_cookie(record)
