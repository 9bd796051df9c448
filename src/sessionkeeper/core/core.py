from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog

from sessionkeeper.config import Config
from sessionkeeper.core.modules.session.registry import SessionRegistry

logger = structlog.get_logger(__name__)


class Core:
    """Container providing config, the session registry and its background sweeper."""

    config: Config
    registry: SessionRegistry

    def __init__(self, config: Config, registry: SessionRegistry | None = None) -> None:
        self.config = config
        self.registry = registry if registry is not None else SessionRegistry(config.registry_config())
        self._sweeper: asyncio.Task[None] | None = None

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Start the periodic sweeper unless it is disabled."""
        interval = self.config.sweep_interval.total_seconds()
        if interval > 0:
            self._sweeper = asyncio.create_task(self._sweep_forever(interval))
            logger.info("session_sweeper_started", interval=interval)

    async def on_stop(self) -> None:
        """Cancel the sweeper and wait for it to finish."""
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._sweeper
        self._sweeper = None
        logger.info("session_sweeper_stopped")

    async def _sweep_forever(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            # Off the loop: the table lock may be held by threadpool handlers
            removed = await asyncio.to_thread(self.registry.sweep_expired)
            if removed:
                logger.debug("expired_sessions_swept", removed=removed)
