"""Shared pytest fixtures."""

from datetime import datetime, timedelta

import pytest

from sessionkeeper.config import Config
from sessionkeeper.core.modules.session.models import RegistryConfig
from sessionkeeper.core.modules.session.registry import SessionRegistry
from sessionkeeper.utils import now


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current += delta


@pytest.fixture
def clock():
    return FakeClock(now())


@pytest.fixture
def registry_config():
    return RegistryConfig(cookie_name="sid", secret="s3cret", ttl=timedelta(minutes=30))


@pytest.fixture
def registry(registry_config, clock):
    return SessionRegistry(registry_config, clock=clock)


@pytest.fixture
def config():
    """Application config independent of the process environment."""
    return Config(
        _env_file=None,
        session_secret="s3cret",
        cookie_name="sid",
        session_ttl=timedelta(minutes=30),
        sweep_interval=timedelta(0),
    )
