from datetime import timedelta

from pydantic_settings import BaseSettings

from sessionkeeper.core.modules.session.models import RegistryConfig


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    session_secret: str  # Key material mixed into every session token
    cookie_name: str = "sid"
    session_ttl: timedelta = timedelta(minutes=30)
    sweep_interval: timedelta = timedelta(seconds=60)  # Zero disables the background sweeper
    cookie_secure: bool = False  # Set to True in production with HTTPS

    model_config = {
        "env_file": [".env"],
        "env_prefix": "SESSIONKEEPER_",
        "extra": "ignore",
    }

    def registry_config(self) -> RegistryConfig:
        return RegistryConfig(cookie_name=self.cookie_name, secret=self.session_secret, ttl=self.session_ttl)
