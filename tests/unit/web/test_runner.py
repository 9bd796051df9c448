"""Tests for the uvicorn runner configuration."""

from uvicorn.config import LOGGING_CONFIG

from sessionkeeper.web.runner import build_log_config


class TestBuildLogConfig:
    def test_production_levels(self):
        log_config = build_log_config(debug=False)
        assert log_config["loggers"]["uvicorn"]["level"] == "INFO"
        assert log_config["loggers"]["uvicorn.access"]["level"] == "WARNING"

    def test_debug_levels(self):
        log_config = build_log_config(debug=True)
        assert log_config["loggers"]["uvicorn"]["level"] == "DEBUG"
        assert log_config["loggers"]["uvicorn.access"]["level"] == "INFO"

    def test_uvicorn_defaults_untouched(self):
        """Nested dicts are copied, not shared with uvicorn's module-level config."""
        original_fmt = LOGGING_CONFIG["formatters"]["default"]["fmt"]
        original_level = LOGGING_CONFIG["loggers"]["uvicorn.access"]["level"]

        build_log_config(debug=False)

        assert LOGGING_CONFIG["formatters"]["default"]["fmt"] == original_fmt
        assert LOGGING_CONFIG["loggers"]["uvicorn.access"]["level"] == original_level
