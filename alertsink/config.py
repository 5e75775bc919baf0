"""Process-wide sink settings via environment variables and defaults."""

import logging

from pydantic_settings import BaseSettings

from alertsink import __version__


class Settings(BaseSettings):
    """Global configuration loaded from environment / ``.env`` file.

    These are connection defaults shared by every handler in the
    process; the per-handler destination lives in
    :class:`~alertsink.alertmanager.configuration.AlertConfiguration`.

    Attributes:
        default_timeout: Seconds allowed for connecting, writing, reading
            and acquiring a pooled connection on each delivery.
        user_agent: ``User-Agent`` header sent with every POST.
        log_level: Python logging level name used by
            :func:`configure_logging`.
    """

    default_timeout: float = 10.0
    user_agent: str = f"alertsink/{__version__}"
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "ALERTSINK_",
    }


def get_settings() -> Settings:
    """Return a cached :class:`Settings` instance.

    The instance is constructed once and reused for the lifetime of the
    process.
    """
    return _settings


def configure_logging(level: str | None = None) -> None:
    """Install a basic root handler for applications embedding the sink.

    The library itself never configures logging; this is a convenience
    for scripts and tests.

    Args:
        level: Logging level name. Defaults to ``Settings.log_level``.
    """
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )


_settings = Settings()
