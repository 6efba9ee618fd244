"""Process-wide configuration and logging setup."""

from publisher.core.config import Settings, get_settings
from publisher.core.logging import bind_invocation_id, configure_structlog

__all__ = ["Settings", "get_settings", "bind_invocation_id", "configure_structlog"]
