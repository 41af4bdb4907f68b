"""Dependency injection for the HTTP layer.

Route handlers never reach for module-level state: the key store lives on
``app.state`` and is handed out per request through :func:`get_keystore`, and
logging/settings arrive bundled in a lightweight :class:`RequestContext`.
"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Optional

from fastapi import Depends, Request

from shortener.config import Settings
from shortener.keystore import KeyStore

__all__ = ["RequestContext", "get_app_settings", "get_keystore", "get_request_context"]

LOGGER_NAME = "shortener"


# ============================================================================
# LIGHTWEIGHT REQUEST CONTEXT
# ============================================================================


@dataclass
class RequestContext:
    """Per-request tracking data plus shared settings.

    Attributes:
        settings: Cached application settings
        request_id: Unique identifier for this request
        client_ip: Client IP address
        user_agent: Client user agent string
        start_time: Request start timestamp
    """

    settings: Settings
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    client_ip: Optional[str] = None
    user_agent: Optional[str] = None
    start_time: float = field(default_factory=lambda: time.time())

    @property
    def logger(self) -> logging.LoggerAdapter:
        """Get shared logger with request context."""
        return logging.LoggerAdapter(
            logging.getLogger(LOGGER_NAME),
            {
                "request_id": self.request_id,
                "client_ip": self.client_ip,
                "user_agent": self.user_agent,
            },
        )

    def get_duration(self) -> float:
        """Get request duration in milliseconds."""
        return (time.time() - self.start_time) * 1000

    def short_url(self, short_key: str) -> str:
        return f"{self.settings.BASE_URL.rstrip('/')}/short/{short_key}"


# ============================================================================
# DEPENDENCY FUNCTIONS
# ============================================================================


def get_keystore(request: Request) -> KeyStore:
    """Return the key store owned by the running application."""
    return request.app.state.keystore


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running application was built with."""
    return request.app.state.settings


def get_request_context(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> RequestContext:
    client_ip = request.client.host if request.client else None
    request_id = request.headers.get("x-request-id")

    ctx = RequestContext(
        settings=settings,
        client_ip=client_ip,
        user_agent=request.headers.get("user-agent"),
    )
    if request_id:
        ctx.request_id = request_id
    return ctx
