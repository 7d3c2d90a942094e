"""
Logging setup and event logger for authentication outcomes.
"""
from datetime import datetime, timezone
from typing import Optional
from fastapi import Request
import sys
import logging
import os

from ..config import Settings

logger = logging.getLogger("account_service.auth_events")


ALLOWED_EVENT_TYPES = {
    "register_success",
    "register_duplicate",
    "login_success",
    "login_failure",
    "profile_update",
}


def configure_logging(settings: Settings) -> None:
    """
    Configure stdout logging and, when LOG_DIR is set, a file handler.
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    # Continue with stdout only if the log directory is not writable
    if settings.LOG_DIR:
        try:
            os.makedirs(settings.LOG_DIR, exist_ok=True)
            handlers.append(logging.FileHandler(os.path.join(settings.LOG_DIR, "auth_events.log")))
        except OSError as e:
            print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def client_ip(request: Request) -> Optional[str]:
    """Client address, falling back to the first X-Forwarded-For entry."""
    if request.client and request.client.host:
        return request.client.host

    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return None


def log_auth_event(
    event_type: str,
    request: Request,
    account_id: Optional[str] = None,
    email: Optional[str] = None,
) -> None:
    """
    Write one log line for an authentication outcome.

    Args:
        event_type: One of ALLOWED_EVENT_TYPES
        request: FastAPI Request object
        account_id: Account the event concerns, when known
        email: Email presented by the client, when relevant

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    level = logging.WARNING if event_type == "login_failure" else logging.INFO
    logger.log(
        level,
        "AUTH %s account_id=%s email=%s ip=%s user_agent=%s timestamp=%s",
        event_type,
        account_id,
        email,
        client_ip(request),
        request.headers.get("user-agent"),
        datetime.now(timezone.utc).isoformat(),
    )
