"""Link access logging using Loguru's built-in async features."""

import os
from datetime import datetime, timezone
from typing import Optional

from loguru import logger

from shortl.core.config import settings

access_logger = None
_sink_ids: list = []


def setup_access_logging():
    """Configure the access logger that records every resolved redirect.

    Records are bound with ``event_type="link_access"`` and written through
    loguru's internal queue to a text and a JSON file.
    """
    global access_logger

    os.makedirs(settings.LOG_DIR, exist_ok=True)

    access_logger = logger.bind(event_type="link_access")

    for sink_id in _sink_ids:
        try:
            logger.remove(sink_id)
        except ValueError:
            # already dropped by setup_logging()
            pass
    _sink_ids.clear()

    only_access = lambda record: record["extra"].get("event_type") == "link_access"
    base_name = os.path.splitext(settings.ACCESS_LOG_FILENAME)[0]

    _sink_ids.append(logger.add(
        os.path.join(settings.LOG_DIR, settings.ACCESS_LOG_FILENAME),
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | IP:{extra[ip]} | Token:{extra[token]} | {message}",
        rotation=settings.LOG_ROTATION,
        retention=settings.LOG_RETENTION,
        enqueue=True,
        level="INFO",
        backtrace=False,
        diagnose=False,
        filter=only_access,
    ))
    _sink_ids.append(logger.add(
        os.path.join(settings.LOG_DIR, f"{base_name}.json"),
        serialize=True,
        enqueue=True,
        level="INFO",
        filter=only_access,
    ))

    return access_logger


def log_link_access(token: str, ip_address: Optional[str], user_agent: str = "", long_url: str = ""):
    """
    Log a resolved redirect.

    Args:
        token: The short token that was requested
        ip_address: The client's IP address
        user_agent: Optional user agent string
        long_url: The target the visitor was redirected to
    """
    if not settings.ACCESS_LOG_ENABLED:
        return
    if access_logger is None:
        setup_access_logging()

    access_logger.bind(
        ip=ip_address or "unknown",
        token=token,
        user_agent=user_agent,
        target=long_url,
        timestamp=datetime.now(timezone.utc).isoformat(),
    ).info(f"Link accessed: {token}")
