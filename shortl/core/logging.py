"""
Core logging module.

This module configures the application logging with Loguru.
"""

import logging
import os
import sys

from loguru import logger

from shortl.core.config import settings

# Libraries whose own handlers are replaced by the intercept handler
INTERCEPTED_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "fastapi", "sqlalchemy.engine")


class InterceptHandler(logging.Handler):
    """
    Intercept standard logging and redirect to loguru.

    Repositories, services and the database layer log through the standard
    library; this handler forwards those records to the loguru sinks.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging():
    """
    Configure application logging using Loguru.

    Installs a stderr sink in debug mode and a rotating file sink (JSON
    serialized when LOG_JSON is set), registers the REQUEST level used by
    the request logging middleware, and intercepts standard library logging.
    """
    os.makedirs(settings.LOG_DIR, exist_ok=True)

    logger.remove()

    if settings.DEBUG:
        logger.add(
            sys.stderr,
            level=settings.LOG_LEVEL.upper(),
            format=settings.LOG_FORMAT,
            backtrace=True,
            diagnose=True,
        )

    log_file_path = os.path.join(settings.LOG_DIR, settings.LOG_FILENAME)
    file_options = {
        "level": settings.LOG_LEVEL.upper(),
        "rotation": settings.LOG_ROTATION,
        "retention": settings.LOG_RETENTION,
        "compression": "gz",
        # Access log records go to their own sink
        "filter": lambda record: record["extra"].get("event_type") != "link_access",
    }
    if settings.LOG_JSON:
        logger.add(log_file_path, serialize=True, **file_options)
    else:
        logger.add(log_file_path, format=settings.LOG_FORMAT, **file_options)

    # Registering an existing level twice raises, setup may run more than once
    try:
        logger.level("REQUEST")
    except ValueError:
        logger.level("REQUEST", no=25, color="<green>")

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in logging.root.manager.loggerDict.keys():
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True

    for log_name in INTERCEPTED_LOGGERS:
        logging.getLogger(log_name).handlers = [InterceptHandler()]
        logging.getLogger(log_name).propagate = False

    return logger
