#!/usr/bin/env python3
"""
Structured Logging Module using structlog

This module provides structured logging for the connector with:
- Execution context correlation (one id per browse call / operation batch)
- Stage numbering for execution flow
- JSON formatting for log aggregation
- Context processors for automatic field injection

Architectural Decision: structlog over stdlib logging
- Context-aware logging with automatic field injection
- JSON output for the host container's log collection
- Standard library handlers stay in charge of output

Author: System Architect
Date: 2025-12-05
"""

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone

import structlog
from structlog.types import EventDict, WrappedLogger

from redis_connector.core.config.constants import Stage
from redis_connector.core.config.settings import get_settings

# Context variable for the execution context id
execution_id_ctx: ContextVar[str | None] = ContextVar("execution_id", default=None)


def add_execution_id(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add execution context id to log event from context variable.

    STAGE-L.1: Execution id injection
    """
    execution_id = execution_id_ctx.get()
    if execution_id:
        event_dict["execution_id"] = execution_id
    return event_dict


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add ISO timestamp to log event.

    STAGE-L.2: Timestamp injection
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_log_level_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Upper-case the level name.

    STAGE-L.3: Log level injection
    """
    if "level" in event_dict:
        event_dict["level"] = event_dict["level"].upper()
    return event_dict


def setup_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """
    Setup structured logging with structlog.

    STAGE-L: Logging initialization

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'console')
    """
    settings = get_settings()

    log_level = log_level or settings.logging.LOG_LEVEL
    log_format = log_format or settings.logging.LOG_FORMAT

    logging.basicConfig(
        format="%(message)s", stream=sys.stdout, level=getattr(logging, log_level.upper())
    )

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_execution_id,
            add_timestamp,
            structlog.stdlib.add_log_level,
            add_log_level_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # redis-py is chatty at DEBUG
    logging.getLogger("redis").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        BoundLogger: Structured logger instance

    Usage:
        logger = get_logger(__name__)
        logger.info("message", key="value", stage=Stage.STORE_COMMAND)
    """
    return structlog.get_logger(name)


def set_execution_id(execution_id: str) -> None:
    """
    Set the execution context id for the current thread of work.

    Should be called when an operation batch or browse call starts so that
    every log entry of that context carries the same id.
    """
    execution_id_ctx.set(execution_id)


def get_execution_id() -> str | None:
    """Get current execution context id."""
    return execution_id_ctx.get()


def clear_execution_id() -> None:
    """Clear execution context id."""
    execution_id_ctx.set(None)


def log_stage(
    logger: structlog.stdlib.BoundLogger, stage: str, message: str, level: str = "info", **kwargs
) -> None:
    """
    Log a message with stage information.

    Args:
        logger: Logger instance
        stage: Stage identifier (e.g., Stage.STORE_COMMAND)
        message: Log message
        level: Log level (debug, info, warning, error, critical)
        **kwargs: Additional fields to log

    Usage:
        log_stage(logger, Stage.SHARED_CLIENT_INIT.value, "Connector created", app_name="Redis Connector")
    """
    log_func = getattr(logger, level.lower())
    log_func(message, stage=stage, **kwargs)


def log_command(
    logger: structlog.stdlib.BoundLogger, command: str, args: list | tuple, result
) -> None:
    """
    Log the result of a single store command at debug level.

    Produces messages of the form "'HSET myprefix:user:1' command returned 2".
    """
    rendered = " ".join([command, *(str(a) for a in args)])
    logger.debug(
        f"'{rendered}' command returned {result}",
        stage=Stage.STORE_COMMAND.value,
        command=command,
    )

