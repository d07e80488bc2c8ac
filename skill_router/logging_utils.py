"""Structured logging for skill loading and ranking."""
import logging
import sys
from typing import Any

import structlog


def add_app_name(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: tag every event with the application name."""
    event_dict.setdefault("app", "skill-router")
    return event_dict


def configure_logging(log_level: str = "WARNING") -> None:
    """Configure structlog and stdlib logging. Call once at startup.
    Logs go to stderr; stdout is reserved for command output.
    """
    log_level = log_level.upper()
    level = getattr(logging, log_level, logging.WARNING)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_app_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False)
            if log_level == "DEBUG"
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def log_skills_loaded(
    logger: structlog.stdlib.BoundLogger,
    skills_dir: str,
    count: int,
) -> None:
    logger.info("skills_loaded", skills_dir=skills_dir, count=count)


def log_pick(
    logger: structlog.stdlib.BoundLogger,
    query: str,
    top_skill: str | None,
    top_score: int,
    fallback: bool,
) -> None:
    q = query[:200] + "..." if len(query) > 200 else query
    logger.info(
        "skill_pick",
        query=q,
        top_skill=top_skill,
        top_score=top_score,
        fallback=fallback,
    )
