"""
Structured logging для пайплайна.

Все модули получают логгер через get_logger(__name__) и пишут key-value события:

    logger.info("algo_execution_emitted", product_id="912828V23", order_id="AlgoExec1")

configure_logging() вызывается один раз при сборке системы; повторные вызовы игнорируются.
"""

import logging
import sys

import structlog

_logging_configured = False


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Настройка structlog поверх stdlib logging.

    Args:
        level: уровень логирования ("DEBUG", "INFO", ...)
        json_output: True — JSONRenderer, False — человекочитаемый ConsoleRenderer
    """
    global _logging_configured

    if _logging_configured:
        return

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level.upper(),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _logging_configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structured logger для модуля."""
    return structlog.get_logger(name)
