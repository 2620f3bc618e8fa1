"""Wiring drains into Python's logging module.

Example:
    from logdrain.loggings import setup_logger

    logger = setup_logger(
        '''
        [output.console]
        type = "term"
        format = "full"

        [output.audit]
        type = "file"
        path = "audit.jsonl"
        format = "json"
        ''',
        name="my_app",
        context={"service": "billing"},
    )
    logger.info("invoice sent", extra={"invoice": 42})
"""

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from ..factory import SinkFactory
from ..resolver import default_factories, from_config_file, from_config_with
from .handler import DrainHandler


# Library diagnostics; applications opt in by configuring "logdrain"
LOGGER = logging.getLogger("logdrain")
LOGGER.addHandler(logging.NullHandler())


def remove_drain_handlers(logger: logging.Logger) -> logging.Logger:
    """Detach and close every ``DrainHandler`` of a logger.

    Other handlers (pytest caplog, monitoring agents) are left in place.
    """
    for handler in logger.handlers[:]:
        if isinstance(handler, DrainHandler):
            logger.removeHandler(handler)
            handler.close()
    return logger


def setup_logger(
    config_text: Optional[str] = None,
    *,
    name: str = "logdrain",
    level: str = "INFO",
    context: Optional[Mapping[str, Any]] = None,
    factories: Optional[Sequence[SinkFactory]] = None,
    propagate: bool = False,
    config_path: Optional[Path | str] = None,
    fmt: str = "toml",
) -> logging.Logger:
    """Build a drain and attach it to a stdlib logger.

    Exactly one of ``config_text`` and ``config_path`` must be given. A
    drain previously attached to the same logger is closed and replaced.

    Args:
        config_text: Configuration text
        name: Logger name
        level: Logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        context: Key-values bound to every record
        factories: Backend factories (default: ``default_factories()``)
        propagate: Propagate to parent loggers (default: False)
        config_path: Configuration file, TOML or YAML by suffix
        fmt: Format of ``config_text``

    Returns:
        The configured logger

    Raises:
        ConfigError: If the drain cannot be built. The logger is left
            untouched in that case.
    """
    if (config_text is None) == (config_path is None):
        raise ValueError("pass exactly one of config_text and config_path")

    if factories is None:
        factories = default_factories()
    if config_path is not None:
        sink = from_config_file(config_path, factories)
    else:
        sink = from_config_with(config_text, factories, fmt=fmt)

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = propagate

    remove_drain_handlers(logger)
    logger.addHandler(DrainHandler(sink, context=context))
    return logger


__all__ = [
    "LOGGER",
    "DrainHandler",
    "setup_logger",
    "remove_drain_handlers",
]
