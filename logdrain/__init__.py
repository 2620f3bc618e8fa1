"""
logdrain - logging drains from declarative configuration

Turns a TOML (or YAML) description of outputs into one sink that fans every
record out to all configured backends.

Example:
    ```python
    import logging
    from logdrain import from_config

    drain = from_config('''
        [output.console]
        type = "term"
        format = "compact"
        use_stdout = "true"

        [output.file]
        type = "file"
        path = "app.jsonl"
        format = "json"
    ''')

    record = logging.makeLogRecord({"msg": "started", "levelname": "INFO"})
    drain.log(record, {"service": "api"})
    ```

Use ``logdrain.loggings.setup_logger`` to attach a drain to a stdlib logger.
"""

from logdrain.errors import (
    LogDrainError,
    ConfigError,
    ConfigParseError,
    MissingFieldError,
    InvalidValueError,
    UnresolvedOutputError,
    ResourceError,
    SinkError,
)
from logdrain.config import Config, OutputDescriptor, parse_config, load_config
from logdrain.factory import SinkFactory, SinkOptions
from logdrain.sinks import (
    Sink,
    ErrorBoxingSink,
    CompositeSink,
    TerminalSink,
    TermSinkFactory,
    JsonFileSink,
    FileSinkFactory,
    record_values,
)
from logdrain.resolver import (
    default_factories,
    resolve_output,
    build_sink,
    from_config,
    from_config_with,
    from_config_file,
)
from logdrain.loggings import LOGGER, DrainHandler, setup_logger

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "from_config",
    "from_config_with",
    "from_config_file",
    "build_sink",
    "resolve_output",
    "default_factories",
    # Configuration
    "Config",
    "OutputDescriptor",
    "parse_config",
    "load_config",
    # Factories
    "SinkFactory",
    "SinkOptions",
    # Sinks
    "Sink",
    "ErrorBoxingSink",
    "CompositeSink",
    "TerminalSink",
    "TermSinkFactory",
    "JsonFileSink",
    "FileSinkFactory",
    "record_values",
    # Logging bridge
    "LOGGER",
    "DrainHandler",
    "setup_logger",
    # Errors
    "LogDrainError",
    "ConfigError",
    "ConfigParseError",
    "MissingFieldError",
    "InvalidValueError",
    "UnresolvedOutputError",
    "ResourceError",
    "SinkError",
]
