"""Resolution of a configuration into a single drain.

Each output is offered to the factories in list order. The first factory
that claims the output, or fails on it, ends the search. Outputs no factory
claims are an error; nothing is silently dropped.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .config import Config, OutputDescriptor, load_config, parse_config
from .errors import ConfigError, UnresolvedOutputError
from .factory import SinkFactory
from .sinks import CompositeSink, ErrorBoxingSink, FileSinkFactory, Sink, TermSinkFactory

logger = logging.getLogger(__name__)


def default_factories() -> List[SinkFactory]:
    """Return a new list of the built-in factories.

    Adding a factory to this list is not a breaking change.
    """
    return [FileSinkFactory(), TermSinkFactory()]


def resolve_output(name: str, descriptor: OutputDescriptor, factories: Sequence[SinkFactory]) -> Sink:
    """Build the sink for one output.

    Args:
        name: Output name, used in error messages
        descriptor: The output's options
        factories: Factories to query, in order

    Returns:
        The claimed sink, wrapped so its failures surface as ``SinkError``

    Raises:
        MissingFieldError: If the output has no ``type``
        UnresolvedOutputError: If every factory declines
        ConfigError: If the claiming factory rejects the output
    """
    try:
        output_type = descriptor.type
        for factory in factories:
            sink = factory.resolve(descriptor)
            if sink is not None:
                logger.debug(f"Resolved output '{name}' (type {output_type!r}) with {factory!r}")
                return ErrorBoxingSink(sink)
    except ConfigError as e:
        if e.output is None:
            e.output = name
        raise
    except Exception as e:
        raise ConfigError(f"backend failed: {e}", output=name) from e

    raise UnresolvedOutputError(name, output_type)


def build_sink(config: Config, factories: Sequence[SinkFactory]) -> CompositeSink:
    """Resolve every output of a parsed config into one composite sink.

    Any failure aborts the build; sinks already built for earlier outputs
    are closed before the error propagates.
    """
    sinks: List[Sink] = []
    try:
        for name, descriptor in config.outputs():
            sinks.append(resolve_output(name, descriptor, factories))
    except ConfigError:
        for sink in sinks:
            try:
                sink.close()
            except Exception as e:
                logger.warning(f"Failed to close sink after aborted build: {e}")
        raise

    logger.debug(f"Built drain with {len(sinks)} output(s)")
    return CompositeSink(sinks)


def from_config_with(config_str: str, factories: Sequence[SinkFactory], fmt: str = "toml") -> Sink:
    """Produce a drain described by ``config_str`` using the given factories.

    Unlike ``from_config`` this allows supplying the list of factories to
    query, to add or override backend kinds.

    Raises:
        ConfigError: On any parse or resolution failure
    """
    config = parse_config(config_str, fmt=fmt)
    return build_sink(config, factories)


def from_config(config_str: str, fmt: str = "toml") -> Sink:
    """Produce a drain described by ``config_str`` using ``default_factories()``."""
    return from_config_with(config_str, default_factories(), fmt=fmt)


def from_config_file(path: Path | str, factories: Optional[Sequence[SinkFactory]] = None) -> Sink:
    """Produce a drain from a TOML or YAML configuration file."""
    config = load_config(path)
    return build_sink(config, default_factories() if factories is None else factories)
