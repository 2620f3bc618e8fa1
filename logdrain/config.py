"""Configuration models and parsing.

A configuration document holds one table per output under ``output``::

    [output.console]
    type = "term"
    format = "compact"

    [output.audit]
    type = "file"
    path = "logs/audit.jsonl"
    format = "json"

Every option value is a string. Booleans and enums are string literals
(``"true"``, ``"auto"``) interpreted by the factory that claims the output.
"""

import tomllib
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ConfigParseError, MissingFieldError, ResourceError


class OutputDescriptor(Mapping[str, str]):
    """Read-only flat option map describing one output.

    Args:
        options: Option name to option value
    """

    def __init__(self, options: Mapping[str, str]):
        self._options = MappingProxyType(dict(options))

    def __getitem__(self, key: str) -> str:
        return self._options[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __repr__(self) -> str:
        return f"OutputDescriptor({dict(self._options)!r})"

    def require(self, key: str) -> str:
        """Return the value of a required option.

        Raises:
            MissingFieldError: If the option is absent
        """
        try:
            return self._options[key]
        except KeyError:
            raise MissingFieldError(key) from None

    @property
    def type(self) -> str:
        """Backend kind this output targets."""
        return self.require("type")


class Config(BaseModel):
    """Parsed logging configuration.

    Args:
        output: Output name to flat string option map. Names are only used
            in diagnostics; outputs are built in declaration order.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    output: Dict[str, Dict[str, str]]

    @field_validator("output", mode="after")
    @classmethod
    def _freeze_output(cls, value: Dict[str, Dict[str, str]]) -> Mapping[str, Mapping[str, str]]:
        # frozen=True only guards attribute assignment
        return MappingProxyType({name: MappingProxyType(options) for name, options in value.items()})

    def outputs(self) -> Iterator[Tuple[str, OutputDescriptor]]:
        """Yield ``(name, descriptor)`` pairs in declaration order."""
        for name, options in self.output.items():
            yield name, OutputDescriptor(options)

    def __len__(self) -> int:
        return len(self.output)


def _decode(text: str, fmt: str) -> Any:
    if fmt == "toml":
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ConfigParseError(f"couldn't decode configuration: {e}") from e
    if fmt == "yaml":
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"couldn't decode configuration: {e}") from e
        return data if data is not None else {}
    raise ConfigParseError(f"unknown configuration format: {fmt}")


def parse_config(text: str, fmt: str = "toml") -> Config:
    """Parse configuration text into a ``Config``.

    Args:
        text: Raw configuration text
        fmt: ``"toml"`` (default) or ``"yaml"``

    Returns:
        The parsed configuration

    Raises:
        ConfigParseError: If the text is malformed, or an output is not a
            flat table of string values
    """
    data = _decode(text, fmt)
    if not isinstance(data, dict):
        raise ConfigParseError("couldn't decode configuration: top level must be a table")
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(f"couldn't decode configuration: {_describe(e)}") from e


def load_config(path: Path | str, fmt: Optional[str] = None) -> Config:
    """Read and parse a configuration file.

    The format is taken from ``fmt`` or, when omitted, from the file suffix:
    ``.yaml``/``.yml`` are YAML, anything else is TOML.

    Raises:
        ResourceError: If the file cannot be read
        ConfigParseError: If the content is invalid
    """
    path = Path(path)
    if fmt is None:
        fmt = "yaml" if path.suffix.lower() in (".yaml", ".yml") else "toml"
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ResourceError(str(path), e.strerror or str(e)) from e
    return parse_config(text, fmt=fmt)


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}"
