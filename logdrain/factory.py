"""Backend factory interface.

A factory looks at one output descriptor and does exactly one of three
things:

* returns a ``Sink``: the output's ``type`` is its kind and the options are
  valid (claimed);
* returns ``None``: the ``type`` belongs to some other backend (declined);
* raises ``ConfigError``: the ``type`` is its kind but an option is missing
  or invalid, or a resource could not be acquired (failed).

Extending with a custom backend:
    class SyslogOptions(SinkOptions):
        address: str = "/dev/log"

    class SyslogSinkFactory(SinkFactory):
        sink_type = "syslog"
        options_class = SyslogOptions

        def create(self, options: SyslogOptions) -> Sink:
            return SyslogSink(options.address)

    drain = from_config_with(text, [*default_factories(), SyslogSinkFactory()])
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from .config import OutputDescriptor
from .errors import ConfigError, InvalidValueError, MissingFieldError

if TYPE_CHECKING:
    from .sinks.base import Sink

T = TypeVar("T", bound="SinkOptions")


class SinkOptions(BaseModel):
    """Base class for the options of one backend kind.

    Subclasses declare recognized options as ``str`` or ``Literal[...]``
    fields. Options the backend does not know about are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: str

    @classmethod
    def from_descriptor(cls: Type[T], descriptor: OutputDescriptor) -> T:
        """Validate a descriptor against this option set.

        Raises:
            MissingFieldError: If a required option is absent
            InvalidValueError: If an option has a value outside its allowed set
        """
        try:
            return cls.model_validate(dict(descriptor))
        except ValidationError as e:
            raise _to_config_error(e, descriptor) from None


def _to_config_error(error: ValidationError, descriptor: OutputDescriptor) -> ConfigError:
    first = error.errors()[0]
    option = str(first["loc"][0]) if first["loc"] else "?"
    if first["type"] == "missing":
        return MissingFieldError(option)
    expected = (first.get("ctx") or {}).get("expected")
    return InvalidValueError(option, descriptor.get(option, ""), expected=expected)


class SinkFactory(ABC):
    """Turns output descriptors of one backend kind into sinks.

    Subclasses set ``sink_type`` and ``options_class`` and implement
    ``create``. Factories are stateless; one instance may serve any number
    of builds.
    """

    sink_type: ClassVar[str]
    options_class: ClassVar[Type[SinkOptions]] = SinkOptions

    def resolve(self, descriptor: OutputDescriptor) -> Optional["Sink"]:
        """Claim, decline or fail on a descriptor.

        Returns:
            A new sink, or None if the descriptor targets another backend

        Raises:
            ConfigError: If the descriptor targets this backend but is invalid
        """
        if descriptor.type != self.sink_type:
            return None
        options = self.options_class.from_descriptor(descriptor)
        return self.create(options)

    @abstractmethod
    def create(self, options: SinkOptions) -> "Sink":
        """Build a sink from validated options, acquiring its resources now."""
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} type={self.sink_type}>"
