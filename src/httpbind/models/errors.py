from typing import Any


class HttpBindError(Exception):
    """Base class for errors raised while binding call arguments to a request."""


class BaseUrlMissingError(HttpBindError):
    def __init__(
        self,
        message="Base URL required. Pass it to Config or set the HTTPBIND_BASE_URL environment variable.",
    ):
        self.message = message
        super().__init__(self.message)


class ConstructionError(HttpBindError, TypeError):
    """Raised when a request action or service method is configured incorrectly.

    This is a programmer error detected when a method signature is analyzed,
    before any call is made.
    """


class ConverterNotFoundError(ConstructionError):
    def __init__(self, value_type: Any, annotations: tuple[Any, ...] = ()):
        self.value_type = value_type
        self.annotations = annotations
        self.message = f"Could not locate RequestBody converter for {value_type!r}."
        super().__init__(self.message)


class ParameterError(HttpBindError, ValueError):
    """Raised when a call argument cannot be encoded into the request."""


class RequiredValueMissingError(ParameterError):
    """Raised when a Path or Body parameter receives ``None``."""


class InvalidMapKeyError(ParameterError):
    """Raised when a QueryMap, FieldMap or PartMap contains a ``None`` key."""

    def __init__(self, kind: str):
        self.kind = kind
        self.message = f"{kind} map contained null key."
        super().__init__(self.message)


class ConversionError(OSError):
    """Raised by converters on malformed input."""


class RequestEncodingError(HttpBindError, RuntimeError):
    """Raised when a converter fails to produce a RequestBody for a value.

    The original converter failure is chained as ``__cause__``.
    """

    def __init__(self, kind: str, value: Any):
        self.kind = kind
        self.value = value
        self.message = f"Unable to convert {value} to RequestBody ({kind})"
        super().__init__(self.message)
