from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol, runtime_checkable

from .._http import RequestBody

Annotations = tuple[Any, ...]


@runtime_checkable
class Converter(Protocol):
    """Serializes a value into a request body.

    Implementations raise ``ConversionError`` on malformed input.
    """

    def convert(self, value: Any) -> RequestBody: ...


@runtime_checkable
class ConverterResolver(Protocol):
    """Locates a converter for a type that is only known at call time."""

    def resolve(self, value_type: Any, annotations: Annotations = ()) -> Converter: ...


class ConverterFactory(ABC):
    """Creates converters for the types it understands."""

    @abstractmethod
    def request_converter(
        self, value_type: Any, annotations: Annotations = ()
    ) -> Optional[Converter]:
        """Return a converter for ``value_type`` or ``None`` if not handled."""
