from logging import getLogger
from typing import Any, Iterable, Optional

from ..models.errors import ConverterNotFoundError
from ._builtin import BuiltInConverterFactory
from ._converter import Annotations, Converter, ConverterFactory
from ._pydantic import PydanticJsonConverterFactory

logger = getLogger(__name__)


class ConverterRegistry:
    """Ordered list of converter factories; the first match wins.

    Built-in handling of ``RequestBody``, ``bytes`` and ``str`` always comes
    first so those values are never re-serialized.
    """

    def __init__(self, factories: Optional[Iterable[ConverterFactory]] = None) -> None:
        self._factories: list[ConverterFactory] = [BuiltInConverterFactory()]
        if factories is None:
            factories = [PydanticJsonConverterFactory()]
        self._factories.extend(factories)

    @property
    def factories(self) -> list[ConverterFactory]:
        return list(self._factories)

    def resolve(self, value_type: Any, annotations: Annotations = ()) -> Converter:
        for factory in self._factories:
            converter = factory.request_converter(value_type, annotations)
            if converter is not None:
                logger.debug(
                    f"Resolved {type(converter).__name__} for {value_type!r}"
                )
                return converter
        raise ConverterNotFoundError(value_type, annotations)
