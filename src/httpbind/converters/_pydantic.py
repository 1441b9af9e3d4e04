from typing import Any, Optional

from pydantic import PydanticSchemaGenerationError, TypeAdapter
from pydantic_core import PydanticSerializationError

from .._http import RequestBody
from .._utils.constants import MEDIA_TYPE_JSON
from ..models.errors import ConversionError
from ._converter import Annotations, Converter, ConverterFactory


class PydanticJsonConverter:
    """Encodes values as JSON through a pydantic ``TypeAdapter``.

    Pydantic models, dataclasses, typed dicts and builtin containers are all
    supported. Models are dumped by alias so wire names match the API.
    """

    def __init__(self, value_type: Any) -> None:
        self._adapter: TypeAdapter[Any] = TypeAdapter(value_type)

    def convert(self, value: Any) -> RequestBody:
        try:
            content = self._adapter.dump_json(value, by_alias=True)
        except PydanticSerializationError as e:
            raise ConversionError(str(e)) from e
        return RequestBody(content=content, content_type=MEDIA_TYPE_JSON)


class PydanticJsonConverterFactory(ConverterFactory):
    def request_converter(
        self, value_type: Any, annotations: Annotations = ()
    ) -> Optional[Converter]:
        try:
            return PydanticJsonConverter(value_type)
        except PydanticSchemaGenerationError:
            return None
