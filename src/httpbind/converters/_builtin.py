from typing import Any, Optional, get_origin

from .._http import RequestBody
from .._utils.constants import MEDIA_TYPE_OCTET_STREAM, MEDIA_TYPE_TEXT
from ..models.errors import ConversionError
from ._converter import Annotations, Converter, ConverterFactory


class RequestBodyConverter:
    def convert(self, value: Any) -> RequestBody:
        return value


class BytesConverter:
    def convert(self, value: Any) -> RequestBody:
        return RequestBody(content=bytes(value), content_type=MEDIA_TYPE_OCTET_STREAM)


class StringConverter:
    def convert(self, value: Any) -> RequestBody:
        try:
            content = value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ConversionError(f"Cannot encode {value!r} as UTF-8") from e
        return RequestBody(content=content, content_type=MEDIA_TYPE_TEXT)


class BuiltInConverterFactory(ConverterFactory):
    """Handles ``RequestBody``, ``bytes`` and ``str`` without serialization."""

    def request_converter(
        self, value_type: Any, annotations: Annotations = ()
    ) -> Optional[Converter]:
        if get_origin(value_type) is not None or not isinstance(value_type, type):
            return None
        if issubclass(value_type, RequestBody):
            return RequestBodyConverter()
        if issubclass(value_type, (bytes, bytearray, memoryview)):
            return BytesConverter()
        if issubclass(value_type, str):
            return StringConverter()
        return None
