from ._builtin import (
    BuiltInConverterFactory,
    BytesConverter,
    RequestBodyConverter,
    StringConverter,
)
from ._converter import Annotations, Converter, ConverterFactory, ConverterResolver
from ._pydantic import PydanticJsonConverter, PydanticJsonConverterFactory
from ._registry import ConverterRegistry

__all__ = [
    "Annotations",
    "BuiltInConverterFactory",
    "BytesConverter",
    "Converter",
    "ConverterFactory",
    "ConverterRegistry",
    "ConverterResolver",
    "PydanticJsonConverter",
    "PydanticJsonConverterFactory",
    "RequestBodyConverter",
    "StringConverter",
]
