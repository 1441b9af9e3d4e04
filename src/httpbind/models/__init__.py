from .errors import (
    BaseUrlMissingError,
    ConstructionError,
    ConversionError,
    ConverterNotFoundError,
    HttpBindError,
    InvalidMapKeyError,
    ParameterError,
    RequestEncodingError,
    RequiredValueMissingError,
)
from .exceptions import EnrichedException

__all__ = [
    "BaseUrlMissingError",
    "ConstructionError",
    "ConversionError",
    "ConverterNotFoundError",
    "EnrichedException",
    "HttpBindError",
    "InvalidMapKeyError",
    "ParameterError",
    "RequestEncodingError",
    "RequiredValueMissingError",
]
