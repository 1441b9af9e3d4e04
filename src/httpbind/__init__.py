"""Declarative HTTP services that bind typed call arguments to ``httpx`` requests."""

from ._config import Config
from ._http import RequestBody, RequestBuilder
from ._services import (
    BaseService,
    RequestFactory,
    delete,
    get,
    head,
    http_method,
    options,
    parse_request_factory,
    patch,
    post,
    put,
)
from .converters import ConverterRegistry

__all__ = [
    "BaseService",
    "Config",
    "ConverterRegistry",
    "RequestBody",
    "RequestBuilder",
    "RequestFactory",
    "delete",
    "get",
    "head",
    "http_method",
    "options",
    "parse_request_factory",
    "patch",
    "post",
    "put",
]
