from ._base_service import BaseService
from ._http_method import (
    HttpMethod,
    delete,
    get,
    head,
    http_method,
    options,
    patch,
    post,
    put,
)
from ._method_parser import MethodParser, parse_request_factory
from ._request_factory import RequestFactory

__all__ = [
    "BaseService",
    "HttpMethod",
    "MethodParser",
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
