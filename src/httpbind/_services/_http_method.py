import functools
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from ..models.errors import ConstructionError

HTTP_METHOD_ATTR = "__httpbind_method__"

StaticHeaders = Union[Mapping[str, str], Sequence[str], None]


@dataclass(frozen=True)
class HttpMethod:
    """Static request configuration declared on a service method."""

    method: str
    path: Optional[str]
    headers: tuple[tuple[str, str], ...] = ()
    has_body: bool = False
    form_encoded: bool = False
    multipart: bool = False


def parse_headers(headers: StaticHeaders) -> tuple[tuple[str, str], ...]:
    """Normalize static headers given as a mapping or as ``"Name: Value"`` strings."""
    if not headers:
        return ()
    if isinstance(headers, Mapping):
        return tuple((str(name), str(value)) for name, value in headers.items())

    parsed = []
    for header in headers:
        name, sep, value = header.partition(":")
        if not sep or not name.strip():
            raise ConstructionError(
                f'Headers value must be in the form "Name: Value". Found: "{header}"'
            )
        parsed.append((name.strip(), value.strip()))
    return tuple(parsed)


def http_method(
    method: str,
    path: Optional[str] = None,
    *,
    headers: StaticHeaders = None,
    has_body: bool = False,
    form_encoded: bool = False,
    multipart: bool = False,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Declare a service method as an HTTP call.

    The decorated method's body is never executed. Calling it on a
    ``BaseService`` builds a request from the arguments and sends it; the
    return annotation decides how the response is adapted.
    """
    if form_encoded and multipart:
        raise ConstructionError("Only one encoding annotation is allowed.")
    if (form_encoded or multipart) and not has_body:
        raise ConstructionError(
            f"{method} cannot be form-encoded or multipart; it has no request body."
        )

    spec = HttpMethod(
        method=method.upper(),
        path=path,
        headers=parse_headers(headers),
        has_body=has_body,
        form_encoded=form_encoded,
        multipart=multipart,
    )

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        sig = inspect.signature(func)

        def arguments(args, kwargs) -> tuple[Any, list[Any]]:
            bound = sig.bind(*args, **kwargs)
            bound.apply_defaults()
            service, *values = bound.arguments.values()
            return service, values

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                service, values = arguments(args, kwargs)
                return await service._invoke_async(async_wrapper, values)

            setattr(async_wrapper, HTTP_METHOD_ATTR, spec)
            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            service, values = arguments(args, kwargs)
            return service._invoke(wrapper, values)

        setattr(wrapper, HTTP_METHOD_ATTR, spec)
        return wrapper

    return decorator


def get(path: Optional[str] = None, *, headers: StaticHeaders = None):
    return http_method("GET", path, headers=headers)


def head(path: Optional[str] = None, *, headers: StaticHeaders = None):
    return http_method("HEAD", path, headers=headers)


def delete(path: Optional[str] = None, *, headers: StaticHeaders = None):
    return http_method("DELETE", path, headers=headers)


def options(path: Optional[str] = None, *, headers: StaticHeaders = None):
    return http_method("OPTIONS", path, headers=headers)


def post(
    path: Optional[str] = None,
    *,
    headers: StaticHeaders = None,
    form_encoded: bool = False,
    multipart: bool = False,
):
    return http_method(
        "POST",
        path,
        headers=headers,
        has_body=True,
        form_encoded=form_encoded,
        multipart=multipart,
    )


def put(
    path: Optional[str] = None,
    *,
    headers: StaticHeaders = None,
    form_encoded: bool = False,
    multipart: bool = False,
):
    return http_method(
        "PUT",
        path,
        headers=headers,
        has_body=True,
        form_encoded=form_encoded,
        multipart=multipart,
    )


def patch(
    path: Optional[str] = None,
    *,
    headers: StaticHeaders = None,
    form_encoded: bool = False,
    multipart: bool = False,
):
    return http_method(
        "PATCH",
        path,
        headers=headers,
        has_body=True,
        form_encoded=form_encoded,
        multipart=multipart,
    )
