"""Builds a ``RequestFactory`` from a decorated service method.

Each parameter must carry exactly one marker from ``httpbind.params`` via
``typing.Annotated``. The marker picks the request action; the annotated type
decides whether the action is wrapped for repeated values:

* ``list``, ``set``, ``frozenset`` and abstract iterables use ``IterableAction``
* ``tuple`` uses ``ArrayAction`` with the tuple's element type

Misuse is reported as ``ConstructionError`` naming the offending method.
"""

import collections.abc
import inspect
import re
import types
from logging import getLogger
from typing import (
    Annotated,
    Any,
    Callable,
    Optional,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from httpx import URL

from .._utils import form_data_disposition
from .._utils.constants import (
    HEADER_CONTENT_DISPOSITION,
    HEADER_CONTENT_TRANSFER_ENCODING,
)
from ..actions import (
    ArrayAction,
    BodyAction,
    FieldAction,
    FieldMapAction,
    HeaderAction,
    IterableAction,
    PartAction,
    PartMapAction,
    PathAction,
    QueryAction,
    QueryMapAction,
    RequestAction,
    UrlAction,
)
from ..converters import ConverterResolver
from ..models.errors import ConstructionError
from ..params import (
    Body,
    Field,
    FieldMap,
    Header,
    ParameterMarker,
    Part,
    PartMap,
    Path,
    Query,
    QueryMap,
    Url,
)
from ._http_method import HTTP_METHOD_ATTR, HttpMethod
from ._request_factory import RequestFactory

logger = getLogger(__name__)

PARAM_NAME_REGEX = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*$")
PARAM_URL_REGEX = re.compile(r"\{([a-zA-Z][a-zA-Z0-9_-]*)\}")

_ITERABLE_ORIGINS = (
    list,
    set,
    frozenset,
    collections.abc.Iterable,
    collections.abc.Collection,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
)
_MAP_ORIGINS = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)


def path_parameters(path: Optional[str]) -> set[str]:
    """Names of the ``{placeholders}`` in a relative URL."""
    if not path:
        return set()
    return set(PARAM_URL_REGEX.findall(path))


def _strip_optional(tp: Any) -> Any:
    if get_origin(tp) in (Union, types.UnionType):
        args = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def _is_mapping(tp: Any) -> bool:
    origin = get_origin(tp) or tp
    return isinstance(origin, type) and (
        origin in _MAP_ORIGINS or issubclass(origin, collections.abc.Mapping)
    )


class MethodParser:
    """Parses one service method into a ``RequestFactory``."""

    def __init__(
        self,
        func: Callable[..., Any],
        base_url: Union[URL, str],
        resolver: ConverterResolver,
    ) -> None:
        self._func = inspect.unwrap(func)
        self._base_url = str(base_url)
        self._resolver = resolver

        spec = getattr(func, HTTP_METHOD_ATTR, None)
        if spec is None:
            raise self._error("HTTP method annotation is required (e.g., @get, @post).")
        self._spec: HttpMethod = spec

        self._relative_url = spec.path
        self._url_params = path_parameters(spec.path)
        if spec.path is not None and "?" in spec.path:
            query = spec.path.partition("?")[2]
            if PARAM_URL_REGEX.search(query):
                raise self._error(
                    "URL query string must not have replace block. "
                    "For dynamic query parameters use Query."
                )

        self._got_url = False
        self._got_path = False
        self._got_query = False
        self._got_field = False
        self._got_part = False
        self._got_body = False

    def _error(self, message: str, index: Optional[int] = None) -> ConstructionError:
        if index is not None:
            message = f"{message} (parameter #{index + 1})"
        return ConstructionError(f"{message}\n    for method {self._func.__qualname__}")

    def _parameters(self) -> list[inspect.Parameter]:
        parameters = list(inspect.signature(self._func).parameters.values())
        if parameters and parameters[0].name in ("self", "cls"):
            parameters = parameters[1:]
        for parameter in parameters:
            if parameter.kind in (
                inspect.Parameter.VAR_POSITIONAL,
                inspect.Parameter.VAR_KEYWORD,
            ):
                raise self._error(
                    f"Variadic parameter '{parameter.name}' is not supported."
                )
        return parameters

    def parse(self) -> RequestFactory:
        hints = get_type_hints(self._func, include_extras=True)
        actions = []
        for index, parameter in enumerate(self._parameters()):
            hint = _strip_optional(hints.get(parameter.name))
            if hint is None or get_origin(hint) is not Annotated:
                raise self._error("No httpbind annotation found.", index)

            value_type, *metadata = get_args(hint)
            markers = [m for m in metadata if isinstance(m, ParameterMarker)]
            if len(markers) != 1:
                raise self._error(
                    "Multiple httpbind annotations found, only one allowed."
                    if markers
                    else "No httpbind annotation found.",
                    index,
                )
            annotations = tuple(m for m in metadata if not isinstance(m, ParameterMarker))
            actions.append(
                self._parse_parameter(
                    index, markers[0], _strip_optional(value_type), annotations
                )
            )

        self._validate()

        factory = RequestFactory(
            method=self._spec.method,
            base_url=self._base_url,
            relative_url=self._relative_url,
            headers=self._spec.headers,
            has_body=self._spec.has_body,
            is_form_encoded=self._spec.form_encoded,
            is_multipart=self._spec.multipart,
            actions=tuple(actions),
        )
        logger.debug(
            f"Parsed {self._func.__qualname__}: {factory.method} {factory.relative_url} "
            f"with {len(factory.actions)} parameter(s)"
        )
        return factory

    def _validate(self) -> None:
        spec = self._spec
        if self._relative_url is None and not self._got_url:
            raise self._error(f"Missing either @{spec.method} URL or Url parameter.")
        if not spec.has_body and self._got_body:
            raise self._error("Non-body HTTP method cannot contain Body.")
        if spec.form_encoded and not self._got_field:
            raise self._error("Form-encoded method must contain at least one Field.")
        if spec.multipart and not self._got_part:
            raise self._error("Multipart method must contain at least one Part.")

    def _repeat(
        self, value_type: Any, make_leaf: Callable[[Any], RequestAction]
    ) -> RequestAction:
        origin = get_origin(value_type) or value_type
        args = get_args(value_type)
        if origin is tuple:
            element_type = args[0] if args else object
            return ArrayAction(make_leaf(element_type), element_type=element_type)
        if origin in _ITERABLE_ORIGINS:
            element_type = args[0] if args else object
            return IterableAction(make_leaf(element_type))
        return make_leaf(value_type)

    def _parse_parameter(
        self,
        index: int,
        marker: ParameterMarker,
        value_type: Any,
        annotations: tuple[Any, ...],
    ) -> RequestAction:
        spec = self._spec

        if isinstance(marker, Url):
            if self._got_url:
                raise self._error("Multiple Url parameters found.", index)
            if self._got_path:
                raise self._error("Path parameters may not be used with Url.", index)
            if self._got_query:
                raise self._error("A Url parameter must not come after a Query.", index)
            if self._relative_url is not None:
                raise self._error(f"Url cannot be used with @{spec.method} URL.", index)
            self._got_url = True
            return UrlAction()

        if isinstance(marker, Path):
            if self._got_query:
                raise self._error("A Path parameter must not come after a Query.", index)
            if self._got_url:
                raise self._error("Path parameters may not be used with Url.", index)
            if self._relative_url is None:
                raise self._error(
                    f"Path can only be used with relative url on @{spec.method}.", index
                )
            if not PARAM_NAME_REGEX.match(marker.name):
                raise self._error(
                    f"Path parameter name must match {PARAM_URL_REGEX.pattern}. "
                    f"Found: {marker.name}",
                    index,
                )
            if marker.name not in self._url_params:
                raise self._error(
                    f'URL "{self._relative_url}" does not contain "{{{marker.name}}}".',
                    index,
                )
            self._got_path = True
            return PathAction(marker.name, marker.encoded)

        if isinstance(marker, Query):
            self._got_query = True
            return self._repeat(
                value_type, lambda _: QueryAction(marker.name, marker.encoded)
            )

        if isinstance(marker, QueryMap):
            if not _is_mapping(value_type):
                raise self._error("QueryMap parameter type must be Mapping.", index)
            self._got_query = True
            return QueryMapAction(marker.encoded)

        if isinstance(marker, Header):
            return self._repeat(value_type, lambda _: HeaderAction(marker.name))

        if isinstance(marker, Field):
            if not spec.form_encoded:
                raise self._error(
                    "Field parameters can only be used with form encoding.", index
                )
            self._got_field = True
            return self._repeat(
                value_type, lambda _: FieldAction(marker.name, marker.encoded)
            )

        if isinstance(marker, FieldMap):
            if not spec.form_encoded:
                raise self._error(
                    "FieldMap parameters can only be used with form encoding.", index
                )
            if not _is_mapping(value_type):
                raise self._error("FieldMap parameter type must be Mapping.", index)
            self._got_field = True
            return FieldMapAction(marker.encoded)

        if isinstance(marker, Part):
            if not spec.multipart:
                raise self._error(
                    "Part parameters can only be used with multipart encoding.", index
                )
            self._got_part = True
            headers = (
                (HEADER_CONTENT_DISPOSITION, form_data_disposition(marker.name)),
                (HEADER_CONTENT_TRANSFER_ENCODING, marker.encoding),
            )
            return self._repeat(
                value_type,
                lambda element_type: PartAction(
                    headers, self._resolve(element_type, annotations, index)
                ),
            )

        if isinstance(marker, PartMap):
            if not spec.multipart:
                raise self._error(
                    "PartMap parameters can only be used with multipart encoding.",
                    index,
                )
            if not _is_mapping(value_type):
                raise self._error("PartMap parameter type must be Mapping.", index)
            self._got_part = True
            return PartMapAction(marker.encoding, self._resolver, annotations)

        if isinstance(marker, Body):
            if spec.form_encoded or spec.multipart:
                raise self._error(
                    "Body parameters cannot be used with form or multi-part encoding.",
                    index,
                )
            if self._got_body:
                raise self._error("Multiple Body method annotations found.", index)
            self._got_body = True
            return BodyAction(self._resolve(value_type, annotations, index))

        raise self._error(f"Unsupported marker {marker!r}.", index)

    def _resolve(self, value_type: Any, annotations: tuple[Any, ...], index: int):
        try:
            return self._resolver.resolve(value_type, annotations)
        except ConstructionError as e:
            raise self._error(str(e), index) from e


def parse_request_factory(
    func: Callable[..., Any],
    base_url: Union[URL, str],
    resolver: ConverterResolver,
) -> RequestFactory:
    return MethodParser(func, base_url, resolver).parse()
