"""Request actions: per-parameter strategies that encode call arguments.

Every declared parameter of a service method is bound to exactly one action.
Actions are immutable and configured once, when the method signature is
analyzed; the same instance is then applied to a fresh ``RequestBuilder`` on
every call.

The variant set is closed. Each concrete action below tags itself with an
``ActionKind`` and subclasses outside this module are rejected.

Null handling follows the parameter kind. Optional kinds (header, query,
field, part and map entries) skip ``None`` silently, while path and body
parameters reject it. Map expansion stops at the first ``None`` key, leaving
entries applied before it in place.
"""

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Optional, Sequence

from .._http import HeaderList, RequestBody, RequestBuilder
from .._utils import form_data_disposition
from .._utils.constants import (
    HEADER_CONTENT_DISPOSITION,
    HEADER_CONTENT_TRANSFER_ENCODING,
)
from ..converters import Annotations, Converter, ConverterResolver
from ..models.errors import (
    ConstructionError,
    HttpBindError,
    InvalidMapKeyError,
    ParameterError,
    RequestEncodingError,
    RequiredValueMissingError,
)
from ._result import ActionResult


class ActionKind(str, enum.Enum):
    URL = "Url"
    HEADER = "Header"
    PATH = "Path"
    QUERY = "Query"
    QUERY_MAP = "QueryMap"
    FIELD = "Field"
    FIELD_MAP = "FieldMap"
    PART = "Part"
    PART_MAP = "PartMap"
    BODY = "Body"
    ITERABLE = "Iterable"
    ARRAY = "Array"


def _require_name(kind: ActionKind, name: Optional[str]) -> None:
    if not name:
        raise ConstructionError(f"{kind.value} parameter name must not be empty.")


def _convert(kind: ActionKind, converter: Converter, value: Any) -> RequestBody:
    try:
        return converter.convert(value)
    except OSError as e:
        raise RequestEncodingError(kind.value, value) from e


class RequestAction(ABC):
    """Base of the closed set of request actions."""

    kind: ClassVar[ActionKind]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__:
            raise TypeError(
                f"{cls.__qualname__} cannot extend RequestAction; the set of actions is closed."
            )

    def apply(self, builder: RequestBuilder, value: Any) -> ActionResult:
        """Encode ``value`` into ``builder``.

        Never raises for call-time failures; they are returned as a failed
        ``ActionResult`` instead. Builder failures on malformed input are
        reported the same way.
        """
        try:
            self.perform(builder, value)
        except HttpBindError as e:
            return ActionResult.failure(e)
        except ValueError as e:
            error = ParameterError(str(e))
            error.__cause__ = e
            return ActionResult.failure(error)
        return ActionResult.ok()

    @abstractmethod
    def perform(self, builder: RequestBuilder, value: Any) -> None:
        """Mutate ``builder`` for ``value``, raising on failure."""


@dataclass(frozen=True)
class UrlAction(RequestAction):
    kind: ClassVar[ActionKind] = ActionKind.URL

    def perform(self, builder: RequestBuilder, value: Any) -> None:
        if value is None:
            raise RequiredValueMissingError("Url parameter value must not be null.")
        builder.set_relative_url(str(value))


@dataclass(frozen=True)
class HeaderAction(RequestAction):
    kind: ClassVar[ActionKind] = ActionKind.HEADER

    name: str

    def __post_init__(self) -> None:
        _require_name(self.kind, self.name)

    def perform(self, builder: RequestBuilder, value: Any) -> None:
        if value is None:
            return
        builder.add_header(self.name, str(value))


@dataclass(frozen=True)
class PathAction(RequestAction):
    kind: ClassVar[ActionKind] = ActionKind.PATH

    name: str
    encoded: bool = False

    def __post_init__(self) -> None:
        _require_name(self.kind, self.name)

    def perform(self, builder: RequestBuilder, value: Any) -> None:
        if value is None:
            raise RequiredValueMissingError(
                f'Path parameter "{self.name}" value must not be null.'
            )
        builder.add_path_param(self.name, str(value), self.encoded)


@dataclass(frozen=True)
class QueryAction(RequestAction):
    kind: ClassVar[ActionKind] = ActionKind.QUERY

    name: str
    encoded: bool = False

    def __post_init__(self) -> None:
        _require_name(self.kind, self.name)

    def perform(self, builder: RequestBuilder, value: Any) -> None:
        if value is None:
            return
        builder.add_query_param(self.name, str(value), self.encoded)


@dataclass(frozen=True)
class FieldAction(RequestAction):
    kind: ClassVar[ActionKind] = ActionKind.FIELD

    name: str
    encoded: bool = False

    def __post_init__(self) -> None:
        _require_name(self.kind, self.name)

    def perform(self, builder: RequestBuilder, value: Any) -> None:
        if value is None:
            return
        builder.add_form_field(self.name, str(value), self.encoded)


class _MapAction(RequestAction):
    map_kind: ClassVar[str]

    def perform(self, builder: RequestBuilder, value: Any) -> None:
        if value is None:
            return

        for entry_key, entry_value in value.items():
            if entry_key is None:
                raise InvalidMapKeyError(self.map_kind)
            if entry_value is None:
                continue
            self.perform_entry(builder, str(entry_key), entry_value)

    @abstractmethod
    def perform_entry(self, builder: RequestBuilder, key: str, value: Any) -> None: ...


@dataclass(frozen=True)
class QueryMapAction(_MapAction):
    kind: ClassVar[ActionKind] = ActionKind.QUERY_MAP
    map_kind: ClassVar[str] = "Query"

    encoded: bool = False

    def perform_entry(self, builder: RequestBuilder, key: str, value: Any) -> None:
        builder.add_query_param(key, str(value), self.encoded)


@dataclass(frozen=True)
class FieldMapAction(_MapAction):
    kind: ClassVar[ActionKind] = ActionKind.FIELD_MAP
    map_kind: ClassVar[str] = "Field"

    encoded: bool = False

    def perform_entry(self, builder: RequestBuilder, key: str, value: Any) -> None:
        builder.add_form_field(key, str(value), self.encoded)


@dataclass(frozen=True)
class PartAction(RequestAction):
    kind: ClassVar[ActionKind] = ActionKind.PART

    headers: HeaderList
    converter: Converter

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", tuple(self.headers))

    def perform(self, builder: RequestBuilder, value: Any) -> None:
        if value is None:
            return
        body = _convert(self.kind, self.converter, value)
        builder.add_part(self.headers, body)


@dataclass(frozen=True)
class PartMapAction(_MapAction):
    """Adds one multipart part per map entry.

    Entry values have no declared type, so a converter is resolved for each
    value's runtime type together with the parameter's static annotations.
    """

    kind: ClassVar[ActionKind] = ActionKind.PART_MAP
    map_kind: ClassVar[str] = "Part"

    transfer_encoding: str
    resolver: ConverterResolver
    annotations: Annotations = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "annotations", tuple(self.annotations))

    def perform_entry(self, builder: RequestBuilder, key: str, value: Any) -> None:
        headers = (
            (HEADER_CONTENT_DISPOSITION, form_data_disposition(key)),
            (HEADER_CONTENT_TRANSFER_ENCODING, self.transfer_encoding),
        )
        converter = self.resolver.resolve(type(value), self.annotations)
        body = _convert(ActionKind.PART, converter, value)
        builder.add_part(headers, body)


@dataclass(frozen=True)
class BodyAction(RequestAction):
    kind: ClassVar[ActionKind] = ActionKind.BODY

    converter: Converter

    def perform(self, builder: RequestBuilder, value: Any) -> None:
        if value is None:
            raise RequiredValueMissingError("Body parameter value must not be null.")
        body = _convert(self.kind, self.converter, value)
        builder.set_body(body)


def _require_leaf(action: RequestAction) -> None:
    if not isinstance(action, RequestAction):
        raise ConstructionError(f"Expected a RequestAction, got {action!r}.")
    if isinstance(action, (IterableAction, ArrayAction)):
        raise ConstructionError(
            f"{action.kind.value} actions cannot be nested inside another adapter."
        )
    if isinstance(action, _MapAction):
        raise ConstructionError(
            f"{action.kind.value} actions expand a whole map "
            "and cannot be wrapped in an adapter."
        )


@dataclass(frozen=True)
class IterableAction(RequestAction):
    """Applies the wrapped action once per element, in iteration order."""

    kind: ClassVar[ActionKind] = ActionKind.ITERABLE

    action: RequestAction

    def __post_init__(self) -> None:
        _require_leaf(self.action)

    def perform(self, builder: RequestBuilder, value: Optional[Iterable[Any]]) -> None:
        if value is None:
            return
        for element in value:
            self.action.perform(builder, element)


@dataclass(frozen=True)
class ArrayAction(RequestAction):
    """Applies the wrapped action to each element of a sized, indexable container.

    ``element_type`` records the element type the wrapped action expects. It
    is fixed when the action is constructed and callers are responsible for
    passing matching elements; ``apply`` does not check it.
    """

    kind: ClassVar[ActionKind] = ActionKind.ARRAY

    action: RequestAction
    element_type: Any = object

    def __post_init__(self) -> None:
        _require_leaf(self.action)

    def perform(self, builder: RequestBuilder, value: Optional[Sequence[Any]]) -> None:
        if value is None:
            return
        for i in range(len(value)):
            self.action.perform(builder, value[i])
