"""Parameter markers for service methods.

Markers are attached with ``typing.Annotated``::

    @get("users/{user_id}/repos")
    def list_repos(
        self,
        user_id: Annotated[str, Path("user_id")],
        sort: Annotated[Optional[str], Query("sort")] = None,
    ) -> list[Repo]: ...

Any other ``Annotated`` metadata on a parameter is handed to converter
resolution unchanged.
"""

from dataclasses import dataclass

from ._utils.constants import DEFAULT_TRANSFER_ENCODING


class ParameterMarker:
    """Base class for the markers recognised by the method parser."""


@dataclass(frozen=True)
class Url(ParameterMarker):
    """The argument replaces the method's relative URL."""


@dataclass(frozen=True)
class Path(ParameterMarker):
    name: str
    encoded: bool = False


@dataclass(frozen=True)
class Query(ParameterMarker):
    name: str
    encoded: bool = False


@dataclass(frozen=True)
class QueryMap(ParameterMarker):
    encoded: bool = False


@dataclass(frozen=True)
class Header(ParameterMarker):
    name: str


@dataclass(frozen=True)
class Field(ParameterMarker):
    name: str
    encoded: bool = False


@dataclass(frozen=True)
class FieldMap(ParameterMarker):
    encoded: bool = False


@dataclass(frozen=True)
class Part(ParameterMarker):
    name: str
    encoding: str = DEFAULT_TRANSFER_ENCODING


@dataclass(frozen=True)
class PartMap(ParameterMarker):
    encoding: str = DEFAULT_TRANSFER_ENCODING


@dataclass(frozen=True)
class Body(ParameterMarker):
    """The argument is converted and sent as the request body."""


__all__ = [
    "Body",
    "Field",
    "FieldMap",
    "Header",
    "ParameterMarker",
    "Part",
    "PartMap",
    "Path",
    "Query",
    "QueryMap",
    "Url",
]
