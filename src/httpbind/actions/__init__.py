from ._actions import (
    ActionKind,
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
from ._result import ActionResult

__all__ = [
    "ActionKind",
    "ActionResult",
    "ArrayAction",
    "BodyAction",
    "FieldAction",
    "FieldMapAction",
    "HeaderAction",
    "IterableAction",
    "PartAction",
    "PartMapAction",
    "PathAction",
    "QueryAction",
    "QueryMapAction",
    "RequestAction",
    "UrlAction",
]
