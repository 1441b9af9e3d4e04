import array
from unittest.mock import Mock, call

import pytest

from httpbind.actions import (
    ActionKind,
    ArrayAction,
    FieldMapAction,
    HeaderAction,
    IterableAction,
    PartMapAction,
    PathAction,
    QueryAction,
    QueryMapAction,
)
from httpbind.models.errors import ConstructionError, RequiredValueMissingError


class TestIterableAction:
    def test_skips_null_sequence(self, builder):
        result = IterableAction(QueryAction("q")).apply(builder, None)

        assert result.is_success
        assert builder.mock_calls == []

    def test_null_elements_follow_wrapped_policy(self, builder):
        action = IterableAction(QueryAction("q"))

        action.apply(builder, ["v1", None, "v2"]).raise_for_error()

        assert builder.mock_calls == [
            call.add_query_param("q", "v1", False),
            call.add_query_param("q", "v2", False),
        ]

    def test_consumes_generators_in_order(self, builder):
        action = IterableAction(HeaderAction("X-Id"))

        action.apply(builder, (i for i in range(3))).raise_for_error()

        assert builder.mock_calls == [
            call.add_header("X-Id", "0"),
            call.add_header("X-Id", "1"),
            call.add_header("X-Id", "2"),
        ]

    def test_wrapping_path_fails_on_null_element(self, builder):
        action = IterableAction(PathAction("id"))

        result = action.apply(builder, ["a", None, "b"])

        assert isinstance(result.error, RequiredValueMissingError)
        assert builder.mock_calls == [call.add_path_param("id", "a", False)]

    def test_kind(self):
        assert IterableAction(QueryAction("q")).kind is ActionKind.ITERABLE


class TestArrayAction:
    def test_positional_access(self, builder):
        action = ArrayAction(QueryAction("n"), element_type=int)

        action.apply(builder, array.array("i", [3, 1, 2])).raise_for_error()

        assert builder.mock_calls == [
            call.add_query_param("n", "3", False),
            call.add_query_param("n", "1", False),
            call.add_query_param("n", "2", False),
        ]

    def test_null_elements_follow_wrapped_policy(self, builder):
        action = ArrayAction(QueryAction("q"))

        action.apply(builder, ("v1", None, "v2")).raise_for_error()

        assert builder.mock_calls == [
            call.add_query_param("q", "v1", False),
            call.add_query_param("q", "v2", False),
        ]

    def test_skips_null_container(self, builder):
        assert ArrayAction(PathAction("id")).apply(builder, None).is_success
        assert builder.mock_calls == []

    def test_element_type_is_recorded(self):
        assert ArrayAction(QueryAction("q")).element_type is object
        assert ArrayAction(QueryAction("q"), element_type=str).element_type is str


class TestNesting:
    @pytest.mark.parametrize("adapter", [IterableAction, ArrayAction])
    def test_adapters_cannot_be_nested(self, adapter):
        with pytest.raises(ConstructionError, match="cannot be nested"):
            adapter(IterableAction(QueryAction("q")))

    def test_adapter_requires_an_action(self):
        with pytest.raises(ConstructionError):
            IterableAction("not an action")  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "map_action",
        [QueryMapAction(), FieldMapAction(), PartMapAction("binary", Mock())],
    )
    @pytest.mark.parametrize("adapter", [IterableAction, ArrayAction])
    def test_map_actions_cannot_be_wrapped(self, adapter, map_action):
        with pytest.raises(ConstructionError, match="expand a whole map"):
            adapter(map_action)
