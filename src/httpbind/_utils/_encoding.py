"""Percent-encoding helpers used when assembling URLs and form bodies."""

from urllib.parse import quote, quote_plus


def encode_path_segment(value: str) -> str:
    """Percent-encode a value substituted into a single path segment.

    Spaces become ``%20`` and ``/`` is escaped so the value cannot add segments.

    Examples:
        >>> encode_path_segment("a b/c")
        'a%20b%2Fc'
    """
    return quote(value, safe="")


def encode_query_component(value: str) -> str:
    return quote(value, safe="")


def encode_form_component(value: str) -> str:
    return quote_plus(value, safe="")


def form_data_disposition(name: str) -> str:
    return f'form-data; name="{name}"'
