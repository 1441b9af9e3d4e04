from ._encoding import (
    encode_form_component,
    encode_path_segment,
    encode_query_component,
    form_data_disposition,
)

__all__ = [
    "encode_form_component",
    "encode_path_segment",
    "encode_query_component",
    "form_data_disposition",
]
