from ._body import FormBody, HeaderList, MultipartBody, RequestBody
from ._request_builder import RequestBuilder

__all__ = [
    "FormBody",
    "HeaderList",
    "MultipartBody",
    "RequestBody",
    "RequestBuilder",
]
