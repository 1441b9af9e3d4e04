from typing import Iterable, Optional, Union

from httpx import URL, Request

from .._utils import encode_path_segment, encode_query_component
from .._utils.constants import HEADER_CONTENT_TYPE
from ._body import FormBody, HeaderList, MultipartBody, RequestBody


class RequestBuilder:
    """Mutable accumulator for a single outgoing request.

    One builder is created per call. Request actions mutate it in declared
    parameter order and ``build`` turns the accumulated state into an
    ``httpx.Request``. Headers, query parameters, form fields and parts keep
    their insertion order.
    """

    def __init__(
        self,
        method: str,
        base_url: Union[URL, str],
        relative_url: Optional[str] = None,
        headers: Optional[Iterable[tuple[str, str]]] = None,
        *,
        has_body: bool = False,
        is_form_encoded: bool = False,
        is_multipart: bool = False,
    ) -> None:
        self._method = method.upper()
        self._base_url = URL(str(base_url))
        self._relative_url = relative_url
        self._headers: list[tuple[str, str]] = []
        self._query: list[tuple[str, str]] = []
        self._content_type: Optional[str] = None
        self._has_body = has_body
        self._body: Optional[RequestBody] = None
        self._form_body = FormBody() if is_form_encoded else None
        self._multipart_body = MultipartBody() if is_multipart else None

        for name, value in headers or ():
            self.add_header(name, value)

    def set_relative_url(self, relative_url: str) -> None:
        self._relative_url = relative_url

    def add_header(self, name: str, value: str) -> None:
        if name.lower() == HEADER_CONTENT_TYPE.lower():
            self._content_type = value
        else:
            self._headers.append((name, value))

    def add_path_param(self, name: str, value: str, encoded: bool) -> None:
        if self._relative_url is None:
            raise ValueError(
                f'Path parameter "{name}" requires a relative URL to substitute into.'
            )
        if not encoded:
            value = encode_path_segment(value)
        self._relative_url = self._relative_url.replace("{" + name + "}", value)

    def add_query_param(self, name: str, value: str, encoded: bool) -> None:
        if not encoded:
            name = encode_query_component(name)
            value = encode_query_component(value)
        self._query.append((name, value))

    def add_form_field(self, name: str, value: str, encoded: bool) -> None:
        if self._form_body is None:
            raise ValueError("Form fields can only be added to form-encoded requests.")
        self._form_body.add(name, value, encoded)

    def add_part(self, headers: HeaderList, body: RequestBody) -> None:
        if self._multipart_body is None:
            raise ValueError("Parts can only be added to multipart requests.")
        self._multipart_body.add_part(headers, body)

    def set_body(self, body: RequestBody) -> None:
        self._body = body

    @property
    def url(self) -> URL:
        if self._relative_url is None:
            raise ValueError("Relative URL was never set.")

        relative_url = self._relative_url
        if self._query:
            query = "&".join(f"{name}={value}" for name, value in self._query)
            separator = "&" if "?" in relative_url else "?"
            relative_url = f"{relative_url}{separator}{query}"

        return self._base_url.join(relative_url)

    def _resolve_body(self) -> Optional[RequestBody]:
        if self._body is not None:
            return self._body
        if self._form_body is not None:
            return self._form_body.build()
        if self._multipart_body is not None:
            return self._multipart_body.build()
        if self._has_body:
            return RequestBody(content=b"")
        return None

    def build(self) -> Request:
        url = self.url
        body = self._resolve_body()
        headers = list(self._headers)

        content_type = self._content_type
        if content_type is None and body is not None:
            content_type = body.content_type
        if content_type is not None:
            headers.append((HEADER_CONTENT_TYPE, content_type))

        return Request(
            self._method,
            url,
            headers=headers,
            content=body.content if body is not None else None,
        )
