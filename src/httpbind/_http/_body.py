import uuid
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .._utils import encode_form_component
from .._utils.constants import (
    HEADER_CONTENT_TYPE,
    MEDIA_TYPE_FORM,
    MEDIA_TYPE_MULTIPART_FORM,
)

HeaderList = Sequence[tuple[str, str]]


@dataclass(frozen=True)
class RequestBody:
    """Encoded payload of a request body or a multipart part."""

    content: bytes
    content_type: Optional[str] = None

    def with_content_type(self, content_type: str) -> "RequestBody":
        return RequestBody(content=self.content, content_type=content_type)

    @property
    def content_length(self) -> int:
        return len(self.content)


class FormBody:
    """Accumulates ``application/x-www-form-urlencoded`` fields in insertion order."""

    def __init__(self) -> None:
        self._pairs: list[tuple[str, str]] = []

    def add(self, name: str, value: str, encoded: bool = False) -> None:
        if not encoded:
            name = encode_form_component(name)
            value = encode_form_component(value)
        self._pairs.append((name, value))

    @property
    def pairs(self) -> list[tuple[str, str]]:
        return list(self._pairs)

    def build(self) -> RequestBody:
        content = "&".join(f"{name}={value}" for name, value in self._pairs)
        return RequestBody(
            content=content.encode("utf-8"), content_type=MEDIA_TYPE_FORM
        )


@dataclass
class MultipartBody:
    """Accumulates multipart parts, each with its own headers and body.

    Parts are written in insertion order. The part body's content type, if
    any, is emitted as the part's ``Content-Type`` header.
    """

    boundary: str = field(default_factory=lambda: uuid.uuid4().hex)
    parts: list[tuple[tuple[tuple[str, str], ...], RequestBody]] = field(
        default_factory=list
    )

    def add_part(self, headers: HeaderList, body: RequestBody) -> None:
        for name, _ in headers:
            if name.lower() == HEADER_CONTENT_TYPE.lower():
                raise ValueError(
                    f"Unexpected header: {name}. Use the part body's content type instead."
                )
        self.parts.append((tuple(headers), body))

    @property
    def content_type(self) -> str:
        return f"{MEDIA_TYPE_MULTIPART_FORM}; boundary={self.boundary}"

    def build(self) -> RequestBody:
        if not self.parts:
            raise ValueError("Multipart body must have at least one part.")

        delimiter = f"--{self.boundary}".encode("ascii")
        chunks: list[bytes] = []
        for headers, body in self.parts:
            chunks.append(delimiter + b"\r\n")
            for name, value in headers:
                chunks.append(f"{name}: {value}\r\n".encode("utf-8"))
            if body.content_type is not None:
                chunks.append(
                    f"{HEADER_CONTENT_TYPE}: {body.content_type}\r\n".encode("utf-8")
                )
            chunks.append(f"Content-Length: {body.content_length}\r\n".encode("ascii"))
            chunks.append(b"\r\n")
            chunks.append(body.content)
            chunks.append(b"\r\n")
        chunks.append(delimiter + b"--\r\n")

        return RequestBody(content=b"".join(chunks), content_type=self.content_type)
