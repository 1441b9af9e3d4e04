from dataclasses import dataclass, field
from logging import getLogger
from typing import Any, Optional

from httpx import Request

from .._http import RequestBuilder
from ..actions import RequestAction

logger = getLogger(__name__)


@dataclass(frozen=True)
class RequestFactory:
    """Turns the arguments of one service call into an ``httpx.Request``.

    ``actions`` is aligned with the declared parameters of the service method.
    Each call gets a fresh ``RequestBuilder``; actions are applied to it in
    order and the first failure aborts the whole build.
    """

    method: str
    base_url: str
    relative_url: Optional[str] = None
    headers: tuple[tuple[str, str], ...] = ()
    has_body: bool = False
    is_form_encoded: bool = False
    is_multipart: bool = False
    actions: tuple[RequestAction, ...] = field(default_factory=tuple)

    def new_builder(self) -> RequestBuilder:
        return RequestBuilder(
            self.method,
            self.base_url,
            self.relative_url,
            self.headers,
            has_body=self.has_body,
            is_form_encoded=self.is_form_encoded,
            is_multipart=self.is_multipart,
        )

    def create(self, *args: Any) -> Request:
        if len(args) != len(self.actions):
            raise ValueError(
                f"Argument count ({len(args)}) doesn't match expected count ({len(self.actions)})"
            )

        builder = self.new_builder()
        for action, value in zip(self.actions, args):
            action.apply(builder, value).raise_for_error()

        request = builder.build()
        logger.debug(f"Request: {request.method} {request.url}")
        return request
