import asyncio
import inspect
import random
import time
from datetime import datetime
from email.utils import parsedate_to_datetime
from logging import getLogger
from typing import Any, Callable, Optional, get_type_hints

from httpx import (
    AsyncClient,
    Client,
    ConnectTimeout,
    Headers,
    HTTPStatusError,
    Request,
    Response,
    Timeout,
    TimeoutException,
)
from pydantic import TypeAdapter
from tenacity import (
    AsyncRetrying,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from .._config import Config
from .._utils.constants import HEADER_RETRY_AFTER
from ..converters import ConverterRegistry, ConverterResolver
from ..models.exceptions import EnrichedException
from ._method_parser import parse_request_factory
from ._request_factory import RequestFactory


def is_retryable_exception(exception: BaseException) -> bool:
    if isinstance(exception, EnrichedException):
        return 500 <= exception.status_code < 600
    return isinstance(exception, (ConnectTimeout, TimeoutException))


class BaseService:
    """Base class for declarative HTTP services.

    Subclasses declare methods with ``@get``, ``@post`` and friends. The first
    call to such a method parses its signature into a ``RequestFactory``, which
    is cached for the lifetime of the service.

    Examples:
        ```python
        class RepoService(BaseService):
            @get("users/{user}/repos")
            def list_repos(self, user: Annotated[str, Path("user")]) -> list[Repo]: ...


        service = RepoService(Config(base_url="https://api.github.com/"))
        repos = service.list_repos("octocat")
        ```
    """

    def __init__(
        self,
        config: Config,
        resolver: Optional[ConverterResolver] = None,
        *,
        client: Optional[Client] = None,
        async_client: Optional[AsyncClient] = None,
    ) -> None:
        self._logger = getLogger("httpbind")
        self._config = config
        self._resolver = resolver or ConverterRegistry()
        self._factories: dict[Callable[..., Any], RequestFactory] = {}

        self._client = client or Client(timeout=config.timeout)
        self._client_async = async_client or AsyncClient(timeout=config.timeout)

        super().__init__()

    @property
    def default_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            **self._config.default_headers,
            **self.custom_headers,
        }

    @property
    def custom_headers(self) -> dict[str, str]:
        return {}

    def request_factory(self, method: Callable[..., Any]) -> RequestFactory:
        """Return the cached ``RequestFactory`` for a decorated method."""
        method = getattr(method, "__func__", method)
        factory = self._factories.get(method)
        if factory is None:
            factory = parse_request_factory(
                method, self._config.base_url, self._resolver
            )
            self._factories[method] = factory
        return factory

    def _parse_retry_after(self, headers: Headers) -> float:
        """Parse Retry-After header (RFC 6585/7231).

        Args:
            headers: HTTP response headers

        Returns:
            float: Seconds to wait before retry (minimum 0.0, default 1.0 if missing/invalid).
        """
        DEFAULT_RETRY_AFTER = 1.0
        retry_after = headers.get(HEADER_RETRY_AFTER)
        if not retry_after:
            return DEFAULT_RETRY_AFTER

        try:
            return max(float(retry_after), 0.0)
        except ValueError:
            pass

        try:
            retry_date = parsedate_to_datetime(retry_after)
            delta = (retry_date - datetime.now(retry_date.tzinfo)).total_seconds()
            return max(delta, 0.0)
        except (ValueError, TypeError):
            return DEFAULT_RETRY_AFTER

    def _rate_limit_delay(self, response: Response, attempt: int) -> Optional[float]:
        if response.status_code != 429 or attempt >= self._config.max_retries:
            return None
        retry_after = self._parse_retry_after(response.headers)
        sleep_time = retry_after + random.uniform(0, 0.1 * retry_after)
        self._logger.warning(
            f"Rate limited (429). Retrying after {sleep_time:.2f}s "
            f"(attempt {attempt + 1}/{self._config.max_retries})"
        )
        return sleep_time

    def _retrying(self) -> Retrying:
        return Retrying(
            retry=retry_if_exception(is_retryable_exception),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            stop=stop_after_attempt(self._config.max_retries + 1),
            reraise=True,
        )

    def _async_retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            retry=retry_if_exception(is_retryable_exception),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            stop=stop_after_attempt(self._config.max_retries + 1),
            reraise=True,
        )

    def send(self, request: Request) -> Response:
        for attempt in self._retrying():
            with attempt:
                return self._send_once(request)

    def _send_once(self, request: Request) -> Response:
        self._logger.debug(f"Request: {request.method} {request.url}")
        self._logger.debug(f"HEADERS: {request.headers}")

        for attempt in range(self._config.max_retries + 1):
            response = self._client.send(request)
            sleep_time = self._rate_limit_delay(response, attempt)
            if sleep_time is None:
                break
            response.close()
            time.sleep(sleep_time)

        try:
            response.raise_for_status()
        except HTTPStatusError as e:
            # include the http response in the error message
            response.close()
            raise EnrichedException(e) from e

        return response

    async def send_async(self, request: Request) -> Response:
        async for attempt in self._async_retrying():
            with attempt:
                return await self._send_once_async(request)

    async def _send_once_async(self, request: Request) -> Response:
        self._logger.debug(f"Request: {request.method} {request.url}")
        self._logger.debug(f"HEADERS: {request.headers}")

        for attempt in range(self._config.max_retries + 1):
            response = await self._client_async.send(request)
            sleep_time = self._rate_limit_delay(response, attempt)
            if sleep_time is None:
                break
            await response.aclose()
            await asyncio.sleep(sleep_time)

        try:
            response.raise_for_status()
        except HTTPStatusError as e:
            # include the http response in the error message
            await response.aclose()
            raise EnrichedException(e) from e

        return response

    def _invoke(self, method: Callable[..., Any], values: list[Any]) -> Any:
        request = self._prepare(self.request_factory(method).create(*values))
        response = self.send(request)
        return _adapt_response(method, response)

    async def _invoke_async(self, method: Callable[..., Any], values: list[Any]) -> Any:
        request = self._prepare(self.request_factory(method).create(*values))
        response = await self.send_async(request)
        return _adapt_response(method, response)

    def _prepare(self, request: Request) -> Request:
        request.extensions.setdefault("timeout", Timeout(self._config.timeout).as_dict())
        for name, value in self.default_headers.items():
            if name not in request.headers:
                request.headers[name] = value
        return request

    def close(self) -> None:
        self._client.close()

    async def aclose(self) -> None:
        await self._client_async.aclose()


def _adapt_response(method: Callable[..., Any], response: Response) -> Any:
    """Adapt a response to the method's return annotation.

    ``Response`` (or no annotation) returns the raw response, ``None`` returns
    nothing and any other type is validated from the JSON body with pydantic.
    """
    return_type = get_type_hints(inspect.unwrap(method)).get("return", Response)
    if return_type is Response:
        return response
    if return_type is type(None):
        return None
    return TypeAdapter(return_type).validate_json(response.content)
