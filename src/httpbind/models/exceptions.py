from httpx import HTTPStatusError


class EnrichedException(Exception):
    """HTTP status error that carries the request and the response body."""

    def __init__(self, error: HTTPStatusError) -> None:
        self.url = str(error.request.url)
        self.http_method = error.request.method
        self.status_code = error.response.status_code
        try:
            self.response_content = error.response.text
        except Exception:
            self.response_content = ""

        super().__init__(
            f"\n\t{self.http_method} {self.url}"
            f"\n\tStatus code: {self.status_code}"
            f"\n\tResponse content: {self.response_content[:1000]}"
        )
