import re

import pytest

from httpbind._http import FormBody, MultipartBody, RequestBody, RequestBuilder


@pytest.fixture
def get_builder(base_url: str) -> RequestBuilder:
    return RequestBuilder("get", base_url, "users/{id}/repos")


class TestRequestBuilder:
    def test_method_is_upper_cased(self, get_builder: RequestBuilder):
        get_builder.add_path_param("id", "1", False)
        assert get_builder.build().method == "GET"

    def test_path_param_is_percent_encoded(self, get_builder: RequestBuilder):
        get_builder.add_path_param("id", "a b/c", False)

        request = get_builder.build()

        assert request.url.raw_path == b"/v1/users/a%20b%2Fc/repos"

    def test_encoded_path_param_is_kept(self, get_builder: RequestBuilder):
        get_builder.add_path_param("id", "a/b", True)

        assert get_builder.build().url.path == "/v1/users/a/b/repos"

    def test_path_param_without_relative_url(self, base_url: str):
        builder = RequestBuilder("GET", base_url)

        with pytest.raises(ValueError, match="requires a relative URL"):
            builder.add_path_param("id", "1", False)

    def test_query_params_keep_order_and_duplicates(self, base_url: str):
        builder = RequestBuilder("GET", base_url, "search")
        builder.add_query_param("q", "a&b", False)
        builder.add_query_param("page", "2", False)
        builder.add_query_param("q", "c", False)

        request = builder.build()

        assert request.url.query == b"q=a%26b&page=2&q=c"
        assert request.url.params.get_list("q") == ["a&b", "c"]

    def test_query_params_append_to_existing_query(self, base_url: str):
        builder = RequestBuilder("GET", base_url, "search?sort=asc")
        builder.add_query_param("q", "x", True)

        assert builder.build().url.query == b"sort=asc&q=x"

    def test_relative_url_resolves_against_base(self, base_url: str):
        builder = RequestBuilder("GET", base_url)
        builder.set_relative_url("https://other.example.com/ping")

        assert str(builder.build().url) == "https://other.example.com/ping"

    def test_missing_relative_url(self, base_url: str):
        with pytest.raises(ValueError, match="Relative URL was never set."):
            RequestBuilder("GET", base_url).build()

    def test_headers_keep_duplicates(self, base_url: str):
        builder = RequestBuilder("GET", base_url, "", [("Accept", "text/plain")])
        builder.add_header("X-Tag", "a")
        builder.add_header("X-Tag", "b")

        request = builder.build()

        assert request.headers["Accept"] == "text/plain"
        assert request.headers.get_list("X-Tag") == ["a", "b"]

    def test_content_type_header_overrides_body_type(self, base_url: str):
        builder = RequestBuilder("POST", base_url, "items", has_body=True)
        builder.add_header("Content-Type", "application/vnd.api+json")
        builder.set_body(RequestBody(b"{}", "application/json"))

        request = builder.build()

        assert request.headers.get_list("Content-Type") == ["application/vnd.api+json"]
        assert request.content == b"{}"

    def test_body_method_without_body_sends_empty_content(self, base_url: str):
        request = RequestBuilder("POST", base_url, "ping", has_body=True).build()

        assert request.content == b""

    def test_form_encoded_body(self, base_url: str):
        builder = RequestBuilder("POST", base_url, "login", has_body=True, is_form_encoded=True)
        builder.add_form_field("user name", "a+b", False)
        builder.add_form_field("token", "x%20y", True)

        request = builder.build()

        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert request.content == b"user+name=a%2Bb&token=x%20y"

    def test_form_field_requires_form_encoding(self, base_url: str):
        builder = RequestBuilder("POST", base_url, "login", has_body=True)

        with pytest.raises(ValueError, match="form-encoded"):
            builder.add_form_field("a", "b", False)

    def test_part_requires_multipart(self, base_url: str):
        builder = RequestBuilder("POST", base_url, "upload", has_body=True)

        with pytest.raises(ValueError, match="multipart"):
            builder.add_part((), RequestBody(b"x"))

    def test_multipart_body(self, base_url: str):
        builder = RequestBuilder("POST", base_url, "upload", has_body=True, is_multipart=True)
        builder.add_part(
            (("Content-Disposition", 'form-data; name="doc"'),),
            RequestBody(b"hello", "text/plain"),
        )

        request = builder.build()

        content_type = request.headers["Content-Type"]
        match = re.match(r"multipart/form-data; boundary=(\w+)$", content_type)
        assert match is not None
        boundary = match.group(1)
        assert request.content == (
            f"--{boundary}\r\n"
            'Content-Disposition: form-data; name="doc"\r\n'
            "Content-Type: text/plain\r\n"
            "Content-Length: 5\r\n"
            "\r\n"
            "hello\r\n"
            f"--{boundary}--\r\n"
        ).encode()


class TestFormBody:
    def test_pairs_in_order(self):
        body = FormBody()
        body.add("b", "2")
        body.add("a", "1")

        assert body.pairs == [("b", "2"), ("a", "1")]
        assert body.build() == RequestBody(
            b"b=2&a=1", "application/x-www-form-urlencoded"
        )

    def test_encoded_non_ascii_value_is_utf8(self):
        body = FormBody()
        body.add("name", "caf\u00e9", encoded=True)

        assert body.build().content == b"name=caf\xc3\xa9"

    def test_non_ascii_value_is_percent_encoded(self):
        body = FormBody()
        body.add("name", "caf\u00e9")

        assert body.build().content == b"name=caf%C3%A9"


class TestRequestBody:
    def test_content_length(self):
        assert RequestBody(b"hello").content_length == 5

    def test_empty_body_is_truthy(self):
        body = RequestBody(b"")

        assert body
        assert body.content_length == 0


class TestMultipartBody:
    def test_requires_at_least_one_part(self):
        with pytest.raises(ValueError, match="at least one part"):
            MultipartBody().build()

    def test_rejects_content_type_part_header(self):
        with pytest.raises(ValueError, match="Unexpected header: Content-Type"):
            MultipartBody().add_part((("Content-Type", "text/plain"),), RequestBody(b""))

    def test_part_without_content_type(self):
        body = MultipartBody(boundary="b0undary")
        body.add_part((("X-Part", "1"),), RequestBody(b"raw"))

        assert body.build().content == (
            b"--b0undary\r\nX-Part: 1\r\nContent-Length: 3\r\n\r\nraw\r\n--b0undary--\r\n"
        )
