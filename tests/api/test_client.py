"""Tests for URL building, body encoding and response classification."""

from __future__ import annotations

import asyncio
import json
from urllib.parse import parse_qsl, urlsplit

import httpx
import pytest

from buffer_cli.api import (
    BASE_URL,
    BufferAPIError,
    ErrorCode,
    RequestOptions,
    build_url,
    encode_form_body,
    request,
)

TOKEN = "test-token"


def _query(url: str) -> list[tuple[str, str]]:
    return parse_qsl(urlsplit(url).query, keep_blank_values=True)


# =============================================================================
# build_url
# =============================================================================

class TestBuildUrl:
    """Tests for build_url."""

    def test_builds_url_with_access_token(self):
        url = build_url("/profiles.json", "mytoken")
        assert url.startswith("https://api.bufferapp.com/1/profiles.json?")
        assert ("access_token", "mytoken") in _query(url)

    def test_includes_extra_params(self):
        url = build_url("/profiles.json", "mytoken", {"count": "10", "page": "2"})
        query = _query(url)
        assert ("count", "10") in query
        assert ("page", "2") in query
        assert query[0] == ("access_token", "mytoken")

    def test_token_value_is_preserved_exactly(self):
        token = "1/abc+def&x=y ü"
        url = build_url("/user.json", token)
        assert dict(_query(url))["access_token"] == token

    def test_later_access_token_param_wins(self):
        url = build_url("/user.json", "original", {"access_token": "override"})
        query = _query(url)
        assert query == [("access_token", "override")]

    def test_repeated_key_keeps_last_value(self):
        url = build_url("/user.json", TOKEN, {"page": "1", "count": "5"})
        assert dict(_query(url)) == {"access_token": TOKEN, "page": "1", "count": "5"}

    def test_base_url_prefix(self):
        assert build_url("/x", TOKEN).startswith(BASE_URL + "/x")


# =============================================================================
# encode_form_body
# =============================================================================

class TestEncodeFormBody:
    """Tests for form encoding."""

    def test_scalar_fields(self):
        assert encode_form_body({"text": "Hello", "now": "true"}) == "text=Hello&now=true"

    def test_array_values_become_repeated_pairs(self):
        body = encode_form_body({"profile_ids[]": ["a", "b"], "text": "Hi"})
        assert body == "profile_ids%5B%5D=a&profile_ids%5B%5D=b&text=Hi"

    def test_array_interleaved_in_declaration_order(self):
        body = encode_form_body({"text": "Hi", "k": ["1", "2"], "z": "last"})
        assert body == "text=Hi&k=1&k=2&z=last"

    def test_special_characters_are_percent_encoded(self):
        body = encode_form_body({"media[link]": "https://x.io/a?b=c&d", "text": "a b"})
        assert body == "media%5Blink%5D=https%3A%2F%2Fx.io%2Fa%3Fb%3Dc%26d&text=a%20b"

    def test_empty_array_contributes_nothing(self):
        assert encode_form_body({"k": [], "text": "x"}) == "text=x"


# =============================================================================
# request
# =============================================================================

class TestRequestSuccess:
    """Successful responses."""

    @pytest.mark.asyncio
    async def test_get_returns_decoded_json(self, make_client, recorded_requests):
        payload = {"id": "user_1", "name": "Test User", "nested": {"a": [1, 2]}}

        def handler(req: httpx.Request) -> httpx.Response:
            recorded_requests.append(req)
            return httpx.Response(200, json=payload)

        client = make_client(handler)
        result = await request(build_url("/user.json", TOKEN), client=client)

        assert result == payload
        assert recorded_requests[0].method == "GET"
        assert recorded_requests[0].url.params["access_token"] == TOKEN

    @pytest.mark.asyncio
    async def test_post_form_body(self, make_client, recorded_requests):
        def handler(req: httpx.Request) -> httpx.Response:
            recorded_requests.append(req)
            return httpx.Response(200, json={"success": True, "updates": []})

        client = make_client(handler)
        result = await request(
            build_url("/updates/create.json", TOKEN),
            RequestOptions(method="POST", form_body={"profile_ids[]": ["prof_1"], "text": "Hello"}),
            client=client,
        )

        sent = recorded_requests[0]
        assert result == {"success": True, "updates": []}
        assert sent.method == "POST"
        assert sent.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert sent.content == b"profile_ids%5B%5D=prof_1&text=Hello"

    @pytest.mark.asyncio
    async def test_post_json_body(self, make_client, recorded_requests):
        def handler(req: httpx.Request) -> httpx.Response:
            recorded_requests.append(req)
            return httpx.Response(200, json={"ok": True})

        await request(
            build_url("/x.json", TOKEN),
            RequestOptions(method="POST", json_body={"a": 1}),
            client=make_client(handler),
        )

        sent = recorded_requests[0]
        assert sent.headers["Content-Type"] == "application/json"
        assert json.loads(sent.content) == {"a": 1}

    @pytest.mark.asyncio
    async def test_form_body_takes_precedence_over_json(self, make_client, recorded_requests):
        def handler(req: httpx.Request) -> httpx.Response:
            recorded_requests.append(req)
            return httpx.Response(200, json={})

        await request(
            build_url("/x.json", TOKEN),
            RequestOptions(method="POST", form_body={"text": "form"}, json_body={"text": "json"}),
            client=make_client(handler),
        )

        sent = recorded_requests[0]
        assert sent.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert sent.content == b"text=form"

    @pytest.mark.asyncio
    async def test_custom_headers_are_sent(self, make_client, recorded_requests):
        def handler(req: httpx.Request) -> httpx.Response:
            recorded_requests.append(req)
            return httpx.Response(200, json=[])

        await request(
            build_url("/x.json", TOKEN),
            RequestOptions(headers={"X-Trace": "abc"}),
            client=make_client(handler),
        )
        assert recorded_requests[0].headers["X-Trace"] == "abc"

    @pytest.mark.asyncio
    async def test_injected_client_is_left_open(self, make_client):
        client = make_client(lambda req: httpx.Response(200, json=[]))
        await request(build_url("/x.json", TOKEN), client=client)
        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_uses_own_client_when_none_given(self, monkeypatch):
        real_client = httpx.AsyncClient
        transport = httpx.MockTransport(lambda req: httpx.Response(200, json={"id": "1"}))
        monkeypatch.setattr(
            "buffer_cli.api.client.httpx.AsyncClient",
            lambda: real_client(transport=transport),
        )

        assert await request(build_url("/x.json", TOKEN)) == {"id": "1"}


class TestRequestErrors:
    """Status classification."""

    @staticmethod
    async def _fail(make_client, response: httpx.Response) -> BufferAPIError:
        client = make_client(lambda req: response)
        with pytest.raises(BufferAPIError) as excinfo:
            await request(build_url("/profiles.json", TOKEN), client=client)
        return excinfo.value

    @pytest.mark.asyncio
    async def test_429_with_retry_after(self, make_client):
        error = await self._fail(
            make_client,
            httpx.Response(429, json={"error": "Rate limited"}, headers={"Retry-After": "30"}),
        )
        assert error.code == ErrorCode.RATE_LIMITED
        assert error.status == 429
        assert error.retry_after == 30
        assert error.is_rate_limited
        assert "Rate limit exceeded" in error.message

    @pytest.mark.asyncio
    async def test_429_without_retry_after_defaults_to_60(self, make_client):
        error = await self._fail(make_client, httpx.Response(429))
        assert error.code == ErrorCode.RATE_LIMITED
        assert error.retry_after == 60

    @pytest.mark.asyncio
    async def test_429_with_unparseable_retry_after_defaults_to_60(self, make_client):
        error = await self._fail(
            make_client,
            httpx.Response(429, headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"}),
        )
        assert error.retry_after == 60

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403])
    async def test_auth_failures(self, make_client, status):
        error = await self._fail(make_client, httpx.Response(status, json={"error": "Unauthorized"}))
        assert error.code == ErrorCode.AUTH_FAILED
        assert error.status == status
        assert error.retry_after is None
        assert "buffer auth login" in error.message

    @pytest.mark.asyncio
    async def test_500_with_plain_text_body(self, make_client):
        error = await self._fail(make_client, httpx.Response(500, text="Internal Server Error"))
        assert error.code == ErrorCode.API_ERROR
        assert error.status == 500
        assert error.message == "Internal Server Error"

    @pytest.mark.asyncio
    async def test_error_field_is_preferred(self, make_client):
        error = await self._fail(
            make_client,
            httpx.Response(400, json={"error": "Text is required", "message": "ignored"}),
        )
        assert error.message == "Text is required"

    @pytest.mark.asyncio
    async def test_message_field_is_used_without_error(self, make_client):
        error = await self._fail(make_client, httpx.Response(404, json={"message": "Not found"}))
        assert error.message == "Not found"
        assert error.status == 404

    @pytest.mark.asyncio
    async def test_json_without_known_fields_falls_back_to_raw_text(self, make_client):
        error = await self._fail(make_client, httpx.Response(400, text='{"code": 1003}'))
        assert error.message == '{"code": 1003}'

    @pytest.mark.asyncio
    async def test_empty_body_uses_http_status(self, make_client):
        error = await self._fail(make_client, httpx.Response(502))
        assert error.message == "HTTP 502"
        assert error.code == ErrorCode.API_ERROR

    @pytest.mark.asyncio
    async def test_invalid_json_on_success(self, make_client):
        error = await self._fail(make_client, httpx.Response(200, text="<html>"))
        assert error.code == ErrorCode.API_ERROR
        assert error.status == 200

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [200, 204])
    async def test_empty_success_body_is_api_error(self, make_client, status):
        error = await self._fail(make_client, httpx.Response(status))
        assert error.code == ErrorCode.API_ERROR
        assert error.status == status
        assert error.message == f"Empty response body (HTTP {status})"


class TestRequestTransportFailures:
    """Failures before any response is received."""

    @pytest.mark.asyncio
    async def test_network_error(self, make_client):
        def handler(req: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=req)

        with pytest.raises(BufferAPIError) as excinfo:
            await request(build_url("/x.json", TOKEN), client=make_client(handler))

        assert excinfo.value.code == ErrorCode.NETWORK_ERROR
        assert excinfo.value.status == 0
        assert excinfo.value.is_transport_error

    @pytest.mark.asyncio
    async def test_timeout_aborts_call(self, make_client):
        async def slow_handler(req: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return httpx.Response(200, json={})

        with pytest.raises(BufferAPIError) as excinfo:
            await request(
                build_url("/x.json", TOKEN),
                RequestOptions(timeout=0.05),
                client=make_client(slow_handler),
            )

        assert excinfo.value.code == ErrorCode.TIMEOUT
        assert excinfo.value.status == 0

    @pytest.mark.asyncio
    async def test_httpx_timeout_is_classified_as_timeout(self, make_client):
        def handler(req: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=req)

        with pytest.raises(BufferAPIError) as excinfo:
            await request(build_url("/x.json", TOKEN), client=make_client(handler))
        assert excinfo.value.code == ErrorCode.TIMEOUT

    @pytest.mark.asyncio
    async def test_timer_does_not_outlive_successful_call(self, make_client):
        client = make_client(lambda req: httpx.Response(200, json={"ok": True}))
        result = await request(build_url("/x.json", TOKEN), RequestOptions(timeout=0.05), client=client)

        # A leaked timer would cancel this task during the sleep
        await asyncio.sleep(0.1)
        assert result == {"ok": True}

    @pytest.mark.asyncio
    async def test_timer_does_not_outlive_failed_call(self, make_client):
        client = make_client(lambda req: httpx.Response(500, text="boom"))
        with pytest.raises(BufferAPIError):
            await request(build_url("/x.json", TOKEN), RequestOptions(timeout=0.05), client=client)

        await asyncio.sleep(0.1)


class TestBufferAPIError:
    """Tests for the error type itself."""

    def test_to_dict_omits_missing_retry_after(self):
        error = BufferAPIError("nope", ErrorCode.AUTH_FAILED, 401)
        assert error.to_dict() == {"code": "AUTH_FAILED", "message": "nope"}

    def test_to_dict_includes_retry_after(self):
        error = BufferAPIError("slow down", ErrorCode.RATE_LIMITED, 429, retry_after=12)
        assert error.to_dict() == {"code": "RATE_LIMITED", "message": "slow down", "retry_after": 12}

    def test_str_is_message(self):
        assert str(BufferAPIError("boom", ErrorCode.API_ERROR, 500)) == "boom"
