"""Tests for HTTP request/response logging utilities.

Tests HTTPLogger class and create_logging_client function.
"""

from __future__ import annotations

from unittest.mock import Mock, patch

import httpx
import pytest

from authkit.utils.http_logger import HTTPLogger, create_logging_client


class TestHTTPLogger:
    """Tests for HTTPLogger class."""

    @pytest.mark.asyncio
    async def test_log_request_when_disabled(self) -> None:
        http_logger = HTTPLogger(enabled=False)

        with patch("authkit.utils.http_logger.logger") as mock_logger:
            await http_logger.log_request(Mock(spec=httpx.Request))

            mock_logger.info.assert_not_called()

    @pytest.mark.asyncio
    async def test_log_request_masks_secrets(self) -> None:
        http_logger = HTTPLogger(enabled=True)
        request = httpx.Request(
            "POST",
            "https://api.integrationos.com/internal/v1/settings/get",
            headers={"X-Buildable-Secret": "sk_test_1234567890abcdef"},
            json={"group": "g"},
        )

        with patch("authkit.utils.http_logger.logger") as mock_logger:
            await http_logger.log_request(request)

        kwargs = mock_logger.info.call_args[1]
        assert kwargs["payload"] == {"group": "g"}
        assert kwargs["headers"]["x-buildable-secret"] == "***cdef"

    @pytest.mark.asyncio
    async def test_log_request_with_empty_body(self) -> None:
        http_logger = HTTPLogger(enabled=True)
        request = httpx.Request("GET", "https://api.integrationos.com/v1/public/generate-id/session_id")

        with patch("authkit.utils.http_logger.logger") as mock_logger:
            await http_logger.log_request(request)

        assert mock_logger.info.call_args[1]["payload"] == {}
        mock_logger.debug.assert_not_called()

    @pytest.mark.asyncio
    async def test_log_request_exception_handling(self) -> None:
        http_logger = HTTPLogger(enabled=True)
        request = Mock(spec=httpx.Request)
        request.content = b"{not json"

        with patch("authkit.utils.http_logger.logger") as mock_logger:
            await http_logger.log_request(request)

        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_log_response_names_its_request(self) -> None:
        http_logger = HTTPLogger(enabled=True)
        request = httpx.Request("GET", "https://api.integrationos.com/v1/public/generate-id/session_id")
        response = httpx.Response(200, json={"id": "session_id::abc"}, request=request)

        with patch("authkit.utils.http_logger.logger") as mock_logger:
            await http_logger.log_response(response)

        message, kwargs = mock_logger.info.call_args[0][0], mock_logger.info.call_args[1]
        assert message.startswith("HTTP Response: 200 GET https://api.integrationos.com")
        assert kwargs["body"] == {"id": "session_id::abc"}
        assert kwargs["http_method"] == "GET"

    @pytest.mark.asyncio
    async def test_log_response_invalid_json(self) -> None:
        http_logger = HTTPLogger(enabled=True)
        request = httpx.Request("GET", "https://api.integrationos.com/x")
        response = httpx.Response(502, text="<html>bad gateway</html>", request=request)

        with patch("authkit.utils.http_logger.logger") as mock_logger:
            await http_logger.log_response(response)

        body = mock_logger.info.call_args[1]["body"]
        assert "_error" in body

    def test_sanitize_headers(self) -> None:
        sanitized = HTTPLogger()._sanitize_headers(
            {"x-integrationos-secret": "sk_live_abcdef", "Authorization": "abc", "accept": "*/*"}
        )

        assert sanitized == {"x-integrationos-secret": "***cdef", "Authorization": "***", "accept": "*/*"}


class TestCreateLoggingClient:
    """Tests for create_logging_client."""

    def test_registers_event_hooks(self) -> None:
        client = create_logging_client(enabled=True, timeout=httpx.Timeout(5.0))

        assert len(client.event_hooks["request"]) == 1
        assert len(client.event_hooks["response"]) == 1
        assert client.timeout.read == 5.0

    @pytest.mark.asyncio
    async def test_hooks_run_on_requests(self) -> None:
        client = create_logging_client(enabled=True)
        client._transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"ok": True}))

        with patch("authkit.utils.http_logger.logger") as mock_logger:
            response = await client.get("https://api.integrationos.com/health")
            await client.aclose()

        assert response.json() == {"ok": True}
        messages = [call[0][0] for call in mock_logger.info.call_args_list]
        assert any(message.startswith("HTTP Request: GET") for message in messages)
        assert any(message.startswith("HTTP Response: 200") for message in messages)

    @pytest.mark.asyncio
    async def test_transport_failure_leaves_no_state(self) -> None:
        http_logger = HTTPLogger(enabled=True)

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        client = httpx.AsyncClient(
            transport=httpx.MockTransport(refuse),
            event_hooks={"request": [http_logger.log_request], "response": [http_logger.log_response]},
        )

        with patch("authkit.utils.http_logger.logger") as mock_logger:
            for _ in range(3):
                with pytest.raises(httpx.ConnectError):
                    await client.get("https://api.integrationos.com/internal/v1/settings/get")
            await client.aclose()

        assert mock_logger.info.call_count == 3
        assert vars(http_logger) == {"enabled": True}
