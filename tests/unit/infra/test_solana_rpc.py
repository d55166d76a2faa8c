"""Tests for SolanaRPCClient — JSON-RPC communication."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import account_info
from mintcache.exceptions import DecodeError, ExternalServiceError
from mintcache.infra.solana.rpc_client import SolanaRPCClient


@pytest.fixture()
def mock_http():
    return AsyncMock()


@pytest.fixture()
def rpc(mock_http):
    return SolanaRPCClient(
        rpc_url="https://api.mainnet-beta.solana.com",
        http_client=mock_http,
        max_attempts=3,
        backoff_multiplier=0,
    )


def _mock_response(data: dict, status_code: int = 200):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = data
    return resp


class TestGetAccountInfo:
    async def test_returns_decoded_bytes(self, rpc, mock_http):
        mock_http.post.return_value = _mock_response(account_info(b"\x01\x02\x03"))

        result = await rpc.get_account_info("SomeAddress123")
        assert result == b"\x01\x02\x03"

    async def test_missing_account_returns_none(self, rpc, mock_http):
        mock_http.post.return_value = _mock_response(account_info(None))

        result = await rpc.get_account_info("SomeAddress123")
        assert result is None

    async def test_request_params(self, rpc, mock_http):
        mock_http.post.return_value = _mock_response(account_info(None))

        await rpc.get_account_info("Addr")
        call_args = mock_http.post.call_args
        payload = call_args[1]["json"] if "json" in call_args[1] else call_args[0][1]
        assert payload["method"] == "getAccountInfo"
        assert payload["params"][0] == "Addr"
        assert payload["params"][1]["encoding"] == "base64"

    async def test_invalid_base64_raises(self, rpc, mock_http):
        envelope = account_info(b"x")
        envelope["result"]["value"]["data"] = ["@@not base64@@", "base64"]
        mock_http.post.return_value = _mock_response(envelope)

        with pytest.raises(DecodeError):
            await rpc.get_account_info("Addr")

    async def test_missing_data_field_raises(self, rpc, mock_http):
        envelope = account_info(b"x")
        del envelope["result"]["value"]["data"]
        mock_http.post.return_value = _mock_response(envelope)

        with pytest.raises(DecodeError):
            await rpc.get_account_info("Addr")

    async def test_base64_roundtrip_of_real_sized_account(self, rpc, mock_http):
        raw = bytes(range(256)) * 3
        mock_http.post.return_value = _mock_response(account_info(raw))

        assert await rpc.get_account_info("Addr") == raw


class TestGetSlot:
    async def test_returns_slot_number(self, rpc, mock_http):
        mock_http.post.return_value = _mock_response({"jsonrpc": "2.0", "id": 1, "result": 123456789})

        result = await rpc.get_slot()
        assert result == 123456789


class TestRPCErrors:
    async def test_rpc_error_retried_then_raised(self, rpc, mock_http):
        mock_http.post.return_value = _mock_response({
            "jsonrpc": "2.0", "id": 1,
            "error": {"code": -32600, "message": "Invalid request"},
        })

        with pytest.raises(ExternalServiceError, match="Invalid request"):
            await rpc.get_slot()

        assert mock_http.post.call_count == 3

    async def test_http_error_status_raises(self, rpc, mock_http):
        mock_http.post.return_value = _mock_response({}, status_code=503)

        with pytest.raises(ExternalServiceError, match="503"):
            await rpc.get_account_info("Addr")

    async def test_recovers_after_transient_error(self, rpc, mock_http):
        mock_http.post.side_effect = [
            ExternalServiceError("connection reset"),
            _mock_response({"jsonrpc": "2.0", "id": 1, "result": 42}),
        ]

        assert await rpc.get_slot() == 42
        assert mock_http.post.call_count == 2

    async def test_single_attempt_does_not_retry(self, mock_http):
        rpc = SolanaRPCClient("https://rpc.example", http_client=mock_http, max_attempts=1)
        mock_http.post.side_effect = ExternalServiceError("down")

        with pytest.raises(ExternalServiceError):
            await rpc.get_slot()
        assert mock_http.post.call_count == 1

    async def test_decode_error_not_retried(self, rpc, mock_http):
        envelope = account_info(b"x")
        envelope["result"]["value"]["data"] = "not-a-list"
        mock_http.post.return_value = _mock_response(envelope)

        with pytest.raises(DecodeError):
            await rpc.get_account_info("Addr")
        assert mock_http.post.call_count == 1


class TestMalformedResponses:
    @pytest.mark.parametrize("body", [["x"], "ok", None])
    async def test_non_object_body_raises(self, rpc, mock_http, body):
        mock_http.post.return_value = _mock_response(body)

        with pytest.raises(ExternalServiceError, match="non-object"):
            await rpc.get_account_info("Addr")

    async def test_string_error_field(self, rpc, mock_http):
        mock_http.post.return_value = _mock_response({"jsonrpc": "2.0", "id": 1, "error": "rate limited"})

        with pytest.raises(ExternalServiceError, match="rate limited"):
            await rpc.get_account_info("Addr")

    async def test_non_object_value_raises_decode_error(self, rpc, mock_http):
        mock_http.post.return_value = _mock_response({"jsonrpc": "2.0", "id": 1, "result": {"value": "x"}})

        with pytest.raises(DecodeError, match="not an object"):
            await rpc.get_account_info("Addr")

    async def test_non_object_result_raises(self, rpc, mock_http):
        mock_http.post.return_value = _mock_response({"jsonrpc": "2.0", "id": 1, "result": [1, 2]})

        with pytest.raises(ExternalServiceError, match="Unexpected getAccountInfo result"):
            await rpc.get_account_info("Addr")
