"""
Tests for the status checker and validator fetcher
"""

import threading
from unittest.mock import ANY, patch

import pytest
import requests

from near_exporter.exceptions import (
    DecodeError,
    HTTPStatusError,
    RPCApplicationError,
    TransportError,
)
from near_exporter.fetchers import (
    VALIDATORS_REQUEST,
    RpcSession,
    SyncStatusChecker,
    ValidatorSetFetcher,
)

from .conftest import make_response, status_doc, validators_envelope, validator

RPC = "http://node.test:3030"


@pytest.fixture
def rpc(fake_session):
    return RpcSession(timeout=2.0, session=fake_session)


class TestRpcSession:
    """Test RpcSession transport and error mapping"""

    def test_default_session_has_pooled_adapter(self):
        """Default sessions attempt each request once"""
        rpc = RpcSession()
        adapter = rpc.session.get_adapter("http://node.test")
        assert adapter.max_retries.total == 0
        rpc.close()

    def test_timeout_becomes_transport_error(self, rpc, fake_session):
        fake_session.request.side_effect = requests.exceptions.ReadTimeout("read timed out")
        with pytest.raises(TransportError) as exc_info:
            rpc.request_json("GET", RPC + "/status")
        assert "timeout after 2.0s" in str(exc_info.value)

    def test_connection_error_becomes_transport_error(self, rpc, fake_session):
        fake_session.request.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(TransportError):
            rpc.request_json("GET", RPC + "/status")

    def test_passes_timeout(self, rpc, fake_session):
        """Requests carry the configured timeout and stream the body"""
        fake_session.request.return_value = make_response(payload={})
        rpc.request_json("GET", RPC + "/status")
        fake_session.request.assert_called_once_with(
            "GET", RPC + "/status", timeout=2.0, stream=True)

    def test_slow_body_hits_overall_deadline(self, rpc, fake_session):
        """A body trickling in past the timeout fails even if no single read stalls"""
        response = make_response(payload={})
        response.iter_content.return_value = [b'{"sync_info":', b' {}}']
        fake_session.request.return_value = response

        with patch("near_exporter.fetchers.base.time") as mock_time:
            mock_time.monotonic.side_effect = [0.0, 1.0, 2.5]
            with pytest.raises(TransportError) as exc_info:
                rpc.request_json("GET", RPC + "/status")

        assert "body still arriving" in str(exc_info.value)
        response.close.assert_called_once()

    def test_body_read_error_becomes_transport_error(self, rpc, fake_session):
        response = make_response(payload={})
        response.iter_content.side_effect = requests.exceptions.ChunkedEncodingError("reset")
        fake_session.request.return_value = response

        with pytest.raises(TransportError):
            rpc.request_json("GET", RPC + "/status")
        response.close.assert_called_once()

    def test_response_closed_after_read(self, rpc, fake_session):
        response = make_response(payload={"ok": True})
        fake_session.request.return_value = response

        assert rpc.request_json("GET", RPC + "/status") == {"ok": True}
        response.close.assert_called_once()

    def test_session_per_thread_shares_adapter(self):
        """Each scrape thread gets its own session over one connection pool"""
        rpc = RpcSession()
        sessions = []

        def grab():
            sessions.append(rpc.session)

        threads = [threading.Thread(target=grab) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(sessions) == 2
        assert sessions[0] is not sessions[1]
        for session in sessions:
            assert session.get_adapter("http://node.test") is rpc.adapter
            assert session.get_adapter("https://node.test") is rpc.adapter
        assert rpc.session is rpc.session
        rpc.close()

    def test_injected_session_is_used_as_is(self, fake_session):
        rpc = RpcSession(session=fake_session)
        assert rpc.session is fake_session


class TestSyncStatusChecker:
    """Test SyncStatusChecker against canned /status responses"""

    @pytest.fixture
    def checker(self, rpc):
        return SyncStatusChecker(rpc, RPC + "/status")

    @pytest.mark.parametrize("syncing", [True, False])
    def test_returns_flag_verbatim(self, checker, fake_session, syncing):
        fake_session.request.return_value = make_response(payload=status_doc(syncing=syncing))
        assert checker.check_sync_status() is syncing

    def test_non_200(self, checker, fake_session):
        """Non-200 status carries the code and body"""
        fake_session.request.return_value = make_response(status_code=503, text="busy")
        with pytest.raises(HTTPStatusError) as exc_info:
            checker.check_sync_status()
        assert exc_info.value.status_code == 503
        assert str(exc_info.value) == "status code 503, response: busy"

    def test_not_json(self, checker, fake_session):
        fake_session.request.return_value = make_response(text="<html>")
        with pytest.raises(DecodeError):
            checker.check_sync_status()

    def test_json_without_sync_info(self, checker, fake_session):
        fake_session.request.return_value = make_response(payload={"chain_id": "mainnet"})
        with pytest.raises(DecodeError):
            checker.check_sync_status()


class TestValidatorSetFetcher:
    """Test ValidatorSetFetcher JSON-RPC handling"""

    @pytest.fixture
    def fetcher(self, rpc):
        return ValidatorSetFetcher(rpc, RPC)

    def test_request_envelope(self, fetcher, fake_session):
        """The validators call is one fixed POST body"""
        fake_session.request.return_value = make_response(payload=validators_envelope())
        fetcher.get_validator_info()

        fake_session.request.assert_called_once_with(
            "POST", RPC, timeout=ANY, stream=True,
            json={"jsonrpc": "2.0", "id": 1, "method": "validators", "params": [None]},
            headers={"content-type": "application/json"},
        )
        assert VALIDATORS_REQUEST["params"] == [None]

    def test_parses_result(self, fetcher, fake_session, two_validators):
        fake_session.request.return_value = make_response(
            payload=validators_envelope(current=two_validators, epoch_start_height=1234))
        validator_set = fetcher.get_validator_info()

        assert validator_set.epoch_start_height == 1234
        assert [r.account_id for r in validator_set.current_validators] == ["a.near", "b.near"]
        assert validator_set.current_validators[1].is_slashed is True

    def test_rpc_error_with_http_200(self, fetcher, fake_session):
        """A JSON-RPC error inside a 200 response is still an error"""
        fake_session.request.return_value = make_response(payload=validators_envelope(
            error={"code": -32000, "message": "Server error", "data": "unknown epoch"}))
        with pytest.raises(RPCApplicationError) as exc_info:
            fetcher.get_validator_info()
        assert exc_info.value.code == -32000
        assert "unknown epoch" in str(exc_info.value)

    def test_zero_error_code_is_ignored(self, fetcher, fake_session):
        envelope = validators_envelope(current=[validator("a.near", "1", 1, 1, False)])
        envelope["error"] = {"code": 0, "message": "", "data": ""}
        fake_session.request.return_value = make_response(payload=envelope)

        assert len(fetcher.get_validator_info().current_validators) == 1

    def test_non_200(self, fetcher, fake_session):
        fake_session.request.return_value = make_response(status_code=500, text="oops")
        with pytest.raises(HTTPStatusError):
            fetcher.get_validator_info()

    @pytest.mark.parametrize("payload", [
        [1, 2, 3],
        {"id": 1, "jsonrpc": "2.0"},
        {"id": 1, "jsonrpc": "2.0", "error": "broken"},
        {"id": 1, "jsonrpc": "2.0", "result": {"current_validators": "nope"}},
    ])
    def test_malformed_envelope(self, fetcher, fake_session, payload):
        fake_session.request.return_value = make_response(payload=payload)
        with pytest.raises(DecodeError):
            fetcher.get_validator_info()
