"""
Shared fixtures: canned node documents and a fake requests session
"""

import json
from unittest.mock import Mock

import pytest
import requests


def make_response(status_code=200, payload=None, text=None):
    """Build a Mock shaped like a streamed requests.Response"""
    response = Mock()
    response.status_code = status_code
    if text is None:
        text = json.dumps(payload)
    response.text = text
    response.iter_content.return_value = [text.encode("utf-8")]
    return response


def status_doc(syncing=False):
    return {
        "chain_id": "mainnet",
        "version": {"version": "1.35.0", "build": "abc123"},
        "protocol_version": 63,
        "sync_info": {
            "latest_block_hash": "9Yr8d2Y1bDz",
            "latest_block_height": 100500,
            "latest_block_time": "2026-10-18T10:00:00.000000000Z",
            "syncing": syncing,
        },
        "validator_account_id": "a.near",
    }


def validators_envelope(current=None, epoch_start_height=1234, error=None):
    envelope = {
        "id": 1,
        "jsonrpc": "2.0",
        "result": {
            "current_validators": current if current is not None else [],
            "epoch_start_height": epoch_start_height,
            "next_validators": [],
            "current_proposals": [],
            "prev_epoch_kickout": [],
        },
    }
    if error is not None:
        envelope["error"] = error
        del envelope["result"]
    return envelope


def validator(account_id, stake, expected, produced, slashed):
    return {
        "account_id": account_id,
        "public_key": f"ed25519:{account_id}",
        "is_slashed": slashed,
        "stake": stake,
        "shards": [0],
        "num_expected_blocks": expected,
        "num_produced_blocks": produced,
    }


@pytest.fixture
def two_validators():
    """a.near with a sane stake, b.near with a malformed one"""
    return [
        validator("a.near", "1000000000000000000000000", 100, 99, False),
        validator("b.near", "abc", 50, 50, True),
    ]


@pytest.fixture
def fake_session():
    """Mock session; tests route responses through node_responses()"""
    session = Mock(spec=requests.Session)
    return session


def node_responses(session, status=None, validators=None):
    """Answer GET with `status` and POST with `validators` (response or exception)"""
    def _request(method, url, **kwargs):
        outcome = status if method == "GET" else validators
        if isinstance(outcome, Exception):
            raise outcome
        return outcome
    session.request.side_effect = _request
    return session
