#!/usr/bin/env python3
"""
Validator Set Fetcher
Issues the `validators` JSON-RPC call and parses the envelope
"""

import logging
from typing import Any, Dict

from .base import RpcSession
from ..exceptions import DecodeError, RPCApplicationError
from ..models import ValidatorSet

logger = logging.getLogger(__name__)

VALIDATORS_REQUEST: Dict[str, Any] = {
    "jsonrpc": "2.0",
    "id": 1,
    "method": "validators",
    "params": [None],
}


class ValidatorSetFetcher:
    """Queries POST {rpc} with method=validators"""
    
    def __init__(self, rpc: RpcSession, rpc_url: str):
        self.rpc = rpc
        self.rpc_url = rpc_url
    
    @staticmethod
    def _check_rpc_error(envelope: Dict[str, Any]) -> None:
        error = envelope.get("error")
        if not error:
            return
        if not isinstance(error, dict):
            raise DecodeError(f"malformed JSON-RPC error object: {error!r}")
        code = error.get("code", 0)
        if code:
            data = error.get("data")
            raise RPCApplicationError(
                code=code,
                message=str(error.get("message", "")),
                data=str(data) if data is not None else None,
            )
    
    def get_validator_info(self) -> ValidatorSet:
        """
        Fetch the current validator set
        
        Raises:
            TransportError, HTTPStatusError, DecodeError, RPCApplicationError
        """
        envelope = self.rpc.request_json(
            "POST", self.rpc_url,
            json=VALIDATORS_REQUEST,
            headers={"content-type": "application/json"},
        )
        if not isinstance(envelope, dict):
            raise DecodeError(f"JSON-RPC envelope is not an object: {type(envelope).__name__}")
        
        # HTTP 200 can still carry an application-level error
        self._check_rpc_error(envelope)
        
        if "result" not in envelope:
            raise DecodeError("JSON-RPC envelope has neither result nor error")
        validator_set = ValidatorSet.from_dict(envelope["result"])
        logger.debug(f"Fetched {len(validator_set.current_validators)} current validators "
                     f"(epoch start {validator_set.epoch_start_height})")
        return validator_set
