#!/usr/bin/env python3
"""
Sync Status Checker
Reads the node's /status endpoint to tell whether it is still syncing
"""

import logging

from .base import RpcSession
from ..models import NodeStatus

logger = logging.getLogger(__name__)


class SyncStatusChecker:
    """Queries GET {rpc}/status"""
    
    def __init__(self, rpc: RpcSession, status_url: str):
        self.rpc = rpc
        self.status_url = status_url
    
    def get_status(self) -> NodeStatus:
        doc = self.rpc.request_json("GET", self.status_url)
        status = NodeStatus.from_dict(doc)
        logger.debug(f"Node status: chain={status.chain_id} version={status.version} "
                     f"height={status.latest_block_height} syncing={status.syncing}")
        return status
    
    def check_sync_status(self) -> bool:
        """Return True if the node is currently syncing the chain"""
        return self.get_status().syncing
