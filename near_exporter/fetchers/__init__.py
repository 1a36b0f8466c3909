"""
NEAR Node Fetchers
Remote calls made against the node's RPC interface during a scrape
"""

from .base import RpcSession
from .status import SyncStatusChecker
from .validators import ValidatorSetFetcher, VALIDATORS_REQUEST

__all__ = [
    'RpcSession',
    'SyncStatusChecker',
    'ValidatorSetFetcher',
    'VALIDATORS_REQUEST'
]
