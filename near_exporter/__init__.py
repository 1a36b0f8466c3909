"""
near-exporter: Prometheus exporter for NEAR validator set and sync state
"""

from .collector import CollectionOrchestrator, NearCollector, abort_samples
from .config import ExporterConfig
from .fetchers import RpcSession, SyncStatusChecker, ValidatorSetFetcher
from .mapper import SampleMapper
from .models import (
    DESCRIPTORS,
    CollectionResult,
    MetricDescriptor,
    MetricSample,
    NodeStatus,
    ValidatorRecord,
    ValidatorSet,
)
from .utils import setup_logging
from .exceptions import *


__version__ = "1.0.0"
__author__ = "NEAR Exporter Team"

__all__ = [
    "CollectionOrchestrator",
    "NearCollector",
    "abort_samples",
    "ExporterConfig",
    "RpcSession",
    "SyncStatusChecker",
    "ValidatorSetFetcher",
    "SampleMapper",
    "DESCRIPTORS",
    "CollectionResult",
    "MetricDescriptor",
    "MetricSample",
    "NodeStatus",
    "ValidatorRecord",
    "ValidatorSet",
    "setup_logging",
    "NearExporterException",
    "ConfigurationError",
    "CollectionError",
    "TransportError",
    "HTTPStatusError",
    "DecodeError",
    "RPCApplicationError",
    "SyncingError",
    "SampleConversionError"
]
