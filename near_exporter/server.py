#!/usr/bin/env python3
"""
Metrics Server
Serves /metrics for the NEAR collector on the configured listen address
"""

import time
import logging
from typing import Tuple

from prometheus_client import CollectorRegistry, start_http_server

from .collector import CollectionOrchestrator, NearCollector
from .config import ExporterConfig
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def parse_listen_addr(listen_addr: str) -> Tuple[str, int]:
    """Split ":8080", "127.0.0.1:9333" or "8080" into (host, port)"""
    host, sep, port_str = listen_addr.rpartition(":")
    if not sep:
        host = ""
    host = host.strip("[]") or "0.0.0.0"

    try:
        port = int(port_str)
    except ValueError:
        raise ConfigurationError(f"invalid listen address: {listen_addr!r}")
    if not 0 <= port <= 65535:
        raise ConfigurationError(f"listen port out of range: {port}")
    return host, port


def build_registry(config: ExporterConfig) -> CollectorRegistry:
    registry = CollectorRegistry()
    registry.register(NearCollector(CollectionOrchestrator.from_config(config)))
    return registry


def serve(config: ExporterConfig):
    """Start the metrics endpoint and block until interrupted"""
    host, port = parse_listen_addr(config.listen_addr)
    registry = build_registry(config)

    server, thread = start_http_server(port, addr=host, registry=registry)
    logger.info(f"Serving NEAR metrics on http://{host}:{port}/metrics (rpc={config.rpc_addr})")

    try:
        while thread.is_alive():
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.shutdown()
