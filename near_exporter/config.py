#!/usr/bin/env python3
"""
Exporter Configuration
Built once at startup and passed to the collector and server
"""

import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

RPC_ADDR_ENV = "NEAR_RPC_ADDR"
LISTEN_ADDR_ENV = "LISTEN_ADDR"
TIMEOUT_ENV = "NEAR_RPC_TIMEOUT"

DEFAULT_LISTEN_ADDR = ":8080"
DEFAULT_TIMEOUT = 2.0


@dataclass(frozen=True)
class ExporterConfig:
    """Validated exporter settings"""
    rpc_addr: str
    listen_addr: str = DEFAULT_LISTEN_ADDR
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        if not self.rpc_addr:
            raise ConfigurationError(f"Please specify {RPC_ADDR_ENV}")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")

    @property
    def status_url(self) -> str:
        return self.rpc_addr.rstrip("/") + "/status"

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        rpc_addr: Optional[str] = None,
        listen_addr: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> "ExporterConfig":
        """
        Build configuration from the environment

        Args:
            environ: Mapping to read from (defaults to os.environ)
            rpc_addr: Explicit RPC address, overrides NEAR_RPC_ADDR
            listen_addr: Explicit listen address, overrides LISTEN_ADDR
            timeout: Explicit per-request timeout in seconds, overrides NEAR_RPC_TIMEOUT

        Raises:
            ConfigurationError: if the RPC address is missing or a value is malformed
        """
        env = os.environ if environ is None else environ

        if timeout is None:
            raw_timeout = env.get(TIMEOUT_ENV)
            if raw_timeout:
                try:
                    timeout = float(raw_timeout)
                except ValueError:
                    raise ConfigurationError(f"{TIMEOUT_ENV} is not a number: {raw_timeout!r}")
            else:
                timeout = DEFAULT_TIMEOUT

        return cls(
            rpc_addr=rpc_addr or env.get(RPC_ADDR_ENV, ""),
            listen_addr=listen_addr or env.get(LISTEN_ADDR_ENV) or DEFAULT_LISTEN_ADDR,
            timeout=timeout,
        )
