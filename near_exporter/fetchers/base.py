#!/usr/bin/env python3
"""
RPC Session
Shared HTTP plumbing for the node fetchers: pooled connections, deadlines and error mapping
"""

import json
import logging
import threading
import time
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from ..exceptions import DecodeError, HTTPStatusError, TransportError

logger = logging.getLogger(__name__)

USER_AGENT = "near-exporter/1.0"
CHUNK_SIZE = 8192


class RpcSession:
    """
    HTTP client shared by every scrape

    requests.Session is not documented as thread-safe, so each scrape thread
    gets its own session. All of them mount the same HTTPAdapter, whose
    urllib3 pool is thread-safe, so connections are still pooled across scrapes.
    """

    def __init__(self, timeout: float = 2.0, session: Optional[requests.Session] = None,
                 pool_maxsize: int = 10):
        self.timeout = timeout
        self._shared_session = session
        self._local = threading.local()
        # One attempt per request; the next scrape is the retry
        self.adapter = HTTPAdapter(pool_connections=1, pool_maxsize=pool_maxsize,
                                   max_retries=Retry(total=0, read=False))

    @property
    def session(self) -> requests.Session:
        """Injected session if any, otherwise the calling thread's own session"""
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = self._build_session()
        return session

    def _build_session(self) -> requests.Session:
        session = requests.Session()
        session.mount("http://", self.adapter)
        session.mount("https://", self.adapter)
        session.headers.update({
            "User-Agent": USER_AGENT,
            "Connection": "keep-alive",
        })
        return session

    def _read_body(self, url: str, response, start_time: float) -> bytes:
        """Read the whole body, failing once the request as a whole exceeds the timeout"""
        chunks = []
        try:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                chunks.append(chunk)
                if time.monotonic() - start_time > self.timeout:
                    raise TransportError(url, f"timeout after {self.timeout}s (body still arriving)")
        except requests.exceptions.RequestException as e:
            raise TransportError(url, str(e)) from e
        finally:
            response.close()
        return b"".join(chunks)

    def request_json(self, method: str, url: str, **kwargs) -> Any:
        """
        Issue one request and return the decoded JSON body

        The timeout bounds the whole request, body included, not just the
        connect and the gap between reads.

        Raises:
            TransportError: connection failure or timeout
            HTTPStatusError: status code other than 200
            DecodeError: body is not valid JSON
        """
        start_time = time.monotonic()
        try:
            response = self.session.request(method, url, timeout=self.timeout, stream=True, **kwargs)
        except requests.exceptions.Timeout as e:
            raise TransportError(url, f"timeout after {self.timeout}s ({e})") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(url, str(e)) from e

        body = self._read_body(url, response, start_time)
        logger.debug(f"{method} {url} -> {response.status_code} in {time.monotonic() - start_time:.3f}s")

        if response.status_code != 200:
            raise HTTPStatusError(response.status_code, body.decode("utf-8", errors="replace"))

        try:
            return json.loads(body)
        except ValueError as e:
            preview = body[:200].decode("utf-8", errors="replace")
            raise DecodeError(f"error decoding: {e}, response: {preview}") from e

    def close(self):
        if self._shared_session is not None:
            self._shared_session.close()
        self.adapter.close()
