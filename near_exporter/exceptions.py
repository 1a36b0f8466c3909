"""
Custom exceptions for near-exporter
"""

from typing import Optional


class NearExporterException(Exception):
    """Base exception for near-exporter"""
    pass


class ConfigurationError(NearExporterException):
    """Missing or invalid startup configuration"""
    pass


class CollectionError(NearExporterException):
    """Base class for errors raised while collecting a scrape"""
    pass


class TransportError(CollectionError):
    """Connection refused, reset or timed out"""
    
    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"request to {url} failed: {message}")


class HTTPStatusError(CollectionError):
    """Node answered with a non-success status code"""
    
    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"status code {status_code}, response: {body}")


class DecodeError(CollectionError):
    """Response body is not the document we expected"""
    pass


class RPCApplicationError(CollectionError):
    """Well-formed JSON-RPC envelope carrying a non-zero error code"""
    
    def __init__(self, code: int, message: str = "", data: Optional[str] = None):
        self.code = code
        self.message = message
        self.data = data
        detail = f"JSONRPC error {code}: {message}"
        if data:
            detail += f" ({data})"
        super().__init__(detail)


class SyncingError(CollectionError):
    """Node is still catching up with the chain head"""
    
    def __init__(self, message: str = "node is syncing, validator metrics cannot be reported"):
        super().__init__(message)


class SampleConversionError(NearExporterException):
    """A single field could not be converted into a sample value"""
    
    def __init__(self, account_id: str, raw: str):
        self.account_id = account_id
        self.raw = raw
        super().__init__(f"invalid stake: {raw}")
