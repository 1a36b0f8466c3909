#!/usr/bin/env python3
"""
NEAR Exporter Data Models
Node documents parsed from RPC responses and the metric samples derived from them
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import DecodeError


def _expect_object(doc: Any, what: str) -> Dict[str, Any]:
    if not isinstance(doc, dict):
        raise DecodeError(f"{what}: expected a JSON object, got {type(doc).__name__}")
    return doc


def _int_field(doc: Dict[str, Any], key: str, what: str) -> int:
    value = doc.get(key)
    if value is None:
        return 0
    # bool is a subclass of int, and the node never sends one here
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"{what}: field '{key}' is not an integer: {value!r}")
    return value


def _bool_field(doc: Dict[str, Any], key: str, what: str) -> bool:
    value = doc.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DecodeError(f"{what}: field '{key}' is not a boolean: {value!r}")
    return value


def _str_field(doc: Dict[str, Any], key: str, what: str) -> str:
    # null decodes to the empty string; a null stake then fails as one invalid sample
    value = doc.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"{what}: field '{key}' is not a string: {value!r}")
    return value


@dataclass
class NodeStatus:
    """Subset of the node's /status document"""
    syncing: bool
    chain_id: Optional[str] = None
    version: Optional[str] = None
    latest_block_height: Optional[int] = None

    @classmethod
    def from_dict(cls, doc: Any) -> "NodeStatus":
        doc = _expect_object(doc, "status")
        sync_info = doc.get("sync_info")
        if not isinstance(sync_info, dict):
            raise DecodeError("status: missing 'sync_info' object")
        syncing = sync_info.get("syncing")
        if not isinstance(syncing, bool):
            raise DecodeError(f"status: 'sync_info.syncing' is not a boolean: {syncing!r}")

        version = doc.get("version")
        height = sync_info.get("latest_block_height")
        return cls(
            syncing=syncing,
            chain_id=doc.get("chain_id"),
            version=version.get("version") if isinstance(version, dict) else None,
            latest_block_height=height if isinstance(height, int) else None,
        )


@dataclass
class ValidatorRecord:
    """One entry of current_validators"""
    account_id: str
    is_slashed: bool
    num_expected_blocks: int
    num_produced_blocks: int
    stake: str
    public_key: str = ""
    shards: List[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, doc: Any) -> "ValidatorRecord":
        doc = _expect_object(doc, "validator")
        what = f"validator {doc.get('account_id', '?')}"
        shards = doc.get("shards") or []
        if not isinstance(shards, list):
            raise DecodeError(f"{what}: field 'shards' is not a list: {shards!r}")
        return cls(
            account_id=_str_field(doc, "account_id", what),
            is_slashed=_bool_field(doc, "is_slashed", what),
            num_expected_blocks=_int_field(doc, "num_expected_blocks", what),
            num_produced_blocks=_int_field(doc, "num_produced_blocks", what),
            stake=_str_field(doc, "stake", what),
            public_key=_str_field(doc, "public_key", what),
            shards=shards,
        )


@dataclass
class ValidatorSet:
    """Result of the `validators` JSON-RPC method"""
    epoch_start_height: int
    current_validators: List[ValidatorRecord] = field(default_factory=list)
    next_validators: int = 0

    @classmethod
    def from_dict(cls, doc: Any) -> "ValidatorSet":
        doc = _expect_object(doc, "validators result")
        current = doc.get("current_validators") or []
        if not isinstance(current, list):
            raise DecodeError("validators result: 'current_validators' is not a list")
        upcoming = doc.get("next_validators") or []
        return cls(
            epoch_start_height=_int_field(doc, "epoch_start_height", "validators result"),
            current_validators=[ValidatorRecord.from_dict(item) for item in current],
            next_validators=len(upcoming) if isinstance(upcoming, list) else 0,
        )


@dataclass(frozen=True)
class MetricDescriptor:
    """Statically declared gauge: name, help text and label schema"""
    name: str
    documentation: str
    labelnames: Tuple[str, ...] = ()


ACTIVE_VALIDATORS = MetricDescriptor(
    "near_active_validators", "Total number of active validators")
EPOCH_START_HEIGHT = MetricDescriptor(
    "near_epoch_start_height", "Current epoch's start height")
VALIDATOR_STAKE = MetricDescriptor(
    "near_validator_stake", "Validator's stake", ("account_id",))
VALIDATOR_EXPECTED_BLOCKS = MetricDescriptor(
    "near_validator_expected_blocks", "Validators's expected blocks", ("account_id",))
VALIDATOR_PRODUCED_BLOCKS = MetricDescriptor(
    "near_validator_produced_blocks", "Validator's actual produced blocks", ("account_id",))
VALIDATOR_IS_SLASHED = MetricDescriptor(
    "near_validator_is_slashed", "Whether the validator is slashed", ("account_id",))

# Single source for both valid emission and abort fan-out
DESCRIPTORS: Tuple[MetricDescriptor, ...] = (
    ACTIVE_VALIDATORS,
    EPOCH_START_HEIGHT,
    VALIDATOR_STAKE,
    VALIDATOR_EXPECTED_BLOCKS,
    VALIDATOR_PRODUCED_BLOCKS,
    VALIDATOR_IS_SLASHED,
)


@dataclass
class MetricSample:
    """A single gauge data point, either valid (value) or invalid (error)"""
    descriptor: MetricDescriptor
    labels: Dict[str, str] = field(default_factory=dict)
    value: Optional[float] = None
    error: Optional[str] = None

    @classmethod
    def valid(cls, descriptor: MetricDescriptor, value: float, **labels: str) -> "MetricSample":
        return cls(descriptor=descriptor, labels=dict(labels), value=float(value))

    @classmethod
    def invalid(cls, descriptor: MetricDescriptor, error: str, **labels: str) -> "MetricSample":
        return cls(descriptor=descriptor, labels=dict(labels), error=error)

    @property
    def is_valid(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "metric": self.descriptor.name,
            "labels": dict(self.labels),
        }
        if self.is_valid:
            data["value"] = self.value
        else:
            data["error"] = self.error
        return data


@dataclass
class CollectionResult:
    """Samples of one scrape, plus the cause when the scrape was aborted"""
    samples: List[MetricSample] = field(default_factory=list)
    abort_cause: Optional[str] = None

    @property
    def aborted(self) -> bool:
        return self.abort_cause is not None

    @property
    def status(self) -> str:
        """success: all valid; partial: some invalid; error: aborted"""
        if self.aborted:
            return "error"
        if any(not s.is_valid for s in self.samples):
            return "partial"
        return "success"
