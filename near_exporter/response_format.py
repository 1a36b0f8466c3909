#!/usr/bin/env python3
"""
Standard Response Format for one-shot collection output
"""

import json
from datetime import datetime
from typing import Any, Dict

from .models import CollectionResult


def standard_response(
    result: CollectionResult,
    execution_time_ms: int = 0,
    **meta_fields
) -> Dict[str, Any]:
    """
    Create the data/meta response for a single scrape

    Args:
        result: Outcome of the scrape, as returned by CollectionOrchestrator.run()
        execution_time_ms: Time taken for the scrape
        **meta_fields: Additional metadata fields
    """
    samples = result.samples
    meta = {
        "status": result.status,
        "timestamp": datetime.now().isoformat(),
        "operation": "collect",
        "execution_time_ms": execution_time_ms,
        "total_items": len(samples),
        "invalid_items": sum(1 for s in samples if not s.is_valid),
    }
    if result.aborted:
        meta["abort_cause"] = result.abort_cause
    meta.update(meta_fields)

    return {
        "data": [sample.to_dict() for sample in samples],
        "meta": meta
    }


def format_json(response: Dict[str, Any], pretty: bool = False) -> str:
    """Format response as JSON string"""
    if pretty:
        return json.dumps(response, indent=2, default=str)
    return json.dumps(response, separators=(',', ':'), default=str)
