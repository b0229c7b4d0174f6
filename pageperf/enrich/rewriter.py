from __future__ import annotations
import json
from typing import Any, Dict, Mapping

from ..events import PERFORMANCE_KEY, PROPERTY_PREFIX, RAW_KEY


def serialize_raw(raw: Any) -> str:
    # same shape as JSON.stringify so downstream tables show one string cell
    return json.dumps(raw, separators=(",", ":"), ensure_ascii=False, default=str)


def rewrite(event: Mapping[str, Any], metrics: Mapping[str, float], raw: Any) -> Dict[str, Any]:
    """
    Build a new event whose properties carry the flat $performance_* values
    and a serialized copy of the raw signals instead of the nested
    $performance structure. Neither `event` nor its properties are mutated.
    """
    props = {k: v for k, v in (event.get("properties") or {}).items() if k != PERFORMANCE_KEY}
    props[RAW_KEY] = serialize_raw(raw)
    for name, value in metrics.items():
        props[PROPERTY_PREFIX + name] = value
    out = dict(event)
    out["properties"] = props
    return out
