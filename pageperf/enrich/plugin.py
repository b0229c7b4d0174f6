from __future__ import annotations
import logging
from typing import Any, Dict, Mapping, Optional

from ..events import PERFORMANCE_KEY
from .filter import should_enrich
from .metrics import derive_metrics, first_navigation_timing
from .rewriter import rewrite

logger = logging.getLogger(__name__)


def process_event(event: Mapping[str, Any], log: Optional[logging.Logger] = None) -> Mapping[str, Any]:
    """
    Swap the nested $performance property of a $pageview for flat
    $performance_* metrics plus a $performance_raw string.

    Other events come back as the very same object. Never raises: on an
    unexpected failure the input is returned untouched.
    """
    log = log or logger
    try:
        if not should_enrich(event, log):
            return event
        raw = event["properties"][PERFORMANCE_KEY]
        nav = first_navigation_timing(raw, log)
        metrics = derive_metrics(nav, log)
        out = rewrite(event, metrics, raw)
    except Exception:
        log.exception("performance enrichment failed for event %s", _event_id(event))
        return event
    log.debug("processed pageview event %s (%d metrics)", _event_id(event), len(metrics))
    return out


def _event_id(event: Any) -> Optional[str]:
    try:
        return event.get("uuid")
    except AttributeError:
        return None
