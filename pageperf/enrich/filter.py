from __future__ import annotations
import logging
from typing import Any, Mapping, Optional

from ..events import PAGEVIEW, PERFORMANCE_KEY

logger = logging.getLogger(__name__)


def _absent(value: Any) -> bool:
    # what a browser-side `!value` check treats as missing; {} and [] count as present
    return value is None or value is False or value == "" or value == 0


def should_enrich(event: Mapping[str, Any], log: Optional[logging.Logger] = None) -> bool:
    log = log or logger
    if not isinstance(event, Mapping):
        log.debug("event is a %s, not a mapping. not processing", type(event).__name__)
        return False
    kind = event.get("event")
    if kind != PAGEVIEW:
        log.debug("event is %s. not processing", kind)
        return False
    props = event.get("properties")
    if not isinstance(props, Mapping) or _absent(props.get(PERFORMANCE_KEY)):
        log.debug("event has no performance info. not processing")
        return False
    return True
