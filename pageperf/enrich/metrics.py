from __future__ import annotations
import logging
import math
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

from pydantic import ValidationError

from ..events import NavigationTiming, PerformanceSignals

logger = logging.getLogger(__name__)


class Metric(NamedTuple):
    name: str                      # suffix of the $performance_<name> property
    needs: Tuple[str, ...]         # navigation timing fields that must be present
    formula: Callable[[NavigationTiming], float]


def _tls_time(n: NavigationTiming) -> float:
    # 0 when the connection was not secured or was reused
    if n.secureConnectionStart <= 0:
        return 0.0
    return n.connectEnd - n.secureConnectionStart


def _compression_saving(n: NavigationTiming) -> float:
    if n.decodedBodySize == 0:
        return math.nan
    return 1 - (n.encodedBodySize / n.decodedBodySize)


METRICS: List[Metric] = [
    Metric("dnsLookupTime", ("domainLookupStart", "domainLookupEnd"),
           lambda n: n.domainLookupEnd - n.domainLookupStart),
    Metric("connectionTime", ("connectStart", "connectEnd"),
           lambda n: n.connectEnd - n.connectStart),
    Metric("tlsTime", ("secureConnectionStart", "connectEnd"), _tls_time),
    Metric("domContentLoaded", ("startTime", "domContentLoadedEventEnd"),
           lambda n: n.domContentLoadedEventEnd - n.startTime),
    Metric("fetchTime", ("fetchStart", "responseEnd"),
           lambda n: n.responseEnd - n.fetchStart),
    Metric("timeToFirstByte", ("requestStart", "responseStart"),
           lambda n: n.responseStart - n.requestStart),
    Metric("domReadyState_interactive", ("startTime", "domInteractive"),
           lambda n: n.domInteractive - n.startTime),
    Metric("domReadyState_complete", ("startTime", "domComplete"),
           lambda n: n.domComplete - n.startTime),
    Metric("pageLoaded", ("duration",), lambda n: n.duration),
    Metric("pageSize", ("decodedBodySize",), lambda n: n.decodedBodySize),
    Metric("compressedPageSize", ("encodedBodySize",), lambda n: n.encodedBodySize),
    Metric("compressionSaving", ("encodedBodySize", "decodedBodySize"), _compression_saving),
]


def first_navigation_timing(raw: Any, log: Optional[logging.Logger] = None) -> NavigationTiming:
    """
    Pull navigation[0] out of the raw $performance value.

    Anything unexpected (not a mapping, no navigation list, empty list,
    non-mapping entry) yields an empty record, so every metric is skipped
    but the caller can still attach the raw snapshot.
    """
    log = log or logger
    try:
        signals = PerformanceSignals.model_validate(raw)
    except ValidationError as e:
        log.debug("performance signals not readable: %s", e)
        return NavigationTiming()
    if not signals.navigation:
        log.debug("performance signals carry no navigation timing")
        return NavigationTiming()
    entry = signals.navigation[0]
    if not isinstance(entry, dict):
        log.debug("navigation timing is %s, not a mapping", type(entry).__name__)
        return NavigationTiming()
    try:
        return NavigationTiming.model_validate(entry)
    except (ValidationError, ArithmeticError) as e:
        log.info("navigation timing not readable: %r", e)
        return NavigationTiming()


def derive_metrics(nav: NavigationTiming, log: Optional[logging.Logger] = None) -> Dict[str, float]:
    """
    Evaluate every entry of METRICS against one navigation timing record.

    Each metric stands alone: missing inputs, arithmetic errors and
    non-finite results drop only that metric.
    """
    log = log or logger
    out: Dict[str, float] = {}
    for m in METRICS:
        missing = [f for f in m.needs if getattr(nav, f) is None]
        if missing:
            log.debug("skipping %s, missing %s", m.name, ",".join(missing))
            continue
        try:
            value = m.formula(nav)
        except (ArithmeticError, TypeError, ValueError) as e:
            log.info("could not add performance key '%s'. %r", m.name, e)
            continue
        if not math.isfinite(value):
            log.debug("skipping %s, result %s is not finite", m.name, value)
            continue
        out[m.name] = value
    return out
