from __future__ import annotations
import math
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Optional, Union

PAGEVIEW = "$pageview"
PERFORMANCE_KEY = "$performance"
PROPERTY_PREFIX = "$performance_"
RAW_KEY = PROPERTY_PREFIX + "raw"

Number = Union[int, float]


class Event(BaseModel):
    # envelope handed to us by the ingestion side; anything else rides along
    model_config = ConfigDict(extra="allow")

    event: str = Field(..., description="event kind e.g. $pageview/$autocapture")
    properties: Optional[Dict[str, Any]] = None
    distinct_id: Optional[str] = None
    uuid: Optional[str] = None
    ip: Optional[str] = None
    site_url: Optional[str] = None
    team_id: Optional[int] = None
    now: Optional[str] = None
    timestamp: Optional[str] = None


class NavigationTiming(BaseModel):
    """
    One PerformanceNavigationTiming entry as serialized by the browser.

    Every field is optional: a missing, null or non-numeric value is read
    as None so a single bad field never rejects the whole record.
    """
    model_config = ConfigDict(extra="ignore")

    startTime: Optional[Number] = None
    duration: Optional[Number] = None
    fetchStart: Optional[Number] = None
    domainLookupStart: Optional[Number] = None
    domainLookupEnd: Optional[Number] = None
    connectStart: Optional[Number] = None
    connectEnd: Optional[Number] = None
    secureConnectionStart: Optional[Number] = None
    requestStart: Optional[Number] = None
    responseStart: Optional[Number] = None
    responseEnd: Optional[Number] = None
    domInteractive: Optional[Number] = None
    domContentLoadedEventStart: Optional[Number] = None
    domContentLoadedEventEnd: Optional[Number] = None
    domComplete: Optional[Number] = None
    loadEventStart: Optional[Number] = None
    loadEventEnd: Optional[Number] = None
    transferSize: Optional[Number] = None
    encodedBodySize: Optional[Number] = None
    decodedBodySize: Optional[Number] = None

    @field_validator("*", mode="before")
    @classmethod
    def _lenient_number(cls, v):
        if isinstance(v, bool) or not isinstance(v, (int, float, str)):
            return None
        try:
            f = float(v)
        except (ValueError, OverflowError):
            return None
        if not math.isfinite(f):
            return None
        # keep the browser's ints as ints, byte counts especially
        return f if isinstance(v, str) else v


class PerformanceSignals(BaseModel):
    # window.performance.getEntriesByType(...) for navigation, paint, resource
    model_config = ConfigDict(extra="allow")

    navigation: List[Any] = Field(default_factory=list)
    paint: Optional[List[Any]] = None
    resource: Optional[List[Any]] = None
