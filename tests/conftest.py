"""Shared fixtures: the navigation timing a Chrome pageview actually sent."""
import copy

import pytest


NAVIGATION_TIMING = {
    "name": "https://the.page.url",
    "entryType": "navigation",
    "startTime": 0,
    "duration": 1624,
    "initiatorType": "navigation",
    "nextHopProtocol": "h2",
    "workerStart": 0,
    "redirectStart": 0,
    "redirectEnd": 0,
    "fetchStart": 6,
    "domainLookupStart": 20.299999997019768,
    "domainLookupEnd": 65.29999999701977,
    "connectStart": 65.29999999701977,
    "connectEnd": 158.29999999701977,
    "secureConnectionStart": 114.39999999850988,
    "requestStart": 158.79999999701977,
    "responseStart": 332.19999999925494,
    "responseEnd": 340.19999999925494,
    "transferSize": 19385,
    "encodedBodySize": 19085,
    "decodedBodySize": 71868,
    "serverTiming": [],
    "unloadEventStart": 0,
    "unloadEventEnd": 0,
    "domInteractive": 1178.5999999977648,
    "domContentLoadedEventStart": 1178.7999999970198,
    "domContentLoadedEventEnd": 1183.199999999255,
    "domComplete": 1623.699999999255,
    "loadEventStart": 1623.8999999985099,
    "loadEventEnd": 1624,
    "type": "navigate",
    "redirectCount": 0,
}


def an_event(event_name, **properties):
    return {
        "event": event_name,
        "properties": {"something": "in here", **properties},
        "distinct_id": "a",
        "ip": "ip",
        "site_url": "url",
        "team_id": 1,
        "now": "now",
        "uuid": "0189-uuid",
    }


def nav_timing(**overrides):
    nav = copy.deepcopy(NAVIGATION_TIMING)
    for k, v in overrides.items():
        if v is None:
            nav.pop(k, None)
        else:
            nav[k] = v
    return nav


@pytest.fixture
def pageview():
    return an_event("$pageview", **{"$performance": {"navigation": [nav_timing()]}})


class FakeRedis:
    """In-memory stand-in for the handful of list commands we use."""

    def __init__(self, items=None, fail=None):
        self.lists = {}
        self.fail = fail
        for key, values in (items or {}).items():
            self.lists[key] = list(values)

    def _check(self):
        if self.fail is not None:
            raise self.fail

    def ping(self):
        self._check()
        return True

    def rpush(self, key, value):
        self._check()
        self.lists.setdefault(key, []).append(value)
        return len(self.lists[key])

    def lpop(self, key):
        self._check()
        q = self.lists.get(key) or []
        return q.pop(0) if q else None

    def blpop(self, key, timeout=0):
        raw = self.lpop(key)
        return None if raw is None else (key.encode(), raw)
