import math

import pytest

from conftest import nav_timing
from pageperf.enrich.metrics import METRICS, derive_metrics, first_navigation_timing
from pageperf.events import NavigationTiming


def _derive(**overrides):
    return derive_metrics(NavigationTiming.model_validate(nav_timing(**overrides)))


def test_sample_record_formulas():
    m = _derive()
    assert m["dnsLookupTime"] == pytest.approx(45.0, abs=0.01)
    assert m["connectionTime"] == pytest.approx(93.0, abs=0.01)
    assert m["tlsTime"] == pytest.approx(43.9, abs=0.01)
    assert m["domContentLoaded"] == pytest.approx(1183.2, abs=0.01)
    assert m["fetchTime"] == pytest.approx(334.2, abs=0.01)
    assert m["timeToFirstByte"] == pytest.approx(173.4, abs=0.01)
    assert m["domReadyState_interactive"] == pytest.approx(1178.6, abs=0.01)
    assert m["domReadyState_complete"] == pytest.approx(1623.7, abs=0.01)
    assert m["pageLoaded"] == 1624
    assert m["pageSize"] == 71868
    assert m["compressedPageSize"] == 19085
    assert m["compressionSaving"] == pytest.approx(0.73, abs=0.01)
    assert set(m) == {metric.name for metric in METRICS}


@pytest.mark.parametrize("scs", [0, -1])
def test_tls_time_is_zero_without_secure_connection(scs):
    assert _derive(secureConnectionStart=scs)["tlsTime"] == 0


def test_missing_field_only_drops_its_metric():
    m = _derive(responseStart=None)
    assert "timeToFirstByte" not in m
    assert len(m) == len(METRICS) - 1
    assert m["fetchTime"] == pytest.approx(334.2, abs=0.01)
    assert m["pageLoaded"] == 1624


def test_non_numeric_field_is_treated_as_missing():
    m = _derive(domainLookupEnd="soon", duration=True)
    assert "dnsLookupTime" not in m
    assert "pageLoaded" not in m
    assert m["connectionTime"] == pytest.approx(93.0, abs=0.01)


def test_zero_decoded_size_omits_compression_saving():
    m = _derive(decodedBodySize=0)
    assert "compressionSaving" not in m
    assert m["pageSize"] == 0


def test_inconsistent_timings_do_not_raise():
    m = _derive(domainLookupEnd=1, domainLookupStart=500)
    assert m["dnsLookupTime"] == -499
    assert all(math.isfinite(v) for v in m.values())


def test_arithmetic_error_is_isolated(monkeypatch):
    import pageperf.enrich.metrics as metrics_mod

    def boom(n):
        raise ZeroDivisionError("nope")

    patched = [metrics_mod.Metric(m.name, m.needs, boom) if m.name == "fetchTime" else m
               for m in metrics_mod.METRICS]
    monkeypatch.setattr(metrics_mod, "METRICS", patched)
    m = _derive()
    assert "fetchTime" not in m
    assert len(m) == len(patched) - 1


@pytest.mark.parametrize("raw", [
    {"navigation": []},
    {},
    {"navigation": "not a list"},
    {"navigation": ["not a mapping"]},
    "a string",
    ["navigation"],
])
def test_unreadable_signals_give_empty_record(raw):
    nav = first_navigation_timing(raw)
    assert nav == NavigationTiming()
    assert derive_metrics(nav) == {}


def test_only_first_navigation_entry_is_read():
    raw = {"navigation": [nav_timing(), nav_timing(duration=1)], "paint": [{"startTime": 3}]}
    assert first_navigation_timing(raw).duration == 1624


def test_oversized_integer_only_drops_its_metric():
    m = _derive(transferSize=10**400, decodedBodySize=10**400)
    assert "pageSize" not in m
    assert "compressionSaving" not in m
    assert len(m) == len(METRICS) - 2
    assert m["pageLoaded"] == 1624


def test_unparseable_entry_falls_back_to_empty_record(monkeypatch):
    import pageperf.enrich.metrics as metrics_mod

    class Exploding(NavigationTiming):
        @classmethod
        def model_validate(cls, *args, **kwargs):
            raise OverflowError("int too large to convert to float")

    monkeypatch.setattr(metrics_mod, "NavigationTiming", Exploding)
    assert first_navigation_timing({"navigation": [nav_timing()]}).duration is None


def test_verbatim_metrics_keep_browser_ints():
    m = _derive()
    assert type(m["pageLoaded"]) is int
    assert type(m["pageSize"]) is int
    assert type(m["compressedPageSize"]) is int
    assert type(m["dnsLookupTime"]) is float


def test_numeric_strings_are_read_as_floats():
    assert NavigationTiming.model_validate({"duration": "1624"}).duration == 1624.0
