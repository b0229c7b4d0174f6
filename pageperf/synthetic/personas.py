from __future__ import annotations
import time, random, uuid
from typing import List, Dict, Optional

def _now(): return time.time()

def _nav(dns=40.0, connect=90.0, tls: Optional[float]=45.0, ttfb=170.0, download=8.0,
         interactive=800.0, complete=400.0, body=70000, ratio=0.27) -> Dict:
    """One navigation timing entry laid out the way the browser orders its phases."""
    fetch = 6.0
    dls = fetch + random.uniform(5, 20)
    dle = dls + dns
    cs = dle
    ce = cs + connect
    # secureConnectionStart is 0 for http:// or a reused connection
    scs = ce - tls if tls else 0
    req = ce + 0.5
    rs = req + ttfb
    re = rs + download
    di = re + interactive
    dcl = di + 4.6
    dc = di + complete
    enc = int(body * ratio)
    return {
        "name": "https://synthetic.page/", "entryType": "navigation", "initiatorType": "navigation",
        "startTime": 0, "duration": round(dc + 0.3, 1), "fetchStart": fetch,
        "domainLookupStart": dls, "domainLookupEnd": dle, "connectStart": cs, "connectEnd": ce,
        "secureConnectionStart": scs, "requestStart": req, "responseStart": rs, "responseEnd": re,
        "transferSize": enc + 300, "encodedBodySize": enc, "decodedBodySize": body,
        "domInteractive": di, "domContentLoadedEventStart": di + 0.2, "domContentLoadedEventEnd": dcl,
        "domComplete": dc, "loadEventStart": dc + 0.2, "loadEventEnd": dc + 0.3,
        "type": "navigate", "redirectCount": 0,
    }

def _pageview(distinct_id: str, url: str, nav: Optional[Dict], ts: float) -> Dict:
    props = {"$current_url": url, "$lib": "web"}
    if nav is not None:
        props["$performance"] = {"navigation": [nav], "paint": [], "resource": []}
    return {"event": "$pageview", "distinct_id": distinct_id, "uuid": str(uuid.uuid4()),
            "timestamp": str(ts), "properties": props}

def fast_visitor(distinct_id="u_fast", views=20) -> List[Dict]:
    """Warm CDN, small compressed pages."""
    t0 = _now()
    return [_pageview(distinct_id, f"https://synthetic.page/a/{i}",
                      _nav(dns=random.uniform(0, 5), connect=random.uniform(10, 30), tls=random.uniform(5, 15),
                           ttfb=random.uniform(30, 80), interactive=random.uniform(200, 400),
                           body=random.randint(20000, 40000), ratio=0.25), t0 + i)
            for i in range(views)]

def slow_visitor(distinct_id="u_slow", views=20) -> List[Dict]:
    """High latency mobile link, heavy uncompressed pages."""
    t0 = _now()
    return [_pageview(distinct_id, f"https://synthetic.page/b/{i}",
                      _nav(dns=random.uniform(80, 200), connect=random.uniform(150, 400), tls=random.uniform(80, 200),
                           ttfb=random.uniform(400, 1200), download=random.uniform(50, 300),
                           interactive=random.uniform(1500, 4000), complete=random.uniform(800, 2000),
                           body=random.randint(200000, 900000), ratio=0.9), t0 + i)
            for i in range(views)]

def plain_http(distinct_id="u_http", views=10) -> List[Dict]:
    """No TLS, tlsTime must come out as 0."""
    t0 = _now()
    return [_pageview(distinct_id, f"http://synthetic.page/c/{i}", _nav(tls=None), t0 + i) for i in range(views)]

def no_perf(distinct_id="u_noperf", views=10) -> List[Dict]:
    """Pageviews from clients that never captured timing, plus other event kinds."""
    t0 = _now(); ev = []
    for i in range(views):
        ev.append(_pageview(distinct_id, f"https://synthetic.page/d/{i}", None, t0 + i))
        ev.append({"event": "$autocapture", "distinct_id": distinct_id, "uuid": str(uuid.uuid4()),
                   "timestamp": str(t0 + i + 0.5), "properties": {"$event_type": "click"}})
    return ev
