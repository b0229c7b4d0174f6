import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
import redis

from ..config import Settings
from ..enrich.plugin import process_event
from ..logging_config import configure_logging

logger = logging.getLogger(__name__)


def make_client(settings: Settings) -> redis.Redis:
    return redis.Redis(host=settings.redis_host, port=settings.redis_port, db=settings.redis_db,
                       decode_responses=False)

def decode(raw) -> Optional[Dict]:
    """Queue entry → enriched event, or None when the entry is not a JSON object."""
    try:
        ev = json.loads(raw)
    except ValueError as e:
        logger.warning("[writer] JSON decode error: %r", e)
        return None
    if not isinstance(ev, dict):
        logger.warning("[writer] skipping non-object queue entry: %s", type(ev).__name__)
        return None
    return process_event(ev)

def write_batch(batch: List[Dict], outdir: Path) -> Optional[Path]:
    if not batch:
        return None
    # properties differ per event; keep them as one JSON text column
    rows = [{**ev, "properties": json.dumps(ev.get("properties") or {}, default=str)} for ev in batch]
    df = pd.DataFrame(rows)
    outdir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%f")
    path = outdir / f"events_{stamp}.parquet"
    df.to_parquet(path, engine="pyarrow", index=False)
    logger.info("[writer] wrote %d → %s", len(batch), path)
    return path

def run(settings: Optional[Settings] = None, client=None, max_polls: Optional[int] = None):
    settings = settings or Settings()
    client = client or make_client(settings)
    logger.info("[writer] watching Redis list '%s'…", settings.queue)
    buf: List[Dict] = []
    last = time.time()
    polls = 0

    while max_polls is None or polls < max_polls:
        polls += 1
        # Blocking pop with timeout so we can time-flush
        item = client.blpop(settings.queue, timeout=1)
        if item:
            _, raw = item
            ev = decode(raw)
            if ev is not None:
                buf.append(ev)

        if buf and (len(buf) >= settings.batch_size or (time.time() - last) >= settings.flush_seconds):
            write_batch(buf, settings.out_dir)
            buf.clear()
            last = time.time()

    # bounded runs (tests, one-off jobs) should not lose the tail
    write_batch(buf, settings.out_dir)

if __name__ == "__main__":
    s = Settings()
    configure_logging(s.log_level)
    run(s)
