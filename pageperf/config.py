from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]


@dataclass
class Settings:
    redis_host: str = os.getenv("PAGEPERF_REDIS_HOST", "localhost")
    redis_port: int = int(os.getenv("PAGEPERF_REDIS_PORT", "6379"))
    redis_db: int = int(os.getenv("PAGEPERF_REDIS_DB", "0"))
    queue: str = os.getenv("PAGEPERF_QUEUE", "events")
    out_dir: Path = Path(os.getenv("PAGEPERF_OUT_DIR", str(REPO_ROOT / "data" / "parquet")))
    batch_size: int = int(os.getenv("PAGEPERF_BATCH_SIZE", "100"))        # write every N events
    flush_seconds: float = float(os.getenv("PAGEPERF_FLUSH_SECONDS", "10"))  # or every N s, whichever first
    log_level: str = os.getenv("PAGEPERF_LOG_LEVEL", "INFO")
