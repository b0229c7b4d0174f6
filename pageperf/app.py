from fastapi import FastAPI, Body
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import List, Union
import json
import logging
import redis

from .config import Settings
from .enrich.plugin import process_event
from .events import Event
from .logging_config import configure_logging

settings = Settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="pageperf API", version="0.1.0")

# CORS so the browser snippet can POST directly
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Connect lazily; redis-py only opens a socket on first command
def _redis():
    return redis.Redis(host=settings.redis_host, port=settings.redis_port, db=settings.redis_db,
                       decode_responses=False)

r = _redis()

def _dump(ev: Event) -> dict:
    # exclude_unset keeps absent envelope fields absent instead of null
    return ev.model_dump(exclude_unset=True)

@app.get("/health")
def health():
    redis_ok = False
    try:
        r.ping()
        redis_ok = True
    except redis.RedisError as e:
        logger.warning("redis ping failed: %s", e)
    return {"ok": True, "service": "pageperf-api", "redis": redis_ok}

@app.post("/ingest")
def ingest(payload: Union[Event, List[Event]] = Body(...)):
    """
    Accept either a single Event object or a list of Events.
    Push each JSON string to the Redis queue; the writer enriches them.
    """
    events = payload if isinstance(payload, list) else [payload]
    try:
        for ev in events:
            r.rpush(settings.queue, json.dumps(_dump(ev)))
        return {"status": "queued", "count": len(events)}
    except redis.RedisError as e:
        logger.error("could not queue %d events: %s", len(events), e)
        return JSONResponse(status_code=500, content={"error": str(e)})

@app.post("/enrich")
def enrich(payload: Union[Event, List[Event]] = Body(...)):
    """Run the performance enrichment synchronously and echo the result."""
    if isinstance(payload, list):
        return [process_event(_dump(ev)) for ev in payload]
    return process_event(_dump(payload))
