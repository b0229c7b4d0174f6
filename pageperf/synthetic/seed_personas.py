import json, logging, urllib.request
from .personas import fast_visitor, slow_visitor, plain_http, no_perf
from ..logging_config import configure_logging

URL="http://127.0.0.1:8123/ingest"
logger = logging.getLogger(__name__)

def post_batch(evlist, url=URL):
    # send as list to save round-trips
    data = json.dumps(evlist).encode("utf-8")
    req = urllib.request.Request(url, data=data, headers={"Content-Type":"application/json"})
    with urllib.request.urlopen(req) as r:
        r.read()

def build_sessions():
    sessions = []
    sessions += fast_visitor()
    sessions += slow_visitor()
    sessions += plain_http()
    sessions += no_perf()
    return sessions

def main(url=URL):
    sessions = build_sessions()
    # send in chunks of ~500
    CH=500
    for i in range(0, len(sessions), CH):
        post_batch(sessions[i:i+CH], url)
    logger.info("Seeded %d events across 4 personas.", len(sessions))

if __name__ == "__main__":
    configure_logging()
    main()
