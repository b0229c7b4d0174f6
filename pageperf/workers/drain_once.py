import logging
from typing import Optional

from ..config import Settings
from ..logging_config import configure_logging
from .events_writer import decode, make_client, write_batch

logger = logging.getLogger(__name__)


def main(settings: Optional[Settings] = None, client=None):
    settings = settings or Settings()
    client = client or make_client(settings)
    batch = []
    # Pop everything currently in Redis
    while True:
        raw = client.lpop(settings.queue)
        if raw is None:
            break
        ev = decode(raw)
        if ev is not None:
            batch.append(ev)

    if not batch:
        logger.info("[drain] queue empty, nothing to write.")
        return None

    return write_batch(batch, settings.out_dir)

if __name__ == "__main__":
    s = Settings()
    configure_logging(s.log_level)
    main(s)
