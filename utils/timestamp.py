"""Timestamp utilities."""

import time
from datetime import datetime, timezone


def now_seconds():
    """Current time in whole seconds since Unix epoch."""
    return int(time.time())


def format_timestamp(epoch_s=None):
    """Format timestamp as ISO 8601 with microseconds."""
    if epoch_s is None:
        epoch_s = time.time()

    dt = datetime.fromtimestamp(epoch_s, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z"
