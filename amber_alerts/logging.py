import json
from datetime import datetime, timezone


def log_event(level, message, **context):
    """
    Prints one JSON log line: UTC timestamp, level, message and any context keys.
    Values that are not JSON types are rendered with str().
    """
    entry = {"time": datetime.now(timezone.utc).isoformat(timespec="seconds"), "level": level, "message": message}
    entry.update(context)
    print(json.dumps(entry, default=str), flush=True)
