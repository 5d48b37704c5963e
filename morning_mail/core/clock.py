import time
from datetime import datetime, timezone

# taken at first import, i.e. during process startup
PROCESS_STARTED_AT = time.monotonic()


def iso_now() -> str:
    """Current UTC time as ``2024-01-01T08:00:00.000Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")

