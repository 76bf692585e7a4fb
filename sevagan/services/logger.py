import os
import json
from datetime import datetime

DEBUG_MODE = os.environ.get("SEVAGAN_DEBUG_MODE", "True").lower() == "true"


def _emit(level: str, event: str, data: dict):
    entry = {
        "timestamp": datetime.now().isoformat(),
        "level": level,
        "event": event,
        "data": data,
    }
    print(f"\n[SEVAGAN {level}] {event}:")
    print(json.dumps(entry, indent=2, default=str))


def log_debug(event: str, data: dict):
    """
    Logs structured debug info if enabled.
    """
    if not DEBUG_MODE:
        return
    _emit("DEBUG", event, data)


def log_warning(event: str, data: dict):
    """Always printed; used when a best-effort step fails."""
    _emit("WARNING", event, data)
