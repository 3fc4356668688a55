from datetime import datetime, timezone
from typing import Optional


def now_iso() -> str:
    """Timestamp UTC em ISO-8601 com precisão fixa (ordenável como string)."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def parse_iso(ts: Optional[str]) -> Optional[datetime]:
    if not ts:
        return None
    try:
        dt = datetime.fromisoformat(ts)
    except ValueError:
        return None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)
