from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _generate_id() -> str:
    return str(uuid4())


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; treat them as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _keyword_text(keywords: list[str] | None) -> str:
    return " ".join(keywords or [])
