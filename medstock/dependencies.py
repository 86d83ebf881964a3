from datetime import datetime

from medstock.database.session import get_db


def get_now() -> datetime:
    """Evaluation instant for analytics requests (local wall clock, zone-aware)."""
    return datetime.now().astimezone()


__all__ = ["get_db", "get_now"]
