from datetime import date, datetime, timezone


def utc_now() -> datetime:
    # Timestamp columns only accept timezone-aware values.
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utc_now().date()
