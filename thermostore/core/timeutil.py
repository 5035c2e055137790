from datetime import datetime, timezone


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def truncate_to_second(dt: datetime) -> datetime:
    """Return `dt` in UTC with the sub-second component dropped.

    Naive datetimes are taken to already be UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).replace(microsecond=0)
