from datetime import datetime, timezone


def to_utc(value: datetime) -> datetime:
    # SQLite descarta el offset al guardar: todo se normaliza a UTC antes.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
