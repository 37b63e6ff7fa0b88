"""
Conversions between Unix time and Core Data time.

Apple Books stores timestamps as seconds since 2001-01-01T00:00:00Z.
"""
import datetime

CORE_DATA_EPOCH_OFFSET = 978307200


def core_data_to_timestamp(ts: int) -> datetime.datetime:
    return datetime.datetime.fromtimestamp(ts + CORE_DATA_EPOCH_OFFSET, tz=datetime.timezone.utc)


def timestamp_to_core_data(ts: int) -> int:
    return ts - CORE_DATA_EPOCH_OFFSET


def datetime_to_core_data(dt: datetime.datetime) -> int:
    """
    Whole Unix seconds of an aware datetime, expressed in Core Data time
    """
    return timestamp_to_core_data(int(dt.timestamp()))
