import datetime

from ibooks_export.epoch import (
    CORE_DATA_EPOCH_OFFSET, core_data_to_timestamp, timestamp_to_core_data, datetime_to_core_data,
)


def test_core_data_epoch_is_2001():
    assert core_data_to_timestamp(0) == datetime.datetime(2001, 1, 1, tzinfo=datetime.timezone.utc)
    assert timestamp_to_core_data(CORE_DATA_EPOCH_OFFSET) == 0


def test_core_data_round_trip():
    for x in list(range(-CORE_DATA_EPOCH_OFFSET, 2_000_000_000, 7_654_321)) + [-1, 0, 1, 721_700_000]:
        assert timestamp_to_core_data(int(core_data_to_timestamp(x).timestamp())) == x


def test_datetime_to_core_data_ignores_sub_seconds():
    dt = datetime.datetime(2001, 1, 1, 0, 0, 5, 900_000, tzinfo=datetime.timezone.utc)
    assert datetime_to_core_data(dt) == 5


def test_datetime_to_core_data_honours_offset():
    dt = datetime.datetime(2001, 1, 1, 2, 0, 0, tzinfo=datetime.timezone(datetime.timedelta(hours=2)))
    assert datetime_to_core_data(dt) == 0
