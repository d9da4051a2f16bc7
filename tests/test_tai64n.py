import time

import pytest

from wgtunnel.tai64n import BASE, TIMESTAMP_SIZE, Timestamp, now, stamp

NS = 1
US = 1_000
MS = 1_000_000
START = 123456789  # a nontrivial bit pattern


@pytest.mark.parametrize(
    "name, offset, want_after",
    [
        ("after_10_ns", 10 * NS, False),
        ("after_10_us", 10 * US, False),
        ("after_1_ms", 1 * MS, False),
        ("after_10_ms", 10 * MS, False),
        ("after_20_ms", 20 * MS, True),
    ],
)
def test_monotonic_and_whitened(name, offset, want_after):
    ts1 = stamp(START)
    ts2 = stamp(START + offset)
    assert ts2.after(ts1) is want_after


def test_epoch_encodes_base_label():
    ts = stamp(0)
    assert bytes(ts) == BASE.to_bytes(8, "big") + bytes(4)


def test_size_is_twelve_bytes():
    assert len(bytes(now())) == TIMESTAMP_SIZE


def test_round_trip_through_bytes():
    ts = stamp(1_700_000_000 * 1_000_000_000 + 500_000_000)
    assert Timestamp(bytes(ts)) == ts


def test_seconds_field_matches_unix_seconds():
    ts = stamp(1_700_000_000 * 1_000_000_000 + 999_999_999)
    assert ts.seconds == 1_700_000_000
    assert ts.nanoseconds <= 999_999_999


def test_nanoseconds_are_whitened():
    ts = stamp(START)
    assert ts.nanoseconds & 0xFFFFFF == 0
    assert ts.nanoseconds <= START


def test_negative_time_keeps_nonnegative_nanos():
    ts = stamp(-1)
    assert ts.seconds == -1
    assert stamp(0).after(ts)


def test_later_second_is_after():
    assert stamp(2_000_000_000).after(stamp(1_000_000_000))
    assert not stamp(1_000_000_000).after(stamp(2_000_000_000))


def test_not_after_itself():
    ts = stamp(START)
    assert not ts.after(ts)


def test_now_tracks_clock():
    before = time.time_ns()
    ts = now()
    after = time.time_ns()
    assert before // 1_000_000_000 <= ts.seconds <= after // 1_000_000_000


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        Timestamp(b"\x00" * 11)


def test_non_bytes_rejected():
    with pytest.raises(TypeError):
        Timestamp("not bytes at all")


def test_string_form_shows_utc_time():
    assert str(stamp(0)).startswith("1970-01-01 00:00:00")