import pytest

from wgtunnel.ratelimiter import (
    GARBAGE_COLLECT_TIME,
    PACKETS_BURSTABLE,
    PACKETS_PER_SECOND,
    Ratelimiter,
)

IPS = [
    "127.0.0.1",
    "192.168.1.1",
    "172.167.2.3",
    "97.231.252.215",
    "248.97.91.167",
    "188.208.233.47",
    "104.2.183.179",
    "72.129.46.120",
    "2001:0db8:0a0b:12f0:0000:0000:0000:0001",
    "f5c2:818f:c052:655a:9860:b136:6894:25f0",
    "b2d7:15ab:48a7:b07c:a541:f144:a9fe:54fc",
    "a47b:786e:1671:a22b:d6f9:4ab0:abc7:c918",
    "ea1e:d155:7f7a:98fb:2bf5:9483:80f6:5445",
    "3f0e:54a2:f5b4:cd19:a21d:58e1:3746:84c4",
]

SECOND = 1_000_000_000


class _Clock:
    def __init__(self):
        self.now = 10 * SECOND

    def __call__(self):
        return self.now


def _expected_results():
    results = [(True, "initial burst", 0)] * PACKETS_BURSTABLE
    results.append((False, "after burst", 0))
    results.append(
        (True, "filling tokens for single packet", SECOND // PACKETS_PER_SECOND)
    )
    results.append((False, "not having refilled enough", 0))
    results.append(
        (True, "filling tokens for two packet burst", 2 * (SECOND // PACKETS_PER_SECOND))
    )
    results.append((True, "second packet in 2 packet burst", 0))
    results.append((False, "packet following 2 packet burst", 0))
    return results


def test_ratelimiter():
    clock = _Clock()
    rate = Ratelimiter(time_now=clock)
    rate.init()
    try:
        for index, (allowed, text, wait) in enumerate(_expected_results()):
            clock.now += wait + 1
            rate.cleanup()
            for ip in IPS:
                assert rate.allow(ip) is allowed, f"{index}: {text}: {ip}"
    finally:
        rate.close()


def test_allow_before_init_raises():
    rate = Ratelimiter()
    with pytest.raises(RuntimeError):
        rate.allow("127.0.0.1")


def test_cleanup_drops_idle_entries():
    clock = _Clock()
    with Ratelimiter(time_now=clock) as rate:
        assert rate.allow("10.0.0.1") is True
        assert rate.cleanup() is False
        clock.now += GARBAGE_COLLECT_TIME + 1
        assert rate.cleanup() is True


def test_forgotten_address_gets_fresh_burst():
    clock = _Clock()
    with Ratelimiter(time_now=clock) as rate:
        results = [rate.allow("10.0.0.2") for _ in range(PACKETS_BURSTABLE + 1)]
        assert results[-1] is False
        clock.now += GARBAGE_COLLECT_TIME + 1
        rate.cleanup()
        assert rate.allow("10.0.0.2") is True


def test_addresses_are_independent():
    clock = _Clock()
    with Ratelimiter(time_now=clock) as rate:
        for _ in range(PACKETS_BURSTABLE):
            rate.allow("10.0.0.3")
        assert rate.allow("10.0.0.3") is False
        assert rate.allow("10.0.0.4") is True


def test_invalid_address_raises():
    with Ratelimiter() as rate:
        with pytest.raises(ValueError):
            rate.allow("not-an-address")