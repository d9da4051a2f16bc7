"""Transport padding rules and outbound queue limits."""

from __future__ import annotations

PADDING_MULTIPLE = 16

QUEUE_OUTBOUND_SIZE = 1024
QUEUE_INBOUND_SIZE = 1024
QUEUE_HANDSHAKE_SIZE = 1024
MAX_SEGMENT_SIZE = (1 << 16) - 1  # largest possible UDP datagram
PREALLOCATED_BUFFERS_PER_POOL = 0  # no cap: pools may grow without bound


def calculate_padding_size(packet_size: int, mtu: int) -> int:
    """Number of zero bytes to append so the packet is a multiple of 16,
    never growing the last MTU-sized unit beyond ``mtu``.

    An ``mtu`` of 0 means no limit.
    """
    if packet_size < 0:
        raise ValueError("packet size must not be negative")
    if mtu < 0:
        raise ValueError("mtu must not be negative")
    last_unit = packet_size
    round_mask = ~(PADDING_MULTIPLE - 1)
    if mtu == 0:
        return ((last_unit + PADDING_MULTIPLE - 1) & round_mask) - last_unit
    if last_unit > mtu:
        last_unit %= mtu
    padded_size = min((last_unit + PADDING_MULTIPLE - 1) & round_mask, mtu)
    return padded_size - last_unit


def pad_packet(packet: bytes, mtu: int) -> bytes:
    """Return ``packet`` followed by the padding zeros it needs."""
    return bytes(packet) + bytes(calculate_padding_size(len(packet), mtu))