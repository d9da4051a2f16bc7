"""Peer identity formatting and roaming-aware endpoint tracking."""

from __future__ import annotations

import base64
import threading
from typing import Any, Optional, Protocol

NOISE_PUBLIC_KEY_SIZE = 32


class Endpoint(Protocol):
    """What a peer needs from a remote endpoint."""

    def clear_src(self) -> None:
        """Forget the cached source address used to reach this endpoint."""


def peer_name(public_key: bytes) -> str:
    """Short display name of a peer: ``peer(XXXX…YYYY)`` from its base64 key."""
    key = bytes(public_key)
    if len(key) != NOISE_PUBLIC_KEY_SIZE:
        raise ValueError(
            f"public key must be {NOISE_PUBLIC_KEY_SIZE} bytes, got {len(key)}"
        )
    encoded = base64.b64encode(key).decode("ascii")
    return f"peer({encoded[0:4]}…{encoded[39:43]})"


class PeerEndpoint:
    """The address a peer is currently reached at.

    Authenticated packets move the endpoint (roaming) unless roaming is
    disabled. A pending source clear is applied just before the next send.
    """

    def __init__(
        self, endpoint: Optional[Any] = None, disable_roaming: bool = False
    ) -> None:
        self._lock = threading.Lock()
        self.value: Optional[Any] = endpoint
        self.disable_roaming = disable_roaming
        self.clear_src_on_tx = False

    def set_from_packet(self, endpoint: Any) -> None:
        """Adopt the endpoint an authenticated packet arrived from."""
        with self._lock:
            if self.disable_roaming:
                return
            self.clear_src_on_tx = False
            self.value = endpoint

    def mark_src_for_clearing(self) -> None:
        """Ask for the source address to be cleared before the next send."""
        with self._lock:
            if self.value is None:
                return
            self.clear_src_on_tx = True

    def take_for_send(self) -> Any:
        """Return the endpoint to transmit to, applying any pending clear.

        Raises LookupError if no endpoint is known.
        """
        with self._lock:
            endpoint = self.value
            if endpoint is None:
                raise LookupError("no known endpoint for peer")
            if self.clear_src_on_tx:
                endpoint.clear_src()
                self.clear_src_on_tx = False
            return endpoint