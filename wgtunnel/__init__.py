"""Building blocks for a userspace WireGuard-style tunnel: replay filter, rate limiter, pools, timestamps, padding, peer endpoints, timers and staged queues."""

__version__ = "0.1.0"