"""In-memory value caching for configly.

This package provides :class:`ValueCache`, the time-bounded store that sits
in front of the network in :class:`~configly.client.ConfiglyClient`.
Entries carry the absolute expiry computed from the server's TTL; staleness
is judged lazily when an entry is read.
"""

from configly.cache.cache import ValueCache

__all__ = ["ValueCache"]
