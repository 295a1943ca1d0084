"""In-memory cache of configuration values with per-key expiry.

Values and expiry timestamps live in two parallel dicts keyed by the
configuration key.  A key is always present in both or in neither: the
only mutation is :meth:`ValueCache.store`, which writes the pair together.

Nothing is ever evicted.  An entry whose ``expires_at`` is not strictly in
the future is *stale*; it stays in memory until the next successful fetch
for that key overwrites it.

See Also:
    :class:`~configly.models.CacheEntry` -- the read-only view returned by
    :meth:`ValueCache.entry`.
"""

from __future__ import annotations

from typing import Any, Optional

from configly.models import CacheEntry

_MISSING = object()


class ValueCache:
    """Key -> value and key -> expiry maps with lazy freshness checks.

    All timestamps are Unix seconds supplied by the caller, so the cache
    itself never reads a clock.

    Example::

        cache = ValueCache()
        cache.store("slogan", "x", expires_at=125)
        cache.lookup("slogan", now=124)   # (True, "x")
        cache.lookup("slogan", now=125)   # (False, None)
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._expiry: dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def is_fresh(self, key: str, now: float) -> bool:
        """Return True if *key* has a value whose expiry is after *now*."""
        if key not in self._values:
            return False
        return self._expiry[key] > now

    def lookup(self, key: str, now: float) -> tuple[bool, Any]:
        """Return ``(True, value)`` for a fresh entry, else ``(False, None)``.

        Falsy values (``False``, ``0``, ``""``, ``None``) are legitimate
        cached values, hence the explicit hit flag.
        """
        if not self.is_fresh(key, now):
            return False, None
        return True, self._values[key]

    def store(self, key: str, value: Any, expires_at: float) -> None:
        """Write *value* and its absolute expiry for *key*, replacing any entry."""
        self._values[key] = value
        self._expiry[key] = expires_at

    def entry(self, key: str) -> Optional[CacheEntry]:
        """Return the raw entry for *key*, fresh or stale, or ``None``."""
        value = self._values.get(key, _MISSING)
        if value is _MISSING:
            return None
        return CacheEntry(key=key, value=value, expires_at=self._expiry[key])

    def keys(self) -> list[str]:
        return list(self._values)
