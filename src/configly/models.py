"""Canonical Pydantic models shared across configly modules.

**Configuration models** -- supplied once at client construction or per
call:
    :class:`ClientConfig` and :class:`RequestOptions`.

**Wire and cache models** -- produced from the server payload and stored in
the in-memory cache:
    :class:`ValueRecord` and :class:`CacheEntry`.

All models use Pydantic v2.  Configuration models are frozen so a client's
settings cannot drift after construction; per-call overrides are expressed
as a separate :class:`RequestOptions` instead of mutating the config.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_HOST = "https://api.config.ly"
DEFAULT_TIMEOUT_MS = 3000
DEFAULT_TTL_SECONDS = 60


# --- Configuration ---


class ClientConfig(BaseModel):
    """Settings for a :class:`~configly.client.ConfiglyClient`.

    Example::

        ClientConfig(api_key="Dem0apiKEY", timeout_ms=1000)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: str = Field(min_length=1, description="Read-only Config.ly API key")
    host: str = Field(default=DEFAULT_HOST, description="Base URL for value requests")
    enable_cache: bool = Field(
        default=True, description="Serve fresh values from memory instead of the network"
    )
    timeout_ms: int = Field(
        default=DEFAULT_TIMEOUT_MS,
        gt=0,
        strict=True,
        description="Request timeout in milliseconds",
    )

    @field_validator("host")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        stripped = value.rstrip("/")
        if not stripped:
            raise ValueError("host must not be empty")
        return stripped


class RequestOptions(BaseModel):
    """Per-call overrides for :meth:`~configly.client.ConfiglyClient.get`.

    ``None`` means "use the client's setting".
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    enable_cache: Optional[bool] = None
    timeout_ms: Optional[int] = Field(default=None, gt=0, strict=True)


# --- Wire / cache ---


class ValueRecord(BaseModel):
    """One key's entry in the ``data`` object of a value response.

    The server also reports the value's declared ``type`` (``string``,
    ``number``, ``boolean``, ``jsonBlob``); it is kept for diagnostics only.
    """

    model_config = ConfigDict(extra="ignore")

    value: Any = None
    ttl: Optional[float] = None
    type: Optional[str] = None

    @property
    def has_value(self) -> bool:
        """True when the server sent a ``value`` field (``null`` included)."""
        return "value" in self.model_fields_set

    def effective_ttl(self) -> float:
        """The server TTL, or :data:`DEFAULT_TTL_SECONDS` when it was omitted.

        Negative TTLs count as zero, so the value is stale as soon as it is cached.
        """
        if self.ttl is None:
            return DEFAULT_TTL_SECONDS
        return max(self.ttl, 0)


class CacheEntry(BaseModel):
    """A cached value together with its absolute expiry (Unix seconds)."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: Any = None
    expires_at: float

    def is_fresh(self, now: float) -> bool:
        return self.expires_at > now
