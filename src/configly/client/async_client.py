"""Cache-fronted asynchronous client for the Config.ly value API.

:class:`ConfiglyClient` resolves configuration values by key.  Each call
first decides whether caching applies (a per-call override wins over the
client setting), serves a fresh cached value without touching the network,
and otherwise issues exactly one request through
:class:`~configly.client.transport.ValueTransport`.  Fetched values are
cached for the TTL the server declares.

Do *not* keep the result of :meth:`ConfiglyClient.get` in a long-lived
variable: call ``get`` whenever the value is needed so that updates made in
Config.ly are picked up once the cached copy goes stale.

Concurrent calls for the same missing key are not coalesced; each one
issues its own request and the last response to arrive wins the cache
slot.

Example::

    async with ConfiglyClient("Dem0apiKEY") as configly:
        slogan = await configly.get("slogan")
        flags = await configly.get_many(["eatDonuts", "cities"])
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Sequence, Union

import httpx
from pydantic import ValidationError

from configly.cache import ValueCache
from configly.client.transport import ValueTransport
from configly.clock import Clock, SystemClock
from configly.config import build_client_config
from configly.exceptions import ConfigError, InvalidArgumentError
from configly.models import CacheEntry, ClientConfig, RequestOptions, ValueRecord
from configly.output import get_output

OptionsLike = Union[RequestOptions, Mapping[str, Any], None]


class ConfiglyClient:
    """Fetch Config.ly values, serving fresh ones from an in-memory cache.

    Either pass the settings individually or a ready :class:`ClientConfig`
    via ``config``, not both.

    Args:
        api_key: Read-only Config.ly API key.  Required unless ``config``
            is given.
        host: Overrides the API host (default ``https://api.config.ly``).
        enable_cache: ``False`` makes every :meth:`get` hit the network.
        timeout_ms: Request timeout in milliseconds (default 3000).
        config: A complete :class:`ClientConfig`.
        clock: Time source for freshness checks (default
            :class:`~configly.clock.SystemClock`).
        http_client: Optional :class:`httpx.AsyncClient` to send requests
            with.  The caller keeps ownership of it.

    Raises:
        ConfigError: If the API key is missing or a setting is invalid.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        host: Optional[str] = None,
        enable_cache: Optional[bool] = None,
        timeout_ms: Optional[int] = None,
        config: Optional[ClientConfig] = None,
        clock: Optional[Clock] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if config is None:
            config = build_client_config(
                api_key=api_key, host=host, enable_cache=enable_cache, timeout_ms=timeout_ms,
            )
        elif any(v is not None for v in (api_key, host, enable_cache, timeout_ms)):
            raise ConfigError("Pass either 'config' or individual settings, not both")

        self._config = config
        self._clock: Clock = clock or SystemClock()
        self._cache = ValueCache()
        self._transport = ValueTransport(config, http_client=http_client)

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> ConfiglyClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the HTTP client, if this instance created it."""
        await self._transport.aclose()

    # ------------------------------------------------------------------ #
    # Properties
    # ------------------------------------------------------------------ #

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def cache(self) -> ValueCache:
        return self._cache

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def get(self, key: str, options: OptionsLike = None) -> Any:
        """Return the value stored in Config.ly for *key*.

        A fresh cached value is returned without any network I/O.
        Otherwise a single request is made and, when caching applies to
        this call, the value is cached for the server's TTL (60 seconds if
        the server omits one) before it is returned.

        Args:
            key: The key to fetch.
            options: Per-call overrides (``enable_cache``, ``timeout_ms``)
                as a :class:`RequestOptions` or a plain mapping.  They apply
                to this call only.

        Returns:
            The stored value as typed in Config.ly (str, number, bool, list
            or dict), or ``None`` if the key does not exist.

        Raises:
            InvalidArgumentError: If *key* is not a non-empty string or the
                options are invalid.
            InvalidCredentialError: If the API key is rejected.
            ConnectionFailureError: If the server cannot be reached in time.
            ServerError: For any other failed response.
        """
        _validate_key(key)
        opts = _coerce_options(options)
        use_cache = self._cache_enabled(opts)
        output = get_output()

        if use_cache:
            hit, value = self._cache.lookup(key, self._clock.now())
            if hit:
                output.debug(f"Cache hit: {key}")
                return value
            output.debug(f"Cache miss: {key}")

        records = await self._transport.fetch([key], self._timeout_ms(opts))
        record = records.get(key)
        if record is None:
            output.debug(f"Unknown key: {key}")
            return None

        if use_cache:
            self._store(key, record)
        return record.value

    async def get_many(self, keys: Sequence[str], options: OptionsLike = None) -> dict[str, Any]:
        """Return values for several keys using at most one network request.

        Fresh cached keys are served from memory; the rest are requested
        together.  Keys unknown to the server are left out of the result.

        Args:
            keys: The keys to fetch.  Duplicates are collapsed.
            options: Per-call overrides, as for :meth:`get`.

        Returns:
            A ``dict`` of key to value, in the order the keys were given.

        Raises:
            InvalidArgumentError: If *keys* is a string or contains an
                invalid key.
            InvalidCredentialError, ConnectionFailureError, ServerError:
                As for :meth:`get`.
        """
        if isinstance(keys, (str, bytes)) or not isinstance(keys, Sequence):
            raise InvalidArgumentError("keys must be a list of strings", original_cause=keys)
        for key in keys:
            _validate_key(key)
        opts = _coerce_options(options)
        use_cache = self._cache_enabled(opts)
        ordered = list(dict.fromkeys(keys))

        found: dict[str, Any] = {}
        pending: list[str] = []
        now = self._clock.now()
        for key in ordered:
            hit, value = self._cache.lookup(key, now) if use_cache else (False, None)
            if hit:
                found[key] = value
            else:
                pending.append(key)

        if pending:
            get_output().debug(f"Cache miss: {', '.join(pending)}")
            records = await self._transport.fetch(pending, self._timeout_ms(opts))
            for key in pending:
                record = records.get(key)
                if record is None:
                    continue
                if use_cache:
                    self._store(key, record)
                found[key] = record.value

        return {key: found[key] for key in ordered if key in found}

    def cached_entry(self, key: str) -> Optional[CacheEntry]:
        """Return the cached entry for *key*, fresh or stale, without any I/O."""
        return self._cache.entry(key)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _cache_enabled(self, opts: RequestOptions) -> bool:
        if opts.enable_cache is not None:
            return opts.enable_cache
        return self._config.enable_cache

    def _timeout_ms(self, opts: RequestOptions) -> int:
        if opts.timeout_ms is not None:
            return opts.timeout_ms
        return self._config.timeout_ms

    def _store(self, key: str, record: ValueRecord) -> None:
        output = get_output()
        if record.ttl is None:
            output.debug(
                f"No TTL returned for '{key}'; caching it for {record.effective_ttl():g}s"
            )
        expires_at = self._clock.now() + record.effective_ttl()
        self._cache.store(key, record.value, expires_at)
        output.debug(f"Cached {key} until {expires_at:.0f}")


def _validate_key(key: Any) -> None:
    if not isinstance(key, str):
        raise InvalidArgumentError(
            f"key must be a string, got {type(key).__name__}", original_cause=key,
        )
    if not key:
        raise InvalidArgumentError("key must be a non-empty string", original_cause=key)


def _coerce_options(options: OptionsLike) -> RequestOptions:
    if options is None:
        return RequestOptions()
    if isinstance(options, RequestOptions):
        return options
    if isinstance(options, Mapping):
        try:
            return RequestOptions.model_validate(dict(options))
        except ValidationError as exc:
            raise InvalidArgumentError(f"Invalid request options: {exc}", original_cause=exc) from exc
    raise InvalidArgumentError(
        f"options must be RequestOptions or a mapping, got {type(options).__name__}",
        original_cause=options,
    )
