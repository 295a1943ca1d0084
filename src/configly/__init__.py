"""configly -- Python client for Config.ly, the dead simple place to store static/config data.

Values are fetched by key over HTTPS and cached in memory for the TTL the
server declares, so repeated lookups are served without network I/O until
the value goes stale.

Typical usage::

    import configly

    client = configly.ConfiglyClient("Dem0apiKEY")
    slogan = await client.get("slogan")
    fresh = await client.get("slogan", {"enable_cache": False})

or, with a process-wide instance::

    configly.init("Dem0apiKEY")
    await configly.get_instance().get("slogan")

Modules:
    client: :class:`ConfiglyClient` and the HTTP transport.
    cache: the in-memory value cache.
    models: Pydantic models for settings, wire records and cache entries.
    config: settings validation and ``CONFIGLY_*`` environment resolution.
    exceptions: error hierarchy with :class:`ErrorKind` classification.
    instance: the shared process-wide client.
    clock: injectable time sources.
    output: stderr diagnostics.
"""

__version__ = "0.1.0"

from configly.client import ConfiglyClient
from configly.clock import FrozenClock, SystemClock
from configly.exceptions import (
    ConfigError,
    ConfiglyError,
    ConnectionFailureError,
    ErrorKind,
    InvalidArgumentError,
    InvalidCredentialError,
    ServerError,
    StateError,
)
from configly.instance import adestroy, destroy, get_instance, init, is_initialized
from configly.models import CacheEntry, ClientConfig, RequestOptions

__all__ = [
    "__version__",
    "CacheEntry",
    "ClientConfig",
    "ConfigError",
    "ConfiglyClient",
    "ConfiglyError",
    "ConnectionFailureError",
    "ErrorKind",
    "FrozenClock",
    "InvalidArgumentError",
    "InvalidCredentialError",
    "RequestOptions",
    "ServerError",
    "StateError",
    "SystemClock",
    "adestroy",
    "destroy",
    "get_instance",
    "init",
    "is_initialized",
]
