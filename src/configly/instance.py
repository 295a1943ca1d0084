"""Process-wide shared :class:`~configly.client.ConfiglyClient`.

Most applications want one client per process.  :func:`init` builds it
once, :func:`get_instance` hands it out anywhere else in the program, and
:func:`destroy` forgets it again (mainly for test isolation).
Async code should prefer :func:`adestroy`, which also closes the
client's own HTTP connections::

    import configly

    configly.init("Dem0apiKEY")
    ...
    value = await configly.get_instance().get("slogan")

:class:`~configly.client.ConfiglyClient` itself has no singleton
behaviour; create as many independent clients as needed.
"""

from __future__ import annotations

from typing import Optional

import httpx

from configly.client import ConfiglyClient
from configly.clock import Clock
from configly.config import load_client_config
from configly.exceptions import StateError

_instance: Optional[ConfiglyClient] = None


def init(
    api_key: Optional[str] = None,
    *,
    host: Optional[str] = None,
    enable_cache: Optional[bool] = None,
    timeout_ms: Optional[int] = None,
    clock: Optional[Clock] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> ConfiglyClient:
    """Create the shared client.

    Settings not passed explicitly are taken from the ``CONFIGLY_*``
    environment variables (see :mod:`configly.config`), then defaults.

    Returns:
        The new shared :class:`ConfiglyClient`.

    Raises:
        ConfigError: If no API key is supplied or found in the environment.
        StateError: If :func:`init` was already called.
    """
    global _instance
    config = load_client_config(
        api_key=api_key, host=host, enable_cache=enable_cache, timeout_ms=timeout_ms,
    )
    if _instance is not None:
        raise StateError("configly.init() is called multiple times. It can only be called once.")
    _instance = ConfiglyClient(config=config, clock=clock, http_client=http_client)
    return _instance


def get_instance() -> ConfiglyClient:
    """Return the shared client.

    Raises:
        StateError: If :func:`init` has not been called.
    """
    if _instance is None:
        raise StateError(
            "configly.get_instance() is called before configly.init(); you must call init."
        )
    return _instance


def is_initialized() -> bool:
    """Return True once :func:`init` has been called (and not destroyed)."""
    return _instance is not None


def destroy() -> None:
    """Forget the shared client so :func:`init` can be called again.

    The client's HTTP connections are not closed here; use :func:`adestroy`
    from async code to close them as well.
    """
    global _instance
    _instance = None


async def adestroy() -> None:
    """Close the shared client's own HTTP connections, then :func:`destroy` it.

    An ``http_client`` passed to :func:`init` stays open; its owner closes it.
    """
    client = _instance
    destroy()
    if client is not None:
        await client.aclose()
