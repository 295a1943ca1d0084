"""Client module for configly.

Classes:
    :class:`ConfiglyClient` -- the cache-fronted value fetcher.
    :class:`ValueTransport` -- the HTTP boundary, backed by
    :class:`httpx.AsyncClient`.

Example::

    from configly.client import ConfiglyClient

    async with ConfiglyClient("Dem0apiKEY") as client:
        value = await client.get("slogan")
"""

from configly.client.async_client import ConfiglyClient
from configly.client.transport import ValueTransport

__all__ = ["ConfiglyClient", "ValueTransport"]
