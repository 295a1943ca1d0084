"""Network boundary for configly -- one idempotent read of a batch of keys.

:class:`ValueTransport` wraps :class:`httpx.AsyncClient` and knows only how
to ask the Config.ly value endpoint for a list of keys:

- **Auth** -- the API key is sent as the Basic-auth username with an empty
  password.
- **Diagnostics header** -- ``X-Lib-Version: configly-python/<version>``.
- **Query** -- keys are serialised in bracket array form,
  ``?keys[]=a&keys[]=b``.
- **Timeouts** -- each request carries its own timeout, so per-call
  overrides never touch the shared client.
- **Error mapping** -- transport failures and non-2xx statuses are raised
  as :class:`~configly.exceptions.ConfiglyError` subclasses.  Nothing is
  retried.
"""

from __future__ import annotations

from typing import Optional, Sequence

import httpx

from configly import __version__
from configly.client.response import extract_records
from configly.exceptions import (
    ConnectionFailureError,
    InvalidCredentialError,
    ServerError,
)
from configly.models import ClientConfig, ValueRecord
from configly.output import get_output

GET_API_PATH = "/api/v1/value"
MAX_ERROR_BODY_CHARS = 1000

_CONNECTION_HINT = (
    "Configly didn't receive an HTTP response. This could be because of a network "
    "disruption with the server or a bad supplied hostname. If you've supplied a host "
    "parameter, please ensure it is correct. Otherwise, try again."
)


class ValueTransport:
    """Fetches values for a batch of keys from the Config.ly API.

    Args:
        config: Client settings; ``api_key`` and ``host`` are used here.
        http_client: Optional pre-built :class:`httpx.AsyncClient`.  When
            given, the transport uses it as-is and never closes it.  When
            omitted, a client is created on first use and closed by
            :meth:`aclose`.
    """

    def __init__(
        self,
        config: ClientConfig,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = config
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def url(self) -> str:
        return f"{self._config.host}{GET_API_PATH}"

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "X-Lib-Version": f"configly-python/{__version__}",
        }

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(follow_redirects=True)
        return self._client

    async def fetch(self, keys: Sequence[str], timeout_ms: int) -> dict[str, ValueRecord]:
        """Request *keys* in a single GET and return the records the server knows.

        Args:
            keys: Keys to resolve.  Order is preserved in the query string.
            timeout_ms: Timeout for this request in milliseconds.

        Returns:
            A mapping of key to :class:`~configly.models.ValueRecord`.  Keys
            unknown to the server are absent.

        Raises:
            InvalidCredentialError: On HTTP 401.
            ServerError: On any other non-2xx status or a malformed body.
            ConnectionFailureError: On connection, network or timeout errors.
        """
        client = self._ensure_client()
        output = get_output()
        output.debug(f"GET {self.url} keys={list(keys)} timeout={timeout_ms}ms")

        try:
            response = await client.get(
                self.url,
                params={"keys[]": list(keys)},
                headers=self._headers(),
                auth=httpx.BasicAuth(self._config.api_key, ""),
                timeout=timeout_ms / 1000,
            )
        except httpx.TimeoutException as exc:
            raise ConnectionFailureError(
                f"Request timed out after {timeout_ms}ms. {_CONNECTION_HINT}",
                original_cause=exc,
            ) from exc
        except httpx.TransportError as exc:
            raise ConnectionFailureError(
                f"{_CONNECTION_HINT} ({exc})", original_cause=exc,
            ) from exc

        self._map_response_error(response)
        return extract_records(response)

    def _map_response_error(self, response: httpx.Response) -> None:
        """Raise a typed exception for any non-2xx status."""
        if response.is_success:
            return

        status = response.status_code
        detail = (response.text or "")[:MAX_ERROR_BODY_CHARS]
        prefix = f"HTTP {status}"
        full_msg = f"{prefix}: {detail}" if detail else prefix

        if status == 401:
            raise InvalidCredentialError(full_msg, original_cause=response)
        raise ServerError(full_msg, original_cause=response)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
