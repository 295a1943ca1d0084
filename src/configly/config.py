"""Client configuration with environment precedence and credential sources.

This module turns loose settings into a validated
:class:`~configly.models.ClientConfig`:

* **Validation** -- :func:`build_client_config` applies defaults and
  converts Pydantic validation failures into
  :class:`~configly.exceptions.ConfigError`.
* **Precedence resolution** -- :func:`load_client_config` merges explicit
  arguments, ``CONFIGLY_*`` environment variables and defaults.
* **Credential resolution** -- :func:`resolve_credential` reads the API
  key from an environment variable or a file, so it never has to be
  hard-coded.

Environment variables:

``CONFIGLY_API_KEY``
    The API key itself.
``CONFIGLY_API_KEY_SOURCE``
    A credential source (``env:VAR`` or ``file:/path``), used when
    ``CONFIGLY_API_KEY`` is not set.
``CONFIGLY_HOST``
    API host.
``CONFIGLY_ENABLE_CACHE``
    ``1/true/yes/on`` or ``0/false/no/off``.
``CONFIGLY_TIMEOUT_MS``
    Request timeout in milliseconds.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from configly.exceptions import ConfigError
from configly.models import ClientConfig

ENV_API_KEY = "CONFIGLY_API_KEY"
ENV_API_KEY_SOURCE = "CONFIGLY_API_KEY_SOURCE"
ENV_HOST = "CONFIGLY_HOST"
ENV_ENABLE_CACHE = "CONFIGLY_ENABLE_CACHE"
ENV_TIMEOUT_MS = "CONFIGLY_TIMEOUT_MS"

_MISSING_KEY_MESSAGE = "You must supply your API Key. You can find it by logging in to Config.ly"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


# --- Validation ---


def build_client_config(
    api_key: Optional[str] = None,
    host: Optional[str] = None,
    enable_cache: Optional[bool] = None,
    timeout_ms: Optional[int] = None,
) -> ClientConfig:
    """Build a :class:`ClientConfig`, filling unset fields with defaults.

    Args:
        api_key: Read-only Config.ly API key.  Must be a non-empty string.
        host: API host; trailing slashes are removed.
        enable_cache: Whether values are cached by default.
        timeout_ms: Request timeout in milliseconds.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the API key is missing or any value is invalid.
    """
    if not isinstance(api_key, str) or not api_key:
        raise ConfigError(_MISSING_KEY_MESSAGE)

    fields: dict[str, Any] = {"api_key": api_key}
    if host is not None:
        fields["host"] = host
    if enable_cache is not None:
        fields["enable_cache"] = enable_cache
    if timeout_ms is not None:
        fields["timeout_ms"] = timeout_ms

    try:
        return ClientConfig(**fields)
    except ValidationError as exc:
        raise ConfigError(f"Invalid client configuration: {exc}", original_cause=exc) from exc


# --- Precedence resolution ---


def load_client_config(
    api_key: Optional[str] = None,
    host: Optional[str] = None,
    enable_cache: Optional[bool] = None,
    timeout_ms: Optional[int] = None,
) -> ClientConfig:
    """Resolve a :class:`ClientConfig` with full precedence chain.

    Precedence (high to low):
        1. Explicit arguments
        2. Environment variables (``CONFIGLY_*``)
        3. Defaults

    Raises:
        ConfigError: If no API key can be found or a value cannot be parsed.
    """
    if api_key is None:
        api_key = os.environ.get(ENV_API_KEY) or None
    if api_key is None:
        source = os.environ.get(ENV_API_KEY_SOURCE)
        if source:
            api_key = resolve_credential(source)

    if host is None:
        host = os.environ.get(ENV_HOST) or None

    if enable_cache is None:
        raw = os.environ.get(ENV_ENABLE_CACHE)
        if raw:
            enable_cache = _parse_bool(ENV_ENABLE_CACHE, raw)

    if timeout_ms is None:
        raw = os.environ.get(ENV_TIMEOUT_MS)
        if raw:
            timeout_ms = _parse_int(ENV_TIMEOUT_MS, raw)

    return build_client_config(
        api_key=api_key, host=host, enable_cache=enable_cache, timeout_ms=timeout_ms,
    )


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean (true/false), got '{raw}'")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got '{raw}'", original_cause=exc) from exc


# --- Credential source resolution ---


def resolve_credential(source: str) -> str:
    """Resolve an API key from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace

    Args:
        source: The source descriptor string.

    Returns:
        The resolved credential string.

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(
                f"Cannot read credential file {path}: {exc}", original_cause=exc,
            ) from exc

    raise ConfigError(f"Unknown credential source format: {source}")
