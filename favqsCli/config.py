"""Client settings resolved from defaults and environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Tuple

from favqsCli import __version__

BASE_URL_ENV = "FAVQS_BASE_URL"
TIMEOUT_ENV = "FAVQS_TIMEOUT"
LOGIN_ENV = "FAVQS_LOGIN"
PASSWORD_ENV = "FAVQS_PASSWORD"

DEFAULT_BASE_URL = "https://favqs.com/api/"
DEFAULT_API_KEY_ENV = "FAVQS_APIKEY"
DEFAULT_FILTERS: Tuple[str, ...] = ("beauty", "inspirational", "art")


@dataclass(frozen=True)
class FavQsConfig:
    """Settings for :class:`api_clients.favqs_client.FavQsClient`.

    Parameters
    ----------
    base_url:
        Root of the FavQs API; endpoint paths are appended to it.
    api_key_env:
        Name of the environment variable holding the API key. The key itself
        is never stored on the config.
    connect_timeout / read_timeout:
        Per-request timeouts in seconds passed to :mod:`requests`. The read
        timeout bounds each socket read, not the whole response, so a server
        trickling its body can exceed ``read_timeout`` in total.
    pool_connections / pool_maxsize:
        Connection pool sizing for the mounted ``HTTPAdapter``.
    default_filters:
        Tags used by ``random_filter``.
    default_max:
        Number of quotes returned by ``get_quotes`` when no maximum is given.
    login / password:
        Optional user credentials sent with the session request.
    """

    base_url: str = DEFAULT_BASE_URL
    api_key_env: str = DEFAULT_API_KEY_ENV
    connect_timeout: float = 5.0
    read_timeout: float = 5.0
    pool_connections: int = 100
    pool_maxsize: int = 100
    default_filters: Tuple[str, ...] = DEFAULT_FILTERS
    default_max: int = 10
    login: str | None = None
    password: str | None = None
    user_agent: str = f"favqsCli/{__version__}"

    @property
    def timeout(self) -> tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)

    @property
    def has_credentials(self) -> bool:
        return bool(self.login and self.password)

    def endpoint(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


def _parse_timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{TIMEOUT_ENV} must be a number of seconds, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{TIMEOUT_ENV} must be positive, got {raw!r}")
    return value


def load_config(environ: Mapping[str, str] | None = None, **overrides) -> FavQsConfig:
    """Build a :class:`FavQsConfig` from ``environ`` (defaults to ``os.environ``).

    Keyword ``overrides`` win over both defaults and environment values.
    """

    env = os.environ if environ is None else environ
    cfg = FavQsConfig()
    changes: dict[str, object] = {}

    base_url = (env.get(BASE_URL_ENV) or "").strip()
    if base_url:
        changes["base_url"] = base_url

    timeout = (env.get(TIMEOUT_ENV) or "").strip()
    if timeout:
        seconds = _parse_timeout(timeout)
        changes["connect_timeout"] = seconds
        changes["read_timeout"] = seconds

    login = (env.get(LOGIN_ENV) or "").strip()
    password = env.get(PASSWORD_ENV) or ""
    if login and password:
        changes["login"] = login
        changes["password"] = password

    changes.update(overrides)
    return replace(cfg, **changes)


__all__ = [
    "DEFAULT_API_KEY_ENV",
    "DEFAULT_BASE_URL",
    "DEFAULT_FILTERS",
    "FavQsConfig",
    "load_config",
]
