"""FavQs API client with session-token authentication."""
from __future__ import annotations

import os
import time
from typing import Any, Dict, List, Optional, Sequence

import requests
from requests.adapters import HTTPAdapter

from favqsCli.config import DEFAULT_FILTERS, FavQsConfig, load_config
from favqsCli.models import PayloadError, Quote, QuoteOfDay, QuotePage
from favqsCli.utils.log_json import JsonLogger
from favqsCli.utils.sampling import RandomFactory, RandomSource, fresh_random, pick_one, select_permuted


_logger = JsonLogger("favqs-client")

USER_TOKEN_HEADER = "User-Token"


class FavQsError(Exception):
    """Base class for FavQs client errors."""


class MissingCredentialError(FavQsError):
    """Raised when the API key environment variable is unset or blank."""

    def __init__(self, env_var: str) -> None:
        super().__init__(f"{env_var} is missing from the environment")
        self.env_var = env_var


class TransportError(FavQsError):
    """Raised when a request fails before a response is received."""


class HTTPStatusError(FavQsError):
    """Raised for an unexpected HTTP status code."""

    def __init__(self, endpoint: str, status_code: int) -> None:
        super().__init__(f"{endpoint} returned HTTP {status_code}, expected 200")
        self.endpoint = endpoint
        self.status_code = status_code


class DecodeError(FavQsError):
    """Raised when a response body is not the expected JSON document."""


class ApiResponseError(FavQsError):
    """Raised when the API reports an ``error_code`` in its response body."""

    def __init__(self, endpoint: str, error_code: Any, message: str | None) -> None:
        detail = message or "no message"
        super().__init__(f"{endpoint} reported error {error_code}: {detail}")
        self.endpoint = endpoint
        self.error_code = error_code
        self.message = message


class SessionEstablishmentError(ApiResponseError):
    """Raised when ``POST /session`` does not yield a user token."""


class NoResultsError(FavQsError):
    """Raised when a quote search returns an empty page."""

    def __init__(self, filter: str) -> None:
        super().__init__(f"No quotes found for filter {filter!r}")
        self.filter = filter


def random_filter_from_defaults(
    filters: Sequence[str] = DEFAULT_FILTERS,
    rng: RandomSource | None = None,
) -> str:
    """Return one of ``filters`` chosen uniformly at random."""
    return pick_one(filters, rng if rng is not None else fresh_random())


class FavQsClient:
    """Authenticated client for the FavQs API.

    Construction reads the API key, builds the HTTP transport and opens a user
    session with ``POST /session``. Any failure raises and releases the
    transport, so a constructed client is always ready for requests.
    """

    def __init__(
        self,
        config: FavQsConfig | None = None,
        *,
        session: requests.Session | None = None,
        rng_factory: RandomFactory | None = None,
    ) -> None:
        self.config = config or load_config()
        self._rng_factory = rng_factory or fresh_random

        api_key = (os.getenv(self.config.api_key_env) or "").strip()
        if not api_key:
            _logger.info("api.client.missing_key", env_var=self.config.api_key_env)
            raise MissingCredentialError(self.config.api_key_env)

        self.session = session or requests.Session()
        self._owns_session = session is None
        adapter = HTTPAdapter(
            pool_connections=self.config.pool_connections,
            pool_maxsize=self.config.pool_maxsize,
        )
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

        self._headers: Dict[str, str] = {
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
            "Authorization": f"Token token={api_key}",
        }
        _logger.info(
            "api.client.init",
            base_url=self.config.base_url,
            timeout=list(self.config.timeout),
            has_credentials=self.config.has_credentials,
        )
        try:
            self._headers[USER_TOKEN_HEADER] = self._open_session()
        except FavQsError:
            self.close()
            raise

    # ------------------------------------------------------------------#
    def __enter__(self) -> "FavQsClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    # ------------------------------------------------------------------#
    def _send(
        self,
        method: str,
        endpoint: str,
        *,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        url = self.config.endpoint(endpoint)
        _logger.info("api.request", endpoint=endpoint, method=method, params=params)
        started = time.perf_counter()
        try:
            resp = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers,
                timeout=self.config.timeout,
            )
        except requests.RequestException as exc:
            _logger.info("api.request_failed", endpoint=endpoint, error=str(exc))
            raise TransportError(f"{method} {endpoint} failed: {exc}") from exc
        _logger.info(
            "api.response",
            endpoint=endpoint,
            status=resp.status_code,
            latency_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return resp

    def _decode(self, endpoint: str, resp: requests.Response) -> Dict[str, Any]:
        try:
            payload = resp.json()
        except ValueError as exc:
            _logger.info("api.invalid_json", endpoint=endpoint, error=str(exc))
            raise DecodeError(f"Invalid JSON response from {endpoint}") from exc
        if not isinstance(payload, dict):
            _logger.info("api.invalid_json", endpoint=endpoint, error="not an object")
            raise DecodeError(f"Expected a JSON object from {endpoint}, got {type(payload).__name__}")
        return payload

    def _get(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        resp = self._send("GET", endpoint, params=params)
        if resp.status_code != 200:
            raise HTTPStatusError(endpoint, resp.status_code)
        payload = self._decode(endpoint, resp)
        if payload.get("error_code") is not None:
            _logger.info(
                "api.error_response",
                endpoint=endpoint,
                error_code=payload.get("error_code"),
                message=payload.get("message"),
            )
            raise ApiResponseError(endpoint, payload.get("error_code"), payload.get("message"))
        return payload

    def _open_session(self) -> str:
        endpoint = "/session"
        body = None
        if self.config.has_credentials:
            body = {"user": {"login": self.config.login, "password": self.config.password}}
        resp = self._send("POST", endpoint, json=body)
        if resp.status_code != 200:
            _logger.info("api.session.failed", endpoint=endpoint, status=resp.status_code)
            raise HTTPStatusError(endpoint, resp.status_code)
        payload = self._decode(endpoint, resp)
        error_code = payload.get("error_code")
        if error_code is not None:
            _logger.info(
                "api.session.failed",
                endpoint=endpoint,
                error_code=error_code,
                message=payload.get("message"),
            )
            raise SessionEstablishmentError(endpoint, error_code, payload.get("message"))
        token = payload.get(USER_TOKEN_HEADER)
        if not isinstance(token, str) or not token.strip():
            _logger.info("api.session.failed", endpoint=endpoint, reason="missing_user_token")
            raise SessionEstablishmentError(endpoint, None, "response did not include a User-Token")
        _logger.info("api.session.established", endpoint=endpoint, login=payload.get("login"))
        return token.strip()

    # ------------------------------------------------------------------#
    def get_quote_of_day(self) -> QuoteOfDay:
        """Return the quote of the day from ``/qotd``."""
        payload = self._get("/qotd")
        try:
            return QuoteOfDay.from_payload(payload)
        except PayloadError as exc:
            raise DecodeError(f"Malformed /qotd response: {exc}") from exc

    def get_quotes(self, filter: str, limit: int | None = None) -> List[Quote]:
        """Return up to ``limit`` quotes tagged ``filter`` in random order.

        The order is a random permutation of the first ``limit`` quotes of the
        returned page; ``limit`` is clamped to the page size.
        """
        if limit is None:
            limit = self.config.default_max
        payload = self._get("/quotes", params={"filter": filter, "type": "tag"})
        try:
            page = QuotePage.from_payload(payload)
        except PayloadError as exc:
            raise DecodeError(f"Malformed /quotes response: {exc}") from exc
        if not page.quotes:
            _logger.info("quotes.empty", filter=filter, page=page.page)
            raise NoResultsError(filter)
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        quotes = select_permuted(page.quotes, limit, self._rng_factory())
        _logger.info("quotes.selected", filter=filter, available=len(page), selected=len(quotes))
        return quotes

    def random_filter(self) -> str:
        """Return one of the configured default filters at random."""
        return random_filter_from_defaults(self.config.default_filters, self._rng_factory())


__all__ = [
    "ApiResponseError",
    "DecodeError",
    "FavQsClient",
    "FavQsError",
    "HTTPStatusError",
    "MissingCredentialError",
    "NoResultsError",
    "SessionEstablishmentError",
    "TransportError",
    "random_filter_from_defaults",
]
