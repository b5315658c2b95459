"""Remote key-value store over a PostgREST ``app_data`` table.

The table has three columns: ``key`` (primary key), ``value`` (JSON) and
``updated_at``. Saves are upserts, so concurrent writers overwrite each
other (last write wins).

``MirroredStore`` pairs the remote store with a local one: reads prefer the
remote copy and cache it locally; writes go to the local copy first. Remote
failures never reach the caller; they are logged and the local copy is
used. Configuration errors that retrying cannot fix (missing table, secret
key used instead of the public one) switch remote sync off for the rest of
the process.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from backoffice_core.config import DEFAULT_RETRIES, DEFAULT_TIMEOUT
from backoffice_core.exceptions import RemoteStoreError
from backoffice_core.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

TABLE = "app_data"

_MISSING_TABLE_CODE = "42P01"
_CRITICAL_MESSAGES = ("Could not find the table", "Forbidden use of secret API key")

_NOT_FOUND = object()


def make_session(
    timeout: float = DEFAULT_TIMEOUT, retries: int = DEFAULT_RETRIES
) -> requests.Session:
    """Create a requests Session with retry logic and default timeout.

    Configures the session with:
    - Retry adapter for HTTP/HTTPS with exponential backoff
    - Default timeout for all requests
    - Retries on 429, 500, 502, 503, 504 status codes

    Args:
        timeout: Default timeout in seconds for all requests.
        retries: Number of retry attempts.

    Returns:
        Configured requests.Session object.

    """
    s = requests.Session()
    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=0.8,  # 0.8, 1.6, 3.2, ...
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset({"GET", "POST", "HEAD", "OPTIONS"}),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    s.mount("http://", adapter)
    s.mount("https://", adapter)
    orig_request = s.request

    def timed_request(method: str, url: str, **kwargs: Any) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return orig_request(method, url, **kwargs)

    s.request = timed_request  # type: ignore[method-assign,assignment]
    return s


def _is_critical(message: str, code: str | None) -> bool:
    return code == _MISSING_TABLE_CODE or any(m in message for m in _CRITICAL_MESSAGES)


class RemoteStore:
    """Key-value store backed by the PostgREST ``app_data`` table.

    Args:
        url: Project base URL (e.g. ``https://xyz.supabase.co``).
        api_key: Public (anon) API key.
        session: Optional session; defaults to ``make_session()``.
        table: Table name (default: "app_data").

    """

    def __init__(
        self,
        url: str,
        api_key: str,
        session: requests.Session | None = None,
        table: str = TABLE,
    ) -> None:
        self.endpoint = f"{url.rstrip('/')}/rest/v1/{table}"
        self.session = session or make_session()
        self.session.headers.update(
            {
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            }
        )

    def _check(self, resp: requests.Response, action: str, key: str) -> None:
        if resp.ok:
            return
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        message = str(body.get("message") or resp.text or resp.reason)
        code = body.get("code")
        raise RemoteStoreError(
            f"{action} {key!r} failed with HTTP {resp.status_code}: {message} ({code})",
            critical=_is_critical(message, code),
        )

    def load(self, key: str, default: Any = None) -> Any:
        """Fetch ``key``; a missing row yields ``default``.

        Raises:
            RemoteStoreError: On network errors, error statuses or an
                unexpected response body.

        """
        try:
            resp = self.session.get(
                self.endpoint, params={"key": f"eq.{key}", "select": "value"}
            )
        except requests.RequestException as e:
            raise RemoteStoreError(f"Load {key!r} failed: {e}") from e

        self._check(resp, "Load", key)
        try:
            rows = resp.json()
        except ValueError as e:
            raise RemoteStoreError(f"Load {key!r} returned invalid JSON") from e

        if not isinstance(rows, list):
            raise RemoteStoreError(f"Load {key!r} returned {type(rows).__name__}, expected list")
        if not rows:
            return default
        return rows[0].get("value", default)

    def save(self, key: str, value: Any) -> None:
        """Upsert ``key``.

        Raises:
            RemoteStoreError: On network errors or error statuses.

        """
        payload = {
            "key": key,
            "value": value,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            resp = self.session.post(
                self.endpoint,
                json=payload,
                headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
            )
        except requests.RequestException as e:
            raise RemoteStoreError(f"Save {key!r} failed: {e}") from e
        self._check(resp, "Save", key)


class MirroredStore:
    """Remote store mirrored into a local store.

    Args:
        remote: Remote store (usually ``RemoteStore``).
        local: Local store used as cache and fallback.

    """

    def __init__(self, remote: KeyValueStore, local: KeyValueStore) -> None:
        self.remote = remote
        self.local = local
        self.remote_enabled = True

    def _remote_failed(self, action: str, key: str, error: RemoteStoreError) -> None:
        if error.critical:
            self.remote_enabled = False
            logger.error("Remote sync disabled after %s of %r: %s", action, key, error)
        else:
            logger.warning("Remote %s of %r failed, using local copy: %s", action, key, error)

    def load(self, key: str, default: Any = None) -> Any:
        if self.remote_enabled:
            try:
                value = self.remote.load(key, _NOT_FOUND)
            except RemoteStoreError as e:
                self._remote_failed("load", key, e)
            else:
                if value is not _NOT_FOUND:
                    self.local.save(key, value)
                    return value
        return self.local.load(key, default)

    def save(self, key: str, value: Any) -> None:
        self.local.save(key, value)
        if not self.remote_enabled:
            return
        try:
            self.remote.save(key, value)
        except RemoteStoreError as e:
            self._remote_failed("save", key, e)
