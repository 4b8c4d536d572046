"""Low-level HTTP client wrapper for TP-Link Easy Smart web endpoints."""

from __future__ import annotations

import importlib.metadata
import logging
from http.cookiejar import DefaultCookiePolicy

import requests

from tplink_easysmart.client.errors import TPLinkRequestError, TPLinkResponseError

logger = logging.getLogger(__name__)

try:
    _VERSION: str = importlib.metadata.version("tplink-easysmart")
except importlib.metadata.PackageNotFoundError:
    _VERSION = "0.0.0"

_USER_AGENT: str = f"tplink-easysmart/{_VERSION}"


def _normalise_base_url(url: str) -> str:
    """Ensure the URL has a scheme and no trailing slash."""
    url = url.rstrip("/")
    if not url.startswith(("http://", "https://")):
        url = "http://" + url
    return url


class TPLinkHTTP:
    """Low-level HTTP wrapper around :class:`requests.Session`.

    Handles a default ``User-Agent`` header, timeout, and maps transport and
    HTTP errors to :mod:`.errors` types.  The switch's session cookie is
    passed explicitly per request via *cookie*; the underlying cookie jar is
    disabled so no cookie is ever sent implicitly.

    Args:
        base_url: Switch base URL, e.g. ``http://192.168.0.1``.
        timeout_s: Request timeout in seconds (default 10).
    """

    def __init__(
        self,
        base_url: str,
        timeout_s: float = 10.0,
    ) -> None:
        self.base_url: str = _normalise_base_url(base_url)
        self.timeout_s: float = timeout_s
        self._session: requests.Session = requests.Session()
        self._session.headers.update({"User-Agent": _USER_AGENT})
        self._session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(
        self,
        path: str,
        params: dict[str, str] | None = None,
        cookie: str | None = None,
    ) -> requests.Response:
        """Send an HTTP GET to *path* and return the response.

        Args:
            path: URL path relative to :attr:`base_url`.
            params: Optional query-string parameters.
            cookie: Optional ``name=value`` sent as the ``Cookie`` header.

        Returns:
            The :class:`requests.Response`.

        Raises:
            TPLinkRequestError: On any transport-level failure.
            TPLinkResponseError: On any status other than 200.
        """
        return self._request("GET", path, params, cookie)

    def post(
        self,
        path: str,
        params: dict[str, str] | None = None,
        cookie: str | None = None,
    ) -> requests.Response:
        """Send an HTTP POST to *path* with *params* in the query string.

        The switch's CGI handlers read their arguments from the URL even for
        POST, so no request body is sent.

        Args:
            path: URL path relative to :attr:`base_url`.
            params: Optional query-string parameters.
            cookie: Optional ``name=value`` sent as the ``Cookie`` header.

        Returns:
            The :class:`requests.Response`.

        Raises:
            TPLinkRequestError: On any transport-level failure.
            TPLinkResponseError: On any status other than 200.
        """
        return self._request("POST", path, params, cookie)

    def close(self) -> None:
        """Close the underlying :class:`requests.Session`."""
        self._session.close()

    def __enter__(self) -> TPLinkHTTP:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None,
        cookie: str | None,
    ) -> requests.Response:
        url = self.base_url + path
        headers = {"Cookie": cookie} if cookie else None
        logger.debug("%s %s", method, url)
        try:
            resp = self._session.request(
                method,
                url,
                params=params,
                headers=headers,
                timeout=self.timeout_s,
            )
        except requests.exceptions.RequestException as exc:
            raise TPLinkRequestError(url, exc) from exc
        self._raise_for_status(resp)
        return resp

    @staticmethod
    def _raise_for_status(resp: requests.Response) -> None:
        if resp.status_code != 200:
            raise TPLinkResponseError(resp.status_code, resp.url)
