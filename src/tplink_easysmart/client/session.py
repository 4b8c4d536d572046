"""Authenticated HTTP session for TP-Link Easy Smart switches."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tplink_easysmart.client.errors import TPLinkAuthError, TPLinkSessionError
from tplink_easysmart.client.http import TPLinkHTTP
from tplink_easysmart.vendor.tplink.endpoints import LOGON
from tplink_easysmart.vendor.tplink.mappings import LOGON_ACTION, SESSION_COOKIE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TPLinkCredentials:
    """Immutable credential pair for a TP-Link switch.

    Args:
        username: Login username.
        password: Login password.
    """

    username: str
    password: str


class TPLinkSession:
    """Holds the single session token issued by a TP-Link switch.

    Wraps :class:`.TPLinkHTTP` and adds:
    - Login via ``logon.cgi`` and capture of the ``H_P_SSID`` cookie.
    - ``Cookie`` header injection for authenticated GETs.

    The switch supports one session at a time: any other login (another
    client, a browser) silently invalidates this one.  The session has no way
    to detect that except a later request failing, so callers probe by using
    the token and log in again when that fails.

    Args:
        base_url: Switch base URL, e.g. ``http://192.168.0.1``.
        credentials: Username/password pair.
        timeout_s: Request timeout in seconds (default 10).
    """

    def __init__(
        self,
        base_url: str,
        credentials: TPLinkCredentials,
        timeout_s: float = 10.0,
    ) -> None:
        self._http: TPLinkHTTP = TPLinkHTTP(base_url=base_url, timeout_s=timeout_s)
        self._credentials: TPLinkCredentials = credentials
        self._cookie: str = ""

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def login(self) -> None:
        """Authenticate to the switch and store the session cookie.

        Logging in is destructive: any existing session on the switch,
        including this one, is invalidated.  The switch gives no explicit
        success signal, so a stored cookie only means the switch issued one;
        whether it works is established by using it.

        Raises:
            TPLinkAuthError: If the response carries no ``H_P_SSID`` cookie.
            TPLinkRequestError: On transport failure.
            TPLinkResponseError: On a status other than 200.
        """
        self._cookie = ""
        resp = self._http.post(
            LOGON,
            params={
                "username": self._credentials.username,
                "password": self._credentials.password,
                "cpassword": "",
                "logon": LOGON_ACTION,
            },
        )
        if "Set-Cookie" not in resp.headers:
            raise TPLinkAuthError("set-cookie header not found in login response")

        value = resp.cookies.get(SESSION_COOKIE)
        if value is None:
            raise TPLinkAuthError(f"{SESSION_COOKIE} cookie not found in login response")

        self._cookie = f"{SESSION_COOKIE}={value}"
        logger.debug("Session cookie received from %s", self._http.base_url)

    def invalidate(self) -> None:
        """Forget the stored session cookie."""
        self._cookie = ""

    # ------------------------------------------------------------------
    # Public request methods
    # ------------------------------------------------------------------

    def get(
        self,
        path: str,
        params: dict[str, str] | None = None,
    ) -> str:
        """Perform an authenticated GET and return the response text.

        Args:
            path: Page or CGI path relative to the switch base URL.
            params: Optional query parameters.

        Returns:
            Response body as a string.

        Raises:
            TPLinkSessionError: If no session cookie is stored.
            TPLinkRequestError: On transport failure.
            TPLinkResponseError: On a status other than 200.
        """
        if not self._cookie:
            raise TPLinkSessionError("No valid session cookie; log in first")
        resp = self._http.get(path, params=params, cookie=self._cookie)
        return resp.text

    def close(self) -> None:
        """Forget the session and close the underlying HTTP session."""
        self.invalidate()
        self._http.close()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def cookie(self) -> str:
        """The stored ``H_P_SSID=<value>`` pair, or ``""`` if none."""
        return self._cookie

    @property
    def has_session(self) -> bool:
        """True if a session cookie is stored (it may have expired)."""
        return bool(self._cookie)

    @property
    def base_url(self) -> str:
        """Normalised switch base URL."""
        return self._http.base_url
