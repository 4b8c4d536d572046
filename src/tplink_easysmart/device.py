"""Top-level DeviceClient for TP-Link Easy Smart switches."""

from __future__ import annotations

import logging
import threading

from tplink_easysmart.client.errors import TPLinkError
from tplink_easysmart.client.port_ops import set_port_state
from tplink_easysmart.client.session import TPLinkCredentials, TPLinkSession
from tplink_easysmart.config import DEFAULT_TIMEOUT_S, ClientSettings
from tplink_easysmart.model.port import PortSettings
from tplink_easysmart.model.system import SystemInfo
from tplink_easysmart.parser.port import parse_port_settings
from tplink_easysmart.parser.system import parse_system_info
from tplink_easysmart.vendor.tplink.endpoints import PORT_SETTINGS, SYSTEM_INFO

logger = logging.getLogger(__name__)


class DeviceClient:
    """Client for one TP-Link Easy Smart switch.

    Keeps one session against the switch's web UI, caches the device
    identity and port count from :meth:`connect`, and reads or changes the
    administrative state of single ports.

    No method raises on device or network trouble: failures are logged and
    reported as ``None`` / ``False``, which callers should treat as "switch
    currently unreachable or unauthenticated".

    Before every port read or write the session is probed by fetching the
    system info page; if that fails the client logs in once more and probes
    again.  There is no further retry.

    Public operations on one client are serialized.  The switch itself allows
    only one session, so two clients (or a browser) logging in to the same
    switch keep invalidating each other; that is not detected beyond the
    relogin above.

    Args:
        ip_address: IP address or hostname of the switch, optionally including
            the URL scheme (e.g. ``http://192.168.0.1``).
        username: Login username.
        password: Login password.
        timeout_s: Per-request timeout in seconds.
    """

    def __init__(
        self,
        ip_address: str,
        username: str,
        password: str,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self.ip_address = ip_address
        self.username = username
        self.password = password
        self._session = TPLinkSession(
            base_url=ip_address,
            credentials=TPLinkCredentials(username=username, password=password),
            timeout_s=timeout_s,
        )
        self._system_info: SystemInfo | None = None
        self._num_ports: int = 0
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> DeviceClient:
        """Create a client from :class:`.ClientSettings`."""
        return cls(
            settings.host,
            settings.username,
            settings.password,
            timeout_s=settings.timeout_s,
        )

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def connect(self) -> bool:
        """Log in and load the device identity and port count.

        Cached state is only replaced when every step succeeds.

        Returns:
            ``True`` on success, ``False`` otherwise.
        """
        with self._lock:
            if not self._login():
                return False
            system_info = self._get_system_info()
            port_settings = self._get_port_settings()
            if system_info is None or port_settings is None:
                return False
            self._system_info = system_info
            self._num_ports = port_settings.num_ports
            logger.info(
                "Connected to %s (%s, %d ports)",
                self._session.base_url,
                system_info.description,
                port_settings.num_ports,
            )
            return True

    def close(self) -> None:
        """Drop the session and close the HTTP connection pool."""
        with self._lock:
            self._session.close()

    def __enter__(self) -> DeviceClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Cached identity
    # ------------------------------------------------------------------

    def get_name(self) -> str:
        """Device description, or ``""`` before the first successful connect."""
        return self._system_info.description if self._system_info else ""

    def get_mac_address(self) -> str:
        """Lower-cased MAC address, or ``""`` before the first successful connect."""
        return self._system_info.mac_address if self._system_info else ""

    def get_firmware_version(self) -> str:
        """Firmware version string, or ``""`` before the first successful connect."""
        return self._system_info.firmware_version if self._system_info else ""

    def get_hardware_version(self) -> str:
        """Hardware version string, or ``""`` before the first successful connect."""
        return self._system_info.hardware_version if self._system_info else ""

    def get_num_ports(self) -> int:
        """Port count cached by the last successful connect, else ``0``."""
        return self._num_ports

    # ------------------------------------------------------------------
    # Ports
    # ------------------------------------------------------------------

    def get_port_enabled(self, port: int) -> bool | None:
        """Query the switch for the current enabled state of *port*.

        Logs in again if the session has gone stale.

        Args:
            port: 1-based port number.

        Returns:
            ``True``/``False``, or ``None`` if *port* is invalid or the switch
            could not be read.
        """
        with self._lock:
            if not self._is_valid_port(port):
                return None
            if not self._relogin_if_needed():
                return None
            port_settings = self._get_port_settings()
            if port_settings is None:
                return None
            try:
                return port_settings.is_enabled(port)
            except IndexError:
                logger.warning(
                    "Port %d missing from state list of %s (%d entries)",
                    port,
                    self._session.base_url,
                    len(port_settings.port_enabled),
                )
                return None

    def set_port_enabled(self, port: int, enabled: bool) -> bool:
        """Enable or disable *port*.

        Logs in again if the session has gone stale.  A 200 answer counts as
        success; the switch does not confirm the change.

        Args:
            port: 1-based port number.
            enabled: ``True`` to enable, ``False`` to disable.

        Returns:
            ``True`` if the switch accepted the request, ``False`` otherwise.
        """
        with self._lock:
            if not self._is_valid_port(port):
                return False
            if not self._relogin_if_needed():
                return False
            try:
                set_port_state(self._session, port, enabled)
            except TPLinkError as exc:
                logger.warning("Error setting port %d state: %s", port, exc)
                return False
            return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _login(self) -> bool:
        """Log in and confirm the new session by reading the system info page."""
        logger.debug("Logging in to %s", self._session.base_url)
        try:
            self._session.login()
        except TPLinkError as exc:
            logger.warning("Error connecting to %s: %s", self._session.base_url, exc)
            return False
        return self._get_system_info() is not None

    def _relogin_if_needed(self) -> bool:
        # The switch invalidates a session whenever anyone else logs in.
        # _login already reads the system info page to confirm the new
        # session; that read is the re-fetch, so no third one follows.
        if self._get_system_info() is not None:
            return True
        logger.debug("Session to %s is stale; logging in again", self._session.base_url)
        return self._login()

    def _get_system_info(self) -> SystemInfo | None:
        try:
            html = self._session.get(SYSTEM_INFO)
            return parse_system_info(html)
        except TPLinkError as exc:
            logger.warning("Error fetching system info: %s", exc)
            return None

    def _get_port_settings(self) -> PortSettings | None:
        try:
            html = self._session.get(PORT_SETTINGS)
            return parse_port_settings(html)
        except TPLinkError as exc:
            logger.warning("Error fetching port settings: %s", exc)
            return None

    def _is_valid_port(self, port: object) -> bool:
        return (
            isinstance(port, int)
            and not isinstance(port, bool)
            and 1 <= port <= self._num_ports
        )
