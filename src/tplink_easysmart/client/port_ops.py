"""Low-level port write operations for TP-Link Easy Smart switches.

Translates a port/state pair into the exact query string captured from the
switch's own port settings form and sends it through
:class:`~tplink_easysmart.client.session.TPLinkSession`.

Request format (TL-SG108E web UI):

    DISABLE PORT 3: GET /port_setting.cgi
        portid=3&state=0&speed=1&flowcontrol=0&apply=Apply

    ENABLE PORT 3: GET /port_setting.cgi
        portid=3&state=1&speed=1&flowcontrol=0&apply=Apply

Fields:
    portid:      1-based port number
    state:       "1" = Enable, "0" = Disable
    speed:       "1" = Auto
    flowcontrol: "0" = Off

The switch answers 200 with the re-rendered settings page whether or not the
change took effect; the body is not inspected.
"""

from __future__ import annotations

import logging

from tplink_easysmart.client.session import TPLinkSession
from tplink_easysmart.vendor.tplink.endpoints import PORT_SETTING_APPLY
from tplink_easysmart.vendor.tplink.mappings import (
    PORT_APPLY_ACTION,
    PORT_FLOW_CONTROL_OFF,
    PORT_SPEED_AUTO,
    PORT_STATE_DISABLED,
    PORT_STATE_ENABLED,
)

logger = logging.getLogger(__name__)


def set_port_state(session: TPLinkSession, port: int, enabled: bool) -> None:
    """Enable or disable one switch port.

    Args:
        session: Session holding a session cookie.
        port: 1-based port number.
        enabled: ``True`` to enable the port, ``False`` to disable it.

    Raises:
        TPLinkSessionError: If *session* holds no cookie.
        TPLinkRequestError: On transport failure.
        TPLinkResponseError: On a status other than 200.
    """
    params = build_port_params(port, enabled)
    logger.debug("Setting port %d: %s", port, params)
    session.get(PORT_SETTING_APPLY, params=params)
    logger.info("Port %d %s", port, "enabled" if enabled else "disabled")


def build_port_params(port: int, enabled: bool) -> dict[str, str]:
    """Build the query parameters for a single ``port_setting.cgi`` request.

    Args:
        port: 1-based port number (sent as is; the CGI is 1-based).
        enabled: Desired administrative state.

    Returns:
        A ``dict[str, str]`` ready to pass to ``session.get()``.
    """
    state = PORT_STATE_ENABLED if enabled else PORT_STATE_DISABLED
    return {
        "portid": str(port),
        "state": str(state),
        "speed": PORT_SPEED_AUTO,
        "flowcontrol": PORT_FLOW_CONTROL_OFF,
        "apply": PORT_APPLY_ACTION,
    }
