"""Parser for the TP-Link port settings page (PortSettingRpm.htm)."""

from __future__ import annotations

import re

from tplink_easysmart.client.errors import TPLinkParseError
from tplink_easysmart.model.port import PortSettings
from tplink_easysmart.parser.page import search_page
from tplink_easysmart.vendor.tplink.mappings import PORT_STATE_ENABLED

# var max_port_num = 8;
_MAX_PORT_RE: re.Pattern[str] = re.compile(r"var\s+max_port_num\s*=\s*(\d+)\s*;")

# state:[1,1,0,1,...] inside the all_info object.
_STATE_RE: re.Pattern[str] = re.compile(r"\bstate:\s*\[([^\]]+)\]")


def parse_port_settings(html: str) -> PortSettings:
    """Parse the port settings page into a :class:`.PortSettings`.

    Args:
        html: Raw HTML from ``PortSettingRpm.htm``.

    Returns:
        :class:`.PortSettings` with one enabled flag per configured port.

    Raises:
        TPLinkParseError: If ``max_port_num`` or the ``state`` list is missing.
    """
    max_port = search_page(_MAX_PORT_RE, html)
    if not max_port:
        raise TPLinkParseError("max_port_num not found in port settings page")

    state = search_page(_STATE_RE, html)
    if not state:
        raise TPLinkParseError("port state list not found in port settings page")

    num_ports = int(max_port.group(1))
    return PortSettings(
        num_ports=num_ports,
        port_enabled=parse_state_list(state.group(1), num_ports),
    )


def parse_state_list(raw: str, num_ports: int) -> tuple[bool, ...]:
    """Convert the comma-separated ``state`` list to enabled flags.

    The switch pads the array with slots for ports it does not have, so the
    list is cut to *num_ports*. Only ``1`` means enabled; every other value,
    including tokens that are not integers, means disabled.

    Args:
        raw: Text between the brackets, e.g. ``"1,0,1,1,0,0,1,0,0,0"``.
        num_ports: Number of ports the switch reports.

    Returns:
        Tuple of at most *num_ports* booleans, index 0 = port 1.
    """
    tokens = raw.split(",")[:num_ports]
    return tuple(_to_int(tok) == PORT_STATE_ENABLED for tok in tokens)


def _to_int(token: str) -> int | None:
    try:
        return int(token.strip())
    except ValueError:
        return None
