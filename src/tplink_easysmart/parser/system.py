"""Parser for the TP-Link system information page (SystemInfoRpm.htm)."""

from __future__ import annotations

from tplink_easysmart.client.errors import TPLinkParseError
from tplink_easysmart.model.system import SystemInfo
from tplink_easysmart.parser.page import find_quoted_array_value
from tplink_easysmart.vendor.tplink.mappings import SYSTEM_INFO_KEYS


def parse_system_info(html: str) -> SystemInfo:
    """Parse the system information page into a :class:`.SystemInfo`.

    Looks up ``macStr``, ``firmwareStr``, ``hardwareStr`` and ``descriStr``
    anywhere in the page body. All four must be present: a partially
    scraped identity is rejected rather than returned.

    Args:
        html: Raw HTML from ``SystemInfoRpm.htm``.

    Returns:
        Populated :class:`.SystemInfo` with the MAC address lower-cased.

    Raises:
        TPLinkParseError: If any of the four fields is missing.
    """
    fields: dict[str, str] = {}
    for key, attr in SYSTEM_INFO_KEYS.items():
        value = find_quoted_array_value(html, key)
        if value is None:
            raise TPLinkParseError(f"{key} not found in system info page")
        fields[attr] = value

    fields["mac_address"] = fields["mac_address"].lower()
    return SystemInfo(**fields)
