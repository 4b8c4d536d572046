"""Typed model for device identity parsed from SystemInfoRpm.htm."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SystemInfo:
    """Identity of the switch as shown on its system information page.

    Attributes:
        mac_address: Base MAC address, lower-cased
            (e.g. ``50:d4:f7:12:34:56``).
        firmware_version: Firmware version string, verbatim.
        hardware_version: Hardware version string, verbatim.
        description: Device description set by the user
            (e.g. ``"TL-SG108E"``).
    """

    mac_address: str
    firmware_version: str
    hardware_version: str
    description: str
