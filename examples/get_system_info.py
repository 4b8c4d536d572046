#!/usr/bin/env python3
"""Smoke-test script: retrieve identity and port states from a TP-Link switch.

Usage::

    export TPLINK_HOST="192.168.0.1"
    export TPLINK_USERNAME="admin"
    export TPLINK_PASSWORD="your-password"
    export TPLINK_TIMEOUT="10"        # optional, seconds
    python examples/get_system_info.py

Exit codes:
    0 — information retrieved and printed successfully.
    1 — missing environment variable or switch unreachable.
"""

from __future__ import annotations

import json
import logging
import sys

from tplink_easysmart.config import ClientSettings
from tplink_easysmart.device import DeviceClient


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        settings = ClientSettings.from_env()
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    with DeviceClient.from_settings(settings) as client:
        if not client.connect():
            print(f"ERROR: could not connect to {settings.host}", file=sys.stderr)
            sys.exit(1)

        ports = {
            str(port): client.get_port_enabled(port)
            for port in range(1, client.get_num_ports() + 1)
        }
        facts = {
            "name": client.get_name(),
            "mac_address": client.get_mac_address(),
            "firmware_version": client.get_firmware_version(),
            "hardware_version": client.get_hardware_version(),
            "num_ports": client.get_num_ports(),
            "port_enabled": ports,
        }

    print(json.dumps(facts, indent=2))


if __name__ == "__main__":
    main()
