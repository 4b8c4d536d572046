#!/usr/bin/env python3
"""Example: toggle a port's enabled state and revert it (safe, dry-run by default).

Usage::

    # Dry-run (no changes) — shows the planned toggle:
    export TPLINK_HOST=192.168.0.1
    export TEST_PORT_ID=3        # required: 1-based port number to test
    python examples/toggle_port.py

    # Apply (toggles the port, waits 2 s, restores it):
    export APPLY=1
    python examples/toggle_port.py

Environment variables:
    TPLINK_HOST       Switch IP or hostname (required).
    TPLINK_USERNAME   Login username (default: admin).
    TPLINK_PASSWORD   Login password (default: admin).
    TPLINK_TIMEOUT    Request timeout in seconds (default: 10).
    TEST_PORT_ID      1-based port number to toggle (required).
    APPLY             Set to "1" to actually apply changes (default: dry-run).

WARNING: Do NOT set TEST_PORT_ID to the port your own connection uses.
"""

from __future__ import annotations

import os
import sys
import time

from tplink_easysmart.config import ClientSettings
from tplink_easysmart.device import DeviceClient


def _state(enabled: bool) -> str:
    return "Enable" if enabled else "Disable"


def main() -> None:
    try:
        settings = ClientSettings.from_env()
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    port_id_str = os.environ.get("TEST_PORT_ID", "")
    if not port_id_str:
        print("ERROR: TEST_PORT_ID environment variable is required.", file=sys.stderr)
        print("  Set it to the 1-based port number you want to toggle.", file=sys.stderr)
        sys.exit(1)

    try:
        port_id = int(port_id_str)
    except ValueError:
        print(f"ERROR: TEST_PORT_ID must be an integer, got {port_id_str!r}", file=sys.stderr)
        sys.exit(1)

    apply_changes = os.environ.get("APPLY", "0") == "1"

    with DeviceClient.from_settings(settings) as client:
        if not client.connect():
            print(f"ERROR: could not connect to {settings.host}", file=sys.stderr)
            sys.exit(1)

        current = client.get_port_enabled(port_id)
        if current is None:
            print(
                f"ERROR: Port {port_id} not readable "
                f"(switch has {client.get_num_ports()} ports).",
                file=sys.stderr,
            )
            sys.exit(1)

        print(f"{client.get_name()} ({client.get_mac_address()})")
        print(f"Current state of Port {port_id}: {_state(current)}")
        print(f"Dry-run plan — toggle to {_state(not current)}, then restore.")
        print()

        if not apply_changes:
            print("Dry-run mode — set APPLY=1 to apply changes.")
            return

        print(f"[APPLY] Setting Port {port_id} to {_state(not current)}...")
        if not client.set_port_enabled(port_id, not current):
            print("ERROR: switch rejected the change.", file=sys.stderr)
            sys.exit(1)
        print("  Done.  Waiting 2 seconds...")
        time.sleep(2)

        print(f"  Port {port_id} now reads: {client.get_port_enabled(port_id)}")
        print(f"[APPLY] Restoring Port {port_id} to {_state(current)}...")
        if not client.set_port_enabled(port_id, current):
            print("ERROR: could not restore the original state.", file=sys.stderr)
            sys.exit(1)
        print("  Done.  Port restored to original state.")


if __name__ == "__main__":
    main()
