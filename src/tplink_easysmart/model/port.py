"""Typed models for port data."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PortSettings:
    """Administrative state of every port on the switch.

    Attributes:
        num_ports: Number of ports reported by ``max_port_num``.
        port_enabled: One entry per port; index 0 is port 1.
    """

    num_ports: int
    port_enabled: tuple[bool, ...] = field(default_factory=tuple)

    def is_enabled(self, port: int) -> bool:
        """Return the enabled flag of 1-based *port*.

        Raises:
            IndexError: If *port* is outside ``1..len(port_enabled)``.
        """
        if port < 1 or port > len(self.port_enabled):
            raise IndexError(f"port {port} out of range 1..{len(self.port_enabled)}")
        return self.port_enabled[port - 1]
