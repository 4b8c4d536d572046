"""Connection settings for a TP-Link Easy Smart switch."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_USERNAME: str = "admin"
DEFAULT_PASSWORD: str = "admin"
DEFAULT_TIMEOUT_S: float = 10.0


@dataclass(frozen=True)
class ClientSettings:
    """Everything needed to reach and log in to one switch.

    Attributes:
        host: Switch IP or hostname, optionally with ``http://`` scheme.
        username: Login username.
        password: Login password.
        timeout_s: Per-request timeout in seconds.
    """

    host: str
    username: str = DEFAULT_USERNAME
    password: str = DEFAULT_PASSWORD
    timeout_s: float = DEFAULT_TIMEOUT_S

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientSettings:
        """Build settings from ``TPLINK_*`` environment variables.

        Reads ``TPLINK_HOST`` (required), ``TPLINK_USERNAME``,
        ``TPLINK_PASSWORD`` and ``TPLINK_TIMEOUT``.

        Args:
            environ: Mapping to read instead of :data:`os.environ`.

        Raises:
            ValueError: If ``TPLINK_HOST`` is unset or empty, or
                ``TPLINK_TIMEOUT`` is not a positive number.
        """
        env = os.environ if environ is None else environ
        host = env.get("TPLINK_HOST", "").strip()
        if not host:
            raise ValueError("TPLINK_HOST environment variable is required")

        raw_timeout = env.get("TPLINK_TIMEOUT", str(DEFAULT_TIMEOUT_S))
        try:
            timeout_s = float(raw_timeout)
        except ValueError:
            raise ValueError(f"TPLINK_TIMEOUT must be a number, got {raw_timeout!r}") from None
        if timeout_s <= 0:
            raise ValueError(f"TPLINK_TIMEOUT must be positive, got {timeout_s}")

        return cls(
            host=host,
            username=env.get("TPLINK_USERNAME", DEFAULT_USERNAME),
            password=env.get("TPLINK_PASSWORD", DEFAULT_PASSWORD),
            timeout_s=timeout_s,
        )
