"""Unit tests for tplink_easysmart.device.DeviceClient."""

from __future__ import annotations

import logging
import pathlib
import threading

import pytest
import requests
import responses as rsps_lib

from tplink_easysmart.config import ClientSettings
from tplink_easysmart.device import DeviceClient
from tplink_easysmart.vendor.tplink.endpoints import (
    LOGON,
    PORT_SETTING_APPLY,
    PORT_SETTINGS,
    SYSTEM_INFO,
)

FIXTURES = pathlib.Path(__file__).parent.parent / "fixtures"

BASE_URL = "http://192.168.0.1"
SYSTEM_HTML = (FIXTURES / "system_info.html").read_text()
PORT_HTML = (FIXTURES / "port_settings.html").read_text()
LOGIN_HTML = (FIXTURES / "login.html").read_text()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_client() -> DeviceClient:
    return DeviceClient("192.168.0.1", "admin", "secret")


def _add_logon(token: str = "tok", status: int = 200) -> None:
    rsps_lib.add(
        rsps_lib.POST,
        f"{BASE_URL}{LOGON}",
        status=status,
        headers={"Set-Cookie": f"H_P_SSID={token}; path=/"},
    )


def _add_page(path: str, body: str = "", status: int = 200) -> None:
    rsps_lib.add(rsps_lib.GET, f"{BASE_URL}{path}", body=body, status=status)


def _logon_calls() -> list[object]:
    return [c for c in rsps_lib.calls if c.request.method == "POST"]


def _calls_to(path: str) -> list[object]:
    return [c for c in rsps_lib.calls if c.request.path_url.split("?")[0] == path]


def _connected_client() -> DeviceClient:
    """Register a healthy switch, connect, and clear the call log."""
    _add_logon()
    _add_page(SYSTEM_INFO, SYSTEM_HTML)
    _add_page(PORT_SETTINGS, PORT_HTML)
    client = _make_client()
    assert client.connect() is True
    rsps_lib.calls.reset()
    return client


def _stale_client(num_ports: int = 8) -> DeviceClient:
    """A client that believes it holds a session the switch no longer honours."""
    client = _make_client()
    client._num_ports = num_ports
    client._session._cookie = "H_P_SSID=stale"
    return client


# ---------------------------------------------------------------------------
# Construction and getters
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_construction_does_no_io() -> None:
    client = _make_client()
    assert len(rsps_lib.calls) == 0
    assert client.get_name() == ""
    assert client.get_mac_address() == ""
    assert client.get_firmware_version() == ""
    assert client.get_hardware_version() == ""
    assert client.get_num_ports() == 0


def test_from_settings() -> None:
    settings = ClientSettings(host="10.0.0.2", username="u", password="p", timeout_s=3.0)
    client = DeviceClient.from_settings(settings)
    assert client.ip_address == "10.0.0.2"
    assert client.username == "u"
    assert client._session.base_url == "http://10.0.0.2"
    assert client._session._http.timeout_s == 3.0


# ---------------------------------------------------------------------------
# connect
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_connect_populates_identity_and_port_count() -> None:
    client = _connected_client()
    assert client.get_name() == "Office Switch"
    assert client.get_mac_address() == "50:d4:f7:12:ab:cd"
    assert client.get_firmware_version() == "1.0.0 Build 20230218 Rel.50633"
    assert client.get_hardware_version() == "TL-SG108E 6.0"
    assert client.get_num_ports() == 8


@rsps_lib.activate
def test_connect_logs_in_once_and_sends_cookie() -> None:
    _add_logon(token="abc")
    _add_page(SYSTEM_INFO, SYSTEM_HTML)
    _add_page(PORT_SETTINGS, PORT_HTML)
    client = _make_client()
    assert client.connect() is True
    assert len(_logon_calls()) == 1
    for call in rsps_lib.calls[1:]:
        assert call.request.headers["Cookie"] == "H_P_SSID=abc"


@rsps_lib.activate
def test_connect_fails_without_session_cookie() -> None:
    rsps_lib.add(rsps_lib.POST, f"{BASE_URL}{LOGON}", status=200, body=LOGIN_HTML)
    client = _make_client()
    assert client.connect() is False
    assert client.get_num_ports() == 0
    assert client.get_name() == ""
    assert _calls_to(SYSTEM_INFO) == []


@rsps_lib.activate
def test_connect_fails_when_login_cannot_be_verified() -> None:
    _add_logon()
    _add_page(SYSTEM_INFO, LOGIN_HTML)
    _add_page(PORT_SETTINGS, PORT_HTML)
    client = _make_client()
    assert client.connect() is False
    assert client.get_mac_address() == ""


@rsps_lib.activate
def test_connect_transport_error() -> None:
    rsps_lib.add(
        rsps_lib.POST,
        f"{BASE_URL}{LOGON}",
        body=requests.exceptions.ConnectionError("refused"),
    )
    client = _make_client()
    assert client.connect() is False


@rsps_lib.activate
def test_failed_reconnect_keeps_cached_state() -> None:
    client = _connected_client()
    renamed = SYSTEM_HTML.replace("Office Switch", "Renamed Switch")
    rsps_lib.replace(rsps_lib.GET, f"{BASE_URL}{SYSTEM_INFO}", body=renamed)
    rsps_lib.replace(rsps_lib.GET, f"{BASE_URL}{PORT_SETTINGS}", status=500)

    assert client.connect() is False
    assert len(_logon_calls()) == 1
    assert client.get_name() == "Office Switch"
    assert client.get_num_ports() == 8


# ---------------------------------------------------------------------------
# Port validation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("port", [0, -1, 9, 100, 1.0, 2.5, True, "1", None])
@rsps_lib.activate
def test_invalid_port_makes_no_request(port: object) -> None:
    client = _connected_client()
    assert client.get_port_enabled(port) is None  # type: ignore[arg-type]
    assert client.set_port_enabled(port, True) is False  # type: ignore[arg-type]
    assert len(rsps_lib.calls) == 0


@rsps_lib.activate
def test_every_port_invalid_before_connect() -> None:
    client = _make_client()
    assert client.get_port_enabled(1) is None
    assert client.set_port_enabled(1, False) is False
    assert len(rsps_lib.calls) == 0


# ---------------------------------------------------------------------------
# get_port_enabled
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_get_port_enabled_reads_fresh_settings() -> None:
    client = _connected_client()
    assert client.get_port_enabled(1) is True
    assert client.get_port_enabled(5) is False
    assert client.get_port_enabled(8) is True
    assert _logon_calls() == []
    assert len(_calls_to(PORT_SETTINGS)) == 3


@rsps_lib.activate
def test_get_port_enabled_fetch_failure_returns_none() -> None:
    client = _connected_client()
    rsps_lib.replace(rsps_lib.GET, f"{BASE_URL}{PORT_SETTINGS}", status=500)
    assert client.get_port_enabled(1) is None


@rsps_lib.activate
def test_get_port_enabled_short_state_list_returns_none() -> None:
    client = _connected_client()
    short = PORT_HTML.replace("state:[1,1,1,1,0,1,0,1,0,0]", "state:[1,1]")
    rsps_lib.replace(rsps_lib.GET, f"{BASE_URL}{PORT_SETTINGS}", body=short)
    assert client.get_port_enabled(2) is True
    assert client.get_port_enabled(3) is None


# ---------------------------------------------------------------------------
# Relogin
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_stale_session_relogs_in_exactly_once() -> None:
    _add_page(SYSTEM_INFO, LOGIN_HTML)
    _add_page(SYSTEM_INFO, SYSTEM_HTML)
    _add_logon(token="fresh")
    _add_page(PORT_SETTINGS, PORT_HTML)
    client = _stale_client()

    assert client.get_port_enabled(1) is True
    assert len(_logon_calls()) == 1
    # The login's own verification read is the only re-fetch of system info.
    assert [c.request.path_url.split("?")[0] for c in rsps_lib.calls] == [
        SYSTEM_INFO,
        LOGON,
        SYSTEM_INFO,
        PORT_SETTINGS,
    ]
    assert rsps_lib.calls[0].request.headers["Cookie"] == "H_P_SSID=stale"
    assert rsps_lib.calls[-1].request.headers["Cookie"] == "H_P_SSID=fresh"


@rsps_lib.activate
def test_relogin_gives_up_after_one_attempt() -> None:
    _add_page(SYSTEM_INFO, LOGIN_HTML)
    _add_logon()
    _add_page(PORT_SETTINGS, PORT_HTML)
    client = _stale_client()

    assert client.get_port_enabled(1) is None
    assert client.set_port_enabled(1, True) is False
    assert len(_logon_calls()) == 2  # one per operation
    assert _calls_to(PORT_SETTINGS) == []
    assert _calls_to(PORT_SETTING_APPLY) == []


@rsps_lib.activate
def test_relogin_with_rejected_login() -> None:
    _add_page(SYSTEM_INFO, LOGIN_HTML)
    rsps_lib.add(rsps_lib.POST, f"{BASE_URL}{LOGON}", status=200, body=LOGIN_HTML)
    client = _stale_client()

    assert client.get_port_enabled(1) is None
    assert len(_logon_calls()) == 1


@rsps_lib.activate
def test_missing_session_is_logged_without_request(caplog: pytest.LogCaptureFixture) -> None:
    client = _make_client()
    with caplog.at_level(logging.WARNING, logger="tplink_easysmart.device"):
        assert client._get_system_info() is None
    assert "session cookie" in caplog.text
    assert len(rsps_lib.calls) == 0


# ---------------------------------------------------------------------------
# set_port_enabled
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(("enabled", "state"), [(True, "1"), (False, "0")])
@rsps_lib.activate
def test_set_port_enabled_sends_state(enabled: bool, state: str) -> None:
    client = _connected_client()
    _add_page(PORT_SETTING_APPLY, "<html>anything</html>")

    assert client.set_port_enabled(4, enabled) is True

    (call,) = _calls_to(PORT_SETTING_APPLY)
    assert call.request.method == "GET"
    assert f"state={state}" in call.request.url
    assert "portid=4" in call.request.url
    assert call.request.headers["Cookie"] == "H_P_SSID=tok"


@rsps_lib.activate
def test_set_port_enabled_non_200_is_failure() -> None:
    client = _connected_client()
    _add_page(PORT_SETTING_APPLY, SYSTEM_HTML, status=500)
    assert client.set_port_enabled(2, True) is False


@rsps_lib.activate
def test_set_port_enabled_transport_error_is_failure() -> None:
    client = _connected_client()
    rsps_lib.add(
        rsps_lib.GET,
        f"{BASE_URL}{PORT_SETTING_APPLY}",
        body=requests.exceptions.ReadTimeout("slow"),
    )
    assert client.set_port_enabled(2, False) is False


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_operations_on_one_client_do_not_interleave() -> None:
    client = _make_client()
    client._num_ports = 8
    client._session._cookie = "H_P_SSID=tok"
    seen: list[str] = []
    entered = threading.Event()
    release = threading.Event()

    def _page(name: str, body: str):
        def _callback(request: requests.PreparedRequest) -> tuple[int, dict, str]:
            seen.append(name)
            return 200, {}, body
        return _callback

    def _apply(request: requests.PreparedRequest) -> tuple[int, dict, str]:
        seen.append("apply")
        entered.set()
        release.wait(5)
        return 200, {}, ""

    rsps_lib.add_callback(
        rsps_lib.GET, f"{BASE_URL}{SYSTEM_INFO}", callback=_page("system", SYSTEM_HTML)
    )
    rsps_lib.add_callback(
        rsps_lib.GET, f"{BASE_URL}{PORT_SETTINGS}", callback=_page("ports", PORT_HTML)
    )
    rsps_lib.add_callback(
        rsps_lib.GET, f"{BASE_URL}{PORT_SETTING_APPLY}", callback=_apply
    )

    results: dict[str, object] = {}
    t_set = threading.Thread(
        target=lambda: results.update(set=client.set_port_enabled(1, True))
    )
    t_get = threading.Thread(
        target=lambda: results.update(get=client.get_port_enabled(2))
    )

    t_set.start()
    assert entered.wait(5)
    t_get.start()
    t_get.join(0.2)
    # The reader is parked on the client lock and has sent nothing yet.
    assert t_get.is_alive()
    assert seen == ["system", "apply"]

    release.set()
    t_set.join(5)
    t_get.join(5)
    assert seen == ["system", "apply", "system", "ports"]
    assert results == {"set": True, "get": True}


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_context_manager_drops_session() -> None:
    with _connected_client() as client:
        assert client._session.has_session is True
    assert client._session.has_session is False
