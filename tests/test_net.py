from ipaddress import IPv4Address

import pytest

from knob import SettingParseError
from knob.net import Keys, SocketAddr, SocketSettings


def test_compound_socket_settings():
    settings = SocketSettings()
    settings.set(Keys.PORT, "12345")
    settings.set(Keys.IP, "127.0.0.1")
    assert str(settings.socket()) == "127.0.0.1:12345"


def test_socket_addr_overrides_parts():
    settings = SocketSettings()
    settings.set(Keys.PORT, "12345")
    settings.set(Keys.IP, "127.0.0.1")
    settings.set(Keys.ADDR, "0.0.0.0:4567")
    assert str(settings.socket()) == "0.0.0.0:4567"


def test_defaults():
    settings = SocketSettings()
    assert settings.port() == 8080
    assert settings.ip() == IPv4Address("127.0.0.1")
    assert str(settings.socket()) == "127.0.0.1:8080"


def test_ipv6_addr():
    settings = SocketSettings()
    settings.set(Keys.IP, "::0.0.0.1")
    assert str(settings.ip()) == "::1"
    assert str(settings.socket()) == "[::1]:8080"


def test_port_out_of_range():
    settings = SocketSettings()
    settings.set(Keys.PORT, 70000)
    with pytest.raises(SettingParseError):
        settings.port()


def test_bad_addr():
    settings = SocketSettings()
    settings.set(Keys.ADDR, "localhost")
    with pytest.raises(SettingParseError):
        settings.socket()


def test_socket_addr_parse_ipv6():
    addr = SocketAddr.parse("[::1]:443")
    assert addr.port == 443
    assert str(addr) == "[::1]:443"


def test_register_options_and_load():
    settings = SocketSettings()
    settings.register_options()
    assert settings.load_args(["server", "-p", "3000", "--ip", "10.1.2.3"]) is None
    assert str(settings.socket()) == "10.1.2.3:3000"


def test_bad_addr_names_socket_addr():
    settings = SocketSettings()
    settings.set(Keys.ADDR, "localhost")
    with pytest.raises(SettingParseError) as info:
        settings.socket()
    assert info.value.target == "SocketAddr"
    assert "does not parse as SocketAddr" in str(info.value)
