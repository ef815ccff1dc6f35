"""Socket address settings built on :class:`~knob.settings.Settings`.

Shows how to decorate the store with derived accessors: ``socket()`` prefers
a full ``addr`` override and falls back to combining ``ip`` and ``port``.
"""

from __future__ import annotations

from enum import Enum
from ipaddress import IPv4Address, IPv6Address, ip_address
from typing import Annotated, NamedTuple

from pydantic import Field

from .options import optopt
from .settings import Settings

Port = Annotated[int, Field(ge=0, le=65535)]
IPAddress = IPv4Address | IPv6Address

DEFAULT_PORT = 8080
DEFAULT_IP = IPv4Address("127.0.0.1")


class Keys(str, Enum):
    PORT = "port"
    IP = "ip"
    ADDR = "addr"


class SocketAddr(NamedTuple):
    ip: IPAddress
    port: int

    def __str__(self) -> str:
        if self.ip.version == 6:
            return f"[{self.ip}]:{self.port}"
        return f"{self.ip}:{self.port}"

    @classmethod
    def parse(cls, text: str) -> SocketAddr:
        host, sep, port = text.rpartition(":")
        if not sep or not host:
            raise ValueError(f"not a socket address: {text!r}")
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
        port_num = int(port)
        if not 0 <= port_num <= 65535:
            raise ValueError(f"port out of range: {port_num}")
        return cls(ip_address(host), port_num)


class SocketSettings(Settings):
    def register_options(self) -> None:
        self.opt(optopt("p", Keys.PORT.value, "the port to bind to", "4000"))
        self.opt(optopt("i", Keys.IP.value, "the address to bind to", "127.0.0.1"))
        self.opt(optopt("a", Keys.ADDR.value, "full socket address, overrides ip and port", "0.0.0.0:4000"))

    def port(self) -> int:
        port = self.fetch(Keys.PORT, Port)
        return DEFAULT_PORT if port is None else port

    def ip(self) -> IPAddress:
        ip = self.fetch(Keys.IP, IPAddress)
        return DEFAULT_IP if ip is None else ip

    def socket(self) -> SocketAddr:
        return self.fetch_with(
            Keys.ADDR,
            lambda addr: addr if addr is not None else SocketAddr(self.ip(), self.port()),
            SocketAddr,
            parse=SocketAddr.parse,
        )
