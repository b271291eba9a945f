"""Minimal packet model carrying the header fields that classifiers inspect."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Union

AddressLike = Union[str, int, ipaddress.IPv4Address]


class IpProtocol(IntEnum):
    """IP protocol numbers understood by the transport-aware classifiers."""

    TCP = 6
    UDP = 17


def _to_address(value: AddressLike) -> ipaddress.IPv4Address:
    return ipaddress.IPv4Address(value)


def _check_range(name: str, value: int, upper: int) -> int:
    value = int(value)
    if not 0 <= value <= upper:
        raise ValueError(f"{name} must be between 0 and {upper}, got {value}")
    return value


@dataclass
class Ipv4Header:
    """The IPv4 header fields used for classification."""

    source: AddressLike = "0.0.0.0"
    destination: AddressLike = "0.0.0.0"
    protocol: int = 0
    tos: int = 0

    def __post_init__(self) -> None:
        self.source = _to_address(self.source)
        self.destination = _to_address(self.destination)
        self.protocol = _check_range("protocol", self.protocol, 0xFF)
        self.tos = _check_range("tos", self.tos, 0xFF)

    @property
    def transport_protocol(self) -> Optional[IpProtocol]:
        """The transport protocol if it is TCP or UDP, else None."""
        try:
            return IpProtocol(self.protocol)
        except ValueError:
            return None


@dataclass
class TransportHeader:
    """Source and destination ports of a TCP or UDP header."""

    source_port: int = 0
    destination_port: int = 0

    def __post_init__(self) -> None:
        self.source_port = _check_range("source_port", self.source_port, 0xFFFF)
        self.destination_port = _check_range(
            "destination_port", self.destination_port, 0xFFFF
        )


@dataclass
class Packet:
    """A packet of a given size in bytes with optional IPv4 and transport headers."""

    size: int = 0
    ip: Optional[Ipv4Header] = None
    transport: Optional[TransportHeader] = field(default=None)

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"packet size must not be negative, got {self.size}")