"""Filter elements: single conditions a packet either meets or does not."""

from __future__ import annotations

import ipaddress
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Optional

from diffqos.packet import AddressLike, IpProtocol, Packet, TransportHeader

_UINT32_MASK = 0xFFFFFFFF


class FilterElement(ABC):
    """One condition of a filter."""

    @abstractmethod
    def match(self, packet: Packet) -> bool:
        """Return True if the packet satisfies this condition."""


def _transport_of(packet: Packet) -> Optional[TransportHeader]:
    """The transport header when the packet is TCP or UDP over IPv4."""
    if packet.ip is None or packet.ip.transport_protocol not in (
        IpProtocol.TCP,
        IpProtocol.UDP,
    ):
        return None
    return packet.transport


@dataclass
class SourceIpAddress(FilterElement):
    """Matches packets whose IPv4 source address equals ``address``."""

    address: AddressLike = "0.0.0.0"

    def __post_init__(self) -> None:
        self.address = ipaddress.IPv4Address(self.address)

    def match(self, packet: Packet) -> bool:
        return packet.ip is not None and packet.ip.source == self.address


@dataclass
class DestIpAddress(FilterElement):
    """Matches packets whose IPv4 destination address equals ``address``."""

    address: AddressLike = "0.0.0.0"

    def __post_init__(self) -> None:
        self.address = ipaddress.IPv4Address(self.address)

    def match(self, packet: Packet) -> bool:
        return packet.ip is not None and packet.ip.destination == self.address


@dataclass
class SourcePort(FilterElement):
    """Matches TCP or UDP packets whose source port equals ``port``."""

    port: int = 0

    def match(self, packet: Packet) -> bool:
        transport = _transport_of(packet)
        return transport is not None and transport.source_port == self.port


@dataclass
class DestPort(FilterElement):
    """Matches TCP or UDP packets whose destination port equals ``port``."""

    port: int = 0

    def match(self, packet: Packet) -> bool:
        transport = _transport_of(packet)
        return transport is not None and transport.destination_port == self.port


@dataclass
class ProtocolNumber(FilterElement):
    """Matches packets whose IPv4 protocol field equals ``protocol``."""

    protocol: int = 0

    def match(self, packet: Packet) -> bool:
        return packet.ip is not None and packet.ip.protocol == self.protocol


@dataclass
class TosField(FilterElement):
    """Matches packets whose IPv4 type-of-service byte equals ``tos``."""

    tos: int = 0

    def match(self, packet: Packet) -> bool:
        return packet.ip is not None and packet.ip.tos == self.tos


@dataclass
class PacketNumber(FilterElement):
    """Matches every ``number``-th packet examined by any PacketNumber element.

    The count is shared by all instances and grows by one on every call to
    :meth:`match`.
    """

    number: int = 0

    _count: ClassVar[int] = 0

    def match(self, packet: Packet) -> bool:
        if self.number == 0:
            raise ValueError("packet number must be non-zero")
        PacketNumber._count = (PacketNumber._count + 1) & _UINT32_MASK
        return PacketNumber._count % self.number == 0

    @classmethod
    def reset_count(cls) -> None:
        """Reset the shared packet count to zero."""
        PacketNumber._count = 0