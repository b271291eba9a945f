import ipaddress

import pytest

from diffqos.packet import IpProtocol, Ipv4Header, Packet, TransportHeader


def test_header_normalises_addresses():
    header = Ipv4Header(source="10.1.1.1", destination="10.1.2.2", protocol=6)
    assert header.source == ipaddress.IPv4Address("10.1.1.1")
    assert header.destination == ipaddress.IPv4Address("10.1.2.2")


def test_header_defaults_to_any_address():
    header = Ipv4Header()
    assert header.source == ipaddress.IPv4Address("0.0.0.0")
    assert header.destination == header.source
    assert header.protocol == 0
    assert header.tos == 0


def test_transport_protocol_recognises_tcp_and_udp():
    assert Ipv4Header(protocol=6).transport_protocol is IpProtocol.TCP
    assert Ipv4Header(protocol=17).transport_protocol is IpProtocol.UDP
    assert Ipv4Header(protocol=1).transport_protocol is None


@pytest.mark.parametrize("kwargs", [{"protocol": 256}, {"tos": -1}, {"tos": 300}])
def test_header_rejects_out_of_range_fields(kwargs):
    with pytest.raises(ValueError):
        Ipv4Header(**kwargs)


def test_header_rejects_bad_address():
    with pytest.raises(ValueError):
        Ipv4Header(source="not-an-address")


@pytest.mark.parametrize("kwargs", [{"source_port": 65536}, {"destination_port": -1}])
def test_transport_header_rejects_out_of_range_ports(kwargs):
    with pytest.raises(ValueError):
        TransportHeader(**kwargs)


def test_transport_header_keeps_ports():
    header = TransportHeader(source_port=49152, destination_port=9)
    assert (header.source_port, header.destination_port) == (49152, 9)


def test_packet_rejects_negative_size():
    with pytest.raises(ValueError):
        Packet(size=-1)


def test_packet_holds_headers():
    ip = Ipv4Header(protocol=17)
    transport = TransportHeader(destination_port=10)
    packet = Packet(size=512, ip=ip, transport=transport)
    assert packet.size == 512
    assert packet.ip is ip
    assert packet.transport is transport