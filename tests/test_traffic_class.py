import pytest

from diffqos.elements import DestPort, TosField
from diffqos.filter import Filter
from diffqos.packet import Ipv4Header, Packet, TransportHeader
from diffqos.traffic_class import TrafficClass


def _packet(size=100, dport=80, tos=0):
    return Packet(
        size=size,
        ip=Ipv4Header(source="10.1.1.1", destination="10.1.2.2", protocol=17, tos=tos),
        transport=TransportHeader(source_port=5000, destination_port=dport),
    )


def test_defaults_follow_source_attributes():
    tc = TrafficClass()
    assert tc.weight == 1.0
    assert tc.priority_level == 0
    assert tc.max_packets == 100
    assert tc.is_empty() is True
    assert len(tc) == 0


def test_fifo_order():
    tc = TrafficClass()
    packets = [_packet(size=s) for s in (10, 20, 30)]
    for p in packets:
        assert tc.enqueue(p) is True
    assert len(tc) == 3
    assert [tc.dequeue() for _ in packets] == packets
    assert tc.is_empty() is True


def test_dequeue_and_peek_on_empty_return_none():
    tc = TrafficClass()
    assert tc.dequeue() is None
    assert tc.peek() is None


def test_peek_does_not_remove():
    tc = TrafficClass()
    first = _packet(size=1)
    tc.enqueue(first)
    tc.enqueue(_packet(size=2))
    assert tc.peek() is first
    assert len(tc) == 2
    assert tc.dequeue() is first


def test_full_class_drops():
    tc = TrafficClass(max_packets=2)
    assert tc.enqueue(_packet()) is True
    assert tc.enqueue(_packet()) is True
    assert tc.enqueue(_packet()) is False
    assert len(tc) == 2


def test_zero_capacity_drops_everything():
    tc = TrafficClass(max_packets=0)
    assert tc.enqueue(_packet()) is False
    assert tc.is_empty() is True


def test_match_without_filters_is_true():
    assert TrafficClass().match(Packet(size=5)) is True


def test_match_any_filter():
    tc = TrafficClass()
    tc.add_filter(Filter([DestPort(80)]))
    tc.add_filter(Filter([TosField(46)]))
    assert tc.match(_packet(dport=80)) is True
    assert tc.match(_packet(dport=22, tos=46)) is True
    assert tc.match(_packet(dport=22, tos=0)) is False


@pytest.mark.parametrize(
    "kwargs",
    [{"weight": -1.0}, {"priority_level": -1}, {"max_packets": -1}],
)
def test_negative_settings_rejected(kwargs):
    with pytest.raises(ValueError):
        TrafficClass(**kwargs)


def test_settings_kept():
    tc = TrafficClass(weight=3.0, priority_level=2, max_packets=7)
    assert (tc.weight, tc.priority_level, tc.max_packets) == (3.0, 2, 7)