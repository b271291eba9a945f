# diffqos

A small library of Differentiated Services (DiffServ) queues. It sorts
packets into traffic classes and serves them with one of two schedulers:

- **SPQ**: strict priority queueing. The non-empty class with the lowest
  priority level is always served first. When two classes share a level,
  the one added first wins.
- **DRR**: deficit round robin. Each class earns a byte budget on every
  visit, equal to its weight cut down to a whole number.

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Building blocks

- `diffqos.packet` models packets with `Packet`, `Ipv4Header`,
  `TransportHeader` and `IpProtocol`. A `Packet` has a `size` in bytes and an
  optional IPv4 header and TCP/UDP header. Addresses can be given as strings,
  integers or `ipaddress.IPv4Address`. Out-of-range protocol numbers, ToS
  values and ports raise `ValueError`.
- `diffqos.elements` holds filter elements, each of which tests one field:
  - `SourceIpAddress` and `DestIpAddress`
  - `SourcePort` and `DestPort`, which only match when the IPv4 protocol is
    TCP or UDP
  - `ProtocolNumber`
  - `TosField`
  - `PacketNumber`, which matches every `number`-th call to `match`. The
    count is shared by all instances and can be reset with
    `PacketNumber.reset_count()`. A `number` of 0 raises `ValueError`.
- `diffqos.filter.Filter` matches a packet only when all of its elements
  match. A filter with no elements matches every packet.
- `diffqos.traffic_class.TrafficClass` is a bounded FIFO with `filters`, a
  `priority_level` (default 0), a `weight` (default 1.0) and `max_packets`
  (default 100). A class matches a packet when any one of its filters
  matches, and a class with no filters matches every packet. `enqueue`
  returns `False` when the class is full.
- `diffqos.diffserv.DiffServ` is the base queue, with a total capacity of
  `max_size` packets (default 100). A packet goes to the first class that
  matches it, or to class 0 if none does. `dequeue()` calls `schedule()`. The
  base scheduler serves the first non-empty class. `peek()` always looks at
  the first non-empty class, whatever the scheduler. Enqueueing into a queue
  with no traffic classes raises `ConfigError`.
- `diffqos.spq.SPQ` and `diffqos.drr.DRR` are the two schedulers.

## Classifying traffic

```python
from diffqos.elements import DestPort
from diffqos.filter import Filter
from diffqos.packet import IpProtocol, Ipv4Header, Packet, TransportHeader
from diffqos.spq import SPQ
from diffqos.traffic_class import TrafficClass

queue = SPQ()
queue.add_traffic_class(TrafficClass(priority_level=1))   # default, index 0
web = TrafficClass(priority_level=0)
web.add_filter(Filter([DestPort(80)]))
queue.add_traffic_class(web)

packet = Packet(
    size=1000,
    ip=Ipv4Header("10.1.1.1", "10.1.2.2", protocol=IpProtocol.TCP),
    transport=TransportHeader(source_port=49152, destination_port=80),
)
queue.enqueue(packet)
assert queue.dequeue() is packet
```

Classes are tried in the order they were added. Because a class without
filters matches everything, put such a class last unless it is meant to take
all traffic.

## Strict priority queueing

An SPQ configuration file gives the number of queues on its first line. Each
following line gives the priority level of one queue:

```
2
0
1
```

```python
from diffqos.spq import SPQ

queue = SPQ()
queue.load_config("spq.conf")
```

An empty file adds no classes. A file that cannot be read, a bad number or
too few lines raises `diffqos.diffserv.ConfigError`.

### Switch-style configuration

`SPQ.load_cisco_config(path)` sets up SPQ from a Cisco 3750-style file,
read by `diffqos.cisco_parser.CiscoParser`. These commands are understood:

```
mls qos
interface <name>
priority-queue out
mls qos trust dscp
mls qos map dscp-queue <dscp values> to <queue>
```

Lines starting with `#` or `!` are comments. Other commands are logged as
warnings and ignored. The file must enable `mls qos`, `priority-queue out`
and `mls qos trust dscp`, and must map at least one DSCP value (0-63) to a
queue (0-3). Otherwise `ConfigError` is raised.

The result is always four traffic classes. The first has priority level 0.
The others start at level 3, and each DSCP value mapped to one of them
lowers its level to `dscp % 3 + 1` if that is lower. `CiscoParser().parse(path)`
or `parse_lines(lines)` returns this list of four levels directly.

## Deficit round robin

A DRR configuration file gives the number of queues on its first line. Each
following line gives the quantum of one queue, in bytes, which becomes the
class weight:

```
3
300
200
100
```

```python
from diffqos.drr import DRR

queue = DRR()
queue.load_config("drr.conf")
```

Visits go round the classes in turn, starting at class 1 and wrapping. A
non-empty class adds its quantum to its deficit counter. If the counter then
covers the size of its head packet, that packet is sent and its size is taken
off the counter. Otherwise the next class is visited. A call to `dequeue()`
visits each class at most once, so it can return `None` while packets are
still waiting for their budget to build up. `queue.deficits` and
`queue.last_served` show the scheduler's state.

## What this package does not do

It is a library of queue and scheduler objects only. It does not simulate a
network, generate traffic, measure throughput or draw plots, and it has no
command-line program. To drive the queues, call `enqueue` and `dequeue` from
your own code.