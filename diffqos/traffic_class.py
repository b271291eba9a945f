"""Traffic classes: bounded FIFO queues selected by filters."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional

from diffqos.filter import Filter
from diffqos.packet import Packet


@dataclass
class TrafficClass:
    """A FIFO of packets with a capacity, a priority level and a weight.

    ``priority_level`` is used by strict priority scheduling (lower is more
    urgent) and ``weight`` by weighted schedulers such as deficit round robin.
    """

    weight: float = 1.0
    priority_level: int = 0
    max_packets: int = 100
    filters: List[Filter] = field(default_factory=list)
    _queue: Deque[Packet] = field(default_factory=deque, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.weight < 0:
            raise ValueError(f"weight must not be negative, got {self.weight}")
        if self.priority_level < 0:
            raise ValueError(
                f"priority level must not be negative, got {self.priority_level}"
            )
        if self.max_packets < 0:
            raise ValueError(
                f"max_packets must not be negative, got {self.max_packets}"
            )

    def match(self, packet: Packet) -> bool:
        """Return True if any filter matches; a class without filters matches all."""
        if not self.filters:
            return True
        return any(f.match(packet) for f in self.filters)

    def enqueue(self, packet: Packet) -> bool:
        """Append a packet; return False and drop it if the class is full."""
        if len(self._queue) >= self.max_packets:
            return False
        self._queue.append(packet)
        return True

    def dequeue(self) -> Optional[Packet]:
        """Remove and return the oldest packet, or None if the class is empty."""
        if not self._queue:
            return None
        return self._queue.popleft()

    def peek(self) -> Optional[Packet]:
        """Return the oldest packet without removing it, or None if empty."""
        if not self._queue:
            return None
        return self._queue[0]

    def is_empty(self) -> bool:
        """Return True if no packets are queued."""
        return not self._queue

    def add_filter(self, filter_: Filter) -> None:
        """Add a filter that selects packets for this class."""
        self.filters.append(filter_)

    def __len__(self) -> int:
        return len(self._queue)