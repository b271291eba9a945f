"""A differentiated-services queue: classify into traffic classes, then schedule."""

from __future__ import annotations

from typing import List, Optional

from diffqos.packet import Packet
from diffqos.traffic_class import TrafficClass


class ConfigError(Exception):
    """Raised when a queue configuration is missing or invalid."""


class DiffServ:
    """A queue made of traffic classes.

    Packets are placed in the first class whose filters match (class 0 when
    none do). The base scheduler serves the first non-empty class; subclasses
    override :meth:`schedule` to implement other disciplines.
    """

    def __init__(self, max_size: int = 100) -> None:
        if max_size < 0:
            raise ValueError(f"max_size must not be negative, got {max_size}")
        self.max_size = max_size
        self._classes: List[TrafficClass] = []

    @property
    def traffic_classes(self) -> tuple:
        """The traffic classes, in classification order."""
        return tuple(self._classes)

    def enqueue(self, packet: Packet) -> bool:
        """Classify and queue a packet; return False if it was dropped.

        Raises ConfigError if no traffic class has been added.
        """
        if len(self) >= self.max_size:
            return False
        if not self._classes:
            raise ConfigError("no traffic classes configured")
        index = self.classify(packet)
        if not 0 <= index < len(self._classes):
            index = 0
        return self._classes[index].enqueue(packet)

    def dequeue(self) -> Optional[Packet]:
        """Return the next packet chosen by the scheduler, or None if empty."""
        if self.is_empty():
            return None
        return self.schedule()

    def peek(self) -> Optional[Packet]:
        """Return the head of the first non-empty class without removing it.

        This ignores the scheduling discipline.
        """
        for traffic_class in self._classes:
            if not traffic_class.is_empty():
                return traffic_class.peek()
        return None

    def is_empty(self) -> bool:
        """Return True if every traffic class is empty."""
        return all(tc.is_empty() for tc in self._classes)

    def schedule(self) -> Optional[Packet]:
        """Dequeue from the first non-empty traffic class."""
        for traffic_class in self._classes:
            if not traffic_class.is_empty():
                return traffic_class.dequeue()
        return None

    def classify(self, packet: Packet) -> int:
        """Return the index of the first matching class, or 0 if none match."""
        return next(
            (i for i, tc in enumerate(self._classes) if tc.match(packet)), 0
        )

    def add_traffic_class(self, traffic_class: TrafficClass) -> None:
        """Append a traffic class."""
        self._classes.append(traffic_class)

    def get_traffic_class(self, index: int) -> Optional[TrafficClass]:
        """Return the class at ``index``, or None if there is none."""
        if 0 <= index < len(self._classes):
            return self._classes[index]
        return None

    def __len__(self) -> int:
        return sum(len(tc) for tc in self._classes)