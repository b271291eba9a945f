"""Deficit round robin scheduling on top of the differentiated-services queue."""

from __future__ import annotations

import os
from typing import Iterator, List, Optional, Union

from diffqos.cisco_parser import _read_uint32
from diffqos.diffserv import ConfigError, DiffServ
from diffqos.packet import Packet
from diffqos.traffic_class import TrafficClass

_UINT32_MASK = 0xFFFFFFFF


class DRR(DiffServ):
    """Serves traffic classes in turn, each within a byte budget.

    On each visit a non-empty class has its weight, truncated to a whole
    number, added to its deficit counter. It may send its head packet if
    the deficit covers the packet size; the size is then taken off the
    deficit. The visit order starts at class 1 and wraps around.
    """

    def __init__(self, max_size: int = 100) -> None:
        super().__init__(max_size)
        self._deficits: List[int] = []
        self._last_served = 0

    @property
    def deficits(self) -> tuple:
        """The current deficit counter of each traffic class."""
        self._sync_deficits()
        return tuple(self._deficits)

    @property
    def last_served(self) -> int:
        """Index of the traffic class visited most recently."""
        return self._last_served

    def _sync_deficits(self) -> None:
        missing = len(self.traffic_classes) - len(self._deficits)
        if missing > 0:
            self._deficits.extend([0] * missing)

    def schedule(self) -> Optional[Packet]:
        """Dequeue the next packet under deficit round robin, or None."""
        classes = self.traffic_classes
        count = len(classes)
        if count == 0:
            return None
        self._sync_deficits()

        for _ in range(count):
            self._last_served = (self._last_served + 1) % count
            index = self._last_served
            traffic_class = classes[index]
            if traffic_class.is_empty():
                continue

            quantum = int(traffic_class.weight) & _UINT32_MASK
            self._deficits[index] = (self._deficits[index] + quantum) & _UINT32_MASK

            head = traffic_class.peek()
            if self._deficits[index] < head.size:
                continue
            packet = traffic_class.dequeue()
            self._deficits[index] -= packet.size
            return packet
        return None

    def load_config(self, path: Union[str, os.PathLike]) -> None:
        """Add traffic classes from a configuration file.

        The first line holds the number of queues and each following line
        the quantum of one queue, used as the class weight. An empty file
        adds no classes. Raises ConfigError if the file cannot be read or is
        malformed.
        """
        try:
            with open(path, encoding="utf-8") as handle:
                first = next(handle, None)
                count = 0
                quanta: List[int] = []
                if first is not None:
                    count = _read_uint32(first.rstrip("\n"))
                    if count is None:
                        raise ConfigError("invalid number of queues")
                    quanta = self._read_quanta(
                        (line.rstrip("\n") for line in handle), count
                    )
        except OSError as exc:
            raise ConfigError(f"failed to open file {path}") from exc

        self._deficits = (self._deficits + [0] * count)[:count]
        for quantum in quanta:
            self.add_traffic_class(TrafficClass(weight=quantum))

    @staticmethod
    def _read_quanta(lines: Iterator[str], count: int) -> List[int]:
        quanta = []
        for index in range(count):
            line = next(lines, None)
            if line is None:
                raise ConfigError("not enough quantum values specified")
            quantum = _read_uint32(line)
            if quantum is None:
                raise ConfigError(f"invalid quantum value for queue {index}")
            quanta.append(quantum)
        return quanta