"""Strict priority queueing on top of the differentiated-services queue."""

from __future__ import annotations

import os
from typing import List, Optional, Union

from diffqos.cisco_parser import CiscoParser, _read_uint32
from diffqos.diffserv import ConfigError, DiffServ
from diffqos.packet import Packet
from diffqos.traffic_class import TrafficClass


class SPQ(DiffServ):
    """Always serves the non-empty class with the lowest priority level.

    Among classes with the same level the one added first wins.
    """

    def schedule(self) -> Optional[Packet]:
        """Dequeue from the most urgent non-empty traffic class."""
        chosen = min(
            (tc for tc in self.traffic_classes if not tc.is_empty()),
            key=lambda tc: tc.priority_level,
            default=None,
        )
        return None if chosen is None else chosen.dequeue()

    def load_config(self, path: Union[str, os.PathLike]) -> None:
        """Add traffic classes from a plain configuration file.

        The first line holds the number of queues and each following line the
        priority level of one queue. An empty file adds no classes. Raises
        ConfigError if the file cannot be read or is malformed.
        """
        try:
            with open(path, encoding="utf-8") as handle:
                levels = self._read_levels(line.rstrip("\n") for line in handle)
        except OSError as exc:
            raise ConfigError(f"failed to open file {path}") from exc
        self._add_levels(levels)

    def load_cisco_config(self, path: Union[str, os.PathLike]) -> None:
        """Add one traffic class per queue described by a switch configuration."""
        self._add_levels(CiscoParser().parse(path))

    @staticmethod
    def _read_levels(lines) -> List[int]:
        first = next(lines, None)
        if first is None:
            return []
        count = _read_uint32(first)
        if count is None:
            raise ConfigError("invalid number of queues")
        levels = []
        for index in range(count):
            line = next(lines, None)
            if line is None:
                raise ConfigError("not enough priority levels specified")
            level = _read_uint32(line)
            if level is None:
                raise ConfigError(f"invalid priority level for queue {index}")
            levels.append(level)
        return levels

    def _add_levels(self, levels: List[int]) -> None:
        for level in levels:
            self.add_traffic_class(TrafficClass(priority_level=level))