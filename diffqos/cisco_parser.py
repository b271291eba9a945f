"""Parser for the switch CLI commands that configure strict priority queueing."""

from __future__ import annotations

import logging
import os
import re
from typing import Dict, Iterable, List, Optional, Union

from diffqos.diffserv import ConfigError

logger = logging.getLogger(__name__)

NUM_QUEUES = 4
LOWEST_PRIORITY = 3
MAX_DSCP = 63
MAX_QUEUE = 3

_UINT32_MAX = 0xFFFFFFFF
_UINT_PATTERN = re.compile(r"\s*([+-]?)(\d+)")


def _read_uint32(text: str) -> Optional[int]:
    """Read an unsigned 32-bit number from the start of ``text``.

    Leading whitespace is skipped and anything after the digits is ignored.
    A leading minus sign wraps the value modulo 2**32. Returns None when no
    number can be read or it does not fit in 32 bits.
    """
    found = _UINT_PATTERN.match(text)
    if found is None:
        return None
    magnitude = int(found.group(2))
    if magnitude > _UINT32_MAX:
        return None
    if found.group(1) == "-":
        return (-magnitude) & _UINT32_MAX
    return magnitude


class CiscoParser:
    """Reads switch QoS commands and derives priorities for four output queues.

    Supported commands::

        mls qos
        interface <name>
        priority-queue out
        mls qos trust dscp
        mls qos map dscp-queue <dscp values> to <queue>

    Queue 0 is the priority queue with level 0; the others start at level 3
    and are raised by the DSCP values mapped to them. Unknown commands are
    ignored.
    """

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.qos_enabled = False
        self.priority_queue_enabled = False
        self.dscp_trust_enabled = False
        self.current_interface = ""
        self.dscp_map: Dict[int, int] = {}

    def parse(self, path: Union[str, os.PathLike]) -> List[int]:
        """Parse a configuration file and return the priority of each queue.

        Raises ConfigError if the file cannot be read or is invalid.
        """
        try:
            with open(path, encoding="utf-8") as handle:
                return self.parse_lines(handle)
        except OSError as exc:
            raise ConfigError(f"failed to open file {path}") from exc

    def parse_lines(self, lines: Iterable[str]) -> List[int]:
        """Parse configuration lines and return the priority of each queue.

        Raises ConfigError on a malformed command, or when QoS, the priority
        queue, DSCP trust or a DSCP mapping is missing.
        """
        self._reset()
        for raw in lines:
            line = raw.rstrip("\n")
            if not line or line[0] in "#!":
                continue
            self._parse_line(line.strip(" \t"))

        if not self.qos_enabled:
            raise ConfigError("QoS is not enabled")
        if not self.priority_queue_enabled:
            raise ConfigError("priority queue is not enabled")
        if not self.dscp_trust_enabled:
            raise ConfigError("DSCP trust is not enabled")
        if not self.dscp_map:
            raise ConfigError("no DSCP to queue mapping")
        return self._priorities()

    def _priorities(self) -> List[int]:
        priorities = [LOWEST_PRIORITY] * NUM_QUEUES
        priorities[0] = 0
        for dscp, queue in sorted(self.dscp_map.items()):
            if 0 < queue < NUM_QUEUES:
                priorities[queue] = min(priorities[queue], dscp % 3 + 1)
        return priorities

    def _parse_line(self, line: str) -> None:
        tokens = [token for token in line.split(" ") if token]
        if not tokens:
            return
        command = tokens[0]
        if command == "interface":
            self._parse_interface(tokens)
        elif command == "priority-queue":
            self._parse_priority_queue(tokens)
        elif command == "mls" and len(tokens) > 1 and tokens[1] == "qos":
            subcommand = tokens[2] if len(tokens) > 2 else None
            if subcommand == "trust":
                self._parse_trust(tokens)
            elif subcommand == "map":
                self._parse_map(tokens)
            elif len(tokens) == 2:
                self.qos_enabled = True
            else:
                logger.warning("unknown mls qos command: %s", line)
        else:
            logger.warning("unknown command: %s", line)

    def _parse_interface(self, tokens: List[str]) -> None:
        if len(tokens) < 2:
            raise ConfigError("invalid interface command")
        self.current_interface = tokens[1]

    def _parse_priority_queue(self, tokens: List[str]) -> None:
        if len(tokens) < 2:
            raise ConfigError("invalid priority-queue command")
        if tokens[1] != "out":
            raise ConfigError(f"unknown priority-queue command: {tokens[1]}")
        self.priority_queue_enabled = True

    def _parse_trust(self, tokens: List[str]) -> None:
        if len(tokens) < 4:
            raise ConfigError("invalid mls qos trust command")
        if tokens[3] == "dscp":
            self.dscp_trust_enabled = True
        else:
            logger.warning("unknown trust type: %s", tokens[3])

    def _parse_map(self, tokens: List[str]) -> None:
        if len(tokens) < 6:
            raise ConfigError("invalid mls qos map command")
        if tokens[3] != "dscp-queue":
            logger.warning("unknown mls qos map command: %s", " ".join(tokens))
            return
        try:
            to_index = tokens.index("to", 4)
        except ValueError:
            to_index = None
        if to_index is None or to_index == len(tokens) - 1:
            raise ConfigError(
                "invalid mls qos map command: missing 'to' keyword or queue value"
            )

        dscp_values = []
        for token in tokens[4:to_index]:
            dscp = _read_uint32(token)
            if dscp is None or dscp > MAX_DSCP:
                raise ConfigError(f"invalid DSCP value: {token}")
            dscp_values.append(dscp)

        queue_token = tokens[to_index + 1]
        queue = _read_uint32(queue_token)
        if queue is None or queue > MAX_QUEUE:
            raise ConfigError(f"invalid queue value: {queue_token}")

        for dscp in dscp_values:
            self.dscp_map[dscp] = queue