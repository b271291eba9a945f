"""Filters: conjunctions of filter elements."""

from __future__ import annotations

from typing import Iterable, List, Optional

from diffqos.elements import FilterElement
from diffqos.packet import Packet


class Filter:
    """A set of conditions that a packet must all satisfy.

    A filter without elements matches every packet.
    """

    def __init__(self, elements: Optional[Iterable[FilterElement]] = None) -> None:
        self._elements: List[FilterElement] = list(elements or ())

    @property
    def elements(self) -> tuple:
        """The elements of this filter, in the order they are checked."""
        return tuple(self._elements)

    def match(self, packet: Packet) -> bool:
        """Return True if the packet satisfies every element.

        Elements are checked in order and checking stops at the first one
        that fails.
        """
        return all(element.match(packet) for element in self._elements)

    def add_element(self, element: FilterElement) -> None:
        """Append a condition to this filter."""
        self._elements.append(element)

    def __repr__(self) -> str:
        return f"Filter({self._elements!r})"