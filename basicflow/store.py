"""Element sequence and the two mutations the page applies to it."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from .elements import (
    ConnectParams,
    Edge,
    Element,
    ElementError,
    element_from_dict,
    element_id,
    initial_elements,
)

logger = logging.getLogger("basicflow.store")


def derive_edge_id(source: str, target: str, taken: Iterable[str]) -> str:
    """
    ``e{source}-{target}``, with a ``-1``, ``-2``, ... suffix when the plain id
    is already used, so connecting the same pair twice yields two edges.
    """
    taken = set(taken)
    base = f"e{source}-{target}"
    candidate = base
    n = 0
    while candidate in taken:
        n += 1
        candidate = f"{base}-{n}"
    return candidate


def add_edge(params: ConnectParams | Mapping[str, Any], elements: Sequence[Element]) -> tuple[Element, ...]:
    """Returns ``elements`` with one new edge appended. Endpoints are not looked up."""
    params = ConnectParams.from_params(params)
    edge = Edge(
        id=derive_edge_id(params.source, params.target, (el.id for el in elements)),
        source=params.source,
        target=params.target,
        animated=params.animated,
        style=dict(params.style) if params.style else None,
    )
    return (*elements, edge)


def remove_elements(to_remove: Iterable[Any], elements: Sequence[Element]) -> tuple[Element, ...]:
    """Returns ``elements`` minus every id in ``to_remove``, order kept; unknown ids are ignored."""
    doomed = {element_id(entry) for entry in to_remove}
    return tuple(el for el in elements if el.id not in doomed)


class GraphElementStore:
    """Owns the current element sequence of one diagram."""

    def __init__(self, elements: Iterable[Element] | None = None) -> None:
        self._elements = self._checked(tuple(initial_elements() if elements is None else elements))

    @classmethod
    def from_dicts(cls, raw_elements: Iterable[Mapping[str, Any]] | None) -> GraphElementStore:
        return cls([element_from_dict(raw) for raw in raw_elements or []])

    @staticmethod
    def _checked(elements: tuple[Element, ...]) -> tuple[Element, ...]:
        seen = set()
        for el in elements:
            if el.id in seen:
                raise ElementError(f"duplicate element id {el.id!r}")
            seen.add(el.id)
        return elements

    @property
    def elements(self) -> tuple[Element, ...]:
        return self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self):
        return iter(self._elements)

    def __contains__(self, item: object) -> bool:
        return any(el.id == item for el in self._elements)

    def get(self, element_id: str) -> Element | None:
        for el in self._elements:
            if el.id == element_id:
                return el
        return None

    def to_dicts(self) -> list[dict[str, Any]]:
        return [el.to_element() for el in self._elements]

    def connect(self, params: ConnectParams | Mapping[str, Any]) -> tuple[Element, ...]:
        self._elements = add_edge(params, self._elements)
        edge = self._elements[-1]
        logger.debug("connected %s -> %s as %s", edge.source, edge.target, edge.id)
        return self._elements

    def remove(self, to_remove: Iterable[Any]) -> tuple[Element, ...]:
        before = len(self._elements)
        self._elements = remove_elements(to_remove, self._elements)
        logger.debug("removed %d element(s), %d left", before - len(self._elements), len(self._elements))
        return self._elements
