"""Typed diagram elements and their cytoscape element-dict form."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

NodeKind = Literal["input", "default"]
ElementId = Annotated[str, Field(min_length=1)]


class ElementError(ValueError):
    """Element input that cannot be read."""


class InvalidEndpointError(ElementError):
    """Connect params with a missing or empty source/target id."""


class Node(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: ElementId
    label: str
    kind: NodeKind = "default"
    position: tuple[float, float] = (0.0, 0.0)

    def to_element(self) -> dict[str, Any]:
        x, y = self.position
        return {
            "data": {"id": self.id, "label": self.label, "kind": self.kind},
            "position": {"x": x, "y": y},
            "classes": self.kind,
        }


class Edge(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: ElementId
    source: str
    target: str
    animated: bool = False
    style: Optional[dict[str, Any]] = None

    def to_element(self) -> dict[str, Any]:
        element: dict[str, Any] = {
            "data": {
                "id": self.id,
                "source": self.source,
                "target": self.target,
                "animated": self.animated,
            },
            "classes": "animated" if self.animated else "",
        }
        if self.style:
            element["style"] = dict(self.style)
        return element


Element = Union[Node, Edge]


class ConnectParams(BaseModel):
    """What a user supplies when drawing a new edge between two nodes."""

    model_config = ConfigDict(frozen=True)

    source: ElementId
    target: ElementId
    animated: bool = False
    style: Optional[dict[str, Any]] = None

    @classmethod
    def from_params(cls, params: ConnectParams | Mapping[str, Any]) -> ConnectParams:
        if isinstance(params, cls):
            return params
        if not isinstance(params, Mapping):
            raise InvalidEndpointError(f"connect params must be a mapping, got {type(params).__name__}")
        try:
            return cls.model_validate(dict(params))
        except ValidationError as exc:
            fields = {err["loc"][0] for err in exc.errors() if err["loc"]}
            error = InvalidEndpointError if fields & {"source", "target"} else ElementError
            raise error(f"invalid connect params {dict(params)!r}: {_summary(exc)}") from exc


# ---------- wire format ----------
# cytoscape element dicts as the diagram sends them back; unknown keys are ignored

class _Position(BaseModel):
    x: float = 0.0
    y: float = 0.0


class _NodeData(BaseModel):
    id: ElementId
    label: Optional[str] = None
    kind: Optional[NodeKind] = None


class _EdgeData(BaseModel):
    id: ElementId
    source: ElementId
    target: ElementId
    animated: bool = False


class _RawNode(BaseModel):
    data: _NodeData
    position: Optional[_Position] = None


class _RawEdge(BaseModel):
    data: _EdgeData
    style: Optional[dict[str, Any]] = None


def _summary(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'element'}: {err['msg']}" for err in exc.errors()
    )


def element_from_dict(raw: Mapping[str, Any]) -> Element:
    """
    Parses a cytoscape element dict back into a Node or Edge.

    A dict whose ``data`` carries both ``source`` and ``target`` is an edge,
    everything else is a node. Missing node kind means "default" and a missing
    position means the origin.
    """
    data = raw.get("data") if isinstance(raw, Mapping) else None
    if not isinstance(data, Mapping):
        raise ElementError(f"element has no data block: {raw!r}")

    try:
        if "source" in data and "target" in data:
            edge = _RawEdge.model_validate(raw)
            return Edge(
                id=edge.data.id,
                source=edge.data.source,
                target=edge.data.target,
                animated=edge.data.animated,
                style=edge.style or None,
            )
        node = _RawNode.model_validate(raw)
    except ValidationError as exc:
        raise ElementError(f"malformed element {raw!r}: {_summary(exc)}") from exc

    position = node.position or _Position()
    return Node(
        id=node.data.id,
        label=node.data.id if node.data.label is None else node.data.label,
        kind=node.data.kind or "default",
        position=(position.x, position.y),
    )


def element_id(entry: Element | Mapping[str, Any] | str) -> str:
    """Reads the id of an element, an element dict, a flat data dict or a bare id."""
    if isinstance(entry, (Node, Edge)):
        return entry.id
    if isinstance(entry, str):
        return entry
    if isinstance(entry, Mapping):
        data = entry.get("data")
        source = data if isinstance(data, Mapping) else entry
        if source.get("id") not in (None, ""):
            return str(source["id"])
    raise ElementError(f"cannot read an element id from {entry!r}")


# ---------- SEED ----------

def initial_elements() -> list[Element]:
    return [
        Node(id="1", kind="input", label="Start Node", position=(250, 5)),
        Node(id="2", label="Another Node", position=(100, 100)),
        Edge(id="e1-2", source="1", target="2", animated=True),
    ]
