"""Two-node flow diagram page and the element store behind it."""

from .elements import (
    ConnectParams,
    Edge,
    Element,
    ElementError,
    InvalidEndpointError,
    Node,
    element_from_dict,
    initial_elements,
)
from .store import GraphElementStore, add_edge, remove_elements

__all__ = [
    "ConnectParams",
    "Edge",
    "Element",
    "ElementError",
    "GraphElementStore",
    "InvalidEndpointError",
    "Node",
    "add_edge",
    "element_from_dict",
    "initial_elements",
    "remove_elements",
]

__version__ = "0.1.0"
