"""Tests for the page layout and the callback handlers."""

from __future__ import annotations

import dash

from basicflow.app import (
    apply_control,
    create_app,
    dispatch_diagram_event,
    handle_edge_tap,
    handle_key,
    handle_node_tap,
)
from basicflow.config import DELETE_KEY_CODE, MAX_ZOOM, MIN_ZOOM, MOUNT_ID
from basicflow.layout import build_layout
from basicflow.store import GraphElementStore


def find(component, component_id):
    if getattr(component, "id", None) == component_id:
        return component
    children = getattr(component, "children", None)
    if children is None or isinstance(children, str):
        return None
    if not isinstance(children, (list, tuple)):
        children = [children]
    for child in children:
        found = find(child, component_id)
        if found is not None:
            return found
    return None


def element_ids(raw_elements) -> list[str]:
    return [raw["data"]["id"] for raw in raw_elements]


def test_layout_mounts_on_root_with_seed() -> None:
    layout = build_layout(GraphElementStore())
    assert layout.id == MOUNT_ID
    diagram = find(layout, "diagram")
    assert element_ids(diagram.elements) == ["1", "2", "e1-2"]
    assert diagram.layout == {"name": "preset"}
    for control in ("zoom-in-btn", "zoom-out-btn", "fit-view-btn", "lock-btn", "keyboard", "info-box"):
        assert find(layout, control) is not None


def test_create_app_uses_given_store() -> None:
    store = GraphElementStore([])
    app = create_app(store)
    assert app.server is not None
    assert find(app.layout, "diagram").elements == []


def test_tap_flow_connects_two_nodes() -> None:
    store = GraphElementStore()

    elements, pending, _ = handle_node_tap(store, {"id": "2"}, None)
    assert elements is dash.no_update
    assert pending == "2"

    elements, pending, _ = handle_node_tap(store, {"id": "1"}, pending)
    assert pending is None
    assert element_ids(elements) == ["1", "2", "e1-2", "e2-1"]
    assert elements[-1]["data"]["source"] == "2"
    assert elements[-1]["data"]["target"] == "1"


def test_tapping_pending_node_cancels() -> None:
    store = GraphElementStore()
    elements, pending, _ = handle_node_tap(store, {"id": "1"}, "1")
    assert elements is dash.no_update
    assert pending is None
    assert len(store) == 3


def test_locked_tap_only_describes() -> None:
    store = GraphElementStore()
    elements, pending, info = handle_node_tap(store, {"id": "1"}, "2", locked=True)
    assert elements is dash.no_update
    assert pending is dash.no_update
    assert info is not dash.no_update
    assert len(store) == 3


def test_edge_tap_describes_edge() -> None:
    store = GraphElementStore()
    elements, pending, info = handle_edge_tap(store, {"id": "e1-2"})
    assert elements is dash.no_update
    assert info is not dash.no_update
    assert handle_edge_tap(store, {"id": "gone"})[2] is dash.no_update


def test_delete_key_removes_selection() -> None:
    store = GraphElementStore()
    event = {"key": "Delete", "keyCode": DELETE_KEY_CODE}
    elements, pending, _ = handle_key(store, event, [{"id": "2", "label": "Another Node"}], pending="2")
    assert element_ids(elements) == ["1", "e1-2"]
    assert pending is None


def test_other_keys_are_ignored() -> None:
    store = GraphElementStore()
    result = handle_key(store, {"key": "Backspace", "keyCode": 8}, [{"id": "2"}], pending=None)
    assert all(value is dash.no_update for value in result)
    assert len(store) == 3


def test_delete_with_empty_selection_or_lock_is_noop() -> None:
    store = GraphElementStore()
    event = {"keyCode": DELETE_KEY_CODE}
    assert handle_key(store, event, [], pending=None)[0] is dash.no_update
    assert handle_key(store, event, [{"id": "1"}], pending=None, locked=True)[0] is dash.no_update
    assert len(store) == 3


def test_zoom_controls_clamp() -> None:
    assert apply_control("zoom-in-btn.n_clicks", MAX_ZOOM, False)[0] == MAX_ZOOM
    assert apply_control("zoom-out-btn.n_clicks", MIN_ZOOM, False)[0] == MIN_ZOOM
    assert apply_control("zoom-in-btn.n_clicks", None, False)[0] > 1


def test_fit_view_reruns_preset_layout() -> None:
    zoom, layout, *_ = apply_control("fit-view-btn.n_clicks", 1, False, fit_clicks=1)
    assert zoom is dash.no_update
    assert layout["name"] == "preset"
    assert layout["fit"] is True


def test_each_fit_click_sends_a_new_layout() -> None:
    first = apply_control("fit-view-btn.n_clicks", 1, False, fit_clicks=1)[1]
    second = apply_control("fit-view-btn.n_clicks", 1, False, fit_clicks=2)[1]
    assert first != second


def test_unknown_control_changes_nothing() -> None:
    assert all(value is dash.no_update for value in apply_control("other.n_clicks", 1, False))


def test_lock_toggle() -> None:
    _, _, ungrab, unselect, locked, label = apply_control("lock-btn.n_clicks", 1, False)
    assert (ungrab, unselect, locked, label) == (True, True, True, "locked")
    _, _, ungrab, unselect, locked, label = apply_control("lock-btn.n_clicks", 1, True)
    assert (ungrab, unselect, locked, label) == (False, False, False, "unlocked")


def test_connect_with_bad_pending_source_is_reported() -> None:
    store = GraphElementStore()
    elements, pending, info = handle_node_tap(store, {"id": "1"}, "")
    assert elements is dash.no_update
    assert pending is None
    assert info.children[0].children == "Cannot connect"
    assert len(store) == 3


def test_unreadable_selection_is_reported() -> None:
    store = GraphElementStore()
    event = {"keyCode": DELETE_KEY_CODE}
    elements, pending, info = handle_key(store, event, [{"label": "no id"}], pending=None)
    assert elements is dash.no_update
    assert pending is dash.no_update
    assert info.children[0].children == "Cannot remove"
    assert len(store) == 3


def test_dispatch_routes_node_tap() -> None:
    seed = GraphElementStore().to_dicts()
    elements, pending, _ = dispatch_diagram_event("diagram.tapNodeData", seed, node_data={"id": "1"}, pending="2")
    assert pending is None
    assert element_ids(elements)[-1] == "e2-1"


def test_dispatch_routes_edge_tap() -> None:
    seed = GraphElementStore().to_dicts()
    elements, pending, info = dispatch_diagram_event("diagram.tapEdgeData", seed, edge_data={"id": "e1-2"})
    assert elements is dash.no_update
    assert info.children[0].children == "Edge Selected"


def test_dispatch_routes_delete_key() -> None:
    seed = GraphElementStore().to_dicts()
    elements, _, _ = dispatch_diagram_event(
        "keyboard.n_events", seed,
        event={"keyCode": DELETE_KEY_CODE}, selection=[{"id": "e1-2", "source": "1", "target": "2"}],
    )
    assert element_ids(elements) == ["1", "2"]


def test_dispatch_ignores_unrelated_props() -> None:
    seed = GraphElementStore().to_dicts()
    result = dispatch_diagram_event("diagram.mouseoverNodeData", seed, node_data={"id": "1"})
    assert all(value is dash.no_update for value in result)
