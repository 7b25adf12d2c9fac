import logging

import dash
from dash.dependencies import Output, Input, State
from dash_extensions.enrich import DashProxy, Trigger, TriggerTransform

from .config import DELETE_KEY_CODE, DIAGRAM_ID, MAX_ZOOM, MIN_ZOOM, ZOOM_STEP
from .elements import ElementError, element_id
from .layout import build_layout, edge_panel, message_panel, node_panel
from .store import GraphElementStore
from .topology import describe_edge, describe_node

logger = logging.getLogger("basicflow.app")

NOTHING = (dash.no_update, dash.no_update, dash.no_update)


# ----------- Handlers -----------
# Each returns (elements, pending-source, info-box children) for the diagram callback.

def handle_node_tap(store, node_data, pending, locked=False):
    """
    First tap picks the source, second tap on another node connects the two,
    tapping the pending source again cancels.
    """
    node_id = node_data["id"]
    info = describe_node(store.elements, node_id)
    if locked:
        return dash.no_update, dash.no_update, node_panel(info) if info else dash.no_update

    if pending is None:
        header = f"Connecting from {node_id}: tap a target node."
        panel = node_panel(info, header=header) if info else message_panel(header)
        return dash.no_update, node_id, panel

    if pending == node_id:
        return dash.no_update, None, message_panel("Connection cancelled")

    try:
        store.connect({"source": pending, "target": node_id})
    except ElementError as exc:
        logger.warning("connect %r -> %r rejected: %s", pending, node_id, exc)
        return dash.no_update, None, message_panel("Cannot connect", str(exc))

    edge = store.elements[-1]
    return store.to_dicts(), None, message_panel("Edge added", f"{edge.source} → {edge.target} ({edge.id})")


def handle_edge_tap(store, edge_data):
    info = describe_edge(store.elements, edge_data["id"])
    if info is None:
        return NOTHING
    return dash.no_update, dash.no_update, edge_panel(info)


def handle_key(store, event, selection, pending, locked=False, delete_key_code=DELETE_KEY_CODE):
    if locked or not event or event.get("keyCode") != delete_key_code:
        return NOTHING
    if not selection:
        return NOTHING

    try:
        doomed = {element_id(entry) for entry in selection}
        before = len(store)
        store.remove(selection)
    except ElementError as exc:
        logger.warning("remove rejected: %s", exc)
        return dash.no_update, dash.no_update, message_panel("Cannot remove", str(exc))

    removed = before - len(store)
    next_pending = None if pending in doomed else dash.no_update
    return store.to_dicts(), next_pending, message_panel("Removed", f"{removed} element(s) deleted")


def apply_control(prop_id, zoom, locked, fit_clicks=0):
    """Returns (zoom, layout, autoungrabify, autounselectify, locked, lock label)."""
    trigger = prop_id.split(".")[0]
    zoom = zoom or 1
    unchanged = [dash.no_update] * 6
    if trigger == "zoom-in-btn":
        return (min(zoom * ZOOM_STEP, MAX_ZOOM), *unchanged[1:])
    if trigger == "zoom-out-btn":
        return (max(zoom / ZOOM_STEP, MIN_ZOOM), *unchanged[1:])
    if trigger == "fit-view-btn":
        # the layout only re-runs when the prop changes, so every click sends a new dict
        layout = {'name': 'preset', 'fit': True, 'padding': 30, 'fitRequest': fit_clicks or 0}
        return (dash.no_update, layout, *unchanged[2:])
    if trigger == "lock-btn":
        locked = not locked
        return (dash.no_update, dash.no_update, locked, locked, locked, "locked" if locked else "unlocked")
    return tuple(unchanged)


def dispatch_diagram_event(prop_id, elements, node_data=None, edge_data=None, event=None,
                           selection=None, pending=None, locked=False):
    """Routes one diagram callback firing to the tap or key handler it belongs to."""
    current = GraphElementStore.from_dicts(elements)

    if prop_id == f"{DIAGRAM_ID}.tapNodeData" and node_data:
        return handle_node_tap(current, node_data, pending, locked)
    elif prop_id == f"{DIAGRAM_ID}.tapEdgeData" and edge_data:
        return handle_edge_tap(current, edge_data)
    elif prop_id == "keyboard.n_events":
        return handle_key(current, event, selection, pending, locked)
    return NOTHING


# ----------- Dash App -----------

def create_app(store=None):
    store = store if store is not None else GraphElementStore()

    app = DashProxy(__name__, title="Basic Flow", transforms=[TriggerTransform()])
    app.layout = build_layout(store)

    @app.callback(
        Output(DIAGRAM_ID, "elements"),
        Output("pending-source", "data"),
        Output("info-box", "children"),
        Input(DIAGRAM_ID, "tapNodeData"),
        Input(DIAGRAM_ID, "tapEdgeData"),
        Input("keyboard", "n_events"),
        State(DIAGRAM_ID, "elements"),
        State("pending-source", "data"),
        State("locked", "data"),
        State("keyboard", "event"),
        State(DIAGRAM_ID, "selectedNodeData"),
        State(DIAGRAM_ID, "selectedEdgeData"),
        prevent_initial_call=True
    )
    def on_diagram_event(node_data, edge_data, _n_events, elements, pending, locked, event,
                         selected_nodes, selected_edges):
        triggered = dash.callback_context.triggered
        if not triggered:
            return NOTHING
        return dispatch_diagram_event(
            triggered[0]["prop_id"], elements,
            node_data=node_data, edge_data=edge_data, event=event,
            selection=(selected_nodes or []) + (selected_edges or []),
            pending=pending, locked=locked,
        )

    @app.callback(
        Output(DIAGRAM_ID, "zoom"),
        Output(DIAGRAM_ID, "layout"),
        Output(DIAGRAM_ID, "autoungrabify"),
        Output(DIAGRAM_ID, "autounselectify"),
        Output("locked", "data"),
        Output("lock-btn", "children"),
        Trigger("zoom-in-btn", "n_clicks"),
        Trigger("zoom-out-btn", "n_clicks"),
        Input("fit-view-btn", "n_clicks"),
        Trigger("lock-btn", "n_clicks"),
        State(DIAGRAM_ID, "zoom"),
        State("locked", "data"),
        prevent_initial_call=True
    )
    def on_control(fit_clicks, zoom, locked):
        triggered = dash.callback_context.triggered
        if not triggered:
            return tuple([dash.no_update] * 6)
        return apply_control(triggered[0]["prop_id"], zoom, locked, fit_clicks)

    logger.info("page built with %d elements, attempting to render", len(store))
    return app
