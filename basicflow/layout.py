from dash import html, dcc
import dash_cytoscape as cyto
from dash_extensions import EventListener

from .config import DIAGRAM_ID, GRID_SIZE, MAX_ZOOM, MIN_ZOOM, MOUNT_ID

# ----------- Styles -----------

stylesheet = [
    {'selector': 'node', 'style': {
        'label': 'data(label)', 'shape': 'round-rectangle', 'width': 150, 'height': 36,
        'background-color': '#fff', 'border-width': 1, 'border-color': '#1a192b',
        'text-valign': 'center', 'text-halign': 'center', 'font-size': 12,
    }},
    {'selector': 'node.input', 'style': {'border-color': '#0041d0'}},
    {'selector': 'edge', 'style': {
        'curve-style': 'bezier', 'target-arrow-shape': 'triangle',
        'line-color': '#b1b1b7', 'target-arrow-color': '#b1b1b7', 'width': 1,
    }},
    {'selector': 'edge.animated', 'style': {'line-style': 'dashed', 'line-dash-pattern': [5, 5]}},
    {'selector': ':selected', 'style': {
        'border-color': '#ff0072', 'border-width': 2,
        'line-color': '#555', 'target-arrow-color': '#555',
    }},
]

surface_style = {
    "position": "absolute",
    "top": "0px",
    "left": "0px",
    "width": "100vw",
    "height": "100vh",
    "outline": "none",
    # background grid
    "backgroundColor": "#fafafa",
    "backgroundImage": "radial-gradient(#81818a 1px, transparent 1px)",
    "backgroundSize": f"{GRID_SIZE}px {GRID_SIZE}px",
}

button_style = {
    "width": "28px",
    "height": "28px",
    "border": "none",
    "borderBottom": "1px solid #eee",
    "backgroundColor": "#fefefe",
    "cursor": "pointer",
    "fontSize": "14px",
    "padding": "0",
}

controls_style = {
    "position": "absolute",
    "bottom": "20px",
    "left": "20px",
    "display": "flex",
    "flexDirection": "column",
    "boxShadow": "0 0 2px 1px rgba(0,0,0,0.08)",
    "zIndex": 5,
}

info_box_style = {
    "position": "absolute",
    "top": "20px",
    "right": "20px",
    "width": "280px",
    "padding": "15px",
    "backgroundColor": "#FFFFFF",
    "border": "1px solid #E0E0E0",
    "borderRadius": "8px",
    "boxShadow": "0 2px 8px rgba(0,0,0,0.1)",
    "zIndex": 10,
}


# ----------- Overlays -----------

def create_controls():
    return html.Div([
        html.Button("+", id="zoom-in-btn", n_clicks=0, title="zoom in", style=button_style),
        html.Button("-", id="zoom-out-btn", n_clicks=0, title="zoom out", style=button_style),
        html.Button("[ ]", id="fit-view-btn", n_clicks=0, title="fit view", style=button_style),
        html.Button("unlocked", id="lock-btn", n_clicks=0, title="toggle interactivity",
                    style={**button_style, "width": "auto", "padding": "0 6px"}),
    ], id="controls", style=controls_style)


def message_panel(title, text=None):
    children = [html.H4(title)]
    if text:
        children.append(html.P(text))
    return html.Div(children)


def node_panel(info, header=None):
    def edge_list(edges):
        if not edges:
            return html.P("None")
        return html.Ul([html.Li(f"{u} → {v} ({key})") for key, u, v in edges])

    children = [html.H4(f"Node: {info['label']} ({info['id']})"), html.P(f"Kind: {info['kind']}")]
    if header:
        children.insert(0, html.P(header, style={"fontWeight": "bold"}))
    children += [
        html.Div([html.Strong("Outgoing:"), edge_list(info["outgoing"])]),
        html.Div([html.Strong("Incoming:"), edge_list(info["incoming"])]),
    ]
    return html.Div(children)


def edge_panel(info):
    children = [
        html.H4("Edge Selected"),
        html.P(f"{info['source']} → {info['target']} ({info['id']})"),
        html.P(f"Animated: {'yes' if info['animated'] else 'no'}"),
    ]
    if info["dangling"]:
        children.append(html.P(f"No node for: {', '.join(info['dangling'])}", style={"color": "#c00"}))
    return html.Div(children)


# ----------- Page -----------

def build_layout(store):
    diagram = cyto.Cytoscape(
        id=DIAGRAM_ID,
        elements=store.to_dicts(),
        layout={'name': 'preset'},
        style={'width': '100%', 'height': '100%'},
        stylesheet=stylesheet,
        zoom=1,
        userZoomingEnabled=True,
        userPanningEnabled=True,
        boxSelectionEnabled=True,
        autoungrabify=False,
        autounselectify=False,
        minZoom=MIN_ZOOM,
        maxZoom=MAX_ZOOM,
    )

    # keydown only reaches the listener while the surface has focus; tabIndex makes it focusable
    surface = EventListener(
        html.Div(diagram, id="surface", tabIndex="0", style=surface_style),
        id="keyboard",
        events=[{"event": "keydown", "props": ["key", "keyCode"]}],
    )

    return html.Div([
        surface,
        create_controls(),
        html.Div(message_panel("Tap a node to start a connection."), id="info-box", style=info_box_style),
        dcc.Store(id="pending-source", data=None),
        dcc.Store(id="locked", data=False),
    ], id=MOUNT_ID, style={"position": "relative", "height": "100vh", "width": "100vw", "overflow": "hidden"})
