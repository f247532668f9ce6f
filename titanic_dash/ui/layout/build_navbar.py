from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from titanic_dash.config.model import GlobalConfig
from titanic_dash.ui.ids import IDs


def build_navbar(global_config: GlobalConfig) -> dbc.Navbar:
    title = getattr(global_config, "ui_title", "Titanic Dashboard")
    subtitle = getattr(global_config, "subtitle", "Passenger survival explorer")

    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                # Left: title
                html.Div(
                    [
                        html.H2(title, className="mb-0"),
                        html.Small(subtitle, className="text-muted"),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),

                # Right: global annotation controls
                html.Div(
                    [
                        html.Span(
                            id=IDs.Control.TOTAL_COUNT,
                            className="text-muted small me-3",
                        ),
                        dbc.Button(
                            "Clear all comments",
                            id=IDs.Control.CLEAR_ALL_BTN,
                            color="danger",
                            outline=True,
                            size="sm",
                        ),
                    ],
                    className="ms-auto d-flex align-items-center",
                ),
            ],
        ),
        dark=False,
        className="shadow-sm mb-2",
    )
