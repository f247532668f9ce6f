from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import dcc, html

from titanic_dash.core.annotation import Annotation
from titanic_dash.ui.ids import IDs, annotation_id, dashboard_id


def build_annotations_panel(dashboard: str, draft: str = "") -> dbc.Card:
    """
    Comment box for one dashboard:
    - draft textarea + "Add comment" button
    - list of saved comments (populated via callbacks)
    """
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong("Comments"),
                        dbc.Badge(
                            "0",
                            id=dashboard_id(IDs.Pattern.COMMENT_COUNT, dashboard),
                            color="secondary",
                            className="ms-2",
                        ),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                [
                    dcc.Textarea(
                        id=dashboard_id(IDs.Pattern.DRAFT_INPUT, dashboard),
                        value=draft,
                        placeholder="Write a comment about this dashboard...",
                        style={"width": "100%", "minHeight": "80px"},
                        className="form-control",
                    ),
                    html.Div(
                        dbc.Button(
                            "Add comment",
                            id=dashboard_id(IDs.Pattern.ADD_BTN, dashboard),
                            color="primary",
                            size="sm",
                            className="mt-2",
                        ),
                        className="d-flex justify-content-end",
                    ),
                    html.Hr(),
                    html.Div(id=dashboard_id(IDs.Pattern.COMMENT_LIST, dashboard)),
                ]
            ),
        ],
        className="mt-3",
    )


def build_comment_list(annotations: List[Annotation]):
    if not annotations:
        return html.Div("No comments yet.", className="text-muted small")

    return dbc.ListGroup([_comment_item(a) for a in annotations], flush=True)


def _comment_item(annotation: Annotation) -> dbc.ListGroupItem:
    created = annotation.created_at[:16].replace("T", " ")

    if annotation.is_editing:
        body = [
            dcc.Textarea(
                id=annotation_id(IDs.Pattern.EDIT_INPUT, annotation.id),
                value=annotation.draft_text,
                style={"width": "100%", "minHeight": "60px"},
                className="form-control",
            ),
            html.Div(
                [
                    dbc.Button(
                        "Save",
                        id=annotation_id(IDs.Pattern.SAVE_BTN, annotation.id),
                        color="primary",
                        size="sm",
                        className="me-2",
                    ),
                    dbc.Button(
                        "Cancel",
                        id=annotation_id(IDs.Pattern.CANCEL_BTN, annotation.id),
                        color="secondary",
                        size="sm",
                        className="me-auto",
                    ),
                    dbc.Button(
                        "Delete",
                        id=annotation_id(IDs.Pattern.DELETE_BTN, annotation.id),
                        color="link",
                        size="sm",
                        className="text-danger",
                    ),
                ],
                className="mt-2 d-flex align-items-center",
            ),
        ]
    else:
        body = [
            html.P(annotation.text, className="mb-1", style={"whiteSpace": "pre-wrap"}),
            html.Div(
                [
                    html.Small(created, className="text-muted me-auto"),
                    dbc.Button(
                        "Edit",
                        id=annotation_id(IDs.Pattern.EDIT_BTN, annotation.id),
                        color="link",
                        size="sm",
                    ),
                    dbc.Button(
                        "Delete",
                        id=annotation_id(IDs.Pattern.DELETE_BTN, annotation.id),
                        color="link",
                        size="sm",
                        className="text-danger",
                    ),
                ],
                className="d-flex align-items-center",
            ),
        ]

    return dbc.ListGroupItem(body)
