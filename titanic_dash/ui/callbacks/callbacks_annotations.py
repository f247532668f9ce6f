from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import dash
from dash import ALL, Input, Output, State

from titanic_dash.services.annotation_service import AnnotationManager
from titanic_dash.ui.ids import IDs
from titanic_dash.ui.layout.build_annotations_panel import build_comment_list

if TYPE_CHECKING:
    from titanic_dash.ui.config import AppConfig

logger = logging.getLogger(__name__)

ACTIONS_BY_PATTERN = {
    IDs.Pattern.EDIT_BTN: "edit",
    IDs.Pattern.CANCEL_BTN: "cancel",
    IDs.Pattern.SAVE_BTN: "save",
    IDs.Pattern.DELETE_BTN: "delete",
}


def apply_comment_action(
        manager: AnnotationManager,
        action: str,
        annotation_id: str,
        edit_text: Optional[str] = None,
) -> bool:
    """
    Run one list-item command against the manager.
    :return: True if the action was recognised (it may still be a no-op)
    """
    if action in ("edit", "cancel"):
        manager.toggle_edit(annotation_id)
    elif action == "save":
        if edit_text is not None:
            manager.update_edit_text(annotation_id, edit_text)
        manager.save_edit(annotation_id)
    elif action == "delete":
        manager.delete_comment(annotation_id)
    else:
        return False
    return True


def _edit_texts(values: List[Any], ids: List[Dict[str, Any]]) -> Dict[str, str]:
    return {cid["index"]: (v or "") for v, cid in zip(values, ids)}


def _fired(triggered: List[Dict[str, Any]]) -> bool:
    """
    Pattern-matched buttons are re-created on every list render; their
    first appearance triggers with n_clicks=None and must be ignored.
    """
    return bool(triggered) and bool(triggered[0].get("value"))


def register_annotation_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    manager = ctx.annotations

    # ---------------------------------------------------------
    # Render lists + counts whenever annotations change
    # ---------------------------------------------------------
    @app.callback(
        Output({"type": IDs.Pattern.COMMENT_LIST, "index": ALL}, "children"),
        Output({"type": IDs.Pattern.COMMENT_COUNT, "index": ALL}, "children"),
        Output({"type": IDs.Pattern.DASHBOARD_TAB, "index": ALL}, "label"),
        Output(IDs.Control.TOTAL_COUNT, "children"),
        Input(IDs.Store.ANNOTATIONS_VERSION, "data"),
    )
    def render_comments(_version):
        list_ids = [o["id"]["index"] for o in dash.ctx.outputs_list[0]]
        count_ids = [o["id"]["index"] for o in dash.ctx.outputs_list[1]]
        tab_ids = [o["id"]["index"] for o in dash.ctx.outputs_list[2]]

        labels = {d.id: d.label for d in ctx.global_config.dashboards}

        lists = [build_comment_list(manager.by_dashboard(d)) for d in list_ids]
        counts = [str(manager.count_by_dashboard(d)) for d in count_ids]
        tab_labels = []
        for d in tab_ids:
            n = manager.count_by_dashboard(d)
            label = labels.get(d, d)
            tab_labels.append(f"{label} ({n})" if n else label)

        total = manager.total_count()
        summary = f"{total} comment{'s' if total != 1 else ''} in total"
        return lists, counts, tab_labels, summary

    # ---------------------------------------------------------
    # Keep draft buffers in sync with the textareas
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.DRAFTS_SYNCED, "data"),
        Input({"type": IDs.Pattern.DRAFT_INPUT, "index": ALL}, "value"),
        State({"type": IDs.Pattern.DRAFT_INPUT, "index": ALL}, "id"),
        prevent_initial_call=True,
    )
    def sync_drafts(values, ids):
        for value, cid in zip(values, ids):
            manager.set_draft(cid["index"], value or "")
        raise dash.exceptions.PreventUpdate

    # ---------------------------------------------------------
    # Add comment from a dashboard's draft
    # ---------------------------------------------------------
    @app.callback(
        Output({"type": IDs.Pattern.DRAFT_INPUT, "index": ALL}, "value"),
        Output(IDs.Store.ANNOTATIONS_VERSION, "data", allow_duplicate=True),
        Input({"type": IDs.Pattern.ADD_BTN, "index": ALL}, "n_clicks"),
        State({"type": IDs.Pattern.DRAFT_INPUT, "index": ALL}, "value"),
        State({"type": IDs.Pattern.DRAFT_INPUT, "index": ALL}, "id"),
        State(IDs.Store.ANNOTATIONS_VERSION, "data"),
        prevent_initial_call=True,
    )
    def add_comment(_n_clicks, values, ids, version):
        triggered = dash.ctx.triggered_id
        if not triggered or not isinstance(triggered, dict) or not _fired(dash.ctx.triggered):
            raise dash.exceptions.PreventUpdate

        dashboard = triggered.get("index")
        drafts = {cid["index"]: (v or "") for v, cid in zip(values, ids)}
        manager.set_draft(dashboard, drafts.get(dashboard, ""))

        if manager.add_comment(dashboard) is None:
            raise dash.exceptions.PreventUpdate

        new_values = [manager.get_draft(cid["index"]) for cid in ids]
        return new_values, (version or 0) + 1

    # ---------------------------------------------------------
    # Edit / cancel / save / delete on a single comment
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.ANNOTATIONS_VERSION, "data", allow_duplicate=True),
        Input({"type": IDs.Pattern.EDIT_BTN, "index": ALL}, "n_clicks"),
        Input({"type": IDs.Pattern.CANCEL_BTN, "index": ALL}, "n_clicks"),
        Input({"type": IDs.Pattern.SAVE_BTN, "index": ALL}, "n_clicks"),
        Input({"type": IDs.Pattern.DELETE_BTN, "index": ALL}, "n_clicks"),
        State({"type": IDs.Pattern.EDIT_INPUT, "index": ALL}, "value"),
        State({"type": IDs.Pattern.EDIT_INPUT, "index": ALL}, "id"),
        State(IDs.Store.ANNOTATIONS_VERSION, "data"),
        prevent_initial_call=True,
    )
    def comment_action(_edit, _cancel, _save, _delete, edit_values, edit_ids, version):
        triggered = dash.ctx.triggered_id
        if not triggered or not isinstance(triggered, dict) or not _fired(dash.ctx.triggered):
            raise dash.exceptions.PreventUpdate

        action = ACTIONS_BY_PATTERN.get(triggered.get("type"))
        annotation_id = triggered.get("index")
        if action is None or not annotation_id:
            raise dash.exceptions.PreventUpdate

        edit_text = _edit_texts(edit_values, edit_ids).get(annotation_id)
        apply_comment_action(manager, action, annotation_id, edit_text)
        return (version or 0) + 1

    # ---------------------------------------------------------
    # Clear all comments (every dashboard)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.ANNOTATIONS_VERSION, "data", allow_duplicate=True),
        Input(IDs.Control.CLEAR_ALL_BTN, "n_clicks"),
        State(IDs.Store.ANNOTATIONS_VERSION, "data"),
        prevent_initial_call=True,
    )
    def clear_all(n_clicks, version):
        if not n_clicks:
            raise dash.exceptions.PreventUpdate

        manager.clear_all()
        return (version or 0) + 1
