from __future__ import annotations

__all__ = [
    "IDs",
    "chart_id",
    "parse_chart_id",
    "dashboard_id",
    "annotation_id",
]


class IDs:
    class Store:
        ANNOTATIONS_VERSION = "annotations-version"
        DRAFTS_SYNCED = "drafts-synced"

    class Control:
        DASHBOARD_TABS = "dashboard-tabs"
        LOAD_POLL = "load-poll"
        LOADING_BANNER = "loading-banner"

        CLEAR_ALL_BTN = "clear-all-comments-btn"
        TOTAL_COUNT = "total-comment-count"

    class Pattern:
        # pattern-matching "type" strings, one component per dashboard
        DASHBOARD_TAB = "dashboard-tab"
        CHART = "dashboard-chart"
        DRAFT_INPUT = "comment-draft-input"
        ADD_BTN = "comment-add-btn"
        COMMENT_LIST = "comment-list"
        COMMENT_COUNT = "comment-count"

        # one component per annotation
        EDIT_BTN = "comment-edit-btn"
        CANCEL_BTN = "comment-cancel-btn"
        SAVE_BTN = "comment-save-btn"
        DELETE_BTN = "comment-delete-btn"
        EDIT_INPUT = "comment-edit-input"


CHART_SEPARATOR = "|"


def chart_id(dashboard: str, view_id: str) -> dict:
    return {"type": IDs.Pattern.CHART, "index": f"{dashboard}{CHART_SEPARATOR}{view_id}"}


def parse_chart_id(component_id: dict) -> tuple[str, str]:
    """-> (dashboard id, view id)"""
    dashboard, _, view_id = str(component_id["index"]).partition(CHART_SEPARATOR)
    return dashboard, view_id


def dashboard_id(pattern_type: str, dashboard: str) -> dict:
    return {"type": pattern_type, "index": dashboard}


def annotation_id(pattern_type: str, annotation: str) -> dict:
    return {"type": pattern_type, "index": annotation}
