from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Optional

from titanic_dash.core.annotation import (
    Annotation,
    AnnotationIdGenerator,
    annotation_or_none,
)
from titanic_dash.services.storage import StateStore

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class AnnotationManager:
    """
    Manages per-dashboard annotations and their draft buffers.
    Every state change is written to the store before the method returns.

    Commands that do not apply (unknown id, blank text) are ignored and do
    not touch the store.
    """

    def __init__(self, store: Optional[StateStore] = None, id_generator: Optional[AnnotationIdGenerator] = None):
        self._store = store
        self._ids = id_generator or AnnotationIdGenerator()
        self._annotations: List[Annotation] = []
        self._drafts: Dict[str, str] = {}
        self._restore()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def _restore(self) -> None:
        if self._store is None:
            return
        data = self._store.load()
        if data is None:
            return

        raw_items = data.get("annotations") or []
        if not isinstance(raw_items, list):
            logger.warning(
                "Stored annotations are not a list; ignoring them",
                extra={"type": type(raw_items).__name__},
            )
            raw_items = []
        annotations = [a for a in (annotation_or_none(item) for item in raw_items) if a is not None]
        if len(annotations) != len(raw_items):
            logger.warning(
                "Skipped unreadable annotations while restoring",
                extra={"n_skipped": len(raw_items) - len(annotations)},
            )

        # Keep the first occurrence of an id
        seen = set()
        for a in annotations:
            if a.id in seen:
                continue
            seen.add(a.id)
            self._annotations.append(a)

        drafts = data.get("drafts") or {}
        if isinstance(drafts, dict):
            self._drafts = {str(k): str(v) for k, v in drafts.items() if v is not None}

        self._ids.seed(a.id for a in self._annotations)
        logger.info(
            "Annotations restored",
            extra={"n_annotations": len(self._annotations), "n_drafts": len(self._drafts)},
        )

    def _persist(self) -> None:
        if self._store is not None:
            self._store.save(self.to_dict())

    def to_dict(self) -> dict:
        return {
            "schema_version": SCHEMA_VERSION,
            "annotations": [a.to_dict() for a in self._annotations],
            "drafts": dict(self._drafts),
        }

    # ------------------------------------------------------------------
    # Draft buffer
    # ------------------------------------------------------------------
    def get_draft(self, dashboard_id: str) -> str:
        return self._drafts.get(dashboard_id, "")

    def set_draft(self, dashboard_id: str, text: str) -> None:
        text = text or ""
        if self._drafts.get(dashboard_id, "") == text:
            return
        self._drafts[dashboard_id] = text
        self._persist()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def _find(self, annotation_id: str) -> Optional[Annotation]:
        return next((a for a in self._annotations if a.id == annotation_id), None)

    def add_comment(self, dashboard_id: str) -> Optional[Annotation]:
        """
        Turn the dashboard's draft into a new annotation at the end of the list.
        Returns the new annotation, or None if the draft is blank.
        """
        text = self._drafts.get(dashboard_id, "")
        if not text.strip():
            logger.debug("Ignoring blank comment", extra={"dashboard_id": dashboard_id})
            return None

        annotation = Annotation.create(
            annotation_id=self._ids.next_id(),
            dashboard_id=dashboard_id,
            text=text,
        )
        self._annotations.append(annotation)
        self._drafts[dashboard_id] = ""
        self._persist()

        logger.info(
            "Annotation added",
            extra={"dashboard_id": dashboard_id, "annotation_id": annotation.id},
        )
        return replace(annotation)

    def toggle_edit(self, annotation_id: str) -> Optional[Annotation]:
        """
        Open or close the editor. The draft is reset to the saved text either
        way, so closing without saving discards the edit.
        """
        annotation = self._find(annotation_id)
        if annotation is None:
            logger.debug("toggle_edit on unknown annotation", extra={"annotation_id": annotation_id})
            return None

        annotation.is_editing = not annotation.is_editing
        annotation.draft_text = annotation.text
        self._persist()
        return replace(annotation)

    def update_edit_text(self, annotation_id: str, text: str) -> Optional[Annotation]:
        """Change the editor contents of an annotation that is being edited."""
        annotation = self._find(annotation_id)
        if annotation is None or not annotation.is_editing:
            return None

        text = text or ""
        if annotation.draft_text != text:
            annotation.draft_text = text
            self._persist()
        return replace(annotation)

    def save_edit(self, annotation_id: str) -> Optional[Annotation]:
        """Commit the draft. Blank drafts are ignored and the editor stays open."""
        annotation = self._find(annotation_id)
        if annotation is None or not annotation.draft_text.strip():
            return None

        annotation.text = annotation.draft_text
        annotation.is_editing = False
        self._persist()

        logger.info(
            "Annotation edited",
            extra={"dashboard_id": annotation.dashboard_id, "annotation_id": annotation.id},
        )
        return replace(annotation)

    def delete_comment(self, annotation_id: str) -> bool:
        initial_len = len(self._annotations)
        self._annotations = [a for a in self._annotations if a.id != annotation_id]

        if len(self._annotations) == initial_len:
            return False

        self._persist()
        logger.info("Annotation deleted", extra={"annotation_id": annotation_id})
        return True

    def clear_all(self) -> None:
        """Remove every annotation on every dashboard. Drafts are kept."""
        n = len(self._annotations)
        self._annotations = []
        self._persist()
        logger.info("All annotations cleared", extra={"n_removed": n})

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------
    @property
    def annotations(self) -> List[Annotation]:
        return [replace(a) for a in self._annotations]

    def get(self, annotation_id: str) -> Optional[Annotation]:
        annotation = self._find(annotation_id)
        return replace(annotation) if annotation is not None else None

    def by_dashboard(self, dashboard_id: str) -> List[Annotation]:
        return [replace(a) for a in self._annotations if a.dashboard_id == dashboard_id]

    def count_by_dashboard(self, dashboard_id: str) -> int:
        return sum(1 for a in self._annotations if a.dashboard_id == dashboard_id)

    def total_count(self) -> int:
        return len(self._annotations)
