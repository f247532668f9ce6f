from .callbacks_annotations import register_annotation_callbacks
from .callbacks_render import register_render_callbacks

__all__ = ["register_annotation_callbacks", "register_render_callbacks"]
