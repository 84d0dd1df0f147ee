# sneaker_tryon/tryon_engine/session/context.py
import weakref
import numpy as np
from typing import Any, Optional
from ..rendering.object_renderer import TrackedObject


class ARSessionContext:
    """
    Mutable state of one try-on session, passed explicitly to every stage.

    The tracked object belongs to the renderer; the context only keeps a weak
    reference to it.
    """

    def __init__(self):
        self.stream: Optional[Any] = None
        self.frame_width = 0
        self.frame_height = 0
        self.is_active = False
        self.last_frame: Optional[np.ndarray] = None
        self.object_layer: Optional[np.ndarray] = None
        self._tracked_object: Optional[weakref.ref] = None

    @property
    def tracked_object(self) -> Optional[TrackedObject]:
        return self._tracked_object() if self._tracked_object is not None else None

    @tracked_object.setter
    def tracked_object(self, obj: Optional[TrackedObject]):
        self._tracked_object = weakref.ref(obj) if obj is not None else None

    def update_frame(self, frame: np.ndarray):
        self.frame_height, self.frame_width = frame.shape[:2]
        self.last_frame = frame

    def hide_object(self):
        obj = self.tracked_object
        if obj is not None:
            obj.visible = False

    def reset(self):
        self.stream = None
        self.tracked_object = None
        self.last_frame = None
        self.object_layer = None
