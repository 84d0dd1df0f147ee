# sneaker_tryon/tryon_engine/visualization/visualizer.py
import cv2
import logging
import time
import numpy as np
from pathlib import Path
from typing import Optional, Sequence, Union
from ..common.config import VisualizationConfig
from ..common.enums import StatusCategory
from ..common.models import StatusReport

logger = logging.getLogger(__name__)

CATEGORY_COLORS = {
    StatusCategory.NONE: (240, 240, 240),
    StatusCategory.DETECTING: (0, 215, 255),
    StatusCategory.SUCCESS: (80, 220, 80),
    StatusCategory.ERROR: (80, 80, 255),
}


def composite(frame: np.ndarray, layers: Sequence[Optional[np.ndarray]]) -> np.ndarray:
    """Alpha-blends BGRA layers over a BGR frame, in order. Layers must match the frame size."""
    output = frame.astype(np.float32)
    for layer in layers:
        if layer is None:
            continue
        if layer.shape[:2] != frame.shape[:2]:
            layer = cv2.resize(layer, (frame.shape[1], frame.shape[0]), interpolation=cv2.INTER_NEAREST)
        alpha = layer[:, :, 3:4].astype(np.float32) / 255.0
        output = layer[:, :, :3].astype(np.float32) * alpha + output * (1 - alpha)
    return np.clip(output, 0, 255).astype(np.uint8)


def save_capture(image: np.ndarray, output_dir: Union[str, Path]) -> Path:
    """Writes a composited capture as sneaker-ar-<epoch ms>.png and returns its path."""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"sneaker-ar-{int(time.time() * 1000)}.png"
    if not cv2.imwrite(str(path), image):
        raise IOError(f"Could not write capture to {path}")
    logger.info("Capture saved to %s", path)
    return path


class Visualizer:
    """Builds the preview frame: video, object layer, overlay layer and HUD."""

    def __init__(self, config: VisualizationConfig):
        self.config = config
        self.font = cv2.FONT_HERSHEY_SIMPLEX

    def render(
        self,
        frame: np.ndarray,
        status: StatusReport,
        object_layer: Optional[np.ndarray],
        overlay_layer: Optional[np.ndarray],
        current_fps: float,
        processing_time_ms: float = 0.0,
    ) -> np.ndarray:
        """Renders the try-on layers and HUD onto a copy of the frame."""
        # Adaptive Level of Detail (LOD)
        lod_reduced = self.config.adaptive_lod and current_fps < self.config.lod_threshold_fps

        layers = [object_layer]
        if self.config.draw_overlay and not lod_reduced:
            layers.append(overlay_layer)
        output_frame = composite(frame, layers)

        if self.config.mirror_preview:
            output_frame = cv2.flip(output_frame, 1)

        if self.config.draw_hud:
            self._draw_hud(output_frame, status, current_fps, processing_time_ms, lod_reduced)

        return output_frame

    def _draw_hud(self, frame: np.ndarray, status: StatusReport, fps: float, processing_time_ms: float, lod_reduced: bool):
        """Draws the status banner and performance metrics."""
        cv2.putText(frame, status.message, (10, 30), self.font, 0.8, CATEGORY_COLORS[status.category], 2, cv2.LINE_AA)

        hud_elements = [
            f"FPS: {fps:.1f}",
            f"Processing: {processing_time_ms:.1f} ms",
            f"State: {status.status.value}",
        ]
        if lod_reduced:
            hud_elements.append("LOD: REDUCED")

        for i, text in enumerate(hud_elements):
            cv2.putText(frame, text, (10, 65 + i * 28), self.font, 0.6, (240, 240, 240), 2, cv2.LINE_AA)
