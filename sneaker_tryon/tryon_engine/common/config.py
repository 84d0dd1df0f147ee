# sneaker_tryon/tryon_engine/common/config.py
import logging
import yaml
from pathlib import Path
from pydantic import BaseModel, Field
from typing import Optional, Tuple, Dict, Union
from .enums import CameraFacing, LogLevel

class CameraConfig(BaseModel):
    # An explicit source (index or file/URL) overrides the facing lookup.
    source: Optional[Union[int, str]] = None
    facing: CameraFacing = CameraFacing.USER
    devices: Dict[CameraFacing, int] = Field(
        default_factory=lambda: {CameraFacing.USER: 0, CameraFacing.ENVIRONMENT: 1}
    )
    resolution: Tuple[int, int] = (1280, 720)
    target_fps: int = 30
    buffer_size: int = 5

class PoseConfig(BaseModel):
    model_complexity: int = 1
    smooth_landmarks: bool = True
    min_detection_confidence: float = 0.7
    min_tracking_confidence: float = 0.6

class TrackingConfig(BaseModel):
    min_visibility: float = 0.5
    landmark_count: int = 33

class PlacementConfig(BaseModel):
    position_scale: float = 6.0
    forward_offset: float = 0.2
    depth: float = -2.0
    scale_gain: float = 2.0
    scale_min: float = 0.05
    scale_max: float = 0.15

class SmoothingConfig(BaseModel):
    enabled: bool = False
    min_cutoff: float = 0.5
    beta: float = 0.05
    d_cutoff: float = 1.0

class RenderingConfig(BaseModel):
    fov_degrees: float = 60.0
    camera_z: float = 5.0
    near: float = 0.1
    far: float = 100.0
    object_color: Tuple[int, int, int] = (60, 60, 230)
    object_length: float = 10.0
    initial_scale: float = 0.1

class VisualizationConfig(BaseModel):
    draw_overlay: bool = True
    draw_hud: bool = True
    adaptive_lod: bool = True
    lod_threshold_fps: float = 15.0
    mirror_preview: bool = False

class CaptureConfig(BaseModel):
    output_dir: str = "captures"

class LoggingConfig(BaseModel):
    level: LogLevel = LogLevel.INFO

class AppConfig(BaseModel):
    camera: CameraConfig = Field(default_factory=CameraConfig)
    pose: PoseConfig = Field(default_factory=PoseConfig)
    tracking: TrackingConfig = Field(default_factory=TrackingConfig)
    placement: PlacementConfig = Field(default_factory=PlacementConfig)
    smoothing: SmoothingConfig = Field(default_factory=SmoothingConfig)
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    visualization: VisualizationConfig = Field(default_factory=VisualizationConfig)
    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: Union[str, Path]) -> AppConfig:
    """Reads a YAML config file. Missing sections fall back to their defaults."""
    with open(path, 'r') as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise yaml.YAMLError(f"Top level of {path} must be a mapping, got {type(raw).__name__}")
    return AppConfig(**raw)


def configure_logging(config: LoggingConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.level.value),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
