from .engine_service import ContourEngine, RESOLVED_CHANNELS
from .pipeline import (
    DETECTOR_CHAIN,
    FOCUSED_DETECTORS,
    DetectorEntry,
    auto_detect,
    focused_detect,
    apply_resolution,
    detector_order,
)

__all__ = [
    "ContourEngine",
    "RESOLVED_CHANNELS",
    "DETECTOR_CHAIN",
    "FOCUSED_DETECTORS",
    "DetectorEntry",
    "auto_detect",
    "focused_detect",
    "apply_resolution",
    "detector_order",
]
