#!/usr/bin/env python3
"""
Core Module
Sampling and decomposition engine for tracking data export.

Readers expose a scene through core.scene_interface, the collectors sample
it into the immutable records of core.tracking_data, and exporters persist
those records without knowledge of the source host.
"""

from .collector import (
    TrackingDataCollector,
    collect,
    collect_composition,
    collect_layer,
    count_frames,
)
from .errors import NoActiveSceneError, SceneReadError
from .geometry import decompose_transform, radians_to_degrees
from .scene_interface import SCENE_INTERFACE_VERSION
from .tracking_data import (
    CompositionRecord,
    CornerPin,
    DecomposedTransform,
    FrameRecord,
    LayerRecord,
    LayerTransform,
    MeshVertex,
    MeshWarpGrid,
    PuppetPin,
    TrackerPoint,
    Vector2,
)

__all__ = [
    'TrackingDataCollector',
    'collect',
    'collect_composition',
    'collect_layer',
    'count_frames',
    'NoActiveSceneError',
    'SceneReadError',
    'decompose_transform',
    'radians_to_degrees',
    'SCENE_INTERFACE_VERSION',
    'CompositionRecord',
    'CornerPin',
    'DecomposedTransform',
    'FrameRecord',
    'LayerRecord',
    'LayerTransform',
    'MeshVertex',
    'MeshWarpGrid',
    'PuppetPin',
    'TrackerPoint',
    'Vector2',
]
