#!/usr/bin/env python3
"""
Frame Sampler Module
Builds the FrameRecord of one layer at one time.
"""

from .feature_samplers import (
    LayerFeatures,
    sample_corner_pin,
    sample_mesh_warp,
    sample_puppet_pins,
    sample_tracker_points,
)
from .geometry import decompose_transform
from .scene_interface import LayerSource
from .tracking_data import FrameRecord, LayerTransform, Vector2


def sample_frame(layer: LayerSource, features: LayerFeatures, frame: int, time_seconds: float) -> FrameRecord:
    """Sample the complete state of a layer at one frame

    Headline scale and rotation come straight from the layer's own
    properties. The transform matrix is decomposed only to recover skew,
    which hosts do not expose as a property.

    Args:
        layer: Layer to sample
        features: Optional capabilities resolved for this layer
        frame: Frame number stored in the record
        time_seconds: Time to sample at

    Returns:
        FrameRecord: Transform and feature data for this frame

    Raises:
        SceneReadError: If a transform property or the matrix cannot be read
    """
    position = layer.get_transform_property('position').value_at_time(time_seconds)
    anchor_point = layer.get_transform_property('anchorPoint').value_at_time(time_seconds)
    scale = layer.get_transform_property('scale').value_at_time(time_seconds)
    rotation = layer.get_transform_property('rotation').value_at_time(time_seconds)
    opacity = layer.get_transform_property('opacity').value_at_time(time_seconds)

    decomposed = decompose_transform(layer.get_matrix_at_time(time_seconds))

    transform = LayerTransform(
        position=Vector2.from_value(position),
        anchor_point=Vector2.from_value(anchor_point),
        scale=Vector2.from_value(scale),
        rotation=float(rotation),
        opacity=float(opacity),
        skew=decomposed.skew,
    )

    return FrameRecord(
        frame=frame,
        time=time_seconds,
        transform=transform,
        corner_pin=sample_corner_pin(features.corner_pin, time_seconds),
        puppet_pins=tuple(sample_puppet_pins(features.puppet, time_seconds)),
        tracker_points=tuple(sample_tracker_points(features.tracker, time_seconds)),
        mesh_warp=sample_mesh_warp(features.mesh_warp, time_seconds),
    )
