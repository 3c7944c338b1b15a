#!/usr/bin/env python3
"""
Feature Samplers Module
Per-frame extraction of optional layer features.

Each layer may carry any combination of a motion tracker, a mesh warp grid,
a corner pin effect and a puppet effect. Capabilities are looked up once per
layer with resolve_layer_features(); the sample_* functions then read them
at each frame time. A missing capability is not an error: trackers and
puppet pins sample to an empty list, mesh warp and corner pin to None.
"""

from dataclasses import dataclass
from typing import List, Optional

from .errors import SceneReadError
from .scene_interface import EffectSource, LayerSource, MeshWarpSource, TrackerSource
from .tracking_data import CornerPin, MeshVertex, MeshWarpGrid, PuppetPin, TrackerPoint, Vector2

# Default effect names as they appear on After Effects layers
CORNER_PIN_EFFECT = "Corner Pin"
PUPPET_EFFECT = "Puppet"

# Corner property names in CornerPin field order
CORNER_PIN_CORNERS = ("Top Left", "Top Right", "Bottom Right", "Bottom Left")

# Match name identifying positional pins among a puppet effect's properties
PUPPET_PIN_MATCH_NAME = "ADBE FreePin3 PosPin"


@dataclass(frozen=True)
class LayerFeatures:
    """Optional capabilities of one layer, resolved before sampling

    Attributes:
        tracker: Motion tracker, None if the layer has none
        mesh_warp: Mesh warp grid, None if the layer has none
        corner_pin: Corner pin effect, None if not applied
        puppet: Puppet effect, None if not applied
    """
    tracker: Optional[TrackerSource] = None
    mesh_warp: Optional[MeshWarpSource] = None
    corner_pin: Optional[EffectSource] = None
    puppet: Optional[EffectSource] = None

    def describe(self) -> str:
        """Short list of present features for progress messages"""
        present = []
        if self.tracker is not None:
            present.append(f"tracker ({self.tracker.num_track_points} points)")
        if self.mesh_warp is not None:
            present.append(f"mesh warp ({self.mesh_warp.rows}x{self.mesh_warp.columns})")
        if self.corner_pin is not None:
            present.append("corner pin")
        if self.puppet is not None:
            present.append("puppet")
        return ", ".join(present) if present else "no tracking features"


def resolve_layer_features(layer: LayerSource,
                           corner_pin_effect: str = CORNER_PIN_EFFECT,
                           puppet_effect: str = PUPPET_EFFECT) -> LayerFeatures:
    """Look up all optional capabilities of a layer

    Args:
        layer: Layer to inspect
        corner_pin_effect: Name of the corner pin effect to look for
        puppet_effect: Name of the puppet effect to look for

    Returns:
        LayerFeatures: One entry per feature kind, None where absent
    """
    return LayerFeatures(
        tracker=layer.get_motion_tracker(),
        mesh_warp=layer.get_mesh_warp(),
        corner_pin=layer.get_effect(corner_pin_effect),
        puppet=layer.get_effect(puppet_effect),
    )


def sample_tracker_points(tracker: Optional[TrackerSource], time_seconds: float) -> List[TrackerPoint]:
    """Sample every track point of a motion tracker

    Args:
        tracker: Motion tracker or None
        time_seconds: Sample time

    Returns:
        list: TrackerPoint per track point in 1..N order, empty without tracker
    """
    if tracker is None:
        return []

    points = []
    for i in range(1, tracker.num_track_points + 1):
        point = tracker.get_track_point(i)
        points.append(TrackerPoint(
            name=f"Track Point {i}",
            position=Vector2.from_value(point.attach.value_at_time(time_seconds)),
            confidence=float(point.confidence.value_at_time(time_seconds)),
        ))
    return points


def sample_mesh_warp(mesh: Optional[MeshWarpSource], time_seconds: float) -> Optional[MeshWarpGrid]:
    """Sample every vertex of a mesh warp grid in row-major order

    A 0x0 grid still produces a MeshWarpGrid (with no vertices); only a
    missing mesh warp produces None.

    Args:
        mesh: Mesh warp or None
        time_seconds: Sample time

    Returns:
        MeshWarpGrid, or None without mesh warp
    """
    if mesh is None:
        return None

    rows = mesh.rows
    columns = mesh.columns
    vertices = []
    for r in range(rows):
        for c in range(columns):
            vertices.append(MeshVertex(
                row=r,
                col=c,
                position=Vector2.from_value(mesh.get_vertex(r, c).value_at_time(time_seconds)),
            ))

    return MeshWarpGrid(rows=rows, columns=columns, vertices=tuple(vertices))


def sample_corner_pin(corner_pin: Optional[EffectSource], time_seconds: float) -> Optional[CornerPin]:
    """Sample the four corners of a corner pin effect

    Args:
        corner_pin: Corner pin effect or None
        time_seconds: Sample time

    Returns:
        CornerPin, or None without the effect

    Raises:
        SceneReadError: If the effect lacks one of the four corner properties
    """
    if corner_pin is None:
        return None

    corners = []
    for corner_name in CORNER_PIN_CORNERS:
        prop = corner_pin.get_property(corner_name)
        if prop is None:
            raise SceneReadError(
                f"Effect '{corner_pin.name}' has no '{corner_name}' property",
                owner=corner_pin.name,
                property_name=corner_name
            )
        corners.append(Vector2.from_value(prop.value_at_time(time_seconds)))

    top_left, top_right, bottom_right, bottom_left = corners
    return CornerPin(
        top_left=top_left,
        top_right=top_right,
        bottom_right=bottom_right,
        bottom_left=bottom_left,
    )


def sample_puppet_pins(puppet: Optional[EffectSource], time_seconds: float) -> List[PuppetPin]:
    """Sample the positional pins of a puppet effect

    Only sub-properties whose match name marks them as position pins are
    kept; other puppet properties (mesh settings, overlap/starch pins) are
    skipped without affecting the order of the pins that are kept.

    Args:
        puppet: Puppet effect or None
        time_seconds: Sample time

    Returns:
        list: PuppetPin per position pin in effect order, empty without puppet
    """
    if puppet is None:
        return []

    pins = []
    for prop in puppet.get_properties():
        if prop.match_name != PUPPET_PIN_MATCH_NAME:
            continue
        pins.append(PuppetPin(
            name=prop.name,
            position=Vector2.from_value(prop.value_at_time(time_seconds)),
        ))
    return pins
