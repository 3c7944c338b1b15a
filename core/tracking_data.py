#!/usr/bin/env python3
"""
Tracking Data Module
Immutable records describing sampled animation and tracking state.

The record tree mirrors the exported document:

    CompositionRecord
      -> LayerRecord (one per layer, composition order)
         -> FrameRecord (one per frame, ascending)
            -> LayerTransform, CornerPin, PuppetPin, TrackerPoint, MeshWarpGrid

Records are built once by the collectors and never mutated afterwards.
Sequences are stored as tuples. to_dict() produces the serialized shape
(camelCase keys), from_dict() reads it back.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Any, Dict


@dataclass(frozen=True)
class Vector2:
    """2D point or pair of per-axis values"""
    x: float
    y: float

    @classmethod
    def from_value(cls, value) -> 'Vector2':
        """Build from a host value such as [x, y] or [x, y, z]

        Components past the second are dropped (3D layer positions keep
        their x and y only).

        Raises:
            ValueError: If the value has fewer than two components
        """
        if isinstance(value, dict):
            return cls(x=float(value['x']), y=float(value['y']))
        try:
            components = list(value)
        except TypeError:
            raise ValueError(f"Expected a 2D value, got scalar {value!r}")
        if len(components) < 2:
            raise ValueError(f"Expected a 2D value, got {value!r}")
        return cls(x=float(components[0]), y=float(components[1]))

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y}

    @classmethod
    def from_dict(cls, data) -> 'Vector2':
        return cls(x=data['x'], y=data['y'])


@dataclass(frozen=True)
class DecomposedTransform:
    """Scale, rotation and skew recovered from a transform matrix

    Attributes:
        scale: Magnitudes of the two basis vectors
        rotation: Orientation of the first basis vector in degrees
        skew: Deviation of the second basis vector in degrees
    """
    scale: Vector2
    rotation: float
    skew: Vector2


@dataclass(frozen=True)
class TrackerPoint:
    """Single motion tracker point at one frame

    Attributes:
        name: Track point name ("Track Point N" when unnamed)
        position: Attach point position in layer space
        confidence: Tracker confidence for this frame
    """
    name: str
    position: Vector2
    confidence: float

    def to_dict(self):
        return {
            'name': self.name,
            'position': self.position.to_dict(),
            'confidence': self.confidence,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            name=data['name'],
            position=Vector2.from_dict(data['position']),
            confidence=data['confidence'],
        )


@dataclass(frozen=True)
class MeshVertex:
    row: int
    col: int
    position: Vector2

    def to_dict(self):
        return {'row': self.row, 'col': self.col, 'position': self.position.to_dict()}

    @classmethod
    def from_dict(cls, data):
        return cls(row=data['row'], col=data['col'], position=Vector2.from_dict(data['position']))


@dataclass(frozen=True)
class MeshWarpGrid:
    """Mesh warp control grid at one frame

    Vertices are stored row-major, so vertices[r * columns + c] is the
    vertex at (r, c) and len(vertices) == rows * columns.
    """
    rows: int
    columns: int
    vertices: Tuple[MeshVertex, ...] = ()

    def vertex(self, row, col) -> MeshVertex:
        return self.vertices[row * self.columns + col]

    def to_dict(self):
        return {
            'rows': self.rows,
            'columns': self.columns,
            'vertices': [v.to_dict() for v in self.vertices],
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            rows=data['rows'],
            columns=data['columns'],
            vertices=tuple(MeshVertex.from_dict(v) for v in data['vertices']),
        )


@dataclass(frozen=True)
class CornerPin:
    """Corner pin quad at one frame"""
    top_left: Vector2
    top_right: Vector2
    bottom_right: Vector2
    bottom_left: Vector2

    def to_dict(self):
        return {
            'topLeft': self.top_left.to_dict(),
            'topRight': self.top_right.to_dict(),
            'bottomRight': self.bottom_right.to_dict(),
            'bottomLeft': self.bottom_left.to_dict(),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            top_left=Vector2.from_dict(data['topLeft']),
            top_right=Vector2.from_dict(data['topRight']),
            bottom_right=Vector2.from_dict(data['bottomRight']),
            bottom_left=Vector2.from_dict(data['bottomLeft']),
        )


@dataclass(frozen=True)
class PuppetPin:
    name: str
    position: Vector2

    def to_dict(self):
        return {'name': self.name, 'position': self.position.to_dict()}

    @classmethod
    def from_dict(cls, data):
        return cls(name=data['name'], position=Vector2.from_dict(data['position']))


@dataclass(frozen=True)
class LayerTransform:
    """Layer transform at one frame

    position, anchor_point, scale, rotation and opacity are the host's own
    property values. skew is the only value taken from the matrix
    decomposition, since hosts do not expose it as a property.

    Attributes:
        position: Layer position
        anchor_point: Anchor point in layer space
        scale: Scale as stored by the host (percent for After Effects)
        rotation: Rotation in degrees
        opacity: Opacity as stored by the host (0-100 for After Effects)
        skew: Skew angles in degrees from decompose_transform()
    """
    position: Vector2
    anchor_point: Vector2
    scale: Vector2
    rotation: float
    opacity: float
    skew: Vector2

    def to_dict(self):
        return {
            'position': self.position.to_dict(),
            'anchorPoint': self.anchor_point.to_dict(),
            'scale': self.scale.to_dict(),
            'rotation': self.rotation,
            'opacity': self.opacity,
            'skew': self.skew.to_dict(),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            position=Vector2.from_dict(data['position']),
            anchor_point=Vector2.from_dict(data['anchorPoint']),
            scale=Vector2.from_dict(data['scale']),
            rotation=data['rotation'],
            opacity=data['opacity'],
            skew=Vector2.from_dict(data['skew']),
        )


@dataclass(frozen=True)
class FrameRecord:
    """Complete layer snapshot at one frame

    Attributes:
        frame: 0-based frame number
        time: Sample time in seconds (frame / frame rate)
        transform: Layer transform values
        corner_pin: Corner pin quad, None if the layer has no corner pin
        puppet_pins: Puppet pins in effect order (empty if none)
        tracker_points: Tracker points in track order (empty if none)
        mesh_warp: Mesh warp grid, None if the layer has no mesh warp
    """
    frame: int
    time: float
    transform: LayerTransform
    corner_pin: Optional[CornerPin] = None
    puppet_pins: Tuple[PuppetPin, ...] = ()
    tracker_points: Tuple[TrackerPoint, ...] = ()
    mesh_warp: Optional[MeshWarpGrid] = None

    def to_dict(self):
        return {
            'frame': self.frame,
            'time': self.time,
            'transform': self.transform.to_dict(),
            'cornerPin': self.corner_pin.to_dict() if self.corner_pin is not None else None,
            'puppetPins': [p.to_dict() for p in self.puppet_pins],
            'trackerPoints': [t.to_dict() for t in self.tracker_points],
            'meshWarp': self.mesh_warp.to_dict() if self.mesh_warp is not None else None,
        }

    @classmethod
    def from_dict(cls, data):
        corner_pin = data.get('cornerPin')
        mesh_warp = data.get('meshWarp')
        return cls(
            frame=data['frame'],
            time=data['time'],
            transform=LayerTransform.from_dict(data['transform']),
            corner_pin=CornerPin.from_dict(corner_pin) if corner_pin is not None else None,
            puppet_pins=tuple(PuppetPin.from_dict(p) for p in data.get('puppetPins', [])),
            tracker_points=tuple(TrackerPoint.from_dict(t) for t in data.get('trackerPoints', [])),
            mesh_warp=MeshWarpGrid.from_dict(mesh_warp) if mesh_warp is not None else None,
        )


@dataclass(frozen=True)
class LayerRecord:
    """All sampled frames of one layer

    Attributes:
        name: Layer name
        index: Layer index in the composition (1-based in After Effects)
        type: Layer type tag (host match name)
        frames: Frame records in ascending frame order
    """
    name: str
    index: int
    type: str
    frames: Tuple[FrameRecord, ...] = ()

    def to_dict(self):
        return {
            'name': self.name,
            'index': self.index,
            'type': self.type,
            'frames': [f.to_dict() for f in self.frames],
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            name=data['name'],
            index=data['index'],
            type=data['type'],
            frames=tuple(FrameRecord.from_dict(f) for f in data['frames']),
        )


@dataclass(frozen=True)
class CompositionRecord:
    """Root of an exported tracking document

    Attributes:
        name: Composition name
        duration: Duration in seconds
        frame_rate: Frames per second
        width: Width in pixels
        height: Height in pixels
        layers: Layer records in composition order
    """
    name: str
    duration: float
    frame_rate: float
    width: int
    height: int
    layers: Tuple[LayerRecord, ...] = field(default_factory=tuple)

    @property
    def frames_per_layer(self) -> int:
        """Number of frames sampled for every layer"""
        if not self.layers:
            return 0
        return len(self.layers[0].frames)

    def get_layer_by_name(self, name: str) -> Optional[LayerRecord]:
        """Find layer record by name

        Args:
            name: Layer name to find

        Returns:
            LayerRecord if found, None otherwise
        """
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'duration': self.duration,
            'frameRate': self.frame_rate,
            'width': self.width,
            'height': self.height,
            'layers': [layer.to_dict() for layer in self.layers],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CompositionRecord':
        return cls(
            name=data['name'],
            duration=data['duration'],
            frame_rate=data['frameRate'],
            width=data['width'],
            height=data['height'],
            layers=tuple(LayerRecord.from_dict(layer) for layer in data['layers']),
        )
