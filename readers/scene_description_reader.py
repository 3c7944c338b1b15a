#!/usr/bin/env python3
"""
Scene Description Reader Module
Reads JSON scene descriptions implementing the core scene interface

A scene description is a JSON document shaped like an After Effects project:

    {"name": "Project",
     "items": [
       {"type": "composition", "name": "Comp 1", "width": 1920, "height": 1080,
        "duration": 2.0, "frameRate": 24,
        "layers": [
          {"name": "Plate", "matchName": "ADBE AV Layer",
           "transform": {"position": [960, 540], "anchorPoint": [0, 0],
                         "scale": [100, 100], "rotation": 0, "opacity": 100},
           "motionTracker": {"trackPoints": [{"attach": [0, 0], "confidence": 1}]},
           "meshWarp": {"rows": 2, "columns": 2, "vertices": [...]},
           "effects": [{"name": "Corner Pin", "properties": [...]}]}]}]}

Any property value may be static or keyframed:

    {"keyframes": [{"time": 0.0, "value": [0, 0]}, {"time": 1.0, "value": [100, 0]}],
     "interpolation": "linear"}

Keyframed values are interpolated per component (linear, or "hold" for
stepped keys) and held constant before the first and after the last key.
"""

import json
import math

import numpy as np

from core.errors import SceneReadError
from core.geometry import compose_linear_block
from core.scene_interface import (
    CompositionSource,
    EffectPropertySource,
    EffectSource,
    LayerSource,
    MeshWarpSource,
    ProjectSource,
    PropertySource,
    TrackerSource,
    TrackPointSource,
    TRANSFORM_PROPERTIES,
)

from .base_reader import BaseReader

DEFAULT_LAYER_MATCH_NAME = "ADBE AV Layer"
INTERPOLATION_MODES = ('linear', 'hold')


def _require(data, key, owner):
    """Fetch a required key from a description dict

    Raises:
        SceneReadError: If the key is missing
    """
    if not isinstance(data, dict) or key not in data:
        raise SceneReadError(f"'{owner}' has no '{key}' value", owner=owner, property_name=key)
    return data[key]


class KeyframedProperty(PropertySource):
    """Static or keyframed property value from a scene description"""

    def __init__(self, raw, owner="", name=""):
        """Parse a property description

        Args:
            raw: Static value, or dict with 'keyframes' (and optional 'interpolation')
            owner: Name of the owning layer/effect for error messages
            name: Property name for error messages

        Raises:
            SceneReadError: If the keyframe list is malformed
        """
        self.owner = owner
        self.name = name
        self._static = None
        self._times = None
        self._values = None
        self._shape = None
        self._interpolation = 'linear'

        if isinstance(raw, dict) and 'keyframes' in raw:
            self._parse_keyframes(raw)
        else:
            self._static = raw

    @property
    def is_animated(self):
        return self._times is not None

    def _parse_keyframes(self, raw):
        keyframes = raw['keyframes']
        if not keyframes:
            raise SceneReadError(
                f"'{self.owner}' property '{self.name}' has an empty keyframe list",
                owner=self.owner, property_name=self.name
            )

        interpolation = raw.get('interpolation', 'linear')
        if interpolation not in INTERPOLATION_MODES:
            raise SceneReadError(
                f"'{self.owner}' property '{self.name}' has unknown interpolation '{interpolation}'",
                owner=self.owner, property_name=self.name
            )
        self._interpolation = interpolation

        try:
            ordered = sorted(keyframes, key=lambda key: float(key['time']))
            values = [np.asarray(key['value'], dtype=float) for key in ordered]
            times = np.array([float(key['time']) for key in ordered])
        except (KeyError, TypeError, ValueError) as e:
            raise SceneReadError(
                f"'{self.owner}' property '{self.name}' has a malformed keyframe: {e}",
                owner=self.owner, property_name=self.name
            )

        shapes = {v.shape for v in values}
        if len(shapes) != 1:
            raise SceneReadError(
                f"'{self.owner}' property '{self.name}' mixes keyframe value shapes",
                owner=self.owner, property_name=self.name
            )

        self._shape = values[0].shape
        self._times = times
        # One row per keyframe, one column per component
        self._values = np.stack([v.reshape(-1) for v in values])

    def value_at_time(self, time_seconds):
        """Evaluate the property at a time

        Returns:
            float for scalar properties, nested lists for vector/matrix properties
        """
        if not self.is_animated:
            if self._static is None:
                raise SceneReadError(
                    f"'{self.owner}' property '{self.name}' has no value",
                    owner=self.owner, property_name=self.name
                )
            return self._static

        if self._interpolation == 'hold':
            # Last keyframe at or before the time, first keyframe before the range
            index = max(int(np.searchsorted(self._times, time_seconds, side='right')) - 1, 0)
            flat = self._values[index]
        else:
            flat = np.array([
                np.interp(time_seconds, self._times, self._values[:, i])
                for i in range(self._values.shape[1])
            ])

        if self._shape == ():
            return float(flat[0])
        return flat.reshape(self._shape).tolist()


class JsonTrackPoint(TrackPointSource):

    def __init__(self, data, index, owner):
        point_owner = f"{owner}/Track Point {index}"
        self._attach = KeyframedProperty(_require(data, 'attach', point_owner), point_owner, 'attach')
        self._confidence = KeyframedProperty(
            _require(data, 'confidence', point_owner), point_owner, 'confidence'
        )

    @property
    def attach(self):
        return self._attach

    @property
    def confidence(self):
        return self._confidence


class JsonTracker(TrackerSource):

    def __init__(self, data, owner):
        self._points = [
            JsonTrackPoint(point, i, owner)
            for i, point in enumerate(data.get('trackPoints', []), start=1)
        ]

    @property
    def num_track_points(self):
        return len(self._points)

    def get_track_point(self, index):
        if not 1 <= index <= len(self._points):
            raise IndexError(f"Track point index out of range: {index}")
        return self._points[index - 1]


class JsonMeshWarp(MeshWarpSource):
    """Mesh warp grid with row-major vertex list"""

    def __init__(self, data, owner):
        self.owner = owner
        self._rows = int(_require(data, 'rows', owner))
        self._columns = int(_require(data, 'columns', owner))
        self._vertices = [
            KeyframedProperty(vertex, owner, f"vertex {i}")
            for i, vertex in enumerate(data.get('vertices', []))
        ]

    @property
    def rows(self):
        return self._rows

    @property
    def columns(self):
        return self._columns

    def get_vertex(self, row, col):
        index = row * self._columns + col
        if index >= len(self._vertices):
            raise SceneReadError(
                f"'{self.owner}' mesh warp has no vertex ({row}, {col})",
                owner=self.owner, property_name='vertices'
            )
        return self._vertices[index]


class JsonEffectProperty(EffectPropertySource):

    def __init__(self, name, match_name, raw, owner):
        self._name = name
        self._match_name = match_name
        self._property = KeyframedProperty(raw, owner, name)

    @property
    def name(self):
        return self._name

    @property
    def match_name(self):
        return self._match_name

    def value_at_time(self, time_seconds):
        return self._property.value_at_time(time_seconds)


class JsonEffect(EffectSource):
    """Effect with ordered sub-properties

    Properties may be given as a list of {"name", "matchName", "value"} or,
    for simple effects, as a {name: value} mapping.
    """

    def __init__(self, data, owner):
        self._name = _require(data, 'name', owner)
        self._match_name = data.get('matchName', self._name)
        effect_owner = f"{owner}/{self._name}"

        raw_properties = data.get('properties', [])
        if isinstance(raw_properties, dict):
            raw_properties = [
                {'name': name, 'value': value} for name, value in raw_properties.items()
            ]

        self._properties = []
        for prop in raw_properties:
            prop_name = _require(prop, 'name', effect_owner)
            self._properties.append(JsonEffectProperty(
                prop_name,
                prop.get('matchName', prop_name),
                prop.get('value'),
                effect_owner
            ))

    @property
    def name(self):
        return self._name

    @property
    def match_name(self):
        return self._match_name

    def get_properties(self):
        return list(self._properties)


class JsonLayer(LayerSource):

    def __init__(self, data, position):
        self._name = data.get('name', f"Layer {position}")
        self._index = int(data.get('index', position))
        self._match_name = data.get('matchName', DEFAULT_LAYER_MATCH_NAME)

        transform = data.get('transform', {})
        self._transform = {
            name: KeyframedProperty(transform[name], self._name, name)
            for name in TRANSFORM_PROPERTIES
            if name in transform
        }
        self._matrix = None
        if 'matrix' in transform:
            self._matrix = KeyframedProperty(transform['matrix'], self._name, 'matrix')

        self._tracker = None
        if data.get('motionTracker') is not None:
            self._tracker = JsonTracker(data['motionTracker'], self._name)

        self._mesh_warp = None
        if data.get('meshWarp') is not None:
            self._mesh_warp = JsonMeshWarp(data['meshWarp'], self._name)

        self._effects = [JsonEffect(effect, self._name) for effect in data.get('effects', [])]

    @property
    def name(self):
        return self._name

    @property
    def index(self):
        return self._index

    @property
    def match_name(self):
        return self._match_name

    def get_transform_property(self, name):
        if name not in self._transform:
            raise SceneReadError(
                f"Layer '{self._name}' has no transform property '{name}'",
                owner=self._name, property_name=name
            )
        return self._transform[name]

    def get_matrix_at_time(self, time_seconds):
        """Explicit matrix if described, otherwise composed from scale and rotation"""
        if self._matrix is not None:
            return self._matrix.value_at_time(time_seconds)

        scale = self.get_transform_property('scale').value_at_time(time_seconds)
        rotation = self.get_transform_property('rotation').value_at_time(time_seconds)
        try:
            scale_x, scale_y = float(scale[0]) / 100.0, float(scale[1]) / 100.0
        except (TypeError, IndexError):
            raise SceneReadError(
                f"Layer '{self._name}' has a malformed scale value: {scale!r}",
                owner=self._name, property_name='scale'
            )
        return compose_linear_block(scale_x, scale_y, float(rotation))

    def get_motion_tracker(self):
        return self._tracker

    def get_mesh_warp(self):
        return self._mesh_warp

    def get_effect(self, name):
        for effect in self._effects:
            if effect.name == name or effect.match_name == name:
                return effect
        return None


class JsonComposition(CompositionSource):

    def __init__(self, data, position):
        self._data = data
        self._name = data.get('name', f"Comp {position}")
        self._layers = None

    @property
    def name(self):
        return self._name

    @property
    def duration(self):
        return self._number('duration')

    @property
    def frame_rate(self):
        return self._number('frameRate')

    @property
    def width(self):
        return int(self._number('width'))

    @property
    def height(self):
        return int(self._number('height'))

    def _number(self, key):
        value = _require(self._data, key, self._name)
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise SceneReadError(
                f"Composition '{self._name}' has a non-numeric '{key}': {value!r}",
                owner=self._name, property_name=key
            )
        if math.isnan(number):
            raise SceneReadError(
                f"Composition '{self._name}' has a NaN '{key}'",
                owner=self._name, property_name=key
            )
        return number

    def get_layers(self):
        if self._layers is None:
            self._layers = [
                JsonLayer(layer, position)
                for position, layer in enumerate(self._data.get('layers', []), start=1)
            ]
        return list(self._layers)


class JsonProject(ProjectSource):

    def __init__(self, document, default_name="Project"):
        if not isinstance(document, dict):
            raise SceneReadError("Scene description must be a JSON object")
        self._name = document.get('name', default_name)
        self._compositions = []
        for position, item in enumerate(document.get('items', []), start=1):
            if isinstance(item, dict) and item.get('type') == 'composition':
                self._compositions.append(JsonComposition(item, position))

    @property
    def name(self):
        return self._name

    def get_compositions(self):
        return list(self._compositions)


class SceneDescriptionReader(BaseReader):
    """Reader for JSON scene descriptions

    The file is read once on construction; properties are evaluated lazily
    when the collectors sample them.
    """

    def __init__(self, file_path, document=None):
        """Open scene description and parse it

        Args:
            file_path: Path to the .json scene description
            document: Already parsed document; the file is not read when given

        Raises:
            SceneReadError: If the file is missing or not valid JSON
        """
        super().__init__(file_path)
        if document is None:
            document = self._load(self.file_path)
        self.project = JsonProject(document, default_name=self.file_path.stem)

    @classmethod
    def from_document(cls, document, name="scene.json"):
        """Create a reader for an in-memory scene description

        Args:
            document: Parsed scene description dict
            name: Pseudo file name used in messages

        Returns:
            SceneDescriptionReader
        """
        return cls(name, document=document)

    @staticmethod
    def _load(path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError:
            raise SceneReadError(f"Scene file not found: {path}")
        except json.JSONDecodeError as e:
            raise SceneReadError(f"Invalid scene description {path.name}: {e}")

    def get_format_name(self):
        """Return human-readable format name"""
        return "Scene Description JSON"

    def get_project(self):
        return self.project
