#!/usr/bin/env python3
"""
Scene Interface Module
Read-only query interface the collectors use to sample a scene.

Hosts (scene file readers, application bridges) implement these abstract
classes. The collectors only ever call the methods declared here, so any
host that implements them can be exported without changes to the core.

Optional capabilities (motion tracker, mesh warp, named effects) are
returned as None when the layer does not carry them.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

SCENE_INTERFACE_VERSION = "1.0"

# Transform property names every layer must provide
TRANSFORM_PROPERTIES = ('position', 'anchorPoint', 'scale', 'rotation', 'opacity')


class PropertySource(ABC):
    """Time-varying property value"""

    @abstractmethod
    def value_at_time(self, time_seconds: float) -> Any:
        """Evaluate the property at a time without changing host state

        Args:
            time_seconds: Composition time in seconds

        Returns:
            Scalar or sequence value (e.g. [x, y] for positions)

        Raises:
            SceneReadError: If the value cannot be resolved
        """
        pass


class TrackPointSource(ABC):
    """One point of a motion tracker"""

    @property
    @abstractmethod
    def attach(self) -> PropertySource:
        """Attach point position property"""
        pass

    @property
    @abstractmethod
    def confidence(self) -> PropertySource:
        """Tracking confidence property"""
        pass


class TrackerSource(ABC):
    """Motion tracker attached to a layer"""

    @property
    @abstractmethod
    def num_track_points(self) -> int:
        pass

    @abstractmethod
    def get_track_point(self, index: int) -> TrackPointSource:
        """Get a track point by 1-based index"""
        pass


class MeshWarpSource(ABC):
    """Mesh warp control grid attached to a layer"""

    @property
    @abstractmethod
    def rows(self) -> int:
        pass

    @property
    @abstractmethod
    def columns(self) -> int:
        pass

    @abstractmethod
    def get_vertex(self, row: int, col: int) -> PropertySource:
        """Get the position property of a grid vertex (0-based row/col)"""
        pass


class EffectPropertySource(PropertySource):
    """Named sub-property of an effect"""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def match_name(self) -> str:
        """Host-internal kind tag (e.g. 'ADBE FreePin3 PosPin')"""
        pass


class EffectSource(ABC):
    """Effect applied to a layer (Corner Pin, Puppet, ...)"""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def match_name(self) -> str:
        pass

    @abstractmethod
    def get_properties(self) -> List[EffectPropertySource]:
        """All sub-properties in effect order"""
        pass

    def get_property(self, name: str) -> Optional[EffectPropertySource]:
        """Find a sub-property by display name or match name

        Args:
            name: Property name to find

        Returns:
            EffectPropertySource if found, None otherwise
        """
        for prop in self.get_properties():
            if prop.name == name or prop.match_name == name:
                return prop
        return None


class LayerSource(ABC):
    """Layer of a composition"""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def index(self) -> int:
        """Layer index within the composition"""
        pass

    @property
    @abstractmethod
    def match_name(self) -> str:
        """Layer type tag (e.g. 'ADBE AV Layer')"""
        pass

    @abstractmethod
    def get_transform_property(self, name: str) -> PropertySource:
        """Get a transform property by name (see TRANSFORM_PROPERTIES)

        Raises:
            SceneReadError: If the layer has no such property
        """
        pass

    @abstractmethod
    def get_matrix_at_time(self, time_seconds: float) -> Any:
        """Full transform matrix at a time, column-vector notation

        Column i of the upper-left 2x2 block is basis vector i, so a 90
        degree rotation is [[0, -1], [1, 0]]. decompose_transform() transposes
        this into basis-row layout before applying its m00/m01 formulas.
        Return the matrix in this notation; a matrix already holding the
        basis vectors as rows is only valid with row_vectors=True.

        Raises:
            SceneReadError: If the matrix cannot be resolved
        """
        pass

    def get_motion_tracker(self) -> Optional[TrackerSource]:
        """Motion tracker of this layer, None if it has none"""
        return None  # Default implementation - override if supported

    def get_mesh_warp(self) -> Optional[MeshWarpSource]:
        """Mesh warp grid of this layer, None if it has none"""
        return None  # Default implementation - override if supported

    def get_effect(self, name: str) -> Optional[EffectSource]:
        """Effect by display name or match name, None if not applied"""
        return None  # Default implementation - override if supported


class CompositionSource(ABC):
    """Composition holding an ordered stack of layers"""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def duration(self) -> float:
        """Duration in seconds"""
        pass

    @property
    @abstractmethod
    def frame_rate(self) -> float:
        """Frames per second"""
        pass

    @property
    @abstractmethod
    def width(self) -> int:
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        pass

    @abstractmethod
    def get_layers(self) -> List[LayerSource]:
        """All layers in composition index order"""
        pass


class ProjectSource(ABC):
    """Project holding compositions and other items"""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def get_compositions(self) -> List[CompositionSource]:
        """All compositions in project order (non-composition items excluded)"""
        pass
