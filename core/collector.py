#!/usr/bin/env python3
"""
Collector Module
Walks a composition frame by frame and assembles the CompositionRecord.

collect() is the single entry point exporters need: it takes a composition
from any host implementing core.scene_interface and returns the complete,
immutable record tree. Nothing is cached between calls and any read failure
aborts the whole collection (no partial records).
"""

import math

from .errors import SceneReadError
from .feature_samplers import CORNER_PIN_EFFECT, PUPPET_EFFECT, resolve_layer_features
from .frame_sampler import sample_frame
from .scene_interface import CompositionSource, LayerSource
from .tracking_data import CompositionRecord, LayerRecord

def count_frames(duration, frame_rate):
    """Index of the last frame sampled for a composition

    Frames 0..count_frames() inclusive are sampled, so a composition always
    yields count_frames() + 1 frame records per layer.

    Args:
        duration: Duration in seconds
        frame_rate: Frames per second

    Returns:
        int: floor(duration * frame_rate)

    Raises:
        SceneReadError: If the frame rate is not positive or the duration is
                        negative, or either is not finite
    """
    if not math.isfinite(frame_rate) or frame_rate <= 0:
        raise SceneReadError(f"Invalid composition frame rate: {frame_rate}", property_name='frameRate')
    if not math.isfinite(duration) or duration < 0:
        raise SceneReadError(f"Invalid composition duration: {duration}", property_name='duration')
    return int(math.floor(duration * frame_rate))


def collect_layer(layer: LayerSource, composition: CompositionSource,
                  corner_pin_effect=CORNER_PIN_EFFECT, puppet_effect=PUPPET_EFFECT,
                  features=None) -> LayerRecord:
    """Sample every frame of one layer

    Duration and frame rate are read once from the composition, optional
    features are resolved once from the layer.

    Args:
        layer: Layer to sample
        composition: Composition owning the layer
        corner_pin_effect: Name of the corner pin effect to look for
        puppet_effect: Name of the puppet effect to look for
        features: Already resolved LayerFeatures, looked up when None

    Returns:
        LayerRecord: One FrameRecord per frame, ascending from frame 0
    """
    frame_rate = float(composition.frame_rate)
    last_frame = count_frames(float(composition.duration), frame_rate)
    if features is None:
        features = resolve_layer_features(layer, corner_pin_effect, puppet_effect)

    frames = []
    for frame in range(last_frame + 1):
        time_seconds = frame / frame_rate
        frames.append(sample_frame(layer, features, frame, time_seconds))

    return LayerRecord(
        name=layer.name,
        index=layer.index,
        type=layer.match_name,
        frames=tuple(frames),
    )


def collect_composition(composition: CompositionSource,
                        corner_pin_effect=CORNER_PIN_EFFECT, puppet_effect=PUPPET_EFFECT,
                        layer_callback=None) -> CompositionRecord:
    """Sample every layer of a composition

    Args:
        composition: Composition to export
        corner_pin_effect: Name of the corner pin effect to look for
        puppet_effect: Name of the puppet effect to look for
        layer_callback: Optional function called before each layer is sampled
                        Signature: callback(layer, features, position, total) -> None

    Returns:
        CompositionRecord: Composition metadata and all layer records
    """
    name = composition.name
    duration = composition.duration
    frame_rate = composition.frame_rate
    width = composition.width
    height = composition.height

    # Validate timing before touching any layer
    count_frames(float(duration), float(frame_rate))

    source_layers = composition.get_layers()
    layers = []
    for position, layer in enumerate(source_layers, start=1):
        features = resolve_layer_features(layer, corner_pin_effect, puppet_effect)
        if layer_callback:
            layer_callback(layer, features, position, len(source_layers))
        layers.append(collect_layer(layer, composition, features=features))

    return CompositionRecord(
        name=name,
        duration=duration,
        frame_rate=frame_rate,
        width=width,
        height=height,
        layers=tuple(layers),
    )


def collect(composition: CompositionSource) -> CompositionRecord:
    """Collect the complete tracking record of a composition"""
    return collect_composition(composition)


class TrackingDataCollector:
    """Composition collector with progress reporting

    Wraps collect_composition() for long-running exports driven from the
    command line or the GUI, reporting each layer through the progress
    callback.
    """

    def __init__(self, progress_callback=None, corner_pin_effect=CORNER_PIN_EFFECT,
                 puppet_effect=PUPPET_EFFECT):
        """Initialize collector

        Args:
            progress_callback: Optional function to call for progress updates
                              Signature: callback(message: str) -> None
            corner_pin_effect: Name of the corner pin effect to look for
            puppet_effect: Name of the puppet effect to look for
        """
        self.progress_callback = progress_callback
        self.corner_pin_effect = corner_pin_effect
        self.puppet_effect = puppet_effect

    def log(self, message):
        """Send progress updates to callback"""
        if self.progress_callback:
            self.progress_callback(message)
        print(message)

    def collect(self, composition: CompositionSource) -> CompositionRecord:
        """Collect the complete tracking record of a composition

        Args:
            composition: Composition to export

        Returns:
            CompositionRecord: Composition metadata and all layer records

        Raises:
            SceneReadError: If any required value cannot be read
        """
        frame_rate = float(composition.frame_rate)
        last_frame = count_frames(float(composition.duration), frame_rate)
        self.log(f"Collecting '{composition.name}': {last_frame + 1} frames @ {frame_rate:g} fps")

        record = collect_composition(
            composition,
            corner_pin_effect=self.corner_pin_effect,
            puppet_effect=self.puppet_effect,
            layer_callback=self._report_layer
        )

        self.log(f"✓ Collected {len(record.layers)} layers")
        return record

    def _report_layer(self, layer, features, position, total):
        self.log(f"  [{position}/{total}] {layer.name} ({features.describe()})")
