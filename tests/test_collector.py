import math

import pytest

from core.collector import TrackingDataCollector, collect, collect_composition, count_frames
from core.errors import SceneReadError
from core.tracking_data import Vector2
from scene_builders import (
    load_composition,
    make_composition,
    make_corner_pin,
    make_document,
    make_layer,
    make_mesh_warp,
    make_pin,
    make_puppet,
    make_transform,
)


@pytest.mark.parametrize("duration,frame_rate,expected", [
    (1.0, 10, 10),
    (0.3, 10, 3),
    (2.0, 24, 48),
    (0.0, 30, 0),
    (1.0, 29.97, 29),
    (0.29, 100, 28),
])
def test_count_frames(duration, frame_rate, expected) -> None:
    assert count_frames(duration, frame_rate) == expected


@pytest.mark.parametrize("duration,frame_rate", [
    (1.0, 0),
    (1.0, -24),
    (1.0, float('nan')),
    (1.0, float('inf')),
    (-1.0, 24),
    (float('nan'), 24),
])
def test_count_frames_rejects_invalid_timing(duration, frame_rate) -> None:
    with pytest.raises(SceneReadError):
        count_frames(duration, frame_rate)


def test_one_second_at_ten_fps() -> None:
    document = make_document(make_composition([make_layer("Plate")], duration=1.0, frame_rate=10))
    record = collect(load_composition(document))

    assert record.name == "Comp 1"
    assert record.width == 1920 and record.height == 1080
    assert len(record.layers) == 1

    frames = record.layers[0].frames
    assert len(frames) == 11
    assert record.frames_per_layer == 11
    assert [f.frame for f in frames] == list(range(11))
    assert frames[0].time == 0.0
    assert frames[3].time == pytest.approx(0.3)
    assert frames[-1].time == pytest.approx(1.0)


def test_frame_count_floors_the_raw_product() -> None:
    # 0.29 * 100 == 28.999999999999996
    document = make_document(make_composition([make_layer()], duration=0.29, frame_rate=100))
    frames = collect(load_composition(document)).layers[0].frames

    assert len(frames) == math.floor(0.29 * 100) + 1
    assert len(frames) == 29
    assert frames[-1].frame == 28


def test_static_transform_values() -> None:
    transform = make_transform(position=(100, 200, 0), anchor_point=(50, 50), scale=(150, 75),
                               rotation=0, opacity=80)
    document = make_document(make_composition([make_layer(transform=transform)], duration=0.2))
    frame = collect(load_composition(document)).layers[0].frames[1]

    assert frame.transform.position == Vector2(100.0, 200.0)
    assert frame.transform.anchor_point == Vector2(50.0, 50.0)
    assert frame.transform.scale == Vector2(150.0, 75.0)
    assert frame.transform.rotation == 0.0
    assert frame.transform.opacity == 80.0
    assert frame.transform.skew == Vector2(0.0, 0.0)


def test_keyframed_values_are_sampled_at_frame_times() -> None:
    position = {'keyframes': [{'time': 0.0, 'value': [0, 0]}, {'time': 1.0, 'value': [100, 200]}]}
    opacity = {'keyframes': [{'time': 0.0, 'value': 0}, {'time': 0.5, 'value': 100}],
               'interpolation': 'hold'}
    layer = make_layer(transform=make_transform(position=position, opacity=opacity))
    document = make_document(make_composition([layer], duration=1.0, frame_rate=10))
    frames = collect(load_composition(document)).layers[0].frames

    assert frames[5].transform.position.x == pytest.approx(50.0)
    assert frames[5].transform.position.y == pytest.approx(100.0)
    assert frames[10].transform.position == Vector2(100.0, 200.0)
    assert frames[4].transform.opacity == 0.0
    assert frames[5].transform.opacity == 100.0


def test_skew_comes_from_matrix() -> None:
    layer = make_layer(transform=make_transform(matrix=[[1, 0.5], [0, 1]]))
    document = make_document(make_composition([layer], duration=0.0))
    frame = collect(load_composition(document)).layers[0].frames[0]

    assert frame.transform.skew.x == pytest.approx(math.degrees(math.atan2(0.5, 1)))
    # headline scale stays the layer's own property
    assert frame.transform.scale == Vector2(100.0, 100.0)


def test_absent_features_are_null_or_empty() -> None:
    document = make_document(make_composition([make_layer()], duration=0.0))
    frame = collect(load_composition(document)).layers[0].frames[0]

    assert frame.corner_pin is None
    assert frame.mesh_warp is None
    assert frame.puppet_pins == ()
    assert frame.tracker_points == ()


def test_all_features_on_one_layer() -> None:
    layer = make_layer(
        "Screen",
        motionTracker={'trackPoints': [{'attach': [1, 2], 'confidence': 1}]},
        meshWarp=make_mesh_warp(2, 2),
        effects=[make_corner_pin(), make_puppet([make_pin('Puppet Pin 1', [3, 4])])],
    )
    document = make_document(make_composition([layer], duration=0.1))
    frames = collect(load_composition(document)).layers[0].frames

    assert len(frames) == 2
    for frame in frames:
        assert frame.corner_pin is not None
        assert len(frame.mesh_warp.vertices) == 4
        assert [p.name for p in frame.puppet_pins] == ['Puppet Pin 1']
        assert [t.position for t in frame.tracker_points] == [Vector2(1.0, 2.0)]


def test_layers_keep_composition_order() -> None:
    layers = [make_layer("Top"), make_layer("Middle", matchName="ADBE Text Layer"), make_layer("Bottom")]
    record = collect(load_composition(make_document(make_composition(layers, duration=0.0))))

    assert [layer.name for layer in record.layers] == ["Top", "Middle", "Bottom"]
    assert [layer.index for layer in record.layers] == [1, 2, 3]
    assert record.layers[1].type == "ADBE Text Layer"
    assert record.get_layer_by_name("Bottom") is record.layers[2]
    assert record.get_layer_by_name("Missing") is None


def test_composition_without_layers() -> None:
    record = collect(load_composition(make_document(make_composition([]))))

    assert record.layers == ()
    assert record.frames_per_layer == 0


def test_missing_transform_property_aborts_collection() -> None:
    transform = make_transform()
    del transform['opacity']
    layers = [make_layer("Good"), make_layer("Broken", transform=transform)]
    composition = load_composition(make_document(make_composition(layers)))

    with pytest.raises(SceneReadError) as exc_info:
        collect(composition)
    assert exc_info.value.owner == "Broken"
    assert exc_info.value.property_name == "opacity"


def test_invalid_frame_rate_fails_before_sampling() -> None:
    composition = load_composition(make_document(make_composition([make_layer()], frame_rate=0)))

    with pytest.raises(SceneReadError):
        collect(composition)


def test_collection_is_repeatable() -> None:
    position = {'keyframes': [{'time': 0.0, 'value': [0, 0]}, {'time': 1.0, 'value': [10, 10]}]}
    layer = make_layer(transform=make_transform(position=position), effects=[make_corner_pin()])
    composition = load_composition(make_document(make_composition([layer])))

    assert collect(composition) == collect(composition)


def test_layer_callback_receives_resolved_features() -> None:
    layers = [make_layer("A"), make_layer("B", effects=[make_corner_pin()])]
    composition = load_composition(make_document(make_composition(layers, duration=0.0)))
    calls = []

    collect_composition(composition, layer_callback=lambda layer, features, position, total: calls.append(
        (layer.name, features.corner_pin is not None, position, total)))

    assert calls == [("A", False, 1, 2), ("B", True, 2, 2)]


def test_custom_effect_names() -> None:
    effect = make_corner_pin()
    effect['name'] = 'CC Power Pin'
    effect['matchName'] = 'CC Power Pin'
    composition = load_composition(make_document(make_composition([make_layer(effects=[effect])], duration=0.0)))

    default = collect_composition(composition)
    custom = collect_composition(composition, corner_pin_effect='CC Power Pin')

    assert default.layers[0].frames[0].corner_pin is None
    assert custom.layers[0].frames[0].corner_pin is not None


def test_collector_reports_progress() -> None:
    layers = [make_layer("Plate"), make_layer("Screen", effects=[make_corner_pin()])]
    composition = load_composition(make_document(make_composition(layers, name="Shot 010")))
    messages = []

    record = TrackingDataCollector(progress_callback=messages.append).collect(composition)

    assert len(record.layers) == 2
    assert messages[0] == "Collecting 'Shot 010': 11 frames @ 10 fps"
    assert messages[1] == "  [1/2] Plate (no tracking features)"
    assert messages[2] == "  [2/2] Screen (corner pin)"
    assert messages[-1] == "✓ Collected 2 layers"
