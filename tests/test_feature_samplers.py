import pytest

from core.errors import SceneReadError
from core.feature_samplers import (
    resolve_layer_features,
    sample_corner_pin,
    sample_mesh_warp,
    sample_puppet_pins,
    sample_tracker_points,
)
from core.tracking_data import Vector2
from scene_builders import load_layer, make_corner_pin, make_layer, make_mesh_warp, make_pin, make_puppet


def test_plain_layer_has_no_features() -> None:
    layer = load_layer(make_layer())
    features = resolve_layer_features(layer)

    assert features.tracker is None
    assert features.mesh_warp is None
    assert features.corner_pin is None
    assert features.puppet is None
    assert features.describe() == "no tracking features"

    assert sample_tracker_points(features.tracker, 0.0) == []
    assert sample_mesh_warp(features.mesh_warp, 0.0) is None
    assert sample_corner_pin(features.corner_pin, 0.0) is None
    assert sample_puppet_pins(features.puppet, 0.0) == []


def test_tracker_points_are_numbered_by_position() -> None:
    layer = load_layer(make_layer(motionTracker={'trackPoints': [
        {'name': 'Eye', 'attach': [10, 20], 'confidence': 0.9},
        {'attach': [30, 40, 0], 'confidence': 1},
    ]}))
    features = resolve_layer_features(layer)
    points = sample_tracker_points(features.tracker, 0.0)

    assert [p.name for p in points] == ['Track Point 1', 'Track Point 2']
    assert points[0].position == Vector2(10.0, 20.0)
    assert points[0].confidence == pytest.approx(0.9)
    assert points[1].position == Vector2(30.0, 40.0)
    assert "tracker (2 points)" in features.describe()


def test_tracker_with_no_points_samples_to_empty_list() -> None:
    layer = load_layer(make_layer(motionTracker={'trackPoints': []}))
    features = resolve_layer_features(layer)

    assert features.tracker is not None
    assert sample_tracker_points(features.tracker, 0.0) == []


def test_animated_track_point() -> None:
    attach = {'keyframes': [{'time': 0, 'value': [0, 0]}, {'time': 1, 'value': [100, 50]}]}
    layer = load_layer(make_layer(motionTracker={'trackPoints': [{'attach': attach, 'confidence': 1}]}))
    tracker = layer.get_motion_tracker()

    assert sample_tracker_points(tracker, 0.5)[0].position == Vector2(50.0, 25.0)


def test_mesh_warp_is_row_major() -> None:
    layer = load_layer(make_layer(meshWarp=make_mesh_warp(2, 3)))
    grid = sample_mesh_warp(layer.get_mesh_warp(), 0.0)

    assert grid.rows == 2 and grid.columns == 3
    assert len(grid.vertices) == 6
    assert [(v.row, v.col) for v in grid.vertices] == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]
    assert grid.vertex(1, 2).position == Vector2(20.0, 100.0)


def test_empty_mesh_warp_is_not_absent() -> None:
    layer = load_layer(make_layer(meshWarp=make_mesh_warp(0, 0)))
    grid = sample_mesh_warp(layer.get_mesh_warp(), 0.0)

    assert grid is not None
    assert grid.vertices == ()


def test_mesh_warp_missing_vertex() -> None:
    mesh = make_mesh_warp(2, 2)
    mesh['vertices'] = mesh['vertices'][:3]
    layer = load_layer(make_layer(name="Warped", meshWarp=mesh))

    with pytest.raises(SceneReadError) as exc_info:
        sample_mesh_warp(layer.get_mesh_warp(), 0.0)
    assert exc_info.value.owner == "Warped"


def test_corner_pin_corners() -> None:
    layer = load_layer(make_layer(effects=[make_corner_pin(top_left=(5, 6), bottom_left=(7, 800))]))
    features = resolve_layer_features(layer)
    pin = sample_corner_pin(features.corner_pin, 0.0)

    assert pin.top_left == Vector2(5.0, 6.0)
    assert pin.top_right == Vector2(100.0, 0.0)
    assert pin.bottom_right == Vector2(100.0, 100.0)
    assert pin.bottom_left == Vector2(7.0, 800.0)


def test_corner_pin_found_by_match_name() -> None:
    effect = make_corner_pin()
    effect['name'] = 'Corner Pin 2'
    layer = load_layer(make_layer(effects=[effect]))

    assert resolve_layer_features(layer, corner_pin_effect='ADBE Corner Pin').corner_pin is not None
    assert resolve_layer_features(layer).corner_pin is None


def test_corner_pin_missing_corner() -> None:
    effect = make_corner_pin()
    del effect['properties'][2]
    layer = load_layer(make_layer(effects=[effect]))

    with pytest.raises(SceneReadError) as exc_info:
        sample_corner_pin(layer.get_effect('Corner Pin'), 0.0)
    assert exc_info.value.property_name == 'Bottom Right'


def test_puppet_keeps_only_position_pins() -> None:
    puppet = make_puppet([
        make_pin('Mesh 1', [0, 0], match_name='ADBE FreePin3 Mesh'),
        make_pin('Puppet Pin 1', [10, 10]),
        make_pin('Starch 1', [5, 5], match_name='ADBE FreePin3 Starch Pin'),
        make_pin('Puppet Pin 2', [20, 30]),
    ])
    layer = load_layer(make_layer(effects=[puppet]))
    pins = sample_puppet_pins(resolve_layer_features(layer).puppet, 0.0)

    assert [p.name for p in pins] == ['Puppet Pin 1', 'Puppet Pin 2']
    assert pins[1].position == Vector2(20.0, 30.0)


def test_puppet_without_pins() -> None:
    layer = load_layer(make_layer(effects=[make_puppet([])]))
    features = resolve_layer_features(layer)

    assert features.puppet is not None
    assert sample_puppet_pins(features.puppet, 0.0) == []
