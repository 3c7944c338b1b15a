import math

import numpy as np
import pytest

from core.geometry import compose_linear_block, decompose_transform, linear_block, radians_to_degrees


def test_radians_to_degrees() -> None:
    assert radians_to_degrees(math.pi) == pytest.approx(180.0)
    assert radians_to_degrees(-math.pi / 2) == pytest.approx(-90.0)
    assert radians_to_degrees(0) == 0


def test_identity_block() -> None:
    result = decompose_transform([[1, 0], [0, 1]])

    assert result.scale.x == 1 and result.scale.y == 1
    assert result.rotation == 0
    assert result.skew.x == 0 and result.skew.y == 0


def test_uniform_scale_block() -> None:
    result = decompose_transform([[2, 0], [0, 2]])

    assert result.scale.x == 2 and result.scale.y == 2
    assert result.rotation == 0
    assert result.skew.x == 0 and result.skew.y == 0


def test_quarter_turn_block() -> None:
    result = decompose_transform([[0, -1], [1, 0]])

    assert result.rotation == pytest.approx(90.0)
    assert result.scale.x == pytest.approx(1.0)
    assert result.scale.y == pytest.approx(1.0)


def test_quarter_turn_in_basis_row_layout() -> None:
    result = decompose_transform([[0, 1], [-1, 0]], row_vectors=True)

    assert result.rotation == pytest.approx(90.0)
    assert result.scale.x == pytest.approx(1.0)


def test_shear_goes_to_skew_x() -> None:
    # x' = x + 0.5 y
    result = decompose_transform([[1, 0.5], [0, 1]])

    assert result.rotation == 0
    assert result.scale.x == pytest.approx(1.0)
    assert result.scale.y == pytest.approx(math.sqrt(1.25))
    assert result.skew.x == pytest.approx(math.degrees(math.atan2(0.5, 1)))
    assert result.skew.y == 0

    same = decompose_transform([[1, 0], [0.5, 1]], row_vectors=True)
    assert same == result


def test_skew_terms_divide_by_unnormalized_m11() -> None:
    block = compose_linear_block(2.0, 0.5, 30.0)
    result = decompose_transform(block)

    theta = math.radians(30.0)
    assert result.scale.x == pytest.approx(2.0)
    assert result.scale.y == pytest.approx(0.5)
    assert result.rotation == pytest.approx(30.0)
    assert result.skew.x == pytest.approx(math.degrees(math.atan2(-0.5 * math.sin(theta), 0.5 * math.cos(theta))))
    assert result.skew.y == pytest.approx(math.degrees(math.atan2(-2.0 * math.sin(theta), 0.5 * math.cos(theta))))


def test_decomposition_is_deterministic() -> None:
    block = [[0.3, -1.7], [2.2, 0.9]]
    first = decompose_transform(block)
    second = decompose_transform([row[:] for row in block])

    assert first == second


def test_larger_matrices_use_upper_left_block() -> None:
    affine = [[0, -1, 50], [1, 0, 20], [0, 0, 1]]
    result = decompose_transform(affine)

    assert result == decompose_transform([[0, -1], [1, 0]])
    assert linear_block(np.eye(4) * 3).tolist() == [[3.0, 0.0], [0.0, 3.0]]


def test_zero_matrix_does_not_raise() -> None:
    result = decompose_transform([[0, 0], [0, 0]])

    assert result.scale.x == 0 and result.scale.y == 0
    assert result.rotation == 0
    assert result.skew.x == 0 and result.skew.y == 0


def test_nan_entries_propagate() -> None:
    result = decompose_transform([[float('nan'), 0], [0, 1]])

    assert math.isnan(result.scale.x)
    assert math.isnan(result.rotation)


def test_outputs_are_plain_floats() -> None:
    result = decompose_transform(np.array([[1.0, 0.0], [0.0, 1.0]]))

    assert type(result.rotation) is float
    assert type(result.scale.x) is float
    assert type(result.skew.y) is float
    assert math.copysign(1.0, result.skew.y) == 1.0


def test_too_small_matrix_is_rejected() -> None:
    with pytest.raises(ValueError):
        linear_block([1, 0])
    with pytest.raises(ValueError):
        decompose_transform([[1]])
