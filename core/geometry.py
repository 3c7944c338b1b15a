#!/usr/bin/env python3
"""
Geometry Module
Angle conversion and 2D affine matrix decomposition for layer transforms.

Matrices are accepted in ordinary column-vector notation by default, where
column i of the 2x2 block is basis vector i. Internally the block is
transposed into basis-row layout (row i is basis vector i), which is the
layout the decomposition formulas index:

    scale.x  = |(m00, m01)|        scale.y = |(m10, m11)|
    rotation = atan2(m01, m00)
    skew.x   = atan2(m10, m11)     skew.y  = atan2(-m01, m11)

The skew terms both use m11 unnormalized. Exported tracking data depends on
this exact convention, so it must not be replaced by a textbook polar or
QR decomposition.
"""

import math

import numpy as np

from .tracking_data import DecomposedTransform, Vector2


def radians_to_degrees(angle):
    """Convert an angle from radians to degrees"""
    return angle * (180.0 / math.pi)


def linear_block(matrix):
    """Extract the upper-left 2x2 linear block of a transform matrix

    Hosts may hand over 2x2, 2x3, 3x3 or 4x4 matrices. Only the linear part
    is relevant to decomposition; translation is read from the position
    property instead.

    Args:
        matrix: Nested sequence or numpy array, at least 2x2

    Returns:
        np.ndarray: 2x2 float array

    Raises:
        ValueError: If the matrix is not two-dimensional or smaller than 2x2
    """
    m = np.asarray(matrix, dtype=float)
    if m.ndim != 2 or m.shape[0] < 2 or m.shape[1] < 2:
        raise ValueError(f"Transform matrix must be at least 2x2, got shape {m.shape}")
    return m[:2, :2]


def decompose_transform(matrix, row_vectors=False):
    """Decompose a 2D transform into scale, rotation and skew

    Degenerate input is not validated: a zero matrix gives zero scale and
    zero angles, NaN entries give NaN outputs.

    Args:
        matrix: Transform matrix (2x2 or larger, see linear_block)
        row_vectors: True if the matrix is already in basis-row layout
                     (row-vector hosts such as Alembic), False for
                     column-vector notation

    Returns:
        DecomposedTransform: scale magnitudes, rotation and skew in degrees
    """
    m = linear_block(matrix)
    if not row_vectors:
        m = m.T

    scale = Vector2(
        x=float(np.linalg.norm([m[0][0], m[0][1]])),
        y=float(np.linalg.norm([m[1][0], m[1][1]])),
    )

    rotation = radians_to_degrees(float(np.arctan2(m[0][1], m[0][0])))

    # + 0.0 folds the -0.0 produced by negating a zero m01
    skew = Vector2(
        x=radians_to_degrees(float(np.arctan2(m[1][0], m[1][1]))),
        y=radians_to_degrees(float(np.arctan2(-m[0][1], m[1][1]))) + 0.0,
    )

    return DecomposedTransform(scale=scale, rotation=rotation, skew=skew)


def compose_linear_block(scale_x, scale_y, rotation_degrees):
    """Build a column-vector 2x2 block from scale multipliers and a rotation

    Used by scene sources that store layer scale and rotation but no
    explicit matrix. The result is the block R(theta) * S.

    Args:
        scale_x: Horizontal scale multiplier (1.0 = 100%)
        scale_y: Vertical scale multiplier
        rotation_degrees: Clockwise-positive rotation in degrees

    Returns:
        np.ndarray: 2x2 float array
    """
    theta = np.radians(rotation_degrees)
    cos_t = np.cos(theta)
    sin_t = np.sin(theta)
    return np.array([
        [scale_x * cos_t, -scale_y * sin_t],
        [scale_x * sin_t, scale_y * cos_t],
    ], dtype=float)
