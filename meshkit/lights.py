"""Spot lights of the deferred shading pipeline: cone geometry, projection and colours."""

from __future__ import annotations

import math
import operator

import numpy as np

from meshkit.mesh import DrawingMode, MeshData
from meshkit.resources import LIGHTS_NB, SCALE_LENGTHS, SHADOWMAP_RES_X, SHADOWMAP_RES_Y

LIGHT_PROJECTION_NEAR_PLANE = 0.01 * SCALE_LENGTHS
LIGHT_PROJECTION_FAR_PLANE = 20.0 * SCALE_LENGTHS
LIGHT_PROJECTION_FOVY = 0.5 * math.pi

LIGHT_ROTATION_SPEED = 0.1
"""Angular speed of the lights around the vertical axis, in radians per second."""

_CONE_VERTICES = (
    (0.0, 1.0, -1.0),
    (0.0, 0.0, 0.0),
    (0.38268, 0.92388, -1.0),
    (0.0, 0.0, 0.0),
    (0.70711, 0.70711, -1.0),
    (0.0, 0.0, 0.0),
    (0.92388, 0.38268, -1.0),
    (0.0, 0.0, 0.0),
    (1.0, 0.0, -1.0),
    (0.0, 0.0, 0.0),
    (0.92388, -0.38268, -1.0),
    (0.0, 0.0, 0.0),
    (0.70711, -0.70711, -1.0),
    (0.0, 0.0, 0.0),
    (0.38268, -0.92388, -1.0),
    (0.0, 0.0, 0.0),
    (0.0, -1.0, -1.0),
    (0.0, 0.0, 0.0),
    (-0.38268, -0.92388, -1.0),
    (0.0, 0.0, 0.0),
    (-0.70711, -0.70711, -1.0),
    (0.0, 0.0, 0.0),
    (-0.92388, -0.38268, -1.0),
    (0.0, 0.0, 0.0),
    (-1.0, 0.0, -1.0),
    (0.0, 0.0, 0.0),
    (-0.92388, 0.38268, -1.0),
    (0.0, 0.0, 0.0),
    (-0.70711, 0.70711, -1.0),
    (0.0, 0.0, 0.0),
    (-0.38268, 0.92388, -1.0),
    (0.0, 1.0, -1.0),
    (0.0, 1.0, -1.0),
    (0.38268, 0.92388, -1.0),
    (0.0, 1.0, -1.0),
    (0.70711, 0.70711, -1.0),
    (0.0, 0.0, -1.0),
    (0.92388, 0.38268, -1.0),
    (0.0, 0.0, -1.0),
    (1.0, 0.0, -1.0),
    (0.0, 0.0, -1.0),
    (0.92388, -0.38268, -1.0),
    (0.0, 0.0, -1.0),
    (0.70711, -0.70711, -1.0),
    (0.0, 0.0, -1.0),
    (0.38268, -0.92388, -1.0),
    (0.0, 0.0, -1.0),
    (0.0, -1.0, -1.0),
    (0.0, 0.0, -1.0),
    (-0.38268, -0.92388, -1.0),
    (0.0, 0.0, -1.0),
    (-0.70711, -0.70711, -1.0),
    (0.0, 0.0, -1.0),
    (-0.92388, -0.38268, -1.0),
    (0.0, 0.0, -1.0),
    (-1.0, 0.0, -1.0),
    (0.0, 0.0, -1.0),
    (-0.92388, 0.38268, -1.0),
    (0.0, 0.0, -1.0),
    (-0.70711, 0.70711, -1.0),
    (0.0, 0.0, -1.0),
    (-0.38268, 0.92388, -1.0),
    (0.0, 0.0, -1.0),
    (0.0, 1.0, -1.0),
    (0.0, 0.0, -1.0),
)


def load_cone() -> MeshData:
    """Unit cone with its apex at the origin and its cap at z = -1, as a triangle strip."""
    return MeshData(
        vertices=np.array(_CONE_VERTICES, dtype=np.float32),
        drawing_mode=DrawingMode.TRIANGLE_STRIP,
    )


def perspective(fovy, aspect, near, far) -> np.ndarray:
    """Right-handed perspective projection mapping depth to [-1, 1].

    The matrix is row-major: it transforms column vectors as ``P @ v``.
    """
    if aspect == 0:
        raise ValueError("aspect ratio must not be zero")
    if near == far:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fovy / 2.0)
    if tan_half == 0:
        raise ValueError("field of view must not be zero")
    depth = far - near
    matrix = np.zeros((4, 4), dtype=np.float32)
    matrix[0, 0] = 1.0 / (aspect * tan_half)
    matrix[1, 1] = 1.0 / tan_half
    matrix[2, 2] = -(far + near) / depth
    matrix[2, 3] = -(2.0 * far * near) / depth
    matrix[3, 2] = -1.0
    return matrix


def light_projection() -> np.ndarray:
    """Projection used to render the lights' shadow maps."""
    return perspective(
        LIGHT_PROJECTION_FOVY,
        SHADOWMAP_RES_X / SHADOWMAP_RES_Y,
        LIGHT_PROJECTION_NEAR_PLANE,
        LIGHT_PROJECTION_FAR_PLANE,
    )


def random_light_colors(count=LIGHTS_NB, rng=None) -> np.ndarray:
    """Random RGB colours with every channel in [0.5, 1], one row per light."""
    count = operator.index(count)
    if count < 0:
        raise ValueError(f"count must not be negative, got {count}")
    generator = np.random.default_rng() if rng is None else rng
    return (0.5 + 0.5 * generator.random((count, 3))).astype(np.float32)


def light_rotation_angle(light_index, seconds) -> float:
    """Angle around the vertical axis of a light after ``seconds`` of animation.

    Lights start evenly spread around the circle and turn together.
    """
    index = operator.index(light_index)
    if not 0 <= index < LIGHTS_NB:
        raise IndexError(f"light index must be in [0, {LIGHTS_NB}), got {index}")
    return 2.0 * math.pi * index / LIGHTS_NB + LIGHT_ROTATION_SPEED * seconds