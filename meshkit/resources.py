"""GPU resource slots and per-view transforms for the deferred shading pipeline."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

import numpy as np

SCALE_LENGTHS = 100.0
"""The scene is expressed in centimetres rather than metres."""

SHADOWMAP_RES_X = 1024
SHADOWMAP_RES_Y = 1024
LIGHTS_NB = 4
LIGHT_INTENSITY = 72.0 * (SCALE_LENGTHS * SCALE_LENGTHS)
LIGHT_ANGLE_FALLOFF = math.radians(37.0)


class Texture(enum.IntEnum):
    """Render targets used by the pipeline."""

    DEPTH_BUFFER = 0
    SHADOW_MAP = 1
    GBUFFER_DIFFUSE = 2
    GBUFFER_SPECULAR = 3
    GBUFFER_WORLD_SPACE_NORMAL = 4
    LIGHT_DIFFUSE_CONTRIBUTION = 5
    LIGHT_SPECULAR_CONTRIBUTION = 6
    RESULT = 7

    @property
    def label(self) -> str:
        return _TEXTURE_LABELS[self]


_TEXTURE_LABELS = {
    Texture.DEPTH_BUFFER: "Depth buffer",
    Texture.SHADOW_MAP: "Shadow map",
    Texture.GBUFFER_DIFFUSE: "GBuffer diffuse",
    Texture.GBUFFER_SPECULAR: "GBuffer specular",
    Texture.GBUFFER_WORLD_SPACE_NORMAL: "GBuffer normals",
    Texture.LIGHT_DIFFUSE_CONTRIBUTION: "Light diffuse contribution",
    Texture.LIGHT_SPECULAR_CONTRIBUTION: "Light specular contribution",
    Texture.RESULT: "Final result",
}


class Sampler(enum.IntEnum):
    """Texture samplers: without interpolation, bilinear, and with mipmaps."""

    NEAREST = 0
    LINEAR = 1
    MIPMAPS = 2

    @property
    def label(self) -> str:
        return _SAMPLER_LABELS[self]


_SAMPLER_LABELS = {
    Sampler.NEAREST: "Nearest",
    Sampler.LINEAR: "Linear",
    Sampler.MIPMAPS: "Mimaps",
}


class FBO(enum.IntEnum):
    """Framebuffer objects, one per rendering pass."""

    GBUFFER = 0
    SHADOW_MAP = 1
    LIGHT_ACCUMULATION = 2
    RESOLVE = 3
    FINAL_WITH_DEPTH = 4

    @property
    def label(self) -> str:
        return _FBO_LABELS[self]

    @property
    def attachments(self) -> dict[str, Texture]:
        """Textures attached to this framebuffer, keyed by attachment point."""
        return dict(_FBO_ATTACHMENTS[self])


_FBO_LABELS = {
    FBO.GBUFFER: "GBuffer",
    FBO.SHADOW_MAP: "Shadow map generation",
    FBO.LIGHT_ACCUMULATION: "Light acccumulation",
    FBO.RESOLVE: "Resolve",
    FBO.FINAL_WITH_DEPTH: "Cone wireframe",
}

_FBO_ATTACHMENTS = {
    FBO.GBUFFER: {
        "color0": Texture.GBUFFER_DIFFUSE,
        "color1": Texture.GBUFFER_SPECULAR,
        "color2": Texture.GBUFFER_WORLD_SPACE_NORMAL,
        "depth": Texture.DEPTH_BUFFER,
    },
    FBO.SHADOW_MAP: {"depth": Texture.SHADOW_MAP},
    FBO.LIGHT_ACCUMULATION: {
        "color0": Texture.LIGHT_DIFFUSE_CONTRIBUTION,
        "color1": Texture.LIGHT_SPECULAR_CONTRIBUTION,
        "depth": Texture.DEPTH_BUFFER,
    },
    FBO.RESOLVE: {"color0": Texture.RESULT},
    FBO.FINAL_WITH_DEPTH: {"color0": Texture.RESULT, "depth": Texture.DEPTH_BUFFER},
}


class ElapsedTimeQuery(enum.IntEnum):
    """Slots of the GPU timer queries.

    Each light owns one shadow-map slot and one accumulation slot, found at
    ``SHADOW_MAP0_GENERATION + i`` and ``LIGHT0_ACCUMULATION + i``.
    """

    GBUFFER_GENERATION = 0
    SHADOW_MAP0_GENERATION = 1
    LIGHT0_ACCUMULATION = 1 + LIGHTS_NB
    RESOLVE = 1 + 2 * LIGHTS_NB
    CONE_WIREFRAME = 2 + 2 * LIGHTS_NB
    GUI = 3 + 2 * LIGHTS_NB
    COPY_TO_FRAMEBUFFER = 4 + 2 * LIGHTS_NB

    @classmethod
    def count(cls) -> int:
        """Total number of query slots."""
        return int(cls.COPY_TO_FRAMEBUFFER) + 1

    @classmethod
    def shadow_map(cls, light_index: int) -> int:
        """Slot timing the shadow map generation of one light."""
        return int(cls.SHADOW_MAP0_GENERATION) + _light_index(light_index)

    @classmethod
    def light_accumulation(cls, light_index: int) -> int:
        """Slot timing the light accumulation of one light."""
        return int(cls.LIGHT0_ACCUMULATION) + _light_index(light_index)


def _light_index(light_index: int) -> int:
    if not 0 <= light_index < LIGHTS_NB:
        raise IndexError(f"light index must be in [0, {LIGHTS_NB}), got {light_index}")
    return light_index


class UBO(enum.IntEnum):
    """Uniform buffer objects; the value is also the binding point."""

    CAMERA_VIEW_PROJ_TRANSFORMS = 0
    LIGHT_VIEW_PROJ_TRANSFORMS = 1

    @property
    def block_name(self) -> str:
        """Name of the uniform block in the shaders."""
        return _UBO_BLOCKS[self]

    @property
    def label(self) -> str:
        return _UBO_LABELS[self]


_UBO_BLOCKS = {
    UBO.CAMERA_VIEW_PROJ_TRANSFORMS: "CameraViewProjTransforms",
    UBO.LIGHT_VIEW_PROJ_TRANSFORMS: "LightViewProjTransforms",
}

_UBO_LABELS = {
    UBO.CAMERA_VIEW_PROJ_TRANSFORMS: "Camera view-projection transforms",
    UBO.LIGHT_VIEW_PROJ_TRANSFORMS: "Light view-projection transforms",
}


def _identity() -> np.ndarray:
    return np.identity(4, dtype=np.float32)


@dataclass(eq=False)
class ViewProjTransforms:
    """A view-projection matrix together with its inverse."""

    view_projection: np.ndarray = field(default_factory=_identity)
    view_projection_inverse: np.ndarray = field(default_factory=_identity)

    SIZE = 2 * 16 * 4
    """Size in bytes of the packed uniform block."""

    def __post_init__(self) -> None:
        self.view_projection = _as_mat4("view_projection", self.view_projection)
        self.view_projection_inverse = _as_mat4(
            "view_projection_inverse", self.view_projection_inverse
        )

    @classmethod
    def from_matrix(cls, view_projection) -> ViewProjTransforms:
        """Build the pair from a view-projection matrix, computing its inverse."""
        matrix = _as_mat4("view_projection", view_projection)
        try:
            inverse = np.linalg.inv(matrix.astype(np.float64))
        except np.linalg.LinAlgError as error:
            raise ValueError("view_projection matrix is not invertible") from error
        return cls(matrix, inverse.astype(np.float32))

    def pack(self) -> bytes:
        """Both matrices in column-major float32 order, as the uniform block expects."""
        return (
            self.view_projection.tobytes(order="F")
            + self.view_projection_inverse.tobytes(order="F")
        )


def _as_mat4(name: str, values) -> np.ndarray:
    matrix = np.asarray(values, dtype=np.float32)
    if matrix.shape != (4, 4):
        raise ValueError(f"{name} must have shape (4, 4), got {matrix.shape}")
    return matrix.copy()


def query_labels() -> dict[int, str]:
    """Debug labels given to the timer queries, keyed by query slot."""
    labels = {int(ElapsedTimeQuery.GBUFFER_GENERATION): "GBuffer generation"}
    for i in range(LIGHTS_NB):
        labels[ElapsedTimeQuery.shadow_map(i)] = f"Shadow map {i} generation"
        labels[ElapsedTimeQuery.light_accumulation(i)] = f"Light{i} accumulation"
    labels[int(ElapsedTimeQuery.RESOLVE)] = "Resolve"
    labels[int(ElapsedTimeQuery.CONE_WIREFRAME)] = "Cone wireframe"
    labels[int(ElapsedTimeQuery.GUI)] = "GUI"
    return dict(sorted(labels.items()))