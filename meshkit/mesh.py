"""Mesh geometry containers and the layout of their vertex buffer."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

import numpy as np

VEC3_BYTES = 3 * np.dtype(np.float32).itemsize
UVEC3_BYTES = 3 * np.dtype(np.uint32).itemsize

ATTRIBUTE_ORDER = ("vertices", "normals", "texcoords", "tangents", "binormals")


class DrawingMode(enum.IntEnum):
    """Primitive topology, using the OpenGL enumeration values."""

    POINTS = 0x0000
    LINES = 0x0001
    LINE_LOOP = 0x0002
    LINE_STRIP = 0x0003
    TRIANGLES = 0x0004
    TRIANGLE_STRIP = 0x0005
    TRIANGLE_FAN = 0x0006


@dataclass(frozen=True)
class BufferSlice:
    """A region of the vertex buffer holding one vertex attribute."""

    name: str
    offset: int
    size: int
    components: int = 3

    @property
    def end(self) -> int:
        return self.offset + self.size


def _as_vec3_array(name: str, values) -> np.ndarray:
    array = np.asarray(values, dtype=np.float32)
    if array.size == 0:
        array = array.reshape(0, 3)
    if array.ndim != 2 or array.shape[1] != 3:
        raise ValueError(f"{name} must have shape (n, 3), got {array.shape}")
    return array


def _as_index_array(values) -> np.ndarray:
    raw = np.asarray(values)
    if raw.size == 0:
        raw = raw.reshape(0, 3)
    if raw.ndim != 2 or raw.shape[1] != 3:
        raise ValueError(f"indices must have shape (n, 3), got {raw.shape}")
    if raw.size and not np.issubdtype(raw.dtype, np.integer):
        raise ValueError("indices must be integers")
    if raw.size and raw.min() < 0:
        raise ValueError("indices must not be negative")
    return raw.astype(np.uint32)


@dataclass(eq=False)
class MeshData:
    """Geometry of a mesh: per-vertex attributes plus optional triangle indices.

    Attributes that are ``None`` are not part of the vertex buffer. When
    present, every attribute holds one vec3 per vertex.
    """

    vertices: np.ndarray
    normals: np.ndarray | None = None
    texcoords: np.ndarray | None = None
    tangents: np.ndarray | None = None
    binormals: np.ndarray | None = None
    indices: np.ndarray | None = None
    drawing_mode: DrawingMode = field(default=DrawingMode.TRIANGLES)

    def __post_init__(self) -> None:
        self.vertices = _as_vec3_array("vertices", self.vertices)
        count = len(self.vertices)
        for name in ATTRIBUTE_ORDER[1:]:
            values = getattr(self, name)
            if values is None:
                continue
            array = _as_vec3_array(name, values)
            if len(array) != count:
                raise ValueError(
                    f"{name} has {len(array)} entries but there are {count} vertices"
                )
            setattr(self, name, array)
        if self.indices is not None:
            self.indices = _as_index_array(self.indices)
            if self.indices.size and int(self.indices.max()) >= count:
                raise ValueError("indices refer to vertices that do not exist")
        self.drawing_mode = DrawingMode(self.drawing_mode)

    @property
    def indices_nb(self) -> int:
        """Number of indices to draw (three per triangle), zero without indices."""
        return 0 if self.indices is None else int(self.indices.size)

    @property
    def vertices_nb(self) -> int:
        """Number of vertices."""
        return len(self.vertices)

    @property
    def buffer_layout(self) -> list[BufferSlice]:
        """Attributes packed one after another, in binding order."""
        layout: list[BufferSlice] = []
        offset = 0
        for name in ATTRIBUTE_ORDER:
            values = getattr(self, name)
            if values is None:
                continue
            size = len(values) * VEC3_BYTES
            layout.append(BufferSlice(name, offset, size))
            offset += size
        return layout

    @property
    def buffer_size(self) -> int:
        """Total size in bytes of the vertex buffer."""
        return sum(part.size for part in self.buffer_layout)

    @property
    def index_buffer_size(self) -> int:
        """Size in bytes of the index buffer."""
        return 0 if self.indices is None else len(self.indices) * UVEC3_BYTES