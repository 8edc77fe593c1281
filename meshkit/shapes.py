"""Builders for tessellated parametric shapes (quad, pane, sphere, torus, ring)."""

from __future__ import annotations

import enum
import operator

import numpy as np

from meshkit.mesh import MeshData

_TWO_PI = np.float32(2.0 * np.pi)
_PI = np.float32(np.pi)


class _Winding(enum.Enum):
    """Order in which the two triangles of a grid cell list their corners."""

    # (a, c, b), (c, d, b): used by the quad and the sphere.
    ACROSS_ROWS = enum.auto()
    # (a, b, d), (a, d, c): used by the torus and the circle ring.
    ALONG_ROWS = enum.auto()


def _split_count(name: str, value) -> int:
    count = operator.index(value)
    if count < 0:
        raise ValueError(f"{name} must not be negative, got {count}")
    return count


def _accumulate(step, count: int) -> np.ndarray:
    """Angles or distances obtained by adding ``step`` repeatedly, starting at 0."""
    steps = np.full(count, step, dtype=np.float32)
    if count:
        steps[0] = 0.0
    return np.cumsum(steps, dtype=np.float32)


def _grid_triangles(rows: int, cols: int, stride: int, winding: _Winding) -> np.ndarray:
    """Two triangles per cell of a ``rows`` x ``cols`` grid of edges."""
    i, j = np.meshgrid(np.arange(rows), np.arange(cols), indexing="ij")
    a = stride * i.ravel() + j.ravel()
    b = a + 1
    c = a + stride
    d = c + 1
    if winding is _Winding.ACROSS_ROWS:
        first, second = (a, c, b), (c, d, b)
    else:
        first, second = (a, b, d), (a, d, c)
    triangles = np.stack(
        [np.stack(first, axis=-1), np.stack(second, axis=-1)], axis=1
    )
    return triangles.reshape(-1, 3).astype(np.uint32)


def _stack(x, y, z, shape) -> np.ndarray:
    parts = [np.broadcast_to(np.asarray(p, dtype=np.float32), shape) for p in (x, y, z)]
    return np.stack(parts, axis=-1).reshape(-1, 3)


def create_quad(width, height, horizontal_split_count=0, vertical_split_count=0):
    """Create a quad in the xz-plane split into a grid of triangles.

    Only positions and texture coordinates are filled; normals, tangents and
    binormals are zero. The index buffer holds two triangles per vertex, the
    entries beyond the grid's triangles being degenerate ``(0, 0, 0)``.
    """
    h_edges = _split_count("horizontal_split_count", horizontal_split_count)
    v_edges = _split_count("vertical_split_count", vertical_split_count)
    h_verts = h_edges + 1
    v_verts = v_edges + 1
    shape = (h_verts, v_verts)

    i = np.arange(h_verts, dtype=np.float32)[:, None]
    j = np.arange(v_verts, dtype=np.float32)[None, :]
    with np.errstate(divide="ignore", invalid="ignore"):
        d_horizon = np.float32(width) / np.float32(h_edges)
        d_vertical = np.float32(height) / np.float32(v_edges)
        vertices = _stack(i * d_horizon, 0.0, j * d_vertical, shape)
    texcoords = _stack(j / np.float32(h_verts), 0.0, i / np.float32(v_verts), shape)

    indices = np.zeros((2 * h_verts * v_verts, 3), dtype=np.uint32)
    grid = _grid_triangles(h_edges, v_edges, v_verts, _Winding.ACROSS_ROWS)
    indices[: len(grid)] = grid

    zeros = np.zeros_like(vertices)
    return MeshData(
        vertices=vertices,
        normals=zeros,
        texcoords=texcoords,
        tangents=zeros.copy(),
        binormals=zeros.copy(),
        indices=indices,
    )


def create_pane(width, height):
    """Create a single rectangle in the xy-plane made of two triangles."""
    vertices = np.array(
        [
            [0.0, 0.0, 0.0],
            [width, 0.0, 0.0],
            [width, height, 0.0],
            [0.0, height, 0.0],
        ],
        dtype=np.float32,
    )
    indices = np.array([[0, 1, 2], [0, 2, 3]], dtype=np.uint32)
    return MeshData(vertices=vertices, indices=indices)


def create_sphere(radius, longitude_split_count, latitude_split_count):
    """Create a UV sphere centred on the origin, with poles on the y axis."""
    lon_edges = _split_count("longitude_split_count", longitude_split_count) + 1
    lat_edges = _split_count("latitude_split_count", latitude_split_count) + 1
    lon_verts = lon_edges + 1
    lat_verts = lat_edges + 1
    shape = (lon_verts, lat_verts)

    r = np.float32(radius)
    theta = _accumulate(_TWO_PI / np.float32(lon_edges), lon_verts)[:, None]
    phi = _accumulate(_PI / np.float32(lat_edges), lat_verts)[None, :]
    cos_theta, sin_theta = np.cos(theta), np.sin(theta)
    cos_phi, sin_phi = np.cos(phi), np.sin(phi)

    vertices = _stack(r * sin_theta * sin_phi, -r * cos_phi, r * cos_theta * sin_phi, shape)

    i = np.arange(lon_verts, dtype=np.float32)[:, None]
    j = np.arange(lat_verts, dtype=np.float32)[None, :]
    texcoords = _stack(i / np.float32(lat_verts), j / np.float32(lon_verts), 0.0, shape)

    tangents = _stack(r * cos_theta, 0.0, -r * sin_theta, shape)
    binormals = _stack(r * sin_theta * cos_phi, r * sin_phi, r * cos_theta * cos_phi, shape)
    normals = np.cross(tangents, binormals).astype(np.float32)

    indices = _grid_triangles(lon_edges, lat_edges, lat_verts, _Winding.ACROSS_ROWS)
    return MeshData(
        vertices=vertices,
        normals=normals,
        texcoords=texcoords,
        tangents=tangents,
        binormals=binormals,
        indices=indices,
    )


def create_torus(major_radius, minor_radius, major_split_count, minor_split_count):
    """Create a torus around the y axis.

    The major angle step is the full turn divided by ``major_split_count``
    and the triangle grid advances by one vertex less per ring than each ring
    holds.
    """
    major_split = _split_count("major_split_count", major_split_count)
    major_edges = major_split + 1
    minor_edges = _split_count("minor_split_count", minor_split_count) + 1
    major_verts = major_edges + 1
    minor_verts = minor_edges + 1
    shape = (major_verts, minor_verts)

    big_r = np.float32(major_radius)
    small_r = np.float32(minor_radius)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        d_theta = _TWO_PI / np.float32(major_split)
        theta = _accumulate(d_theta, major_verts)[:, None]
        phi = _accumulate(_TWO_PI / np.float32(minor_edges), minor_verts)[None, :]
        cos_theta, sin_theta = np.cos(theta), np.sin(theta)
        cos_phi, sin_phi = np.cos(phi), np.sin(phi)

        ring = big_r + small_r * cos_theta
        vertices = _stack(ring * cos_phi, -small_r * sin_theta, ring * sin_phi, shape)
        tangents = _stack(
            -small_r * sin_theta * cos_phi,
            -small_r * cos_theta,
            -small_r * sin_theta * sin_phi,
            shape,
        )
        binormals = _stack(-ring * sin_phi, 0.0, ring * cos_phi, shape)
        normals = np.cross(tangents, binormals).astype(np.float32)

    i = np.arange(major_verts, dtype=np.float32)[:, None]
    j = np.arange(minor_verts, dtype=np.float32)[None, :]
    texcoords = _stack(j / np.float32(minor_verts), i / np.float32(major_verts), 0.0, shape)

    indices = _grid_triangles(major_edges, minor_edges, minor_edges, _Winding.ALONG_ROWS)
    return MeshData(
        vertices=vertices,
        normals=normals,
        texcoords=texcoords,
        tangents=tangents,
        binormals=binormals,
        indices=indices,
    )


def create_circle_ring(radius, spread_length, circle_split_count, spread_split_count):
    """Create a flat ring in the xy-plane centred on the origin.

    The ring spans radially from ``radius - spread_length / 2`` to
    ``radius + spread_length / 2``.
    """
    circle_edges = _split_count("circle_split_count", circle_split_count) + 1
    spread_edges = _split_count("spread_split_count", spread_split_count) + 1
    circle_verts = circle_edges + 1
    spread_verts = spread_edges + 1
    shape = (circle_verts, spread_verts)

    spread = np.float32(spread_length)
    spread_start = np.float32(radius) - np.float32(0.5) * spread
    theta = _accumulate(_TWO_PI / np.float32(circle_edges), circle_verts)[:, None]
    distance = _accumulate(spread / np.float32(spread_edges), spread_verts) + spread_start
    distance = distance.astype(np.float32)[None, :]
    cos_theta, sin_theta = np.cos(theta), np.sin(theta)

    vertices = _stack(distance * cos_theta, distance * sin_theta, 0.0, shape)

    i = np.arange(circle_verts, dtype=np.float32)[:, None]
    j = np.arange(spread_verts, dtype=np.float32)[None, :]
    texcoords = _stack(j / np.float32(spread_verts), i / np.float32(circle_verts), 0.0, shape)

    tangents = _stack(cos_theta, sin_theta, 0.0, shape)
    binormals = _stack(-sin_theta, cos_theta, 0.0, shape)
    normals = np.cross(tangents, binormals).astype(np.float32)

    indices = _grid_triangles(circle_edges, spread_edges, spread_verts, _Winding.ALONG_ROWS)
    return MeshData(
        vertices=vertices,
        normals=normals,
        texcoords=texcoords,
        tangents=tangents,
        binormals=binormals,
        indices=indices,
    )