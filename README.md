# meshkit

Parametric mesh generation and the bookkeeping behind a deferred shading
renderer with shadow-mapped spot lights, in Python and NumPy. The package
builds geometry and does the arithmetic. It makes no graphics calls, so you
can pass its arrays to whatever rendering layer you use.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Meshes

`meshkit.mesh.MeshData` holds a mesh as NumPy arrays. `vertices` has shape
`(n, 3)`. `normals`, `texcoords`, `tangents` and `binormals` are either
`None` or of the same shape. `indices` is either `None` or an `(m, 3)`
array of `uint32` triangle indices. `drawing_mode` is a `DrawingMode`
(`TRIANGLES` by default), whose values are the OpenGL primitive constants.
On construction every array is checked and converted. A wrong shape,
mismatched lengths, negative indices or out-of-range indices raise
`ValueError`.

Its properties:

- `vertices_nb`: the number of vertices.
- `indices_nb`: the number of indices, three per triangle, or 0 when the
  mesh has no indices.
- `buffer_layout`: a list of `BufferSlice` entries (`name`, `offset`,
  `size`, `components`, `end`). The present attributes are packed one
  after another in the order vertices, normals, texcoords, tangents,
  binormals, as float32 vec3s.
- `buffer_size`: the total size of that vertex buffer in bytes.
- `index_buffer_size`: the size of the index buffer in bytes.

## Parametric shapes

`meshkit.shapes` builds tessellated meshes:

```python
from meshkit.shapes import (
    create_circle_ring, create_pane, create_quad, create_sphere, create_torus,
)

sphere = create_sphere(1.0, 16, 8)
print(sphere.vertices_nb, sphere.indices_nb, sphere.buffer_size)

torus = create_torus(2.0, 0.5, 16, 8)
ring = create_circle_ring(2.0, 1.0, 32, 4)
quad = create_quad(4.0, 2.0, 3, 1)
pane = create_pane(1.0, 1.0)
```

A split count gives the number of times an edge is split: 0 leaves one
edge, 1 gives two, and so on. Negative split counts raise `ValueError`.

- `create_sphere(radius, longitude_split_count, latitude_split_count)`:
  a UV sphere centred on the origin with its poles on the y axis. It has
  normals, texture coordinates, tangents and binormals.
- `create_torus(major_radius, minor_radius, major_split_count, minor_split_count)`:
  a torus around the y axis. The major angle step is a full turn divided
  by `major_split_count`.
- `create_circle_ring(radius, spread_length, circle_split_count, spread_split_count)`:
  a flat ring in the xy-plane. It reaches from `radius - spread_length / 2`
  to `radius + spread_length / 2`.
- `create_quad(width, height, horizontal_split_count=0, vertical_split_count=0)`:
  a grid in the xz-plane. Only positions and texture coordinates are
  filled. Normals, tangents and binormals are zero. The index array holds
  two triangles per vertex. The entries beyond the grid's triangles are
  degenerate `(0, 0, 0)`.
- `create_pane(width, height)`: a rectangle in the xy-plane made of two
  triangles. It has positions and indices only.

## Deferred shading resources

`meshkit.resources` lists the slots of the deferred pipeline as integer
enumerations:

- `Texture`: the render targets. Each has a `label`.
- `Sampler`: nearest, linear and mipmapped sampling. Each has a `label`.
- `FBO`: one framebuffer per pass. Each has a `label` and `attachments`,
  which maps `"color0"`, `"depth"` and the other attachment points to
  `Texture` members.
- `UBO`: the uniform buffers. The value is the binding point, and each
  has a `block_name` and a `label`.
- `ElapsedTimeQuery`: the GPU timer slots. `ElapsedTimeQuery.count()` gives
  the number of slots. `shadow_map(i)` and `light_accumulation(i)` give the
  slots of light `i`, and raise `IndexError` outside `[0, LIGHTS_NB)`.

`ViewProjTransforms` pairs a 4×4 view-projection matrix with its inverse.
Both default to the identity. `ViewProjTransforms.from_matrix(m)` computes
the inverse and raises `ValueError` for a singular matrix. `pack()`
returns both matrices as column-major float32 bytes, `SIZE` bytes in all.

`query_labels()` returns the debug label of each timer slot, keyed by slot.

The module also defines the scene constants `SCALE_LENGTHS`,
`SHADOWMAP_RES_X`, `SHADOWMAP_RES_Y`, `LIGHTS_NB`, `LIGHT_INTENSITY` and
`LIGHT_ANGLE_FALLOFF`.

## Lights

`meshkit.lights` provides:

- `load_cone()`: the unit light-volume cone, drawn as a `TRIANGLE_STRIP`
  of 65 vertices. Its apex is at the origin and its cap is at z = -1.
- `perspective(fovy, aspect, near, far)`: a right-handed perspective matrix
  that maps depth to [-1, 1]. It is applied as `P @ v`. A zero aspect,
  equal planes or a zero field of view raise `ValueError`.
- `light_projection()`: the projection used for every shadow map. The
  field of view is 90°, with the shadow-map aspect ratio and the
  `LIGHT_PROJECTION_NEAR_PLANE` / `LIGHT_PROJECTION_FAR_PLANE` planes.
- `random_light_colors(count=LIGHTS_NB, rng=None)`: one RGB row per light,
  every channel in [0.5, 1]. `rng` is a NumPy `Generator`.
- `light_rotation_angle(light_index, seconds)`: the angle of a light around
  the vertical axis. The lights start evenly spread and turn at
  `LIGHT_ROTATION_SPEED` radians per second.

## Timing

`meshkit.timing.pass_timing_rows(elapsed_times, lights_nb=LIGHTS_NB)` takes
one duration in nanoseconds per `ElapsedTimeQuery` slot. It returns
`(pass name, milliseconds)` rows with the times formatted to three
decimals. Each enabled light adds a header row with an empty time, then
its shadow-map and accumulation rows.

```python
from meshkit.resources import ElapsedTimeQuery
from meshkit.timing import pass_timing_rows

times = [1_500_000] * ElapsedTimeQuery.count()
for name, ms in pass_timing_rows(times, lights_nb=2):
    print(f"{name:<22}{ms}")
```

A wrong number of times, a negative time, or `lights_nb` outside
`[1, LIGHTS_NB]` raises `ValueError`.

## What the package does not do

meshkit opens no window and has no render loop. It compiles no shaders,
loads no model files and draws nothing on screen. It provides the geometry,
matrices, slot layouts and timing table that such a renderer needs.