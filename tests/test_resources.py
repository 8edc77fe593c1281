import numpy as np
import pytest

from meshkit.resources import (
    FBO,
    LIGHTS_NB,
    UBO,
    ElapsedTimeQuery,
    Sampler,
    Texture,
    ViewProjTransforms,
    query_labels,
)


def test_query_slots_follow_per_light_blocks():
    assert ElapsedTimeQuery.LIGHT0_ACCUMULATION == ElapsedTimeQuery.SHADOW_MAP0_GENERATION + LIGHTS_NB
    assert ElapsedTimeQuery.RESOLVE == ElapsedTimeQuery.LIGHT0_ACCUMULATION + LIGHTS_NB
    assert ElapsedTimeQuery.count() == ElapsedTimeQuery.COPY_TO_FRAMEBUFFER + 1


def test_query_slots_are_distinct_and_cover_range():
    slots = [ElapsedTimeQuery.GBUFFER_GENERATION]
    for i in range(LIGHTS_NB):
        slots.append(ElapsedTimeQuery.shadow_map(i))
        slots.append(ElapsedTimeQuery.light_accumulation(i))
    slots += [
        ElapsedTimeQuery.RESOLVE,
        ElapsedTimeQuery.CONE_WIREFRAME,
        ElapsedTimeQuery.GUI,
        ElapsedTimeQuery.COPY_TO_FRAMEBUFFER,
    ]
    assert sorted(int(s) for s in slots) == list(range(ElapsedTimeQuery.count()))


def test_light_slot_out_of_range():
    with pytest.raises(IndexError):
        ElapsedTimeQuery.shadow_map(LIGHTS_NB)
    with pytest.raises(IndexError):
        ElapsedTimeQuery.light_accumulation(-1)


def test_query_labels_values():
    labels = query_labels()
    assert labels[ElapsedTimeQuery.GBUFFER_GENERATION] == "GBuffer generation"
    assert labels[ElapsedTimeQuery.light_accumulation(0)] == "Light0 accumulation"
    assert labels[ElapsedTimeQuery.shadow_map(3)] == "Shadow map 3 generation"
    assert labels[ElapsedTimeQuery.GUI] == "GUI"
    assert int(ElapsedTimeQuery.COPY_TO_FRAMEBUFFER) not in labels
    assert list(labels) == sorted(labels)


def test_enum_labels_and_attachments():
    normals = Texture(Texture.GBUFFER_WORLD_SPACE_NORMAL)
    nearest = Sampler(Sampler.NEAREST)
    light_ubo = UBO(UBO.LIGHT_VIEW_PROJ_TRANSFORMS)
    shadow_fbo = FBO(FBO.SHADOW_MAP)
    resolve_fbo = FBO(FBO.RESOLVE)
    assert normals.label == "GBuffer normals"
    assert nearest.label == "Nearest"
    assert light_ubo.block_name == "LightViewProjTransforms"
    assert shadow_fbo.attachments == {"depth": Texture.SHADOW_MAP}
    assert resolve_fbo.attachments["color0"] is Texture.RESULT


def test_default_transforms_are_identity():
    transforms = ViewProjTransforms()
    assert np.array_equal(transforms.view_projection, np.identity(4))
    assert np.array_equal(transforms.view_projection_inverse, np.identity(4))


def test_from_matrix_inverse():
    matrix = np.array(
        [
            [2.0, 0.0, 0.0, 1.0],
            [0.0, 3.0, 0.0, 2.0],
            [0.0, 0.0, 4.0, 3.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    transforms = ViewProjTransforms.from_matrix(matrix)
    product = transforms.view_projection @ transforms.view_projection_inverse
    assert np.allclose(product, np.identity(4), atol=1e-6)


def test_from_matrix_singular_raises():
    with pytest.raises(ValueError):
        ViewProjTransforms.from_matrix(np.zeros((4, 4)))


def test_bad_shape_raises():
    with pytest.raises(ValueError):
        ViewProjTransforms.from_matrix(np.identity(3))


def test_pack_round_trip():
    matrix = np.arange(16, dtype=np.float32).reshape(4, 4) + np.identity(4, dtype=np.float32) * 20
    transforms = ViewProjTransforms.from_matrix(matrix)
    data = transforms.pack()
    assert len(data) == ViewProjTransforms.SIZE
    values = np.frombuffer(data, dtype=np.float32)
    first = values[:16].reshape(4, 4, order="F")
    second = values[16:].reshape(4, 4, order="F")
    assert np.array_equal(first, transforms.view_projection)
    assert np.array_equal(second, transforms.view_projection_inverse)