import pytest

from meshkit.resources import LIGHTS_NB, ElapsedTimeQuery
from meshkit.timing import pass_timing_rows


def _distinct_times():
    # Each slot gets a different whole number of milliseconds, in nanoseconds.
    return [(slot + 1) * 1_000_000 for slot in range(ElapsedTimeQuery.count())]


def test_row_count_depends_on_lights():
    times = _distinct_times()
    for lights in range(1, LIGHTS_NB + 1):
        rows = pass_timing_rows(times, lights)
        assert len(rows) == 1 + 3 * lights + 4


def test_labels_in_display_order():
    rows = pass_timing_rows(_distinct_times(), 2)
    labels = [label for label, _ in rows]
    assert labels == [
        "Gbuffer gen.",
        "Light 0",
        "  Shadow map",
        "  Light accumulation",
        "Light 1",
        "  Shadow map",
        "  Light accumulation",
        "Resolve",
        "Cone wireframe",
        "GUI",
        "Copy to framebuffer",
    ]


def test_light_header_rows_have_empty_time():
    rows = pass_timing_rows(_distinct_times(), LIGHTS_NB)
    headers = [text for label, text in rows if label.startswith("Light ")]
    assert headers == [""] * LIGHTS_NB


def test_values_come_from_matching_slots():
    times = _distinct_times()
    rows = dict(pass_timing_rows(times, 1))
    assert float(rows["Gbuffer gen."]) * 1_000_000 == pytest.approx(
        times[ElapsedTimeQuery.GBUFFER_GENERATION]
    )
    assert float(rows["Resolve"]) * 1_000_000 == pytest.approx(
        times[ElapsedTimeQuery.RESOLVE]
    )
    assert float(rows["GUI"]) * 1_000_000 == pytest.approx(times[ElapsedTimeQuery.GUI])
    assert float(rows["Copy to framebuffer"]) * 1_000_000 == pytest.approx(
        times[ElapsedTimeQuery.COPY_TO_FRAMEBUFFER]
    )


def test_per_light_values_use_per_light_slots():
    times = _distinct_times()
    rows = pass_timing_rows(times, LIGHTS_NB)
    shadow = [float(text) for label, text in rows if label == "  Shadow map"]
    accumulation = [
        float(text) for label, text in rows if label == "  Light accumulation"
    ]
    for i in range(LIGHTS_NB):
        assert shadow[i] * 1_000_000 == pytest.approx(
            times[ElapsedTimeQuery.shadow_map(i)]
        )
        assert accumulation[i] * 1_000_000 == pytest.approx(
            times[ElapsedTimeQuery.light_accumulation(i)]
        )


def test_three_decimal_formatting():
    times = [0] * ElapsedTimeQuery.count()
    times[ElapsedTimeQuery.GBUFFER_GENERATION] = 1_000_000
    rows = dict(pass_timing_rows(times, 1))
    assert rows["Gbuffer gen."] == "1.000"
    assert rows["Resolve"] == "0.000"


def test_every_time_has_three_decimals():
    rows = pass_timing_rows(_distinct_times(), LIGHTS_NB)
    for _, text in rows:
        if text:
            assert len(text.split(".")[1]) == 3


@pytest.mark.parametrize("lights", [0, -1, LIGHTS_NB + 1])
def test_invalid_light_count(lights):
    with pytest.raises(ValueError):
        pass_timing_rows(_distinct_times(), lights)


def test_wrong_number_of_times():
    with pytest.raises(ValueError):
        pass_timing_rows(_distinct_times()[:-1], 1)


def test_negative_time_rejected():
    times = _distinct_times()
    times[ElapsedTimeQuery.GUI] = -5
    with pytest.raises(ValueError):
        pass_timing_rows(times, 1)


def test_non_integer_time_rejected():
    times = _distinct_times()
    times[0] = 1.5
    with pytest.raises(TypeError):
        pass_timing_rows(times, 1)