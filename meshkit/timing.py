"""Table of GPU pass durations, as shown in the render-time overlay."""

from __future__ import annotations

import operator
from collections.abc import Sequence

from meshkit.resources import LIGHTS_NB, ElapsedTimeQuery

NANOSECONDS_PER_MILLISECOND = 1_000_000.0


def _milliseconds(nanoseconds: int) -> str:
    return f"{nanoseconds / NANOSECONDS_PER_MILLISECOND:.3f}"


def _checked_times(elapsed_times: Sequence[int]) -> list[int]:
    times = [operator.index(value) for value in elapsed_times]
    expected = ElapsedTimeQuery.count()
    if len(times) != expected:
        raise ValueError(
            f"expected {expected} elapsed times, one per query slot, got {len(times)}"
        )
    if any(value < 0 for value in times):
        raise ValueError("elapsed times must not be negative")
    return times


def pass_timing_rows(elapsed_times, lights_nb=LIGHTS_NB) -> list[tuple[str, str]]:
    """Rows of (pass name, GPU time in milliseconds) for the enabled lights.

    ``elapsed_times`` holds one duration in nanoseconds per query slot,
    indexed by :class:`ElapsedTimeQuery`. Each light contributes a header row
    with an empty time, followed by its shadow-map and accumulation rows.
    """
    times = _checked_times(elapsed_times)
    count = operator.index(lights_nb)
    if not 1 <= count <= LIGHTS_NB:
        raise ValueError(f"lights_nb must be in [1, {LIGHTS_NB}], got {count}")

    rows = [
        ("Gbuffer gen.", _milliseconds(times[ElapsedTimeQuery.GBUFFER_GENERATION]))
    ]
    for i in range(count):
        rows.append((f"Light {i}", ""))
        rows.append(
            ("  Shadow map", _milliseconds(times[ElapsedTimeQuery.shadow_map(i)]))
        )
        rows.append(
            (
                "  Light accumulation",
                _milliseconds(times[ElapsedTimeQuery.light_accumulation(i)]),
            )
        )
    rows.extend(
        [
            ("Resolve", _milliseconds(times[ElapsedTimeQuery.RESOLVE])),
            ("Cone wireframe", _milliseconds(times[ElapsedTimeQuery.CONE_WIREFRAME])),
            ("GUI", _milliseconds(times[ElapsedTimeQuery.GUI])),
            (
                "Copy to framebuffer",
                _milliseconds(times[ElapsedTimeQuery.COPY_TO_FRAMEBUFFER]),
            ),
        ]
    )
    return rows