"""Fixed-step sampling of survey log entries.

Survey logs are recorded far more densely than the reports need. This module
walks the entries once, in log order, and keeps one entry per `step_m` meters
of odometer, plus a coarser geoposition trace taken from every
`geoposition_every`-th kept sample.

Selection policy:
- A running `expected` odometer value starts at 0.
- An entry is kept only when its odometer equals `expected` exactly; then
  `expected` advances by one step.
- Any other entry (duplicate, out of order, or jumping past `expected`) is
  ignored and `expected` stays put, so a stray reading never shifts later matches.
"""

from __future__ import annotations

# dataclass keeps the sampling policy in one immutable, typed value.
from dataclasses import dataclass
# Iterable lets callers pass lists or generators of parsed entries.
from typing import Iterable

from roadsurvey.ingestion.schemas import GeoMap, RawEntry, SampleMap, SampleRecord
from roadsurvey.settings import AppConfig, get_config


DEFAULT_STEP_M = 5
DEFAULT_GEOPOSITION_EVERY = 4
DEFAULT_LABEL_WIDTH = 5


@dataclass(frozen=True)
class SamplingSpec:
    """Parameters of the fixed-step sampling policy."""

    # Distance between two kept samples, in odometer units (meters).
    step_m: int = DEFAULT_STEP_M
    # Every n-th kept sample (0-based index multiple of n) also goes to the geoposition trace.
    geoposition_every: int = DEFAULT_GEOPOSITION_EVERY
    # Width of the zero-padded position label used as the sample key.
    label_width: int = DEFAULT_LABEL_WIDTH


def build_sampling_spec(config: AppConfig | None = None) -> SamplingSpec:
    """Build a SamplingSpec from the `sampling` section of the app config."""

    cfg = config or get_config()
    return SamplingSpec(
        step_m=int(cfg.sampling.step_m),
        geoposition_every=int(cfg.sampling.geoposition_every),
        label_width=int(cfg.sampling.label_width),
    )


def position_label(position: int, width: int = DEFAULT_LABEL_WIDTH) -> str:
    """Zero-pad a position to `width` digits ("00035"); wider values are kept whole."""

    return str(int(position)).zfill(width)


def sample(
    entries: Iterable[RawEntry],
    step: int = DEFAULT_STEP_M,
    *,
    geoposition_every: int = DEFAULT_GEOPOSITION_EVERY,
    label_width: int = DEFAULT_LABEL_WIDTH,
) -> tuple[SampleMap, GeoMap]:
    """Select entries at a fixed odometer step.

    Returns:
    - the sample map, keyed by position label, in selection order;
    - the geoposition map, the subset of sample keys whose 0-based sample index
      is a multiple of `geoposition_every`.

    Both maps are empty when no entry ever lands on the first expected value (0).
    """

    # A non-positive step would never advance `expected` and would select at most one entry.
    if step <= 0:
        raise ValueError("step must be > 0")
    if geoposition_every <= 0:
        raise ValueError("geoposition_every must be > 0")

    samples: SampleMap = {}
    geopositions: GeoMap = {}
    expected = 0

    for entry in entries:
        # Skip without advancing; the scan waits for `expected` to show up.
        if entry.odometer != expected:
            continue

        label = position_label(expected, label_width)
        # Index of this sample among the ones emitted so far (0-based).
        sample_index = len(samples)
        samples[label] = SampleRecord(
            position=entry.position,
            temperature=entry.temperature,
            altitude=entry.altitude,
            timestamp=entry.timestamp,
            odometer=entry.odometer,
        )
        if sample_index % geoposition_every == 0:
            geopositions[label] = entry.position

        expected += step

    return samples, geopositions


def sample_with_spec(entries: Iterable[RawEntry], spec: SamplingSpec) -> tuple[SampleMap, GeoMap]:
    return sample(
        entries,
        spec.step_m,
        geoposition_every=spec.geoposition_every,
        label_width=spec.label_width,
    )
