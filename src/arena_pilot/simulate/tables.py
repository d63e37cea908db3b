"""Empirical speed-vs-time lookup tables for the longitudinal simulator.

Each regime (coast, throttle, boost) is a run of ``(time, speed)`` samples
recorded from rest (throttle/boost) or from top speed (coast), sorted
ascending by time. The reverse-ordered twins are derived at load time so that
the coast regime, whose speeds *decrease* over time, can still be searched by
speed with an ascending key.

Tables are loaded once per process and never mutated; every array is marked
read-only.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path

import numpy as np

_logger = logging.getLogger(__name__)


class Regime(enum.Enum):
    COAST = "coast"
    THROTTLE = "throttle"
    BOOST = "boost"


def lookup_nearest_lower(xs: np.ndarray, ys: np.ndarray, x: float) -> float:
    """Return ``ys[i]`` for the largest ``xs[i]`` not exceeding *x*.

    *xs* must be sorted ascending. Queries below the first key map to index 0.

    NOTE: no interpolation between samples is performed. Tuned thresholds
    elsewhere were calibrated against this lower-sample bias; swap in true
    interpolation here only, and only deliberately.
    """
    idx = int(np.searchsorted(xs, x, side="right")) - 1
    return float(ys[max(idx, 0)])


@dataclass(frozen=True)
class RegimeTable:
    """Chronological ``(time, speed)`` samples plus their reversed twins."""

    time: np.ndarray
    speed: np.ndarray
    time_rev: np.ndarray
    speed_rev: np.ndarray

    @classmethod
    def from_samples(cls, time, speed) -> RegimeTable:
        """Build a table from chronological samples.

        Raises:
            ValueError: If the arrays are empty, differ in length, or *time*
                is not sorted ascending.
        """
        t = np.array(time, dtype=float)
        v = np.array(speed, dtype=float)
        if t.ndim != 1 or t.size == 0:
            raise ValueError("Lookup table needs at least one sample")
        if t.shape != v.shape:
            raise ValueError(f"time/speed length mismatch: {t.size} != {v.size}")
        if np.any(np.diff(t) < 0.0):
            raise ValueError("Lookup table times must be sorted ascending")
        arrays = [t, v, t[::-1].copy(), v[::-1].copy()]
        for arr in arrays:
            arr.flags.writeable = False
        return cls(*arrays)

    def __len__(self) -> int:
        return int(self.time.size)


@dataclass(frozen=True)
class LookupTables:
    """The three regime tables, injected into every :class:`Car1D`."""

    coast: RegimeTable
    throttle: RegimeTable
    boost: RegimeTable

    def regime(self, regime: Regime) -> RegimeTable:
        return getattr(self, regime.value)


def _read_csv(source) -> RegimeTable:
    with source.open("r", encoding="utf-8") as fh:
        data = np.loadtxt(fh, delimiter=",", skiprows=1, ndmin=2)
    return RegimeTable.from_samples(data[:, 0], data[:, 1])


def load_tables(directory: str | Path | None = None) -> LookupTables:
    """Load ``coast.csv``, ``throttle.csv`` and ``boost.csv``.

    Args:
        directory: Folder holding the CSVs. Defaults to the tables bundled
            with the package.

    Raises:
        FileNotFoundError: If a regime file is missing.
        ValueError: If a file is malformed or unsorted.
    """
    if directory is None:
        root = resources.files("arena_pilot.simulate").joinpath("data")
    else:
        root = Path(directory)

    loaded: dict[str, RegimeTable] = {}
    for regime in Regime:
        loaded[regime.value] = _read_csv(root.joinpath(f"{regime.value}.csv"))
    _logger.debug(
        "Loaded lookup tables from %s (coast=%d, throttle=%d, boost=%d samples)",
        root,
        len(loaded["coast"]),
        len(loaded["throttle"]),
        len(loaded["boost"]),
    )
    return LookupTables(**loaded)


@lru_cache(maxsize=None)
def default_tables() -> LookupTables:
    """Process-wide tables bundled with the package, loaded on first use."""
    return load_tables()
