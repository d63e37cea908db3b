"""Longitudinal physics: constants, lookup tables and the Car1D simulator.

Public API
----------
Car1D                - table-driven straight-line simulator
LookupTables         - the three regime tables (coast / throttle / boost)
RegimeTable          - one regime's (time, speed) samples and reversed twins
load_tables          - read tables from a directory of CSVs
default_tables       - process-wide bundled tables (cached)
lookup_nearest_lower - the single table-lookup primitive
"""

from arena_pilot.simulate.car1d import Car1D
from arena_pilot.simulate.tables import (
    LookupTables,
    Regime,
    RegimeTable,
    default_tables,
    load_tables,
    lookup_nearest_lower,
)

__all__ = [
    "Car1D",
    "LookupTables",
    "Regime",
    "RegimeTable",
    "default_tables",
    "load_tables",
    "lookup_nearest_lower",
]
