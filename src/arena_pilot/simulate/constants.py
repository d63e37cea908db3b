"""Game constants observed in recorded data or taken from the community wiki."""

from __future__ import annotations

BOOST_DEPLETION = 100.0 / 3.0
"""Boost consumed per second while boosting."""

CAR_NORMAL_SPEED = 1410.0
"""Top speed reachable with throttle only (uu/s)."""

CAR_MAX_SPEED = 2299.98
"""Top speed reachable by boosting (uu/s)."""

CAR_ALMOST_MAX_SPEED = CAR_MAX_SPEED - 10.0
"""Stand-in threshold where boost hysteresis would be more appropriate."""

CAR_REST_Z = 17.01
"""Height of a car's origin when resting on flat ground."""

DEFAULT_BOOST = 100.0
