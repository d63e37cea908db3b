"""Per-tick execution context handed to every behavior."""

from __future__ import annotations

import logging

from arena_pilot.world.models import CarInfo, WorldSnapshot

_logger = logging.getLogger(__name__)


class DebugLog:
    """Scratch channel collecting ``(source, message)`` pairs for one tick.

    Every entry is mirrored to the module logger at ``DEBUG`` level.
    """

    def __init__(self) -> None:
        self.entries: list[tuple[str, str]] = []

    def log(self, source: str, message: str) -> None:
        self.entries.append((source, message))
        _logger.debug("%s: %s", source, message)

    def messages(self, source: str | None = None) -> list[str]:
        """Return logged messages, optionally only those from *source*."""
        return [m for s, m in self.entries if source is None or s == source]

    def clear(self) -> None:
        self.entries.clear()


class Context:
    """Mutable wrapper around one tick's snapshot.

    Args:
        snapshot: The world as of this tick.
        player_index: Index of the controlled car in ``snapshot.cars``.
        debug: Debug channel; a fresh one is created when omitted.
    """

    def __init__(
        self,
        snapshot: WorldSnapshot,
        player_index: int = 0,
        debug: DebugLog | None = None,
    ) -> None:
        if not 0 <= player_index < len(snapshot.cars):
            raise IndexError(f"No car at index {player_index} in snapshot")
        self.snapshot = snapshot
        self.player_index = player_index
        self.debug = debug if debug is not None else DebugLog()

    def me(self) -> CarInfo:
        return self.snapshot.cars[self.player_index]

    @property
    def time(self) -> float:
        return self.snapshot.game.time_seconds
