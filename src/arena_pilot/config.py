"""Runtime settings read from the environment.

Entry points call ``dotenv.load_dotenv()`` before :func:`load_settings`, so a
local ``.env`` file can supply any of the ``ARENA_PILOT_*`` variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from arena_pilot.behavior.runner import DEFAULT_MAX_TAIL_CALLS
from arena_pilot.simulate.tables import LookupTables, default_tables, load_tables

ENV_PREFIX = "ARENA_PILOT_"


class PilotSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    tick_rate: int = Field(default=120, gt=0)
    max_tail_calls: int = Field(default=DEFAULT_MAX_TAIL_CALLS, ge=1)
    tables_dir: Path | None = None
    log_level: str = "INFO"

    def tables(self) -> LookupTables:
        """Lookup tables from ``tables_dir``, or the bundled ones."""
        if self.tables_dir is None:
            return default_tables()
        return load_tables(self.tables_dir)


def load_settings(environ: Mapping[str, str] | None = None) -> PilotSettings:
    """Build :class:`PilotSettings` from ``ARENA_PILOT_*`` variables.

    Unset variables keep their defaults.

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value.
    """
    env = os.environ if environ is None else environ
    values: dict[str, str] = {}
    for field in PilotSettings.model_fields:
        raw = env.get(ENV_PREFIX + field.upper())
        if raw is not None and raw != "":
            values[field] = raw
    if "log_level" in values:
        values["log_level"] = values["log_level"].upper()
    return PilotSettings.model_validate(values)
