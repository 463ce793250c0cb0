"""
Connection settings for a nedis client.

Only ``host`` and ``port`` matter to most callers; anything left out falls
back to the defaults, and an empty mapping behaves like no config at all.
"""

from __future__ import annotations

import os
from typing import Any, Mapping

from dotenv import load_dotenv
from pydantic import BaseModel

ENV_PREFIX = "NEDIS_"


class NedisConfig(BaseModel):
    host: str = "localhost"
    port: int = 6379
    db: int = 0
    validate_updates: bool = True  # re-run the schema on merged update payloads

    model_config = {"frozen": True, "extra": "forbid"}

    @classmethod
    def coerce(cls, value: "NedisConfig | Mapping[str, Any] | None") -> "NedisConfig":
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        return cls.model_validate(dict(value))

    @classmethod
    def from_env(
        cls, dotenv_path: str | os.PathLike | None = None, **overrides: Any
    ) -> "NedisConfig":
        """
        Build a config from ``NEDIS_*`` environment variables.

        A ``.env`` file is loaded first (without overriding variables that are
        already set); explicit keyword overrides win over both.
        """
        load_dotenv(dotenv_path)
        values: dict[str, Any] = {}
        for field in cls.model_fields:
            raw = os.environ.get(ENV_PREFIX + field.upper())
            if raw is not None and raw != "":
                values[field] = raw
        values.update(overrides)
        return cls.model_validate(values)

    def redis_kwargs(self) -> dict[str, Any]:
        return {"host": self.host, "port": self.port, "db": self.db}
