"""App-wide settings, read from the environment with hardcoded defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

DEFAULT_CORS_ORIGINS: Tuple[str, ...] = (
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
)


def _split_origins(raw: str) -> Tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


@dataclass(frozen=True)
class Settings:
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)
    log_level: str = "INFO"
    port: int = 5000
    max_scenarios: int = 12

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from NZ_INVEST_* variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()
        origins = env.get("NZ_INVEST_CORS_ORIGINS")
        return cls(
            cors_origins=_split_origins(origins) if origins else defaults.cors_origins,
            log_level=env.get("NZ_INVEST_LOG_LEVEL", defaults.log_level).upper(),
            port=int(env.get("NZ_INVEST_PORT", defaults.port)),
            max_scenarios=int(env.get("NZ_INVEST_MAX_SCENARIOS", defaults.max_scenarios)),
        )

    def as_flask_config(self) -> Dict[str, Any]:
        return {
            "CORS_ORIGINS": list(self.cors_origins),
            "LOG_LEVEL": self.log_level,
            "PORT": self.port,
            "MAX_SCENARIOS": self.max_scenarios,
        }
