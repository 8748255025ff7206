# Application configuration with PENSIONFLOW_* environment overrides

from __future__ import annotations

import os
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from pensionflow import __version__

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    app_name: str = "PensionFlow"
    version: str = __version__
    cors_origins: List[str] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    # built-in regional wage table (.xlsx or .csv), optional
    wage_table_path: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Build a config, letting PENSIONFLOW_* variables override the defaults.

        PENSIONFLOW_CORS_ORIGINS is a comma-separated list of origins.
        """
        env = os.environ if environ is None else environ

        overrides: Dict[str, object] = {}
        if env.get("PENSIONFLOW_CORS_ORIGINS"):
            overrides["cors_origins"] = [
                origin.strip()
                for origin in env["PENSIONFLOW_CORS_ORIGINS"].split(",")
                if origin.strip()
            ]
        if env.get("PENSIONFLOW_WAGE_TABLE"):
            overrides["wage_table_path"] = env["PENSIONFLOW_WAGE_TABLE"]
        if env.get("PENSIONFLOW_LOG_LEVEL"):
            overrides["log_level"] = env["PENSIONFLOW_LOG_LEVEL"].upper()

        return cls(**overrides)
