"""Runtime settings, read from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

STORE_BACKENDS = ("json", "memory")

_LEVEL_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    store_backend: str = "json"
    data_dir: Path = Path("data")
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "DEBUG"
    log_dir: Path | None = None

    @property
    def is_production(self) -> bool:
        return self.environment in ("production", "staging")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        environment = (
            env.get("STOREFRONT_ENV") or env.get("ENVIRONMENT") or "development"
        ).lower()

        store_backend = env.get("STOREFRONT_STORE", "json").lower()
        if store_backend not in STORE_BACKENDS:
            raise ValueError(
                f"STOREFRONT_STORE must be one of {', '.join(STORE_BACKENDS)}, "
                f"got {store_backend!r}"
            )

        raw_port = env.get("STOREFRONT_PORT", "8080")
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"STOREFRONT_PORT must be an integer, got {raw_port!r}") from None

        log_dir = env.get("STOREFRONT_LOG_DIR")

        return cls(
            environment=environment,
            store_backend=store_backend,
            data_dir=Path(env.get("STOREFRONT_DATA_DIR", "data")),
            host=env.get("STOREFRONT_HOST", "0.0.0.0"),
            port=port,
            log_level=env.get("LOG_LEVEL", _LEVEL_BY_ENV.get(environment, "INFO")).upper(),
            log_dir=Path(log_dir) if log_dir else None,
        )
