"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Resolve the default data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_DATA_DIR = PROJECT_ROOT / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "INFO"
    log_dir: Path | None = None

    @staticmethod
    def from_env() -> Settings:
        """Build settings from ``SMS_DATA_DIR``, ``SMS_LOG_LEVEL`` and ``SMS_LOG_DIR``."""
        data_dir = os.environ.get("SMS_DATA_DIR")
        log_dir = os.environ.get("SMS_LOG_DIR")
        return Settings(
            data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
            log_level=os.environ.get("SMS_LOG_LEVEL", "INFO").upper(),
            log_dir=Path(log_dir) if log_dir else None,
        )

    def with_data_dir(self, data_dir: Path | None) -> Settings:
        if data_dir is None:
            return self
        return Settings(data_dir=data_dir, log_level=self.log_level, log_dir=self.log_dir)
