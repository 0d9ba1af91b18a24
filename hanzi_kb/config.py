from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .lexical import DEFAULT_COMMON_WORDS_LIMIT

# Source file names inside DATA_DIR
CEDICT_FILE = "cedict_ts.u8"
CEDICT_JSON_FILE = "cc-cedict.json"
HANZIDB_FILE = "hanzidb-formatted.json"
RADICALS_FILE = "radicals.json"
LEXICAL_FILE = "cldb-small.csv"
RECOMMENDED_TERMS_FILE = "recommended-search-terms.en.json"

DEFAULT_STARTUP_TIMEOUT_S = 120.0

# Local dev. For production, set CORS_ORIGINS to your site origins.
DEFAULT_CORS_ORIGINS = [
    "http://localhost",
    "http://localhost:3000",
    "http://127.0.0.1",
    "http://127.0.0.1:3000",
]


def _parse_csv_env(name: str) -> list[str]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return []
    return [x.strip() for x in raw.split(",") if x.strip()]


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    common_words_limit: int = DEFAULT_COMMON_WORDS_LIMIT
    startup_timeout_s: float = DEFAULT_STARTUP_TIMEOUT_S
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        settings = cls(
            data_dir=Path(os.getenv("DATA_DIR", "data")).resolve(),
            common_words_limit=_int_env("COMMON_WORDS_LIMIT", DEFAULT_COMMON_WORDS_LIMIT),
            startup_timeout_s=_float_env("STARTUP_TIMEOUT_S", DEFAULT_STARTUP_TIMEOUT_S),
            cors_origins=_parse_csv_env("CORS_ORIGINS") or list(DEFAULT_CORS_ORIGINS),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )
        if settings.common_words_limit < 0:
            raise ValueError("COMMON_WORDS_LIMIT must be >= 0")
        if settings.startup_timeout_s <= 0:
            raise ValueError("STARTUP_TIMEOUT_S must be > 0")
        return settings

    @property
    def cedict_path(self) -> Path:
        return self.data_dir / CEDICT_FILE

    @property
    def cedict_json_path(self) -> Path:
        return self.data_dir / CEDICT_JSON_FILE

    @property
    def hanzidb_path(self) -> Path:
        return self.data_dir / HANZIDB_FILE

    @property
    def radicals_path(self) -> Path:
        return self.data_dir / RADICALS_FILE

    @property
    def lexical_path(self) -> Path:
        return self.data_dir / LEXICAL_FILE

    @property
    def recommended_terms_path(self) -> Path:
        return self.data_dir / RECOMMENDED_TERMS_FILE
