"""Environment-driven runtime settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_OUTPUT_DIR = "output"
DEFAULT_PREVIEW_ROWS = 10
CSV_ENCODINGS: tuple[str, ...] = ("utf8", "utf8-lossy")
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_preview_rows(raw: str) -> int:
    try:
        rows = int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid FUNNEL_PREVIEW_ROWS: {raw}") from exc
    if rows < 0:
        raise ValueError(f"FUNNEL_PREVIEW_ROWS must be >= 0, got {rows}")
    return rows


def _parse_choice(name: str, raw: str, choices: tuple[str, ...]) -> str:
    if raw not in choices:
        raise ValueError(f"{name} must be one of {list(choices)}, got {raw!r}")
    return raw


@dataclass(frozen=True)
class Settings:
    output_dir: Path
    preview_rows: int
    csv_encoding: str
    log_level: str

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            output_dir=Path(env.get("FUNNEL_OUTPUT_DIR", DEFAULT_OUTPUT_DIR) or DEFAULT_OUTPUT_DIR),
            preview_rows=_parse_preview_rows(env.get("FUNNEL_PREVIEW_ROWS", str(DEFAULT_PREVIEW_ROWS))),
            csv_encoding=_parse_choice(
                "FUNNEL_CSV_ENCODING",
                env.get("FUNNEL_CSV_ENCODING", "utf8"),
                CSV_ENCODINGS,
            ),
            log_level=_parse_choice(
                "FUNNEL_LOG_LEVEL",
                env.get("FUNNEL_LOG_LEVEL", "INFO").upper(),
                LOG_LEVELS,
            ),
        )
