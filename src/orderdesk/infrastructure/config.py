"""Runtime configuration, read from ``ORDERDESK_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from orderdesk.domain.exceptions import ValidationError

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

DEFAULT_API_URL = "http://localhost:5000/api"


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    api_token: str | None = None
    timeout: float = 10.0
    max_products: int = 20
    search_limit: int = 50
    catalog_file: Path = _DATA_DIR / "catalog.json"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return Settings(
            api_url=env.get("ORDERDESK_API_URL", DEFAULT_API_URL).rstrip("/"),
            api_token=env.get("ORDERDESK_API_TOKEN") or None,
            timeout=_number(env, "ORDERDESK_TIMEOUT", 10.0, float),
            max_products=_number(env, "ORDERDESK_MAX_PRODUCTS", 20, int),
            search_limit=_number(env, "ORDERDESK_SEARCH_LIMIT", 50, int),
            catalog_file=Path(env["ORDERDESK_CATALOG_FILE"])
            if env.get("ORDERDESK_CATALOG_FILE")
            else _DATA_DIR / "catalog.json",
        )


def _number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ValidationError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {raw!r}")
    return value
