"""stock_competition configuration helpers."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from stock_competition.paths import repo_file

DEFAULT_TIMEOUT_SEC = 15
DEFAULT_ALIASES_FILE = "aliases.yaml"


@dataclass(frozen=True)
class Settings:
    sheet_url: str | None = None
    timeout_sec: int = DEFAULT_TIMEOUT_SEC
    aliases_file: str = DEFAULT_ALIASES_FILE


def load_json_config(path: Path) -> dict[str, Any]:
    """Read a JSON settings file; a missing file is an empty config."""
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    return data


def _coerce_timeout(value: Any) -> int:
    try:
        timeout = int(value)
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT_SEC
    return timeout if timeout > 0 else DEFAULT_TIMEOUT_SEC


def resolve_settings(config_data: dict[str, Any]) -> Settings:
    sheet_url = str(config_data.get("sheet_url") or "").strip() or None
    return Settings(
        sheet_url=sheet_url,
        timeout_sec=_coerce_timeout(config_data.get("timeout_sec", DEFAULT_TIMEOUT_SEC)),
        aliases_file=str(config_data.get("aliases_file") or DEFAULT_ALIASES_FILE),
    )


def load_settings() -> Settings:
    config_data = load_json_config(repo_file("config.json"))
    settings = resolve_settings(config_data)
    return Settings(
        sheet_url=os.getenv("SHEET_URL") or settings.sheet_url,
        timeout_sec=_coerce_timeout(os.getenv("SHEET_TIMEOUT_SEC") or settings.timeout_sec),
        aliases_file=os.getenv("ALIASES_FILE") or settings.aliases_file,
    )


def apply_environment_defaults(settings: Settings) -> None:
    if settings.sheet_url and not os.getenv("SHEET_URL"):
        os.environ["SHEET_URL"] = settings.sheet_url
    if not os.getenv("SHEET_TIMEOUT_SEC"):
        os.environ["SHEET_TIMEOUT_SEC"] = str(settings.timeout_sec)
    if not os.getenv("ALIASES_FILE"):
        os.environ["ALIASES_FILE"] = settings.aliases_file


def load_and_apply_settings() -> Settings:
    settings = load_settings()
    apply_environment_defaults(settings)
    return settings


def configure_runtime() -> Settings:
    load_dotenv()
    return load_and_apply_settings()
