"""Locate the project checkout so side files (aliases.yaml, logging.ini, config.json) resolve from any cwd."""

from __future__ import annotations

import functools
from pathlib import Path

ROOT_MARKERS = ("pyproject.toml", ".git")


def find_repo_root(start: Path | None = None) -> Path:
    current = (start or Path(__file__).resolve()).resolve()
    if current.is_file():
        current = current.parent

    for candidate in (current, *current.parents):
        if any((candidate / marker).exists() for marker in ROOT_MARKERS):
            return candidate
    raise RuntimeError(f"No {' or '.join(ROOT_MARKERS)} found above {current}")


@functools.lru_cache(maxsize=1)
def repo_root() -> Path:
    return find_repo_root(Path(__file__).resolve())


def repo_file(*parts: str) -> Path:
    return repo_root().joinpath(*parts)


def resolve_repo_path(path: str | Path) -> Path:
    """Absolute paths pass through; relative ones are taken from the checkout root."""
    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return candidate
    return repo_file(*candidate.parts)
