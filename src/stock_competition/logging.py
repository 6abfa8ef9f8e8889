"""Root logger setup shared by the stock-competition commands."""

from __future__ import annotations

import logging
import logging.config
import os

from stock_competition.paths import repo_file

# requests' transport and charset detection are chatty at DEBUG
NOISY_LIBRARY_LOGGERS = ("urllib3", "charset_normalizer")
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_LEVEL = "INFO"


def resolve_level(level: str | None = None) -> int:
    """Explicit level, then LOG_LEVEL, then INFO; unknown names fall back to INFO."""
    level_name = (level or os.getenv("LOG_LEVEL") or DEFAULT_LEVEL).strip().upper()
    resolved = logging.getLevelName(level_name)
    return resolved if isinstance(resolved, int) else logging.INFO


def _install_handlers(root: logging.Logger) -> None:
    ini_path = repo_file("logging.ini")
    if ini_path.is_file():
        logging.config.fileConfig(str(ini_path), disable_existing_loggers=False)
        return
    if root.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def configure_logging(level: str | None = None) -> logging.Logger:
    root = logging.getLogger()
    _install_handlers(root)
    root.setLevel(resolve_level(level))
    for name in NOISY_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.INFO, root.level))
    return root
