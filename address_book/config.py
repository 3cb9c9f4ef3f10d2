"""Configuration helpers for the address book CLI."""
from __future__ import annotations

import codecs
import logging
import os
from dataclasses import dataclass
from pathlib import Path


class ConfigError(RuntimeError):
    """Raised when an environment setting cannot be used."""


@dataclass(slots=True)
class Settings:
    """Runtime configuration for the CLI."""

    data_dir: Path
    default_file: str = "contacts.csv"
    encoding: str = "utf-8"
    log_level: str = "WARNING"


def parse_log_level(value: str) -> str:
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Unknown log level: {value}")
    return level


def load_settings() -> Settings:
    """Load settings from ``ADDRESS_BOOK_*`` environment variables.

    Raises:
        ConfigError: if the encoding or log level is not recognised.
    """

    data_dir = Path(os.getenv("ADDRESS_BOOK_DATA_DIR", ".")).expanduser()
    default_file = os.getenv("ADDRESS_BOOK_FILE", "contacts.csv").strip() or "contacts.csv"

    encoding = os.getenv("ADDRESS_BOOK_ENCODING", "utf-8").strip()
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise ConfigError(f"Unknown encoding: {encoding}")

    log_level = parse_log_level(os.getenv("ADDRESS_BOOK_LOG_LEVEL", "WARNING"))

    return Settings(
        data_dir=data_dir,
        default_file=default_file,
        encoding=encoding,
        log_level=log_level,
    )
