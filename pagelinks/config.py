from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _bool_env(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Paging configuration derived from environment variables."""

    PAGE_PARAMETER: str = os.getenv("PAGE_PARAMETER", "page")
    SIZE_PARAMETER: str = os.getenv("SIZE_PARAMETER", "size")
    SORT_PARAMETER: str = os.getenv("SORT_PARAMETER", "sort")
    ONE_INDEXED_PARAMETERS: bool = _bool_env("ONE_INDEXED_PARAMETERS")
    MAX_PAGE_SIZE: int = _int_env("MAX_PAGE_SIZE", 2000)
    DEFAULT_PAGE_SIZE: int = _int_env("DEFAULT_PAGE_SIZE", 20)
    PARAMETER_PREFIX: str = os.getenv("PARAMETER_PREFIX", "")
    QUALIFIER_DELIMITER: str = os.getenv("QUALIFIER_DELIMITER", "_")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    DEBUG: bool = os.getenv("FLASK_DEBUG", "0") == "1"

    def paging_settings(self) -> dict:
        return {
            "page_parameter": self.PAGE_PARAMETER,
            "size_parameter": self.SIZE_PARAMETER,
            "sort_parameter": self.SORT_PARAMETER,
            "one_indexed_parameters": self.ONE_INDEXED_PARAMETERS,
            "max_page_size": self.MAX_PAGE_SIZE,
            "default_page_size": self.DEFAULT_PAGE_SIZE,
            "prefix": self.PARAMETER_PREFIX,
            "qualifier_delimiter": self.QUALIFIER_DELIMITER,
        }


config = Config()
