from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from repofetch.github import DEFAULT_API_URL, DEFAULT_TIMEOUT


@dataclass
class Config:
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    log_file: str = ""
    log_level: str = "INFO"
    table_height: int = 20

    @classmethod
    def from_env(cls) -> Config:
        load_dotenv()

        return cls(
            api_url=os.environ.get("REPOFETCH_API_URL", DEFAULT_API_URL),
            timeout=float(os.environ.get("REPOFETCH_TIMEOUT", DEFAULT_TIMEOUT)),
            log_file=os.environ.get("REPOFETCH_LOG_FILE", ""),
            log_level=os.environ.get("REPOFETCH_LOG_LEVEL", "INFO").upper(),
            table_height=int(os.environ.get("REPOFETCH_TABLE_HEIGHT", "20")),
        )
