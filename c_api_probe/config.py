"""
Probe configuration
"""
import tempfile
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ProbeSettings(BaseSettings):
    """Settings for the default probe. Read from C_API_PROBE_* env vars or .env."""

    model_config = SettingsConfigDict(
        env_prefix="C_API_PROBE_",
        env_file=".env",
        extra="ignore",
        case_sensitive=True,
    )

    # Toolchain
    CC: str = "gcc"
    CFLAGS: List[str] = []
    INCLUDE_DIRS: List[str] = []

    # Headers included in every probe program, with <> or "" delimiters
    HEADERS: List[str] = []

    # Scratch space shared by all invocations
    WORK_DIR: Optional[Path] = None

    # Per-command limit enforced by the default strategies (seconds)
    TIMEOUT: Optional[float] = None

    @property
    def work_dir(self) -> Path:
        return self.WORK_DIR if self.WORK_DIR is not None else Path(tempfile.gettempdir())
