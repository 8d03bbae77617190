"""Runtime configuration, read from ``DICE_*`` environment variables or ``.env``."""
from __future__ import annotations

import random
import secrets
from pathlib import Path
from typing import Optional

from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="DICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    server_name: str = "mcp-tabletop-dice"

    # Logging
    log_level: str = "INFO"
    log_path: Optional[Path] = None
    log_rotation: str = "10 MB"
    log_retention: str = "7 days"

    # Fixed seed: one generator seeded at first use and shared by every
    # request, so a restarted server replays the same sequence of rolls.
    # Unset means a fresh system generator per request.
    rng_seed: Optional[int] = Field(default=None)

    _seeded_rng: Optional[random.Random] = PrivateAttr(default=None)

    def make_rng(self) -> random.Random:
        """Return the generator for one request."""
        if self.rng_seed is None:
            return secrets.SystemRandom()
        if self._seeded_rng is None:
            self._seeded_rng = random.Random(self.rng_seed)
        return self._seeded_rng


settings = Settings()
