# File: phrasecoach/core/config/settings.py

import os
from pathlib import Path


class Settings:
    # --- Paths ---
    # phrasecoach/core/config/settings.py -> phrasecoach/core/config -> phrasecoach/core -> phrasecoach -> ROOT
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    DATA_DIR: Path = BASE_DIR / "data"

    # --- Database ---
    DATABASE_URL_OVERRIDE: str = os.getenv("PHRASECOACH_DATABASE_URL", "")

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE

        # Default: local SQLite file next to the other app data
        return f"sqlite:///{self.DATA_DIR / 'phrasecoach.db'}"

    # --- Speech Capture ---
    # Used when a course does not carry its own language code
    CAPTURE_LOCALE: str = os.getenv("CAPTURE_LOCALE", "fr-FR")

    # --- Practice Session ---
    AUTOPLAY_ON_PHRASE_CHANGE: bool = os.getenv("AUTOPLAY_ON_PHRASE_CHANGE", "true").lower() == "true"

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def ensure_dirs(self):
        """Creates necessary data directories if they don't exist."""
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
