from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

# Application settings using pydantic-settings for structured configuration

class Settings(BaseSettings):
    # --- App ---
    app_name: str = "Tag / Keyword Extractor"
    app_env: str = "development"          # e.g., development / staging / production
    debug: bool = True

    # --- Logging ---
    log_level: Optional[str] = None       # overrides the DEBUG/INFO choice made from `debug`
    log_file: Optional[str] = None        # extra rotating file sink when set

    # --- Files ---
    data_dir: str = "data"                # every document, stop-word list and report must live under here
    file_encoding: str = "utf-8"          # used for documents, stop-word lists and saved reports
    report_extension: str = ".txt"        # appended to save paths that lack it

    # --- Report layout ---
    report_separator: str = "========================="
    display_word_width: int = 20          # left-justified word column in the display report

    # pydantic v2 / pydantic-settings configuration
    model_config = SettingsConfigDict(
        env_file=".env",     # optional; env vars win over the file
        case_sensitive=False,
        extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    """Cache settings so we don't re-parse .env on every call."""
    return Settings()
