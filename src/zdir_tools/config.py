import logging
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from zdir_tools.constants import COPY_BUFFER_SIZE, DEFAULT_OUTPUT_ROOT, UNKNOWN_DIR


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ZDIR_",
        extra="ignore",
    )

    output_root: Path = Path(DEFAULT_OUTPUT_ROOT)
    unknown_dir: str = UNKNOWN_DIR
    buffer_size: int = COPY_BUFFER_SIZE
    names_file: Path | None = None
    log_level: str = "WARNING"

    @field_validator("buffer_size")
    @classmethod
    def _positive_buffer(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("buffer_size must be positive")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value!r}")
        return level


settings = Settings()
