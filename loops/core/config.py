from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings): # load all key=value pairs from .env
    """ Game service settings"""
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'data' / 'loops.db'}"
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "app_errors.log"
    MIN_LEVEL_SIZE: int = 1   # custom level size as shown to the player (without frame)
    MAX_LEVEL_SIZE: int = 20
    MIN_SNAPSHOT_SIZE: int = 1  # stored size, frame included (a custom toroid can be 1 wide)
    MAX_SNAPSHOT_SIZE: int = 22

    model_config = SettingsConfigDict(
        env_file = BASE_DIR/".env",
        env_file_encoding = "utf-8",
        extra = "ignore",
    )

settings = Settings()
