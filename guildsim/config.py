"""Application configuration loaded from environment variables and .env file."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Simulation RNG (None = nondeterministic)
    RANDOM_SEED: Optional[int] = None

    # New game balance
    STARTING_GOLD: int = 1000
    STARTING_REPUTATION: int = 50
    STARTING_DEBT: int = 10000
    QUARTERLY_PAYMENT: int = 2500
    DEFAULT_INTEREST_RATE: float = 0.05
    MAX_PARTIES: int = 5


settings = Settings()
