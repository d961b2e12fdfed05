from datetime import date

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    SECRET_KEY: str = "change-this-please"
    JWT_ISS: str = "bracketword"
    JWT_AUD: str = "bracketword-app"
    JWT_EXPIRE_DAYS: int = 365
    DATABASE_URL: str = "sqlite:///./bracketword.db"
    LOG_LEVEL: str = "INFO"

    # Game rules
    MAX_GUESSES: int = 20  # 0 = unlimited
    MIN_BRACKET_CANDIDATES: int = 100

    # Session cookie
    SESSION_COOKIE_NAME: str = "session"
    COOKIE_SECURE: bool = False

    # Seeding
    ADMIN_TOKEN: str = ""
    SEED_ON_STARTUP: bool = False

    # Share text
    GAME_NAME: str = "Bracket Word"
    LAUNCH_DATE: date = date(2025, 7, 29)
    SHARE_URL: str = "https://bracketword.example.com"

    class Config:
        env_file = ".env"

settings = Settings()
