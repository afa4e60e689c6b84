from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import List

load_dotenv()


class Settings(BaseSettings):
    DATABASE_URL: str
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Booking rules
    BOOKABLE_PROVIDER_TYPES: List[str] = ["guide", "transport"]
    MAX_BOOKING_DAYS: int = 62
    DEFAULT_SEASON_LABEL: str = "low"

    CORS_ORIGINS: List[str] = ["*"]

    PROJECT_NAME: str = "TravelMarket API"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Provider availability, bookings and seasons for the travel marketplace"

    PASSWORD_MIN_LENGTH: int = 8

    class Config:
        env_file = ".env"


settings = Settings()
