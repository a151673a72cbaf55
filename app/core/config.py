from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import List, Optional

load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: str
    DATABASE_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = True

    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    SESSION_TOKEN_EXPIRE_DAYS: int = 30

    # Cookie settings
    SESSION_COOKIE_NAME: str = "staylinker_session"
    COOKIE_SECURE: bool = True  # set False for local http development
    COOKIE_DOMAIN: Optional[str] = None

    GOOGLE_CLIENT_ID: str
    GOOGLE_CLIENT_SECRET: str

    # Distance Matrix API, mock distances are served when unset
    GOOGLE_MAPS_API_KEY: Optional[str] = None
    DISTANCE_API_TIMEOUT_SECONDS: float = 8.0

    GAP_THRESHOLD_DAYS: int = 2

    FRONTEND_BASE_URL: str = "http://localhost:3000"
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    PROJECT_NAME: str = "StayLinker API"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Trip itineraries, stays and shared planning"

    class Config:
        env_file = ".env"


settings = Settings()
