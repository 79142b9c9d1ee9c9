# teamdash/core/config.py
from pydantic_settings import BaseSettings; from dotenv import load_dotenv
load_dotenv()
class Settings(BaseSettings):
    DATABASE_URL: str
    JWT_SECRET_KEY: str; JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    LOG_LEVEL: str = "INFO"
    # Activity feed window and paging limits
    RECENT_ACTIVITY_HOURS: int = 24
    DEFAULT_PAGE_SIZE: int = 20; MAX_PAGE_SIZE: int = 100
settings = Settings()
