from pydantic_settings import BaseSettings
from typing import Optional, List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Exam Paper Service"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    # Database Configuration
    DATABASE_HOST: Optional[str] = None
    DATABASE_PORT: Optional[str] = None
    DATABASE_USER: Optional[str] = None
    DATABASE_PASSWORD: Optional[str] = None
    DATABASE_NAME: Optional[str] = None

    DATABASE_URL: str = ""
    TEST_DATABASE_URL: Optional[str] = None
    CREATE_TABLES_ON_STARTUP: bool = True

    def __init__(self, **data):
        super().__init__(**data)
        if self.DATABASE_URL:
            return
        if all([self.DATABASE_HOST, self.DATABASE_PORT, self.DATABASE_USER, self.DATABASE_NAME]):
            self.DATABASE_URL = (
                f'postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD or ""}'
                f'@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}'
            )
        else:
            self.DATABASE_URL = "sqlite:///./exam_service.db"

    # Logging
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # CSV ingestion
    CSV_CHUNK_SIZE: int = 500
    CSV_MAX_COLUMNS: int = 32

    class Config:
        env_file = ".env"

settings = Settings()
