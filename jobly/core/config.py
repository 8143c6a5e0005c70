from pydantic_settings import BaseSettings
from typing import List, Optional, Union
from pydantic import field_validator
import json


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Jobly API"
    PORT: int = 3001

    # development, test or production
    ENVIRONMENT: str = "development"

    # Security Settings
    SECRET_KEY: str = "secret-dev"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # bcrypt rejects fewer than 4 rounds, so tests use the minimum
    BCRYPT_WORK_FACTOR: Optional[int] = None

    # Database Settings
    DATABASE_URL: Optional[str] = None
    TEST_DATABASE_URL: Optional[str] = None

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = False

    # CORS Settings - can be set as JSON string in .env
    BACKEND_CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Union[List[str], str]) -> List[str]:
        """Parse CORS origins from JSON string or list"""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                # If not valid JSON, split by comma
                return [origin.strip() for origin in v.split(",")]
        return v

    @property
    def bcrypt_rounds(self) -> int:
        if self.BCRYPT_WORK_FACTOR is not None:
            return self.BCRYPT_WORK_FACTOR
        return 4 if self.ENVIRONMENT == "test" else 12

    def get_database_uri(self) -> str:
        """Use the dev/prod database, or the test database when ENVIRONMENT=test."""
        if self.ENVIRONMENT == "test":
            return self.TEST_DATABASE_URL or "postgresql:///jobly_test"
        return self.DATABASE_URL or "postgresql:///jobly"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
