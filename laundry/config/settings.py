"""
Environment configuration for the laundry pass booking service.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
from typing import Annotated, List, Optional, Union
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import Field, field_validator
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @staticmethod
    def get_secret_key_default() -> str:
        """Generate a default secret key if not provided"""
        import secrets
        import string
        alphabet = string.ascii_letters + string.digits
        return ''.join(secrets.choice(alphabet) for _ in range(32))

    # Application configuration
    APP_NAME: str = "Laundry Pass Booking"
    API_VERSION: str = "v1"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    TIMEZONE: str = "Europe/Stockholm"
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(default=["http://localhost:3000"])

    # Database configuration - support both individual fields and DATABASE_URL
    DATABASE_URL: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "laundry"
    DB_POOL_SIZE: int = 10
    DB_POOL_OVERFLOW: int = 5
    DB_CONNECT_TIMEOUT: int = 5  # seconds
    DB_STATEMENT_TIMEOUT_MS: int = 4000
    DB_ECHO: bool = False

    # Security configuration
    JWT_SECRET_KEY: str = Field(default_factory=lambda: Settings.get_secret_key_default())
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    AUTH_COOKIE_NAME: str = "laundryAuth"
    AUTH_COOKIE_SECURE: bool = False
    PASSWORD_BCRYPT_ROUNDS: int = 12

    # Business rules
    LOCK_DURATION_MINUTES: int = Field(default=5, ge=1)
    ACTIVE_PASSES_ALLOWED: int = Field(default=1, ge=0)
    TOTAL_MONTH_PASSES_ALLOWED: int = Field(default=6, ge=0)
    RESIDENT_WEEKS_VISIBLE: Annotated[List[int], NoDecode] = Field(default=[-1, 0, 1])
    LAUNDRY_ROOMS: Annotated[List[int], NoDecode] = Field(default=[1, 2])
    PASS_RANGES: Annotated[List[str], NoDecode] = Field(default=["07-12", "12-17", "17-22"])

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "standard"  # standard | json
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = False

    # Validators
    @field_validator('CORS_ORIGINS', 'PASS_RANGES', mode='before')
    @classmethod
    def parse_string_list(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse a comma separated or JSON list of strings"""
        if isinstance(v, str):
            if v.startswith('[') and v.endswith(']'):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator('LAUNDRY_ROOMS', 'RESIDENT_WEEKS_VISIBLE', mode='before')
    @classmethod
    def parse_int_list(cls, v: Union[str, List[int]]) -> List[int]:
        """Parse a comma separated or JSON list of integers"""
        if isinstance(v, str):
            if v.startswith('[') and v.endswith(']'):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            return [int(x.strip()) for x in v.split(",") if x.strip()]
        return v

    @field_validator('LOG_FORMAT')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in ("standard", "json"):
            raise ValueError("LOG_FORMAT must be 'standard' or 'json'")
        return v

    def get_database_url(self) -> str:
        """Construct database URL from components or use provided URL"""
        if self.DATABASE_URL:
            # Bind bare postgres URLs to the psycopg2 driver
            for scheme in ("postgresql://", "postgres://"):
                if self.DATABASE_URL.startswith(scheme):
                    return "postgresql+psycopg2://" + self.DATABASE_URL[len(scheme):]
            return self.DATABASE_URL

        # Construct from individual components
        url = f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        return url

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.ENVIRONMENT == "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
