import json
from enum import StrEnum
from pathlib import Path
from typing import Annotated, List

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class StoreBackend(StrEnum):
    POSTGRES = 'postgres'
    MEMORY = 'memory'
    FIXTURE = 'fixture'  # read-only degraded mode


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Event Registration Service'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # CORS
    # Comma list or JSON array; NoDecode keeps the raw string for the validator
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and v.strip().startswith('['):
            return json.loads(v)
        elif isinstance(v, str):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # Storage backend
    STORE_BACKEND: StoreBackend = StoreBackend.POSTGRES

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'event_registration'

    # Connection pool
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30  # seconds
    DB_POOL_RECYCLE: int = 3600  # seconds
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:'
            f'{self.POSTGRES_PASSWORD.get_secret_value()}@'
            f'{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # Capacity ledger (optimistic concurrency retry policy)
    LEDGER_MAX_ATTEMPTS: int = 8
    LEDGER_BACKOFF_BASE_SECONDS: float = 0.005
    LEDGER_BACKOFF_MAX_SECONDS: float = 0.2

    # Registration defaults
    DEFAULT_EVENT_CAPACITY: int = 50
    # Codes are stored in a 32-character column: prefix + 14 characters
    INVITATION_CODE_PREFIX: str = Field(default='INV', min_length=1, max_length=16)


settings = Settings()  # type: ignore
