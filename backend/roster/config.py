from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import Optional, List, Union
import secrets


class Settings(BaseSettings):
    """Конфигурация приложения из переменных окружения"""

    # Приложение
    app_name: str = "Station Roster"
    debug: bool = False
    log_level: str = "INFO"

    # База данных
    database_url: str = "sqlite:///./data/roster.db"

    # Генерация смен
    generation_window_days: int = 30
    default_switch_hours: int = 12
    station_timezone: Optional[str] = None  # IANA-зона только для определения "сегодня", например Europe/Berlin

    # Табло
    display_cache_ttl_seconds: int = 30

    # CORS
    cors_origins: Union[str, List[str]] = "http://localhost:3000,http://localhost:5173"

    # Авторизация
    secret_key: str = secrets.token_urlsafe(32)  # Генерируется случайно, если не указан в .env
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440  # 24 часа

    @field_validator('cors_origins')
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator('generation_window_days', 'default_switch_hours')
    @classmethod
    def check_positive(cls, v):
        if v <= 0:
            raise ValueError("Значение должно быть положительным")
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


settings = Settings()
