from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Настройки базы данных
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = "postgres"
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_NAME: str = "affiliate"

    # Партнерская программа
    AFFILIATE_BASE_URL: str = "https://example.com/join"
    # Количество случайных байт в партнерском токене (secrets.token_urlsafe)
    AFFILIATE_TOKEN_BYTES: int = Field(default=12, ge=8)

    # Почта (SMTP)
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_FROM: str = "noreply@example.com"
    SMTP_FROM_NAME: str = "Affiliate Program"
    # В dev-режиме письма только пишутся в лог
    EMAIL_DEV_MODE: bool = True

    # Мессенджер (Telegram Bot API)
    TELEGRAM_BOT_TOKEN: str = "123456789:dev-token-not-for-production"
    MESSAGING_DEV_MODE: bool = True

    # Лимиты
    RATE_LIMIT_ENABLED: bool = True
    REGISTRATION_RATE_LIMIT: str = "20/minute"

    LOG_LEVEL: str = "INFO"

    @property
    def DATABASE_URL(self) -> str:
        return f"postgresql+psycopg2://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"

    def affiliate_link(self, token: str) -> str:
        return f"{self.AFFILIATE_BASE_URL}?ref={token}"

    model_config = SettingsConfigDict(env_file=".env")

settings = Settings()
