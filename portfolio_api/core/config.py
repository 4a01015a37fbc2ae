# portfolio_api/core/config.py

from typing import Literal

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
# Load environment variables from .env file
load_dotenv()

class Settings(BaseSettings):
    PROJECT_NAME: str = "Portfolio API"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Comma separated list, "*" allows any origin
    CORS_ORIGINS: str = "*"

    # Site owner, used when no explicit destination is configured
    OWNER_NAME: str = "Sumit Lokhande"
    OWNER_EMAIL: str = "sumitlokhande53@gmail.com"

    # Record store
    CONTACT_STORE_BACKEND: Literal["memory", "database"] = "memory"
    DATABASE_URL: str = "sqlite:///./portfolio.db"
    DATABASE_AUTO_CREATE: bool = True
    STORE_TIMEOUT_SECONDS: float = 10.0

    # "notify_first" sends the email before persisting, "store_first" persists
    # and treats a failed delivery as a warning
    CONTACT_DELIVERY_ORDER: Literal["notify_first", "store_first"] = "notify_first"

    # Mail Configuration
    MAIL_HOST: str | None = None
    MAIL_PORT: int = 587
    MAIL_USERNAME: str | None = None
    MAIL_PASSWORD: str | None = None
    MAIL_ENCRYPTION: Literal["ssl", "starttls", "none"] = "starttls"
    MAIL_FROM_ADDRESS: str | None = None
    MAIL_FROM_NAME: str = "Portfolio Contact Form"
    MAIL_TO_ADDRESS: str | None = None
    MAIL_TIMEOUT_SECONDS: float = 15.0

    # Bearer token required to list submissions; unset leaves the listing open
    ADMIN_API_TOKEN: str | None = None

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def mail_recipient(self) -> str:
        return self.MAIL_TO_ADDRESS or self.OWNER_EMAIL

    @property
    def mail_sender(self) -> str:
        return self.MAIL_FROM_ADDRESS or self.MAIL_USERNAME or self.OWNER_EMAIL

    @property
    def smtp_configured(self) -> bool:
        return bool(self.MAIL_HOST and self.MAIL_USERNAME and self.MAIL_PASSWORD)


# Initialize
settings = Settings()
