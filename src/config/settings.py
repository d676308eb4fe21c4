# src/config/settings.py
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    # other env keys are ignored
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    database_url: Optional[str] = None

    db_user: Optional[str] = None
    db_pass: Optional[str] = None
    db_host: Optional[str] = None
    db_port: Optional[int] = None
    db_name: Optional[str] = None

    api_prefix: str = "/api"
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    jwt_secret: str = "change-this-secret-key-before-deploying"
    jwt_algorithm: str = "HS256"
    auth_required: bool = False
    default_user_id: str = "000000000000000000000000"

    report_title: str = "Health Tracker Report"
    report_filename: str = "HealthReport.pdf"

    def sqlalchemy_url(self) -> str | URL:
        """
        1. DATABASE_URL if set
        2. MySQL (pymysql) when DB_HOST/DB_USER/DB_NAME are all set
        3. local SQLite file
        """
        if self.database_url:
            if self.database_url.startswith("postgres://"):
                return self.database_url.replace("postgres://", "postgresql://", 1)
            return self.database_url

        if self.db_host and self.db_user and self.db_name:
            return URL.create(
                "mysql+pymysql",
                username=self.db_user,
                password=self.db_pass,
                host=self.db_host,
                port=self.db_port,
                database=self.db_name,
            )

        return "sqlite:///./health_tracker.db"


settings = Settings()
