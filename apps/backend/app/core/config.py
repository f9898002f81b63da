"""Application configuration settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

# Find project root (where .env file lives)
_BACKEND_DIR = Path(__file__).resolve().parent.parent.parent  # app/core -> app -> backend
_PROJECT_ROOT = _BACKEND_DIR.parent.parent  # backend -> apps -> project root
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Configuration values for the order desk service."""

    app_name: str = "Order Desk"
    environment: str = "development"
    app_host: str = "0.0.0.0"
    app_port: int = Field(default=3000, description="Port the web server listens on")
    log_level: str = Field(default="INFO")

    # Database
    mysql_server: str = Field(default="127.0.0.1")
    mysql_server_port: int = Field(default=3306)
    mysql_username: str = Field(default="root")
    mysql_password: str = Field(default="")
    mysql_schema: str = Field(default="northwind")
    mysql_conn_limit: int = Field(
        default=4,
        ge=1,
        description="Maximum number of pooled database connections",
    )
    mysql_pool_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Seconds to wait for a free pooled connection",
    )
    database_url: str | None = Field(
        default=None,
        description="Full async database URL; overrides the MYSQL_* settings",
    )
    database_echo: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def async_database_url(self) -> str | URL:
        """Async driver URL for the connection pool."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "mysql+aiomysql",
            username=self.mysql_username,
            password=self.mysql_password or None,
            host=self.mysql_server,
            port=self.mysql_server_port,
            database=self.mysql_schema,
        )

    @property
    def sync_database_url(self) -> str | URL:
        """Sync driver URL for scripts."""
        if self.database_url:
            return (
                self.database_url.replace("+aiosqlite", "")
                .replace("+aiomysql", "+pymysql")
            )
        return self.async_database_url.set(drivername="mysql+pymysql")


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
