from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Thermostore"

    # Storage backend; anything else is rejected at startup
    store_backend: Literal["elasticsearch", "sqlite"] = Field(default="elasticsearch")

    # Elasticsearch
    database_url: str = "http://127.0.0.1:9200"
    request_timeout_s: float = 5.0

    # Embedded store
    sqlite_path: str = Field(default="thermostore.db")

    # Known sensors (TOML file with [[sensors]] tables)
    sensors_path: Optional[str] = None

    log_file: str = "thermostore.log"
    log_level: str = "INFO"


settings = Settings()
