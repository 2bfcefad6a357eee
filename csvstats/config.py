from typing import Literal

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseModel):
    host: str = "localhost"
    port: int = 5432
    name: str = "csvstats"
    user: str = "csvstats"
    password: str = ""
    pool_min_size: int = 1
    pool_max_size: int = 5
    connect_timeout_s: int = 10

    @property
    def conninfo(self) -> str:
        parts = (
            f"host={self.host} port={self.port} dbname={self.name} user={self.user}"
            f" connect_timeout={self.connect_timeout_s}"
        )
        if self.password:
            parts += f" password={self.password}"
        return parts


class StoreConfig(BaseModel):
    backend: Literal["postgres", "memory"] = "postgres"


class IngestConfig(BaseModel):
    # Uploads containing any of these are rejected outright.
    forbidden_substrings: list[str] = ["Sonny Hayes"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CSVSTATS_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    log_level: str = "INFO"
    store: StoreConfig = StoreConfig()
    db: DatabaseConfig = DatabaseConfig()
    ingest: IngestConfig = IngestConfig()


settings = Settings()
