"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings pulled from RISING_TIDES_* environment variables."""

    # Logging
    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(default="plain", description="Logging format (plain or json)")

    # Terrain files
    terrain_directory: str = Field(default="terrains", description="Directory holding .terrain files")
    download_cache_dir: str = Field(default="DownloadCache", description="Cache for remotely fetched terrains")
    download_timeout_seconds: float = Field(default=30.0, description="HTTP timeout for terrain downloads")
    download_chunk_size: int = Field(default=64 * 1024, description="Bytes read per download chunk")

    # Water level sweeps
    max_concurrent_jobs: int = Field(default=4, ge=1, description="Worker threads for water level sweeps")

    class Config:
        env_prefix = "RISING_TIDES_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
