"""Configuration loader for the bookshelf service."""

import os
from pathlib import Path
from typing import List

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Bookshelf API"
    version: str = "1.0.0"


class ServerConfig(BaseModel):
    """Where uvicorn listens."""

    host: str = "localhost"
    port: int = 9000
    reload: bool = False


class CorsConfig(BaseModel):
    allow_origins: List[str] = Field(default_factory=lambda: ["*"])


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s %(message)s"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    server: ServerConfig = Field(default_factory=ServerConfig)
    cors: CorsConfig = Field(default_factory=CorsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from a YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file. A missing file
            leaves every setting at its default.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    # Environment overrides
    host = os.getenv("BOOKSHELF_HOST")
    if host:
        config.server.host = host
    port = os.getenv("BOOKSHELF_PORT")
    if port:
        config.server.port = int(port)
    level = os.getenv("BOOKSHELF_LOG_LEVEL")
    if level:
        config.logging.level = level.upper()

    return config
