"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .logging import setup_logging

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
BLOG_DIR = PROJECT_ROOT / "blog"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")

logger = setup_logging(module_name="blog_engine.config")

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


class ContentSettings(BaseModel):
    """Where posts and the Hugo site config live."""
    content_dir: str = str(BLOG_DIR / "content" / "post")
    site_config_path: str = str(BLOG_DIR / "config.toml")
    static_dir: str = str(BLOG_DIR / "static")
    template_names: list[str] = Field(default_factory=lambda: ["_template.md"])
    summary_words: int = 70


class BuildSettings(BaseModel):
    """Static build output settings."""
    output_dir: str = str(BLOG_DIR / "public")
    include_drafts: bool = False
    clean: bool = True


class ServerSettings(BaseModel):
    """Web server settings, normally driven by the environment."""
    debug: bool = False
    port: int = 8080
    metrics_port: int = 9090
    webroot: str = "/app/public"
    use_memory: bool = False
    log_file_path: str = "/var/log/access.log"
    gzip_minimum_size: int = 500


class Settings(BaseModel):
    """Top-level application settings."""
    content: ContentSettings = Field(default_factory=ContentSettings)
    build: BuildSettings = Field(default_factory=BuildSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, then apply env overrides."""
        settings_path = path or CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        instance = cls(**data)
        instance.apply_env()
        return instance

    def apply_env(self) -> None:
        """Override settings from environment variables."""
        server = self.server
        server.debug = parse_env_bool("DEBUG", server.debug)
        server.port = parse_env_int("PORT", server.port)
        server.metrics_port = parse_env_int("METRICS_PORT", server.metrics_port)
        server.webroot = os.getenv("WEBROOT", server.webroot)
        server.use_memory = parse_env_bool("USE_MEMORY", server.use_memory)
        server.log_file_path = os.getenv("LOG_FILE_PATH", server.log_file_path)
        self.content.content_dir = os.getenv("CONTENT_DIR", self.content.content_dir)
        self.build.output_dir = os.getenv("OUTPUT_DIR", self.build.output_dir)


def parse_env_int(key: str, default: int) -> int:
    """Read an integer variable, keeping the default when it does not parse."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Error parsing %s as int: %r. Using default value: %d", key, value, default)
        return default


def parse_env_bool(key: str, default: bool) -> bool:
    """Read a boolean variable using Go-style spellings (1, t, TRUE, ...)."""
    value = os.getenv(key)
    if value is None:
        return default
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning("Error parsing %s as bool: %r. Using default value: %s", key, value, default)
    return default


# Singleton settings instance
settings = Settings.load()
