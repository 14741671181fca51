"""
Configuration constants for the Network Demo.

This module centralizes all configurable parameters to make the client
easy to tune and point at different environments.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict


def _default_headers() -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


@dataclass(frozen=True)
class APIConfig:
    """API client configuration settings."""
    base_url: str = "https://jsonplaceholder.typicode.com"
    # Applied to connect, send and receive phases alike
    timeout_seconds: float = 10.0
    default_headers: Dict[str, str] = field(default_factory=_default_headers)

    users_endpoint: str = "/users"
    posts_endpoint: str = "/posts"
    upload_endpoint: str = "/upload"
    upload_field_name: str = "file"


@dataclass
class StorageConfig:
    """Local preference storage configuration."""
    preferences_path: Path = field(
        default_factory=lambda: Path(os.path.expanduser("~")) / ".network_demo" / "preferences.json"
    )
    token_key: str = "auth_token"
    theme_key: str = "isDarkMode"


@dataclass
class LogConfig:
    """Logging configuration."""
    log_directory: Path = field(default_factory=lambda: Path("logs"))
    log_filename: str = "network_demo.log"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def log_file_path(self) -> Path:
        """Get full path to the log file."""
        return self.log_directory / self.log_filename


@dataclass
class Config:
    """Master configuration combining all sub-configurations."""
    api: APIConfig = field(default_factory=APIConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    log: LogConfig = field(default_factory=LogConfig)


# Default configuration instance (clients take their APIConfig explicitly)
config = Config()
