"""
Configuration module for the grant login tooling.

Loads configuration from an optional JSON file and environment variables.
"""

import json
import os
from typing import Dict, Any, Optional
from pathlib import Path

from . import constants


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses GRANT_CONFIG_FILE
                        env var or defaults to 'config.json'. A missing file is allowed,
                        every value can come from the environment instead.
        """
        self.config_file = config_file or os.getenv("GRANT_CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._override_from_env()

    def _load_config(self) -> None:
        """Load configuration from JSON file if it exists."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            return

        with open(config_path, "r", encoding="utf-8") as f:
            try:
                loaded = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid configuration file {self.config_file}: {e}") from e

        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file {self.config_file} must contain a JSON object")
        self.config = loaded

    def _set(self, section: str, key: str, value: Any) -> None:
        self.config.setdefault(section, {})[key] = value

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        env_map = {
            "SCA_IDENTITY_URL": ("identity", "url"),
            "SCA_USERNAME": ("authentication", "username"),
            "SCA_PASSWORD": ("authentication", "password"),
            "SCA_TOTP_SECRET": ("authentication", "totp_secret"),
            "GRANT_LOG_LEVEL": ("logging", "level"),
            "GRANT_LOG_FILE": ("logging", "file"),
        }
        for env_name, (section, key) in env_map.items():
            value = os.getenv(env_name)
            if value:
                self._set(section, key, value)

    def validate(self) -> None:
        """
        Validate that everything needed for a login is present.

        Raises:
            ValueError: Listing every missing configuration key
        """
        required = {
            "identity.url": "SCA_IDENTITY_URL",
            "authentication.username": "SCA_USERNAME",
            "authentication.password": "SCA_PASSWORD",
            "authentication.totp_secret": "SCA_TOTP_SECRET",
        }
        missing = [f"{key} ({env})" for key, env in required.items() if not self.get(key)]
        if missing:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing)}"
            )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'identity.url')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def identity_url(self) -> str:
        """Get identity provider URL without trailing slash."""
        return self.get("identity.url", "").rstrip("/")

    @property
    def identity_timeout(self) -> int:
        """Get identity request timeout in seconds."""
        return self.get("identity.timeout", constants.DEFAULT_TIMEOUT)

    @property
    def identity_verify_ssl(self) -> bool:
        """Get identity SSL verification setting."""
        return self.get("identity.verify_ssl", True)

    @property
    def username(self) -> Optional[str]:
        """Get login username."""
        return self.get("authentication.username")

    @property
    def password(self) -> Optional[str]:
        """Get login password."""
        return self.get("authentication.password")

    @property
    def totp_secret(self) -> Optional[str]:
        """Get base32 TOTP secret."""
        return self.get("authentication.totp_secret")

    @property
    def service_name(self) -> str:
        """Get downstream service name."""
        return self.get("service.name", constants.DEFAULT_SERVICE_NAME)

    @property
    def service_separator(self) -> str:
        """Get separator between subdomain and service name."""
        return self.get("service.separator", constants.DEFAULT_SERVICE_SEPARATOR)

    @property
    def log_level(self) -> str:
        """Get logging level name."""
        return self.get("logging.level", "INFO")

    @property
    def log_file(self) -> Optional[str]:
        """Get log file path."""
        return self.get("logging.file")

    def __repr__(self) -> str:
        """String representation of config, without secrets."""
        return (
            f"Config(file={self.config_file}, "
            f"identity_url={self.identity_url}, "
            f"username={self.username}, "
            f"service={self.service_name!r}{self.service_separator!r})"
        )
