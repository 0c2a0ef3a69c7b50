"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - Single YAML configuration file (config/config.yaml)
    - Environment variable override (APP_BASE_URL overrides app.base_url)
    - Dot notation path access
    - Typed accessors for timeouts, viewports and URLs

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from loguru import logger


# Default configuration file path (repo root / config / config.yaml)
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

# Environment variable pointing at an alternative configuration file
CONFIG_PATH_ENV = "EMPSD_CONFIG"

TIMEOUT_DEFAULTS: Dict[str, int] = {
    "short": 5000,
    "medium": 10000,
    "long": 30000,
    "very_long": 60000,
}


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (APP_BASE_URL)
        2. YAML configuration file
        3. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("app.base_url")
        'https://pln-fe.dev.embrio.id'

        >>> config.timeout("long")
        30000

    Environment Variable Mapping:
        - app.base_url -> APP_BASE_URL
        - timeouts.long -> TIMEOUTS_LONG
        - browser.headless -> BROWSER_HEADLESS
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """Singleton: configuration is loaded once per process."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file. Falls back to the
                `EMPSD_CONFIG` environment variable, then DEFAULT_CONFIG_PATH.
        """
        if getattr(self, "_initialized", False):
            return

        env_path = os.environ.get(CONFIG_PATH_ENV)
        self._config_path = Path(config_path or env_path or DEFAULT_CONFIG_PATH)
        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from: {self._config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

    @property
    def config_path(self) -> Path:
        return self._config_path

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.

        Args:
            key: Dot-notation path (e.g., "app.base_url")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        value = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get entire configuration section.

        Args:
            section: Section name (e.g., "timeouts", "viewports")

        Returns:
            Section dictionary or empty dict if not found
        """
        return self._config.get(section, {}) or {}

    # =========================================================================
    # Typed accessors
    # =========================================================================

    @property
    def base_url(self) -> str:
        return str(self.get("app.base_url", "http://localhost:3000")).rstrip("/")

    @property
    def login_url(self) -> str:
        return f"{self.base_url}{self.get('app.login_path', '/login?redirect=%2F')}"

    def timeout(self, tier: str) -> int:
        """
        Timeout in milliseconds for a tier: short, medium, long, very_long.

        Raises:
            ConfigurationError: For an unknown tier
        """
        if tier not in TIMEOUT_DEFAULTS:
            raise ConfigurationError(f"Unknown timeout tier: {tier}")
        return int(self.get(f"timeouts.{tier}", TIMEOUT_DEFAULTS[tier]))

    def viewport(self, preset: str) -> Tuple[int, int]:
        """
        Viewport preset as (width, height).

        Raises:
            ConfigurationError: When the preset is not configured
        """
        size = self.get_section("viewports").get(preset)
        if not size:
            raise ConfigurationError(f"Unknown viewport preset: {preset}")
        return int(size["width"]), int(size["height"])

    def credentials(self, kind: str = "valid") -> Dict[str, str]:
        """Credential set ('valid' or 'invalid') as {email, password}."""
        creds = self.get_section("credentials").get(kind)
        if not creds:
            raise ConfigurationError(f"Unknown credential set: {kind}")
        return {"email": creds.get("email", ""), "password": creds.get("password", "")}

    def reload(self) -> None:
        """
        Reload configuration from file.

        Useful when configuration file has been updated during runtime.
        """
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value

    @classmethod
    def reset(cls) -> None:
        """
        Reset singleton instance.

        Useful for testing when configuration needs to be reloaded
        with different settings.
        """
        cls._instance = None
        cls._config = {}


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULT_CONFIG_PATH",
]
