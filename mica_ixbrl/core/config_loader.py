# Path: mica_ixbrl/core/config_loader.py
"""
Configuration Loader for MiCA iXBRL Engine

Loads configuration from .env file for the validation and generation engine.
Singleton pattern ensures consistent configuration across all components.

All tunables (registry endpoint, fallback currency, continuation threshold,
logging) come from environment variables with defaults from constants.
"""

import os
from typing import Any, Optional
from pathlib import Path
from dotenv import load_dotenv

from ..constants import (
    DEFAULT_CURRENCY,
    DEFAULT_GLEIF_API_URL,
    DEFAULT_REGISTRY_TIMEOUT,
    TEXT_BLOCK_CONTINUATION_THRESHOLD,
)


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================

DEFAULT_DECIMALS: int = 2
DEFAULT_LOG_LEVEL: str = 'INFO'


class ConfigLoader:
    """
    Singleton configuration loader for the MiCA iXBRL engine.

    Loads configuration from environment variables with type conversion
    and sensible defaults. Nothing is required: an empty environment
    yields a working configuration that talks to the public GLEIF API.

    Example:
        config = ConfigLoader()
        url = config.get('gleif_api_url')
        threshold = config.get('continuation_threshold')  # Returns int
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern. Loads .env file
        from the project root on first instantiation.
        """
        if ConfigLoader._initialized:
            return

        # mica_ixbrl/core/config_loader.py -> go up 3 levels to project root
        current_file = Path(__file__).resolve()
        project_root = current_file.parent.parent.parent
        env_path = project_root / '.env'

        if env_path.exists():
            load_dotenv(dotenv_path=env_path, interpolate=True)

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load all configuration from environment.

        Returns:
            Dictionary of configuration values with proper types
        """
        config = {
            # ================================================================
            # ENVIRONMENT & DEBUG
            # ================================================================
            'environment': self._get_env('MICA_ENVIRONMENT', 'development'),
            'debug': self._get_bool('MICA_DEBUG', False),

            # ================================================================
            # PATHS
            # ================================================================
            'taxonomy_catalog': self._get_path('MICA_TAXONOMY_CATALOG'),
            'output_dir': self._get_path('MICA_OUTPUT_DIR'),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_dir': self._get_path('MICA_LOG_DIR'),
            'log_level': self._get_env('MICA_LOG_LEVEL', DEFAULT_LOG_LEVEL),

            # ================================================================
            # LEI REGISTRY (GLEIF)
            # ================================================================
            'gleif_api_url': self._get_env('GLEIF_API_URL', DEFAULT_GLEIF_API_URL),
            'lei_api_key': self._get_env('LEI_API_KEY'),
            'registry_timeout': self._get_float(
                'MICA_REGISTRY_TIMEOUT', DEFAULT_REGISTRY_TIMEOUT
            ),

            # ================================================================
            # GENERATION
            # ================================================================
            'default_currency': self._get_env(
                'MICA_DEFAULT_CURRENCY', DEFAULT_CURRENCY
            ).upper(),
            'default_decimals': self._get_int('MICA_DEFAULT_DECIMALS', DEFAULT_DECIMALS),
            'continuation_threshold': self._get_int(
                'MICA_CONTINUATION_THRESHOLD', TEXT_BLOCK_CONTINUATION_THRESHOLD, minimum=1
            ),
        }

        return config

    def _get_env(
        self,
        key: str,
        default: Optional[str] = None,
        required: bool = False
    ) -> Optional[str]:
        """Get string environment variable."""
        value = os.getenv(key)

        if value is None or not value.strip():
            if required:
                raise ValueError(f"Required environment variable '{key}' is not set")
            return default

        return value.strip()

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default

        return value.strip().lower() in ('true', '1', 'yes', 'on')

    def _get_int(self, key: str, default: int, minimum: Optional[int] = None) -> int:
        """Get integer environment variable; default when unparseable or below minimum."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            number = int(value.strip())
        except ValueError:
            return default
        if minimum is not None and number < minimum:
            return default
        return number

    def _get_float(self, key: str, default: float) -> float:
        """Get float environment variable."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return float(value.strip())
        except ValueError:
            return default

    def _get_path(self, key: str, required: bool = False) -> Optional[Path]:
        """Get path environment variable."""
        value = os.getenv(key)

        if value is None or not value.strip():
            if required:
                raise ValueError(f"Required environment variable '{key}' is not set")
            return None

        return Path(value.strip())

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        value = self._config.get(key)
        return default if value is None else value

    def __getitem__(self, key: str) -> Any:
        """Get configuration value using dictionary syntax."""
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        """Check if configuration key exists."""
        return key in self._config

    def keys(self):
        """Get all configuration keys."""
        return self._config.keys()

    @classmethod
    def reset(cls):
        """Reset singleton for testing purposes."""
        cls._instance = None
        cls._initialized = False


__all__ = ['ConfigLoader', 'DEFAULT_DECIMALS']
