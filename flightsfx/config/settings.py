"""
Settings for FlightsFX.
These are configurable parameters that can be changed by the user.
"""

import os
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union
from .constants import (
    DEFAULT_FLIGHTS_FILENAME, DEFAULT_CHART_FILENAME,
    NEXT_FLIGHTS_LIMIT
)

logger = logging.getLogger("flightsfx.settings")


class Settings:
    """
    Application settings that can be loaded from and saved to a configuration file.
    A shared instance is exposed as ``settings``; tests and tools may build their own.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        self._settings = self._defaults()

        self.config_dir = Path(config_dir) if config_dir else self._get_config_dir()
        self.config_file = self.config_dir / "settings.json"
        self.load_settings()

    @staticmethod
    def _defaults() -> Dict[str, Any]:
        return {
            # File paths, relative to the working directory unless absolute
            "flights_file": DEFAULT_FLIGHTS_FILENAME,
            "chart_file": DEFAULT_CHART_FILENAME,

            # Persistence
            "atomic_save": True,

            # Query settings
            "next_flights_limit": NEXT_FLIGHTS_LIMIT,

            "log_level": "INFO",
        }

    @staticmethod
    def _get_config_dir() -> Path:
        """Get the configuration directory for the application"""
        if os.name == 'nt':  # Windows
            return Path(os.environ.get('APPDATA', '')) / 'FlightsFX'
        return Path.home() / '.config' / 'flightsfx'

    def load_settings(self) -> None:
        """Load settings from the configuration file"""
        try:
            if self.config_file.exists():
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    loaded_settings = json.load(f)
                if not isinstance(loaded_settings, dict):
                    raise ValueError("settings file must contain a JSON object")
                self._settings.update(loaded_settings)
                logger.info(f"Settings loaded from {self.config_file}")
            else:
                logger.debug("No settings file found, using defaults")
        except (OSError, ValueError) as e:
            logger.error(f"Error loading settings: {e}")

    def save_settings(self) -> bool:
        """Save current settings to the configuration file"""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(self._settings, f, indent=4)
            logger.info(f"Settings saved to {self.config_file}")
            return True
        except (OSError, TypeError) as e:
            logger.error(f"Error saving settings: {e}")
            return False

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value by key"""
        return self._settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a setting value by key"""
        self._settings[key] = value

    def get_all(self) -> Dict[str, Any]:
        """Get all settings as a dictionary"""
        return self._settings.copy()

    def reset_to_defaults(self) -> None:
        """Reset all settings to their default values"""
        self._settings = self._defaults()
        self.save_settings()
        logger.info("Settings reset to defaults")


# Create a global settings instance
settings = Settings()
