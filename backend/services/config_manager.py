"""
Configuration Manager - Handle backend settings persistence
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from services.validation import validate_diff_options

logger = logging.getLogger(__name__)

DEFAULT_DIFF_OPTIONS = {
    "ignoreWhitespace": True,
    "ignoreCase": False,
    "ignoreEmptyLines": True,
    "contextLines": 3,
}


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self):
        try:
            # 1st: environment variable
            config_dir = os.environ.get("CONFIG_DIFF_CONFIG_DIR")

            # 2nd: home directory ~/.config_diff
            if not config_dir:
                config_dir = os.path.expanduser("~/.config_diff")

            if config_dir:
                config_path = Path(config_dir)
                try:
                    config_path.mkdir(parents=True, exist_ok=True)
                    self._config_file = config_path / "config.json"
                except OSError as e:
                    logger.warning(f"Cannot write to {config_dir}: {e}")
                    self._config_file = None

            # 3rd: temp directory when the path is missing or unwritable
            if not self._config_file:
                tmp_dir = Path(tempfile.gettempdir()) / "config_diff"
                tmp_dir.mkdir(parents=True, exist_ok=True)
                self._config_file = tmp_dir / "config.json"
                logger.info(f"Using temporary config path: {self._config_file}")

        except OSError as e:
            logger.error(f"Critical Error in ConfigManager init: {e}")
            self._config_file = Path(tempfile.gettempdir()) / "config_diff_fallback.json"

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset(cls):
        """Drop the singleton so the next get_instance() re-reads the environment"""
        cls._instance = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file, filling in missing defaults"""
        config = self._default_config()
        if not self._config_file.exists():
            return config

        try:
            with open(self._config_file) as f:
                stored = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Error loading config: {e}")
            return config

        for key, value in stored.items():
            if isinstance(value, dict) and isinstance(config.get(key), dict):
                config[key] = {**config[key], **value}
            else:
                config[key] = value

        level = str(config["logLevel"]).upper()
        if not isinstance(logging.getLevelName(level), int):
            logger.warning(f"Unknown log level {config['logLevel']!r} in {self._config_file}, using INFO")
            level = "INFO"
        config["logLevel"] = level
        return config

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            "diffOptions": dict(DEFAULT_DIFF_OPTIONS),
            "export": {
                "filename": "config_diff",
                "maxPdfLines": 200,
            },
            "server": {"host": "0.0.0.0", "port": 8000},
            "logLevel": "INFO",
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return copy.deepcopy(self._config)

    def save_config(self, config: dict[str, Any]):
        """Merge config into the stored settings and write them to file"""
        if "diffOptions" in config:
            validate_diff_options(config["diffOptions"])

        self._config.update(config)

        # Ensure config directory exists
        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}")

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set specific config value"""
        self.save_config({key: value})

    def get_diff_options(self) -> dict[str, Any]:
        """Stored default engine options"""
        return {**DEFAULT_DIFF_OPTIONS, **self.get_config().get("diffOptions", {})}
