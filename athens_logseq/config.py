"""
Configuration management for the Athens to Logseq exporter.

This module handles loading and accessing configuration values from config.yaml.
Every value has a built-in default, so the exporter runs without a config file.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional
import logging


class ConfigManager:
    """
    Manages configuration loading and access for the exporter.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            logging.debug(f"Configuration file not found: {self.config_path}; using defaults")
            self._config = self._get_default_config()
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, yaml.YAMLError) as e:
            logging.error(f"Failed to load configuration: {e}")
            # Fall back to default configuration
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "paths": {
                "journals_dir": "journals",
                "pages_dir": "pages",
                "metadata_dir": "logseq",
                "log_file": None
            },
            "export": {
                "file_extension": ".md",
                "indent": "  ",
                "convert_task_markers": True
            },
            "logging": {
                "level": "WARNING",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "performance": {
                "max_workers": 1
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "paths.pages_dir")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("paths.pages_dir")  # Returns "pages"
            config.get("export.indent")    # Returns "  "
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def journals_directory(self) -> str:
        """Get the journals subdirectory name."""
        return self.get("paths.journals_dir", "journals")

    @property
    def pages_directory(self) -> str:
        """Get the pages subdirectory name."""
        return self.get("paths.pages_dir", "pages")

    @property
    def metadata_directory(self) -> str:
        """Get the directory reserved for Logseq's own bookkeeping."""
        return self.get("paths.metadata_dir", "logseq")

    @property
    def log_filename(self) -> Optional[str]:
        """Get log file name, or None to log to stderr only."""
        return self.get("paths.log_file")

    @property
    def file_extension(self) -> str:
        return self.get("export.file_extension", ".md")

    @property
    def indent(self) -> str:
        """Get the indent unit used per nesting level."""
        return self.get("export.indent", "  ")

    @property
    def convert_task_markers(self) -> bool:
        return bool(self.get("export.convert_task_markers", True))

    @property
    def max_workers(self) -> int:
        """Get the number of threads used to write files."""
        return max(1, int(self.get("performance.max_workers", 1)))


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
