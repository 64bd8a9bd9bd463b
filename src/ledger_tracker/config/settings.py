import os
from dataclasses import dataclass, fields
from pathlib import Path
import json
from typing import Dict, Any, Optional

# Package defaults (bundled with code)
PACKAGE_CONFIG_DIR = Path(__file__).parent / "defaults"

# User configs (in project root, gitignored)
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
USER_CONFIG_DIR = PROJECT_ROOT / "config"

DB_PATH_ENV_VAR = "LEDGER_TRACKER_DB"

class ConfigLoader:
    """Load configuration with user overrides"""

    @staticmethod
    def load_config(config_name: str) -> Dict[str, Any]:
        """
        Load config with fallback: user config -> default config

        Args:
            config_name: Name of the config file (e.g., 'ledger.json')

        Raises:
            FileNotFoundError: If no config file was found

        Returns:
            Parsed JSON configuration
        """
        user_config_path = USER_CONFIG_DIR / config_name
        if user_config_path.exists():
            with open(user_config_path) as f:
                return json.load(f)

        default_config_path = PACKAGE_CONFIG_DIR / config_name
        if default_config_path.exists():
            with open(default_config_path) as f:
                return json.load(f)

        raise FileNotFoundError(
            f"Config file '{config_name}' not found in:\n"
            f" - {user_config_path}\n"
            f" - {default_config_path}"
        )

    @staticmethod
    def load_ledger_config() -> Dict[str, Any]:
        """Load the ledger settings configuration"""
        return ConfigLoader.load_config('ledger.json')

@dataclass
class LedgerSettings:
    """Settings for the ledger, its storage and its display"""
    db_path: str = "data/ledger.db"
    storage_key: str = "transactions"
    theme_key: str = "theme"
    locale: str = "en-IN"
    currency: str = "INR"
    export_filename: str = "transactions.xlsx"
    sheet_name: str = "Transactions"

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "LedgerSettings":
        """Build settings from a config dict, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in config.items() if key in known})

    @classmethod
    def load(cls, db_path: Optional[str] = None) -> "LedgerSettings":
        """
        Load settings from config files.

        The database path can be overridden explicitly or through
        the LEDGER_TRACKER_DB environment variable.
        """
        settings = cls.from_dict(ConfigLoader.load_ledger_config())

        override = db_path or os.environ.get(DB_PATH_ENV_VAR)
        if override:
            settings.db_path = str(override)

        return settings
