"""Configuration management for the inventory.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

DEFAULT_EXPORT_NAME = "MathLab_Inventory_Backup.zip"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Config:
    """Application configuration."""

    # Database
    db_path: Path

    # Export
    export_name: str

    # Logging
    log_level: str

    # Checkout
    strict_checkout: bool

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        db_path_str = os.environ.get(
            "MATHLAB_DB_PATH",
            str(Path.home() / ".mathlab" / "inventory.db"),
        )
        if db_path_str == ":memory:":
            db_path = Path(db_path_str)
        else:
            db_path = Path(db_path_str).expanduser()

        return cls(
            db_path=db_path,
            export_name=os.environ.get("MATHLAB_EXPORT_NAME", DEFAULT_EXPORT_NAME),
            log_level=os.environ.get("MATHLAB_LOG_LEVEL", "WARNING").upper(),
            strict_checkout=(
                os.environ.get("MATHLAB_STRICT_CHECKOUT", "false").strip().lower()
                in _TRUTHY
            ),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if str(self.db_path) != ":memory:" and not self.db_path.parent.exists():
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except PermissionError:
                errors.append(f"Cannot create database directory: {self.db_path.parent}")

        if not self.export_name.lower().endswith(".zip"):
            errors.append(f"Export name must end in .zip: {self.export_name}")

        if self.log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            errors.append(f"Unknown log level: {self.log_level}")

        return errors


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
