"""
Configuration for the Theme Park Operations core.

This file contains directory locations, staffing rules and logging setup.
Paths can be overridden with environment variables so the same code runs
against different park data sets.
"""

import os
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

# =============================================================================
# LOGGING
# =============================================================================

LOGGER_NAME = "ThemeParkOps"

_log_file_path: Optional[str] = None


def get_logger(component: Optional[str] = None) -> logging.Logger:
    """
    Get the application logger, optionally scoped to a component.

    Args:
        component: Sub-logger name (e.g. "staffing", "persistence")

    Returns:
        Logger instance under the application namespace
    """
    if component:
        return logging.getLogger(f"{LOGGER_NAME}.{component}")
    return logging.getLogger(LOGGER_NAME)


def setup_file_logging(log_dir: str = "output") -> str:
    """
    Set up file logging for the whole application.

    Safe to call more than once; the first call wins.

    Args:
        log_dir: Directory for log files

    Returns:
        Path to the log file
    """
    global _log_file_path
    if _log_file_path is not None:
        return _log_file_path

    Path(log_dir).mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"park_operations_log_{timestamp}.txt")

    app_logger = get_logger()
    app_logger.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    app_logger.addHandler(file_handler)
    _log_file_path = log_file

    app_logger.info("=" * 70)
    app_logger.info("THEME PARK OPERATIONS - LOG FILE")
    app_logger.info(f"Session started: {datetime.now().isoformat()}")
    app_logger.info("=" * 70)

    return log_file


# =============================================================================
# ENVIRONMENT
# =============================================================================

def get_data_dir() -> str:
    """
    Get the directory holding the park's flat-file records.

    Returns:
        Value of PARK_DATA_DIR, or "data" when unset
    """
    data_dir = os.environ.get("PARK_DATA_DIR", "")
    if not data_dir:
        logging.getLogger(LOGGER_NAME).debug(
            "PARK_DATA_DIR not set, using ./data for park records"
        )
        return "data"
    return data_dir


def get_output_dir() -> str:
    """Get the directory for logs and exported rosters (PARK_OUTPUT_DIR)."""
    return os.environ.get("PARK_OUTPUT_DIR", "") or "output"


# =============================================================================
# STAFFING CONFIGURATION
# =============================================================================

@dataclass
class StaffingConfig:
    """Configuration for staffing assignment rules."""

    # Reject operators without the training a ride's risk level demands,
    # cooks without kitchen training and cashiers who cannot work cash
    enforce_qualifications: bool = True

    # Minimum duty counts for service places
    min_cooks_per_cafeteria: int = 1
    min_cashiers_per_place: int = 1


# =============================================================================
# PERSISTENCE CONFIGURATION
# =============================================================================

@dataclass
class PersistenceConfig:
    """Configuration for the flat-file record collaborator."""

    data_dir: str = field(default_factory=get_data_dir)
    date_format: str = "%Y-%m-%d"
    field_separator: str = "|"
    list_separator: str = ","
    null_token: str = "null"
    encoding: str = "utf-8"


# =============================================================================
# MAIN APPLICATION CONFIGURATION
# =============================================================================

@dataclass
class AppConfig:
    """Main application configuration."""

    staffing: StaffingConfig = field(default_factory=StaffingConfig)
    persistence: PersistenceConfig = field(default_factory=PersistenceConfig)

    # Output settings
    output_dir: str = field(default_factory=get_output_dir)
    verbose: bool = False

    @property
    def log_dir(self) -> str:
        """Logs live next to exported rosters."""
        return self.output_dir

    @classmethod
    def load(cls) -> "AppConfig":
        """Load configuration from environment and defaults."""
        return cls()


# Global configuration instance
config = AppConfig.load()
