"""Configuration management"""
import os
import logging
from dotenv import load_dotenv

from elevare.exceptions import ConfigurationError

load_dotenv()

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Dynamic threshold adjustments
# An adjustment is only proposed when we are at least this confident in it...
ADJUSTMENT_MIN_CONFIDENCE: float = float(os.getenv("ADJUSTMENT_MIN_CONFIDENCE", "0.7"))
# ...and when it moves the target by at least this fraction of the original
ADJUSTMENT_MIN_RELATIVE_CHANGE: float = float(os.getenv("ADJUSTMENT_MIN_RELATIVE_CHANGE", "0.2"))


# Validation
def validate_config() -> None:
    """Validate configuration values"""
    if not isinstance(logging.getLevelName(LOG_LEVEL.upper()), int):
        raise ConfigurationError(
            f"LOG_LEVEL must be a logging level name, got {LOG_LEVEL!r}",
            config_key="LOG_LEVEL"
        )
    if not 0 <= ADJUSTMENT_MIN_CONFIDENCE <= 1:
        raise ConfigurationError(
            "ADJUSTMENT_MIN_CONFIDENCE must be between 0 and 1",
            config_key="ADJUSTMENT_MIN_CONFIDENCE"
        )
    if not 0 <= ADJUSTMENT_MIN_RELATIVE_CHANGE <= 1:
        raise ConfigurationError(
            "ADJUSTMENT_MIN_RELATIVE_CHANGE must be between 0 and 1",
            config_key="ADJUSTMENT_MIN_RELATIVE_CHANGE"
        )
