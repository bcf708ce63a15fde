"""Configuration exports."""

from clinic_ai.config.logger import configure_logging, get_logger, log_stage
from clinic_ai.config.settings import settings

__all__ = ["configure_logging", "get_logger", "log_stage", "settings"]
