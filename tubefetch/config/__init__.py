from .logging_config import configure_logging
from .settings import AppConfig, get_config

__all__ = ["AppConfig", "configure_logging", "get_config"]
