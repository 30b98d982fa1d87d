"""BrainMux 核心层

提供全局配置、日志和异常定义。
"""

from .config import BrainMuxSettings, get_settings, reset_settings
from .exceptions import (
    BrainMuxError,
    IndexTimeoutError,
    IndexUnavailableError,
    RegistryError,
)
from .logging import setup_logging

__all__ = [
    # Config
    "BrainMuxSettings",
    "get_settings",
    "reset_settings",
    # Logging
    "setup_logging",
    # Exceptions
    "BrainMuxError",
    "IndexUnavailableError",
    "IndexTimeoutError",
    "RegistryError",
]
