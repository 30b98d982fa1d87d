"""日志配置

统一 loguru 输出格式。
"""

import sys

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(level: str = "INFO") -> int:
    """替换默认 sink，只向 stderr 输出指定级别以上的日志

    Args:
        level: 日志级别

    Returns:
        新 sink 的 handler id
    """
    logger.remove()
    return logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
