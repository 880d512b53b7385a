"""
日志工具模块
"""

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger as _loguru_logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} - {message}"

_LOGGER_CONFIGURED = False


def setup_logger(
    name: str = "bundlex",
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    force: bool = False,
):
    """配置 loguru 并返回绑定了 name 的 logger。

    - 全局 sink 只配置一次（force=True 时重新配置）
    - 控制台输出到 stderr，避免与表格输出混在一起
    - 指定 log_file 时额外写入按大小轮转的日志文件
    """
    global _LOGGER_CONFIGURED
    if force or not _LOGGER_CONFIGURED:
        _loguru_logger.remove()
        _loguru_logger.configure(extra={"name": name})
        _loguru_logger.add(sys.stderr, level=level.upper(), format=CONSOLE_FORMAT)
        if log_file:
            _loguru_logger.add(
                str(log_file),
                level="DEBUG",
                rotation="10 MB",
                retention="30 days",
                encoding="utf-8",
                format=FILE_FORMAT,
            )
        _LOGGER_CONFIGURED = True
    return _loguru_logger.bind(name=name)
