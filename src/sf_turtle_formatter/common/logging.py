"""日志工厂。

统一创建带默认格式的 ``logging.Logger``，避免各模块重复配置 handler。
``ConfigManager.load`` 会调用 :meth:`LoggerFactory.configure` 同步日志级别与格式。
"""
from __future__ import annotations

import logging
from threading import Lock

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class LoggerFactory:
    """按名称创建并缓存 Logger。"""

    _lock = Lock()
    _level: int = logging.INFO
    _format: str = DEFAULT_FORMAT
    _configured: set[str] = set()

    @classmethod
    def configure(cls, *, level: str | int = logging.INFO, fmt: str | None = None) -> None:
        """更新全局日志级别与格式，并应用到已创建的 Logger。

        参数:
            level (str | int): 日志级别，如 ``"DEBUG"`` 或 ``logging.DEBUG``。
            fmt (str | None): 日志格式；为 ``None`` 时保持当前格式。
        """

        resolved = logging.getLevelName(level.upper()) if isinstance(level, str) else level
        if not isinstance(resolved, int):
            raise ValueError(f"未知日志级别: {level}")
        with cls._lock:
            cls._level = resolved
            if fmt:
                cls._format = fmt
            for name in cls._configured:
                logger = logging.getLogger(name)
                logger.setLevel(cls._level)
                for handler in logger.handlers:
                    handler.setFormatter(logging.Formatter(cls._format))

    @classmethod
    def create_default_logger(cls, name: str) -> logging.Logger:
        """返回带默认 handler 的 Logger；重复调用不会叠加 handler。"""

        logger = logging.getLogger(name)
        with cls._lock:
            if name not in cls._configured:
                handler = logging.StreamHandler()
                handler.setFormatter(logging.Formatter(cls._format))
                logger.addHandler(handler)
                logger.setLevel(cls._level)
                cls._configured.add(name)
        return logger
