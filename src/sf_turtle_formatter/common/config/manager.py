"""配置加载与全局访问入口。

查找顺序：
1. ``ConfigManager.load(override_path=...)`` 显式传入的 YAML 文件；
2. 环境变量 ``SF_TURTLE_FORMATTER_CONFIG`` 指向的 YAML 文件；
3. 均未提供时使用模型默认值。
"""
from __future__ import annotations

import os
from pathlib import Path
from threading import Lock
from typing import Any, ClassVar

import yaml
from pydantic import ValidationError

from sf_turtle_formatter.common.config.settings import Settings
from sf_turtle_formatter.common.exceptions import StyleConfigurationError
from sf_turtle_formatter.common.logging import LoggerFactory

CONFIG_ENV_VAR = "SF_TURTLE_FORMATTER_CONFIG"


class ConfigManager:
    """持有当前生效的 :class:`Settings`。"""

    _current: ClassVar[ConfigManager | None] = None
    _lock: ClassVar[Lock] = Lock()

    def __init__(self, settings: Settings, source: Path | None = None) -> None:
        self.settings = settings
        self.source = source

    @classmethod
    def load(cls, override_path: str | Path | None = None) -> ConfigManager:
        """加载配置并设为当前配置。

        参数:
            override_path (str | Path | None): YAML 配置文件路径；为空时读取环境变量。

        返回:
            ConfigManager: 新的当前配置管理器。

        异常:
            StyleConfigurationError: 文件不存在、YAML 语法错误或字段校验失败。
        """

        raw_path = override_path or os.environ.get(CONFIG_ENV_VAR)
        path = Path(raw_path) if raw_path else None
        data = cls._read_yaml(path) if path is not None else {}
        try:
            settings = Settings.model_validate(data)
        except ValidationError as exc:
            raise StyleConfigurationError(
                "配置校验失败",
                details={"path": str(path) if path else None, "errors": exc.errors(include_url=False)},
            ) from exc

        LoggerFactory.configure(level=settings.logging.level, fmt=settings.logging.format)
        manager = cls(settings, path)
        with cls._lock:
            cls._current = manager
        LoggerFactory.create_default_logger(__name__).debug("配置已加载: %s", path or "<defaults>")
        return manager

    @classmethod
    def current(cls) -> ConfigManager:
        """返回当前配置；首次访问时按默认查找顺序加载。"""

        manager = cls._current
        if manager is None:
            manager = cls.load()
        return manager

    @classmethod
    def reset(cls) -> None:
        """清除当前配置（主要用于测试隔离）。"""

        with cls._lock:
            cls._current = None

    @staticmethod
    def _read_yaml(path: Path) -> dict[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as handle:
                loaded = yaml.safe_load(handle)
        except OSError as exc:
            raise StyleConfigurationError("无法读取配置文件", details={"path": str(path)}) from exc
        except yaml.YAMLError as exc:
            raise StyleConfigurationError("配置文件 YAML 语法错误", details={"path": str(path), "error": str(exc)}) from exc
        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise StyleConfigurationError("配置文件顶层必须是映射", details={"path": str(path)})
        return loaded
