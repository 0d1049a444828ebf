"""全局配置模型。"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from sf_turtle_formatter.common.logging import DEFAULT_FORMAT
from sf_turtle_formatter.style.formatting_style import FormattingStyle


class LoggingSettings(BaseModel):
    """日志配置。"""

    level: str = Field(default="INFO", description="日志级别，如 DEBUG/INFO/WARNING")
    format: str = Field(default=DEFAULT_FORMAT, description="logging.Formatter 格式串")


class Settings(BaseModel):
    """格式化器运行配置根模型。

    参数：
        logging: 日志级别与格式；
        style: 未显式传入样式时 ``TurtleFormatter`` 使用的默认样式。
    """

    model_config = ConfigDict(frozen=True)

    logging: LoggingSettings = LoggingSettings()
    style: FormattingStyle = FormattingStyle()
