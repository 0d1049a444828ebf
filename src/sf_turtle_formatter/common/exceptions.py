"""格式化器统一异常定义。

所有对外抛出的异常均继承 :class:`FormatterError`，携带 ``ErrorCode`` 与可选的
``details`` 字典，便于调用方按错误码分类处理或写入日志。
"""
from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """错误码枚举。"""

    INVALID_STYLE = "INVALID_STYLE"
    CONFIG_ERROR = "CONFIG_ERROR"
    PARSE_ERROR = "PARSE_ERROR"


class FormatterError(Exception):
    """格式化器基础异常。

    参数:
        code (ErrorCode): 错误码。
        message (str): 人类可读的错误描述。
        details (dict[str, Any] | None): 附加上下文，例如行号、配置路径。
    """

    def __init__(self, code: ErrorCode, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return f"[{self.code.value}] {self.message}"
        return f"[{self.code.value}] {self.message} {self.details}"

    def to_dict(self) -> dict[str, Any]:
        """转换为可序列化的字典。"""

        return {"code": self.code.value, "message": self.message, "details": dict(self.details)}


class StyleConfigurationError(FormatterError):
    """配置文件无法加载或样式校验失败。"""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.CONFIG_ERROR, message, details=details)


class TurtleParseError(FormatterError):
    """Turtle 源文本语法错误。"""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.PARSE_ERROR, message, details=details)
