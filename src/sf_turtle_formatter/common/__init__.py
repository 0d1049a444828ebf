"""日志、异常、指标与配置等通用基础设施。"""

from .exceptions import ErrorCode, FormatterError, StyleConfigurationError, TurtleParseError
from .logging import LoggerFactory

__all__ = [
    "ErrorCode",
    "FormatterError",
    "StyleConfigurationError",
    "TurtleParseError",
    "LoggerFactory",
]
