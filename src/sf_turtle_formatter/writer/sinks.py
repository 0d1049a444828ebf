"""输出目标。

- ``TextSink``：在内存中累积文本；
- ``StreamSink``：按指定编码写入二进制流，I/O 失败只记录不抛出；
- ``NullSink``：丢弃全部输出，供列表换行的预渲染测宽使用。
"""
from __future__ import annotations

import codecs
from typing import BinaryIO, Protocol

from sf_turtle_formatter.common.logging import LoggerFactory
from sf_turtle_formatter.common.observability import observe_write_failure

OUTPUT_ERROR_MESSAGE = "Could not write to stream"
UCHAR_ERRORS = "turtle-uchar"


def _uchar_replace(error: UnicodeError) -> tuple[str, int]:
    if not isinstance(error, UnicodeEncodeError):
        raise error
    chunk = error.object[error.start:error.end]
    escaped = "".join(f"\\u{ord(c):04X}" if ord(c) <= 0xFFFF else f"\\U{ord(c):08X}" for c in chunk)
    return escaped, error.end


# 目标编码无法表示的字符写成 Turtle 的 UCHAR 转义
codecs.register_error(UCHAR_ERRORS, _uchar_replace)


class OutputSink(Protocol):
    """顺序写入的文本输出目标。"""

    def write(self, text: str) -> None:
        ...


class NullSink:
    """丢弃所有写入。"""

    def write(self, text: str) -> None:  # noqa: ARG002 - 有意丢弃
        return None


class TextSink:
    """内存文本缓冲。"""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def write(self, text: str) -> None:
        self._parts.append(text)

    def getvalue(self) -> str:
        return "".join(self._parts)


class StreamSink:
    """把文本编码后写入二进制流。

    参数:
        stream (BinaryIO): 目标流，例如文件或 ``io.BytesIO``。
        encoding (str): Python 编码名；无法编码的字符写成 ``\\uXXXX``。
        name (str): 指标标签中使用的输出名称。

    写入失败（``OSError`` 或已关闭流的 ``ValueError``）会记录日志与指标，并追加到
    :attr:`failures`，不会中断渲染。
    """

    def __init__(self, stream: BinaryIO, encoding: str = "utf-8", *, name: str = "stream") -> None:
        self._stream = stream
        self._encoding = encoding
        self._name = name
        self.failures: list[str] = []
        self._logger = LoggerFactory.create_default_logger(__name__)

    def write(self, text: str) -> None:
        self.write_bytes(text.encode(self._encoding, UCHAR_ERRORS))

    def write_bytes(self, data: bytes) -> None:
        try:
            self._stream.write(data)
        except (OSError, ValueError) as exc:
            self._logger.error("%s: %s", OUTPUT_ERROR_MESSAGE, exc, exc_info=True)
            self.failures.append(str(exc))
            observe_write_failure(self._name)
