"""异常体系单元测试。"""
from __future__ import annotations

from sf_turtle_formatter.common.exceptions import (
    ErrorCode,
    FormatterError,
    StyleConfigurationError,
    TurtleParseError,
)


class TestFormatterError:
    def test_str_without_details(self) -> None:
        error = FormatterError(ErrorCode.PARSE_ERROR, "bad input")
        assert str(error) == "[PARSE_ERROR] bad input"

    def test_str_with_details(self) -> None:
        error = FormatterError(ErrorCode.CONFIG_ERROR, "broken", details={"path": "a.yaml"})
        assert str(error) == "[CONFIG_ERROR] broken {'path': 'a.yaml'}"

    def test_to_dict_copies_details(self) -> None:
        """to_dict 返回的 details 与异常内部状态互不影响。"""

        error = FormatterError(ErrorCode.INVALID_STYLE, "label", details={"label": "a:b"})
        payload = error.to_dict()
        payload["details"]["label"] = "changed"
        assert error.details == {"label": "a:b"}
        assert payload["code"] == "INVALID_STYLE"

    def test_subclasses_carry_fixed_codes(self) -> None:
        assert StyleConfigurationError("x").code is ErrorCode.CONFIG_ERROR
        assert TurtleParseError("y", details={"line": 3}).code is ErrorCode.PARSE_ERROR
        assert isinstance(TurtleParseError("y"), FormatterError)

    def test_error_codes(self) -> None:
        assert {code.value for code in ErrorCode} == {"INVALID_STYLE", "CONFIG_ERROR", "PARSE_ERROR"}
