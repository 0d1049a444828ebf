"""前缀表与 URI 书写形式。

``PrefixTable`` 负责把绝对 IRI 转换为 Turtle 中最短的合法书写形式：

- 以 ``empty_base`` 开头的 IRI 先去掉该前缀（用于还原 ``<>``、``<#x>`` 这类相对引用）；
- 在所有可匹配的前缀中选择结果最短的前缀名形式（同长按字典序），本地名必须符合
  Turtle ``PN_LOCAL`` 且无需反斜杠转义；
- 否则回退为 ``<iri>``，IRIREF 中不允许出现的字符写成 ``\\uXXXX``。
"""
from __future__ import annotations

import re
from collections.abc import Iterator, Mapping

from sf_turtle_formatter.common.logging import LoggerFactory

_PN_CHARS_BASE = (
    "A-Za-z\u00C0-\u00D6\u00D8-\u00F6\u00F8-\u02FF\u0370-\u037D\u037F-\u1FFF"
    "\u200C-\u200D\u2070-\u218F\u2C00-\u2FEF\u3001-\uD7FF\uF900-\uFDCF"
    "\uFDF0-\uFFFD\U00010000-\U000EFFFF"
)
_PN_CHARS_U = _PN_CHARS_BASE + "_"
_PN_CHARS = _PN_CHARS_U + "\\-0-9\u00B7\u0300-\u036F\u203F-\u2040"
_PERCENT = "%[0-9A-Fa-f]{2}"

PN_PREFIX = re.compile(f"[{_PN_CHARS_BASE}](?:[{_PN_CHARS}.]*[{_PN_CHARS}])?")
PN_LOCAL = re.compile(
    f"(?:[{_PN_CHARS_U}:0-9]|{_PERCENT})"
    f"(?:(?:[{_PN_CHARS}.:]|{_PERCENT})*(?:[{_PN_CHARS}:]|{_PERCENT}))?"
)
_IRIREF_ILLEGAL = re.compile(r'[\x00-\x20<>"{}|^`\\]')

_logger = LoggerFactory.create_default_logger(__name__)


def is_valid_prefix_name(prefix: str) -> bool:
    """``prefix`` 是否可以出现在 ``@prefix`` 声明中（空串表示默认前缀）。"""

    return prefix == "" or PN_PREFIX.fullmatch(prefix) is not None


def is_valid_local_name(local: str) -> bool:
    """``local`` 是否可以不经转义地作为前缀名的本地部分。"""

    return local == "" or PN_LOCAL.fullmatch(local) is not None


def _escape_iri_char(match: re.Match[str]) -> str:
    code = ord(match.group())
    return f"\\u{code:04X}"


def bracketed(iri: str) -> str:
    """返回 ``<iri>`` 形式，非法字符使用 UCHAR 转义。"""

    if _IRIREF_ILLEGAL.search(iri) is None:
        return f"<{iri}>"
    _logger.debug("IRI 含有 IRIREF 不允许的字符，已转义: %r", iri)
    return f"<{_IRIREF_ILLEGAL.sub(_escape_iri_char, iri)}>"


class PrefixTable(Mapping[str, str]):
    """不可变的前缀 → 命名空间 IRI 映射，并缓存每个 IRI 的书写形式。

    参数:
        prefixes (Mapping[str, str]): 前缀声明；前缀名不合法的条目会被丢弃并记录警告。
        empty_base (str | None): 解析时用于占位的基础 IRI，书写时从 IRI 前部剥离。
    """

    def __init__(self, prefixes: Mapping[str, str], empty_base: str | None = None) -> None:
        accepted: dict[str, str] = {}
        for prefix, iri in prefixes.items():
            if not is_valid_prefix_name(prefix):
                _logger.warning("忽略非法前缀名: %r -> %s", prefix, iri)
                continue
            accepted[prefix] = str(iri)
        self._prefixes = accepted
        self._empty_base = empty_base or None
        self._forms: dict[str, str] = {}

    def __getitem__(self, prefix: str) -> str:
        return self._prefixes[prefix]

    def __iter__(self) -> Iterator[str]:
        return iter(self._prefixes)

    def __len__(self) -> int:
        return len(self._prefixes)

    @property
    def empty_base(self) -> str | None:
        return self._empty_base

    def restricted_to(self, prefixes: set[str]) -> PrefixTable:
        """返回只保留给定前缀名的新表。"""

        return PrefixTable({p: i for p, i in self._prefixes.items() if p in prefixes}, self._empty_base)

    def relative(self, iri: str) -> str:
        """剥离 ``empty_base``；不匹配时原样返回。"""

        if self._empty_base and iri.startswith(self._empty_base):
            return iri[len(self._empty_base):]
        return iri

    def short_form(self, iri: str) -> str | None:
        """返回最短的合法前缀名形式；没有可用前缀时返回 ``None``。"""

        best: str | None = None
        for prefix, namespace in self._prefixes.items():
            if not iri.startswith(namespace):
                continue
            local = iri[len(namespace):]
            if not is_valid_local_name(local):
                continue
            candidate = f"{prefix}:{local}"
            if best is None or (len(candidate), candidate) < (len(best), best):
                best = candidate
        return best

    def written_form(self, iri: str) -> str:
        """返回 ``iri`` 在 Turtle 中的书写形式（带缓存）。"""

        form = self._forms.get(iri)
        if form is None:
            form = self.short_form(iri) or bracketed(self.relative(iri))
            self._forms[iri] = form
        return form
