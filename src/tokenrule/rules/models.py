"""Rule data models — editable Draft and the immutable ValidatedRule."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

TOKEN_BOUND_MIN = 0
TOKEN_BOUND_MAX = 99


class ExpressionType(str, Enum):
    REGULAR = "regular"
    LITERAL = "literal"


class CaseSensitivity(str, Enum):
    MATCH = "match"
    IGNORE = "ignore"
    MATCH_UNICODE = "match-unicode"

    @property
    def label(self) -> str:
        return _CASE_LABELS[self]


_CASE_LABELS = {
    CaseSensitivity.MATCH: "Match case",
    CaseSensitivity.IGNORE: "Ignore case",
    CaseSensitivity.MATCH_UNICODE: "Match unicode (ignore case)",
}


class Modifier(str, Enum):
    """Boolean regex-behaviour flags. Values are the Draft attribute names."""

    CANONICAL_EQUIVALENCE = "canonical_equivalence"
    DOT_ALL = "dot_all"
    MULTILINE = "multiline"
    UNIX_LINES = "unix_lines"

    @property
    def flag_name(self) -> str:
        return _MODIFIER_FLAGS[self]

    @property
    def label(self) -> str:
        return _MODIFIER_LABELS[self]


_MODIFIER_FLAGS = {
    Modifier.CANONICAL_EQUIVALENCE: "CANON_EQ",
    Modifier.DOT_ALL: "DOTALL",
    Modifier.MULTILINE: "MULTILINE",
    Modifier.UNIX_LINES: "UNIX_LINES",
}

_MODIFIER_LABELS = {
    Modifier.CANONICAL_EQUIVALENCE: "Allow canonical equivalence",
    Modifier.DOT_ALL: "Read line delimiters as characters",
    Modifier.MULTILINE: "^ and $ begin and end a line",
    Modifier.UNIX_LINES: "Newline character ends a line",
}


def clamp_bound(value: Any) -> int:
    """Coerce *value* to int and clamp it into the token bound range."""
    if isinstance(value, str):
        value = value.strip()
    if isinstance(value, int):
        number = value
    else:
        try:
            real = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Token bound must be numeric, got {value!r}") from exc
        if math.isnan(real):
            raise ValueError(f"Token bound must be numeric, got {value!r}")
        if math.isinf(real):
            number = TOKEN_BOUND_MAX if real > 0 else TOKEN_BOUND_MIN
        else:
            number = int(real)
    return max(TOKEN_BOUND_MIN, min(TOKEN_BOUND_MAX, number))


@dataclass(frozen=True)
class TokenRange:
    """Inclusive token window. ``start``/``end`` are the *from*/*to* bounds."""

    enabled: bool = False
    start: int = 0
    end: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", clamp_bound(self.start))
        object.__setattr__(self, "end", clamp_bound(self.end))


@dataclass
class Draft:
    """In-progress rule configuration for one editing session."""

    pattern: str = ""
    expression_type: ExpressionType = ExpressionType.REGULAR
    case_sensitivity: CaseSensitivity = CaseSensitivity.MATCH
    token_range: TokenRange = field(default_factory=TokenRange)
    canonical_equivalence: bool = False
    dot_all: bool = True
    multiline: bool = False
    unix_lines: bool = False
    error_message: Optional[str] = None

    @property
    def is_literal(self) -> bool:
        return self.expression_type == ExpressionType.LITERAL

    @property
    def flags(self) -> int:
        return regex_flags(self.case_sensitivity, dot_all=self.dot_all, multiline=self.multiline)


@dataclass(frozen=True)
class ValidatedRule:
    """Immutable snapshot of a Draft, produced only by a successful commit."""

    node_id: str
    pattern: str
    expression_type: ExpressionType
    case_sensitivity: CaseSensitivity
    token_range: TokenRange
    canonical_equivalence: bool
    dot_all: bool
    multiline: bool
    unix_lines: bool
    is_valid: bool = True

    # --- cached compiled pattern (not serialised) ---
    _compiled: Optional[re.Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def flags(self) -> int:
        return regex_flags(self.case_sensitivity, dot_all=self.dot_all, multiline=self.multiline)

    @property
    def compiled_pattern(self) -> re.Pattern[str]:
        if self._compiled is None:
            compiled = compile_pattern(self.pattern, self.expression_type, self.flags)
            object.__setattr__(self, "_compiled", compiled)
        return self._compiled  # type: ignore[return-value]

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape handed to persistence sinks."""
        return {
            "nodeId": self.node_id,
            "pattern": self.pattern,
            "expressionType": self.expression_type.value,
            "caseSensitivity": self.case_sensitivity.value,
            "tokenRange": {
                "enabled": self.token_range.enabled,
                "from": self.token_range.start,
                "to": self.token_range.end,
            },
            "canonicalEquivalence": self.canonical_equivalence,
            "dotAll": self.dot_all,
            "multiline": self.multiline,
            "unixLines": self.unix_lines,
            "isValid": self.is_valid,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidatedRule":
        token_range = data.get("tokenRange") or {}
        return cls(
            node_id=data["nodeId"],
            pattern=data["pattern"],
            expression_type=ExpressionType(data.get("expressionType", "regular")),
            case_sensitivity=CaseSensitivity(data.get("caseSensitivity", "match")),
            token_range=TokenRange(
                enabled=bool(token_range.get("enabled", False)),
                start=token_range.get("from", 0),
                end=token_range.get("to", 0),
            ),
            canonical_equivalence=bool(data.get("canonicalEquivalence", False)),
            dot_all=bool(data.get("dotAll", False)),
            multiline=bool(data.get("multiline", False)),
            unix_lines=bool(data.get("unixLines", False)),
            is_valid=bool(data.get("isValid", True)),
        )


def regex_flags(
    case_sensitivity: CaseSensitivity, *, dot_all: bool = False, multiline: bool = False
) -> int:
    """Map rule options onto ``re`` flags.

    Canonical equivalence and unix-lines have no ``re`` counterpart; they are
    carried on the rule for the downstream engine only. ``str`` patterns
    are Unicode-aware already, so match-unicode only adds IGNORECASE.
    """
    flags = 0
    if case_sensitivity == CaseSensitivity.IGNORE:
        flags |= re.IGNORECASE
    elif case_sensitivity == CaseSensitivity.MATCH_UNICODE:
        flags |= re.IGNORECASE
    if dot_all:
        flags |= re.DOTALL
    if multiline:
        flags |= re.MULTILINE
    return flags


def compile_pattern(pattern: str, expression_type: ExpressionType, flags: int = 0) -> re.Pattern[str]:
    """Compile *pattern*; literal text is escaped first. Raises ``re.error``."""
    if expression_type == ExpressionType.LITERAL:
        return re.compile(re.escape(pattern), flags)
    return re.compile(pattern, flags)
