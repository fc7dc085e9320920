"""Tests for rule models — flags, compiled patterns, wire shape."""

import re

import pytest

from tokenrule.rules.models import (
    CaseSensitivity,
    ExpressionType,
    TokenRange,
    ValidatedRule,
    clamp_bound,
    regex_flags,
)


def _rule(**overrides) -> ValidatedRule:
    values = dict(
        node_id="node-1",
        pattern="[A-Z]+",
        expression_type=ExpressionType.REGULAR,
        case_sensitivity=CaseSensitivity.MATCH,
        token_range=TokenRange(enabled=True, start=1, end=4),
        canonical_equivalence=False,
        dot_all=True,
        multiline=False,
        unix_lines=True,
    )
    values.update(overrides)
    return ValidatedRule(**values)


class TestFlags:
    def test_case_match(self):
        assert regex_flags(CaseSensitivity.MATCH) == 0

    def test_ignore_case(self):
        assert regex_flags(CaseSensitivity.IGNORE) & re.IGNORECASE

    def test_match_unicode(self):
        flags = regex_flags(CaseSensitivity.MATCH_UNICODE)
        assert flags == re.IGNORECASE

    def test_dot_all_and_multiline(self):
        flags = regex_flags(CaseSensitivity.MATCH, dot_all=True, multiline=True)
        assert flags & re.DOTALL
        assert flags & re.MULTILINE


class TestClamp:
    @pytest.mark.parametrize("value,expected", [(-5, 0), (50, 50), (150, 99), (" 12 ", 12)])
    def test_clamp(self, value, expected):
        assert clamp_bound(value) == expected

    def test_token_range_clamps_on_construction(self):
        tr = TokenRange(enabled=True, start=-1, end=1000)
        assert (tr.start, tr.end) == (0, 99)


class TestValidatedRule:
    def test_compiled_pattern_cached(self):
        rule = _rule()
        p1 = rule.compiled_pattern
        assert p1 is rule.compiled_pattern
        assert p1.search("abc DEF")

    def test_literal_compiles_escaped(self):
        rule = _rule(pattern="(unclosed", expression_type=ExpressionType.LITERAL, dot_all=False)
        assert rule.compiled_pattern.search("call (unclosed here")

    def test_ignore_case_applies(self):
        rule = _rule(case_sensitivity=CaseSensitivity.IGNORE)
        assert rule.compiled_pattern.fullmatch("abc")

    def test_wire_shape(self):
        data = _rule().to_dict()
        assert data == {
            "nodeId": "node-1",
            "pattern": "[A-Z]+",
            "expressionType": "regular",
            "caseSensitivity": "match",
            "tokenRange": {"enabled": True, "from": 1, "to": 4},
            "canonicalEquivalence": False,
            "dotAll": True,
            "multiline": False,
            "unixLines": True,
            "isValid": True,
        }

    def test_from_dict(self):
        rule = _rule(case_sensitivity=CaseSensitivity.MATCH_UNICODE)
        assert ValidatedRule.from_dict(rule.to_dict()) == rule

    def test_from_dict_rejects_unknown_enum(self):
        data = _rule().to_dict()
        data["expressionType"] = "glob"
        with pytest.raises(ValueError):
            ValidatedRule.from_dict(data)
