"""Tests for the RuleConfigurator editing session."""

import pytest

from tokenrule.rules import ConfiguratorError, RuleConfigurator
from tokenrule.rules.models import CaseSensitivity, ExpressionType, Modifier
from tokenrule.rules.validation import INVALID_EXPRESSION_MESSAGE, InvalidPatternError


class TestSetup:
    @pytest.mark.parametrize("node_id", ["", "   "])
    def test_node_id_required(self, node_id, sink, visibility):
        with pytest.raises(ConfiguratorError):
            RuleConfigurator(node_id, sink, visibility)

    def test_starts_from_defaults(self, session):
        assert session.draft.pattern == ""
        assert session.draft.dot_all is True
        assert session.locked_modifiers == {Modifier.DOT_ALL}

    def test_initial_values(self, sink, visibility):
        session = RuleConfigurator(
            "node-9", sink, visibility, initial={"case_sensitivity": "ignore", "multiline": True}
        )
        assert session.draft.case_sensitivity == CaseSensitivity.IGNORE
        assert session.draft.multiline is True


class TestEditing:
    def test_modifier_locked_returns_false(self, session):
        assert session.set_modifier("dot_all", False) is False
        assert session.draft.dot_all is True

    def test_modifier_unlocked_returns_true(self, session):
        session.set_case_sensitivity("ignore")
        assert session.set_modifier("dot_all", False) is True
        assert session.draft.dot_all is False

    def test_literal_round_trip(self, session):
        session.set_case_sensitivity("ignore")
        session.set_modifier("multiline", True)
        session.set_expression_type("literal")
        assert session.locked_modifiers == set(Modifier)
        assert session.set_modifier("multiline", True) is False
        session.set_expression_type(ExpressionType.REGULAR)
        assert session.draft.multiline is False
        assert session.set_modifier("multiline", True) is True

    def test_token_range(self, session):
        session.set_token_range_enabled(True)
        session.set_token_range_bound("from", 150)
        session.set_token_range_bound("to", -3)
        tr = session.draft.token_range
        assert (tr.enabled, tr.start, tr.end) == (True, 99, 0)


class TestCommit:
    def test_failed_commit_then_retry(self, session, sink, visibility):
        session.set_pattern("(unclosed")
        result = session.commit()
        assert isinstance(result.error, InvalidPatternError)
        assert session.error_message == INVALID_EXPRESSION_MESSAGE
        assert sink.rules == []

        session.set_pattern("(closed)")
        assert session.error_message is None
        result = session.commit()
        assert result.ok
        assert sink.latest.pattern == "(closed)"
        assert visibility.visible is False

    def test_switching_to_literal_clears_error_and_commits(self, session, sink):
        session.set_pattern("(unclosed")
        session.commit()
        session.set_expression_type("literal")
        assert session.error_message is None
        result = session.commit()
        assert result.ok
        assert result.rule.expression_type == ExpressionType.LITERAL
        assert result.rule.dot_all is False

    def test_case_edit_keeps_error(self, session):
        session.commit()
        session.set_case_sensitivity("ignore")
        assert session.error_message == INVALID_EXPRESSION_MESSAGE

    def test_commit_is_usable_as_callback(self, session, sink):
        session.set_pattern("abc")
        on_click = session.commit
        assert on_click().ok
        assert len(sink.rules) == 1

    def test_rule_carries_node_id(self, session):
        session.set_pattern("x+")
        assert session.commit().rule.node_id == "node-1"
