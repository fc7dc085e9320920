"""Pattern validation and the commit step that turns a Draft into a rule."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from tokenrule.rules.collaborators import PersistenceSink, VisibilityController
from tokenrule.rules.models import Draft, ExpressionType, ValidatedRule, compile_pattern

logger = logging.getLogger(__name__)

INVALID_EXPRESSION_MESSAGE = "The expression is not a valid Regex"


class ValidationError(Exception):
    """A recoverable commit failure. ``message`` is safe to show to the user."""

    message = INVALID_EXPRESSION_MESSAGE

    def __init__(self, reason: str = "") -> None:
        super().__init__(self.message)
        self.reason = reason


class EmptyPatternError(ValidationError):
    """The pattern is blank after trimming."""


class InvalidPatternError(ValidationError):
    """The pattern does not compile as a regular expression."""

    def __init__(self, reason: str = "", detail: Optional[Exception] = None) -> None:
        super().__init__(reason)
        self.detail = detail


@dataclass(frozen=True)
class CommitResult:
    """Outcome of a commit attempt: exactly one of ``rule`` / ``error`` is set."""

    rule: Optional[ValidatedRule] = None
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def check_pattern(draft: Draft) -> Optional[ValidationError]:
    """Return the validation error for *draft*'s pattern, or None if it is valid."""
    if not draft.pattern.strip():
        return EmptyPatternError("You must enter an expression.")
    if draft.expression_type == ExpressionType.LITERAL:
        return None
    try:
        compile_pattern(draft.pattern, draft.expression_type)
    except (re.error, ValueError, OverflowError, RecursionError) as exc:
        return InvalidPatternError(str(exc), detail=exc)
    return None


def snapshot(draft: Draft, node_id: str) -> ValidatedRule:
    """Freeze every Draft field except the error message."""
    return ValidatedRule(
        node_id=node_id,
        pattern=draft.pattern,
        expression_type=draft.expression_type,
        case_sensitivity=draft.case_sensitivity,
        token_range=draft.token_range,
        canonical_equivalence=draft.canonical_equivalence,
        dot_all=draft.dot_all,
        multiline=draft.multiline,
        unix_lines=draft.unix_lines,
        is_valid=True,
    )


def validate_and_commit(
    draft: Draft,
    node_id: str,
    sink: PersistenceSink,
    visibility: VisibilityController,
) -> CommitResult:
    """Validate *draft* and, on success, hand a ValidatedRule to *sink*.

    On failure ``draft.error_message`` is set and neither collaborator is
    called. Exceptions raised by the sink propagate; ``hide`` is then skipped.
    """
    error = check_pattern(draft)
    if error is not None:
        draft.error_message = error.message
        logger.info("Commit rejected for node %s: %s", node_id, type(error).__name__)
        logger.debug("Rejected pattern %r: %s", draft.pattern, error.reason)
        return CommitResult(error=error)

    rule = snapshot(draft, node_id)
    sink.persist(rule)
    visibility.hide()
    draft.error_message = None
    logger.info("Committed %s rule for node %s", rule.expression_type.value, node_id)
    return CommitResult(rule=rule)
