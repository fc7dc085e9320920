"""JSON reporter for committed rules and commit outcomes."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

from tokenrule.rules.models import ValidatedRule
from tokenrule.rules.validation import CommitResult


def to_dict(result: CommitResult) -> Dict[str, Any]:
    """Convert a CommitResult to a JSON-serialisable dict."""
    if result.error is not None:
        return {
            "committed": False,
            "error": type(result.error).__name__,
            "message": result.error.message,
        }
    if result.rule is None:
        raise ValueError("CommitResult carries neither a rule nor an error")
    return {"committed": True, "rule": result.rule.to_dict()}


def render(result: CommitResult) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result), indent=2)


def render_rules(rules: Sequence[ValidatedRule]) -> str:
    payload: List[Dict[str, Any]] = [r.to_dict() for r in rules]
    return json.dumps({"total_rules": len(payload), "rules": payload}, indent=2)
