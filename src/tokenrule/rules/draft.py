"""Draft transitions — every edit returns a new, internally consistent Draft.

Two locks are enforced after each transition:

* literal expressions force all four modifiers off and lock them;
* case ``match`` forces ``dot_all`` on and locks it.

The literal lock wins when both apply.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, FrozenSet, Mapping, Optional, Union

from tokenrule.rules.models import (
    CaseSensitivity,
    Draft,
    ExpressionType,
    Modifier,
    TokenRange,
    clamp_bound,
)

logger = logging.getLogger(__name__)

ALL_MODIFIERS: FrozenSet[Modifier] = frozenset(Modifier)


def locked_modifiers(draft: Draft) -> FrozenSet[Modifier]:
    """Modifiers the user may not change in the current state."""
    if draft.is_literal:
        return ALL_MODIFIERS
    if draft.case_sensitivity == CaseSensitivity.MATCH:
        return frozenset({Modifier.DOT_ALL})
    return frozenset()


def is_locked(draft: Draft, modifier: Union[Modifier, str]) -> bool:
    return Modifier(modifier) in locked_modifiers(draft)


def enforce_invariants(draft: Draft) -> Draft:
    """Return *draft* with forced modifier values re-applied."""
    if draft.is_literal:
        return dataclasses.replace(
            draft,
            canonical_equivalence=False,
            dot_all=False,
            multiline=False,
            unix_lines=False,
        )
    if draft.case_sensitivity == CaseSensitivity.MATCH and not draft.dot_all:
        return dataclasses.replace(draft, dot_all=True)
    return draft


def new_draft(initial: Optional[Mapping[str, Any]] = None) -> Draft:
    """Build a Draft from defaults, overridden by any known keys in *initial*."""
    if not initial:
        return Draft()

    known = {f.name for f in dataclasses.fields(Draft)} - {"error_message", "token_range"}
    values = {k: v for k, v in initial.items() if k in known}
    if "expression_type" in values:
        values["expression_type"] = ExpressionType(values["expression_type"])
    if "case_sensitivity" in values:
        values["case_sensitivity"] = CaseSensitivity(values["case_sensitivity"])

    token_range = initial.get("token_range")
    if isinstance(token_range, TokenRange):
        values["token_range"] = token_range
    elif isinstance(token_range, Mapping):
        values["token_range"] = TokenRange(
            enabled=bool(token_range.get("enabled", False)),
            start=token_range.get("start", 0),
            end=token_range.get("end", 0),
        )

    return enforce_invariants(Draft(**values))


# ---- transitions ----


def set_pattern(draft: Draft, text: str) -> Draft:
    return dataclasses.replace(draft, pattern=text, error_message=None)


def set_expression_type(draft: Draft, expression_type: Union[ExpressionType, str]) -> Draft:
    updated = dataclasses.replace(
        draft,
        expression_type=ExpressionType(expression_type),
        error_message=None,
    )
    return enforce_invariants(updated)


def set_case_sensitivity(draft: Draft, mode: Union[CaseSensitivity, str]) -> Draft:
    updated = dataclasses.replace(draft, case_sensitivity=CaseSensitivity(mode))
    return enforce_invariants(updated)


def set_modifier(draft: Draft, name: Union[Modifier, str], value: bool) -> Draft:
    """Set a modifier flag. Locked modifiers leave the Draft unchanged."""
    modifier = Modifier(name)
    if modifier in locked_modifiers(draft):
        logger.debug("Ignoring %s=%s: modifier is locked", modifier.flag_name, value)
        return draft
    return dataclasses.replace(draft, **{modifier.value: bool(value)})


def set_token_range_enabled(draft: Draft, enabled: bool) -> Draft:
    token_range = dataclasses.replace(draft.token_range, enabled=bool(enabled))
    return dataclasses.replace(draft, token_range=token_range)


def set_token_range_bound(draft: Draft, which: str, value: Any) -> Draft:
    """Update the ``from`` or ``to`` bound; out-of-range input is clamped."""
    bound = clamp_bound(value)
    if bound != value:
        logger.debug("Token bound %r clamped to %d", value, bound)
    if which in ("from", "start"):
        token_range = dataclasses.replace(draft.token_range, start=bound)
    elif which in ("to", "end"):
        token_range = dataclasses.replace(draft.token_range, end=bound)
    else:
        raise ValueError(f"Unknown token bound: {which!r} (expected 'from' or 'to')")
    return dataclasses.replace(draft, token_range=token_range)
