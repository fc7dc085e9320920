"""RuleConfigurator — one editing session for a single pipeline node's rule."""

from __future__ import annotations

import logging
from typing import Any, FrozenSet, Mapping, Optional, Union

from tokenrule.rules import draft as transitions
from tokenrule.rules.collaborators import PersistenceSink, VisibilityController
from tokenrule.rules.models import (
    CaseSensitivity,
    Draft,
    ExpressionType,
    Modifier,
)
from tokenrule.rules.validation import CommitResult, validate_and_commit

logger = logging.getLogger(__name__)


class ConfiguratorError(Exception):
    """Raised when a session is set up incorrectly."""


class RuleConfigurator:
    """Owns a Draft, applies edits one at a time, and commits it.

    Every edit replaces ``self.draft`` with the next consistent Draft; there
    is no shared state beyond the two collaborators passed in.
    """

    def __init__(
        self,
        node_id: str,
        sink: PersistenceSink,
        visibility: VisibilityController,
        initial: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if not node_id or not node_id.strip():
            raise ConfiguratorError("node_id is required")
        self.node_id = node_id
        self.sink = sink
        self.visibility = visibility
        self.draft: Draft = transitions.new_draft(initial)

    # ---- edits ----

    def set_pattern(self, text: str) -> Draft:
        self.draft = transitions.set_pattern(self.draft, text)
        return self.draft

    def set_expression_type(self, expression_type: Union[ExpressionType, str]) -> Draft:
        self.draft = transitions.set_expression_type(self.draft, expression_type)
        return self.draft

    def set_case_sensitivity(self, mode: Union[CaseSensitivity, str]) -> Draft:
        self.draft = transitions.set_case_sensitivity(self.draft, mode)
        return self.draft

    def set_modifier(self, name: Union[Modifier, str], value: bool) -> bool:
        """Apply a modifier edit. Returns False if the modifier was locked."""
        if transitions.is_locked(self.draft, name):
            logger.debug("Node %s: %s is locked", self.node_id, Modifier(name).flag_name)
            return False
        self.draft = transitions.set_modifier(self.draft, name, value)
        return True

    def set_token_range_enabled(self, enabled: bool) -> Draft:
        self.draft = transitions.set_token_range_enabled(self.draft, enabled)
        return self.draft

    def set_token_range_bound(self, which: str, value: Any) -> Draft:
        self.draft = transitions.set_token_range_bound(self.draft, which, value)
        return self.draft

    # ---- queries ----

    @property
    def locked_modifiers(self) -> FrozenSet[Modifier]:
        return transitions.locked_modifiers(self.draft)

    @property
    def error_message(self) -> Optional[str]:
        return self.draft.error_message

    # ---- commit ----

    def commit(self) -> CommitResult:
        """Validate the Draft and hand it to the sink. Bound as a plain callback."""
        return validate_and_commit(self.draft, self.node_id, self.sink, self.visibility)
