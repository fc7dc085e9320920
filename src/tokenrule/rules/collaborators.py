"""Interfaces the configurator calls out to once a rule is committed."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tokenrule.rules.models import ValidatedRule


@runtime_checkable
class PersistenceSink(Protocol):
    def persist(self, rule: "ValidatedRule") -> None:
        """Store or forward a committed rule."""


@runtime_checkable
class VisibilityController(Protocol):
    def hide(self) -> None:
        """Signal that the editing session should close."""


class PanelVisibility:
    """Flag-backed controller for callers without a real editor panel."""

    def __init__(self, visible: bool = True) -> None:
        self.visible = visible
        self.hide_calls = 0

    def hide(self) -> None:
        self.visible = False
        self.hide_calls += 1
