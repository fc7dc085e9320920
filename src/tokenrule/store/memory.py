"""In-process persistence sink."""

from __future__ import annotations

from typing import List, Optional

from tokenrule.rules.models import ValidatedRule


class MemorySink:
    """Keeps committed rules in a list, newest last."""

    def __init__(self) -> None:
        self.rules: List[ValidatedRule] = []

    def persist(self, rule: ValidatedRule) -> None:
        self.rules.append(rule)

    @property
    def latest(self) -> Optional[ValidatedRule]:
        return self.rules[-1] if self.rules else None
