"""YAML rule store — one entry per pipeline node, replaced on each commit."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from tokenrule.rules.models import ValidatedRule

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the store file is unreadable or malformed."""


class RuleStore:
    """Persistence sink backed by a YAML list of wire-shaped rules."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    # ---- sink ----

    def persist(self, rule: ValidatedRule) -> None:
        rules = self._load_by_node()
        rules[rule.node_id] = rule
        self._write(list(rules.values()))
        logger.debug("Stored rule for node %s in %s", rule.node_id, self.path)

    # ---- queries ----

    def load(self) -> List[ValidatedRule]:
        return list(self._load_by_node().values())

    def get(self, node_id: str) -> Optional[ValidatedRule]:
        return self._load_by_node().get(node_id)

    # ---- file I/O ----

    def _load_by_node(self) -> Dict[str, ValidatedRule]:
        if not self.path.is_file():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise StoreError(f"Failed to read {self.path}: {exc}") from exc

        if data is None:
            return {}
        if not isinstance(data, list):
            data = [data]

        rules: Dict[str, ValidatedRule] = {}
        for entry in data:
            try:
                rule = ValidatedRule.from_dict(entry)
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                raise StoreError(f"Malformed rule entry in {self.path}: {exc}") from exc
            rules[rule.node_id] = rule
        return rules

    def _write(self, rules: List[ValidatedRule]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [r.to_dict() for r in rules]
        self.path.write_text(
            yaml.safe_dump(payload, sort_keys=False, allow_unicode=True),
            encoding="utf-8",
        )
