"""Persistence sinks for committed rules."""

from tokenrule.store.memory import MemorySink
from tokenrule.store.yaml_store import RuleStore, StoreError

__all__ = ["MemorySink", "RuleStore", "StoreError"]
