"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Literal

OutputFormat = Literal["terminal", "json"]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class DraftConfig:
    """Initial values for a new Draft."""

    expression_type: str = "regular"  # regular | literal
    case_sensitivity: str = "match"  # match | ignore | match-unicode
    token_range_enabled: bool = False
    token_range_from: int = 0
    token_range_to: int = 0
    canonical_equivalence: bool = False
    dot_all: bool = True
    multiline: bool = False
    unix_lines: bool = False

    def as_initial(self) -> Dict[str, Any]:
        """Mapping accepted by ``new_draft`` / ``RuleConfigurator(initial=...)``."""
        values = asdict(self)
        values["token_range"] = {
            "enabled": values.pop("token_range_enabled"),
            "start": values.pop("token_range_from"),
            "end": values.pop("token_range_to"),
        }
        return values


@dataclass
class StoreConfig:
    path: str = ".tokenrule/rules.yaml"


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class TokenRuleConfig:
    version: str = "1.0"
    draft: DraftConfig = field(default_factory=DraftConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
