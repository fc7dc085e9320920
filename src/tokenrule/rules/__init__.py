"""Rule configuration — draft model, transitions, validation, commit."""

from tokenrule.rules.collaborators import PanelVisibility, PersistenceSink, VisibilityController
from tokenrule.rules.configurator import ConfiguratorError, RuleConfigurator
from tokenrule.rules.models import (
    CaseSensitivity,
    Draft,
    ExpressionType,
    Modifier,
    TokenRange,
    ValidatedRule,
)
from tokenrule.rules.validation import (
    CommitResult,
    EmptyPatternError,
    InvalidPatternError,
    ValidationError,
    validate_and_commit,
)

__all__ = [
    "CaseSensitivity",
    "CommitResult",
    "ConfiguratorError",
    "Draft",
    "EmptyPatternError",
    "ExpressionType",
    "InvalidPatternError",
    "Modifier",
    "PanelVisibility",
    "PersistenceSink",
    "RuleConfigurator",
    "TokenRange",
    "ValidatedRule",
    "ValidationError",
    "VisibilityController",
    "validate_and_commit",
]
