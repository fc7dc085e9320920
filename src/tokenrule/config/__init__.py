"""Configuration loading, schema, and defaults."""

from tokenrule.config.loader import ConfigError, load_config
from tokenrule.config.schema import DraftConfig, TokenRuleConfig

__all__ = [
    "ConfigError",
    "DraftConfig",
    "TokenRuleConfig",
    "load_config",
]
