"""tokenrule — validate and commit token-matching rules for NLP pipelines."""

__version__ = "0.1.0"
