"""Shared test fixtures — sinks, visibility controllers, sessions, drafts."""

from __future__ import annotations

import pytest

from tokenrule.rules.collaborators import PanelVisibility
from tokenrule.rules.configurator import RuleConfigurator
from tokenrule.rules.models import Draft, ExpressionType
from tokenrule.store.memory import MemorySink


class ExplodingSink:
    """Sink that fails on persist, for atomicity tests."""

    def __init__(self) -> None:
        self.calls = 0

    def persist(self, rule) -> None:
        self.calls += 1
        raise RuntimeError("downstream unavailable")


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def visibility() -> PanelVisibility:
    return PanelVisibility()


@pytest.fixture
def exploding_sink() -> ExplodingSink:
    return ExplodingSink()


@pytest.fixture
def session(sink: MemorySink, visibility: PanelVisibility) -> RuleConfigurator:
    return RuleConfigurator("node-1", sink, visibility)


@pytest.fixture
def regular_draft() -> Draft:
    return Draft(pattern="[A-Z]+", expression_type=ExpressionType.REGULAR)


@pytest.fixture
def literal_draft() -> Draft:
    return Draft(
        pattern="(unclosed",
        expression_type=ExpressionType.LITERAL,
        dot_all=False,
    )


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """A clean working directory with no .tokenrule.toml and no env overrides."""
    for var in ("TOKENRULE_FORMAT", "TOKENRULE_STORE", "TOKENRULE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
