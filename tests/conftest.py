"""
DualDraft Test Configuration and Fixtures

This module provides pytest fixtures for testing the refinement engine.
All fixtures are deterministic and never call a real model backend.

Fixture Categories:
- Requests: the reference example and a minimal request
- Hooks: canned templates, drifting-vocabulary hooks, failing hooks
- Config isolation: keeps DUALDRAFT_* variables and .env out of tests
"""

from collections.abc import Sequence

import pytest

import dualdraft.config.environment as env_module
from dualdraft.agents import GenerationHooks, TemplateHooks
from dualdraft.config import ENV_VAR_OVERRIDES, CONFIG_ENV_VAR, reset_config
from dualdraft.models import EXAMPLE_REQUEST, AgentId, Request

# =============================================================================
# Hook Doubles
# =============================================================================


class DriftingHooks(GenerationHooks):
    """Canned hooks whose vocabulary is entirely new every round.

    Consecutive rounds share almost no words, so a run never converges
    and always uses its full round budget.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def draft(self, agent: AgentId, request: Request, round_number: int) -> str:
        self.calls.append(("draft", AgentId(agent).value))
        words = " ".join(f"r{round_number}{AgentId(agent).value.lower()}w{i}" for i in range(8))
        return f"{request.purpose}\n{words}"

    def critique(self, agent_label: str, counterpart_draft: str) -> str:
        self.calls.append(("critique", agent_label))
        return f"{agent_label} critique of {len(counterpart_draft)} chars"

    def propose_improvements(self, agent_label: str) -> Sequence[str]:
        self.calls.append(("propose_improvements", agent_label))
        return [f"{agent_label}: tighten wording."]


class FailingHooks(TemplateHooks):
    """Template hooks that raise in a chosen hook from a chosen round on."""

    def __init__(self, hook: str, fail_from_round: int = 1) -> None:
        self.hook = hook
        self.fail_from_round = fail_from_round
        self.round_number = 0

    def draft(self, agent: AgentId, request: Request, round_number: int) -> str:
        self.round_number = round_number
        if self.hook == "draft" and round_number >= self.fail_from_round:
            raise RuntimeError("backend unavailable")
        return super().draft(agent, request, round_number)

    def critique(self, agent_label: str, counterpart_draft: str) -> str:
        if self.hook == "critique" and self.round_number >= self.fail_from_round:
            raise RuntimeError("critique backend unavailable")
        return super().critique(agent_label, counterpart_draft)

    def propose_improvements(self, agent_label: str) -> list[str]:
        if self.hook == "propose_improvements" and self.round_number >= self.fail_from_round:
            raise RuntimeError("improvement backend unavailable")
        return super().propose_improvements(agent_label)


# =============================================================================
# Request Fixtures
# =============================================================================


@pytest.fixture
def example_request() -> Request:
    """The fitness-app market research request."""
    return EXAMPLE_REQUEST


@pytest.fixture
def minimal_request() -> Request:
    """Request with no domain and no constraints."""
    return Request(purpose="Summarize the release notes.", format="Three bullet points.")


# =============================================================================
# Hook Fixtures
# =============================================================================


@pytest.fixture
def template_hooks() -> TemplateHooks:
    """Reference canned hooks."""
    return TemplateHooks()


@pytest.fixture
def drifting_hooks() -> DriftingHooks:
    """Hooks that never converge."""
    return DriftingHooks()


@pytest.fixture
def failing_hooks_factory():
    """Build hooks that fail in a given hook from a given round."""
    return FailingHooks


# =============================================================================
# Configuration Isolation
# =============================================================================


@pytest.fixture
def isolated_config(monkeypatch, tmp_path):
    """Run in an empty directory with no DUALDRAFT_* variables and no .env loading."""
    reset_config()
    for var in ENV_VAR_OVERRIDES:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(env_module, "_dotenv_loaded", True)
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    reset_config()
