"""Unit tests for dualdraft.models.

Tests cover:
- Request validation, normalization and fallbacks
- Frozen records
- RunState bounds and snapshots
- RunResult derived properties and JSON output
"""

import json

import pytest
from pydantic import ValidationError

from dualdraft.models import (
    AgentId,
    AlignmentKind,
    AlignmentToken,
    EngineStatus,
    Request,
    RoundRecord,
    RunResult,
    RunState,
)


def make_record(round_number: int = 1, score: int = 0) -> RoundRecord:
    return RoundRecord(
        round_number=round_number,
        agent_a_draft="a",
        agent_b_draft="b",
        agent_a_critique="ca",
        agent_b_critique="cb",
        improvements=("x",),
        convergence_score=score,
        merged_text="a\n\nb\n\nx",
    )


class TestRequest:
    """Tests for Request."""

    def test_strips_required_fields(self):
        request = Request(purpose="  Write a memo. ", format=" One page. ")
        assert request.purpose == "Write a memo."
        assert request.format == "One page."

    @pytest.mark.parametrize("field", ["purpose", "format"])
    def test_rejects_blank_required_field(self, field):
        values = {"purpose": "p", "format": "f", field: "   "}
        with pytest.raises(ValidationError):
            Request(**values)

    def test_requires_purpose(self):
        with pytest.raises(ValidationError):
            Request(format="f")

    def test_blank_optional_fields_are_none(self):
        request = Request(purpose="p", format="f", domain="  ", constraints="")
        assert request.domain is None
        assert request.constraints is None

    def test_fallback_texts(self, minimal_request):
        assert minimal_request.domain_text == "Any"
        assert minimal_request.constraints_text == "None"

    def test_is_frozen(self, minimal_request):
        with pytest.raises(ValidationError):
            minimal_request.purpose = "changed"

    def test_build_intent_with_domain_only(self):
        request = Request(purpose="P.", format="F.", domain="Law")
        assert request.build_intent() == "P. F. Domain: Law. Constraints: none."


class TestRoundRecord:
    """Tests for RoundRecord."""

    def test_is_frozen(self):
        record = make_record()
        with pytest.raises(ValidationError):
            record.convergence_score = 50

    @pytest.mark.parametrize("score", [-1, 101])
    def test_score_bounds(self, score):
        with pytest.raises(ValidationError):
            make_record(score=score)

    def test_round_number_starts_at_one(self):
        with pytest.raises(ValidationError):
            make_record(round_number=0)


class TestRunState:
    """Tests for RunState."""

    def test_defaults(self):
        state = RunState()
        assert state.intent == ""
        assert state.iteration_count == 0
        assert state.last_feedback_note == ""
        assert state.convergence_score == 0

    def test_assignment_is_validated(self):
        state = RunState()
        with pytest.raises(ValidationError):
            state.iteration_count = -1
        with pytest.raises(ValidationError):
            state.convergence_score = 101

    def test_snapshot_is_detached(self):
        state = RunState(intent="x")
        snapshot = state.snapshot()
        state.iteration_count = 4

        assert snapshot.iteration_count == 0
        assert snapshot.intent == "x"


class TestRunResult:
    """Tests for RunResult."""

    def test_derived_properties(self):
        result = RunResult(
            history=(make_record(1), make_record(2, 90)),
            final_text="final",
            final_state=RunState(iteration_count=2, convergence_score=90),
            status=EngineStatus.CONVERGED,
        )

        assert result.rounds_run == 2
        assert result.last_round.round_number == 2
        assert result.converged is True

    def test_json_output(self):
        result = RunResult(
            history=(make_record(),),
            final_text="final",
            final_state=RunState(iteration_count=1),
            status=EngineStatus.EXHAUSTED,
        )

        data = json.loads(result.model_dump_json())
        assert data["status"] == "exhausted"
        assert data["rounds_run"] == 1
        assert data["history"][0]["improvements"] == ["x"]


class TestEnumsAndTokens:
    """Tests for the small value types."""

    def test_agent_labels(self):
        assert AgentId.A.label == "Agent A"
        assert AgentId.B.label == "Agent B"

    def test_token_sides(self):
        assert AlignmentToken(kind=AlignmentKind.SAME, value="x").in_source
        assert AlignmentToken(kind=AlignmentKind.SAME, value="x").in_target
        assert not AlignmentToken(kind=AlignmentKind.ADDED, value="x").in_source
        assert not AlignmentToken(kind=AlignmentKind.REMOVED, value="x").in_target
