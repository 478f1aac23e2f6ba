"""
Run and round models.

These models capture the state of a refinement run as it progresses
and the records it leaves behind.
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field

from dualdraft.models.base import EngineStatus


class RoundRecord(BaseModel):
    """Immutable record of one draft, critique, merge and score iteration.

    Attributes:
        round_number: 1-based round index
        agent_a_draft: Draft produced by agent A
        agent_b_draft: Draft produced by agent B
        agent_a_critique: Agent A's critique of agent B's draft
        agent_b_critique: Agent B's critique of agent A's draft
        improvements: Agent A's proposed improvements followed by agent B's
        convergence_score: Overlap with the previous round's merged text (0-100)
        merged_text: Combined text the score was computed from
    """

    model_config = ConfigDict(frozen=True)

    round_number: int = Field(..., ge=1)
    agent_a_draft: str
    agent_b_draft: str
    agent_a_critique: str
    agent_b_critique: str
    improvements: tuple[str, ...] = Field(default_factory=tuple)
    convergence_score: int = Field(..., ge=0, le=100)
    merged_text: str = ""


class RunState(BaseModel):
    """Mutable tracker owned by a single run.

    Attributes:
        intent: Single-line intent derived from the request
        iteration_count: Number of completed rounds
        last_feedback_note: Note left by the most recent round
        convergence_score: Score of the most recent round
    """

    model_config = ConfigDict(validate_assignment=True)

    intent: str = ""
    iteration_count: int = Field(default=0, ge=0)
    last_feedback_note: str = ""
    convergence_score: int = Field(default=0, ge=0, le=100)

    def snapshot(self) -> "RunState":
        """Return a detached copy of the current state."""
        return self.model_copy()


class ChangeLogEntry(BaseModel):
    """Explanatory before/after record attached to the final output."""

    model_config = ConfigDict(frozen=True)

    before: str
    after: str
    reason: str


class RunResult(BaseModel):
    """Everything a completed run hands back to the caller.

    Attributes:
        history: Round records in round order
        final_text: Synthesized deliverable
        final_state: Snapshot of the run state after the last round
        status: Whether the run converged or exhausted its rounds
        change_log: Explanatory records attached to the final text
    """

    model_config = ConfigDict(frozen=True)

    history: tuple[RoundRecord, ...]
    final_text: str
    final_state: RunState
    status: EngineStatus
    change_log: tuple[ChangeLogEntry, ...] = Field(default_factory=tuple)

    @computed_field
    @property
    def rounds_run(self) -> int:
        """Number of rounds recorded."""
        return len(self.history)

    @property
    def last_round(self) -> RoundRecord:
        """The record the final text was synthesized from."""
        return self.history[-1]

    @property
    def converged(self) -> bool:
        """True if the run stopped on the convergence threshold."""
        return self.status == EngineStatus.CONVERGED
