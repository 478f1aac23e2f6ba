"""
Orchestration Engine.

Drives the outer refinement loop:
- Derives the run intent from the request
- Runs DraftRound up to ``max_rounds`` times
- Stops as soon as a round's convergence score reaches the threshold
- Synthesizes the final text from the last round's drafts

Every call to ``run`` owns a fresh RunState, so one engine can serve
several runs, including concurrent ones.
"""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum

from dualdraft.agents.base import GenerationHooks
from dualdraft.agents.templates import TemplateHooks
from dualdraft.config.models import EngineConfig
from dualdraft.exceptions import GenerationFailure
from dualdraft.models.base import EngineStatus
from dualdraft.models.request import Request
from dualdraft.models.rounds import RoundRecord, RunResult, RunState
from dualdraft.orchestrator.convergence import ConvergenceCheck, ConvergenceScorer
from dualdraft.orchestrator.round import DraftRound
from dualdraft.synthesis.synthesizer import build_change_log, synthesize

logger = logging.getLogger(__name__)


class EnginePhase(str, Enum):
    """Phase of a run as seen by progress callbacks."""

    IDLE = "idle"
    RUNNING = "running"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


# Type alias for progress callback
ProgressCallback = Callable[[EnginePhase, RunState], None]

_TERMINAL_STATUS = {
    EnginePhase.CONVERGED: EngineStatus.CONVERGED,
    EnginePhase.EXHAUSTED: EngineStatus.EXHAUSTED,
}


class OrchestrationEngine:
    """Runs the two-agent refinement loop until convergence or the round cap.

    Usage:
        engine = OrchestrationEngine(TemplateHooks(), EngineConfig(max_rounds=3))
        result = await engine.run(request)
        print(result.final_text)
    """

    def __init__(
        self,
        hooks: GenerationHooks | None = None,
        config: EngineConfig | None = None,
        scorer: ConvergenceScorer | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            hooks: Generation hooks (defaults to the canned TemplateHooks)
            config: Engine configuration (defaults to EngineConfig())
            scorer: Convergence scorer (defaults to ConvergenceScorer())
        """
        self._hooks = hooks or TemplateHooks()
        self._config = config or EngineConfig()
        self._scorer = scorer or ConvergenceScorer()
        self._progress_callbacks: list[ProgressCallback] = []

    @property
    def config(self) -> EngineConfig:
        """Get engine configuration."""
        return self._config

    @property
    def hooks(self) -> GenerationHooks:
        """Get the generation hooks."""
        return self._hooks

    def on_progress(self, callback: ProgressCallback) -> None:
        """Register a progress callback.

        Args:
            callback: Called with the phase and a state snapshot after
                every round and on terminal transitions
        """
        self._progress_callbacks.append(callback)

    def _notify_progress(self, phase: EnginePhase, state: RunState) -> None:
        """Notify all progress callbacks."""
        for callback in self._progress_callbacks:
            try:
                callback(phase, state.snapshot())
            except Exception as e:
                # Callback errors must not affect the run
                logger.warning(f"Progress callback failed: {e}")

    async def run(self, request: Request) -> RunResult:
        """Execute a full refinement run.

        Args:
            request: Request to refine

        Returns:
            History, final text and final state of the run

        Raises:
            GenerationFailure: If a hook fails or a round times out
        """
        config = self._config
        state = RunState(intent=request.build_intent())
        history: list[RoundRecord] = []
        previous_merged = ""
        phase = EnginePhase.RUNNING

        draft_round = DraftRound(
            self._hooks,
            scorer=self._scorer,
            parallel_agents=config.parallel_agents,
        )

        logger.info(
            f"Starting run: max_rounds={config.max_rounds}, "
            f"threshold={config.convergence_threshold}"
        )
        self._notify_progress(phase, state)

        for round_number in range(1, config.max_rounds + 1):
            try:
                record = await self._run_round(draft_round, round_number, request, previous_merged)
            except GenerationFailure as e:
                logger.error(f"Run failed: {e}")
                self._notify_progress(EnginePhase.FAILED, state)
                raise

            history.append(record)
            state.iteration_count += 1
            state.convergence_score = record.convergence_score
            state.last_feedback_note = f"Round {round_number}: critiques and improvements captured."
            previous_merged = record.merged_text

            check = ConvergenceCheck(
                score=record.convergence_score,
                threshold=config.convergence_threshold,
                round_number=round_number,
                max_rounds=config.max_rounds,
            )
            logger.info(f"Round {round_number} complete: convergence={record.convergence_score}%")

            if check.converged:
                phase = EnginePhase.CONVERGED
                logger.info(f"Converged after {round_number} rounds")
                break
            if check.exhausted:
                phase = EnginePhase.EXHAUSTED
                logger.info(f"Round limit reached after {round_number} rounds without converging")
                break

            self._notify_progress(phase, state)

        last = history[-1]
        final_text = synthesize(last.agent_a_draft, last.agent_b_draft, request)
        self._notify_progress(phase, state)

        return RunResult(
            history=tuple(history),
            final_text=final_text,
            final_state=state.snapshot(),
            status=_TERMINAL_STATUS[phase],
            change_log=build_change_log(),
        )

    def run_sync(self, request: Request) -> RunResult:
        """Run in a new event loop. For callers without one."""
        return asyncio.run(self.run(request))

    async def _run_round(
        self,
        draft_round: DraftRound,
        round_number: int,
        request: Request,
        previous_merged: str,
    ) -> RoundRecord:
        """Run one round, applying the per-round timeout if configured."""
        timeout = self._config.round_timeout_seconds
        if timeout is None:
            return await draft_round.run(round_number, request, previous_merged)

        try:
            return await asyncio.wait_for(
                draft_round.run(round_number, request, previous_merged),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            hook = draft_round.current_hook or "draft"
            raise GenerationFailure(
                round_number, hook, f"timed out after {timeout:g}s"
            ) from e
