"""
Single Refinement Round.

Runs one draft -> critique -> improve -> merge -> score iteration for
both agents and packages the outcome as a RoundRecord. The round never
touches run state; applying its result is the engine's job.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from dualdraft.agents.base import GenerationHooks
from dualdraft.exceptions import GenerationFailure
from dualdraft.models.base import AgentId
from dualdraft.models.request import Request
from dualdraft.models.rounds import RoundRecord
from dualdraft.orchestrator.convergence import ConvergenceScorer

logger = logging.getLogger(__name__)

HOOK_DRAFT = "draft"
HOOK_CRITIQUE = "critique"
HOOK_IMPROVEMENTS = "propose_improvements"


def merge_round_text(agent_a_draft: str, agent_b_draft: str, improvements: list[str]) -> str:
    """Combine a round's drafts and improvements into the text that gets scored."""
    return f"{agent_a_draft}\n\n{agent_b_draft}\n\n" + "\n".join(improvements)


class DraftRound:
    """Executes one iteration of the two-agent refinement.

    Hooks are synchronous; each call runs in a worker thread so the
    event loop can enforce timeouts and, when ``parallel_agents`` is
    set, run both agents' drafts (then both critiques) at the same time.
    Results are always combined agent A first.

    Usage:
        draft_round = DraftRound(hooks)
        record = await draft_round.run(1, request, previous_merged="")
    """

    def __init__(
        self,
        hooks: GenerationHooks,
        scorer: ConvergenceScorer | None = None,
        parallel_agents: bool = False,
    ) -> None:
        """Initialize the round runner.

        Args:
            hooks: Generation capability for drafts, critiques and improvements
            scorer: Convergence scorer (defaults to ConvergenceScorer())
            parallel_agents: Run the two agents' calls concurrently
        """
        self._hooks = hooks
        self._scorer = scorer or ConvergenceScorer()
        self._parallel_agents = parallel_agents
        self._current_hook: str | None = None

    @property
    def current_hook(self) -> str | None:
        """Name of the hook most recently started."""
        return self._current_hook

    async def run(
        self,
        round_number: int,
        request: Request,
        previous_merged: str | None,
    ) -> RoundRecord:
        """Execute the round.

        Args:
            round_number: 1-based round index
            request: Request being refined
            previous_merged: Merged text of the previous round, if any

        Returns:
            Fully populated round record

        Raises:
            GenerationFailure: If any hook raises or returns an invalid value
        """
        hooks = self._hooks
        n = round_number

        draft_a, draft_b = await self._pair(
            lambda: self._text(n, HOOK_DRAFT, hooks.draft, AgentId.A, request, n),
            lambda: self._text(n, HOOK_DRAFT, hooks.draft, AgentId.B, request, n),
        )
        # Each agent critiques the other agent's draft
        critique_a, critique_b = await self._pair(
            lambda: self._text(n, HOOK_CRITIQUE, hooks.critique, AgentId.A.label, draft_b),
            lambda: self._text(n, HOOK_CRITIQUE, hooks.critique, AgentId.B.label, draft_a),
        )

        improvements = await self._lines(round_number, AgentId.A.label)
        improvements += await self._lines(round_number, AgentId.B.label)

        merged = merge_round_text(draft_a, draft_b, improvements)
        score = self._scorer.score(previous_merged, merged)
        logger.debug(f"Round {round_number}: merged {len(merged)} chars, score={score}")

        return RoundRecord(
            round_number=round_number,
            agent_a_draft=draft_a,
            agent_b_draft=draft_b,
            agent_a_critique=critique_a,
            agent_b_critique=critique_b,
            improvements=tuple(improvements),
            convergence_score=score,
            merged_text=merged,
        )

    async def _pair(
        self,
        call_a: Callable[[], Awaitable[str]],
        call_b: Callable[[], Awaitable[str]],
    ) -> tuple[str, str]:
        """Await two agent calls, concurrently if configured, A's result first."""
        if self._parallel_agents:
            result_a, result_b = await asyncio.gather(call_a(), call_b())
            return result_a, result_b

        result_a = await call_a()
        result_b = await call_b()
        return result_a, result_b

    async def _invoke(
        self,
        round_number: int,
        hook_name: str,
        func: Callable[..., Any],
        *args: Any,
    ) -> Any:
        """Run a hook in a worker thread, converting any error to GenerationFailure."""
        self._current_hook = hook_name
        try:
            return await asyncio.to_thread(func, *args)
        except Exception as e:
            raise GenerationFailure(round_number, hook_name, f"{type(e).__name__}: {e}") from e

    async def _text(
        self,
        round_number: int,
        hook_name: str,
        func: Callable[..., Any],
        *args: Any,
    ) -> str:
        result = await self._invoke(round_number, hook_name, func, *args)
        if not isinstance(result, str):
            raise GenerationFailure(
                round_number, hook_name, f"expected text, got {type(result).__name__}"
            )
        return result

    async def _lines(self, round_number: int, agent_label: str) -> list[str]:
        result = await self._invoke(
            round_number, HOOK_IMPROVEMENTS, self._hooks.propose_improvements, agent_label
        )
        if not isinstance(result, (list, tuple)) or not all(
            isinstance(line, str) for line in result
        ):
            raise GenerationFailure(
                round_number,
                HOOK_IMPROVEMENTS,
                f"expected a list of text, got {type(result).__name__}",
            )
        return list(result)
