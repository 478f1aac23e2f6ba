"""
Generation hook interface.

The engine never produces content itself. Drafts, critiques and
improvement proposals come from an injected GenerationHooks
implementation, which may wrap a model backend, canned templates or a
test double.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from dualdraft.models.base import AgentId
from dualdraft.models.request import Request


class GenerationHooks(ABC):
    """Capability interface the engine calls once per agent per step.

    Implementations must be synchronous. Returning anything but text
    (or a sequence of text for improvements) fails the round.
    """

    @abstractmethod
    def draft(self, agent: AgentId, request: Request, round_number: int) -> str:
        """Produce an agent's draft for the given round.

        Args:
            agent: Agent producing the draft
            request: Request being refined
            round_number: 1-based round index

        Returns:
            Draft text
        """

    @abstractmethod
    def critique(self, agent_label: str, counterpart_draft: str) -> str:
        """Critique the other agent's draft.

        Args:
            agent_label: Label of the critiquing agent ("Agent A")
            counterpart_draft: Draft produced by the other agent

        Returns:
            Critique text
        """

    @abstractmethod
    def propose_improvements(self, agent_label: str) -> Sequence[str]:
        """Propose concrete improvements.

        Args:
            agent_label: Label of the proposing agent

        Returns:
            Ordered improvement lines
        """
