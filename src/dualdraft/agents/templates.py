"""
Canned generation templates.

TemplateHooks reproduces the reference drafts, critiques and
improvement lists word for word. Every method is a pure function of its
arguments, so runs are repeatable.
"""

from dataclasses import dataclass

from dualdraft.agents.base import GenerationHooks
from dualdraft.models.base import AgentId
from dualdraft.models.request import Request

PRINCIPLES = (
    "Clarity",
    "Instruction hierarchy",
    "Role anchoring",
    "Output controllability",
    "Failure-mode prevention",
)

CRITIQUE_POINTS = (
    "Clarify ambiguous scope to prevent drift.",
    "Ensure instruction hierarchy is explicit.",
    "Add output controllability via numbered sections.",
    "Tighten role anchoring for domain expertise.",
    "Add a failure-mode checklist to reduce omissions.",
)

AGENT_GUIDANCE = {
    AgentId.A: (
        "Use direct instructions with minimal ambiguity.",
        "Keep only high-value steps.",
        "Include a short checklist for feasibility.",
        "End with a validation question for the user.",
    ),
    AgentId.B: (
        "Build a stepwise instruction hierarchy.",
        "Add guardrails against hallucinations.",
        "Specify output sections and ordering.",
        "Include a reflection step to catch gaps.",
    ),
}


@dataclass(frozen=True)
class AgentProfile:
    """Role template describing how an agent approaches a request."""

    agent_id: AgentId
    title: str
    body: str


AGENT_PROFILES = (
    AgentProfile(
        agent_id=AgentId.A,
        title="Agent A Template (Practical optimizer)",
        body=(
            "Role: Practical prompt optimizer.\n"
            "Objective: Deliver concise, feasible prompt improvements.\n"
            "Process:\n"
            "1) Draft prompt from user_intent.\n"
            "2) Flag real-world feasibility issues.\n"
            "3) Compress instructions without losing control.\n"
            "4) Provide critique of Agent B with concrete edits + why."
        ),
    ),
    AgentProfile(
        agent_id=AgentId.B,
        title="Agent B Template (Structured reasoning architect)",
        body=(
            "Role: Structured reasoning prompt architect.\n"
            "Objective: Build robust instruction hierarchy and failure-mode prevention.\n"
            "Process:\n"
            "1) Draft prompt with explicit steps and clarifying questions.\n"
            "2) Identify missing constraints or ambiguous scope.\n"
            "3) Offer critique of Agent A emphasizing logic gaps.\n"
            "4) Provide improvements + reasoning principles."
        ),
    ),
)


class TemplateHooks(GenerationHooks):
    """Default hooks returning the canned reference text."""

    def draft(self, agent: AgentId, request: Request, round_number: int) -> str:
        base = (
            f"Goal: {request.purpose}\n"
            f"Output format: {request.format}\n"
            f"Domain focus: {request.domain_text}\n"
            f"Constraints: {request.constraints_text}\n"
        )
        guidance = "\n".join(f"- {line}" for line in AGENT_GUIDANCE[AgentId(agent)])
        return f"{base}\nDraft ({AgentId(agent).value}, round {round_number}):\n{guidance}"

    def critique(self, agent_label: str, counterpart_draft: str) -> str:
        # The canned critique does not depend on the counterpart draft
        points = "\n- ".join(CRITIQUE_POINTS[:3])
        return (
            f"{agent_label} critique of counterpart:\n"
            f"- {points}\n"
            "Why it helps:\n"
            f"- {', '.join(PRINCIPLES[:3])} improve execution fidelity."
        )

    def propose_improvements(self, agent_label: str) -> list[str]:
        return [
            f"{agent_label}: Add explicit instruction hierarchy with priority tags "
            "(must/should/optional).",
            f"{agent_label}: Replace vague verbs with action-oriented directives.",
            f"{agent_label}: Introduce a final verification checklist for completeness.",
        ]
