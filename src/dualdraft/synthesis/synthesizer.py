"""
Final Synthesis.

Folds the last round's two drafts and the original request into one
deliverable document. This is a formatting step only: it never looks
at or changes convergence state.
"""

from dualdraft.models.request import Request
from dualdraft.models.rounds import ChangeLogEntry

PRIORITY_INSTRUCTIONS = (
    "MUST: Follow the specified output format exactly.",
    "MUST: Surface assumptions and data gaps explicitly.",
    "SHOULD: Use domain-accurate language and concise structure.",
    "SHOULD: Include a short verification checklist.",
    "OPTIONAL: Offer 1-2 questions if clarifications are required.",
)

OUTPUT_SECTIONS = (
    "Summary of intent",
    "Structured response with labeled bullets",
    "Risks, unknowns, and mitigation prompts",
    "Verification checklist",
)

QUALITY_CHECKS = (
    "Ensure clarity, instruction hierarchy, and role anchoring are explicit.",
    "Prevent failure modes (missing constraints, vague outputs, unsupported claims).",
    "Keep within length/tone constraints.",
)

KNOWN_RISKS = (
    "Domain-specific data may require clarification.",
    "Output length could exceed constraints if inputs are verbose.",
    "Assumption surfacing depends on user-provided context.",
)

USAGE_TIPS = (
    "Best with models that support instruction hierarchy (GPT-4 class, Gemini Pro, Claude).",
    "Use temperature 0.2-0.4 for precision and consistency.",
    "Provide supplemental context (data, constraints) for top-tier results.",
)


def synthesize(agent_a_draft: str, agent_b_draft: str, request: Request) -> str:
    """Build the final deliverable from the last round's drafts.

    Args:
        agent_a_draft: Agent A's draft from the final round
        agent_b_draft: Agent B's draft from the final round
        request: Original request

    Returns:
        The synthesized document
    """
    instructions = "\n".join(
        f"{index}) {line}" for index, line in enumerate(PRIORITY_INSTRUCTIONS, start=1)
    )
    sections = "\n".join(
        f"- Section {index}: {name}" for index, name in enumerate(OUTPUT_SECTIONS, start=1)
    )
    checks = "\n".join(f"- {line}" for line in QUALITY_CHECKS)

    return (
        "You are an expert prompt engineer tasked with creating a single, elite prompt.\n"
        "\n"
        f"User intent: {request.purpose}\n"
        f"Desired output: {request.format}\n"
        f"Domain: {request.domain_text}\n"
        f"Constraints: {request.constraints_text}\n"
        "\n"
        "Instructions (priority order):\n"
        f"{instructions}\n"
        "\n"
        "Output format:\n"
        f"{sections}\n"
        "\n"
        "Quality checks:\n"
        f"{checks}\n"
        "\n"
        "Context for reference (Agent A):\n"
        f"{agent_a_draft}\n"
        "\n"
        "Context for reference (Agent B):\n"
        f"{agent_b_draft}"
    )


def build_change_log() -> tuple[ChangeLogEntry, ...]:
    """Explain what the synthesized document changes compared to a plain request."""
    return (
        ChangeLogEntry(
            before="Implicit instructions",
            after="Priority-tagged MUST/SHOULD/OPTIONAL hierarchy",
            reason="Improves instruction hierarchy and controllability.",
        ),
        ChangeLogEntry(
            before="Generic output description",
            after="Explicit output sections with labeled bullets",
            reason="Boosts clarity and reduces ambiguity.",
        ),
        ChangeLogEntry(
            before="No validation layer",
            after="Verification checklist and risk surfacing",
            reason="Prevents failure modes and omissions.",
        ),
    )
