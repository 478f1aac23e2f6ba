"""
DualDraft: Two-Agent Iterative Refinement Engine.

Two peer agents draft a response to a request, critique each other's
draft and propose improvements. Rounds repeat until the merged output
stops changing (convergence) or a round limit is reached, then the last
round's drafts are synthesized into one deliverable.

Key Features:
- Pluggable generation hooks (canned templates by default)
- Vocabulary-overlap convergence gate
- Word-level LCS alignment for comparing drafts

Example:
    from dualdraft import OrchestrationEngine, Request

    engine = OrchestrationEngine()
    result = engine.run_sync(Request(purpose="...", format="..."))
    print(result.final_text)
"""

from dualdraft.agents import GenerationHooks, TemplateHooks
from dualdraft.alignment import TextAligner, align
from dualdraft.config import EngineConfig
from dualdraft.exceptions import DualDraftError, GenerationFailure
from dualdraft.models import Request, RoundRecord, RunResult, RunState
from dualdraft.orchestrator import OrchestrationEngine
from dualdraft.synthesis import synthesize
from dualdraft.version import __version__

__all__ = [
    "__version__",
    "OrchestrationEngine",
    "EngineConfig",
    "GenerationHooks",
    "TemplateHooks",
    "Request",
    "RoundRecord",
    "RunResult",
    "RunState",
    "TextAligner",
    "align",
    "synthesize",
    "DualDraftError",
    "GenerationFailure",
]
