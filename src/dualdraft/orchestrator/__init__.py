"""
DualDraft - Orchestrator Module

This module coordinates the refinement loop:

- OrchestrationEngine: outer loop, stop rule and synthesis
- DraftRound: one draft -> critique -> improve -> score iteration
- ConvergenceScorer: vocabulary-overlap score between rounds

Usage:
    from dualdraft.orchestrator import OrchestrationEngine

    engine = OrchestrationEngine()
    result = engine.run_sync(request)
"""

from dualdraft.orchestrator.convergence import ConvergenceCheck, ConvergenceScorer, vocabulary
from dualdraft.orchestrator.engine import EnginePhase, OrchestrationEngine, ProgressCallback
from dualdraft.orchestrator.round import DraftRound, merge_round_text

__all__ = [
    # Engine
    "OrchestrationEngine",
    "EnginePhase",
    "ProgressCallback",
    # Round
    "DraftRound",
    "merge_round_text",
    # Convergence
    "ConvergenceScorer",
    "ConvergenceCheck",
    "vocabulary",
]
