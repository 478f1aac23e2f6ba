"""
DualDraft - Core Data Models

This module provides Pydantic models for requests, rounds, run state
and alignment tokens. All models support JSON serialization.
"""

from dualdraft.models.alignment import AlignmentToken
from dualdraft.models.base import AgentId, AlignmentKind, EngineStatus
from dualdraft.models.request import (
    CONSTRAINTS_FALLBACK,
    DOMAIN_FALLBACK,
    EXAMPLE_REQUEST,
    Request,
)
from dualdraft.models.rounds import ChangeLogEntry, RoundRecord, RunResult, RunState

__all__ = [
    # Base enums
    "AgentId",
    "AlignmentKind",
    "EngineStatus",
    # Request
    "Request",
    "EXAMPLE_REQUEST",
    "DOMAIN_FALLBACK",
    "CONSTRAINTS_FALLBACK",
    # Run models
    "RoundRecord",
    "RunState",
    "RunResult",
    "ChangeLogEntry",
    # Alignment
    "AlignmentToken",
]
