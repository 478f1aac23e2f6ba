"""
Base enumerations used throughout the data models.

These enums provide type-safe values for categorical fields
and keep the serialized form stable.
"""

from enum import Enum


class AgentId(str, Enum):
    """Identifier for the two peer agents."""

    A = "A"
    B = "B"

    @property
    def label(self) -> str:
        """Human-readable label used in critiques and improvements."""
        return f"Agent {self.value}"


class AlignmentKind(str, Enum):
    """Kind of an alignment token relative to the source text."""

    SAME = "same"  # Present in both texts
    ADDED = "added"  # Only in the target text
    REMOVED = "removed"  # Only in the source text


class EngineStatus(str, Enum):
    """Terminal outcome of a completed run."""

    CONVERGED = "converged"  # Score reached the threshold
    EXHAUSTED = "exhausted"  # Round limit reached first
