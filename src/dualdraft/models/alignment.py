"""
Alignment token model.

An ordered sequence of tokens is an edit script turning a source text
into a target text.
"""

from pydantic import BaseModel, ConfigDict, Field

from dualdraft.models.base import AlignmentKind


class AlignmentToken(BaseModel):
    """One word or whitespace run in an alignment.

    Attributes:
        kind: Whether the token is shared, added or removed
        value: The exact token text
    """

    model_config = ConfigDict(frozen=True)

    kind: AlignmentKind
    value: str = Field(..., description="Word or whitespace run")

    @property
    def in_source(self) -> bool:
        """True if the token belongs to the source text."""
        return self.kind != AlignmentKind.ADDED

    @property
    def in_target(self) -> bool:
        """True if the token belongs to the target text."""
        return self.kind != AlignmentKind.REMOVED
