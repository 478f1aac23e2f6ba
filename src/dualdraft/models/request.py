"""
Request model.

A request is the immutable input to a refinement run: what the caller
wants produced, in which format, and under which optional domain and
constraints.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

DOMAIN_FALLBACK = "Any"
CONSTRAINTS_FALLBACK = "None"


class Request(BaseModel):
    """Structured request handed to the orchestration engine.

    Attributes:
        purpose: What the deliverable should achieve
        format: Desired output format
        domain: Optional domain focus
        constraints: Optional constraints (tone, length, ...)
    """

    model_config = ConfigDict(frozen=True)

    purpose: str = Field(..., description="Purpose of the deliverable")
    format: str = Field(..., description="Desired output format")
    domain: str | None = Field(default=None, description="Domain focus")
    constraints: str | None = Field(default=None, description="Constraints to respect")

    @field_validator("purpose", "format")
    @classmethod
    def validate_required(cls, v: str) -> str:
        """Strip surrounding whitespace and reject empty values."""
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty")
        return v

    @field_validator("domain", "constraints")
    @classmethod
    def normalize_optional(cls, v: str | None) -> str | None:
        """Treat blank optional fields as missing."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def domain_text(self) -> str:
        """Domain with the user-visible fallback."""
        return self.domain or DOMAIN_FALLBACK

    @property
    def constraints_text(self) -> str:
        """Constraints with the user-visible fallback."""
        return self.constraints or CONSTRAINTS_FALLBACK

    def build_intent(self) -> str:
        """Condense the request into the single-line intent kept in run state."""
        domain_text = f"Domain: {self.domain}. " if self.domain else "Domain: Any. "
        constraint_text = (
            f"Constraints: {self.constraints}." if self.constraints else "Constraints: none."
        )
        return f"{self.purpose} {self.format} {domain_text}{constraint_text}".strip()


EXAMPLE_REQUEST = Request(
    purpose="Design a market research brief for a new AI-enabled fitness app.",
    format=(
        "Provide a bullet-point brief with sections: audience, differentiation, "
        "risks, and next steps."
    ),
    domain="Consumer tech / fitness",
    constraints="Executive tone, <= 350 words, avoid unverified claims, include data gaps.",
)
