"""
Exceptions raised by the refinement engine.
"""


class DualDraftError(Exception):
    """Base class for all package errors."""


class GenerationFailure(DualDraftError):
    """Raised when a generation hook fails or returns an invalid value.

    The round that raised is abandoned and nothing from it is recorded.

    Attributes:
        round_number: Round during which the hook failed
        hook: Name of the failing hook (draft, critique, propose_improvements)
        reason: Short description of the failure
    """

    def __init__(self, round_number: int, hook: str, reason: str) -> None:
        self.round_number = round_number
        self.hook = hook
        self.reason = reason
        super().__init__(f"Round {round_number}: {hook} hook failed: {reason}")
