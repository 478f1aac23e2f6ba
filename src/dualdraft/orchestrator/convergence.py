"""
Convergence Scoring.

Scores how much of the previous round's vocabulary the current round
retained. This is a coarse stopping heuristic, not a measure of semantic
equivalence: it ignores word order and duplicates.
"""

import math
from dataclasses import dataclass

MIN_SCORE = 0
MAX_SCORE = 100


def vocabulary(text: str) -> set[str]:
    """Distinct whitespace-separated tokens of a text."""
    return set(text.split())


class ConvergenceScorer:
    """Computes the 0-100 overlap score between consecutive merged texts.

    Usage:
        scorer = ConvergenceScorer()
        score = scorer.score(previous_merged, current_merged)
    """

    def score(self, previous_merged: str | None, current_merged: str) -> int:
        """Score the current merged text against the previous one.

        Args:
            previous_merged: Merged text of the preceding round, if any
            current_merged: Merged text of the current round

        Returns:
            Integer score between 0 and 100; 0 when there is no previous text
        """
        if not previous_merged:
            return MIN_SCORE

        previous_words = vocabulary(previous_merged)
        current_words = vocabulary(current_merged)

        overlap = len(previous_words & current_words) / max(len(previous_words), 1)
        # Half-up rounding, not Python's round-half-even
        rounded = math.floor(overlap * 100 + 0.5)
        return max(MIN_SCORE, min(MAX_SCORE, rounded))


@dataclass
class ConvergenceCheck:
    """Result of comparing a round's score with the threshold.

    Attributes:
        score: Round convergence score
        threshold: Score needed to stop
        round_number: Round that was checked
        max_rounds: Round limit of the run
    """

    score: int
    threshold: int
    round_number: int
    max_rounds: int

    @property
    def converged(self) -> bool:
        """True if the score reached the threshold."""
        return self.score >= self.threshold

    @property
    def exhausted(self) -> bool:
        """True if the round limit is reached without converging."""
        return not self.converged and self.round_number >= self.max_rounds

    @property
    def should_continue(self) -> bool:
        """True if another round should run."""
        return not self.converged and not self.exhausted
