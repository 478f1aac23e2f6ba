"""
Word-Level Text Alignment.

Computes a longest-common-subsequence alignment between two texts at
word granularity. Whitespace runs are kept as tokens so either side can
be rebuilt exactly from the alignment.
"""

import html
import re

from rich.text import Text

from dualdraft.models.alignment import AlignmentToken
from dualdraft.models.base import AlignmentKind

_TOKEN_PATTERN = re.compile(r"(\s+)")


def tokenize(text: str) -> list[str]:
    """Split text into words and whitespace runs, preserving both.

    Args:
        text: Text to split

    Returns:
        Tokens in order; concatenating them yields ``text``
    """
    return [token for token in _TOKEN_PATTERN.split(text) if token]


class TextAligner:
    """Aligns two texts with a dynamic-programming LCS.

    When the upward and leftward neighbours of the table tie during
    backtracking, the source token is emitted as removed first. Keep
    this tie-break: renderers and stored outputs depend on it.

    Usage:
        aligner = TextAligner()
        tokens = aligner.align("the quick fox", "the slow fox")
        print(aligner.to_html(tokens))
    """

    def align(self, a: str, b: str) -> list[AlignmentToken]:
        """Align source text ``a`` with target text ``b``.

        Args:
            a: Source text
            b: Target text

        Returns:
            Ordered tokens transforming ``a`` into ``b``
        """
        a_tokens = tokenize(a)
        b_tokens = tokenize(b)
        table = self._lcs_table(a_tokens, b_tokens)

        output: list[AlignmentToken] = []
        i = len(a_tokens)
        j = len(b_tokens)

        while i > 0 and j > 0:
            if a_tokens[i - 1] == b_tokens[j - 1]:
                output.append(AlignmentToken(kind=AlignmentKind.SAME, value=a_tokens[i - 1]))
                i -= 1
                j -= 1
            elif table[i - 1][j] >= table[i][j - 1]:
                output.append(AlignmentToken(kind=AlignmentKind.REMOVED, value=a_tokens[i - 1]))
                i -= 1
            else:
                output.append(AlignmentToken(kind=AlignmentKind.ADDED, value=b_tokens[j - 1]))
                j -= 1

        while i > 0:
            output.append(AlignmentToken(kind=AlignmentKind.REMOVED, value=a_tokens[i - 1]))
            i -= 1

        while j > 0:
            output.append(AlignmentToken(kind=AlignmentKind.ADDED, value=b_tokens[j - 1]))
            j -= 1

        output.reverse()
        return self._order_hunks(output)

    @staticmethod
    def _order_hunks(tokens: list[AlignmentToken]) -> list[AlignmentToken]:
        """Put removed tokens ahead of added tokens inside each changed run.

        Shared tokens keep their positions, so both sides still rebuild exactly.
        """
        ordered: list[AlignmentToken] = []
        removed: list[AlignmentToken] = []
        added: list[AlignmentToken] = []

        for token in tokens:
            if token.kind == AlignmentKind.REMOVED:
                removed.append(token)
            elif token.kind == AlignmentKind.ADDED:
                added.append(token)
            else:
                ordered.extend(removed)
                ordered.extend(added)
                removed.clear()
                added.clear()
                ordered.append(token)

        ordered.extend(removed)
        ordered.extend(added)
        return ordered

    @staticmethod
    def _lcs_table(a_tokens: list[str], b_tokens: list[str]) -> list[list[int]]:
        """Build the LCS length table for two token sequences."""
        table = [[0] * (len(b_tokens) + 1) for _ in range(len(a_tokens) + 1)]

        for i in range(1, len(a_tokens) + 1):
            for j in range(1, len(b_tokens) + 1):
                if a_tokens[i - 1] == b_tokens[j - 1]:
                    table[i][j] = table[i - 1][j - 1] + 1
                else:
                    table[i][j] = max(table[i - 1][j], table[i][j - 1])

        return table

    @staticmethod
    def reconstruct_source(tokens: list[AlignmentToken]) -> str:
        """Rebuild the source text from same and removed tokens."""
        return "".join(token.value for token in tokens if token.in_source)

    @staticmethod
    def reconstruct_target(tokens: list[AlignmentToken]) -> str:
        """Rebuild the target text from same and added tokens."""
        return "".join(token.value for token in tokens if token.in_target)

    @staticmethod
    def to_html(tokens: list[AlignmentToken]) -> str:
        """Render tokens as HTML with ``add`` and ``remove`` spans.

        Token values are escaped; shared tokens are left unstyled.
        """
        parts = []
        for token in tokens:
            value = html.escape(token.value)
            if token.kind == AlignmentKind.ADDED:
                parts.append(f'<span class="add">{value}</span>')
            elif token.kind == AlignmentKind.REMOVED:
                parts.append(f'<span class="remove">{value}</span>')
            else:
                parts.append(value)
        return "".join(parts)

    @staticmethod
    def to_rich_text(tokens: list[AlignmentToken]) -> Text:
        """Render tokens as a styled rich Text for terminal display."""
        text = Text()
        for token in tokens:
            if token.kind == AlignmentKind.ADDED:
                text.append(token.value, style="bold green")
            elif token.kind == AlignmentKind.REMOVED:
                text.append(token.value, style="red strike")
            else:
                text.append(token.value)
        return text


def alignment_ratio(tokens: list[AlignmentToken]) -> float:
    """Share of words the two sides have in common.

    Computed as ``2 * same / (source_words + target_words)`` over
    non-whitespace tokens.

    Args:
        tokens: Alignment produced by ``TextAligner.align``

    Returns:
        Ratio between 0.0 and 1.0; 1.0 when both sides have no words
    """
    same = source = target = 0
    for token in tokens:
        if token.value.isspace():
            continue
        if token.kind == AlignmentKind.SAME:
            same += 1
        if token.in_source:
            source += 1
        if token.in_target:
            target += 1

    if source + target == 0:
        return 1.0
    return 2 * same / (source + target)


_default_aligner = TextAligner()


def align(a: str, b: str) -> list[AlignmentToken]:
    """Align two texts with the shared default aligner."""
    return _default_aligner.align(a, b)
