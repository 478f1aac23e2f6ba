"""Unit tests for dualdraft.alignment.aligner.

Tests cover:
- Tokenization that keeps whitespace runs
- LCS alignment output, including the removed-first tie-break
- Exact reconstruction of both sides
- Empty inputs
- HTML and rich renderers
- alignment_ratio
"""

import pytest

from dualdraft.alignment import TextAligner, align, alignment_ratio, tokenize
from dualdraft.models import AlignmentKind, AlignmentToken

SAME = AlignmentKind.SAME
ADDED = AlignmentKind.ADDED
REMOVED = AlignmentKind.REMOVED


def kinds_and_values(tokens: list[AlignmentToken]) -> list[tuple[AlignmentKind, str]]:
    return [(token.kind, token.value) for token in tokens]


class TestTokenize:
    """Tests for tokenize()."""

    def test_keeps_whitespace_runs(self):
        assert tokenize("  a\n\nb ") == ["  ", "a", "\n\n", "b", " "]

    def test_empty_text(self):
        assert tokenize("") == []

    def test_concatenation_is_lossless(self):
        text = "Goal:\tship it\n\n- now  "
        assert "".join(tokenize(text)) == text


class TestTextAligner:
    """Tests for TextAligner.align()."""

    def test_single_word_substitution(self):
        """The worked example: removed comes before added."""
        tokens = TextAligner().align("the quick fox", "the slow fox")

        assert kinds_and_values(tokens) == [
            (SAME, "the"),
            (SAME, " "),
            (REMOVED, "quick"),
            (ADDED, "slow"),
            (SAME, " "),
            (SAME, "fox"),
        ]

    def test_tie_prefers_removed(self):
        tokens = align("a", "b")
        assert kinds_and_values(tokens) == [(REMOVED, "a"), (ADDED, "b")]

    def test_identity_yields_only_same(self):
        text = "Draft (A, round 1):\n- Keep only high-value steps."
        tokens = align(text, text)

        assert all(token.kind == SAME for token in tokens)
        assert [token.value for token in tokens] == tokenize(text)

    def test_insertion_at_end(self):
        tokens = align("x", "x <y>")
        assert kinds_and_values(tokens) == [(SAME, "x"), (ADDED, " "), (ADDED, "<y>")]

    def test_deletion_at_start(self):
        tokens = align("old new", "new")
        assert kinds_and_values(tokens) == [(REMOVED, "old"), (REMOVED, " "), (SAME, "new")]

    def test_both_empty(self):
        assert align("", "") == []

    def test_empty_source_is_all_added(self):
        tokens = align("", "a b")
        assert kinds_and_values(tokens) == [(ADDED, "a"), (ADDED, " "), (ADDED, "b")]

    def test_empty_target_is_all_removed(self):
        tokens = align("a b", "")
        assert kinds_and_values(tokens) == [(REMOVED, "a"), (REMOVED, " "), (REMOVED, "b")]

    def test_deterministic(self):
        a = "one two three four"
        b = "two four five one"
        assert align(a, b) == align(a, b)

    @pytest.mark.parametrize(
        ("a", "b"),
        [
            ("the quick fox", "the slow fox"),
            ("  leading and trailing  ", "leading\tand trailing"),
            ("a b c d e", "e d c b a"),
            ("Goal: X\n\nDraft (A, round 1):", "Goal: X\n\nDraft (B, round 2):"),
            ("", "only target"),
            ("only source", ""),
        ],
    )
    def test_reconstructs_both_sides(self, a, b):
        tokens = align(a, b)
        assert TextAligner.reconstruct_source(tokens) == a
        assert TextAligner.reconstruct_target(tokens) == b

    def test_removed_precede_added_within_each_change(self):
        tokens = align("keep a b keep", "keep c d keep")

        runs: list[list[AlignmentKind]] = [[]]
        for token in tokens:
            if token.kind == SAME:
                runs.append([])
            else:
                runs[-1].append(token.kind)

        for run in runs:
            assert run == sorted(run, key=lambda kind: kind == ADDED)


class TestRenderers:
    """Tests for the HTML and rich renderers."""

    def test_to_html_marks_changes(self):
        html = TextAligner.to_html(align("the quick fox", "the slow fox"))
        assert html == (
            'the <span class="remove">quick</span><span class="add">slow</span> fox'
        )

    def test_to_html_escapes_values(self):
        html = TextAligner.to_html(align("x", "x <y>"))
        assert html == 'x<span class="add"> </span><span class="add">&lt;y&gt;</span>'

    def test_to_rich_text_keeps_all_values(self):
        tokens = align("the quick fox", "the slow fox")
        text = TextAligner.to_rich_text(tokens)

        assert text.plain == "the quickslow fox"
        styles = {str(span.style) for span in text.spans}
        assert "bold green" in styles
        assert "red strike" in styles


class TestAlignmentRatio:
    """Tests for alignment_ratio()."""

    def test_identical_texts(self):
        assert alignment_ratio(align("a b c", "a b c")) == 1.0

    def test_two_empty_texts(self):
        assert alignment_ratio([]) == 1.0

    def test_disjoint_texts(self):
        assert alignment_ratio(align("a", "b")) == 0.0

    def test_partial_overlap_ignores_whitespace(self):
        ratio = alignment_ratio(align("the quick fox", "the slow fox"))
        assert ratio == pytest.approx(4 / 6)
