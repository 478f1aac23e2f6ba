"""
DualDraft - Alignment Module

Word-level LCS alignment used to compare two drafts:

- TextAligner: builds the alignment and renders it (HTML, terminal)
- align: module-level shortcut using a shared aligner
- alignment_ratio: share of words common to both sides
"""

from dualdraft.alignment.aligner import TextAligner, align, alignment_ratio, tokenize

__all__ = [
    "TextAligner",
    "align",
    "alignment_ratio",
    "tokenize",
]
