"""
DualDraft - Synthesis Module

Turns the final round into a deliverable:

- synthesize: builds the final document from the last two drafts
- build_change_log: explanatory before/after records
- KNOWN_RISKS, USAGE_TIPS: notes attached to the final output
"""

from dualdraft.synthesis.synthesizer import (
    KNOWN_RISKS,
    OUTPUT_SECTIONS,
    PRIORITY_INSTRUCTIONS,
    QUALITY_CHECKS,
    USAGE_TIPS,
    build_change_log,
    synthesize,
)

__all__ = [
    "synthesize",
    "build_change_log",
    "PRIORITY_INSTRUCTIONS",
    "OUTPUT_SECTIONS",
    "QUALITY_CHECKS",
    "KNOWN_RISKS",
    "USAGE_TIPS",
]
