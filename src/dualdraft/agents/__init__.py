"""
DualDraft - Agents Module

Generation capabilities injected into the engine:

- GenerationHooks: abstract draft/critique/improvement interface
- TemplateHooks: canned reference implementation
- AGENT_PROFILES, PRINCIPLES: role templates and critique principles
"""

from dualdraft.agents.base import GenerationHooks
from dualdraft.agents.templates import (
    AGENT_PROFILES,
    CRITIQUE_POINTS,
    PRINCIPLES,
    AgentProfile,
    TemplateHooks,
)

__all__ = [
    "GenerationHooks",
    "TemplateHooks",
    "AgentProfile",
    "AGENT_PROFILES",
    "PRINCIPLES",
    "CRITIQUE_POINTS",
]
