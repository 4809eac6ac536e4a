"""Shared schema package for the LinkedIn accelerator."""

from .enums import (
    AgentKind,
    BrandTone,
    CapabilitySource,
    ContentStatus,
    EngagementPotential,
    OutreachPhase,
    WritingTone,
    enum_values,
)
from .models.catalog import CapabilityScore, Task, Tier, Tool
from .models.content import (
    CONTENT_TRANSITIONS,
    ContentDraft,
    ContentTransitionError,
    check_transition,
    is_terminal,
)
from .models.generation import (
    GeneratedDraft,
    NextStepBatch,
    PostingSchedule,
    TopicSuggestion,
    TopicSuggestionBatch,
    VentureInsights,
)
from .models.prospect import OutreachTask, Prospect
from .models.venture import BrandGuide, Venture

__all__ = [
    "AgentKind",
    "BrandTone",
    "CapabilitySource",
    "ContentStatus",
    "EngagementPotential",
    "OutreachPhase",
    "WritingTone",
    "enum_values",
    "CapabilityScore",
    "Task",
    "Tier",
    "Tool",
    "CONTENT_TRANSITIONS",
    "ContentDraft",
    "ContentTransitionError",
    "check_transition",
    "is_terminal",
    "GeneratedDraft",
    "NextStepBatch",
    "PostingSchedule",
    "TopicSuggestion",
    "TopicSuggestionBatch",
    "VentureInsights",
    "OutreachTask",
    "Prospect",
    "BrandGuide",
    "Venture",
]
