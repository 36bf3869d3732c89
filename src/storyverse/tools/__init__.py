"""Style tools: orchestration over a store and the named-tool surface."""

from storyverse.tools.service import (
    AnalysisResult,
    Example,
    ProfileSummary,
    ProfileView,
    StyleService,
    WritingBrief,
)
from storyverse.tools.registry import StyleTools, ToolResponse

__all__ = [
    "AnalysisResult",
    "Example",
    "ProfileSummary",
    "ProfileView",
    "StyleService",
    "WritingBrief",
    "StyleTools",
    "ToolResponse",
]
